from .models import Order

ORDER_SESSION_KEY = "current_order_id"


def current_order(request, create=True):
    """
    The order being built in this session. A new one is created (and
    remembered in the session) when there is none and ``create`` is set.
    """
    order_id = request.session.get(ORDER_SESSION_KEY)
    order = None
    if order_id:
        order = Order.objects.filter(pk=order_id, status=Order.BUILDING).first()
    if order is None and create:
        order = Order.objects.create()
        request.session[ORDER_SESSION_KEY] = order.pk
        request.session.modified = True
    return order
