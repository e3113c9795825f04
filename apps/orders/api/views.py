from rest_framework.response import Response
from rest_framework.views import APIView

from apps.orders.session import current_order
from .serializers import OrderSerializer


class CurrentOrderView(APIView):
    """
    API endpoint for the session's current order.
    """

    def get(self, request):
        order = current_order(request)
        return Response(OrderSerializer(order).data)
