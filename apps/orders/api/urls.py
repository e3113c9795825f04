from django.urls import path

from .views import CurrentOrderView

urlpatterns = [
    path('order/', CurrentOrderView.as_view(), name='current-order'),
]
