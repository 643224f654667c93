from django.urls import path

from .api.views import OrderPaymentViewSet, prometheus_metrics

app_name = "payment_system"

urlpatterns = [
    path(
        "orders/<str:order_id>/payments/",
        OrderPaymentViewSet.as_view({"put": "save_payments"}),
        name="order-payments",
    ),
    path("metrics/", prometheus_metrics, name="payment-metrics"),
]
