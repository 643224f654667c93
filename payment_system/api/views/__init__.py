from .metrics_views import prometheus_metrics
from .payment_views import OrderPaymentViewSet

__all__ = ["OrderPaymentViewSet", "prometheus_metrics"]
