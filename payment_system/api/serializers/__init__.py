from .request_serializers import RequestedPaymentSerializer, SavePaymentsRequestSerializer
from .response_serializers import PaymentSerializer, PaymentTransactionSerializer

__all__ = [
    "PaymentSerializer",
    "PaymentTransactionSerializer",
    "RequestedPaymentSerializer",
    "SavePaymentsRequestSerializer",
]
