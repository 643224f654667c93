from .credit_card_service import CreditCardService
from .payment_service import PaymentService

__all__ = ["CreditCardService", "PaymentService"]
