class PaymentError(Exception):
    """Base class for payment system exceptions."""

    pass


class PaymentValidationError(PaymentError):
    """Raised when the requested payments cannot be applied to an order."""

    pass


class PaymentProviderError(PaymentError):
    """Raised when the card processor refuses to release an authorization."""

    def __init__(self, message: str, payment_id: str = None):
        super().__init__(message)
        self.payment_id = payment_id
