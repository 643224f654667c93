class PricingError(Exception):
    """Base class for errors that make buyer pricing impossible."""

    pass


class CurrencyNotDefinedError(PricingError):
    """Raised when none of the user's buyer locations declares a currency."""

    pass


class ExchangeRateNotDefinedError(PricingError):
    """Raised when the rate table has no usable entry for a price's currency."""

    pass


class MarkupUnavailableError(PricingError):
    """Raised when the caller's buyer markup cannot be loaded."""

    def __init__(self, message: str, error_code: str):
        super().__init__(message)
        self.error_code = error_code
