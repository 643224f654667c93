from .currency_service import CurrencyService
from .me_product_service import MeProductService
from .pricing_service import PricingService

__all__ = [
    "CurrencyService",
    "MeProductService",
    "PricingService",
]
