from .me_product import BuyerRequest, ContactSupplierBody, MeProductListArgs, SuperMeProduct

__all__ = [
    "BuyerRequest",
    "ContactSupplierBody",
    "MeProductListArgs",
    "SuperMeProduct",
]
