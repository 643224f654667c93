from .me_product_serializers import (
    ContactSupplierSerializer,
    MeProductListQuerySerializer,
    MeProductListSerializer,
    SuperMeProductSerializer,
)

__all__ = [
    "ContactSupplierSerializer",
    "MeProductListQuerySerializer",
    "MeProductListSerializer",
    "SuperMeProductSerializer",
]
