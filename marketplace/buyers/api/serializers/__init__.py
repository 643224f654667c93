from .buyer_serializers import (
    BuyerAggregateSerializer,
    BuyerMarkupSerializer,
    BuyerSerializer,
    ImpersonationConfigSerializer,
)

__all__ = [
    "BuyerAggregateSerializer",
    "BuyerMarkupSerializer",
    "BuyerSerializer",
    "ImpersonationConfigSerializer",
]
