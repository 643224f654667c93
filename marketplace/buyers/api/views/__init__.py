from .buyer_views import BuyerViewSet

__all__ = ["BuyerViewSet"]
