from .buyer_service import BuyerService

__all__ = ["BuyerService"]
