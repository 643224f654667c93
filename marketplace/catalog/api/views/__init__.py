from .me_product_views import MeProductViewSet

__all__ = ["MeProductViewSet"]
