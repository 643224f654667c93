from django.urls import include, path
from rest_framework.routers import DefaultRouter

from .buyers.api.views import BuyerViewSet
from .catalog.api.views import MeProductViewSet

router = DefaultRouter()
router.register(r"buyers", BuyerViewSet, basename="buyer")
router.register(r"me/products", MeProductViewSet, basename="me-product")

app_name = "marketplace"

urlpatterns = [
    path("", include(router.urls)),
]
