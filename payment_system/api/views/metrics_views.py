from django.http import HttpResponse
from prometheus_client import CONTENT_TYPE_LATEST, generate_latest
from rest_framework.decorators import api_view, authentication_classes, permission_classes
from rest_framework.permissions import AllowAny

from payment_system.infra.observability import metrics  # noqa: F401  registers the collectors


@api_view(["GET"])
@authentication_classes([])
@permission_classes([AllowAny])
def prometheus_metrics(request):
    """Prometheus scrape endpoint (reconciliation mutations, card voids)."""
    return HttpResponse(generate_latest(), content_type=CONTENT_TYPE_LATEST)
