import logging

from django.apps import AppConfig

logger = logging.getLogger(__name__)


class MarketplaceConfig(AppConfig):
    default_auto_field = "django.db.models.BigAutoField"
    name = "marketplace"
    verbose_name = "Marketplace"

    def ready(self):
        """Initialize OpenTelemetry tracing once Django is configured."""
        from django.conf import settings

        from infrastructure.observability import setup_tracing

        setup_tracing(
            service_name="storefront-middleware",
            enable=getattr(settings, "OTEL_TRACING_ENABLED", True),
            console_export=getattr(settings, "OTEL_CONSOLE_EXPORT", False),
        )
