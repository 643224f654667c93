"""
Exchange Rate Provider Factory
==============================

Factory pattern for creating exchange rate providers based on configuration.
"""

import logging
from typing import Literal

from django.conf import settings

from .http_provider import HttpExchangeRateProvider
from .interface import ExchangeRateProviderInterface
from .static_provider import StaticExchangeRateProvider

logger = logging.getLogger(__name__)

ExchangeRateBackend = Literal["http", "static"]


class ExchangeRateFactory:
    """
    Factory for creating exchange rate providers.

    Usage:
        # In settings.py
        INFRASTRUCTURE = {"EXCHANGE_RATE_PROVIDER": "http"}  # or 'static' for testing

        # In your code
        provider = ExchangeRateFactory.create()
    """

    @staticmethod
    def create(backend: ExchangeRateBackend | None = None) -> ExchangeRateProviderInterface:
        infrastructure = getattr(settings, "INFRASTRUCTURE", {})
        backend_type = backend or infrastructure.get("EXCHANGE_RATE_PROVIDER", "http")

        logger.info(f"Creating exchange rate provider: {backend_type}")

        if backend_type == "http":
            return HttpExchangeRateProvider(api_url=getattr(settings, "EXCHANGE_RATE_API_URL", None))
        elif backend_type == "static":
            return StaticExchangeRateProvider()
        else:
            raise ValueError(f"Invalid exchange rate provider: {backend_type}. Must be 'http' or 'static'")
