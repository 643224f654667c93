"""
Exchange Rate Abstraction Layer
===============================

Provides conversion rates used to price catalogs in the buyer's currency.
"""

from .factory import ExchangeRateFactory
from .http_provider import HttpExchangeRateProvider
from .interface import ConversionRate, ExchangeRateException, ExchangeRateProviderInterface
from .static_provider import StaticExchangeRateProvider

__all__ = [
    "ConversionRate",
    "ExchangeRateException",
    "ExchangeRateFactory",
    "ExchangeRateProviderInterface",
    "HttpExchangeRateProvider",
    "StaticExchangeRateProvider",
]
