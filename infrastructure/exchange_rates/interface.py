"""
Exchange Rate Provider Interface
================================

Abstract base class defining the contract for currency conversion rates.
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass
from decimal import Decimal
from typing import List


@dataclass(frozen=True)
class ConversionRate:
    """
    Conversion rate relative to a base currency.

    Attributes:
        currency: ISO currency code (upper case)
        rate: Units of ``currency`` per one unit of the base currency
    """

    currency: str
    rate: Decimal


class ExchangeRateProviderInterface(ABC):
    """
    Abstract interface for exchange rate lookups.

    Concrete implementations:
        - HttpExchangeRateProvider: public exchange rate API
        - StaticExchangeRateProvider: fixed table for tests and development
    """

    @abstractmethod
    def get_rates(self, base_currency: str) -> List[ConversionRate]:
        """
        Get conversion rates for every known currency against a base currency.

        Args:
            base_currency: ISO code the rates are expressed against

        Returns:
            List of ConversionRate entries (the base currency itself has rate 1)

        Raises:
            ExchangeRateException: If rates cannot be retrieved
        """
        pass


class ExchangeRateException(Exception):
    """Base exception for exchange rate operations."""

    pass
