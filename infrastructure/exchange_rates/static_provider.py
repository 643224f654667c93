"""
Static Exchange Rate Provider
=============================

Fixed exchange rate table for tests, CI and local development.
"""

import logging
from decimal import Decimal
from typing import Dict, List, Optional

from .interface import ConversionRate, ExchangeRateException, ExchangeRateProviderInterface

logger = logging.getLogger(__name__)

# Units of the keyed currency per one US dollar
USD_RATES: Dict[str, str] = {
    "USD": "1",
    "EUR": "0.85",
    "GBP": "0.73",
    "JPY": "110.0",
    "CAD": "1.25",
    "AUD": "1.35",
    "CHF": "0.92",
    "CNY": "6.45",
    "SEK": "8.5",
    "NOK": "8.8",
    "DKK": "6.3",
    "PLN": "3.9",
    "MXN": "20.1",
    "BRL": "5.2",
    "INR": "74.0",
}


class StaticExchangeRateProvider(ExchangeRateProviderInterface):
    """
    Serves rates derived from a single USD table.

    Rates for any other base are obtained by dividing through the base's
    USD rate, so the table stays internally consistent.
    """

    def __init__(self, usd_rates: Optional[Dict[str, str]] = None):
        self.usd_rates = {code: Decimal(rate) for code, rate in (usd_rates or USD_RATES).items()}

    def get_rates(self, base_currency: str) -> List[ConversionRate]:
        base = base_currency.upper()
        if base not in self.usd_rates:
            raise ExchangeRateException(f"No static rates for base currency {base}")

        logger.info(f"[TEST] Using static exchange rate data for {base}")
        base_rate = self.usd_rates[base]
        return [ConversionRate(currency=code, rate=rate / base_rate) for code, rate in self.usd_rates.items()]
