"""
HTTP Exchange Rate Provider
===========================

Concrete implementation of ExchangeRateProviderInterface backed by a public
exchange rate API.
"""

import logging
from decimal import Decimal
from typing import List, Optional

import requests
from tenacity import retry, retry_if_exception_type, stop_after_attempt, wait_exponential

from .interface import ConversionRate, ExchangeRateException, ExchangeRateProviderInterface

logger = logging.getLogger(__name__)


class HttpExchangeRateProvider(ExchangeRateProviderInterface):
    """Fetches the latest rates for a base currency on every call."""

    # Free exchange rate API
    EXCHANGE_API_URL = "https://api.exchangerate-api.com/v4/latest/"

    def __init__(self, api_url: Optional[str] = None, timeout: float = 30.0):
        self.api_url = api_url or self.EXCHANGE_API_URL
        self.timeout = timeout

    @retry(
        stop=stop_after_attempt(3),
        wait=wait_exponential(multiplier=1, min=2, max=10),
        retry=retry_if_exception_type((requests.ConnectionError, requests.Timeout)),
        reraise=True,
    )
    def _fetch(self, base_currency: str) -> dict:
        url = f"{self.api_url}{base_currency.upper()}"
        logger.debug(f"[FETCH] Fetching rates from: {url}")

        response = requests.get(url, timeout=self.timeout)
        response.raise_for_status()
        return response.json()

    def get_rates(self, base_currency: str) -> List[ConversionRate]:
        try:
            data = self._fetch(base_currency)
        except requests.RequestException as e:
            logger.error(f"[ERROR] Network error fetching exchange rates: {e}")
            raise ExchangeRateException(f"Failed to fetch exchange rates for {base_currency}: {e}") from e

        if "rates" not in data:
            logger.error("[ERROR] Invalid response format from exchange rate API")
            raise ExchangeRateException("Invalid response format from exchange rate API")

        rates = [
            ConversionRate(currency=currency.upper(), rate=Decimal(str(rate)))
            for currency, rate in data["rates"].items()
        ]
        logger.info(f"[DATA] Fetched {len(rates)} exchange rates for {base_currency}")
        return rates
