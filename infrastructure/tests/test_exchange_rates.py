"""
Exchange Rate Provider Tests
============================
"""

from decimal import Decimal
from unittest.mock import MagicMock, patch

import requests
from django.test import TestCase, override_settings

from infrastructure.exchange_rates import (
    ExchangeRateException,
    ExchangeRateFactory,
    HttpExchangeRateProvider,
    StaticExchangeRateProvider,
)


class HttpExchangeRateProviderTest(TestCase):
    def setUp(self):
        self.provider = HttpExchangeRateProvider(api_url="https://rates.example.com/latest/")

    @patch("infrastructure.exchange_rates.http_provider.requests.get")
    def test_get_rates(self, mock_get):
        response = MagicMock()
        response.json.return_value = {"base": "EUR", "rates": {"EUR": 1, "usd": 1.17}}
        mock_get.return_value = response

        rates = {rate.currency: rate.rate for rate in self.provider.get_rates("eur")}

        mock_get.assert_called_once_with("https://rates.example.com/latest/EUR", timeout=30.0)
        self.assertEqual(rates, {"EUR": Decimal("1"), "USD": Decimal("1.17")})

    @patch("infrastructure.exchange_rates.http_provider.requests.get")
    def test_invalid_payload(self, mock_get):
        mock_get.return_value = MagicMock(json=MagicMock(return_value={"error": "unknown base"}))

        with self.assertRaises(ExchangeRateException):
            self.provider.get_rates("XXX")

    @patch("infrastructure.exchange_rates.http_provider.requests.get")
    def test_http_error(self, mock_get):
        response = MagicMock()
        response.raise_for_status.side_effect = requests.HTTPError("500 Server Error")
        mock_get.return_value = response

        with self.assertRaises(ExchangeRateException):
            self.provider.get_rates("USD")


class StaticExchangeRateProviderTest(TestCase):
    def test_rates_are_relative_to_base(self):
        provider = StaticExchangeRateProvider({"USD": "1", "EUR": "0.5"})

        rates = {rate.currency: rate.rate for rate in provider.get_rates("EUR")}

        self.assertEqual(rates["EUR"], Decimal("1"))
        self.assertEqual(rates["USD"], Decimal("2"))

    def test_unknown_base(self):
        with self.assertRaises(ExchangeRateException):
            StaticExchangeRateProvider().get_rates("XYZ")


class ExchangeRateFactoryTest(TestCase):
    @override_settings(EXCHANGE_RATE_API_URL="https://rates.example.com/v4/latest/")
    def test_http_provider_uses_configured_url(self):
        provider = ExchangeRateFactory.create("http")

        self.assertIsInstance(provider, HttpExchangeRateProvider)
        self.assertEqual(provider.api_url, "https://rates.example.com/v4/latest/")

    @override_settings(INFRASTRUCTURE={"EXCHANGE_RATE_PROVIDER": "static"})
    def test_backend_from_settings(self):
        self.assertIsInstance(ExchangeRateFactory.create(), StaticExchangeRateProvider)

    def test_invalid_backend(self):
        with self.assertRaises(ValueError):
            ExchangeRateFactory.create("abacus")
