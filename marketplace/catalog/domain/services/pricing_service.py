"""
PricingService - Buyer Pricing

Applies the buyer's markup and currency to product prices. All calculations
use Decimal. Prices are rounded to cents once, right after the markup is
applied; converted prices are never rounded so the two steps do not compound
rounding error.
"""

import copy
from decimal import ROUND_HALF_UP, Decimal
from typing import Iterable, List, Optional

from infrastructure.commerce import Product, Spec
from infrastructure.exchange_rates import ConversionRate
from marketplace.catalog.domain.exceptions import ExchangeRateNotDefinedError
from marketplace.services.base import BaseService

CENTS = Decimal("0.01")


class PricingService(BaseService):
    """
    Stateless price transformations used by the buyer catalog.

    Every method returns new objects and leaves its arguments untouched.
    """

    def __init__(self, base_currency: str = "USD"):
        super().__init__()
        self.base_currency = base_currency

    def apply_buyer_product_pricing(
        self, product: Product, multiplier: Decimal, rates: Iterable[ConversionRate]
    ) -> Product:
        """
        Price every break of the product's schedule for the buyer.

        A schedule whose ID equals the product ID is the product's default
        schedule: it is marked up, then converted from the product currency.
        Any other schedule is seller-custom pricing in the base currency and
        is only converted.

        Example:
            >>> priced = pricing.apply_buyer_product_pricing(product, Decimal("1.10"), rates)
        """
        priced = copy.deepcopy(product)
        schedule = priced.price_schedule
        if schedule is None:
            return priced

        rates = list(rates)
        if schedule.id == priced.id:
            currency = priced.currency or self.base_currency
            for price_break in schedule.price_breaks:
                marked_up = (price_break.price * multiplier).quantize(CENTS, rounding=ROUND_HALF_UP)
                price_break.price = self.convert_price(marked_up, currency, rates)
        else:
            for price_break in schedule.price_breaks:
                price_break.price = self.convert_price(price_break.price, self.base_currency, rates)

        return priced

    def apply_spec_markups(
        self, specs: Iterable[Spec], product_currency: Optional[str], rates: Iterable[ConversionRate]
    ) -> List[Spec]:
        """Convert option surcharges into the buyer's currency. Surcharges are never marked up."""
        rates = list(rates)
        currency = product_currency or self.base_currency
        priced = copy.deepcopy(list(specs))
        for spec in priced:
            for option in spec.options:
                if option.price_markup is not None:
                    option.price_markup = self.convert_price(option.price_markup, currency, rates)
        return priced

    def convert_price(self, amount: Decimal, from_currency: str, rates: Iterable[ConversionRate]) -> Decimal:
        """
        Convert ``amount`` from ``from_currency`` into the rates' base currency.

        Raises:
            ExchangeRateNotDefinedError: If there is no (non-zero) rate for ``from_currency``
        """
        code = (from_currency or "").upper()
        rate = next((entry.rate for entry in rates if entry.currency.upper() == code), None)
        if not rate:
            raise ExchangeRateNotDefinedError(f"No exchange rate defined for {code or 'unknown currency'}")
        return amount / rate
