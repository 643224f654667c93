from decimal import Decimal

import pytest

from infrastructure.exchange_rates import ConversionRate
from marketplace.catalog.domain.exceptions import ExchangeRateNotDefinedError
from marketplace.catalog.domain.services import PricingService
from marketplace.tests.factories import PriceScheduleFactory, ProductFactory, SpecFactory, SpecOptionFactory


@pytest.mark.unit
class TestPricingServiceUnit:
    def setup_method(self):
        self.service = PricingService(base_currency="USD")
        self.rates = [ConversionRate("USD", Decimal("2.0")), ConversionRate("EUR", Decimal("1"))]

    def test_default_schedule_is_marked_up_then_converted(self):
        product = ProductFactory(id="p-1")
        product.price_schedule.price_breaks[0].price = Decimal("100.00")

        priced = self.service.apply_buyer_product_pricing(product, Decimal("1.10"), self.rates)

        # round(100 * 1.10, 2) / 2.0
        assert priced.price_schedule.price_breaks[0].price == Decimal("55.00")

    def test_custom_schedule_is_only_converted(self):
        product = ProductFactory(id="p-1", price_schedule=PriceScheduleFactory(id="seller-special"))
        product.price_schedule.price_breaks[0].price = Decimal("100.00")

        priced = self.service.apply_buyer_product_pricing(product, Decimal("1.10"), self.rates)

        assert priced.price_schedule.price_breaks[0].price == Decimal("50.00")

    def test_markup_rounds_half_up_to_cents_before_conversion(self):
        product = ProductFactory(id="p-1", xp={"Currency": "EUR"})
        product.price_schedule.price_breaks[0].price = Decimal("10.05")

        priced = self.service.apply_buyer_product_pricing(product, Decimal("1.05"), self.rates)

        # 10.05 * 1.05 = 10.5525 -> 10.55, EUR rate 1
        assert priced.price_schedule.price_breaks[0].price == Decimal("10.55")

    def test_product_currency_defaults_to_base(self):
        product = ProductFactory(id="p-1", xp={})
        product.price_schedule.price_breaks[0].price = Decimal("10.00")

        priced = self.service.apply_buyer_product_pricing(product, Decimal("1"), self.rates)

        assert priced.price_schedule.price_breaks[0].price == Decimal("5")

    def test_input_product_is_not_modified(self):
        product = ProductFactory(id="p-1")
        original = product.price_schedule.price_breaks[0].price

        self.service.apply_buyer_product_pricing(product, Decimal("1.50"), self.rates)

        assert product.price_schedule.price_breaks[0].price == original

    def test_product_without_schedule_is_returned_unchanged(self):
        product = ProductFactory(price_schedule=None)

        priced = self.service.apply_buyer_product_pricing(product, Decimal("1.10"), self.rates)

        assert priced.price_schedule is None

    def test_missing_rate_raises(self):
        product = ProductFactory(id="p-1", xp={"Currency": "GBP"})

        with pytest.raises(ExchangeRateNotDefinedError):
            self.service.apply_buyer_product_pricing(product, Decimal("1"), self.rates)

    def test_zero_rate_raises(self):
        with pytest.raises(ExchangeRateNotDefinedError):
            self.service.convert_price(Decimal("1"), "JPY", [ConversionRate("JPY", Decimal("0"))])

    def test_convert_price_matches_currency_case_insensitively(self):
        assert self.service.convert_price(Decimal("8"), "usd", self.rates) == Decimal("4")

    def test_spec_markups_are_converted_not_marked_up(self):
        options = [SpecOptionFactory(price_markup=Decimal("10.00")), SpecOptionFactory(price_markup=None)]
        specs = [SpecFactory(options=options)]

        priced = self.service.apply_spec_markups(specs, "USD", self.rates)

        assert priced[0].options[0].price_markup == Decimal("5")
        assert priced[0].options[1].price_markup is None
        assert specs[0].options[0].price_markup == Decimal("10.00")
