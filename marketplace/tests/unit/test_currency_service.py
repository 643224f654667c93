from decimal import Decimal
from unittest.mock import MagicMock

import pytest

from infrastructure.commerce import CommerceClientInterface, UserGroup
from infrastructure.exchange_rates import ConversionRate, ExchangeRateProviderInterface
from marketplace.catalog.domain.exceptions import CurrencyNotDefinedError
from marketplace.catalog.domain.services import CurrencyService
from marketplace.tests.factories import BuyerLocationGroupFactory, page_of


@pytest.mark.unit
class TestCurrencyServiceUnit:
    def setup_method(self):
        self.client = MagicMock(spec=CommerceClientInterface)
        self.rates = MagicMock(spec=ExchangeRateProviderInterface)
        self.service = CurrencyService(self.client, self.rates)

    def test_currency_comes_from_buyer_location(self):
        location = BuyerLocationGroupFactory(xp={"Type": "BuyerLocation", "Currency": "eur"})
        self.client.list_my_user_groups.return_value = page_of(location)

        assert self.service.get_currency_for_user("token") == "EUR"
        self.client.list_my_user_groups.assert_called_once_with("token", {"xp.Type": "BuyerLocation"})

    def test_groups_without_currency_are_skipped(self):
        self.client.list_my_user_groups.return_value = page_of(
            UserGroup(id="g-1", xp={"Type": "BuyerLocation"}),
            UserGroup(id="g-2", xp={"Type": "UserGroup", "Currency": "GBP"}),
            BuyerLocationGroupFactory(xp={"Type": "BuyerLocation", "Currency": "CAD"}),
        )

        assert self.service.get_currency_for_user("token") == "CAD"

    def test_missing_currency_raises(self):
        self.client.list_my_user_groups.return_value = page_of(UserGroup(id="g-1", xp={"Type": "BuyerLocation"}))

        with pytest.raises(CurrencyNotDefinedError):
            self.service.get_currency_for_user("token")

    def test_exchange_rates_are_requested_for_user_currency(self):
        self.client.list_my_user_groups.return_value = page_of(BuyerLocationGroupFactory())
        expected = [ConversionRate("EUR", Decimal("1")), ConversionRate("USD", Decimal("1.17"))]
        self.rates.get_rates.return_value = expected

        assert self.service.get_exchange_rates_for_user("token") == expected
        self.rates.get_rates.assert_called_once_with("EUR")

    def test_exchange_rates_not_requested_without_currency(self):
        self.client.list_my_user_groups.return_value = page_of()

        with pytest.raises(CurrencyNotDefinedError):
            self.service.get_exchange_rates_for_user("token")
        self.rates.get_rates.assert_not_called()
