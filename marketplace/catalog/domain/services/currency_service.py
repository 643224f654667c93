"""
CurrencyService - Buyer Currency

A buyer user's operating currency is declared on their buyer location user
groups. Pricing is meaningless without it, so a missing currency is an
explicit error rather than a silent fallback to the store currency.
"""

from typing import List

from infrastructure.commerce import CommerceClientInterface
from infrastructure.exchange_rates import ConversionRate, ExchangeRateProviderInterface
from marketplace.catalog.domain.exceptions import CurrencyNotDefinedError
from marketplace.services.base import BaseService

BUYER_LOCATION_GROUP_TYPE = "BuyerLocation"


class CurrencyService(BaseService):
    def __init__(self, client: CommerceClientInterface, exchange_rates: ExchangeRateProviderInterface):
        super().__init__()
        self.client = client
        self.exchange_rates = exchange_rates

    def get_currency_for_user(self, access_token: str) -> str:
        """
        Currency of the first buyer location group that declares one.

        Raises:
            CurrencyNotDefinedError: If no buyer location of the user has a currency
            CommerceException: If the user groups cannot be listed
        """
        groups = self.client.list_my_user_groups(access_token, {"xp.Type": BUYER_LOCATION_GROUP_TYPE})
        currency = next(
            (
                group.currency
                for group in groups.items
                if (group.group_type or "").lower() == BUYER_LOCATION_GROUP_TYPE.lower() and group.currency
            ),
            None,
        )
        if currency is None:
            raise CurrencyNotDefinedError("Exchange rate is not defined for the user: no buyer location currency")
        return currency.upper()

    def get_exchange_rates_for_user(self, access_token: str) -> List[ConversionRate]:
        """
        Rates of every currency against the user's currency.

        Raises:
            CurrencyNotDefinedError: If the user has no currency
            ExchangeRateException: If the rate provider fails
        """
        currency = self.get_currency_for_user(access_token)
        rates = self.exchange_rates.get_rates(currency)
        self.logger.debug(f"[CURRENCY] Loaded {len(rates)} rates against {currency}")
        return rates
