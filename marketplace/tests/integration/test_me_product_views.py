from decimal import Decimal
from unittest.mock import MagicMock

from django.core.cache import cache
from django.test import TestCase
from django.urls import reverse
from rest_framework import status
from rest_framework.test import APIClient

from infrastructure.commerce import CommerceClientInterface, CommerceNotFoundError, SearchType
from infrastructure.container import container
from marketplace.tests.factories import (
    BuyerFactory,
    BuyerLocationGroupFactory,
    MeUserFactory,
    ProductFactory,
    SpecFactory,
    VariantFactory,
    bearer_token,
    page_of,
)


class MeProductViewIntegrationTest(TestCase):
    def setUp(self):
        cache.clear()
        self.commerce = MagicMock(spec=CommerceClientInterface)
        container.configure_for_testing(commerce_client=self.commerce)

        self.token = bearer_token("buyer_user")
        self.client = APIClient()
        self.client.credentials(HTTP_AUTHORIZATION=f"Bearer {self.token}")

        self.list_url = reverse("marketplace:me-product-list")
        self.request_info_url = reverse("marketplace:me-product-request-info")

        # Buyer 0001 has a 10% markup and shops in USD
        self.commerce.get_me.return_value = MeUserFactory(buyer_id="0001")
        self.commerce.get_buyer.return_value = BuyerFactory(id="0001", xp={"MarkupPercent": 10})
        self.commerce.list_impersonation_configs.return_value = page_of()
        self.commerce.list_my_user_groups.return_value = page_of(
            BuyerLocationGroupFactory(xp={"Type": "BuyerLocation", "Currency": "USD"})
        )

    def tearDown(self):
        container.reset()
        cache.clear()

    def _product(self):
        product = ProductFactory(id="p-1", xp={"Currency": "USD"})
        product.price_schedule.price_breaks[0].price = Decimal("100.00")
        return product

    def test_list_products_priced_for_buyer(self):
        self.commerce.list_my_products.return_value = page_of(self._product())

        response = self.client.get(self.list_url, {"search": "chair", "pageSize": 10, "xp.Color": "red"})

        self.assertEqual(response.status_code, status.HTTP_200_OK)
        price = response.data["items"][0]["price_schedule"]["price_breaks"][0]["price"]
        self.assertEqual(Decimal(price), Decimal("110.00"))
        self.assertEqual(response.data["meta"]["total_count"], 1)

        args, kwargs = self.commerce.list_my_products.call_args
        self.assertEqual(args[0], self.token)
        self.assertEqual(kwargs["page_size"], 10)
        self.assertEqual(kwargs["filters"], {"xp.Color": "red"})
        self.assertEqual(kwargs["search_type"], SearchType.EXACT_PHRASE_PREFIX)

    def test_list_invalid_page_size(self):
        response = self.client.get(self.list_url, {"pageSize": 500})

        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)
        self.commerce.list_my_products.assert_not_called()

    def test_list_without_buyer_currency(self):
        self.commerce.list_my_products.return_value = page_of(self._product())
        self.commerce.list_my_user_groups.return_value = page_of()

        response = self.client.get(self.list_url)

        self.assertEqual(response.status_code, status.HTTP_422_UNPROCESSABLE_ENTITY)
        self.assertEqual(response.data["code"], "currency_not_defined")

    def test_retrieve_product(self):
        self.commerce.get_my_product.return_value = self._product()
        self.commerce.list_my_specs.return_value = page_of(SpecFactory())
        self.commerce.list_variants.return_value = page_of(VariantFactory())

        response = self.client.get(reverse("marketplace:me-product-detail", kwargs={"product_id": "p-1"}))

        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertEqual(response.data["product"]["id"], "p-1")
        self.assertEqual(Decimal(response.data["price_schedule"]["price_breaks"][0]["price"]), Decimal("110.00"))
        self.assertEqual(len(response.data["specs"]), 1)
        self.assertEqual(len(response.data["variants"]), 1)

    def test_retrieve_unknown_product(self):
        self.commerce.get_my_product.side_effect = CommerceNotFoundError("missing", status_code=404)
        self.commerce.list_my_specs.return_value = page_of()
        self.commerce.list_variants.return_value = page_of()

        response = self.client.get(reverse("marketplace:me-product-detail", kwargs={"product_id": "nope"}))

        self.assertEqual(response.status_code, status.HTTP_404_NOT_FOUND)

    def test_request_info_sends_email(self):
        body = {
            "product_id": "p-1",
            "product_name": "Oak Chair",
            "buyer_request": {"first_name": "Ada", "last_name": "Byron", "email": "ada@example.com"},
        }

        response = self.client.post(self.request_info_url, body, format="json")

        self.assertEqual(response.status_code, status.HTTP_204_NO_CONTENT)
        sent = container.email().sent_messages
        self.assertEqual(len(sent), 1)
        self.assertEqual(sent[0].to, ["supplier@example.com"])
        self.assertEqual(sent[0].reply_to, ["ada@example.com"])

    def test_request_info_requires_buyer_email(self):
        body = {"product_id": "p-1", "product_name": "Oak Chair", "buyer_request": {"first_name": "Ada"}}

        response = self.client.post(self.request_info_url, body, format="json")

        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)
        self.assertEqual(container.email().sent_messages, [])
