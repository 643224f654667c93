"""
Commerce Client Tests
=====================

Unit tests for the OrderCloud REST client, with the HTTP session mocked.
"""

from decimal import Decimal
from unittest.mock import MagicMock, patch

import requests
from django.test import SimpleTestCase

from infrastructure.commerce import (
    Buyer,
    CommerceException,
    CommerceNotFoundError,
    OrderCloudClient,
    OrderDirection,
    Payment,
    PaymentType,
    SearchType,
)
from infrastructure.config import CommerceSettings


def response(status_code=200, payload=None):
    mock = MagicMock()
    mock.status_code = status_code
    mock.content = b"" if payload is None else b"{}"
    mock.json.return_value = payload or {}
    return mock


class OrderCloudClientTest(SimpleTestCase):
    def setUp(self):
        self.session = MagicMock(spec=requests.Session)
        self.session.post.return_value = response(payload={"access_token": "elevated", "expires_in": 600})
        self.config = CommerceSettings(
            api_url="https://api.example.com/v1",
            auth_url="https://auth.example.com",
            client_id="client",
            client_secret="secret",
            scopes=("BuyerAdmin", "OrderAdmin"),
        )
        self.client = OrderCloudClient(self.config, session=self.session)

    def test_elevated_token_is_fetched_once(self):
        self.session.request.return_value = response(payload={"ID": "0001", "Name": "Acme"})

        self.client.get_buyer("0001")
        buyer = self.client.get_buyer("0001")

        self.assertEqual(buyer, Buyer(id="0001", name="Acme"))
        self.session.post.assert_called_once()
        form = self.session.post.call_args.kwargs["data"]
        self.assertEqual(form["grant_type"], "client_credentials")
        self.assertEqual(form["scope"], "BuyerAdmin OrderAdmin")
        headers = self.session.request.call_args.kwargs["headers"]
        self.assertEqual(headers["Authorization"], "Bearer elevated")

    def test_user_token_is_passed_through(self):
        self.session.request.return_value = response(payload={"ID": "u-1", "Buyer": {"ID": "0001"}})

        me = self.client.get_me("buyer-token")

        self.assertEqual(me.buyer_id, "0001")
        self.session.post.assert_not_called()
        headers = self.session.request.call_args.kwargs["headers"]
        self.assertEqual(headers["Authorization"], "Bearer buyer-token")

    def test_list_products_query(self):
        self.session.request.return_value = response(
            payload={"Items": [{"ID": "p-1"}], "Meta": {"Page": 1, "PageSize": 20, "TotalCount": 1}}
        )

        page = self.client.list_my_products(
            "buyer-token",
            search="chair",
            search_on="ID,Name",
            search_type=SearchType.ANY_TERM,
            page=1,
            filters={"xp.Color": "red"},
            seller_id="storefront",
        )

        self.assertEqual(page.items[0].id, "p-1")
        method, url = self.session.request.call_args.args
        self.assertEqual((method, url), ("GET", "https://api.example.com/v1/me/products"))
        params = self.session.request.call_args.kwargs["params"]
        self.assertEqual(
            params,
            {
                "xp.Color": "red",
                "search": "chair",
                "searchOn": "ID,Name",
                "searchType": "AnyTerm",
                "page": 1,
                "sellerID": "storefront",
            },
        )

    def test_payment_money_is_sent_as_string(self):
        self.session.request.return_value = response(payload={"ID": "pay-1", "Type": "PurchaseOrder", "Amount": 12.5})

        created = self.client.create_payment(
            OrderDirection.INCOMING, "order-1", Payment(type=PaymentType.PURCHASE_ORDER, amount=Decimal("12.50"))
        )

        body = self.session.request.call_args.kwargs["json"]
        self.assertEqual(body["Amount"], "12.50")
        self.assertNotIn("Transactions", body)
        self.assertEqual(created.amount, Decimal("12.5"))

    def test_not_found(self):
        self.session.request.return_value = response(404, {"Errors": [{"ErrorCode": "NotFound"}]})

        with self.assertRaises(CommerceNotFoundError) as ctx:
            self.client.get_buyer("missing")
        self.assertEqual(ctx.exception.errors, [{"ErrorCode": "NotFound"}])

    def test_client_error_is_not_retried(self):
        self.session.request.return_value = response(400, {"Errors": [{"ErrorCode": "IdExists"}]})

        with self.assertRaises(CommerceException) as ctx:
            self.client.create_buyer(Buyer(name="Acme"))

        self.assertEqual(ctx.exception.status_code, 400)
        self.assertEqual(self.session.request.call_count, 1)

    @patch("time.sleep")
    def test_server_error_is_retried(self, _sleep):
        self.session.request.side_effect = [response(503), response(payload={"ID": "0001"})]

        buyer = self.client.get_buyer("0001")

        self.assertEqual(buyer.id, "0001")
        self.assertEqual(self.session.request.call_count, 2)

    @patch("time.sleep")
    def test_post_is_sent_once_when_reply_times_out(self, _sleep):
        self.session.request.side_effect = [requests.Timeout("read timed out"), response(payload={"ID": "pay-2"})]
        payment = Payment(type=PaymentType.CREDIT_CARD, amount=Decimal("50.00"), credit_card_id="card-1")

        with self.assertRaises(CommerceException):
            self.client.create_payment(OrderDirection.OUTGOING, "order-1", payment, "buyer-token")

        self.assertEqual(self.session.request.call_count, 1)
        _sleep.assert_not_called()

    @patch("time.sleep")
    def test_post_is_not_retried_on_server_error(self, _sleep):
        self.session.request.side_effect = [response(503), response(payload={"ID": "0001"})]

        with self.assertRaises(CommerceException) as ctx:
            self.client.create_buyer(Buyer(id="0001", name="Acme"))

        self.assertEqual(ctx.exception.status_code, 503)
        self.assertEqual(self.session.request.call_count, 1)

    @patch("time.sleep")
    def test_patch_is_retried_on_timeout(self, _sleep):
        self.session.request.side_effect = [requests.Timeout("read timed out"), response(payload={"ID": "pay-1"})]

        self.client.patch_payment(OrderDirection.OUTGOING, "order-1", "pay-1", {"Amount": "50.00"}, "buyer-token")

        self.assertEqual(self.session.request.call_count, 2)

    def test_no_content(self):
        self.session.request.return_value = response(204)

        self.assertIsNone(self.client.delete_payment(OrderDirection.INCOMING, "order-1", "pay-1"))

    @patch("time.sleep")
    def test_network_error_becomes_commerce_exception(self, _sleep):
        self.session.request.side_effect = requests.ConnectionError("unreachable")

        with self.assertRaises(CommerceException):
            self.client.get_buyer("0001")
        self.assertEqual(self.session.request.call_count, 3)

    def test_token_failure(self):
        self.session.post.side_effect = requests.ConnectionError("auth down")

        with self.assertRaises(CommerceException):
            self.client.get_buyer("0001")
