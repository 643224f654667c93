from dataclasses import replace
from decimal import Decimal
from unittest.mock import MagicMock

import pytest

from infrastructure.commerce import (
    CommerceClientInterface,
    CommerceException,
    CommerceNotFoundError,
    OrderDirection,
    Payment,
    PaymentType,
)
from infrastructure.payments import MockCardProcessor
from marketplace.services.base import ErrorCodes
from marketplace.tests.factories import (
    CreditCardPaymentFactory,
    OrderWorksheetFactory,
    PurchaseOrderPaymentFactory,
    page_of,
)
from payment_system.domain.exceptions import PaymentProviderError
from payment_system.domain.services import CreditCardService, PaymentService


def card(credit_card_id="card-1", **kwargs):
    return Payment(type=PaymentType.CREDIT_CARD, credit_card_id=credit_card_id, **kwargs)


def purchase_order(**kwargs):
    return Payment(type=PaymentType.PURCHASE_ORDER, **kwargs)


@pytest.mark.unit
class TestPaymentServiceUnit:
    def setup_method(self):
        self.client = MagicMock(spec=CommerceClientInterface)
        self.cards = MagicMock(spec=CreditCardService)
        self.service = PaymentService(self.client, self.cards)

        self.worksheet = OrderWorksheetFactory(order__id="order-1", order__total=Decimal("50.00"))
        self.client.get_worksheet.return_value = self.worksheet

    def _existing(self, *payments):
        self.client.list_payments.return_value = page_of(*payments)

    # ===== Credit cards =====

    def test_creates_credit_card_payment_as_user(self):
        self._existing()

        result = self.service.save_payments("order-1", [card(xp={"Note": "x"})], "buyer-token")

        assert result.ok
        direction, order_id, payment, token = self.client.create_payment.call_args.args
        assert direction == OrderDirection.OUTGOING
        assert order_id == "order-1"
        assert token == "buyer-token"
        assert payment.amount == Decimal("50.00")
        assert payment.accepted is False
        assert payment.credit_card_id == "card-1"
        assert payment.id is None

    def test_matching_credit_card_payment_is_left_alone(self):
        self._existing(CreditCardPaymentFactory(credit_card_id="card-1", amount=Decimal("50.00")))

        result = self.service.save_payments("order-1", [card()], "buyer-token")

        assert result.ok
        self.cards.void_transaction.assert_not_called()
        self.client.create_payment.assert_not_called()
        self.client.patch_payment.assert_not_called()
        self.client.delete_payment.assert_not_called()

    def test_stale_amount_voids_then_reprices(self):
        existing = CreditCardPaymentFactory(id="pay-cc", credit_card_id="card-1", amount=Decimal("40.00"))
        self._existing(existing)

        result = self.service.save_payments("order-1", [card(xp={"Saved": True})], "buyer-token")

        assert result.ok
        self.cards.void_transaction.assert_called_once_with(existing, self.worksheet.order)
        self.client.patch_payment.assert_called_once_with(
            OrderDirection.INCOMING,
            "order-1",
            "pay-cc",
            {"Accepted": False, "Amount": "50.00", "xp": {"Saved": True}},
        )
        self.client.delete_payment.assert_not_called()

    def test_card_change_voids_deletes_and_creates(self):
        existing = CreditCardPaymentFactory(id="pay-cc", credit_card_id="card-old")
        self._existing(existing)

        result = self.service.save_payments("order-1", [card("card-new")], "buyer-token")

        assert result.ok
        self.cards.void_transaction.assert_called_once_with(existing, self.worksheet.order)
        self.client.delete_payment.assert_called_once_with(OrderDirection.INCOMING, "order-1", "pay-cc")
        created = self.client.create_payment.call_args.args[2]
        assert created.credit_card_id == "card-new"
        assert created.amount == Decimal("50.00")

    # ===== Stale payments =====

    def test_stale_credit_card_is_voided_once_and_deleted_once(self):
        stale = CreditCardPaymentFactory(id="pay-cc")
        self._existing(stale)

        result = self.service.save_payments("order-1", [purchase_order()], "buyer-token")

        assert result.ok
        self.cards.void_transaction.assert_called_once_with(stale, self.worksheet.order)
        self.client.delete_payment.assert_called_once_with(OrderDirection.INCOMING, "order-1", "pay-cc")

    def test_stale_purchase_order_is_deleted_without_void(self):
        self._existing(PurchaseOrderPaymentFactory(id="pay-po"))

        result = self.service.save_payments("order-1", [card()], "buyer-token")

        assert result.ok
        self.cards.void_transaction.assert_not_called()
        self.client.delete_payment.assert_called_once_with(OrderDirection.INCOMING, "order-1", "pay-po")

    def test_empty_request_removes_everything(self):
        self._existing(CreditCardPaymentFactory(id="pay-cc"), PurchaseOrderPaymentFactory(id="pay-po"))

        result = self.service.save_payments("order-1", [], "buyer-token")

        assert result.ok
        deleted = sorted(call.args[2] for call in self.client.delete_payment.call_args_list)
        assert deleted == ["pay-cc", "pay-po"]
        assert self.cards.void_transaction.call_count == 1
        self.client.create_payment.assert_not_called()

    def test_every_payment_type_has_a_stale_handler(self):
        assert set(self.service._stale_payment_handlers) == set(PaymentType)

    # ===== Purchase orders =====

    def test_creates_purchase_order_for_order_total(self):
        self._existing()

        self.service.save_payments("order-1", [purchase_order()], "buyer-token")

        direction, order_id, payment = self.client.create_payment.call_args.args
        assert direction == OrderDirection.INCOMING
        assert order_id == "order-1"
        assert payment.amount == Decimal("50.00")

    def test_purchase_order_amount_follows_total(self):
        self._existing(PurchaseOrderPaymentFactory(id="pay-po", amount=Decimal("10.00")))

        self.service.save_payments("order-1", [purchase_order()], "buyer-token")

        self.client.patch_payment.assert_called_once_with(
            OrderDirection.INCOMING, "order-1", "pay-po", {"Amount": "50.00"}
        )

    def test_reconciled_order_needs_no_mutations(self):
        self._existing(
            CreditCardPaymentFactory(credit_card_id="card-1", amount=Decimal("50.00")),
            PurchaseOrderPaymentFactory(amount=Decimal("50.00")),
        )

        result = self.service.save_payments("order-1", [card(), purchase_order()], "buyer-token")

        assert result.ok
        for method in ("create_payment", "patch_payment", "delete_payment"):
            getattr(self.client, method).assert_not_called()

    def test_returns_payments_listed_after_reconciliation(self):
        after = CreditCardPaymentFactory(id="pay-new")
        self.client.list_payments.side_effect = [page_of(), page_of(after)]

        result = self.service.save_payments("order-1", [card()], "buyer-token")

        assert result.value == [after]

    # ===== Validation & errors =====

    @pytest.mark.parametrize(
        "requested",
        [
            [card(), card("card-2")],
            [card(None)],
            [Payment(type=PaymentType.SPENDING_ACCOUNT)],
        ],
    )
    def test_invalid_requests_are_rejected_before_any_call(self, requested):
        result = self.service.save_payments("order-1", requested, "buyer-token")

        assert not result.ok
        assert result.error == ErrorCodes.INVALID_INPUT
        self.client.get_worksheet.assert_not_called()

    def test_unknown_order(self):
        self.client.get_worksheet.side_effect = CommerceNotFoundError("missing", status_code=404)
        self._existing()

        result = self.service.save_payments("nope", [card()], "buyer-token")

        assert result.error == ErrorCodes.ORDER_NOT_FOUND

    def test_platform_failure(self):
        self._existing()
        self.client.create_payment.side_effect = CommerceException("rejected", status_code=400)

        result = self.service.save_payments("order-1", [purchase_order()], "buyer-token")

        assert result.error == ErrorCodes.UPSTREAM_ERROR

    def test_void_failure_stops_reconciliation(self):
        self._existing(CreditCardPaymentFactory(id="pay-cc"))
        self.cards.void_transaction.side_effect = PaymentProviderError("declined", "pay-cc")

        result = self.service.save_payments("order-1", [], "buyer-token")

        assert result.error == ErrorCodes.PAYMENT_PROCESSOR_ERROR
        self.client.delete_payment.assert_not_called()


@pytest.mark.unit
class TestPaymentServiceWithProcessor:
    """Reconciliation against the in-memory card processor."""

    def setup_method(self):
        self.client = MagicMock(spec=CommerceClientInterface)
        self.processor = MockCardProcessor()
        self.service = PaymentService(self.client, CreditCardService(self.client, self.processor))
        self.client.get_worksheet.return_value = OrderWorksheetFactory(order__id="order-1")

    def test_switching_to_purchase_order_releases_authorization(self):
        stale = CreditCardPaymentFactory(id="pay-cc")
        reference = stale.transactions[0].xp["ProcessorTransactionID"]
        self.client.list_payments.return_value = page_of(stale)

        result = self.service.save_payments("order-1", [purchase_order()], "buyer-token")

        assert result.ok
        assert self.processor.voided == [reference]
        self.client.create_payment_transaction.assert_called_once()
        self.client.delete_payment.assert_called_once_with(OrderDirection.INCOMING, "order-1", "pay-cc")


class OrderPaymentsStore:
    """Keeps an order's payments in memory so one save sees the writes of the previous one."""

    def __init__(self, client, *payments):
        self.payments = {payment.id: payment for payment in payments}
        self.mutations = []
        self._ids = 0

        client.list_payments.side_effect = lambda direction, order_id, token=None: page_of(*self.payments.values())
        client.create_payment.side_effect = self.create
        client.patch_payment.side_effect = self.patch
        client.delete_payment.side_effect = self.delete
        client.create_payment_transaction.side_effect = self.add_transaction

    def create(self, direction, order_id, payment, token=None):
        self._ids += 1
        created = replace(payment, id=f"pay-{self._ids}")
        self.payments[created.id] = created
        self.mutations.append(("create", created.type))
        return created

    def patch(self, direction, order_id, payment_id, partial, token=None):
        changes = {}
        if "Amount" in partial:
            changes["amount"] = Decimal(partial["Amount"])
        if "Accepted" in partial:
            changes["accepted"] = partial["Accepted"]
        if "xp" in partial:
            changes["xp"] = partial["xp"]
        self.payments[payment_id] = replace(self.payments[payment_id], **changes)
        self.mutations.append(("patch", self.payments[payment_id].type))
        return self.payments[payment_id]

    def delete(self, direction, order_id, payment_id, token=None):
        self.mutations.append(("delete", self.payments.pop(payment_id).type))

    def add_transaction(self, direction, order_id, payment_id, transaction, token=None):
        payment = self.payments[payment_id]
        self.payments[payment_id] = replace(payment, transactions=payment.transactions + [transaction])
        self.mutations.append(("transaction", payment.type))
        return self.payments[payment_id]


@pytest.mark.unit
class TestSavePaymentsTwice:
    def setup_method(self):
        self.client = MagicMock(spec=CommerceClientInterface)
        self.processor = MockCardProcessor()
        self.service = PaymentService(self.client, CreditCardService(self.client, self.processor))
        self.client.get_worksheet.return_value = OrderWorksheetFactory(
            order__id="order-1", order__total=Decimal("80.00")
        )

    def _save(self):
        return self.service.save_payments("order-1", [card("card-2"), purchase_order()], "buyer-token")

    def test_second_save_makes_no_changes(self):
        store = OrderPaymentsStore(
            self.client,
            CreditCardPaymentFactory(id="pay-old-cc", credit_card_id="card-1"),
            PurchaseOrderPaymentFactory(id="pay-po", amount=Decimal("20.00")),
            Payment(type=PaymentType.SPENDING_ACCOUNT, id="pay-sa", amount=Decimal("5.00")),
        )

        first = self._save()
        assert first.ok
        assert store.mutations

        store.mutations.clear()
        voided = list(self.processor.voided)
        second = self._save()

        assert second.ok
        assert store.mutations == []
        assert self.processor.voided == voided
        assert sorted((p.type, p.amount) for p in second.value) == [
            (PaymentType.CREDIT_CARD, Decimal("80.00")),
            (PaymentType.PURCHASE_ORDER, Decimal("80.00")),
        ]

    def test_repeated_saves_keep_one_payment_per_type(self):
        store = OrderPaymentsStore(self.client)

        for _ in range(3):
            assert self._save().ok

        types = [payment.type for payment in store.payments.values()]
        assert sorted(types) == [PaymentType.CREDIT_CARD, PaymentType.PURCHASE_ORDER]
        assert store.mutations == [("create", PaymentType.CREDIT_CARD), ("create", PaymentType.PURCHASE_ORDER)]
