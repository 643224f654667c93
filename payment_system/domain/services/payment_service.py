"""
PaymentService - Payment Reconciliation

Brings an order's payments in line with the payments a buyer asks for at
checkout. After ``save_payments`` the order holds exactly one payment per
requested type and every payment covers the order's current total.

Credit card payments hold an authorization on the card processor; it is
always voided before the payment is re-priced, replaced or deleted so no
authorization is left dangling.
"""

from dataclasses import replace
from typing import Callable, Dict, List, Optional

from infrastructure.commerce import (
    CommerceClientInterface,
    CommerceException,
    CommerceNotFoundError,
    Order,
    OrderDirection,
    Payment,
    PaymentType,
)
from marketplace.services.base import BaseService, ErrorCodes, ServiceResult, service_err, service_ok
from payment_system.domain.exceptions import PaymentProviderError, PaymentValidationError
from payment_system.infra.observability.metrics import payment_reconciliation_mutations_total
from utils.concurrency import run_concurrently

from .credit_card_service import CreditCardService

# Payment types a buyer may request at checkout
REQUESTABLE_TYPES = (PaymentType.CREDIT_CARD, PaymentType.PURCHASE_ORDER)


class PaymentService(BaseService):
    """
    Service reconciling requested payments against an order.

    Dependencies:
    - CommerceClientInterface: orders and payments live on the platform
    - CreditCardService: voids card authorizations
    """

    def __init__(self, client: CommerceClientInterface, credit_card_service: CreditCardService):
        super().__init__()
        self.client = client
        self.credit_card_service = credit_card_service

        # One handler per payment type, so a stale payment is removed exactly once
        self._stale_payment_handlers: Dict[PaymentType, Callable[[Payment, Order], None]] = {
            PaymentType.CREDIT_CARD: self._delete_credit_card_payment,
            PaymentType.PURCHASE_ORDER: self._delete_payment,
            PaymentType.SPENDING_ACCOUNT: self._delete_payment,
        }

    @BaseService.log_performance
    def save_payments(self, order_id: str, requested: List[Payment], access_token: str) -> ServiceResult[List[Payment]]:
        """
        Reconcile the order's payments with ``requested`` and return the result.

        Args:
            order_id: ID of the buyer's (incoming) order
            requested: Payments that should be on the order, at most one per type
            access_token: The buyer's token; personal credit cards are only visible to their owner

        Returns:
            ServiceResult with the order's payments after reconciliation

        Example:
            >>> card = Payment(type=PaymentType.CREDIT_CARD, credit_card_id="cc-1")
            >>> result = payment_service.save_payments("o-1", [card], token)
            >>> [p.amount for p in result.value]
            [Decimal('50.00')]
        """
        try:
            self._validate(requested)
        except PaymentValidationError as e:
            return service_err(ErrorCodes.INVALID_INPUT, str(e))

        try:
            worksheet, existing_page = run_concurrently(
                lambda: self.client.get_worksheet(OrderDirection.INCOMING, order_id),
                lambda: self.client.list_payments(OrderDirection.INCOMING, order_id),
            )
            order = worksheet.order

            existing = self._delete_stale_payments(requested, existing_page.items, order)
            for payment in requested:
                current = next((p for p in existing if p.type == payment.type), None)
                if payment.type == PaymentType.CREDIT_CARD:
                    self._reconcile_credit_card(payment, current, order, access_token)
                else:
                    self._reconcile_purchase_order(payment, current, order)

            payments = self.client.list_payments(OrderDirection.INCOMING, order_id).items
        except CommerceNotFoundError:
            return service_err(ErrorCodes.ORDER_NOT_FOUND, f"Order {order_id} does not exist")
        except CommerceException as e:
            return service_err(ErrorCodes.UPSTREAM_ERROR, f"Failed to save payments for order {order_id}: {e}")
        except PaymentProviderError as e:
            return service_err(ErrorCodes.PAYMENT_PROCESSOR_ERROR, str(e))

        return service_ok(payments)

    # ==========================================================================
    # Reconciliation steps
    # ==========================================================================

    def _delete_stale_payments(self, requested: List[Payment], existing: List[Payment], order: Order) -> List[Payment]:
        requested_types = {payment.type for payment in requested}
        remaining = []
        for payment in existing:
            if payment.type in requested_types:
                remaining.append(payment)
                continue
            self.logger.info(f"[PAYMENT] Removing stale {payment.type.value} payment {payment.id} on order {order.id}")
            self._stale_payment_handlers[payment.type](payment, order)
        return remaining

    def _reconcile_credit_card(
        self, requested: Payment, existing: Optional[Payment], order: Order, access_token: str
    ) -> None:
        if existing is None:
            self._create_credit_card_payment(requested, order, access_token)
        elif existing.credit_card_id == requested.credit_card_id and existing.amount == order.total:
            self.logger.debug(f"[PAYMENT] Credit card payment {existing.id} on order {order.id} is up to date")
        elif existing.credit_card_id == requested.credit_card_id:
            self.credit_card_service.void_transaction(existing, order)
            self.client.patch_payment(
                OrderDirection.INCOMING,
                order.id,
                existing.id,
                {"Accepted": False, "Amount": str(order.total), "xp": requested.xp},
            )
            self._count("update", PaymentType.CREDIT_CARD)
        else:
            # Payments may not exceed the order total or be zero, so the old card payment has to go first
            self._delete_credit_card_payment(existing, order)
            self._create_credit_card_payment(requested, order, access_token)

    def _reconcile_purchase_order(self, requested: Payment, existing: Optional[Payment], order: Order) -> None:
        if existing is None:
            payment = replace(requested, id=None, amount=order.total, transactions=[])
            self.client.create_payment(OrderDirection.INCOMING, order.id, payment)
            self._count("create", PaymentType.PURCHASE_ORDER)
        elif existing.amount != order.total:
            self.client.patch_payment(OrderDirection.INCOMING, order.id, existing.id, {"Amount": str(order.total)})
            self._count("update", PaymentType.PURCHASE_ORDER)

    def _create_credit_card_payment(self, requested: Payment, order: Order, access_token: str) -> None:
        payment = replace(requested, id=None, amount=order.total, accepted=False, transactions=[])
        self.client.create_payment(OrderDirection.OUTGOING, order.id, payment, access_token)
        self._count("create", PaymentType.CREDIT_CARD)

    def _delete_credit_card_payment(self, payment: Payment, order: Order) -> None:
        self.credit_card_service.void_transaction(payment, order)
        self._delete_payment(payment, order)

    def _delete_payment(self, payment: Payment, order: Order) -> None:
        self.client.delete_payment(OrderDirection.INCOMING, order.id, payment.id)
        self._count("delete", payment.type)

    # ==========================================================================
    # Helpers
    # ==========================================================================

    @staticmethod
    def _validate(requested: List[Payment]) -> None:
        seen = set()
        for payment in requested:
            if payment.type not in REQUESTABLE_TYPES:
                raise PaymentValidationError(f"Payment type {payment.type.value} cannot be requested")
            if payment.type in seen:
                raise PaymentValidationError(f"Only one {payment.type.value} payment is allowed per order")
            if payment.type == PaymentType.CREDIT_CARD and not payment.credit_card_id:
                raise PaymentValidationError("Credit card payments require a credit card ID")
            seen.add(payment.type)

    @staticmethod
    def _count(operation: str, payment_type: PaymentType) -> None:
        payment_reconciliation_mutations_total.labels(operation=operation, payment_type=payment_type.value).inc()
