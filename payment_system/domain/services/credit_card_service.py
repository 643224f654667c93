"""
CreditCardService - Authorization Lifecycle

Releases the card authorization held by a credit card payment before that
payment is changed or removed, and records the outcome on the payment.
"""

from typing import Optional

from infrastructure.commerce import (
    CommerceClientInterface,
    Order,
    OrderDirection,
    Payment,
    PaymentTransaction,
)
from infrastructure.payments import CreditCardProcessorInterface, PaymentException, VoidStatus
from marketplace.services.base import BaseService
from payment_system.domain.exceptions import PaymentProviderError
from payment_system.infra.observability.metrics import credit_card_voids_total

AUTHORIZATION_TRANSACTION = "CreditCard"
VOID_TRANSACTION = "CreditCardVoidAuthorization"


class CreditCardService(BaseService):
    def __init__(self, client: CommerceClientInterface, processor: CreditCardProcessorInterface):
        super().__init__()
        self.client = client
        self.processor = processor

    def void_transaction(self, payment: Payment, order: Order) -> Optional[PaymentTransaction]:
        """
        Void the latest successful authorization on ``payment``.

        Nothing is voided when the payment was never authorized or its last
        authorization has already been voided.

        Returns:
            The recorded void transaction, or None when there was nothing to void

        Raises:
            PaymentProviderError: If the processor refuses the void (the failure is recorded first)
            CommerceException: If the void cannot be recorded on the payment
        """
        authorization = self._voidable_authorization(payment)
        if authorization is None:
            self.logger.debug(f"[CARD] Payment {payment.id} on order {order.id} has no authorization to void")
            return None

        reference = authorization.xp.get("ProcessorTransactionID") or authorization.id
        try:
            result = self.processor.void_authorization(reference, order.currency)
        except PaymentException as e:
            credit_card_voids_total.labels(status=VoidStatus.FAILED.value).inc()
            self._record(
                payment, order, succeeded=False, code=VoidStatus.FAILED.value, message=str(e), reference=reference
            )
            raise PaymentProviderError(f"Failed to void authorization {reference}: {e}", payment.id) from e

        credit_card_voids_total.labels(status=result.status.value).inc()
        self.logger.info(f"[CARD] Voided authorization {reference} on payment {payment.id} ({result.status.value})")
        return self._record(
            payment,
            order,
            succeeded=result.succeeded,
            code=result.status.value,
            message=result.message,
            reference=result.transaction_id,
        )

    @staticmethod
    def _voidable_authorization(payment: Payment) -> Optional[PaymentTransaction]:
        authorization = None
        for transaction in payment.transactions:
            if not transaction.succeeded:
                continue
            if transaction.type == AUTHORIZATION_TRANSACTION:
                authorization = transaction
            elif transaction.type == VOID_TRANSACTION:
                authorization = None
        return authorization

    def _record(
        self, payment: Payment, order: Order, succeeded: bool, code: str, message: str, reference: str
    ) -> PaymentTransaction:
        transaction = PaymentTransaction(
            type=VOID_TRANSACTION,
            amount=payment.amount,
            succeeded=succeeded,
            result_code=code,
            result_message=message,
            xp={"ProcessorTransactionID": reference},
        )
        self.client.create_payment_transaction(OrderDirection.INCOMING, order.id, payment.id, transaction)
        return transaction
