"""
Stripe Card Processor
=====================

Concrete implementation of CreditCardProcessorInterface using Stripe.
Card authorizations are uncaptured PaymentIntents; voiding one cancels it.
"""

import logging
from decimal import Decimal
from typing import Optional

import stripe
from django.conf import settings
from tenacity import retry, retry_if_exception_type, stop_after_attempt, wait_exponential

from .interface import CreditCardProcessorInterface, PaymentException, VoidResult, VoidStatus

logger = logging.getLogger(__name__)

# Currencies Stripe does not express in hundredths
ZERO_DECIMAL_CURRENCIES = {
    "bif",
    "clp",
    "djf",
    "gnf",
    "jpy",
    "kmf",
    "krw",
    "mga",
    "pyg",
    "rwf",
    "vnd",
    "vuv",
    "xaf",
    "xof",
    "xpf",
}


class StripeProvider(CreditCardProcessorInterface):
    """
    Stripe card processor implementation.

    Configuration (in settings.py):
        STRIPE_SECRET_KEY: Stripe secret API key
    """

    def __init__(self):
        """Initialize Stripe provider with API credentials."""
        stripe.api_key = getattr(settings, "STRIPE_SECRET_KEY", "")

        if not stripe.api_key:
            logger.warning("STRIPE_SECRET_KEY not configured")

    @retry(
        stop=stop_after_attempt(3),
        wait=wait_exponential(multiplier=1, min=2, max=10),
        retry=retry_if_exception_type(
            (
                stripe.RateLimitError,
                stripe.APIConnectionError,
                stripe.APIError,
            )
        ),
        reraise=True,
    )
    def _cancel_payment_intent_api(self, intent_id: str):
        """Internal method to cancel an intent with retries."""
        return stripe.PaymentIntent.cancel(intent_id, cancellation_reason="abandoned")

    def void_authorization(self, transaction_id: str, currency: Optional[str] = None) -> VoidResult:
        """
        Cancel the PaymentIntent holding the authorization.

        Args:
            transaction_id: PaymentIntent ID
            currency: Unused, Stripe knows the intent's currency

        Returns:
            VoidResult (ALREADY_VOIDED when the intent was canceled earlier)

        Raises:
            PaymentException: If Stripe refuses the cancellation
        """
        try:
            intent = self._cancel_payment_intent_api(transaction_id)
        except stripe.InvalidRequestError as e:
            if getattr(e, "code", None) == "payment_intent_unexpected_state" and "canceled" in str(e):
                logger.info(f"Payment intent {transaction_id} was already canceled")
                return VoidResult(transaction_id=transaction_id, status=VoidStatus.ALREADY_VOIDED, message=str(e))
            logger.error(f"Stripe rejected void of {transaction_id}: {str(e)}")
            raise PaymentException(f"Failed to void authorization: {str(e)}") from e
        except stripe.StripeError as e:
            logger.error(f"Stripe void failed for {transaction_id}: {str(e)}")
            raise PaymentException(f"Failed to void authorization: {str(e)}") from e

        logger.info(f"Voided Stripe authorization: {intent.id}")

        return VoidResult(
            transaction_id=intent.id,
            status=VoidStatus.VOIDED,
            amount=self._to_major_units(intent.amount, intent.currency),
            message=intent.status,
            metadata={"cancellation_reason": intent.cancellation_reason},
        )

    @staticmethod
    def _to_major_units(amount: Optional[int], currency: Optional[str]) -> Optional[Decimal]:
        if amount is None:
            return None
        if (currency or "").lower() in ZERO_DECIMAL_CURRENCIES:
            return Decimal(amount)
        return Decimal(amount) / 100
