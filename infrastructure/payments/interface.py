"""
Credit Card Processor Interface
===============================

Abstract base class defining the contract for card processor operations.
Implements the Interface Segregation Principle: the reconciliation engine
only ever needs to release an authorization it no longer wants.
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from decimal import Decimal
from enum import Enum
from typing import Any, Dict, Optional


class VoidStatus(str, Enum):
    """Outcome of a void request."""

    VOIDED = "voided"
    ALREADY_VOIDED = "already_voided"
    FAILED = "failed"


@dataclass
class VoidResult:
    """
    Represents the processor's answer to a void request.

    Attributes:
        transaction_id: Processor transaction (authorization) identifier
        status: Outcome of the void
        amount: Amount released, when the processor reports it
        message: Processor response message
        metadata: Raw processor details worth recording
    """

    transaction_id: str
    status: VoidStatus
    amount: Optional[Decimal] = None
    message: str = ""
    metadata: Dict[str, Any] = field(default_factory=dict)

    @property
    def succeeded(self) -> bool:
        return self.status in (VoidStatus.VOIDED, VoidStatus.ALREADY_VOIDED)


class CreditCardProcessorInterface(ABC):
    """
    Abstract interface for credit card processor operations.

    Concrete implementations:
        - StripeProvider: Stripe PaymentIntent authorizations
        - MockCardProcessor: In-memory processor for testing
    """

    @abstractmethod
    def void_authorization(self, transaction_id: str, currency: Optional[str] = None) -> VoidResult:
        """
        Release an uncaptured authorization.

        Args:
            transaction_id: Processor identifier of the authorization
            currency: ISO currency of the authorization, when known

        Returns:
            VoidResult describing the outcome

        Raises:
            PaymentException: If the processor rejects the void
        """
        pass


class PaymentException(Exception):
    """Base exception for payment operations."""

    pass
