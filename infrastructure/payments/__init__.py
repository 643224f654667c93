"""
Card Processor Abstraction Layer
================================

Provides a unified interface for credit card processor operations.
"""

from .factory import PaymentFactory
from .interface import CreditCardProcessorInterface, PaymentException, VoidResult, VoidStatus
from .mock_provider import MockCardProcessor
from .stripe_provider import StripeProvider

__all__ = [
    "CreditCardProcessorInterface",
    "MockCardProcessor",
    "PaymentException",
    "PaymentFactory",
    "StripeProvider",
    "VoidResult",
    "VoidStatus",
]
