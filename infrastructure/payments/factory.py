"""
Card Processor Factory
======================

Factory pattern for creating card processor instances based on configuration.
"""

import logging
from typing import Literal

from django.conf import settings

from .interface import CreditCardProcessorInterface
from .mock_provider import MockCardProcessor
from .stripe_provider import StripeProvider

logger = logging.getLogger(__name__)

ProcessorBackend = Literal["stripe", "mock"]


class PaymentFactory:
    """
    Factory for creating card processor instances.

    Usage:
        # In settings.py
        INFRASTRUCTURE = {"CARD_PROCESSOR": "stripe"}  # or 'mock' for testing

        # In your code
        processor = PaymentFactory.create()
    """

    @staticmethod
    def create(backend: ProcessorBackend | None = None) -> CreditCardProcessorInterface:
        """
        Create a card processor instance.

        Args:
            backend: Processor backend type ('stripe' or 'mock')
                    If None, reads INFRASTRUCTURE["CARD_PROCESSOR"]

        Returns:
            CreditCardProcessorInterface implementation

        Raises:
            ValueError: If backend type is invalid
        """
        infrastructure = getattr(settings, "INFRASTRUCTURE", {})
        backend_type = backend or infrastructure.get("CARD_PROCESSOR", "stripe")

        logger.info(f"Creating card processor: {backend_type}")

        if backend_type == "stripe":
            return StripeProvider()
        elif backend_type == "mock":
            return MockCardProcessor()
        else:
            raise ValueError(f"Invalid card processor: {backend_type}. Must be 'stripe' or 'mock'")
