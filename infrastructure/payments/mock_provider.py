"""
Mock Card Processor
===================

Mock implementation of CreditCardProcessorInterface for testing.
Records voids in memory instead of calling a processor.
"""

import logging
from typing import List, Optional

from .interface import CreditCardProcessorInterface, VoidResult, VoidStatus

logger = logging.getLogger(__name__)


class MockCardProcessor(CreditCardProcessorInterface):
    """
    Mock card processor for testing and development.

    Every void succeeds; voiding the same authorization twice reports
    ALREADY_VOIDED, as a real processor would.
    """

    def __init__(self):
        self.voided: List[str] = []

    def void_authorization(self, transaction_id: str, currency: Optional[str] = None) -> VoidResult:
        if transaction_id in self.voided:
            logger.info(f"[MOCK PROCESSOR] {transaction_id} already voided")
            return VoidResult(transaction_id=transaction_id, status=VoidStatus.ALREADY_VOIDED)

        logger.info(f"[MOCK PROCESSOR] Voided {transaction_id}")
        self.voided.append(transaction_id)
        return VoidResult(transaction_id=transaction_id, status=VoidStatus.VOIDED, message="voided")

    def clear(self):
        """Forget recorded voids (useful between tests)."""
        self.voided.clear()
