import logging
from typing import List

from utils.logging_utils import mask_value

from .interface import EmailMessage, EmailServiceInterface

logger = logging.getLogger(__name__)


class MockEmailService(EmailServiceInterface):
    """Keeps messages in ``sent_messages`` instead of delivering them."""

    def __init__(self):
        self.sent_messages: List[EmailMessage] = []

    def send(self, message: EmailMessage) -> bool:
        recipients = ", ".join(mask_value(address) for address in message.to)
        logger.info(f"[MOCK EMAIL] '{message.subject}' to {recipients}")
        self.sent_messages.append(message)
        return True
