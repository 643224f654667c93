"""
Django mail transport.

Delivery goes through whatever ``EMAIL_BACKEND`` Django is configured with
(SMTP in production, locmem in tests).
"""

import logging

from django.conf import settings
from django.core import mail

from utils.logging_utils import mask_value

from .interface import EmailException, EmailMessage, EmailServiceInterface

logger = logging.getLogger(__name__)


class SMTPEmailService(EmailServiceInterface):
    def __init__(self, default_from: str | None = None):
        self.default_from = default_from or getattr(settings, "DEFAULT_FROM_EMAIL", "noreply@example.com")

    def send(self, message: EmailMessage) -> bool:
        outgoing = mail.EmailMessage(
            subject=message.subject,
            body=message.body,
            from_email=message.from_email or self.default_from,
            to=message.to,
            reply_to=message.reply_to,
        )
        try:
            delivered = outgoing.send(fail_silently=False)
        except Exception as e:
            logger.error(f"Mail transport rejected '{message.subject}': {str(e)}")
            raise EmailException(f"Email send failed: {str(e)}") from e

        recipients = ", ".join(mask_value(address) for address in message.to)
        if delivered:
            logger.info(f"Sent '{message.subject}' to {recipients}")
        else:
            logger.warning(f"Mail transport accepted nothing for {recipients}")
        return delivered > 0
