"""
Outgoing mail contract.

The storefront only sends plain-text notifications to configured contacts
(supplier contact requests), replying back to the buyer who asked.
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from typing import List, Optional


class EmailException(Exception):
    """Raised when the mail transport refuses a message."""


@dataclass
class EmailMessage:
    subject: str
    body: str
    to: List[str]
    reply_to: List[str] = field(default_factory=list)
    from_email: Optional[str] = None

    def __post_init__(self):
        if not self.to:
            raise ValueError("An email needs at least one recipient")


class EmailServiceInterface(ABC):
    @abstractmethod
    def send(self, message: EmailMessage) -> bool:
        """
        Deliver ``message``.

        Returns:
            True when the transport accepted the message

        Raises:
            EmailException: If the transport fails
        """
