from dataclasses import dataclass, field
from typing import Optional

from infrastructure.commerce import Buyer, CommerceClientInterface, ImpersonationConfig


@dataclass
class BuyerMarkup:
    """Seller markup applied to every default-schedule price the buyer sees."""

    percent: int = 0


@dataclass
class BuyerAggregate:
    """
    A buyer organization as the storefront manages it.

    ``buyer.id`` is the identity of the whole aggregate and never changes after
    creation. ``markup.percent`` mirrors ``buyer.xp["MarkupPercent"]``.
    """

    buyer: Buyer
    markup: BuyerMarkup = field(default_factory=BuyerMarkup)
    impersonation_config: Optional[ImpersonationConfig] = None

    @property
    def id(self) -> Optional[str]:
        return self.buyer.id


@dataclass(frozen=True)
class ExecutionContext:
    """
    The identity a sequence of platform calls runs as.

    The storefront's own client with no token runs with its elevated service
    identity. Seeding a new organization runs with the caller's client and
    token instead.
    """

    client: CommerceClientInterface
    access_token: Optional[str] = None
