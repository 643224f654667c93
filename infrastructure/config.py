"""
Commerce configuration.

Django settings are read once into an immutable ``CommerceSettings`` which the
service container hands to every collaborator that needs it.
"""

from dataclasses import dataclass
from typing import Tuple

from django.conf import settings


@dataclass(frozen=True)
class CommerceSettings:
    api_url: str
    auth_url: str
    client_id: str
    client_secret: str
    scopes: Tuple[str, ...] = ("FullAccess",)
    marketplace_id: str = ""
    base_currency: str = "USD"
    buyer_security_profile_id: str = "BaseBuyer"
    buyer_message_sender_id: str = "BuyerEmails"
    supplier_contact_email: str = ""
    timeout: float = 30.0
    markup_cache_timeout: int = 3600

    @classmethod
    def from_django(cls) -> "CommerceSettings":
        """Build the settings object from ``settings.COMMERCE``."""
        commerce = getattr(settings, "COMMERCE", {})
        scopes = commerce.get("SCOPES", ("FullAccess",))
        if isinstance(scopes, str):
            scopes = tuple(scope for scope in scopes.split() if scope)

        return cls(
            api_url=commerce.get("API_URL", "https://api.ordercloud.io/v1").rstrip("/"),
            auth_url=commerce.get("AUTH_URL", "https://auth.ordercloud.io").rstrip("/"),
            client_id=commerce.get("CLIENT_ID", ""),
            client_secret=commerce.get("CLIENT_SECRET", ""),
            scopes=tuple(scopes),
            marketplace_id=commerce.get("MARKETPLACE_ID", ""),
            base_currency=commerce.get("BASE_CURRENCY", "USD"),
            buyer_security_profile_id=commerce.get("BUYER_SECURITY_PROFILE_ID", "BaseBuyer"),
            buyer_message_sender_id=commerce.get("BUYER_MESSAGE_SENDER_ID", "BuyerEmails"),
            supplier_contact_email=commerce.get("SUPPLIER_CONTACT_EMAIL", ""),
            timeout=float(commerce.get("TIMEOUT", 30)),
            markup_cache_timeout=int(getattr(settings, "MARKUP_CACHE_TIMEOUT", 3600)),
        )
