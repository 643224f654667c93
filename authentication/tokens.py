from dataclasses import dataclass, field
from typing import Any, Dict, Optional


@dataclass(frozen=True)
class DecodedToken:
    """
    The caller of a storefront request, identified by their platform token.

    The token itself is validated by the commerce platform on every call made
    with it; the claims here are only read, never trusted for authorization.
    """

    access_token: str
    username: Optional[str] = None
    client_id: Optional[str] = None
    claims: Dict[str, Any] = field(default_factory=dict, compare=False, repr=False)

    # Lets DRF's IsAuthenticated treat the token as the request user
    is_authenticated = True
    is_anonymous = False
