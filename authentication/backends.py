"""
Bearer token authentication for the storefront API.

Requests carry the commerce platform's access token in the ``Authorization``
header. The token is decoded without signature verification to read the
username; the platform rejects forged tokens when it is called with them.
"""

import logging

from rest_framework import authentication, exceptions
from rest_framework_simplejwt.backends import TokenBackend
from rest_framework_simplejwt.exceptions import TokenBackendError

from utils.logging_utils import mask_value

from .tokens import DecodedToken

logger = logging.getLogger(__name__)

_token_backend = TokenBackend(algorithm="HS256")


class BearerTokenAuthentication(authentication.BaseAuthentication):
    keyword = "Bearer"

    def authenticate(self, request):
        header = authentication.get_authorization_header(request).split()
        if not header or header[0].lower() != self.keyword.lower().encode():
            return None

        if len(header) != 2:
            raise exceptions.AuthenticationFailed("Invalid bearer header. Expected 'Bearer <token>'.")

        try:
            access_token = header[1].decode()
        except UnicodeError:
            raise exceptions.AuthenticationFailed("Invalid bearer token encoding.")

        try:
            claims = _token_backend.decode(access_token, verify=False)
        except TokenBackendError as e:
            logger.warning(f"[AUTH] Rejected malformed token {mask_value(access_token)}: {e}")
            raise exceptions.AuthenticationFailed("Malformed bearer token.")

        token = DecodedToken(
            access_token=access_token,
            username=claims.get("usr"),
            client_id=claims.get("cid"),
            claims=claims,
        )
        return token, access_token

    def authenticate_header(self, request):
        return self.keyword
