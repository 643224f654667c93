"""
OrderCloud Commerce Client
==========================

Concrete implementation of CommerceClientInterface over the platform's REST API.
"""

import logging
import threading
import time
from typing import Any, Dict, Optional

import requests
from tenacity import retry, retry_if_exception_type, stop_after_attempt, wait_exponential

from infrastructure.config import CommerceSettings
from utils.logging_utils import mask_value

from .interface import CommerceClientInterface, CommerceException, CommerceNotFoundError
from .models import (
    Buyer,
    CatalogAssignment,
    ImpersonationConfig,
    Incrementor,
    ListPage,
    MeUser,
    MessageSenderAssignment,
    OrderDirection,
    OrderWorksheet,
    Payment,
    PaymentTransaction,
    Product,
    SearchType,
    SecurityProfileAssignment,
    Spec,
    UserGroup,
    Variant,
)

logger = logging.getLogger(__name__)


class TransientCommerceError(CommerceException):
    """Rate limiting or server-side failure worth retrying."""

    pass


class OrderCloudClient(CommerceClientInterface):
    """
    REST client for an OrderCloud-compatible commerce API.

    Requests without an access token run under an elevated token obtained
    with the client-credentials grant and cached until shortly before it
    expires.
    """

    TOKEN_EXPIRY_MARGIN_SECONDS = 60

    # A POST may have been stored before its reply was lost, so only these are resent
    RETRYABLE_METHODS = frozenset({"GET", "PUT", "PATCH", "DELETE"})

    def __init__(self, config: CommerceSettings, session: Optional[requests.Session] = None):
        self.config = config
        self.session = session or requests.Session()
        self._elevated_token: Optional[str] = None
        self._elevated_token_expires_at = 0.0
        self._token_lock = threading.Lock()

        if not config.client_id:
            logger.warning("COMMERCE CLIENT_ID not configured")

    # ------------------------------------------------------------------
    # Transport
    # ------------------------------------------------------------------

    def _get_elevated_token(self) -> str:
        with self._token_lock:
            if self._elevated_token and time.monotonic() < self._elevated_token_expires_at:
                return self._elevated_token

            try:
                response = self.session.post(
                    f"{self.config.auth_url}/oauth/token",
                    data={
                        "grant_type": "client_credentials",
                        "client_id": self.config.client_id,
                        "client_secret": self.config.client_secret,
                        "scope": " ".join(self.config.scopes),
                    },
                    timeout=self.config.timeout,
                )
                response.raise_for_status()
            except requests.RequestException as e:
                logger.error(f"[AUTH] Elevated token request failed: {e}")
                raise CommerceException(f"Failed to obtain elevated token: {e}") from e

            payload = response.json()
            self._elevated_token = payload["access_token"]
            expires_in = int(payload.get("expires_in", 600))
            self._elevated_token_expires_at = time.monotonic() + max(
                expires_in - self.TOKEN_EXPIRY_MARGIN_SECONDS, 0
            )
            logger.info(f"[AUTH] Obtained elevated token {mask_value(self._elevated_token)}")
            return self._elevated_token

    def _request(
        self,
        method: str,
        path: str,
        access_token: Optional[str] = None,
        params: Optional[Dict[str, Any]] = None,
        json: Optional[Dict[str, Any]] = None,
    ) -> Optional[Dict[str, Any]]:
        """Send a request and decode the JSON body (``None`` for 204)."""
        try:
            if method in self.RETRYABLE_METHODS:
                return self._send_with_retry(method, path, access_token, params, json)
            return self._send(method, path, access_token, params, json)
        except requests.RequestException as e:
            logger.error(f"[COMMERCE] {method} {path} network error: {e}")
            raise CommerceException(f"{method} {path} failed: {e}") from e

    @retry(
        stop=stop_after_attempt(3),
        wait=wait_exponential(multiplier=1, min=2, max=10),
        retry=retry_if_exception_type((requests.ConnectionError, requests.Timeout, TransientCommerceError)),
        reraise=True,
    )
    def _send_with_retry(self, *args):
        return self._send(*args)

    def _send(
        self,
        method: str,
        path: str,
        access_token: Optional[str],
        params: Optional[Dict[str, Any]],
        json: Optional[Dict[str, Any]],
    ) -> Optional[Dict[str, Any]]:
        token = access_token or self._get_elevated_token()
        url = f"{self.config.api_url}{path}"
        logger.debug(f"[COMMERCE] {method} {path} params={params}")

        response = self.session.request(
            method,
            url,
            params={key: value for key, value in (params or {}).items() if value is not None},
            json=json,
            headers={"Authorization": f"Bearer {token}", "Accept": "application/json"},
            timeout=self.config.timeout,
        )

        if response.status_code == 404:
            raise CommerceNotFoundError(f"{method} {path} not found", status_code=404, errors=self._errors(response))
        if response.status_code == 429 or response.status_code >= 500:
            raise TransientCommerceError(
                f"{method} {path} failed with {response.status_code}",
                status_code=response.status_code,
                errors=self._errors(response),
            )
        if response.status_code >= 400:
            errors = self._errors(response)
            logger.warning(f"[COMMERCE] {method} {path} rejected with {response.status_code}: {errors}")
            raise CommerceException(
                f"{method} {path} failed with {response.status_code}",
                status_code=response.status_code,
                errors=errors,
            )

        if response.status_code == 204 or not response.content:
            return None
        return response.json()

    @staticmethod
    def _errors(response: requests.Response) -> list:
        try:
            return response.json().get("Errors", [])
        except ValueError:
            return []

    # ------------------------------------------------------------------
    # Buyers
    # ------------------------------------------------------------------

    def create_buyer(self, buyer: Buyer, access_token: Optional[str] = None) -> Buyer:
        return Buyer.from_dict(self._request("POST", "/buyers", access_token, json=buyer.to_dict()))

    def get_buyer(self, buyer_id: str, access_token: Optional[str] = None) -> Buyer:
        return Buyer.from_dict(self._request("GET", f"/buyers/{buyer_id}", access_token))

    def save_buyer(self, buyer_id: str, buyer: Buyer, access_token: Optional[str] = None) -> Buyer:
        return Buyer.from_dict(self._request("PUT", f"/buyers/{buyer_id}", access_token, json=buyer.to_dict()))

    def patch_buyer(self, buyer_id: str, partial: Dict[str, Any], access_token: Optional[str] = None) -> Buyer:
        return Buyer.from_dict(self._request("PATCH", f"/buyers/{buyer_id}", access_token, json=partial))

    def save_security_profile_assignment(
        self, assignment: SecurityProfileAssignment, access_token: Optional[str] = None
    ) -> None:
        self._request("POST", "/securityprofiles/assignments", access_token, json=assignment.to_dict())

    def save_message_sender_assignment(
        self, assignment: MessageSenderAssignment, access_token: Optional[str] = None
    ) -> None:
        self._request("POST", "/messagesenders/assignments", access_token, json=assignment.to_dict())

    def save_incrementor(
        self, incrementor_id: str, incrementor: Incrementor, access_token: Optional[str] = None
    ) -> Incrementor:
        data = self._request("PUT", f"/incrementors/{incrementor_id}", access_token, json=incrementor.to_dict())
        return Incrementor.from_dict(data)

    def save_catalog_assignment(self, assignment: CatalogAssignment, access_token: Optional[str] = None) -> None:
        self._request("POST", "/catalogs/assignments", access_token, json=assignment.to_dict())

    # ------------------------------------------------------------------
    # Impersonation configs
    # ------------------------------------------------------------------

    def list_impersonation_configs(
        self, filters: Optional[Dict[str, str]] = None, access_token: Optional[str] = None
    ) -> ListPage[ImpersonationConfig]:
        data = self._request("GET", "/impersonationconfig", access_token, params=filters)
        return ListPage.from_dict(data, ImpersonationConfig.from_dict)

    def create_impersonation_config(
        self, config: ImpersonationConfig, access_token: Optional[str] = None
    ) -> ImpersonationConfig:
        data = self._request("POST", "/impersonationconfig", access_token, json=config.to_dict())
        return ImpersonationConfig.from_dict(data)

    def save_impersonation_config(
        self, config_id: str, config: ImpersonationConfig, access_token: Optional[str] = None
    ) -> ImpersonationConfig:
        data = self._request("PUT", f"/impersonationconfig/{config_id}", access_token, json=config.to_dict())
        return ImpersonationConfig.from_dict(data)

    def delete_impersonation_config(self, config_id: str, access_token: Optional[str] = None) -> None:
        self._request("DELETE", f"/impersonationconfig/{config_id}", access_token)

    # ------------------------------------------------------------------
    # Current user
    # ------------------------------------------------------------------

    def get_me(self, access_token: str) -> MeUser:
        return MeUser.from_dict(self._request("GET", "/me", access_token))

    def list_my_user_groups(
        self, access_token: str, filters: Optional[Dict[str, str]] = None
    ) -> ListPage[UserGroup]:
        data = self._request("GET", "/me/usergroups", access_token, params=filters)
        return ListPage.from_dict(data, UserGroup.from_dict)

    # ------------------------------------------------------------------
    # Products
    # ------------------------------------------------------------------

    def list_my_products(
        self,
        access_token: str,
        search: Optional[str] = None,
        search_on: Optional[str] = None,
        search_type: SearchType = SearchType.EXACT_PHRASE_PREFIX,
        sort_by: Optional[str] = None,
        page: Optional[int] = None,
        page_size: Optional[int] = None,
        filters: Optional[Dict[str, str]] = None,
        seller_id: Optional[str] = None,
    ) -> ListPage[Product]:
        params = dict(filters or {})
        params.update(
            {
                "search": search or None,
                "searchOn": search_on or None,
                "searchType": search_type.value,
                "sortBy": sort_by,
                "page": page,
                "pageSize": page_size,
                "sellerID": seller_id,
            }
        )
        data = self._request("GET", "/me/products", access_token, params=params)
        return ListPage.from_dict(data, Product.from_dict)

    def get_my_product(self, product_id: str, access_token: str, seller_id: Optional[str] = None) -> Product:
        data = self._request("GET", f"/me/products/{product_id}", access_token, params={"sellerID": seller_id})
        return Product.from_dict(data)

    def list_my_specs(self, product_id: str, access_token: str) -> ListPage[Spec]:
        data = self._request("GET", f"/me/products/{product_id}/specs", access_token)
        return ListPage.from_dict(data, Spec.from_dict)

    def list_variants(
        self, product_id: str, page: int = 1, page_size: int = 100, access_token: Optional[str] = None
    ) -> ListPage[Variant]:
        data = self._request(
            "GET", f"/products/{product_id}/variants", access_token, params={"page": page, "pageSize": page_size}
        )
        return ListPage.from_dict(data, Variant.from_dict)

    # ------------------------------------------------------------------
    # Orders & payments
    # ------------------------------------------------------------------

    def get_worksheet(
        self, direction: OrderDirection, order_id: str, access_token: Optional[str] = None
    ) -> OrderWorksheet:
        data = self._request("GET", f"/orders/{direction.value}/{order_id}/worksheet", access_token)
        return OrderWorksheet.from_dict(data)

    def list_payments(
        self, direction: OrderDirection, order_id: str, access_token: Optional[str] = None
    ) -> ListPage[Payment]:
        data = self._request("GET", f"/orders/{direction.value}/{order_id}/payments", access_token)
        return ListPage.from_dict(data, Payment.from_dict)

    def create_payment(
        self, direction: OrderDirection, order_id: str, payment: Payment, access_token: Optional[str] = None
    ) -> Payment:
        data = self._request(
            "POST", f"/orders/{direction.value}/{order_id}/payments", access_token, json=payment.to_dict()
        )
        return Payment.from_dict(data)

    def patch_payment(
        self,
        direction: OrderDirection,
        order_id: str,
        payment_id: str,
        partial: Dict[str, Any],
        access_token: Optional[str] = None,
    ) -> Payment:
        data = self._request(
            "PATCH", f"/orders/{direction.value}/{order_id}/payments/{payment_id}", access_token, json=partial
        )
        return Payment.from_dict(data)

    def delete_payment(
        self, direction: OrderDirection, order_id: str, payment_id: str, access_token: Optional[str] = None
    ) -> None:
        self._request("DELETE", f"/orders/{direction.value}/{order_id}/payments/{payment_id}", access_token)

    def create_payment_transaction(
        self,
        direction: OrderDirection,
        order_id: str,
        payment_id: str,
        transaction: PaymentTransaction,
        access_token: Optional[str] = None,
    ) -> Payment:
        data = self._request(
            "POST",
            f"/orders/{direction.value}/{order_id}/payments/{payment_id}/transactions",
            access_token,
            json=transaction.to_dict(),
        )
        return Payment.from_dict(data)
