"""
Commerce Client Interface
=========================

Abstract base class defining the contract for the remote commerce platform.

Every method takes an optional ``access_token``. When it is ``None`` the
client authenticates with its own elevated (service) identity; otherwise the
request runs as the user who owns the token.
"""

from abc import ABC, abstractmethod
from typing import Any, Dict, Optional

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


class CommerceClientInterface(ABC):
    """
    Abstract interface for commerce platform operations.

    Concrete implementations:
        - OrderCloudClient: REST client for an OrderCloud-compatible API
    """

    # Buyers

    @abstractmethod
    def create_buyer(self, buyer: Buyer, access_token: Optional[str] = None) -> Buyer:
        pass

    @abstractmethod
    def get_buyer(self, buyer_id: str, access_token: Optional[str] = None) -> Buyer:
        pass

    @abstractmethod
    def save_buyer(self, buyer_id: str, buyer: Buyer, access_token: Optional[str] = None) -> Buyer:
        pass

    @abstractmethod
    def patch_buyer(self, buyer_id: str, partial: Dict[str, Any], access_token: Optional[str] = None) -> Buyer:
        pass

    # Buyer provisioning

    @abstractmethod
    def save_security_profile_assignment(
        self, assignment: SecurityProfileAssignment, access_token: Optional[str] = None
    ) -> None:
        pass

    @abstractmethod
    def save_message_sender_assignment(
        self, assignment: MessageSenderAssignment, access_token: Optional[str] = None
    ) -> None:
        pass

    @abstractmethod
    def save_incrementor(
        self, incrementor_id: str, incrementor: Incrementor, access_token: Optional[str] = None
    ) -> Incrementor:
        pass

    @abstractmethod
    def save_catalog_assignment(self, assignment: CatalogAssignment, access_token: Optional[str] = None) -> None:
        pass

    # Impersonation configs

    @abstractmethod
    def list_impersonation_configs(
        self, filters: Optional[Dict[str, str]] = None, access_token: Optional[str] = None
    ) -> ListPage[ImpersonationConfig]:
        pass

    @abstractmethod
    def create_impersonation_config(
        self, config: ImpersonationConfig, access_token: Optional[str] = None
    ) -> ImpersonationConfig:
        pass

    @abstractmethod
    def save_impersonation_config(
        self, config_id: str, config: ImpersonationConfig, access_token: Optional[str] = None
    ) -> ImpersonationConfig:
        pass

    @abstractmethod
    def delete_impersonation_config(self, config_id: str, access_token: Optional[str] = None) -> None:
        pass

    # Current user

    @abstractmethod
    def get_me(self, access_token: str) -> MeUser:
        pass

    @abstractmethod
    def list_my_user_groups(
        self, access_token: str, filters: Optional[Dict[str, str]] = None
    ) -> ListPage[UserGroup]:
        pass

    # Products

    @abstractmethod
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
        """
        List the products visible to the token's user.

        Raises:
            CommerceException: If the request fails
        """
        pass

    @abstractmethod
    def get_my_product(self, product_id: str, access_token: str, seller_id: Optional[str] = None) -> Product:
        pass

    @abstractmethod
    def list_my_specs(self, product_id: str, access_token: str) -> ListPage[Spec]:
        pass

    @abstractmethod
    def list_variants(
        self, product_id: str, page: int = 1, page_size: int = 100, access_token: Optional[str] = None
    ) -> ListPage[Variant]:
        pass

    # Orders & payments

    @abstractmethod
    def get_worksheet(
        self, direction: OrderDirection, order_id: str, access_token: Optional[str] = None
    ) -> OrderWorksheet:
        pass

    @abstractmethod
    def list_payments(
        self, direction: OrderDirection, order_id: str, access_token: Optional[str] = None
    ) -> ListPage[Payment]:
        pass

    @abstractmethod
    def create_payment(
        self, direction: OrderDirection, order_id: str, payment: Payment, access_token: Optional[str] = None
    ) -> Payment:
        pass

    @abstractmethod
    def patch_payment(
        self,
        direction: OrderDirection,
        order_id: str,
        payment_id: str,
        partial: Dict[str, Any],
        access_token: Optional[str] = None,
    ) -> Payment:
        pass

    @abstractmethod
    def delete_payment(
        self, direction: OrderDirection, order_id: str, payment_id: str, access_token: Optional[str] = None
    ) -> None:
        pass

    @abstractmethod
    def create_payment_transaction(
        self,
        direction: OrderDirection,
        order_id: str,
        payment_id: str,
        transaction: PaymentTransaction,
        access_token: Optional[str] = None,
    ) -> Payment:
        pass


class CommerceException(Exception):
    """Base exception for commerce platform operations."""

    def __init__(self, message: str, status_code: Optional[int] = None, errors: Optional[list] = None):
        super().__init__(message)
        self.status_code = status_code
        self.errors = errors or []


class CommerceNotFoundError(CommerceException):
    """Raised when the platform answers 404 for the requested record."""

    pass
