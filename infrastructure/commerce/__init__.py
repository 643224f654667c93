"""
Commerce Platform Abstraction Layer
===================================

Client for the remote commerce platform that owns buyers, products, orders
and payments, plus the dataclasses describing its records.
"""

from .factory import CommerceClientFactory
from .interface import CommerceClientInterface, CommerceException, CommerceNotFoundError
from .models import (
    BUYER_ID_PLACEHOLDER,
    Buyer,
    CatalogAssignment,
    ImpersonationConfig,
    Incrementor,
    ListMeta,
    ListPage,
    MeUser,
    MessageSenderAssignment,
    Order,
    OrderDirection,
    OrderWorksheet,
    Payment,
    PaymentTransaction,
    PaymentType,
    PriceBreak,
    PriceSchedule,
    Product,
    SearchType,
    SecurityProfileAssignment,
    Spec,
    SpecOption,
    UserGroup,
    Variant,
)
from .ordercloud_client import OrderCloudClient

__all__ = [
    "CommerceClientInterface",
    "CommerceClientFactory",
    "CommerceException",
    "CommerceNotFoundError",
    "OrderCloudClient",
    "BUYER_ID_PLACEHOLDER",
    "Buyer",
    "CatalogAssignment",
    "ImpersonationConfig",
    "Incrementor",
    "ListMeta",
    "ListPage",
    "MeUser",
    "MessageSenderAssignment",
    "Order",
    "OrderDirection",
    "OrderWorksheet",
    "Payment",
    "PaymentTransaction",
    "PaymentType",
    "PriceBreak",
    "PriceSchedule",
    "Product",
    "SearchType",
    "SecurityProfileAssignment",
    "Spec",
    "SpecOption",
    "UserGroup",
    "Variant",
]
