"""
Commerce Platform Records
=========================

Dataclasses for the records owned by the remote commerce platform.

Every record translates to and from the platform's JSON representation
(PascalCase keys, ``ID`` suffixes, free-form ``xp`` extended properties)
through ``from_dict`` / ``to_dict``. Money is always ``Decimal``.
"""

from dataclasses import dataclass, field
from decimal import Decimal
from enum import Enum
from typing import Any, Callable, Dict, Generic, List, Optional, TypeVar

T = TypeVar("T")

# Placeholder the platform replaces with the next value of its buyer incrementor
BUYER_ID_PLACEHOLDER = "{buyerIncrementor}"


def _decimal(value: Any) -> Optional[Decimal]:
    if value is None:
        return None
    return Decimal(str(value))


def _money(value: Optional[Decimal]) -> Optional[str]:
    # Decimals travel as strings so no float rounding sneaks in on the wire
    return None if value is None else str(value)


def _drop_none(data: Dict[str, Any]) -> Dict[str, Any]:
    return {key: value for key, value in data.items() if value is not None}


class OrderDirection(str, Enum):
    """Which side of an order a request is made from."""

    INCOMING = "Incoming"
    OUTGOING = "Outgoing"


class PaymentType(str, Enum):
    """Payment methods supported by the platform."""

    CREDIT_CARD = "CreditCard"
    PURCHASE_ORDER = "PurchaseOrder"
    SPENDING_ACCOUNT = "SpendingAccount"


class SearchType(str, Enum):
    EXACT_PHRASE_PREFIX = "ExactPhrasePrefix"
    ANY_TERM = "AnyTerm"
    ALL_TERMS_ANY_FIELD = "AllTermsAnyField"


# ==============================================================================
# Buyers
# ==============================================================================


@dataclass
class Buyer:
    id: Optional[str] = None
    name: Optional[str] = None
    active: bool = True
    default_catalog_id: Optional[str] = None
    xp: Dict[str, Any] = field(default_factory=dict)

    @property
    def markup_percent(self) -> Optional[int]:
        value = (self.xp or {}).get("MarkupPercent")
        return None if value is None else int(value)

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Buyer":
        return cls(
            id=data.get("ID"),
            name=data.get("Name"),
            active=data.get("Active", True),
            default_catalog_id=data.get("DefaultCatalogID"),
            xp=data.get("xp") or {},
        )

    def to_dict(self) -> Dict[str, Any]:
        return _drop_none(
            {
                "ID": self.id,
                "Name": self.name,
                "Active": self.active,
                "DefaultCatalogID": self.default_catalog_id,
                "xp": self.xp,
            }
        )


@dataclass
class ImpersonationConfig:
    """Lets an administrative client act as a user of a given buyer."""

    id: Optional[str] = None
    buyer_id: Optional[str] = None
    security_profile_id: Optional[str] = None
    client_id: Optional[str] = None
    group_id: Optional[str] = None
    user_id: Optional[str] = None
    impersonation_buyer_id: Optional[str] = None
    impersonation_group_id: Optional[str] = None
    impersonation_user_id: Optional[str] = None

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "ImpersonationConfig":
        return cls(
            id=data.get("ID"),
            buyer_id=data.get("BuyerID"),
            security_profile_id=data.get("SecurityProfileID"),
            client_id=data.get("ClientID"),
            group_id=data.get("GroupID"),
            user_id=data.get("UserID"),
            impersonation_buyer_id=data.get("ImpersonationBuyerID"),
            impersonation_group_id=data.get("ImpersonationGroupID"),
            impersonation_user_id=data.get("ImpersonationUserID"),
        )

    def to_dict(self) -> Dict[str, Any]:
        return _drop_none(
            {
                "ID": self.id,
                "BuyerID": self.buyer_id,
                "SecurityProfileID": self.security_profile_id,
                "ClientID": self.client_id,
                "GroupID": self.group_id,
                "UserID": self.user_id,
                "ImpersonationBuyerID": self.impersonation_buyer_id,
                "ImpersonationGroupID": self.impersonation_group_id,
                "ImpersonationUserID": self.impersonation_user_id,
            }
        )


@dataclass
class SecurityProfileAssignment:
    security_profile_id: str
    buyer_id: Optional[str] = None

    def to_dict(self) -> Dict[str, Any]:
        return _drop_none({"SecurityProfileID": self.security_profile_id, "BuyerID": self.buyer_id})


@dataclass
class MessageSenderAssignment:
    message_sender_id: str
    buyer_id: Optional[str] = None

    def to_dict(self) -> Dict[str, Any]:
        return _drop_none({"MessageSenderID": self.message_sender_id, "BuyerID": self.buyer_id})


@dataclass
class CatalogAssignment:
    catalog_id: str
    buyer_id: str
    view_all_categories: bool = True
    view_all_products: bool = False

    def to_dict(self) -> Dict[str, Any]:
        return {
            "CatalogID": self.catalog_id,
            "BuyerID": self.buyer_id,
            "ViewAllCategories": self.view_all_categories,
            "ViewAllProducts": self.view_all_products,
        }


@dataclass
class Incrementor:
    """Platform counter used to mint sequential, zero-padded IDs."""

    id: str
    name: str
    last_number: int = 0
    left_padding_count: int = 0

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Incrementor":
        return cls(
            id=data.get("ID"),
            name=data.get("Name"),
            last_number=data.get("LastNumber", 0),
            left_padding_count=data.get("LeftPaddingCount", 0),
        )

    def to_dict(self) -> Dict[str, Any]:
        return {
            "ID": self.id,
            "Name": self.name,
            "LastNumber": self.last_number,
            "LeftPaddingCount": self.left_padding_count,
        }


# ==============================================================================
# Users
# ==============================================================================


@dataclass
class MeUser:
    id: Optional[str] = None
    username: Optional[str] = None
    email: Optional[str] = None
    buyer_id: Optional[str] = None

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "MeUser":
        return cls(
            id=data.get("ID"),
            username=data.get("Username"),
            email=data.get("Email"),
            buyer_id=(data.get("Buyer") or {}).get("ID"),
        )


@dataclass
class UserGroup:
    id: Optional[str] = None
    name: Optional[str] = None
    xp: Dict[str, Any] = field(default_factory=dict)

    @property
    def group_type(self) -> Optional[str]:
        return (self.xp or {}).get("Type")

    @property
    def currency(self) -> Optional[str]:
        return (self.xp or {}).get("Currency")

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "UserGroup":
        return cls(id=data.get("ID"), name=data.get("Name"), xp=data.get("xp") or {})


# ==============================================================================
# Products
# ==============================================================================


@dataclass
class PriceBreak:
    quantity: int
    price: Decimal

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "PriceBreak":
        return cls(quantity=data.get("Quantity", 1), price=_decimal(data.get("Price")) or Decimal("0"))

    def to_dict(self) -> Dict[str, Any]:
        return {"Quantity": self.quantity, "Price": _money(self.price)}


@dataclass
class PriceSchedule:
    id: Optional[str] = None
    name: Optional[str] = None
    min_quantity: int = 1
    max_quantity: Optional[int] = None
    price_breaks: List[PriceBreak] = field(default_factory=list)

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "PriceSchedule":
        return cls(
            id=data.get("ID"),
            name=data.get("Name"),
            min_quantity=data.get("MinQuantity", 1),
            max_quantity=data.get("MaxQuantity"),
            price_breaks=[PriceBreak.from_dict(item) for item in data.get("PriceBreaks") or []],
        )

    def to_dict(self) -> Dict[str, Any]:
        return {
            "ID": self.id,
            "Name": self.name,
            "MinQuantity": self.min_quantity,
            "MaxQuantity": self.max_quantity,
            "PriceBreaks": [price_break.to_dict() for price_break in self.price_breaks],
        }


@dataclass
class Product:
    id: Optional[str] = None
    name: Optional[str] = None
    description: Optional[str] = None
    active: bool = True
    price_schedule: Optional[PriceSchedule] = None
    xp: Dict[str, Any] = field(default_factory=dict)

    @property
    def currency(self) -> Optional[str]:
        return (self.xp or {}).get("Currency")

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Product":
        schedule = data.get("PriceSchedule")
        return cls(
            id=data.get("ID"),
            name=data.get("Name"),
            description=data.get("Description"),
            active=data.get("Active", True),
            price_schedule=PriceSchedule.from_dict(schedule) if schedule else None,
            xp=data.get("xp") or {},
        )

    def to_dict(self) -> Dict[str, Any]:
        return {
            "ID": self.id,
            "Name": self.name,
            "Description": self.description,
            "Active": self.active,
            "PriceSchedule": self.price_schedule.to_dict() if self.price_schedule else None,
            "xp": self.xp,
        }


@dataclass
class SpecOption:
    id: Optional[str] = None
    value: Optional[str] = None
    price_markup: Optional[Decimal] = None
    price_markup_type: Optional[str] = None

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "SpecOption":
        return cls(
            id=data.get("ID"),
            value=data.get("Value"),
            price_markup=_decimal(data.get("PriceMarkup")),
            price_markup_type=data.get("PriceMarkupType"),
        )

    def to_dict(self) -> Dict[str, Any]:
        return {
            "ID": self.id,
            "Value": self.value,
            "PriceMarkup": _money(self.price_markup),
            "PriceMarkupType": self.price_markup_type,
        }


@dataclass
class Spec:
    id: Optional[str] = None
    name: Optional[str] = None
    options: List[SpecOption] = field(default_factory=list)

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Spec":
        return cls(
            id=data.get("ID"),
            name=data.get("Name"),
            options=[SpecOption.from_dict(item) for item in data.get("Options") or []],
        )

    def to_dict(self) -> Dict[str, Any]:
        return {"ID": self.id, "Name": self.name, "Options": [option.to_dict() for option in self.options]}


@dataclass
class Variant:
    id: Optional[str] = None
    name: Optional[str] = None
    active: bool = True
    specs: List[Dict[str, Any]] = field(default_factory=list)
    xp: Dict[str, Any] = field(default_factory=dict)

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Variant":
        return cls(
            id=data.get("ID"),
            name=data.get("Name"),
            active=data.get("Active", True),
            specs=data.get("Specs") or [],
            xp=data.get("xp") or {},
        )

    def to_dict(self) -> Dict[str, Any]:
        return {"ID": self.id, "Name": self.name, "Active": self.active, "Specs": self.specs, "xp": self.xp}


# ==============================================================================
# Orders & Payments
# ==============================================================================


@dataclass
class Order:
    id: str
    total: Decimal
    currency: Optional[str] = None
    from_user_id: Optional[str] = None

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Order":
        return cls(
            id=data.get("ID"),
            total=_decimal(data.get("Total")) or Decimal("0"),
            currency=data.get("Currency"),
            from_user_id=data.get("FromUserID"),
        )


@dataclass
class OrderWorksheet:
    """Order snapshot with computed totals; the source of truth for payment amounts."""

    order: Order

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "OrderWorksheet":
        return cls(order=Order.from_dict(data.get("Order") or {}))


@dataclass
class PaymentTransaction:
    type: str
    id: Optional[str] = None
    date_executed: Optional[str] = None
    amount: Optional[Decimal] = None
    succeeded: bool = False
    result_code: Optional[str] = None
    result_message: Optional[str] = None
    xp: Dict[str, Any] = field(default_factory=dict)

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "PaymentTransaction":
        return cls(
            id=data.get("ID"),
            type=data.get("Type"),
            date_executed=data.get("DateExecuted"),
            amount=_decimal(data.get("Amount")),
            succeeded=data.get("Succeeded", False),
            result_code=data.get("ResultCode"),
            result_message=data.get("ResultMessage"),
            xp=data.get("xp") or {},
        )

    def to_dict(self) -> Dict[str, Any]:
        return _drop_none(
            {
                "ID": self.id,
                "Type": self.type,
                "DateExecuted": self.date_executed,
                "Amount": _money(self.amount),
                "Succeeded": self.succeeded,
                "ResultCode": self.result_code,
                "ResultMessage": self.result_message,
                "xp": self.xp,
            }
        )


@dataclass
class Payment:
    type: PaymentType
    id: Optional[str] = None
    amount: Optional[Decimal] = None
    credit_card_id: Optional[str] = None
    accepted: bool = False
    xp: Dict[str, Any] = field(default_factory=dict)
    transactions: List[PaymentTransaction] = field(default_factory=list)

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Payment":
        return cls(
            id=data.get("ID"),
            type=PaymentType(data.get("Type")),
            amount=_decimal(data.get("Amount")),
            credit_card_id=data.get("CreditCardID"),
            accepted=bool(data.get("Accepted", False)),
            xp=data.get("xp") or {},
            transactions=[PaymentTransaction.from_dict(item) for item in data.get("Transactions") or []],
        )

    def to_dict(self) -> Dict[str, Any]:
        # Transactions are written through their own endpoint, never with the payment
        return _drop_none(
            {
                "ID": self.id,
                "Type": self.type.value,
                "Amount": _money(self.amount),
                "CreditCardID": self.credit_card_id,
                "Accepted": self.accepted,
                "xp": self.xp,
            }
        )


# ==============================================================================
# Listing
# ==============================================================================


@dataclass
class ListMeta:
    page: int = 1
    page_size: int = 20
    total_count: int = 0
    total_pages: int = 0
    facets: List[Dict[str, Any]] = field(default_factory=list)

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "ListMeta":
        return cls(
            page=data.get("Page", 1),
            page_size=data.get("PageSize", 20),
            total_count=data.get("TotalCount", 0),
            total_pages=data.get("TotalPages", 0),
            facets=data.get("Facets") or [],
        )

    def to_dict(self) -> Dict[str, Any]:
        return {
            "Page": self.page,
            "PageSize": self.page_size,
            "TotalCount": self.total_count,
            "TotalPages": self.total_pages,
            "Facets": self.facets,
        }


@dataclass
class ListPage(Generic[T]):
    items: List[T] = field(default_factory=list)
    meta: ListMeta = field(default_factory=ListMeta)

    @classmethod
    def from_dict(cls, data: Dict[str, Any], item_parser: Callable[[Dict[str, Any]], T]) -> "ListPage[T]":
        return cls(
            items=[item_parser(item) for item in data.get("Items") or []],
            meta=ListMeta.from_dict(data.get("Meta") or {}),
        )
