from dataclasses import dataclass, field
from typing import Dict, List, Optional

from infrastructure.commerce import PriceSchedule, Product, Spec, Variant


@dataclass
class MeProductListArgs:
    """Query for the buyer-facing product listing."""

    search: Optional[str] = None
    sort_by: Optional[str] = None
    page: Optional[int] = None
    page_size: Optional[int] = None
    filters: Dict[str, str] = field(default_factory=dict)


@dataclass
class SuperMeProduct:
    """A product with everything the product detail page needs, priced for the buyer."""

    product: Product
    price_schedule: Optional[PriceSchedule] = None
    specs: List[Spec] = field(default_factory=list)
    variants: List[Variant] = field(default_factory=list)


@dataclass
class BuyerRequest:
    first_name: str
    last_name: str
    email: str
    buyer_location: str = ""
    phone: str = ""
    comments: str = ""


@dataclass
class ContactSupplierBody:
    """A buyer asking the supplier for more information about a product."""

    product_id: str
    product_name: str
    buyer_request: BuyerRequest
