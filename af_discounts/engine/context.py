from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime, timezone
from decimal import Decimal
from enum import Enum
from typing import TYPE_CHECKING, Any, Mapping, Optional, Sequence, Union

if TYPE_CHECKING:
    from .policy import CombinationPolicy

D = Decimal


# -----------------------------
# Enums
# -----------------------------


class DiscountType(str, Enum):
    PRODUCT = "PRODUCT"
    ORDER = "ORDER"
    SHIPPING = "SHIPPING"


class AmountType(str, Enum):
    PERCENTAGE = "PERCENTAGE"
    FIXED = "FIXED"


# -----------------------------
# Input records (read-only)
# -----------------------------


@dataclass(frozen=True)
class Discount:
    """
    Promotional rule.
    - amount: percentage points (10 = 10%) for PERCENTAGE, minor units for FIXED
    - restrictors (variants/collections/customers/country_codes): None/empty = unrestricted
    - combine flags: only an explicit False excludes (see CombinationPolicy)
    """

    id: str
    type: DiscountType
    amount_type: AmountType
    amount: Union[int, D]
    starts_at: datetime

    code: Optional[str] = None
    description: Optional[str] = None

    variants: Optional[Sequence[str]] = None
    collections: Optional[Sequence[str]] = None
    customers: Optional[Sequence[str]] = None
    country_codes: Optional[Sequence[str]] = None

    apply_to_all_products: Optional[bool] = None
    apply_to_order: Optional[bool] = None
    apply_to_shipping: Optional[bool] = None
    apply_to_all_countries: Optional[bool] = None

    is_automatic: Optional[bool] = None
    combine_with_product_discounts: Optional[bool] = None
    combine_with_order_discounts: Optional[bool] = None
    combine_with_shipping_discounts: Optional[bool] = None
    exclusive: Optional[bool] = None

    limit_once_per_customer: Optional[bool] = None
    maximum_uses: Optional[int] = None
    maximum_uses_per_customer: Optional[int] = None
    maximum_amount_for_shipping_in_cents: Optional[int] = None

    minimum_purchase_in_cents: Optional[int] = None
    minimum_quantity: Optional[int] = None

    ends_at: Optional[datetime] = None
    is_active: Optional[bool] = None

    @property
    def usage_key(self) -> str:
        # 1 bron voor usage counters (eligibility + reporting)
        return self.code or self.id

    @property
    def policy(self) -> "CombinationPolicy":
        from .policy import CombinationPolicy

        return CombinationPolicy.from_discount(self)


@dataclass(frozen=True)
class CartItem:
    variant_id: str
    quantity: int
    price_in_cents: int  # per unit
    collection_ids: Sequence[str] = field(default_factory=tuple)

    @property
    def line_total_in_cents(self) -> int:
        return self.price_in_cents * self.quantity


@dataclass(frozen=True)
class Cart:
    items: Sequence[CartItem] = field(default_factory=tuple)
    shipping_in_cents: Optional[int] = None
    shipping_country_code: Optional[str] = None
    store_id: Optional[str] = None
    customer_id: Optional[str] = None

    @property
    def subtotal_in_cents(self) -> int:
        return sum(item.line_total_in_cents for item in self.items)

    @property
    def total_quantity(self) -> int:
        return sum(item.quantity for item in self.items)


@dataclass(frozen=True)
class Customer:
    id: str
    email: Optional[str] = None


@dataclass(frozen=True)
class DiscountContext:
    """
    Snapshot. Counters are keyed by Discount.usage_key and only read here;
    incrementing after redemption is the caller's job.
    """

    now: datetime
    usage_by_customer: Mapping[str, int] = field(default_factory=dict)
    usage_global: Mapping[str, int] = field(default_factory=dict)


# -----------------------------
# Runtime (per evaluation)
# -----------------------------


def utc_now() -> datetime:
    return datetime.now(timezone.utc)


def as_utc(dt: datetime) -> datetime:
    """Naive datetimes are read as UTC so they compare with aware ones."""
    if dt.tzinfo is None:
        return dt.replace(tzinfo=timezone.utc)
    return dt


@dataclass(frozen=True)
class EvaluationContext:
    """
    Everything an eligibility rule may look at for one evaluation call.
    `now` is resolved once (context.now, else wall-clock) so all rules agree.
    """

    cart: Cart
    customer: Optional[Customer] = None
    context: Optional[DiscountContext] = None
    now: datetime = field(default_factory=utc_now)

    @classmethod
    def build(
        cls,
        cart: Cart,
        customer: Optional[Customer] = None,
        context: Optional[DiscountContext] = None,
    ) -> "EvaluationContext":
        now = context.now if context is not None and context.now else utc_now()
        return cls(cart=cart, customer=customer, context=context, now=as_utc(now))

    @property
    def customer_id(self) -> Optional[str]:
        return self.customer.id if self.customer is not None else None

    def describe(self) -> Mapping[str, Any]:
        return {
            "now": self.now.isoformat(),
            "customer_id": self.customer_id,
            "country": self.cart.shipping_country_code,
            "items": len(self.cart.items),
        }
