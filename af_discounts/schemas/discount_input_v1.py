# af_discounts/schemas/discount_input_v1.py
from __future__ import annotations

from datetime import datetime
from decimal import Decimal
from typing import Any, Dict, Iterable, List, Optional

from pydantic import BaseModel, ConfigDict, Field, NonNegativeInt, constr, model_validator
from pydantic.alias_generators import to_camel

from ..engine.context import (
    AmountType,
    Cart,
    CartItem,
    Customer,
    Discount,
    DiscountContext,
    DiscountType,
    as_utc,
)


class _ContractModel(BaseModel):
    """
    Record shape = camelCase (variantId, priceInCents, startsAt, ...).
    Snake_case names are accepted too. Unknown fields are rejected.
    """

    model_config = ConfigDict(
        extra="forbid",
        alias_generator=to_camel,
        populate_by_name=True,
        frozen=True,
    )


class CartItemV1(_ContractModel):
    variant_id: constr(strip_whitespace=True, min_length=1)  # type: ignore
    collection_ids: List[str] = Field(default_factory=list)
    quantity: int = Field(ge=1)
    price_in_cents: NonNegativeInt

    def to_domain(self) -> CartItem:
        return CartItem(
            variant_id=self.variant_id,
            quantity=self.quantity,
            price_in_cents=self.price_in_cents,
            collection_ids=tuple(self.collection_ids),
        )


class CartV1(_ContractModel):
    store_id: Optional[str] = None
    customer_id: Optional[str] = None
    items: List[CartItemV1] = Field(default_factory=list)
    shipping_in_cents: Optional[NonNegativeInt] = None
    shipping_country_code: Optional[str] = None

    def to_domain(self) -> Cart:
        return Cart(
            items=tuple(i.to_domain() for i in self.items),
            shipping_in_cents=self.shipping_in_cents,
            shipping_country_code=self.shipping_country_code,
            store_id=self.store_id,
            customer_id=self.customer_id,
        )


class CustomerV1(_ContractModel):
    id: constr(strip_whitespace=True, min_length=1)  # type: ignore
    email: Optional[str] = None

    def to_domain(self) -> Customer:
        return Customer(id=self.id, email=self.email)


class DiscountContextV1(_ContractModel):
    now: datetime
    usage_by_customer: Dict[str, NonNegativeInt] = Field(default_factory=dict)
    usage_global: Dict[str, NonNegativeInt] = Field(default_factory=dict)

    def to_domain(self) -> DiscountContext:
        return DiscountContext(
            now=self.now,
            usage_by_customer=dict(self.usage_by_customer),
            usage_global=dict(self.usage_global),
        )


class DiscountV1(_ContractModel):
    id: constr(strip_whitespace=True, min_length=1)  # type: ignore
    code: Optional[str] = None
    description: Optional[str] = None

    type: DiscountType
    amount_type: AmountType
    amount: Decimal = Field(ge=0)

    variants: Optional[List[str]] = None
    collections: Optional[List[str]] = None
    customers: Optional[List[str]] = None

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
    maximum_uses: Optional[NonNegativeInt] = None
    maximum_uses_per_customer: Optional[NonNegativeInt] = None
    maximum_amount_for_shipping_in_cents: Optional[NonNegativeInt] = None

    minimum_purchase_in_cents: Optional[NonNegativeInt] = None
    minimum_quantity: Optional[NonNegativeInt] = None
    country_codes: Optional[List[str]] = None

    starts_at: datetime
    ends_at: Optional[datetime] = None
    is_active: Optional[bool] = None

    @model_validator(mode="after")
    def _check_amount(self) -> "DiscountV1":
        if self.amount_type == AmountType.PERCENTAGE and self.amount > 100:
            raise ValueError("percentage amount must be between 0 and 100")
        if self.amount_type == AmountType.FIXED and self.amount != self.amount.to_integral_value():
            raise ValueError("fixed amount must be a whole number of minor units")
        if self.ends_at is not None and as_utc(self.ends_at) < as_utc(self.starts_at):
            raise ValueError("endsAt must not be before startsAt")
        return self

    def to_domain(self) -> Discount:
        data: Dict[str, Any] = self.model_dump(exclude={"amount"})
        for key in ("variants", "collections", "customers", "country_codes"):
            if data[key] is not None:
                data[key] = tuple(data[key])

        amount = int(self.amount) if self.amount_type == AmountType.FIXED else self.amount
        return Discount(amount=amount, **data)


def parse_discounts(records: Iterable[Dict[str, Any]]) -> List[Discount]:
    return [DiscountV1.model_validate(r).to_domain() for r in records]
