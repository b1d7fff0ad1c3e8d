from __future__ import annotations

from dataclasses import dataclass, replace
from typing import Optional, Tuple

from ..calculators.amount import calculate_discount_amount, capped_per_unit, product_discount_per_unit
from ..engine.context import Cart, CartItem, Customer, Discount, DiscountContext, DiscountType
from ..engine.eligibility import get_default_runner
from ..rule_types.product_scope import is_item_eligible_for_product_discount

# Reason codes (avoid string typos)
REASON_NOT_ELIGIBLE = "NOT_ELIGIBLE"
REASON_NO_MONETARY_EFFECT = "NO_MONETARY_EFFECT"
REASON_UNKNOWN_TYPE = "UNKNOWN_TYPE"

REASON_MESSAGES = {
    REASON_NOT_ELIGIBLE: "Discount is not eligible (e.g., date, customer, usage, country, or cart rules)",
    REASON_NO_MONETARY_EFFECT: "Discount eligible, but has no monetary effect on current cart contents",
    REASON_UNKNOWN_TYPE: "Unknown discount type",
}


@dataclass(frozen=True)
class DiscountPreview:
    """
    "What would happen" for a single discount on its own.
    Type-specific fields stay None when they do not apply to the discount type.
    """

    original_cart: Cart
    discount_amount: int
    can_apply: bool
    reason_code: Optional[str] = None
    reason: Optional[str] = None
    failed_checks: Tuple[str, ...] = ()

    updated_cart_items: Optional[Tuple[CartItem, ...]] = None
    order_level_discount_in_cents: Optional[int] = None
    shipping_discount_in_cents: Optional[int] = None

    @staticmethod
    def rejected(cart: Cart, reason_code: str, failed_checks: Tuple[str, ...] = ()) -> "DiscountPreview":
        return DiscountPreview(
            original_cart=cart,
            discount_amount=0,
            can_apply=False,
            reason_code=reason_code,
            reason=REASON_MESSAGES[reason_code],
            failed_checks=failed_checks,
        )


def _reprice_items(cart: Cart, discount: Discount) -> Tuple[CartItem, ...]:
    out = []
    for item in cart.items:
        if not is_item_eligible_for_product_discount(discount, item):
            out.append(item)
            continue
        per_unit = capped_per_unit(item, product_discount_per_unit(discount, item))
        out.append(replace(item, price_in_cents=item.price_in_cents - per_unit))
    return tuple(out)


def preview_discount(
    cart: Cart,
    discount: Discount,
    customer: Optional[Customer] = None,
    context: Optional[DiscountContext] = None,
) -> DiscountPreview:
    runner = get_default_runner()
    checks = runner.explain(cart, discount, customer, context)
    failed = tuple(c.check for c in checks if not c.passed)
    if failed:
        return DiscountPreview.rejected(cart, REASON_NOT_ELIGIBLE, failed)

    amount = calculate_discount_amount(discount, cart)
    if amount == 0:
        return DiscountPreview.rejected(cart, REASON_NO_MONETARY_EFFECT)

    base = DiscountPreview(original_cart=cart, discount_amount=amount, can_apply=True)

    if discount.type == DiscountType.PRODUCT:
        return replace(base, updated_cart_items=_reprice_items(cart, discount))
    if discount.type == DiscountType.ORDER:
        return replace(base, order_level_discount_in_cents=amount)
    if discount.type == DiscountType.SHIPPING:
        return replace(base, shipping_discount_in_cents=amount)

    return DiscountPreview.rejected(cart, REASON_UNKNOWN_TYPE)
