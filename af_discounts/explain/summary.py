from __future__ import annotations

from dataclasses import dataclass
from typing import Optional, Sequence, Tuple

from ..calculators.amount import calculate_discount_amount
from ..engine.context import Cart, Customer, Discount, DiscountContext
from ..engine.eligibility import evaluate_discounts
from ..engine.stacking import StackingResult, apply_discounts


@dataclass(frozen=True)
class BreakdownRow:
    """
    amount = standalone value of this discount on the original cart.
    It can exceed what stacking actually let it take (one winner per scope).
    """

    discount: Discount
    type: str
    eligible: bool
    applied: bool
    amount: int


@dataclass(frozen=True)
class DiscountSummary:
    total_discount_amount: int
    product_discount_amount: int
    order_discount_amount: int
    shipping_discount_amount: int
    applied_discount_count: int
    eligible_discount_count: int
    discount_breakdown: Tuple[BreakdownRow, ...]


def _contains(discounts: Sequence[Discount], discount: Discount) -> bool:
    # identity, niet gelijkheid: twee identieke records blijven twee regels
    return any(d is discount for d in discounts)


def _product_diff(cart: Cart, stacked: StackingResult) -> int:
    total = 0
    for before, after in zip(cart.items, stacked.updated_cart_items):
        total += (before.price_in_cents - after.price_in_cents) * after.quantity
    return total


def get_discount_summary(
    cart: Cart,
    discounts: Sequence[Discount],
    customer: Optional[Customer] = None,
    context: Optional[DiscountContext] = None,
) -> DiscountSummary:
    eligible = evaluate_discounts(cart, discounts, customer, context)
    stacked = apply_discounts(cart, eligible)

    rows = []
    for discount in discounts:
        is_eligible = _contains(eligible, discount)
        rows.append(
            BreakdownRow(
                discount=discount,
                type=getattr(discount.type, "value", discount.type),
                eligible=is_eligible,
                applied=_contains(stacked.applied_discounts, discount),
                amount=calculate_discount_amount(discount, cart) if is_eligible else 0,
            )
        )

    product_amount = _product_diff(cart, stacked)
    return DiscountSummary(
        total_discount_amount=(
            product_amount + stacked.order_level_discount_in_cents + stacked.shipping_discount_in_cents
        ),
        product_discount_amount=product_amount,
        order_discount_amount=stacked.order_level_discount_in_cents,
        shipping_discount_amount=stacked.shipping_discount_in_cents,
        applied_discount_count=len(stacked.applied_discounts),
        eligible_discount_count=len(eligible),
        discount_breakdown=tuple(rows),
    )
