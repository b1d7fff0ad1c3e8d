from __future__ import annotations

from dataclasses import dataclass, field, replace
from typing import Any, Dict, List, Optional, Sequence, Tuple

from ..calculators.amount import calculate_discount_amount, capped_per_unit, product_discount_per_unit
from ..core.logging_config import get_logger
from ..rule_types.product_scope import is_item_eligible_for_product_discount
from .context import Cart, CartItem, Discount, DiscountType
from .selection import Selection, pick_best


# Stage names (fixed pipeline order)
STAGE_PRODUCT = "PRODUCT"
STAGE_ORDER = "ORDER"
STAGE_SHIPPING = "SHIPPING"


@dataclass(frozen=True)
class StageDecision:
    """
    One entry per pipeline stage.
    - candidates: ids that entered the stage
    - excluded: ids dropped by the combination policy before selection
    - selected: winning id (order/shipping) or None
    """

    stage: str
    value: int
    candidates: Tuple[str, ...] = ()
    excluded: Tuple[str, ...] = ()
    selected: Optional[str] = None
    meta: Dict[str, Any] = field(default_factory=dict)


@dataclass(frozen=True)
class StackingResult:
    updated_cart_items: Tuple[CartItem, ...]
    order_level_discount_in_cents: int
    shipping_discount_in_cents: int
    applied_discounts: Tuple[Discount, ...]

    product_discount_in_cents: int = 0
    subtotal_after_product_discounts: int = 0
    decisions: Tuple[StageDecision, ...] = ()


def _ids(discounts: Sequence[Discount]) -> Tuple[str, ...]:
    return tuple(d.id for d in discounts)


def best_product_discount_per_unit(item: CartItem, product_discounts: Sequence[Discount]) -> int:
    """Best single discount per unit (never summed), capped at the unit price."""
    best = 0
    for discount in product_discounts:
        if not is_item_eligible_for_product_discount(discount, item):
            continue
        current = product_discount_per_unit(discount, item)
        if current > best:
            best = current
    return capped_per_unit(item, best)


def run_product_stage(cart: Cart, product_discounts: Sequence[Discount]) -> Tuple[Tuple[CartItem, ...], StageDecision]:
    total = 0
    updated: List[CartItem] = []
    for item in cart.items:
        per_unit = best_product_discount_per_unit(item, product_discounts)
        total += per_unit * item.quantity
        updated.append(replace(item, price_in_cents=item.price_in_cents - per_unit))

    decision = StageDecision(
        stage=STAGE_PRODUCT,
        value=total,
        candidates=_ids(product_discounts),
    )
    return tuple(updated), decision


def run_order_stage(
    cart: Cart,
    order_discounts: Sequence[Discount],
    product_applied: bool,
    subtotal_after_products: int,
) -> Tuple[Selection, StageDecision]:
    excluded = [d for d in order_discounts if d.policy.excluded_after_product(product_applied)]
    allowed = [d for d in order_discounts if not d.policy.excluded_after_product(product_applied)]

    selection = pick_best(
        allowed,
        lambda d: calculate_discount_amount(d, cart, subtotal_after_products),
    )

    decision = StageDecision(
        stage=STAGE_ORDER,
        value=selection.value,
        candidates=_ids(order_discounts),
        excluded=_ids(excluded),
        selected=selection.discount.id if selection.selected else None,
        meta={"subtotal": subtotal_after_products},
    )
    return selection, decision


def run_shipping_stage(
    cart: Cart,
    shipping_discounts: Sequence[Discount],
    order_selected: bool,
) -> Tuple[Selection, StageDecision]:
    excluded = [d for d in shipping_discounts if d.policy.excluded_after_order(order_selected)]
    allowed = [d for d in shipping_discounts if not d.policy.excluded_after_order(order_selected)]

    # Verzendkorting altijd tegen de originele cart
    selection = pick_best(allowed, lambda d: calculate_discount_amount(d, cart))

    decision = StageDecision(
        stage=STAGE_SHIPPING,
        value=selection.value,
        candidates=_ids(shipping_discounts),
        excluded=_ids(excluded),
        selected=selection.discount.id if selection.selected else None,
        meta={"shipping": cart.shipping_in_cents or 0},
    )
    return selection, decision


def apply_discounts(cart: Cart, discounts: Sequence[Discount]) -> StackingResult:
    """
    Price a cart with an already-eligible discount list.

    Pipeline (fixed): product -> order -> shipping.
      1. per item the best PRODUCT discount wins (capped at unit price)
      2. ORDER: drop non-combinable when a product discount changed a price,
         best value against the post-product subtotal
      3. SHIPPING: drop non-combinable when an order discount was selected,
         best value against the original cart

    applied_discounts lists every in-scope PRODUCT discount (not only the
    per-item winners) once any product price changed, then the order and
    shipping winners.
    """
    product_discounts = [d for d in discounts if d.type == DiscountType.PRODUCT]
    order_discounts = [d for d in discounts if d.type == DiscountType.ORDER]
    shipping_discounts = [d for d in discounts if d.type == DiscountType.SHIPPING]

    updated_items, product_decision = run_product_stage(cart, product_discounts)
    subtotal_after = sum(item.line_total_in_cents for item in updated_items)
    product_applied = product_decision.value > 0

    order_sel, order_decision = run_order_stage(
        replace(cart, items=updated_items),
        order_discounts,
        product_applied,
        subtotal_after,
    )
    shipping_sel, shipping_decision = run_shipping_stage(cart, shipping_discounts, order_sel.selected)

    applied: List[Discount] = []
    if product_applied:
        applied.extend(
            d
            for d in product_discounts
            if any(is_item_eligible_for_product_discount(d, item) for item in cart.items)
        )
    if order_sel.selected:
        applied.append(order_sel.discount)
    if shipping_sel.selected:
        applied.append(shipping_sel.discount)

    get_logger("stacking").debug(
        "discounts_applied",
        product_discount=product_decision.value,
        order_discount=order_sel.value,
        order_discount_id=order_decision.selected,
        shipping_discount=shipping_sel.value,
        shipping_discount_id=shipping_decision.selected,
        excluded_order=list(order_decision.excluded),
        excluded_shipping=list(shipping_decision.excluded),
    )

    return StackingResult(
        updated_cart_items=updated_items,
        order_level_discount_in_cents=order_sel.value,
        shipping_discount_in_cents=shipping_sel.value,
        applied_discounts=tuple(applied),
        product_discount_in_cents=product_decision.value,
        subtotal_after_product_discounts=subtotal_after,
        decisions=(product_decision, order_decision, shipping_decision),
    )
