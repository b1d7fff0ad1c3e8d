from __future__ import annotations

from decimal import ROUND_FLOOR, Decimal
from typing import Optional, Union

from ..engine.context import AmountType, Cart, CartItem, Discount, DiscountType
from ..rule_types.product_scope import is_item_eligible_for_product_discount

D = Decimal

HALF = D("0.5")
HUNDRED = D("100")


def to_decimal(x: Union[int, float, str, D]) -> D:
    return x if isinstance(x, D) else D(str(x))


def round_half_up(x: D) -> int:
    """
    Round to whole cents, ties toward +infinity (floor(x + 0.5)).
    Geen banker's rounding: .5 gaat altijd omhoog.
    """
    return int((x + HALF).to_integral_value(rounding=ROUND_FLOOR))


def percentage_of(base_in_cents: int, pct: Union[int, D]) -> int:
    return round_half_up(D(base_in_cents) * to_decimal(pct) / HUNDRED)


def fixed_amount(discount: Discount) -> int:
    """
    FIXED amounts are whole minor units; DiscountV1 rejects anything else.
    A fractional amount on a hand-built Discount is rounded half-up, so the
    result is always integer cents.
    """
    return round_half_up(to_decimal(discount.amount))


def product_discount_per_unit(discount: Discount, item: CartItem) -> int:
    """Raw per-unit value, not yet capped at the unit price."""
    if discount.amount_type == AmountType.PERCENTAGE:
        return percentage_of(item.price_in_cents, discount.amount)
    return fixed_amount(discount)


def capped_per_unit(item: CartItem, per_unit: int) -> int:
    return max(0, min(item.price_in_cents, per_unit))


def calc_product_amount(discount: Discount, cart: Cart) -> int:
    total = 0
    for item in cart.items:
        if not is_item_eligible_for_product_discount(discount, item):
            continue
        per_unit = capped_per_unit(item, product_discount_per_unit(discount, item))
        total += per_unit * item.quantity
    return total


def calc_order_amount(discount: Discount, cart: Cart, subtotal_override: Optional[int] = None) -> int:
    subtotal = subtotal_override if subtotal_override is not None else cart.subtotal_in_cents

    if discount.amount_type == AmountType.PERCENTAGE:
        amount = percentage_of(subtotal, discount.amount)
    else:
        amount = fixed_amount(discount)

    return max(0, min(subtotal, amount))


def calc_shipping_amount(discount: Discount, cart: Cart) -> int:
    shipping = cart.shipping_in_cents or 0

    # PERCENTAGE shipping = altijd volledige verzendkosten; percentage wordt genegeerd
    amount = shipping
    if discount.amount_type == AmountType.FIXED:
        amount = min(shipping, fixed_amount(discount))

    if discount.maximum_amount_for_shipping_in_cents:
        amount = min(amount, discount.maximum_amount_for_shipping_in_cents)

    return max(0, amount)


def calculate_discount_amount(
    discount: Discount,
    cart: Cart,
    subtotal_override: Optional[int] = None,
) -> int:
    """
    Monetary value (integer cents) a qualifying discount would remove.

    - PRODUCT: sum over eligible items of min(unit price, per-unit discount) * qty
    - ORDER: against subtotal_override (post-product subtotal) or the cart subtotal
    - SHIPPING: against the cart's shipping cost, optionally capped
    """
    if discount.type == DiscountType.PRODUCT:
        return calc_product_amount(discount, cart)
    if discount.type == DiscountType.ORDER:
        return calc_order_amount(discount, cart, subtotal_override)
    if discount.type == DiscountType.SHIPPING:
        return calc_shipping_amount(discount, cart)
    return 0
