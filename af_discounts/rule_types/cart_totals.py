from __future__ import annotations

from typing import Optional

from ..engine.context import Cart, Discount
from .base import CheckResult, EligibilityRule, register


def _cart_total_failure(discount: Discount, cart: Cart) -> Optional[str]:
    # 0 / None = geen drempel
    if discount.minimum_purchase_in_cents and cart.subtotal_in_cents < discount.minimum_purchase_in_cents:
        return "minimum_purchase_not_met"
    if discount.minimum_quantity and cart.total_quantity < discount.minimum_quantity:
        return "minimum_quantity_not_met"
    return None


def meets_cart_total_requirements(discount: Discount, cart: Cart) -> bool:
    return _cart_total_failure(discount, cart) is None


@register
class CartTotalsRule(EligibilityRule):
    type_name = "cart_totals"

    def check(self, ev, discount) -> CheckResult:
        cart = ev.cart
        meta = {"subtotal": cart.subtotal_in_cents, "quantity": cart.total_quantity}

        reason = _cart_total_failure(discount, cart)
        if reason is None:
            return self.passed(meta)

        if discount.minimum_purchase_in_cents:
            meta["minimum_purchase"] = discount.minimum_purchase_in_cents
        if discount.minimum_quantity:
            meta["minimum_quantity"] = discount.minimum_quantity
        return self.failed(reason, meta)
