from __future__ import annotations

from ..engine.context import CartItem, Discount, DiscountType
from .base import CheckResult, EligibilityRule, register


def is_item_eligible_for_product_discount(discount: Discount, item: CartItem) -> bool:
    if discount.type != DiscountType.PRODUCT:
        return False
    if discount.apply_to_all_products:
        return True
    if discount.variants and item.variant_id in discount.variants:
        return True
    if discount.collections and any(c in item.collection_ids for c in discount.collections):
        return True
    return False


@register
class ProductScopeRule(EligibilityRule):
    """
    PRODUCT only: at least one cart item must be in scope.
    ORDER / SHIPPING pass without looking at items.
    """

    type_name = "product_scope"

    def check(self, ev, discount) -> CheckResult:
        if discount.type != DiscountType.PRODUCT:
            return self.passed({"skipped": "not_product"})

        in_scope = [
            item.variant_id
            for item in ev.cart.items
            if is_item_eligible_for_product_discount(discount, item)
        ]
        if not in_scope:
            return self.failed("no_eligible_items")
        return self.passed({"variants": in_scope})
