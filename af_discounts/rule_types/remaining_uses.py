from __future__ import annotations

from typing import Optional, Tuple

from ..engine.context import Discount, DiscountContext, EvaluationContext
from .base import CheckResult, EligibilityRule, register


def usage_counts(
    discount: Discount,
    customer_id: Optional[str] = None,
    context: Optional[DiscountContext] = None,
) -> Tuple[int, Optional[int]]:
    """(global uses, customer uses) for discount.usage_key; customer uses is None without a customer."""
    key = discount.usage_key
    global_uses = int((context.usage_global or {}).get(key, 0)) if context else 0
    if not customer_id:
        return global_uses, None
    customer_uses = int((context.usage_by_customer or {}).get(key, 0)) if context else 0
    return global_uses, customer_uses


def _usage_failure(discount: Discount, global_uses: int, customer_uses: Optional[int]) -> Optional[str]:
    """
    Per-customer limits are only checked when there is a customer.
    0 / None limits mean "unlimited".
    """
    if discount.maximum_uses and global_uses >= discount.maximum_uses:
        return "maximum_uses_reached"

    if customer_uses is not None and (discount.limit_once_per_customer or discount.maximum_uses_per_customer):
        if discount.limit_once_per_customer and customer_uses >= 1:
            return "already_used_by_customer"
        if discount.maximum_uses_per_customer and customer_uses >= discount.maximum_uses_per_customer:
            return "maximum_uses_per_customer_reached"

    return None


def has_customer_remaining_uses(
    discount: Discount,
    customer_id: Optional[str] = None,
    context: Optional[DiscountContext] = None,
) -> bool:
    global_uses, customer_uses = usage_counts(discount, customer_id, context)
    return _usage_failure(discount, global_uses, customer_uses) is None


@register
class RemainingUsesRule(EligibilityRule):
    type_name = "remaining_uses"

    def check(self, ev: EvaluationContext, discount) -> CheckResult:
        global_uses, customer_uses = usage_counts(discount, ev.customer_id, ev.context)

        meta = {"usage_key": discount.usage_key, "global_uses": global_uses}
        if customer_uses is not None:
            meta["customer_uses"] = customer_uses

        reason = _usage_failure(discount, global_uses, customer_uses)
        if reason:
            return self.failed(reason, meta)
        return self.passed(meta)
