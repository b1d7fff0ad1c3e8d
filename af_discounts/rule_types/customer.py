from __future__ import annotations

from typing import Optional

from ..engine.context import Customer, Discount
from .base import CheckResult, EligibilityRule, register


def is_eligible_customer(discount: Discount, customer: Optional[Customer] = None) -> bool:
    if not discount.customers:
        return True
    if customer is None:
        return False
    return customer.id in discount.customers


@register
class CustomerRule(EligibilityRule):
    type_name = "customer"

    def check(self, ev, discount) -> CheckResult:
        if is_eligible_customer(discount, ev.customer):
            return self.passed()
        if ev.customer is None:
            return self.failed("customer_required")
        return self.failed("customer_not_listed", {"customer_id": ev.customer.id})
