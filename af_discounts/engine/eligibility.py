from __future__ import annotations

from typing import List, Optional, Sequence

from ..core.logging_config import get_logger
from ..rule_types.base import CheckResult, EligibilityRule, rule_registry
from .context import Cart, Customer, Discount, DiscountContext, EvaluationContext


DEFAULT_EXECUTION_ORDER: List[str] = [
    "date_range",
    "customer",
    "remaining_uses",
    "cart_totals",
    "country",
    "product_scope",
]


def _duplicates(names: Sequence[str]) -> List[str]:
    seen, dups = set(), []
    for name in names:
        if name in seen and name not in dups:
            dups.append(name)
        seen.add(name)
    return dups


def validate_execution_order(execution_order: Sequence[str]) -> List[str]:
    order = list(execution_order)

    if not order:
        raise ValueError("executionOrder must contain at least one rule name.")

    dups = _duplicates(order)
    if dups:
        raise ValueError(f"Duplicate rule names in executionOrder: {dups}")

    unknown = sorted(set(order) - set(rule_registry))
    if unknown:
        raise ValueError(f"executionOrder references unknown rules: {unknown}")

    unlisted = sorted(set(rule_registry) - set(order))
    if unlisted:
        raise ValueError(f"Rules not listed in executionOrder: {unlisted}")

    return order


class EligibilityRunner:
    """
    Deterministic eligibility runner.

    - every rule in execution_order must pass (logical AND)
    - evaluate(): short-circuits on the first failing rule per discount
    - explain(): runs all rules, returns one CheckResult per rule
    - output of evaluate() is an order-preserving subsequence of the input
    """

    def __init__(self, execution_order: Optional[Sequence[str]] = None):
        self.execution_order = validate_execution_order(execution_order or DEFAULT_EXECUTION_ORDER)
        self.rules: List[EligibilityRule] = [rule_registry[name]() for name in self.execution_order]

    def first_failure(self, ev: EvaluationContext, discount: Discount) -> Optional[CheckResult]:
        for rule in self.rules:
            result = rule.check(ev, discount)
            if not result.passed:
                return result
        return None

    def evaluate(
        self,
        cart: Cart,
        discounts: Sequence[Discount],
        customer: Optional[Customer] = None,
        context: Optional[DiscountContext] = None,
    ) -> List[Discount]:
        ev = EvaluationContext.build(cart, customer, context)
        eligible: List[Discount] = []

        for discount in discounts:
            failure = self.first_failure(ev, discount)
            if failure is None:
                eligible.append(discount)
                continue
            get_logger("eligibility").debug(
                "discount_rejected",
                discount_id=discount.id,
                check=failure.check,
                reason=failure.reason,
                **failure.meta,
            )

        get_logger("eligibility").debug(
            "discounts_evaluated",
            candidates=len(discounts),
            eligible=len(eligible),
            **ev.describe(),
        )
        return eligible

    def explain(
        self,
        cart: Cart,
        discount: Discount,
        customer: Optional[Customer] = None,
        context: Optional[DiscountContext] = None,
    ) -> List[CheckResult]:
        ev = EvaluationContext.build(cart, customer, context)
        return [rule.check(ev, discount) for rule in self.rules]


_default_runner: Optional[EligibilityRunner] = None


def get_default_runner() -> EligibilityRunner:
    global _default_runner
    if _default_runner is None:
        _default_runner = EligibilityRunner()
    return _default_runner


def evaluate_discounts(
    cart: Cart,
    discounts: Sequence[Discount],
    customer: Optional[Customer] = None,
    context: Optional[DiscountContext] = None,
) -> List[Discount]:
    return get_default_runner().evaluate(cart, discounts, customer, context)
