from __future__ import annotations

from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Any, Dict, Optional, Type

# Decisions (avoid string typos)
CHECK_PASSED = "PASSED"
CHECK_FAILED = "FAILED"

if TYPE_CHECKING:
    from ..engine.context import Discount, EvaluationContext


@dataclass(frozen=True)
class CheckResult:
    """
    Result of one eligibility rule for one discount.
    - check: rule type_name
    - decision: PASSED / FAILED
    - reason: short machine-readable reason (only set on FAILED)
    - meta: explainability payload (values the rule compared)
    """

    check: str
    decision: str
    reason: Optional[str] = None
    meta: Dict[str, Any] = field(default_factory=dict)

    @property
    def passed(self) -> bool:
        return self.decision == CHECK_PASSED

    @staticmethod
    def ok(check: str, meta: Optional[Dict[str, Any]] = None) -> "CheckResult":
        return CheckResult(check=check, decision=CHECK_PASSED, meta=meta or {})

    @staticmethod
    def failed(check: str, reason: str, meta: Optional[Dict[str, Any]] = None) -> "CheckResult":
        return CheckResult(check=check, decision=CHECK_FAILED, reason=reason, meta=meta or {})


class EligibilityRule:
    """
    Base class for all eligibility rules. Every rule must implement check(ev, discount).

    Rules are pure: they read the discount and the EvaluationContext and never
    write to either.
    """

    type_name: str = "base"

    def check(self, ev: "EvaluationContext", discount: "Discount") -> CheckResult:
        raise NotImplementedError

    def passed(self, meta: Optional[Dict[str, Any]] = None) -> CheckResult:
        return CheckResult.ok(self.type_name, meta)

    def failed(self, reason: str, meta: Optional[Dict[str, Any]] = None) -> CheckResult:
        return CheckResult.failed(self.type_name, reason, meta)


# Registry: type_name -> rule class
rule_registry: Dict[str, Type[EligibilityRule]] = {}


def register(rule_cls: Type[EligibilityRule]) -> Type[EligibilityRule]:
    """
    Decorator to register a rule by its type_name.
    Fails fast on duplicate registrations (useful during dev/reload).
    """
    key = getattr(rule_cls, "type_name", None)
    if not key or key == EligibilityRule.type_name:
        raise ValueError(f"Rule class {rule_cls.__name__} has no type_name")

    if key in rule_registry and rule_registry[key] is not rule_cls:
        raise ValueError(
            f"Duplicate rule registration for type '{key}': "
            f"{rule_registry[key].__name__} vs {rule_cls.__name__}"
        )

    rule_registry[key] = rule_cls
    return rule_cls
