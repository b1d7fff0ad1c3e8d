from __future__ import annotations

from datetime import datetime

from ..engine.context import Discount, as_utc
from .base import CheckResult, EligibilityRule, register


def is_within_date_range(discount: Discount, now: datetime) -> bool:
    if discount.is_active is False:
        return False
    now = as_utc(now)
    if now < as_utc(discount.starts_at):
        return False
    if discount.ends_at is not None and now > as_utc(discount.ends_at):
        return False
    return True


@register
class DateRangeRule(EligibilityRule):
    type_name = "date_range"

    def check(self, ev, discount) -> CheckResult:
        meta = {"now": ev.now.isoformat()}
        if discount.is_active is False:
            return self.failed("inactive", meta)
        if not is_within_date_range(discount, ev.now):
            meta["starts_at"] = as_utc(discount.starts_at).isoformat()
            if discount.ends_at is not None:
                meta["ends_at"] = as_utc(discount.ends_at).isoformat()
            return self.failed("outside_date_range", meta)
        return self.passed(meta)
