from __future__ import annotations

from typing import Optional

from ..engine.context import Discount
from .base import CheckResult, EligibilityRule, register


def is_eligible_for_country(discount: Discount, country_code: Optional[str] = None) -> bool:
    if discount.apply_to_all_countries is True:
        return True
    if discount.country_codes:
        return bool(country_code) and country_code in discount.country_codes
    # geen restrictie => toegestaan
    return True


@register
class CountryRule(EligibilityRule):
    type_name = "country"

    def check(self, ev, discount) -> CheckResult:
        country = ev.cart.shipping_country_code
        if is_eligible_for_country(discount, country):
            return self.passed({"country": country})
        return self.failed(
            "country_not_allowed",
            {"country": country, "allowed": list(discount.country_codes or [])},
        )
