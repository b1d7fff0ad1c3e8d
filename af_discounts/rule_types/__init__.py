# Ensure registration happens by importing modules
from .base import CheckResult, EligibilityRule, rule_registry  # noqa
from . import (  # noqa
    date_range,
    customer,
    remaining_uses,
    cart_totals,
    country,
    product_scope,
)
