# af_discounts/__init__.py
"""
Discount evaluation, amount calculation and combination resolution for carts.

    eligible = evaluate_discounts(cart, catalog, customer, context)
    priced = apply_discounts(cart, eligible)
    slots = resolve_stripe_compatible_discounts(eligible, cart)
"""
from .calculators.amount import calculate_discount_amount
from .engine.channel_slots import ChannelSlots, resolve_stripe_compatible_discounts
from .engine.context import (
    AmountType,
    Cart,
    CartItem,
    Customer,
    Discount,
    DiscountContext,
    DiscountType,
)
from .engine.eligibility import EligibilityRunner, evaluate_discounts
from .engine.policy import CombinationPolicy
from .engine.stacking import StackingResult, apply_discounts
from .explain.preview import DiscountPreview, preview_discount
from .explain.summary import BreakdownRow, DiscountSummary, get_discount_summary

__version__ = "0.1.0"

__all__ = [
    "AmountType",
    "BreakdownRow",
    "Cart",
    "CartItem",
    "ChannelSlots",
    "CombinationPolicy",
    "Customer",
    "Discount",
    "DiscountContext",
    "DiscountPreview",
    "DiscountSummary",
    "DiscountType",
    "EligibilityRunner",
    "StackingResult",
    "apply_discounts",
    "calculate_discount_amount",
    "evaluate_discounts",
    "get_discount_summary",
    "preview_discount",
    "resolve_stripe_compatible_discounts",
]
