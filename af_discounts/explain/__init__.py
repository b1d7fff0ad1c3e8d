# af_discounts/explain/__init__.py
from __future__ import annotations

from .preview import DiscountPreview, preview_discount
from .summary import BreakdownRow, DiscountSummary, get_discount_summary

__all__ = [
    "DiscountPreview",
    "preview_discount",
    "BreakdownRow",
    "DiscountSummary",
    "get_discount_summary",
]
