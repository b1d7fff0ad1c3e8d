from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING, Optional

if TYPE_CHECKING:
    from .context import Discount


@dataclass(frozen=True)
class CombinationPolicy:
    """
    Closed view on a discount's combine flags.

    The stacking pipeline only asks these questions, always in the order
    product -> order -> shipping. None means "not configured" and never excludes.
    """

    is_automatic: bool = False
    combine_with_product_discounts: Optional[bool] = None
    combine_with_order_discounts: Optional[bool] = None
    combine_with_shipping_discounts: Optional[bool] = None
    exclusive: bool = False

    @staticmethod
    def from_discount(discount: "Discount") -> "CombinationPolicy":
        return CombinationPolicy(
            is_automatic=bool(discount.is_automatic),
            combine_with_product_discounts=discount.combine_with_product_discounts,
            combine_with_order_discounts=discount.combine_with_order_discounts,
            combine_with_shipping_discounts=discount.combine_with_shipping_discounts,
            exclusive=discount.exclusive is True,
        )

    def excluded_after_product(self, product_applied: bool) -> bool:
        return product_applied and self.combine_with_product_discounts is False

    def excluded_after_order(self, order_selected: bool) -> bool:
        return order_selected and self.combine_with_order_discounts is False

    @property
    def suppresses_automatic(self) -> bool:
        return self.exclusive
