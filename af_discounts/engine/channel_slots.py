from __future__ import annotations

from dataclasses import dataclass
from typing import Optional, Sequence

from ..calculators.amount import calculate_discount_amount
from ..core.logging_config import get_logger
from .context import Cart, Discount, DiscountType
from .selection import pick_best



@dataclass(frozen=True)
class ChannelSlots:
    """One discount per checkout channel (each may be None)."""

    automatic: Optional[Discount] = None
    coupon: Optional[Discount] = None
    free_shipping: Optional[Discount] = None


def is_automatic_channel(discount: Discount) -> bool:
    return bool(discount.is_automatic) and discount.type != DiscountType.SHIPPING


def is_coupon_channel(discount: Discount) -> bool:
    return not discount.is_automatic and bool(discount.code) and discount.type != DiscountType.SHIPPING


def is_shipping_channel(discount: Discount) -> bool:
    return discount.type == DiscountType.SHIPPING


def resolve_stripe_compatible_discounts(discounts: Sequence[Discount], cart: Cart) -> ChannelSlots:
    """
    Reduce an eligible list to one automatic, one coupon and one shipping
    discount. Every slot is valued against the unmodified cart; there is no
    cross-channel subtotal dependency.

    An exclusive winning coupon empties the automatic slot.
    """

    def value_of(d: Discount) -> int:
        return calculate_discount_amount(d, cart)

    coupon = pick_best([d for d in discounts if is_coupon_channel(d)], value_of)

    automatic = None
    if coupon.selected and coupon.discount.policy.suppresses_automatic:
        get_logger("channel_slots").debug("automatic_slot_suppressed", coupon_id=coupon.discount.id)
    else:
        automatic = pick_best([d for d in discounts if is_automatic_channel(d)], value_of).discount

    shipping = pick_best([d for d in discounts if is_shipping_channel(d)], value_of)

    return ChannelSlots(
        automatic=automatic,
        coupon=coupon.discount,
        free_shipping=shipping.discount,
    )
