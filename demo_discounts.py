#!/usr/bin/env python3
"""
Demo script voor de discount engine.
Toont eligibility, stacking en de checkout-slots voor een paar scenarios.
"""

from datetime import datetime, timezone

from af_discounts import (
    AmountType,
    Cart,
    CartItem,
    Customer,
    Discount,
    DiscountContext,
    DiscountType,
    apply_discounts,
    evaluate_discounts,
    get_discount_summary,
    resolve_stripe_compatible_discounts,
)
from af_discounts.core.logging_config import setup_logging

START = datetime(2025, 6, 22, tzinfo=timezone.utc)
NOW = datetime(2025, 6, 23, 12, tzinfo=timezone.utc)


def euro(cents: int) -> str:
    return f"€{cents / 100:.2f}"


def main():
    """Demo van de discount engine."""
    setup_logging()

    print("🚀 af-discounts - Discount Engine Demo")
    print("=" * 50)

    cart = Cart(
        items=(
            CartItem(variant_id="v_shirt", collection_ids=("c_summer",), quantity=2, price_in_cents=5000),
            CartItem(variant_id="v_mug", quantity=3, price_in_cents=2000),
        ),
        shipping_in_cents=1000,
        shipping_country_code="US",
    )
    catalog = [
        Discount(id="d_summer", type=DiscountType.PRODUCT, amount_type=AmountType.PERCENTAGE, amount=10,
                 collections=("c_summer",), is_automatic=True, starts_at=START),
        Discount(id="d_mug", type=DiscountType.PRODUCT, amount_type=AmountType.FIXED, amount=500,
                 variants=("v_mug",), starts_at=START),
        Discount(id="d_big", code="BIGSPENDER", type=DiscountType.ORDER, amount_type=AmountType.FIXED,
                 amount=1500, minimum_purchase_in_cents=10000, starts_at=START),
        Discount(id="d_ship", type=DiscountType.SHIPPING, amount_type=AmountType.PERCENTAGE, amount=100,
                 is_automatic=True, country_codes=("US",), starts_at=START),
        Discount(id="d_expired", type=DiscountType.ORDER, amount_type=AmountType.PERCENTAGE, amount=50,
                 starts_at=START, ends_at=datetime(2025, 6, 23, tzinfo=timezone.utc)),
    ]
    customer = Customer(id="cust_123")
    context = DiscountContext(now=NOW)

    eligible = evaluate_discounts(cart, catalog, customer, context)
    print(f"\n📋 Eligible: {[d.id for d in eligible]}")

    result = apply_discounts(cart, eligible)
    print("\nStacking:")
    for item in result.updated_cart_items:
        print(f"  • {item.variant_id}: {item.quantity} x {euro(item.price_in_cents)}")
    print(f"  • Orderkorting: {euro(result.order_level_discount_in_cents)}")
    print(f"  • Verzendkorting: {euro(result.shipping_discount_in_cents)}")
    print(f"  • Toegepast: {[d.id for d in result.applied_discounts]}")

    slots = resolve_stripe_compatible_discounts(eligible, cart)
    print("\nCheckout slots:")
    for name in ("automatic", "coupon", "free_shipping"):
        d = getattr(slots, name)
        print(f"  • {name}: {d.id if d else '-'}")

    summary = get_discount_summary(cart, catalog, customer, context)
    print(f"\nTotale korting: {euro(summary.total_discount_amount)}")
    for row in summary.discount_breakdown:
        flags = ("eligible" if row.eligible else "niet eligible") + (", applied" if row.applied else "")
        print(f"  {row.discount.id:<10} {row.type:<8} {euro(row.amount):>9}  ({flags})")

    print("\n" + "=" * 50)
    print("✅ Demo voltooid!")


if __name__ == "__main__":
    main()
