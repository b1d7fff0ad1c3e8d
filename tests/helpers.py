from __future__ import annotations

from datetime import datetime, timezone

from af_discounts.engine.context import AmountType, Cart, CartItem, Discount, DiscountType

TEST_START = datetime(2025, 6, 22, tzinfo=timezone.utc)
TEST_END = datetime(2025, 6, 24, tzinfo=timezone.utc)
TEST_NOW = datetime(2025, 6, 23, 12, 0, 0, tzinfo=timezone.utc)


def make_discount(
    id: str = "d1",
    type: DiscountType = DiscountType.ORDER,
    amount_type: AmountType = AmountType.FIXED,
    amount=500,
    **kw,
) -> Discount:
    kw.setdefault("starts_at", TEST_START)
    kw.setdefault("is_active", True)
    return Discount(id=id, type=type, amount_type=amount_type, amount=amount, **kw)


def product(id: str = "d_prod", amount=10, amount_type: AmountType = AmountType.PERCENTAGE, **kw) -> Discount:
    return make_discount(id=id, type=DiscountType.PRODUCT, amount_type=amount_type, amount=amount, **kw)


def order(id: str = "d_order", amount=500, amount_type: AmountType = AmountType.FIXED, **kw) -> Discount:
    return make_discount(id=id, type=DiscountType.ORDER, amount_type=amount_type, amount=amount, **kw)


def shipping(id: str = "d_ship", amount=100, amount_type: AmountType = AmountType.PERCENTAGE, **kw) -> Discount:
    return make_discount(id=id, type=DiscountType.SHIPPING, amount_type=amount_type, amount=amount, **kw)


def make_item(variant_id: str = "v1", price: int = 10000, qty: int = 1, collections=()) -> CartItem:
    return CartItem(variant_id=variant_id, quantity=qty, price_in_cents=price, collection_ids=tuple(collections))


def make_cart(*items: CartItem, **kw) -> Cart:
    kw.setdefault("store_id", "s1")
    return Cart(items=tuple(items), **kw)


def items_total(items) -> int:
    return sum(i.price_in_cents * i.quantity for i in items)
