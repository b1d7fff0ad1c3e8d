from decimal import Decimal

import pytest

from af_discounts.calculators.amount import (
    calculate_discount_amount,
    fixed_amount,
    product_discount_per_unit,
    round_half_up,
)
from af_discounts.engine.context import AmountType

from helpers import make_cart, make_discount, make_item, order, product, shipping


@pytest.mark.parametrize(
    "value, expected",
    [("0.5", 1), ("1.5", 2), ("2.5", 3), ("2.4999", 2), ("0", 0), ("-2.5", -2)],
)
def test_round_half_up_ties_toward_positive_infinity(value, expected):
    assert round_half_up(Decimal(value)) == expected


def test_product_percentage_ten_percent_of_hundred_dollars():
    cart = make_cart(make_item(price=10000))
    assert calculate_discount_amount(product(amount=10, apply_to_all_products=True), cart) == 1000


def test_product_percentage_rounds_half_up_per_unit():
    # 12.5% of 1004 = 125.5 -> 126, twee stuks
    cart = make_cart(make_item(price=1004, qty=2))
    d = product(amount=Decimal("12.5"), apply_to_all_products=True)
    assert product_discount_per_unit(d, cart.items[0]) == 126
    assert calculate_discount_amount(d, cart) == 252


def test_product_fixed_capped_at_item_price():
    cart = make_cart(make_item("v_cheap_item", price=500))
    d = product(amount=1000, amount_type=AmountType.FIXED, variants=("v_cheap_item",))
    assert calculate_discount_amount(d, cart) == 500


def test_product_fixed_per_unit_times_quantity_only_eligible_items():
    cart = make_cart(make_item("v_mug", price=2000, qty=3), make_item("v_other", price=2000, qty=5))
    d = product(amount=500, amount_type=AmountType.FIXED, variants=("v_mug",))
    assert calculate_discount_amount(d, cart) == 1500


@pytest.mark.parametrize(
    "amount,expected",
    [
        (500, 500),
        (Decimal("500.00"), 500),
        (Decimal("2.5"), 3),
        (Decimal("2.4"), 2),
    ],
)
def test_fixed_amount_is_whole_cents(amount, expected):
    value = fixed_amount(order(amount=amount))
    assert value == expected
    assert isinstance(value, int)


def test_order_percentage_against_cart_subtotal():
    cart = make_cart(make_item(price=3333, qty=3))
    assert calculate_discount_amount(order(amount=15, amount_type=AmountType.PERCENTAGE), cart) == 1500


def test_order_uses_subtotal_override():
    cart = make_cart(make_item(price=10000))
    d = order(amount=10, amount_type=AmountType.PERCENTAGE)
    assert calculate_discount_amount(d, cart, subtotal_override=9000) == 900
    assert calculate_discount_amount(d, cart, subtotal_override=0) == 0


def test_order_fixed_capped_at_subtotal():
    cart = make_cart(make_item(price=300))
    assert calculate_discount_amount(order(amount=500), cart) == 300


def test_shipping_percentage_ignores_magnitude():
    cart = make_cart(shipping_in_cents=1000)
    assert calculate_discount_amount(shipping(amount=10), cart) == 1000
    assert calculate_discount_amount(shipping(amount=0), cart) == 1000


def test_shipping_fixed_capped_at_shipping_cost():
    cart = make_cart(shipping_in_cents=700)
    assert calculate_discount_amount(shipping(amount=500, amount_type=AmountType.FIXED), cart) == 500
    assert calculate_discount_amount(shipping(amount=900, amount_type=AmountType.FIXED), cart) == 700


def test_shipping_maximum_amount_cap():
    cart = make_cart(shipping_in_cents=1000)
    assert calculate_discount_amount(shipping(maximum_amount_for_shipping_in_cents=700), cart) == 700


def test_shipping_without_shipping_cost_is_zero():
    assert calculate_discount_amount(shipping(), make_cart()) == 0


def test_unknown_type_is_zero():
    d = make_discount(type="GIFT_CARD")
    assert calculate_discount_amount(d, make_cart(make_item())) == 0


@pytest.mark.parametrize(
    "discount, base",
    [
        (product(amount=100, apply_to_all_products=True), 2 * 999 + 1),
        (product(amount=99999, amount_type=AmountType.FIXED, apply_to_all_products=True), 2 * 999 + 1),
        (order(amount=100, amount_type=AmountType.PERCENTAGE), 2 * 999 + 1),
        (order(amount=99999), 2 * 999 + 1),
        (shipping(amount=99999, amount_type=AmountType.FIXED), 450),
        (shipping(), 450),
    ],
)
def test_amount_never_exceeds_base(discount, base):
    cart = make_cart(make_item("a", price=999, qty=2), make_item("b", price=1), shipping_in_cents=450)
    amount = calculate_discount_amount(discount, cart)
    assert 0 <= amount <= base
