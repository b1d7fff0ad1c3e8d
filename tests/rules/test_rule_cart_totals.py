import pytest

from af_discounts.engine.context import EvaluationContext
from af_discounts.rule_types.cart_totals import CartTotalsRule, meets_cart_total_requirements

from helpers import make_cart, make_discount, make_item


def test_cart_totals_minimum_purchase_edge():
    d = make_discount(minimum_purchase_in_cents=5000)
    assert meets_cart_total_requirements(d, make_cart(make_item(price=4999))) is False
    assert meets_cart_total_requirements(d, make_cart(make_item(price=5000))) is True


def test_cart_totals_subtotal_uses_quantity():
    d = make_discount(minimum_purchase_in_cents=5000)
    assert meets_cart_total_requirements(d, make_cart(make_item(price=2500, qty=2))) is True


def test_cart_totals_minimum_quantity_across_items(customer, context):
    d = make_discount(minimum_quantity=3)
    cart = make_cart(make_item("a", qty=1), make_item("b", qty=1))
    out = CartTotalsRule().check(EvaluationContext.build(cart, customer, context), d)
    assert out.reason == "minimum_quantity_not_met"
    assert out.meta["quantity"] == 2

    cart = make_cart(make_item("a", qty=2), make_item("b", qty=1))
    assert CartTotalsRule().check(EvaluationContext.build(cart, customer, context), d).passed


def test_cart_totals_empty_cart_without_thresholds():
    assert meets_cart_total_requirements(make_discount(), make_cart()) is True


@pytest.mark.parametrize(
    "limits,items",
    [
        ({}, [make_item(price=100)]),
        ({"minimum_purchase_in_cents": 5000}, [make_item(price=4999)]),
        ({"minimum_purchase_in_cents": 5000}, [make_item(price=2500, qty=2)]),
        ({"minimum_quantity": 3}, [make_item("a", qty=2)]),
        ({"minimum_quantity": 3, "minimum_purchase_in_cents": 1}, [make_item("a", qty=3)]),
        ({"minimum_quantity": 0, "minimum_purchase_in_cents": 0}, []),
    ],
)
def test_cart_totals_rule_agrees_with_predicate(customer, context, limits, items):
    d = make_discount(**limits)
    cart = make_cart(*items)
    out = CartTotalsRule().check(EvaluationContext.build(cart, customer, context), d)
    assert out.passed is meets_cart_total_requirements(d, cart)
