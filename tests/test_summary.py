from af_discounts.explain.summary import get_discount_summary

from helpers import make_cart, make_item, order, product, shipping


def _cart():
    return make_cart(make_item("v1", price=10000), shipping_in_cents=1000, shipping_country_code="US")


def test_summary_totals_and_breakdown(customer, context):
    prod10 = product("p10", amount=10, apply_to_all_products=True)
    prod5 = product("p5", amount=5, apply_to_all_products=True)
    fixed = order("o500", amount=500)
    too_big = order("o_min", amount=2000, minimum_purchase_in_cents=999999)
    free_ship = shipping("s_free")

    summary = get_discount_summary(_cart(), [prod10, prod5, fixed, too_big, free_ship], customer, context)

    assert summary.product_discount_amount == 1000
    assert summary.order_discount_amount == 500
    assert summary.shipping_discount_amount == 1000
    assert summary.total_discount_amount == 2500
    assert summary.eligible_discount_count == 4
    # both in-scope product discounts count as applied
    assert summary.applied_discount_count == 4

    rows = {row.discount.id: row for row in summary.discount_breakdown}
    assert [row.discount.id for row in summary.discount_breakdown] == ["p10", "p5", "o500", "o_min", "s_free"]
    assert rows["p5"].applied is True
    assert rows["p5"].amount == 500
    assert rows["o_min"].eligible is False
    assert rows["o_min"].applied is False
    assert rows["o_min"].amount == 0
    assert rows["s_free"].type == "SHIPPING"


def test_breakdown_amount_is_standalone_value(customer, context):
    a = order("a", amount=700)
    b = order("b", amount=300)

    summary = get_discount_summary(_cart(), [a, b], customer, context)

    assert summary.order_discount_amount == 700
    assert summary.applied_discount_count == 1
    row_b = summary.discount_breakdown[1]
    assert row_b.eligible is True
    assert row_b.applied is False
    assert row_b.amount == 300


def test_empty_discount_list(customer, context):
    summary = get_discount_summary(_cart(), [], customer, context)

    assert summary.total_discount_amount == 0
    assert summary.eligible_discount_count == 0
    assert summary.applied_discount_count == 0
    assert summary.discount_breakdown == ()


def test_identical_records_stay_separate_rows(customer, context):
    one = order("same", amount=100)
    two = order("same", amount=100)

    summary = get_discount_summary(_cart(), [one, two], customer, context)

    assert len(summary.discount_breakdown) == 2
    assert [row.applied for row in summary.discount_breakdown] == [True, False]
