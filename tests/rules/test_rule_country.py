from af_discounts.engine.context import EvaluationContext
from af_discounts.rule_types.country import CountryRule, is_eligible_for_country

from helpers import make_cart, make_discount


def test_country_no_restriction_passes_without_country():
    assert is_eligible_for_country(make_discount(), None) is True
    assert is_eligible_for_country(make_discount(country_codes=()), None) is True


def test_country_listed(customer, context):
    d = make_discount(country_codes=("US",))
    ev = EvaluationContext.build(make_cart(shipping_country_code="US"), customer, context)
    assert CountryRule().check(ev, d).passed


def test_country_not_listed(customer, context):
    d = make_discount(country_codes=("US",))
    ev = EvaluationContext.build(make_cart(shipping_country_code="CA"), customer, context)
    out = CountryRule().check(ev, d)
    assert out.reason == "country_not_allowed"
    assert out.meta == {"country": "CA", "allowed": ["US"]}


def test_country_restricted_but_cart_has_no_country():
    assert is_eligible_for_country(make_discount(country_codes=("US",)), None) is False


def test_country_apply_to_all_overrides_list():
    d = make_discount(country_codes=("US",), apply_to_all_countries=True)
    assert is_eligible_for_country(d, "CA") is True
