from __future__ import annotations

import pytest

import af_discounts.rule_types  # noqa: F401 (register all rules)

from af_discounts.engine.context import Customer, DiscountContext, EvaluationContext

from helpers import TEST_NOW, make_cart, make_item


@pytest.fixture
def fixed_now():
    return TEST_NOW


@pytest.fixture
def context(fixed_now):
    return DiscountContext(now=fixed_now, usage_by_customer={}, usage_global={})


@pytest.fixture
def customer():
    return Customer(id="cust_123", email="test@example.com")


@pytest.fixture
def cart():
    return make_cart(make_item("v1", price=10000))


@pytest.fixture
def ev(cart, customer, context):
    # Minimal evaluation context for unit-testing rules directly
    return EvaluationContext.build(cart, customer, context)
