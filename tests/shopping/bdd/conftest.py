"""Shared BDD fixtures and step definitions for basket pricing."""

from datetime import timedelta
from decimal import Decimal

import pytest
from protean import current_domain
from protean.exceptions import ValidationError
from pytest_bdd import given, parsers, then
from shopping.basket.basket import Basket
from shopping.basket.management import CreateBasket
from shopping.basket.summary import products_for
from shopping.catalogue.management import AddProduct
from shopping.discount.management import CreateDiscount
from shopping.shared.clock import utc_now


# ---------------------------------------------------------------------------
# Scalar fixtures
# ---------------------------------------------------------------------------
@pytest.fixture()
def catalogue():
    """Product name to product id, for the products a scenario created."""
    return {}


@pytest.fixture()
def error():
    """Container for captured validation errors."""
    return {"exc": None}


def load_basket(basket_id):
    basket = current_domain.repository_for(Basket).get(basket_id)
    return basket, products_for(basket)


# ---------------------------------------------------------------------------
# Given steps
# ---------------------------------------------------------------------------
@given(parsers.cfparse('an empty basket for "{email}"'), target_fixture="basket_id")
def empty_basket(email):
    return current_domain.process(CreateBasket(customer_email=email), asynchronous=False)


@given(parsers.cfparse('a product "{name}" priced at "{price}" with {stock:d} in stock'))
def product(catalogue, name, price, stock):
    catalogue[name] = current_domain.process(
        AddProduct(name=name, price=price, stock_quantity=stock),
        asynchronous=False,
    )


@given(parsers.cfparse('a product "{name}" on sale at "{sale_price}" instead of "{price}" with {stock:d} in stock'))
def product_on_sale(catalogue, name, price, sale_price, stock):
    catalogue[name] = current_domain.process(
        AddProduct(name=name, price=price, is_discounted=True, discounted_price=sale_price, stock_quantity=stock),
        asynchronous=False,
    )


@given(parsers.cfparse('an active discount code "{code}" worth "{percentage}" percent'))
def active_discount(code, percentage):
    current_domain.process(
        CreateDiscount(code=code, discount_percentage=percentage, valid_to=utc_now() + timedelta(days=30)),
        asynchronous=False,
    )


@given(parsers.cfparse('an expired discount code "{code}" worth "{percentage}" percent'))
def expired_discount(code, percentage):
    current_domain.process(
        CreateDiscount(code=code, discount_percentage=percentage, valid_to=utc_now() - timedelta(days=5)),
        asynchronous=False,
    )


# ---------------------------------------------------------------------------
# Then steps
# ---------------------------------------------------------------------------
@then(parsers.cfparse('the shipping cost is "{amount}"'))
def shipping_cost_is(basket_id, amount):
    basket, _ = load_basket(basket_id)
    assert basket.shipping_cost_amount() == Decimal(amount)


@then(parsers.cfparse('the subtotal is "{amount}"'))
def subtotal_is(basket_id, amount):
    basket, products = load_basket(basket_id)
    assert basket.subtotal(products) == Decimal(amount)


@then(parsers.cfparse('the discount amount is "{amount}"'))
def discount_amount_is(basket_id, amount):
    basket, products = load_basket(basket_id)
    assert basket.discount_amount(products) == Decimal(amount)


@then(parsers.cfparse('the total without VAT is "{amount}"'))
def total_without_vat_is(basket_id, amount):
    basket, products = load_basket(basket_id)
    assert basket.total_without_vat(products) == Decimal(amount)


@then(parsers.cfparse('the total is "{amount}"'))
def total_is(basket_id, amount):
    basket, products = load_basket(basket_id)
    assert basket.total(products) == Decimal(amount)


@then(parsers.cfparse('the request is rejected mentioning "{fragment}"'))
def request_rejected(error, fragment):
    assert isinstance(error["exc"], ValidationError)
    assert fragment in str(error["exc"].messages)


@then(parsers.cfparse("the basket has {count:d} line with quantity {quantity:d}"))
def basket_has_line(basket_id, count, quantity):
    basket, _ = load_basket(basket_id)
    assert len(basket.items) == count
    assert basket.items[0].quantity == quantity


@then("the basket is empty")
def basket_is_empty(basket_id):
    basket, _ = load_basket(basket_id)
    assert len(basket.items) == 0
