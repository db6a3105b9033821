"""BDD tests for basket pricing."""

import json

from protean import current_domain
from protean.exceptions import ValidationError
from pytest_bdd import parsers, scenarios, when
from shopping.basket.discounts import ApplyDiscountCode
from shopping.basket.items import AddItemsToBasket
from shopping.basket.shipping import AddShippingAddress

scenarios("features/basket_pricing.feature")


# ---------------------------------------------------------------------------
# When steps
# ---------------------------------------------------------------------------
@when(parsers.cfparse('{quantity:d} of "{name}" are added to the basket'))
def add_to_basket(basket_id, catalogue, quantity, name, error):
    lines = json.dumps([{"product_id": catalogue[name], "quantity": quantity}])
    try:
        current_domain.process(AddItemsToBasket(basket_id=basket_id, items=lines), asynchronous=False)
    except ValidationError as exc:
        error["exc"] = exc


@when(parsers.cfparse('the code "{code}" is applied to the basket'))
def apply_code(basket_id, code, error):
    try:
        current_domain.process(ApplyDiscountCode(basket_id=basket_id, code=code), asynchronous=False)
    except ValidationError as exc:
        error["exc"] = exc


@when(parsers.cfparse('the basket ships to "{country}"'))
def ship_to(basket_id, country):
    current_domain.process(AddShippingAddress(basket_id=basket_id, country=country), asynchronous=False)

