"""Application tests for basket commands processed through the domain."""

import json
from datetime import timedelta
from decimal import Decimal

import pytest
from protean import current_domain
from protean.exceptions import ObjectNotFoundError, ValidationError
from shopping.basket.basket import Basket
from shopping.basket.discounts import ApplyDiscountCode
from shopping.basket.items import AddItemsToBasket, RemoveItemFromBasket, UpdateBasketItemQuantity
from shopping.basket.management import CreateBasket
from shopping.basket.shipping import AddShippingAddress
from shopping.catalogue.management import AddProduct
from shopping.discount.management import CreateDiscount


def _create_basket(**overrides):
    defaults = {"customer_email": "john.doe@example.com"}
    defaults.update(overrides)
    return current_domain.process(CreateBasket(**defaults), asynchronous=False)


def _add_product(**overrides):
    defaults = {"name": "Monitor Light Bar", "price": "79.99", "stock_quantity": 35}
    defaults.update(overrides)
    return current_domain.process(AddProduct(**defaults), asynchronous=False)


def _add_lines(basket_id, *lines, **kwargs):
    items = json.dumps([{"product_id": pid, "quantity": q} for pid, q in lines])
    current_domain.process(AddItemsToBasket(basket_id=basket_id, items=items, **kwargs), asynchronous=False)


def _load(basket_id):
    return current_domain.repository_for(Basket).get(basket_id)


class TestCreateBasketCommand:
    def test_persists_basket(self):
        basket_id = _create_basket()
        basket = _load(basket_id)
        assert basket.customer_email == "john.doe@example.com"
        assert len(basket.items) == 0

    def test_requested_at_sets_timestamps(self, now):
        basket = _load(_create_basket(requested_at=now))
        assert basket.created_at == now
        assert basket.updated_at == now


class TestAddItemsToBasketCommand:
    def test_adds_several_lines(self):
        basket_id = _create_basket()
        laptop = _add_product(name="Laptop Pro X1", price="1299.99", stock_quantity=8)
        light = _add_product()

        _add_lines(basket_id, (laptop, 1), (light, 2))

        basket = _load(basket_id)
        assert len(basket.items) == 2
        assert {str(i.product_id): i.quantity for i in basket.items} == {laptop: 1, light: 2}

    def test_adding_again_increases_quantity(self):
        basket_id = _create_basket()
        light = _add_product()

        _add_lines(basket_id, (light, 1))
        _add_lines(basket_id, (light, 2))

        basket = _load(basket_id)
        assert len(basket.items) == 1
        assert basket.items[0].quantity == 3

    def test_unknown_basket(self):
        light = _add_product()
        with pytest.raises(ObjectNotFoundError):
            _add_lines("no-such-basket", (light, 1))

    def test_unknown_product(self):
        basket_id = _create_basket()
        with pytest.raises(ObjectNotFoundError):
            _add_lines(basket_id, ("no-such-product", 1))

    def test_quantity_is_checked_before_product_lookup(self):
        basket_id = _create_basket()
        with pytest.raises(ValidationError):
            _add_lines(basket_id, ("no-such-product", 0))

    def test_insufficient_stock_persists_nothing(self):
        basket_id = _create_basket()
        laptop = _add_product(name="Laptop Pro X1", price="1299.99", stock_quantity=8)
        hub = _add_product(name="USB-C Hub Premium", price="59.99", stock_quantity=0)

        with pytest.raises(ValidationError):
            _add_lines(basket_id, (laptop, 1), (hub, 1))

        assert len(_load(basket_id).items) == 0

    def test_malformed_items_payload(self):
        basket_id = _create_basket()
        with pytest.raises(ValidationError):
            current_domain.process(AddItemsToBasket(basket_id=basket_id, items="not json"), asynchronous=False)

    def test_line_without_product_id(self):
        basket_id = _create_basket()
        with pytest.raises(ValidationError):
            current_domain.process(
                AddItemsToBasket(basket_id=basket_id, items=json.dumps([{"quantity": 1}])),
                asynchronous=False,
            )


class TestUpdateAndRemoveCommands:
    def test_update_sets_quantity(self):
        basket_id = _create_basket()
        _add_lines(basket_id, (_add_product(), 2))
        item_id = str(_load(basket_id).items[0].id)

        current_domain.process(
            UpdateBasketItemQuantity(basket_id=basket_id, item_id=item_id, quantity=7),
            asynchronous=False,
        )

        assert _load(basket_id).items[0].quantity == 7

    def test_update_to_zero_removes(self):
        basket_id = _create_basket()
        _add_lines(basket_id, (_add_product(), 2))
        item_id = str(_load(basket_id).items[0].id)

        current_domain.process(
            UpdateBasketItemQuantity(basket_id=basket_id, item_id=item_id, quantity=0),
            asynchronous=False,
        )

        assert len(_load(basket_id).items) == 0

    def test_update_missing_item(self):
        basket_id = _create_basket()
        with pytest.raises(ObjectNotFoundError):
            current_domain.process(
                UpdateBasketItemQuantity(basket_id=basket_id, item_id="missing", quantity=2),
                asynchronous=False,
            )

    def test_remove_item(self):
        basket_id = _create_basket()
        _add_lines(basket_id, (_add_product(), 2))
        item_id = str(_load(basket_id).items[0].id)

        current_domain.process(RemoveItemFromBasket(basket_id=basket_id, item_id=item_id), asynchronous=False)

        assert len(_load(basket_id).items) == 0

    def test_remove_missing_item_leaves_basket_untouched(self, now):
        basket_id = _create_basket(requested_at=now)
        _add_lines(basket_id, (_add_product(), 2), requested_at=now)

        current_domain.process(
            RemoveItemFromBasket(basket_id=basket_id, item_id="missing", requested_at=now + timedelta(days=1)),
            asynchronous=False,
        )

        basket = _load(basket_id)
        assert len(basket.items) == 1
        assert basket.updated_at == now


class TestApplyDiscountCodeCommand:
    def _create_discount(self, now, code="SAVE10", percentage="10", **kwargs):
        return current_domain.process(
            CreateDiscount(code=code, discount_percentage=percentage, requested_at=now, **kwargs),
            asynchronous=False,
        )

    def test_applies_code(self, now):
        basket_id = _create_basket(requested_at=now)
        discount_id = self._create_discount(now, valid_to=now + timedelta(days=30))

        current_domain.process(
            ApplyDiscountCode(basket_id=basket_id, code="SAVE10", requested_at=now + timedelta(hours=1)),
            asynchronous=False,
        )

        applied = _load(basket_id).applied_discount
        assert applied.code == "SAVE10"
        assert applied.discount_id == discount_id
        assert applied.percentage() == Decimal("10")

    def test_unknown_code(self, now):
        basket_id = _create_basket(requested_at=now)
        with pytest.raises(ObjectNotFoundError):
            current_domain.process(ApplyDiscountCode(basket_id=basket_id, code="NOPE"), asynchronous=False)

    def test_codes_are_case_sensitive(self, now):
        basket_id = _create_basket(requested_at=now)
        self._create_discount(now)
        with pytest.raises(ObjectNotFoundError):
            current_domain.process(ApplyDiscountCode(basket_id=basket_id, code="save10"), asynchronous=False)

    def test_expired_code(self, now):
        basket_id = _create_basket(requested_at=now)
        self._create_discount(now, code="EXPIRED20", percentage="20", valid_to=now - timedelta(days=5))

        with pytest.raises(ValidationError):
            current_domain.process(
                ApplyDiscountCode(basket_id=basket_id, code="EXPIRED20", requested_at=now),
                asynchronous=False,
            )
        assert _load(basket_id).applied_discount is None


class TestAddShippingAddressCommand:
    @pytest.mark.parametrize(
        "country, cost",
        [("UK", "5.99"), ("united kingdom", "5.99"), ("England", "8.99"), ("Germany", "8.99")],
    )
    def test_cost_follows_destination(self, country, cost):
        basket_id = _create_basket()
        current_domain.process(AddShippingAddress(basket_id=basket_id, country=country), asynchronous=False)

        basket = _load(basket_id)
        assert basket.shipping_address.country == country
        assert basket.shipping_address.customer_email == "john.doe@example.com"
        assert basket.shipping_cost_amount() == Decimal(cost)
