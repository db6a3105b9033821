"""Tests for the Product aggregate and effective unit price resolution."""

from datetime import timedelta
from decimal import Decimal

import pytest
from protean.exceptions import ValidationError
from shopping.catalogue.events import ProductAdded, ProductPricingChanged
from shopping.catalogue.product import Product, effective_unit_price


def _make_product(**overrides):
    defaults = {"name": "Monitor Light Bar", "price": "79.99", "stock_quantity": 35}
    defaults.update(overrides)
    return Product.create(**defaults)


class TestEffectiveUnitPrice:
    def test_regular_product_uses_catalogue_price(self):
        product = _make_product()
        assert product.effective_unit_price() == Decimal("79.99")

    def test_discounted_product_uses_discounted_price(self):
        product = _make_product(price="34.99", is_discounted=True, discounted_price="29.99")
        assert product.effective_unit_price() == Decimal("29.99")

    def test_zero_discounted_price_falls_back_to_catalogue_price(self):
        product = _make_product(price="34.99", is_discounted=True, discounted_price="0")
        assert product.effective_unit_price() == Decimal("34.99")

    def test_discounted_price_ignored_without_flag(self):
        product = _make_product(price="34.99", is_discounted=False, discounted_price="29.99")
        assert product.effective_unit_price() == Decimal("34.99")

    def test_missing_product_is_a_precondition_failure(self):
        with pytest.raises(ValueError):
            effective_unit_price(None)


class TestProductCreation:
    def test_amounts_are_stored_as_decimal_text(self):
        product = _make_product(price=Decimal("1299.99"))
        assert product.price == "1299.99"
        assert product.price_amount() == Decimal("1299.99")
        assert product.discounted_price_amount() == Decimal("0")

    def test_float_price_is_stored_exactly(self):
        product = _make_product(price=59.99)
        assert product.price == "59.99"

    def test_malformed_price_is_rejected(self):
        with pytest.raises(ValidationError) as exc:
            _make_product(price="seventy")
        assert "price" in exc.value.messages

    def test_negative_stock_is_tolerated(self):
        product = _make_product(stock_quantity=-2)
        assert product.stock_quantity == -2
        assert not product.has_stock_for(1)

    def test_raises_product_added(self):
        product = _make_product()
        events = [e for e in product._events if isinstance(e, ProductAdded)]
        assert len(events) == 1
        assert events[0].price == "79.99"
        assert events[0].stock_quantity == 35


class TestStock:
    def test_has_stock_for_exact_quantity(self):
        product = _make_product(stock_quantity=8)
        assert product.has_stock_for(8)
        assert not product.has_stock_for(9)

    def test_out_of_stock(self):
        assert not _make_product(stock_quantity=0).has_stock_for(1)


class TestChangePricing:
    def test_put_on_sale(self):
        product = _make_product(price="89.99")
        product.change_pricing(is_discounted=True, discounted_price="69.99")
        assert product.effective_unit_price() == Decimal("69.99")

    def test_raises_pricing_changed(self):
        product = _make_product(price="89.99")
        product._events.clear()
        product.change_pricing(price="99.99")

        assert len(product._events) == 1
        event = product._events[0]
        assert isinstance(event, ProductPricingChanged)
        assert event.previous_price == "89.99"
        assert event.price == "99.99"

    def test_malformed_price_leaves_product_unchanged(self):
        product = _make_product(price="89.99")
        with pytest.raises(ValidationError):
            product.change_pricing(price="lots")
        assert product.price == "89.99"


class TestTimestamps:
    def test_naive_now_is_stored_as_utc(self, now):
        product = _make_product(now=now.replace(tzinfo=None))
        assert product.created_at == now
        assert product.created_at.tzinfo is not None

    def test_change_pricing_with_naive_now(self, now):
        product = _make_product(now=now)
        later = now + timedelta(hours=1)

        product.change_pricing(price="74.99", now=later.replace(tzinfo=None))

        assert product.updated_at == later
        assert product.updated_at.tzinfo is not None

    def test_defaults_to_current_utc_time(self):
        product = _make_product()
        assert product.created_at.tzinfo is not None
        assert product.updated_at == product.created_at
