"""Basket aggregate (CQRS): a customer's in-progress order with live pricing.

The basket owns its lines, at most one applied discount code and a shipping
selection. Monetary totals are never stored: they are derived on every read
from the live catalogue, so a product price change shows up in every basket
holding that product. Callers pass the resolved catalogue as a ``products``
mapping of product id to ``Product``.

Every mutation accepts an optional ``now``. It defaults to the current UTC
time and may never be earlier than the basket's ``created_at``.
"""

from protean import invariant
from protean.exceptions import ObjectNotFoundError, ValidationError
from protean.fields import DateTime, HasMany, Identifier, Integer, String, ValueObject

from shopping.basket.events import (
    BasketCreated,
    BasketItemAdded,
    BasketItemQuantityUpdated,
    BasketItemRemoved,
    DiscountApplied,
    ShippingAddressSet,
)
from shopping.catalogue.product import effective_unit_price
from shopping.discount import policy
from shopping.domain import shopping
from shopping.shared.clock import as_utc, utc_now
from shopping.shared.money import (
    ZERO,
    add,
    is_decimal_text,
    multiply,
    percentage_of,
    subtract,
    to_decimal,
    total_of,
)

DEFAULT_VAT_RATE = 20


def ensure_positive_quantity(quantity):
    if isinstance(quantity, bool) or not isinstance(quantity, int) or quantity <= 0:
        raise ValidationError({"quantity": ["Quantity must be greater than zero"]})
    return quantity


@shopping.value_object(part_of="Basket")
class AppliedDiscount:
    """The discount code a basket currently carries, with its resolved percentage."""

    discount_id = Identifier(required=True)
    code = String(required=True, max_length=50)
    discount_percentage = String(required=True, max_length=50)

    def percentage(self):
        return to_decimal(self.discount_percentage)


@shopping.value_object(part_of="Basket")
class ShippingAddress:
    country = String(required=True, max_length=100)
    customer_email = String(max_length=255)


@shopping.entity(part_of="Basket")
class BasketItem:
    product_id = Identifier(required=True)
    quantity = Integer(required=True, min_value=1)
    unit_price = String(required=True, max_length=50)  # Catalogue price when added
    added_at = DateTime()

    def unit_price_amount(self):
        return to_decimal(self.unit_price)

    def set_quantity(self, quantity):
        self.quantity = ensure_positive_quantity(quantity)

    def line_total(self, product):
        return multiply(effective_unit_price(product), self.quantity)


@shopping.aggregate
class Basket:
    customer_email = String(required=True, max_length=255)
    items = HasMany(BasketItem)
    applied_discount = ValueObject(AppliedDiscount)
    shipping_address = ValueObject(ShippingAddress)
    shipping_cost = String(max_length=50, default="0")
    created_at = DateTime()
    updated_at = DateTime()

    @invariant.post
    def shipping_cost_must_be_non_negative(self):
        if not is_decimal_text(self.shipping_cost):
            raise ValidationError({"shipping_cost": [f"'{self.shipping_cost}' is not a valid decimal amount"]})
        if to_decimal(self.shipping_cost) < ZERO:
            raise ValidationError({"shipping_cost": ["Shipping cost cannot be negative"]})

    @invariant.post
    def updated_at_cannot_precede_created_at(self):
        if self.created_at and self.updated_at and as_utc(self.updated_at) < as_utc(self.created_at):
            raise ValidationError({"updated_at": ["Basket cannot be updated before it was created"]})

    # -------------------------------------------------------------------
    # Factory
    # -------------------------------------------------------------------
    @classmethod
    def create(cls, customer_email, now=None):
        now = as_utc(now) or utc_now()
        basket = cls(
            customer_email=customer_email,
            shipping_cost="0",
            created_at=now,
            updated_at=now,
        )
        basket.raise_(
            BasketCreated(
                basket_id=str(basket.id),
                customer_email=customer_email,
                created_at=now,
            )
        )
        return basket

    def _resolve_now(self, now):
        now = as_utc(now) or utc_now()
        if self.created_at and now < as_utc(self.created_at):
            raise ValidationError({"updated_at": ["Timestamp cannot be earlier than basket creation"]})
        return now

    def find_item(self, item_id):
        return next((i for i in self.items if str(i.id) == str(item_id)), None)

    def find_item_for_product(self, product_id):
        return next((i for i in self.items if str(i.product_id) == str(product_id)), None)

    # -------------------------------------------------------------------
    # Item management
    # -------------------------------------------------------------------
    def add_products(self, lines, now=None):
        """Add ``(product, quantity)`` lines to the basket.

        Every line is checked before anything changes, so a bad quantity or a
        product short on stock leaves the basket exactly as it was. Stock is
        only checked, never reserved. A product already in the basket has its
        line quantity increased instead of getting a second line.
        """
        lines = list(lines)
        now = self._resolve_now(now)

        for product, quantity in lines:
            ensure_positive_quantity(quantity)
            if product is None:
                raise ValueError("Product could not be resolved for basket item")
            if not product.has_stock_for(quantity):
                raise ValidationError(
                    {
                        "stock_quantity": [
                            f"Insufficient stock for product '{product.name}'. "
                            f"Available: {product.stock_quantity}, Requested: {quantity}"
                        ]
                    }
                )

        for product, quantity in lines:
            existing = self.find_item_for_product(product.id)
            if existing:
                existing.set_quantity(existing.quantity + quantity)
                item = existing
            else:
                item = BasketItem(
                    product_id=str(product.id),
                    quantity=quantity,
                    unit_price=product.price,
                    added_at=now,
                )
                self.add_items(item)

            self.raise_(
                BasketItemAdded(
                    basket_id=str(self.id),
                    item_id=str(item.id),
                    product_id=str(product.id),
                    quantity_added=quantity,
                    quantity=item.quantity,
                    unit_price=item.unit_price,
                    added_at=now,
                )
            )

        self.updated_at = now

    def remove_item(self, item_id, now=None):
        """Remove a line. Returns ``False``, and changes nothing, when the line is not in the basket."""
        item = self.find_item(item_id)
        if item is None:
            return False

        now = self._resolve_now(now)
        self.remove_items(item)
        self.updated_at = now

        self.raise_(
            BasketItemRemoved(
                basket_id=str(self.id),
                item_id=str(item_id),
                product_id=str(item.product_id),
            )
        )
        return True

    def update_item_quantity(self, item_id, quantity, now=None):
        """Set a line's quantity. Zero or less removes the line."""
        item = self.find_item(item_id)
        if item is None:
            raise ObjectNotFoundError({"item_id": [f"Item {item_id} not found in basket"]})
        if isinstance(quantity, bool) or not isinstance(quantity, int):
            raise ValidationError({"quantity": ["Quantity must be a whole number"]})

        now = self._resolve_now(now)

        if quantity <= 0:
            self.remove_items(item)
            self.raise_(
                BasketItemRemoved(
                    basket_id=str(self.id),
                    item_id=str(item.id),
                    product_id=str(item.product_id),
                )
            )
        else:
            previous_quantity = item.quantity
            item.set_quantity(quantity)
            self.raise_(
                BasketItemQuantityUpdated(
                    basket_id=str(self.id),
                    item_id=str(item.id),
                    previous_quantity=previous_quantity,
                    new_quantity=quantity,
                )
            )

        self.updated_at = now

    # -------------------------------------------------------------------
    # Discount and shipping
    # -------------------------------------------------------------------
    def apply_discount(self, discount, now=None):
        """Apply a discount code, replacing any code applied earlier."""
        now = self._resolve_now(now)
        if not policy.is_valid(discount, now):
            raise ValidationError({"discount": ["Discount is not valid"]})

        replaced_code = self.applied_discount.code if self.applied_discount else None
        self.applied_discount = AppliedDiscount(
            discount_id=str(discount.id),
            code=discount.code,
            discount_percentage=discount.discount_percentage,
        )
        self.updated_at = now

        self.raise_(
            DiscountApplied(
                basket_id=str(self.id),
                discount_id=str(discount.id),
                code=discount.code,
                discount_percentage=discount.discount_percentage,
                replaced_code=replaced_code,
            )
        )

    def set_shipping_address(self, address, shipping_cost, now=None):
        """Replace the shipping address and the cost computed for it."""
        if address is None:
            raise ValidationError({"shipping_address": ["Shipping address is required"]})
        try:
            cost = to_decimal(shipping_cost)
        except ValueError:
            raise ValidationError({"shipping_cost": [f"'{shipping_cost}' is not a valid decimal amount"]}) from None
        if cost < ZERO:
            raise ValidationError({"shipping_cost": ["Shipping cost cannot be negative"]})

        now = self._resolve_now(now)
        self.shipping_address = address
        self.shipping_cost = str(cost)
        self.updated_at = now

        self.raise_(
            ShippingAddressSet(
                basket_id=str(self.id),
                country=address.country,
                shipping_cost=self.shipping_cost,
            )
        )

    # -------------------------------------------------------------------
    # Derived totals
    # -------------------------------------------------------------------
    def _product_for(self, item, products):
        product = products.get(str(item.product_id))
        if product is None:
            raise ValueError(f"Product {item.product_id} could not be resolved for basket item {item.id}")
        return product

    def shipping_cost_amount(self):
        return to_decimal(self.shipping_cost)

    def subtotal(self, products):
        return total_of(item.line_total(self._product_for(item, products)) for item in self.items)

    def discount_amount(self, products):
        if self.applied_discount is None:
            return ZERO
        return policy.discount_amount(self.applied_discount.percentage(), self.items, products)

    def subtotal_after_discount(self, products):
        return subtract(self.subtotal(products), self.discount_amount(products))

    def total_without_vat(self, products):
        return add(self.subtotal_after_discount(products), self.shipping_cost_amount())

    def vat_amount(self, products, vat_rate=DEFAULT_VAT_RATE):
        """VAT on the discounted subtotal plus shipping."""
        return percentage_of(self.total_without_vat(products), vat_rate)

    def total(self, products, vat_rate=DEFAULT_VAT_RATE):
        return add(self.total_without_vat(products), self.vat_amount(products, vat_rate))
