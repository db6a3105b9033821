"""Product aggregate: the catalogue entry a basket line points at.

Amounts are held as decimal text. Use ``price_amount()``,
``discounted_price_amount()`` and ``effective_unit_price()`` to read them as
``Decimal``.
"""

from protean import atomic_change, invariant
from protean.exceptions import ValidationError
from protean.fields import Boolean, DateTime, Integer, String, Text

from shopping.catalogue.events import ProductAdded, ProductPricingChanged
from shopping.domain import shopping
from shopping.shared.clock import as_utc, utc_now
from shopping.shared.money import ZERO, as_text, is_decimal_text, to_decimal


def amount_text(field_name, value):
    """Convert a supplied amount to decimal text, reporting bad input against ``field_name``."""
    try:
        return as_text(value)
    except ValueError:
        raise ValidationError({field_name: [f"'{value}' is not a valid decimal amount"]}) from None


@shopping.aggregate
class Product:
    name: String(required=True, max_length=255)
    description: Text()
    price: String(required=True, max_length=50)
    is_discounted: Boolean(default=False)
    discounted_price: String(max_length=50, default="0")
    stock_quantity: Integer(default=0)
    created_at: DateTime()
    updated_at: DateTime()

    @invariant.post
    def amounts_must_be_decimal_text(self):
        for field_name in ("price", "discounted_price"):
            value = getattr(self, field_name)
            if value is not None and not is_decimal_text(value):
                raise ValidationError({field_name: [f"'{value}' is not a valid decimal amount"]})

    @classmethod
    def create(
        cls,
        name,
        price,
        description=None,
        is_discounted=False,
        discounted_price=None,
        stock_quantity=0,
        now=None,
    ):
        now = as_utc(now) or utc_now()
        product = cls(
            name=name,
            description=description,
            price=amount_text("price", price),
            is_discounted=bool(is_discounted),
            discounted_price=amount_text("discounted_price", discounted_price),
            stock_quantity=stock_quantity,
            created_at=now,
            updated_at=now,
        )
        product.raise_(
            ProductAdded(
                product_id=str(product.id),
                name=product.name,
                price=product.price,
                is_discounted=product.is_discounted,
                discounted_price=product.discounted_price,
                stock_quantity=product.stock_quantity,
                created_at=now,
            )
        )
        return product

    # -------------------------------------------------------------------
    # Pricing
    # -------------------------------------------------------------------
    def price_amount(self):
        return to_decimal(self.price)

    def discounted_price_amount(self):
        return to_decimal(self.discounted_price)

    def effective_unit_price(self):
        """The price a basket pays per unit right now.

        The discounted price wins only when the product is flagged as
        discounted and that price is greater than zero. A zero discounted
        price falls back to the catalogue price.
        """
        discounted = self.discounted_price_amount()
        if self.is_discounted and discounted > ZERO:
            return discounted
        return self.price_amount()

    def has_stock_for(self, quantity):
        return (self.stock_quantity or 0) >= quantity

    def change_pricing(self, price=None, is_discounted=None, discounted_price=None, now=None):
        """Change the catalogue price and/or the discount flag and price."""
        previous_price = self.price
        with atomic_change(self):
            if price is not None:
                self.price = amount_text("price", price)
            if is_discounted is not None:
                self.is_discounted = bool(is_discounted)
            if discounted_price is not None:
                self.discounted_price = amount_text("discounted_price", discounted_price)
            self.updated_at = as_utc(now) or utc_now()

        self.raise_(
            ProductPricingChanged(
                product_id=str(self.id),
                previous_price=previous_price,
                price=self.price,
                is_discounted=self.is_discounted,
                discounted_price=self.discounted_price,
                changed_at=self.updated_at,
            )
        )


def effective_unit_price(product):
    """Resolve the effective unit price of ``product``.

    A missing product means a basket line points at something the catalogue no
    longer knows, which is a data-integrity failure rather than a user error.
    """
    if product is None:
        raise ValueError("Product could not be resolved for basket item")
    return product.effective_unit_price()
