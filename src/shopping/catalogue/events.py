"""Domain events for the Product aggregate."""

from protean.fields import Boolean, DateTime, Identifier, Integer, String

from shopping.domain import shopping


@shopping.event(part_of="Product")
class ProductAdded:
    """A new product was added to the catalogue."""

    __version__ = 1

    product_id: Identifier(required=True)
    name: String(required=True)
    price: String(required=True)
    is_discounted: Boolean(required=True)
    discounted_price: String()
    stock_quantity: Integer(required=True)
    created_at: DateTime(required=True)


@shopping.event(part_of="Product")
class ProductPricingChanged:
    """A product's catalogue price or discount flag changed.

    Baskets price their lines from the live product, so this change is
    reflected in every basket holding the product the next time it is read.
    """

    __version__ = 1

    product_id: Identifier(required=True)
    previous_price: String(required=True)
    price: String(required=True)
    is_discounted: Boolean(required=True)
    discounted_price: String()
    changed_at: DateTime(required=True)
