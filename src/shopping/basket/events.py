"""Domain events for the Basket aggregate."""

from protean.fields import DateTime, Identifier, Integer, String

from shopping.domain import shopping


@shopping.event(part_of="Basket")
class BasketCreated:
    """A customer started a new basket."""

    __version__ = 1

    basket_id = Identifier(required=True)
    customer_email = String(required=True)
    created_at = DateTime(required=True)


@shopping.event(part_of="Basket")
class BasketItemAdded:
    """A product was added to the basket, or an existing line grew."""

    __version__ = 1

    basket_id = Identifier(required=True)
    item_id = Identifier(required=True)
    product_id = Identifier(required=True)
    quantity_added = Integer(required=True)
    quantity = Integer(required=True)
    unit_price = String(required=True)
    added_at = DateTime(required=True)


@shopping.event(part_of="Basket")
class BasketItemQuantityUpdated:
    """The quantity of a basket line was set to a new value."""

    __version__ = 1

    basket_id = Identifier(required=True)
    item_id = Identifier(required=True)
    previous_quantity = Integer(required=True)
    new_quantity = Integer(required=True)


@shopping.event(part_of="Basket")
class BasketItemRemoved:
    """A line was removed from the basket."""

    __version__ = 1

    basket_id = Identifier(required=True)
    item_id = Identifier(required=True)
    product_id = Identifier(required=True)


@shopping.event(part_of="Basket")
class DiscountApplied:
    """A promotional code was applied to the basket, replacing any earlier one."""

    __version__ = 1

    basket_id = Identifier(required=True)
    discount_id = Identifier(required=True)
    code = String(required=True)
    discount_percentage = String(required=True)
    replaced_code = String()


@shopping.event(part_of="Basket")
class ShippingAddressSet:
    """A shipping address was assigned and its cost recorded."""

    __version__ = 1

    basket_id = Identifier(required=True)
    country = String(required=True)
    shipping_cost = String(required=True)
