"""Basket shipping: command and handler for assigning a shipping address."""

from protean import handle
from protean.fields import DateTime, Identifier, String
from protean.utils.globals import current_domain

from shopping.basket.basket import Basket, ShippingAddress
from shopping.domain import shopping
from shopping.shipping import calculate_shipping_cost


@shopping.command(part_of="Basket")
class AddShippingAddress:
    basket_id = Identifier(required=True)
    country = String(required=True, max_length=100)
    requested_at = DateTime()


@shopping.command_handler(part_of=Basket)
class ShippingAddressHandler:
    @handle(AddShippingAddress)
    def add_shipping_address(self, command):
        repo = current_domain.repository_for(Basket)
        basket = repo.get(command.basket_id)

        address = ShippingAddress(country=command.country, customer_email=basket.customer_email)
        basket.set_shipping_address(
            address,
            calculate_shipping_cost(address),
            now=command.requested_at,
        )
        repo.add(basket)
