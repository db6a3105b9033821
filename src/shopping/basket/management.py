"""Basket management: command and handler for starting a basket."""

import structlog
from protean import handle
from protean.fields import DateTime, String
from protean.utils.globals import current_domain

from shopping.basket.basket import Basket
from shopping.domain import shopping

logger = structlog.get_logger(__name__)


@shopping.command(part_of="Basket")
class CreateBasket:
    """Start an empty basket for a customer."""

    customer_email = String(required=True, max_length=255)
    requested_at = DateTime()


@shopping.command_handler(part_of=Basket)
class ManageBasketHandler:
    @handle(CreateBasket)
    def create_basket(self, command):
        basket = Basket.create(customer_email=command.customer_email, now=command.requested_at)
        current_domain.repository_for(Basket).add(basket)
        logger.info("basket_created", basket_id=str(basket.id))
        return str(basket.id)
