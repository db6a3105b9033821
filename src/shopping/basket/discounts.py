"""Basket discount application: command and handler."""

import structlog
from protean import handle
from protean.fields import DateTime, Identifier, String
from protean.utils.globals import current_domain

from shopping.basket.basket import Basket
from shopping.discount.management import find_discount_by_code
from shopping.domain import shopping

logger = structlog.get_logger(__name__)


@shopping.command(part_of="Basket")
class ApplyDiscountCode:
    """Apply a promotional code to a basket. Codes are matched exactly, case included."""

    basket_id = Identifier(required=True)
    code = String(required=True, max_length=50)
    requested_at = DateTime()


@shopping.command_handler(part_of=Basket)
class ApplyDiscountHandler:
    @handle(ApplyDiscountCode)
    def apply_discount_code(self, command):
        repo = current_domain.repository_for(Basket)
        basket = repo.get(command.basket_id)
        discount = find_discount_by_code(command.code)
        basket.apply_discount(discount, now=command.requested_at)
        repo.add(basket)
        logger.info("discount_applied", basket_id=str(basket.id), code=discount.code)
