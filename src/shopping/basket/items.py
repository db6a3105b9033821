"""Basket item management: commands and handler."""

import json

import structlog
from protean import handle
from protean.exceptions import ValidationError
from protean.fields import DateTime, Identifier, Integer, Text
from protean.utils.globals import current_domain

from shopping.basket.basket import Basket, ensure_positive_quantity
from shopping.catalogue.product import Product
from shopping.domain import shopping

logger = structlog.get_logger(__name__)


def parse_lines(raw_lines):
    """Decode the JSON line list carried by ``AddItemsToBasket``."""
    if isinstance(raw_lines, str):
        try:
            raw_lines = json.loads(raw_lines)
        except json.JSONDecodeError:
            raise ValidationError({"items": ["Items must be a valid JSON list"]}) from None

    if not isinstance(raw_lines, list):
        raise ValidationError({"items": ["Items must be a list of product_id and quantity pairs"]})

    lines = []
    for raw in raw_lines:
        if not isinstance(raw, dict) or not raw.get("product_id"):
            raise ValidationError({"items": ["Each item needs a product_id and a quantity"]})
        lines.append((str(raw["product_id"]), raw.get("quantity")))
    return lines


@shopping.command(part_of="Basket")
class AddItemsToBasket:
    basket_id = Identifier(required=True)
    items = Text(required=True)  # JSON: list of {product_id, quantity}
    requested_at = DateTime()


@shopping.command(part_of="Basket")
class UpdateBasketItemQuantity:
    basket_id = Identifier(required=True)
    item_id = Identifier(required=True)
    quantity = Integer(required=True)  # Zero or less removes the line
    requested_at = DateTime()


@shopping.command(part_of="Basket")
class RemoveItemFromBasket:
    basket_id = Identifier(required=True)
    item_id = Identifier(required=True)
    requested_at = DateTime()


@shopping.command_handler(part_of=Basket)
class ManageBasketItemsHandler:
    @handle(AddItemsToBasket)
    def add_items_to_basket(self, command):
        repo = current_domain.repository_for(Basket)
        basket = repo.get(command.basket_id)

        product_repo = current_domain.repository_for(Product)
        resolved = []
        for product_id, quantity in parse_lines(command.items):
            ensure_positive_quantity(quantity)
            resolved.append((product_repo.get(product_id), quantity))

        basket.add_products(resolved, now=command.requested_at)
        repo.add(basket)
        logger.info("basket_items_added", basket_id=str(basket.id), lines=len(resolved))

    @handle(UpdateBasketItemQuantity)
    def update_basket_item_quantity(self, command):
        repo = current_domain.repository_for(Basket)
        basket = repo.get(command.basket_id)
        basket.update_item_quantity(
            item_id=command.item_id,
            quantity=command.quantity,
            now=command.requested_at,
        )
        repo.add(basket)

    @handle(RemoveItemFromBasket)
    def remove_item_from_basket(self, command):
        repo = current_domain.repository_for(Basket)
        basket = repo.get(command.basket_id)
        if basket.remove_item(item_id=command.item_id, now=command.requested_at):
            repo.add(basket)
        else:
            logger.debug("basket_item_already_absent", basket_id=str(basket.id), item_id=str(command.item_id))
