"""Catalogue management: commands and handler for adding and repricing products."""

import structlog
from protean import handle
from protean.fields import Boolean, DateTime, Identifier, Integer, String, Text
from protean.utils.globals import current_domain

from shopping.catalogue.product import Product
from shopping.domain import shopping

logger = structlog.get_logger(__name__)


@shopping.command(part_of="Product")
class AddProduct:
    name: String(required=True, max_length=255)
    description: Text()
    price: String(required=True, max_length=50)
    is_discounted: Boolean(default=False)
    discounted_price: String(max_length=50)
    stock_quantity: Integer(default=0)
    requested_at: DateTime()


@shopping.command(part_of="Product")
class ChangeProductPricing:
    product_id: Identifier(required=True)
    price: String(max_length=50)
    is_discounted: Boolean()
    discounted_price: String(max_length=50)
    requested_at: DateTime()


@shopping.command_handler(part_of=Product)
class ManageCatalogueHandler:
    @handle(AddProduct)
    def add_product(self, command):
        product = Product.create(
            name=command.name,
            description=command.description,
            price=command.price,
            is_discounted=command.is_discounted,
            discounted_price=command.discounted_price,
            stock_quantity=command.stock_quantity,
            now=command.requested_at,
        )
        current_domain.repository_for(Product).add(product)
        logger.info("product_added", product_id=str(product.id), price=product.price)
        return str(product.id)

    @handle(ChangeProductPricing)
    def change_product_pricing(self, command):
        repo = current_domain.repository_for(Product)
        product = repo.get(command.product_id)
        product.change_pricing(
            price=command.price,
            is_discounted=command.is_discounted,
            discounted_price=command.discounted_price,
            now=command.requested_at,
        )
        repo.add(product)
