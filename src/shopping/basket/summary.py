"""Read side for baskets: resolve the live catalogue and price a basket.

Amounts come back as ``Decimal``; the API layer renders them as exact decimal
strings.
"""

import os

from protean.exceptions import ObjectNotFoundError
from protean.utils.globals import current_domain

from shopping.basket.basket import DEFAULT_VAT_RATE, Basket
from shopping.catalogue.product import Product
from shopping.shared.money import to_decimal


def configured_vat_rate():
    """VAT percentage for reads, from ``BASKET_VAT_RATE`` (default 20)."""
    return to_decimal(os.environ.get("BASKET_VAT_RATE", DEFAULT_VAT_RATE))


def products_for(basket):
    """Load the product behind every basket line, keyed by product id."""
    repo = current_domain.repository_for(Product)
    products = {}
    for item in basket.items:
        product_id = str(item.product_id)
        if product_id in products:
            continue
        try:
            products[product_id] = repo.get(product_id)
        except ObjectNotFoundError:
            raise ValueError(f"Product {product_id} could not be resolved for basket item {item.id}") from None
    return products


def summarize(basket, products, vat_rate=None):
    if vat_rate is None:
        vat_rate = configured_vat_rate()

    items = []
    for item in basket.items:
        product = products.get(str(item.product_id))
        if product is None:
            raise ValueError(f"Product {item.product_id} could not be resolved for basket item {item.id}")
        items.append(
            {
                "id": str(item.id),
                "product_id": str(item.product_id),
                "product_name": product.name,
                "product_description": product.description,
                "quantity": item.quantity,
                "unit_price": item.unit_price_amount(),
                "line_total": item.line_total(product),
                "is_discounted": bool(product.is_discounted),
                "discounted_price": product.discounted_price_amount(),
                "added_at": item.added_at,
            }
        )

    applied = basket.applied_discount
    return {
        "id": str(basket.id),
        "customer_email": basket.customer_email,
        "items": items,
        "applied_discount": (
            {
                "id": str(applied.discount_id),
                "code": applied.code,
                "discount_percentage": applied.percentage(),
            }
            if applied
            else None
        ),
        "shipping_address": (
            {"country": basket.shipping_address.country} if basket.shipping_address else None
        ),
        "shipping_cost": basket.shipping_cost_amount(),
        "subtotal": basket.subtotal(products),
        "discount_amount": basket.discount_amount(products),
        "subtotal_after_discount": basket.subtotal_after_discount(products),
        "vat_amount": basket.vat_amount(products, vat_rate),
        "total": basket.total(products, vat_rate),
        "total_without_vat": basket.total_without_vat(products),
        "created_at": basket.created_at,
        "updated_at": basket.updated_at,
    }


def basket_summary(basket_id):
    basket = current_domain.repository_for(Basket).get(basket_id)
    return summarize(basket, products_for(basket))


def basket_total(basket_id, include_vat=True):
    basket = current_domain.repository_for(Basket).get(basket_id)
    products = products_for(basket)
    if include_vat:
        return basket.total(products, configured_vat_rate())
    return basket.total_without_vat(products)
