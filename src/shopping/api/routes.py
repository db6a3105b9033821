"""FastAPI routes for the Shopping domain: baskets, products and discount codes."""

import json

from fastapi import APIRouter
from protean.utils.globals import current_domain

from shopping.api.schemas import (
    AddItemRequest,
    AddItemsRequest,
    AddProductRequest,
    ApplyDiscountRequest,
    BasketIdResponse,
    BasketResponse,
    BasketTotalResponse,
    ChangeProductPricingRequest,
    CreateBasketRequest,
    CreateDiscountRequest,
    DiscountIdResponse,
    ProductIdResponse,
    SetShippingRequest,
    StatusResponse,
)
from shopping.basket.discounts import ApplyDiscountCode
from shopping.basket.items import AddItemsToBasket, RemoveItemFromBasket, UpdateBasketItemQuantity
from shopping.basket.management import CreateBasket
from shopping.basket.shipping import AddShippingAddress
from shopping.basket.summary import basket_summary, basket_total
from shopping.catalogue.management import AddProduct, ChangeProductPricing
from shopping.catalogue.product import Product
from shopping.discount.management import CreateDiscount, DeactivateDiscount


def _optional_text(value):
    return None if value is None else str(value)


# ---------------------------------------------------------------------------
# Basket Router
# ---------------------------------------------------------------------------
basket_router = APIRouter(prefix="/baskets", tags=["baskets"])


@basket_router.post("", status_code=201, response_model=BasketIdResponse)
async def create_basket(body: CreateBasketRequest) -> BasketIdResponse:
    result = current_domain.process(CreateBasket(customer_email=body.customer_email), asynchronous=False)
    return BasketIdResponse(basket_id=result)


@basket_router.get("/{basket_id}", response_model=BasketResponse)
async def get_basket(basket_id: str) -> BasketResponse:
    return BasketResponse(**basket_summary(basket_id))


@basket_router.post("/{basket_id}/items", response_model=BasketResponse)
async def add_basket_items(basket_id: str, body: AddItemsRequest) -> BasketResponse:
    command = AddItemsToBasket(
        basket_id=basket_id,
        items=json.dumps([line.model_dump() for line in body.items]),
    )
    current_domain.process(command, asynchronous=False)
    return BasketResponse(**basket_summary(basket_id))


@basket_router.post("/{basket_id}/items/{product_id}", response_model=BasketResponse)
async def add_basket_item(basket_id: str, product_id: str, body: AddItemRequest | None = None) -> BasketResponse:
    quantity = body.quantity if body else 1
    command = AddItemsToBasket(
        basket_id=basket_id,
        items=json.dumps([{"product_id": product_id, "quantity": quantity}]),
    )
    current_domain.process(command, asynchronous=False)
    return BasketResponse(**basket_summary(basket_id))


@basket_router.put("/{basket_id}/items/{item_id}/quantity/{quantity}", response_model=BasketResponse)
async def update_basket_item_quantity(basket_id: str, item_id: str, quantity: int) -> BasketResponse:
    command = UpdateBasketItemQuantity(
        basket_id=basket_id,
        item_id=item_id,
        quantity=quantity,
    )
    current_domain.process(command, asynchronous=False)
    return BasketResponse(**basket_summary(basket_id))


@basket_router.delete("/{basket_id}/items/{item_id}", response_model=BasketResponse)
async def remove_basket_item(basket_id: str, item_id: str) -> BasketResponse:
    current_domain.process(RemoveItemFromBasket(basket_id=basket_id, item_id=item_id), asynchronous=False)
    return BasketResponse(**basket_summary(basket_id))


@basket_router.post("/{basket_id}/discount", response_model=BasketResponse)
async def apply_basket_discount(basket_id: str, body: ApplyDiscountRequest) -> BasketResponse:
    current_domain.process(ApplyDiscountCode(basket_id=basket_id, code=body.code), asynchronous=False)
    return BasketResponse(**basket_summary(basket_id))


@basket_router.put("/{basket_id}/shipping", response_model=BasketResponse)
async def set_basket_shipping(basket_id: str, body: SetShippingRequest) -> BasketResponse:
    command = AddShippingAddress(
        basket_id=basket_id,
        country=body.shipping_address.country,
    )
    current_domain.process(command, asynchronous=False)
    return BasketResponse(**basket_summary(basket_id))


@basket_router.get("/{basket_id}/total", response_model=BasketTotalResponse)
async def get_basket_total(basket_id: str) -> BasketTotalResponse:
    return BasketTotalResponse(basket_id=basket_id, total=basket_total(basket_id), includes_vat=True)


@basket_router.get("/{basket_id}/total/excluding-vat", response_model=BasketTotalResponse)
async def get_basket_total_excluding_vat(basket_id: str) -> BasketTotalResponse:
    return BasketTotalResponse(
        basket_id=basket_id,
        total=basket_total(basket_id, include_vat=False),
        includes_vat=False,
    )


# ---------------------------------------------------------------------------
# Product Router
# ---------------------------------------------------------------------------
product_router = APIRouter(prefix="/products", tags=["products"])


def _product_payload(product):
    return {
        "id": str(product.id),
        "name": product.name,
        "description": product.description,
        "price": product.price,
        "is_discounted": product.is_discounted,
        "discounted_price": product.discounted_price,
        "effective_price": str(product.effective_unit_price()),
        "stock_quantity": product.stock_quantity,
    }


@product_router.post("", status_code=201, response_model=ProductIdResponse)
async def add_product(body: AddProductRequest) -> ProductIdResponse:
    command = AddProduct(
        name=body.name,
        description=body.description,
        price=str(body.price),
        is_discounted=body.is_discounted,
        discounted_price=_optional_text(body.discounted_price),
        stock_quantity=body.stock_quantity,
    )
    result = current_domain.process(command, asynchronous=False)
    return ProductIdResponse(product_id=result)


@product_router.get("")
async def list_products():
    products = current_domain.repository_for(Product)._dao.query.all().items
    return [_product_payload(product) for product in products]


@product_router.get("/{product_id}")
async def get_product(product_id: str):
    return _product_payload(current_domain.repository_for(Product).get(product_id))


@product_router.put("/{product_id}/pricing", response_model=StatusResponse)
async def change_product_pricing(product_id: str, body: ChangeProductPricingRequest) -> StatusResponse:
    command = ChangeProductPricing(
        product_id=product_id,
        price=_optional_text(body.price),
        is_discounted=body.is_discounted,
        discounted_price=_optional_text(body.discounted_price),
    )
    current_domain.process(command, asynchronous=False)
    return StatusResponse()


# ---------------------------------------------------------------------------
# Discount Router
# ---------------------------------------------------------------------------
discount_router = APIRouter(prefix="/discounts", tags=["discounts"])


@discount_router.post("", status_code=201, response_model=DiscountIdResponse)
async def create_discount(body: CreateDiscountRequest) -> DiscountIdResponse:
    command = CreateDiscount(
        code=body.code,
        discount_percentage=str(body.discount_percentage),
        valid_to=body.valid_to,
        is_active=body.is_active,
    )
    result = current_domain.process(command, asynchronous=False)
    return DiscountIdResponse(discount_id=result)


@discount_router.put("/{discount_id}/deactivate", response_model=StatusResponse)
async def deactivate_discount(discount_id: str) -> StatusResponse:
    current_domain.process(DeactivateDiscount(discount_id=discount_id), asynchronous=False)
    return StatusResponse()
