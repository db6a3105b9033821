"""Pydantic request/response schemas for the Shopping API.

These are external contracts, kept separate from the internal Protean
commands. Monetary amounts are ``Decimal`` and serialize as exact decimal
strings.
"""

from datetime import datetime
from decimal import Decimal

from pydantic import BaseModel, Field


# ---------------------------------------------------------------------------
# Basket Request Schemas
# ---------------------------------------------------------------------------
class CreateBasketRequest(BaseModel):
    customer_email: str

    model_config = {"json_schema_extra": {"examples": [{"customer_email": "john.doe@example.com"}]}}


class BasketLineSchema(BaseModel):
    product_id: str
    quantity: int


class AddItemsRequest(BaseModel):
    items: list[BasketLineSchema]

    model_config = {
        "json_schema_extra": {
            "examples": [
                {
                    "items": [
                        {"product_id": "prod-001", "quantity": 2},
                        {"product_id": "prod-002", "quantity": 1},
                    ]
                }
            ]
        }
    }


class AddItemRequest(BaseModel):
    quantity: int = 1


class ApplyDiscountRequest(BaseModel):
    code: str


class ShippingAddressSchema(BaseModel):
    country: str


class SetShippingRequest(BaseModel):
    shipping_address: ShippingAddressSchema

    model_config = {"json_schema_extra": {"examples": [{"shipping_address": {"country": "United Kingdom"}}]}}


# ---------------------------------------------------------------------------
# Catalogue / Discount Request Schemas
# ---------------------------------------------------------------------------
class AddProductRequest(BaseModel):
    name: str
    description: str | None = None
    price: Decimal
    is_discounted: bool = False
    discounted_price: Decimal | None = None
    stock_quantity: int = 0


class ChangeProductPricingRequest(BaseModel):
    price: Decimal | None = None
    is_discounted: bool | None = None
    discounted_price: Decimal | None = None


class CreateDiscountRequest(BaseModel):
    code: str = Field(min_length=1)
    discount_percentage: Decimal
    valid_to: datetime | None = None
    is_active: bool = True


# ---------------------------------------------------------------------------
# Response Schemas
# ---------------------------------------------------------------------------
class BasketItemResponse(BaseModel):
    id: str
    product_id: str
    product_name: str
    product_description: str | None = None
    quantity: int
    unit_price: Decimal
    line_total: Decimal
    is_discounted: bool
    discounted_price: Decimal
    added_at: datetime | None = None


class AppliedDiscountResponse(BaseModel):
    id: str
    code: str
    discount_percentage: Decimal


class BasketResponse(BaseModel):
    id: str
    customer_email: str
    items: list[BasketItemResponse]
    applied_discount: AppliedDiscountResponse | None = None
    shipping_address: ShippingAddressSchema | None = None
    shipping_cost: Decimal
    subtotal: Decimal
    discount_amount: Decimal
    subtotal_after_discount: Decimal
    vat_amount: Decimal
    total: Decimal
    total_without_vat: Decimal
    created_at: datetime | None = None
    updated_at: datetime | None = None


class BasketTotalResponse(BaseModel):
    basket_id: str
    total: Decimal
    includes_vat: bool


class BasketIdResponse(BaseModel):
    basket_id: str


class ProductIdResponse(BaseModel):
    product_id: str


class DiscountIdResponse(BaseModel):
    discount_id: str


class StatusResponse(BaseModel):
    status: str = "ok"
