"""Faker-based data generators for Locust load test scenarios.

Payloads match the field names expected by the Shopping API's Pydantic
request schemas. Amounts are sent as strings so they reach the domain as
exact decimals.
"""

import random
import uuid
from datetime import UTC, datetime, timedelta

from faker import Faker

fake = Faker()

DOMESTIC_COUNTRIES = ["UK", "United Kingdom", "uk", "UNITED KINGDOM"]
INTERNATIONAL_COUNTRIES = ["France", "Germany", "England", "U.K.", "Britain", "United States"]


def customer_email() -> str:
    """Generate unique customer emails like 'jane.smith.a1b2@example.org'."""
    local = fake.user_name()[:20]
    return f"{local}.{uuid.uuid4().hex[:4]}@{fake.free_email_domain()}"


def basket_data() -> dict:
    """Generate CreateBasketRequest payload."""
    return {"customer_email": customer_email()}


def price() -> str:
    return f"{random.randint(5, 500)}.{random.randint(0, 99):02d}"


def product_data(discounted: bool | None = None) -> dict:
    """Generate AddProductRequest payload with plenty of stock."""
    if discounted is None:
        discounted = random.random() < 0.3
    list_price = price()
    payload = {
        "name": f"{fake.word().title()} {fake.word().title()} {uuid.uuid4().hex[:4]}",
        "description": fake.sentence(nb_words=10),
        "price": list_price,
        "is_discounted": discounted,
        "stock_quantity": random.randint(500, 5000),
    }
    if discounted:
        whole = max(1, int(float(list_price)) - random.randint(1, 4))
        payload["discounted_price"] = f"{whole}.99"
    return payload


def discount_data() -> dict:
    """Generate CreateDiscountRequest payload for a code valid for a week."""
    return {
        "code": f"LT{uuid.uuid4().hex[:8].upper()}",
        "discount_percentage": str(random.choice([5, 10, 12.5, 15, 20])),
        "valid_to": (datetime.now(UTC) + timedelta(days=7)).isoformat(),
    }


def basket_lines(product_ids: list[str], max_lines: int = 3) -> dict:
    """Generate AddItemsRequest payload drawing from known products."""
    chosen = random.sample(product_ids, k=min(len(product_ids), random.randint(1, max_lines)))
    return {"items": [{"product_id": pid, "quantity": random.randint(1, 3)} for pid in chosen]}


def shipping_data(domestic: bool | None = None) -> dict:
    """Generate SetShippingRequest payload."""
    if domestic is None:
        domestic = random.random() < 0.6
    country = random.choice(DOMESTIC_COUNTRIES if domestic else INTERNATIONAL_COUNTRIES)
    return {"shipping_address": {"country": country}}
