"""Demo catalogue: six products, a live and an expired discount code, one basket."""

from datetime import timedelta

import structlog
from protean.utils.globals import current_domain

from shopping.basket.management import CreateBasket
from shopping.catalogue.management import AddProduct
from shopping.discount.discount import Discount
from shopping.discount.management import CreateDiscount
from shopping.shared.clock import utc_now

logger = structlog.get_logger(__name__)

DEMO_PRODUCTS = [
    {
        "name": "Laptop Pro X1",
        "description": "14-inch ultrabook with 32GB RAM and 1TB SSD",
        "price": "1299.99",
        "stock_quantity": 8,
    },
    {
        "name": "Wireless Ergonomic Mouse",
        "description": "Vertical mouse with silent clicks and USB-C charging",
        "price": "34.99",
        "is_discounted": True,
        "discounted_price": "29.99",
        "stock_quantity": 45,
    },
    {
        "name": "USB-C Hub Premium",
        "description": "7-in-1 hub with HDMI, SD card reader and 100W passthrough",
        "price": "59.99",
        "stock_quantity": 0,
    },
    {
        "name": "Mechanical Gaming Keyboard",
        "description": "Hot-swappable switches with per-key RGB lighting",
        "price": "89.99",
        "is_discounted": True,
        "discounted_price": "69.99",
        "stock_quantity": 12,
    },
    {
        "name": "4K Webcam Pro",
        "description": "Ultra HD webcam with auto focus and dual microphones",
        "price": "149.99",
        "stock_quantity": 18,
    },
    {
        "name": "Monitor Light Bar",
        "description": "Asymmetric monitor lamp with adjustable colour temperature",
        "price": "79.99",
        "stock_quantity": 35,
    },
]

DEMO_CUSTOMER_EMAIL = "john.doe@example.com"


def seed_catalogue(now=None):
    """Load the demo data into the active domain.

    Does nothing if the ``SAVE10`` code already exists, so it is safe to run
    on every start. Returns the number of products added.
    """
    now = now or utc_now()

    existing = current_domain.repository_for(Discount)._dao.query.filter(code="SAVE10").all()
    if existing.items:
        logger.info("seed_skipped", reason="catalogue already seeded")
        return 0

    for product in DEMO_PRODUCTS:
        current_domain.process(AddProduct(requested_at=now, **product), asynchronous=False)

    current_domain.process(
        CreateDiscount(code="SAVE10", discount_percentage="10", valid_to=now + timedelta(days=30), requested_at=now),
        asynchronous=False,
    )
    current_domain.process(
        CreateDiscount(code="EXPIRED20", discount_percentage="20", valid_to=now - timedelta(days=5), requested_at=now),
        asynchronous=False,
    )
    current_domain.process(CreateBasket(customer_email=DEMO_CUSTOMER_EMAIL, requested_at=now), asynchronous=False)

    logger.info("catalogue_seeded", products=len(DEMO_PRODUCTS), discounts=2)
    return len(DEMO_PRODUCTS)
