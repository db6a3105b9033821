"""Per-user state tracking for Locust load test scenarios.

Each Locust user instance maintains its own state; nothing is shared across
users. State tracks IDs returned by creation endpoints so follow-up
operations can reference them.
"""

from dataclasses import dataclass, field


@dataclass
class CatalogueState:
    """Products and discount codes a simulated user created for itself."""

    product_ids: list[str] = field(default_factory=list)
    discount_codes: list[str] = field(default_factory=list)


@dataclass
class BasketState:
    """Tracks state for a single basket lifecycle."""

    basket_id: str | None = None
    item_ids: list[str] = field(default_factory=list)
    last_total: str | None = None
