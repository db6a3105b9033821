"""Shopping bounded context: baskets, the product catalogue, discount codes and shipping.

The Basket aggregate is a standard CQRS aggregate (not event sourced). Product
and Discount are owned here only so that baskets can resolve live prices and
promotional codes; from the basket's point of view both are read-only.
"""

from protean.domain import Domain

from shopping.utils.logging import configure_logging

configure_logging()

# Domain Composition Root
shopping = Domain(name="shopping")
