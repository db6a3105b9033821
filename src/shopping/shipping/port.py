"""Shipping-rate port: maps a destination address to a shipping cost.

Basket code programs against this interface; adapters are swapped via the
``SHIPPING_RATES`` environment variable.
"""

from abc import ABC, abstractmethod
from decimal import Decimal


class ShippingRatePort(ABC):
    """Abstract interface for shipping-rate adapters."""

    @abstractmethod
    def cost_for(self, address) -> Decimal:
        """Return the shipping cost for ``address``, an object with a ``country`` attribute."""
        ...
