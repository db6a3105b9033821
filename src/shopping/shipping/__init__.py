"""Shipping-rate adapter selection and cost calculation."""

import os

from protean.exceptions import ValidationError

_rates_instance = None


def get_shipping_rates():
    """Return the configured shipping-rate adapter (singleton).

    Uses the two-tier flat rate by default. Configure via the
    SHIPPING_RATES environment variable.
    """
    global _rates_instance
    if _rates_instance is None:
        adapter = os.environ.get("SHIPPING_RATES", "flat")
        if adapter == "flat":
            from shopping.shipping.flat_rate import FlatRateShipping

            _rates_instance = FlatRateShipping()
        else:
            raise ValueError(f"Unknown shipping rates adapter: {adapter}")
    return _rates_instance


def reset_shipping_rates():
    """Reset the shipping-rate singleton (useful for testing)."""
    global _rates_instance
    _rates_instance = None


def calculate_shipping_cost(address):
    if address is None:
        raise ValidationError({"shipping_address": ["Shipping address is required"]})
    return get_shipping_rates().cost_for(address)
