"""Two-tier flat-rate shipping: one price inside the UK, another everywhere else."""

from decimal import Decimal

from shopping.shipping.port import ShippingRatePort

DOMESTIC_COST = Decimal("5.99")
INTERNATIONAL_COST = Decimal("8.99")

# Compared case-insensitively, with no trimming or alias matching
DOMESTIC_COUNTRIES = ("uk", "united kingdom")


def is_domestic_country(country) -> bool:
    if not country:
        return False
    return country.casefold() in DOMESTIC_COUNTRIES


class FlatRateShipping(ShippingRatePort):
    def __init__(self, domestic_cost: Decimal = DOMESTIC_COST, international_cost: Decimal = INTERNATIONAL_COST):
        self.domestic_cost = domestic_cost
        self.international_cost = international_cost

    def cost_for(self, address) -> Decimal:
        if is_domestic_country(address.country):
            return self.domestic_cost
        return self.international_cost
