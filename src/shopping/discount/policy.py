"""Discount policy: when a code may be applied and what it takes off a basket.

Promotional codes never stack with catalogue discounts. Only lines whose
product is not already discounted in the catalogue count towards the amount a
code is applied to.
"""

from shopping.shared.clock import as_utc
from shopping.shared.money import ZERO, percentage_of, total_of


def is_valid(discount, now) -> bool:
    """A code is valid while it is active and ``now`` is strictly before ``valid_to``.

    A missing ``valid_to`` means the code never expires.
    """
    if discount is None or not discount.is_active:
        return False
    if discount.valid_to is None:
        return True
    return as_utc(discount.valid_to) > as_utc(now)


def eligible_amount(items, products):
    """Sum of line totals over items whose product is not catalogue-discounted."""
    eligible = []
    for item in items:
        product = products.get(str(item.product_id))
        if product is None:
            raise ValueError(f"Product {item.product_id} could not be resolved for basket item {item.id}")
        if not product.is_discounted:
            eligible.append(item.line_total(product))
    return total_of(eligible)


def discount_amount(percentage, items, products):
    if percentage is None:
        return ZERO
    return percentage_of(eligible_amount(items, products), percentage)
