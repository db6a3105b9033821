"""Discount aggregate: a promotional code worth a percentage off eligible lines."""

from protean.exceptions import ValidationError
from protean.fields import Boolean, DateTime, String

from shopping.catalogue.product import amount_text
from shopping.discount import policy
from shopping.discount.events import DiscountCreated, DiscountDeactivated
from shopping.domain import shopping
from shopping.shared.clock import as_utc, utc_now
from shopping.shared.money import to_decimal


@shopping.aggregate
class Discount:
    code: String(required=True, max_length=50)
    discount_percentage: String(required=True, max_length=50)
    is_active: Boolean(default=True)
    valid_to: DateTime()
    created_at: DateTime()

    @classmethod
    def create(cls, code, discount_percentage, valid_to=None, is_active=True, now=None):
        if not code or not code.strip():
            raise ValidationError({"code": ["Discount code is required"]})

        now = as_utc(now) or utc_now()
        discount = cls(
            code=code,
            discount_percentage=amount_text("discount_percentage", discount_percentage),
            is_active=is_active,
            valid_to=as_utc(valid_to),
            created_at=now,
        )
        discount.raise_(
            DiscountCreated(
                discount_id=str(discount.id),
                code=discount.code,
                discount_percentage=discount.discount_percentage,
                valid_to=discount.valid_to,
                created_at=now,
            )
        )
        return discount

    def percentage(self):
        return to_decimal(self.discount_percentage)

    def is_valid(self, now=None):
        return policy.is_valid(self, now or utc_now())

    def deactivate(self, now=None):
        if not self.is_active:
            return

        self.is_active = False
        self.raise_(
            DiscountDeactivated(
                discount_id=str(self.id),
                code=self.code,
                deactivated_at=as_utc(now) or utc_now(),
            )
        )
