"""Domain events for the Discount aggregate."""

from protean.fields import DateTime, Identifier, String

from shopping.domain import shopping


@shopping.event(part_of="Discount")
class DiscountCreated:
    """A promotional discount code was created."""

    __version__ = 1

    discount_id: Identifier(required=True)
    code: String(required=True)
    discount_percentage: String(required=True)
    valid_to: DateTime()
    created_at: DateTime(required=True)


@shopping.event(part_of="Discount")
class DiscountDeactivated:
    """A discount code was switched off and can no longer be applied."""

    __version__ = 1

    discount_id: Identifier(required=True)
    code: String(required=True)
    deactivated_at: DateTime(required=True)
