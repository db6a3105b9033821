"""Discount code management: commands, handler and code lookup."""

import structlog
from protean import handle
from protean.exceptions import ObjectNotFoundError, ValidationError
from protean.fields import Boolean, DateTime, Identifier, String
from protean.utils.globals import current_domain

from shopping.discount.discount import Discount
from shopping.domain import shopping

logger = structlog.get_logger(__name__)


def find_discount_by_code(code):
    """Look up a discount by its exact, case-sensitive code."""
    repo = current_domain.repository_for(Discount)
    matches = repo._dao.query.filter(code=code).all().items
    # Exact match regardless of the provider's collation
    matches = [d for d in matches if d.code == code]
    if not matches:
        raise ObjectNotFoundError({"code": [f"Discount code '{code}' not found"]})
    return matches[0]


@shopping.command(part_of="Discount")
class CreateDiscount:
    code: String(required=True, max_length=50)
    discount_percentage: String(required=True, max_length=50)
    valid_to: DateTime()
    is_active: Boolean(default=True)
    requested_at: DateTime()


@shopping.command(part_of="Discount")
class DeactivateDiscount:
    discount_id: Identifier(required=True)
    requested_at: DateTime()


@shopping.command_handler(part_of=Discount)
class ManageDiscountsHandler:
    @handle(CreateDiscount)
    def create_discount(self, command):
        repo = current_domain.repository_for(Discount)

        existing = repo._dao.query.filter(code=command.code).all()
        if any(d.code == command.code for d in existing.items):
            raise ValidationError({"code": [f"Discount code '{command.code}' already exists"]})

        discount = Discount.create(
            code=command.code,
            discount_percentage=command.discount_percentage,
            valid_to=command.valid_to,
            is_active=command.is_active,
            now=command.requested_at,
        )
        repo.add(discount)
        logger.info("discount_created", discount_id=str(discount.id), code=discount.code)
        return str(discount.id)

    @handle(DeactivateDiscount)
    def deactivate_discount(self, command):
        repo = current_domain.repository_for(Discount)
        discount = repo.get(command.discount_id)
        discount.deactivate(now=command.requested_at)
        repo.add(discount)
