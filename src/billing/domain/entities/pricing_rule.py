# src/billing/domain/entities/pricing_rule.py
"""PricingRule entity - rate per attended student for an organization/course type."""

from datetime import datetime
from decimal import Decimal, InvalidOperation
from typing import Optional

from billing.domain.services.billing_calculator import fits_storage
from shared.domain.base_entity import BaseEntity
from shared.exceptions import ValidationError


def _validate_price(price: Decimal) -> Decimal:
    try:
        price = Decimal(price)
    except (InvalidOperation, TypeError, ValueError):
        raise ValidationError("Price must be a number.", details={"field": "price"})
    if not price.is_finite() or price < 0:
        raise ValidationError("Price must be zero or a positive amount.", details={"field": "price"})
    if not fits_storage(price):
        raise ValidationError(
            "Price must be below 100000000 with at most 4 decimal places.",
            details={"field": "price"},
        )
    return price


class PricingRule(BaseEntity):
    """Unique per (organization_id, course_type_id); absence means no price."""

    def __init__(
        self,
        id: Optional[int],
        organization_id: int,
        course_type_id: int,
        price: Decimal,
        created_at: Optional[datetime] = None,
        updated_at: Optional[datetime] = None,
    ):
        super().__init__(id, created_at=created_at, updated_at=updated_at)
        self.organization_id = organization_id
        self.course_type_id = course_type_id
        self.price = price

    @classmethod
    def create(cls, organization_id: int, course_type_id: int, price: Decimal) -> "PricingRule":
        return cls(
            id=None,
            organization_id=organization_id,
            course_type_id=course_type_id,
            price=_validate_price(price),
        )

    def change_price(self, price: Decimal) -> None:
        self.price = _validate_price(price)
        self.mark_updated()
