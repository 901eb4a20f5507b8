# src/billing/domain/value_objects/payment_status.py
"""Invoice payment status: stored vs presented."""

from datetime import date
from enum import Enum


class PaymentStatus(str, Enum):
    """Stored payment status of an invoice."""

    PENDING = "pending"
    PAID = "paid"

    def __str__(self) -> str:
        return self.value


class PresentedStatus(str, Enum):
    """Status shown to accounting; ``overdue`` is derived, never stored."""

    PENDING = "pending"
    OVERDUE = "overdue"
    PAID = "paid"

    def __str__(self) -> str:
        return self.value


def presented_status(stored: PaymentStatus, due_date: date, today: date) -> PresentedStatus:
    if stored == PaymentStatus.PAID:
        return PresentedStatus.PAID
    if today > due_date:
        return PresentedStatus.OVERDUE
    return PresentedStatus.PENDING
