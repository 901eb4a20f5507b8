"""
Billing Calculator
Pure invoice arithmetic: attended headcount x rate, invoice numbering, terms
"""
from __future__ import annotations

from dataclasses import dataclass
from datetime import date, timedelta
from decimal import ROUND_HALF_UP, Decimal

PAYMENT_TERMS_DAYS = 30
_CENT = Decimal("0.01")
# Money columns are Numeric(12, 4)
STORED_LIMIT = Decimal("100000000")
_STORED_QUANTUM = Decimal("0.0001")


def fits_storage(amount: Decimal) -> bool:
    """True if ``amount`` persists exactly: below 10^8 with at most four decimal places."""
    return abs(amount) < STORED_LIMIT and amount == amount.quantize(_STORED_QUANTUM)


def to_money(amount: Decimal) -> Decimal:
    """Round to cents for presentation; stored amounts keep full precision."""
    return amount.quantize(_CENT, rounding=ROUND_HALF_UP)


def format_money(amount: Decimal) -> str:
    return f"{to_money(amount):.2f}"


def invoice_number(invoice_date: date, course_id: int) -> str:
    """``YYYYMMDD-{course_id}``: unique because a course is invoiced once."""
    return f"{invoice_date:%Y%m%d}-{course_id}"


@dataclass(frozen=True)
class InvoiceDraft:
    """Computed invoice figures, ready to persist."""

    course_id: int
    invoice_number: str
    invoice_date: date
    due_date: date
    attended_count: int
    rate: Decimal
    amount: Decimal


class BillingCalculator:
    """
    Computes the invoice for a course.

    The amount is ``attended_count * rate`` with no rounding; zero
    attendance is a valid 0.00 invoice. The rate must come from the
    pricing catalog; there is no default rate.
    """

    def __init__(self, payment_terms_days: int = PAYMENT_TERMS_DAYS) -> None:
        self.payment_terms_days = payment_terms_days

    def calculate(
        self,
        course_id: int,
        attended_count: int,
        rate: Decimal,
        invoice_date: date,
    ) -> InvoiceDraft:
        if attended_count < 0:
            raise ValueError("attended_count cannot be negative")
        if rate < 0:
            raise ValueError("rate cannot be negative")
        return InvoiceDraft(
            course_id=course_id,
            invoice_number=invoice_number(invoice_date, course_id),
            invoice_date=invoice_date,
            due_date=invoice_date + timedelta(days=self.payment_terms_days),
            attended_count=attended_count,
            rate=rate,
            amount=Decimal(attended_count) * rate,
        )
