# src/billing/domain/entities/invoice.py
"""Invoice and Payment entities."""

from datetime import date, datetime
from decimal import Decimal
from typing import Optional

from billing.domain.services.billing_calculator import InvoiceDraft, fits_storage
from billing.domain.value_objects.payment_status import (
    PaymentStatus,
    PresentedStatus,
    presented_status,
)
from shared.domain.base_entity import BaseEntity
from shared.exceptions import ConflictError, ValidationError


class Invoice(BaseEntity):
    """
    One invoice per course. The amount is frozen at creation; later
    attendance edits are impossible because the course is invoiced.
    """

    def __init__(
        self,
        id: Optional[int],
        invoice_number: str,
        course_id: int,
        invoice_date: date,
        due_date: date,
        amount: Decimal,
        attended_count: int,
        payment_status: PaymentStatus = PaymentStatus.PENDING,
        paid_at: Optional[datetime] = None,
        created_at: Optional[datetime] = None,
        updated_at: Optional[datetime] = None,
    ):
        super().__init__(id, created_at=created_at, updated_at=updated_at)
        self.invoice_number = invoice_number
        self.course_id = course_id
        self.invoice_date = invoice_date
        self.due_date = due_date
        self.amount = amount
        self.attended_count = attended_count
        self.payment_status = payment_status
        self.paid_at = paid_at

    @classmethod
    def from_draft(cls, draft: InvoiceDraft) -> "Invoice":
        if not fits_storage(draft.amount):
            raise ValidationError(
                "Invoice amount exceeds the storable range.",
                details={"course_id": draft.course_id, "amount": str(draft.amount)},
            )
        return cls(
            id=None,
            invoice_number=draft.invoice_number,
            course_id=draft.course_id,
            invoice_date=draft.invoice_date,
            due_date=draft.due_date,
            amount=draft.amount,
            attended_count=draft.attended_count,
        )

    def presented_status(self, today: date) -> PresentedStatus:
        return presented_status(self.payment_status, self.due_date, today)

    def ensure_accepts_payment(self) -> None:
        if self.payment_status == PaymentStatus.PAID:
            raise ConflictError(
                f"Invoice {self.invoice_number} is already marked paid.",
                details={"invoice_id": self.id},
            )

    def mark_paid(self, when: datetime) -> None:
        """Explicit accounting confirmation; payments never flip this on their own."""
        self.ensure_accepts_payment()
        self.payment_status = PaymentStatus.PAID
        self.paid_at = when
        self.mark_updated()

    def require_id(self) -> int:
        if self.id is None:
            raise RuntimeError("Invoice has not been persisted yet")
        return self.id


class Payment(BaseEntity):
    """A (possibly partial) payment received against an invoice."""

    METHOD_MAX_LENGTH = 50
    REFERENCE_MAX_LENGTH = 100
    NOTES_MAX_LENGTH = 500

    def __init__(
        self,
        id: Optional[int],
        invoice_id: int,
        amount: Decimal,
        payment_date: date,
        method: Optional[str] = None,
        reference: Optional[str] = None,
        notes: Optional[str] = None,
        created_at: Optional[datetime] = None,
        updated_at: Optional[datetime] = None,
    ):
        super().__init__(id, created_at=created_at, updated_at=updated_at)
        self.invoice_id = invoice_id
        self.amount = amount
        self.payment_date = payment_date
        self.method = method
        self.reference = reference
        self.notes = notes

    @classmethod
    def record(
        cls,
        invoice: Invoice,
        amount: Decimal,
        payment_date: date,
        method: Optional[str] = None,
        reference: Optional[str] = None,
        notes: Optional[str] = None,
    ) -> "Payment":
        invoice.ensure_accepts_payment()
        if amount is None or amount <= 0:
            raise ValidationError("Payment amount must be greater than zero.", details={"field": "amount"})
        if not fits_storage(Decimal(amount)):
            raise ValidationError(
                "Payment amount must be below 100000000 with at most 4 decimal places.",
                details={"field": "amount"},
            )
        for field, value, limit in (
            ("method", method, cls.METHOD_MAX_LENGTH),
            ("reference", reference, cls.REFERENCE_MAX_LENGTH),
            ("notes", notes, cls.NOTES_MAX_LENGTH),
        ):
            if value is not None and len(value) > limit:
                raise ValidationError(
                    f"Payment {field} must be at most {limit} characters.", details={"field": field}
                )
        return cls(
            id=None,
            invoice_id=invoice.require_id(),
            amount=Decimal(amount),
            payment_date=payment_date,
            method=method,
            reference=reference,
            notes=notes,
        )
