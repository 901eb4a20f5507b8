"""
Billing DTOs
Money fields are rounded to cents here; stored amounts keep full precision
"""
from __future__ import annotations

from dataclasses import dataclass
from datetime import date, datetime
from decimal import Decimal
from typing import Optional

from billing.domain.entities.invoice import Invoice, Payment
from billing.domain.entities.pricing_rule import PricingRule
from billing.domain.services.billing_calculator import to_money
from courses.domain.entities.course import Course
from courses.domain.entities.reference import CourseType, Organization


@dataclass(frozen=True)
class PricingRuleDTO:
    id: int
    organization_id: int
    course_type_id: int
    price: Decimal
    organization_name: Optional[str] = None
    course_type_name: Optional[str] = None
    updated_at: Optional[datetime] = None

    @classmethod
    def from_entity(
        cls,
        rule: PricingRule,
        organization: Optional[Organization] = None,
        course_type: Optional[CourseType] = None,
    ) -> "PricingRuleDTO":
        assert rule.id is not None
        return cls(
            id=rule.id,
            organization_id=rule.organization_id,
            course_type_id=rule.course_type_id,
            price=to_money(rule.price),
            organization_name=organization.name if organization else None,
            course_type_name=course_type.name if course_type else None,
            updated_at=rule.updated_at,
        )


@dataclass(frozen=True)
class InvoiceDTO:
    """Invoice with its presented status (pending, overdue or paid) as of ``today``."""
    id: int
    invoice_number: str
    course_id: int
    invoice_date: date
    due_date: date
    amount: Decimal
    attended_count: int
    status: str
    paid_at: Optional[datetime]
    created_at: datetime
    course_number: Optional[str] = None
    organization_id: Optional[int] = None
    organization_name: Optional[str] = None

    @classmethod
    def from_entity(
        cls,
        invoice: Invoice,
        today: date,
        course: Optional[Course] = None,
        organization: Optional[Organization] = None,
    ) -> "InvoiceDTO":
        return cls(
            id=invoice.require_id(),
            invoice_number=invoice.invoice_number,
            course_id=invoice.course_id,
            invoice_date=invoice.invoice_date,
            due_date=invoice.due_date,
            amount=to_money(invoice.amount),
            attended_count=invoice.attended_count,
            status=invoice.presented_status(today).value,
            paid_at=invoice.paid_at,
            created_at=invoice.created_at,
            course_number=course.course_number if course else None,
            organization_id=course.organization_id if course else None,
            organization_name=organization.name if organization else None,
        )


@dataclass(frozen=True)
class PaymentDTO:
    id: int
    invoice_id: int
    amount: Decimal
    payment_date: date
    method: Optional[str]
    reference: Optional[str]
    notes: Optional[str]

    @classmethod
    def from_entity(cls, payment: Payment) -> "PaymentDTO":
        assert payment.id is not None
        return cls(
            id=payment.id,
            invoice_id=payment.invoice_id,
            amount=to_money(payment.amount),
            payment_date=payment.payment_date,
            method=payment.method,
            reference=payment.reference,
            notes=payment.notes,
        )


@dataclass(frozen=True)
class InvoiceDetailDTO:
    invoice: InvoiceDTO
    payments: tuple[PaymentDTO, ...]
    paid_total: Decimal
    balance: Decimal
