# src/billing/infrastructure/models/__init__.py
"""SQLAlchemy ORM models for pricing rules, invoices and payments."""

from datetime import date, datetime
from decimal import Decimal
from typing import Optional

from sqlalchemy import CheckConstraint, Date, DateTime, ForeignKey, Integer, String, UniqueConstraint
from sqlalchemy.orm import Mapped, mapped_column

from billing.domain.value_objects.payment_status import PaymentStatus
from shared.infrastructure.database.base_model import Base


class PricingRuleModel(Base):
    """Rate per attended student for one organization/course type pair."""

    __tablename__ = "pricing_rules"
    __table_args__ = (
        UniqueConstraint("organization_id", "course_type_id"),
        CheckConstraint("price >= 0", name="price_non_negative"),
    )

    organization_id: Mapped[int] = mapped_column(
        ForeignKey("organizations.id", ondelete="CASCADE"), nullable=False
    )
    course_type_id: Mapped[int] = mapped_column(
        ForeignKey("course_types.id", ondelete="CASCADE"), nullable=False
    )
    price: Mapped[Decimal] = mapped_column(nullable=False)


class InvoiceModel(Base):
    """ORM model for invoices; exactly one per course."""

    __tablename__ = "invoices"
    __table_args__ = (
        CheckConstraint(
            f"payment_status IN ('{PaymentStatus.PENDING.value}', '{PaymentStatus.PAID.value}')",
            name="payment_status_valid",
        ),
    )

    invoice_number: Mapped[str] = mapped_column(String(50), nullable=False, unique=True)
    course_id: Mapped[int] = mapped_column(ForeignKey("courses.id"), nullable=False, unique=True)
    invoice_date: Mapped[date] = mapped_column(Date, nullable=False)
    due_date: Mapped[date] = mapped_column(Date, nullable=False)
    amount: Mapped[Decimal] = mapped_column(nullable=False)
    attended_count: Mapped[int] = mapped_column(Integer, nullable=False)
    payment_status: Mapped[str] = mapped_column(
        String(20), nullable=False, default=PaymentStatus.PENDING.value
    )
    paid_at: Mapped[Optional[datetime]] = mapped_column(DateTime(timezone=True), nullable=True)


class PaymentModel(Base):
    """A payment received against an invoice."""

    __tablename__ = "payments"
    __table_args__ = (CheckConstraint("amount > 0", name="amount_positive"),)

    invoice_id: Mapped[int] = mapped_column(
        ForeignKey("invoices.id", ondelete="CASCADE"), nullable=False, index=True
    )
    amount: Mapped[Decimal] = mapped_column(nullable=False)
    payment_date: Mapped[date] = mapped_column(Date, nullable=False)
    method: Mapped[Optional[str]] = mapped_column(String(50), nullable=True)
    reference: Mapped[Optional[str]] = mapped_column(String(100), nullable=True)
    notes: Mapped[Optional[str]] = mapped_column(String(500), nullable=True)


__all__ = ["PricingRuleModel", "InvoiceModel", "PaymentModel"]
