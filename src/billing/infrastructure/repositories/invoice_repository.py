# src/billing/infrastructure/repositories/invoice_repository.py
"""SQLAlchemy-backed invoice and payment stores."""

from __future__ import annotations

from typing import List, Optional

from sqlalchemy import select, update
from sqlalchemy.ext.asyncio import AsyncSession

from billing.domain.entities.invoice import Invoice, Payment
from billing.domain.repositories import InvoiceRepository, PaymentRepository
from billing.domain.value_objects.payment_status import PaymentStatus
from billing.infrastructure.models import InvoiceModel, PaymentModel


class SQLAlchemyInvoiceRepository(InvoiceRepository):

    def __init__(self, session: AsyncSession) -> None:
        self._session = session

    @staticmethod
    def _to_domain(row: InvoiceModel) -> Invoice:
        return Invoice(
            id=row.id,
            invoice_number=row.invoice_number,
            course_id=row.course_id,
            invoice_date=row.invoice_date,
            due_date=row.due_date,
            amount=row.amount,
            attended_count=row.attended_count,
            payment_status=PaymentStatus(row.payment_status),
            paid_at=row.paid_at,
            created_at=row.created_at,
            updated_at=row.updated_at,
        )

    async def add(self, invoice: Invoice) -> Invoice:
        row = InvoiceModel(
            invoice_number=invoice.invoice_number,
            course_id=invoice.course_id,
            invoice_date=invoice.invoice_date,
            due_date=invoice.due_date,
            amount=invoice.amount,
            attended_count=invoice.attended_count,
            payment_status=invoice.payment_status.value,
        )
        self._session.add(row)
        await self._session.flush()
        invoice.id = row.id
        return invoice

    async def get(self, invoice_id: int) -> Optional[Invoice]:
        row = await self._session.get(InvoiceModel, invoice_id, populate_existing=True)
        return self._to_domain(row) if row else None

    async def get_for_update(self, invoice_id: int) -> Optional[Invoice]:
        stmt = (
            select(InvoiceModel)
            .where(InvoiceModel.id == invoice_id)
            .with_for_update()
            .execution_options(populate_existing=True)
        )
        row = (await self._session.execute(stmt)).scalars().first()
        return self._to_domain(row) if row else None

    async def mark_paid(self, invoice: Invoice) -> None:
        await self._session.execute(
            update(InvoiceModel)
            .where(InvoiceModel.id == invoice.id)
            .values(payment_status=invoice.payment_status.value, paid_at=invoice.paid_at)
            .execution_options(synchronize_session=False)
        )

    async def list_newest_first(self) -> List[Invoice]:
        stmt = select(InvoiceModel).order_by(InvoiceModel.created_at.desc(), InvoiceModel.id.desc())
        return [self._to_domain(r) for r in (await self._session.execute(stmt)).scalars().all()]


class SQLAlchemyPaymentRepository(PaymentRepository):

    def __init__(self, session: AsyncSession) -> None:
        self._session = session

    @staticmethod
    def _to_domain(row: PaymentModel) -> Payment:
        return Payment(
            id=row.id,
            invoice_id=row.invoice_id,
            amount=row.amount,
            payment_date=row.payment_date,
            method=row.method,
            reference=row.reference,
            notes=row.notes,
            created_at=row.created_at,
            updated_at=row.updated_at,
        )

    async def add(self, payment: Payment) -> Payment:
        row = PaymentModel(
            invoice_id=payment.invoice_id,
            amount=payment.amount,
            payment_date=payment.payment_date,
            method=payment.method,
            reference=payment.reference,
            notes=payment.notes,
        )
        self._session.add(row)
        await self._session.flush()
        payment.id = row.id
        return payment

    async def list_for_invoice(self, invoice_id: int) -> List[Payment]:
        stmt = (
            select(PaymentModel)
            .where(PaymentModel.invoice_id == invoice_id)
            .order_by(PaymentModel.payment_date, PaymentModel.id)
        )
        return [self._to_domain(r) for r in (await self._session.execute(stmt)).scalars().all()]
