"""
Invoice Query Service
"""
from __future__ import annotations

from datetime import date
from decimal import Decimal
from typing import Callable

from billing.application.dto import InvoiceDetailDTO, InvoiceDTO, PaymentDTO
from billing.domain.services.billing_calculator import to_money
from courses.infrastructure.adapters.course_unit_of_work import UnitOfWorkFactory
from shared.application.operation import operation
from shared.exceptions import NotFoundError
from shared.roles import ACCOUNTING, Actor, ensure_role


class InvoiceQueryService:

    def __init__(self, uow_factory: UnitOfWorkFactory, clock: Callable[[], date] = date.today) -> None:
        self._uow_factory = uow_factory
        self._clock = clock

    @operation
    async def list_invoices(self, actor: Actor) -> list[InvoiceDTO]:
        """Newest first, with course number, organization and presented status."""
        ensure_role(actor, ACCOUNTING, "view invoices")
        today = self._clock()
        async with self._uow_factory() as uow:
            invoices = await uow.invoices.list_newest_first()
            courses = await uow.courses.by_ids(i.course_id for i in invoices)
            organizations = await uow.references.organizations(c.organization_id for c in courses.values())
        result = []
        for invoice in invoices:
            course = courses.get(invoice.course_id)
            organization = organizations.get(course.organization_id) if course else None
            result.append(InvoiceDTO.from_entity(invoice, today, course=course, organization=organization))
        return result

    @operation
    async def invoice_detail(self, actor: Actor, invoice_id: int) -> InvoiceDetailDTO:
        ensure_role(actor, ACCOUNTING, "view invoices")
        async with self._uow_factory() as uow:
            invoice = await uow.invoices.get(invoice_id)
            if invoice is None:
                raise NotFoundError(f"Invoice {invoice_id} does not exist.", details={"invoice_id": invoice_id})
            payments = await uow.payments.list_for_invoice(invoice_id)
            course = await uow.courses.get(invoice.course_id)
            organization = await uow.references.get_organization(course.organization_id) if course else None
        paid_total = sum((p.amount for p in payments), Decimal("0"))
        return InvoiceDetailDTO(
            invoice=InvoiceDTO.from_entity(invoice, self._clock(), course=course, organization=organization),
            payments=tuple(PaymentDTO.from_entity(p) for p in payments),
            paid_total=to_money(paid_total),
            balance=to_money(invoice.amount - paid_total),
        )
