"""
Payment Service
Record payments and confirm invoices as paid
"""
from __future__ import annotations

from datetime import date
from typing import Callable

from billing.application.commands import MarkInvoicePaidCommand, RecordPaymentCommand
from billing.application.dto import InvoiceDTO, PaymentDTO
from billing.domain.entities.invoice import Invoice, Payment
from billing.domain.services.billing_calculator import format_money
from courses.infrastructure.adapters.course_unit_of_work import UnitOfWorkFactory
from shared.application.operation import operation
from shared.domain.base_entity import utcnow
from shared.exceptions import NotFoundError
from shared.infrastructure.observability.logger import get_logger
from shared.roles import ACCOUNTING, ensure_role

logger = get_logger(__name__)


async def _load_invoice(uow, invoice_id: int) -> Invoice:
    invoice = await uow.invoices.get_for_update(invoice_id)
    if invoice is None:
        raise NotFoundError(f"Invoice {invoice_id} does not exist.", details={"invoice_id": invoice_id})
    return invoice


class PaymentService:
    """
    Payments are recorded as they arrive, partial or not. The invoice only
    becomes paid when accounting confirms it; summed payments never flip
    the status on their own.
    """

    def __init__(self, uow_factory: UnitOfWorkFactory, clock: Callable[[], date] = date.today) -> None:
        self._uow_factory = uow_factory
        self._clock = clock

    @operation
    async def record_payment(self, command: RecordPaymentCommand) -> PaymentDTO:
        ensure_role(command.issued_by, ACCOUNTING, "record payments")
        uow = self._uow_factory()
        async with uow:
            invoice = await _load_invoice(uow, command.invoice_id)
            payment = Payment.record(
                invoice,
                amount=command.amount,
                payment_date=command.payment_date or self._clock(),
                method=command.method,
                reference=command.reference,
                notes=command.notes,
            )
            await uow.payments.add(payment)
            await uow.commit()
        logger.info(
            "payment_recorded",
            payment_id=payment.id,
            invoice_id=invoice.id,
            amount=format_money(payment.amount),
            method=payment.method,
        )
        return PaymentDTO.from_entity(payment)

    @operation
    async def mark_invoice_paid(self, command: MarkInvoicePaidCommand) -> InvoiceDTO:
        ensure_role(command.issued_by, ACCOUNTING, "confirm invoice payment")
        uow = self._uow_factory()
        async with uow:
            invoice = await _load_invoice(uow, command.invoice_id)
            invoice.mark_paid(utcnow())
            await uow.invoices.mark_paid(invoice)
            await uow.commit()
        logger.info("invoice_marked_paid", invoice_id=invoice.id, invoice_number=invoice.invoice_number)
        return InvoiceDTO.from_entity(invoice, self._clock())
