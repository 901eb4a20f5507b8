"""
Invoice Notifier
Hand-off point to the PDF/email collaborator after an invoice is committed
"""
from __future__ import annotations

from typing import Protocol

from billing.domain.entities.invoice import Invoice
from billing.domain.services.billing_calculator import format_money
from shared.infrastructure.observability.logger import get_logger

logger = get_logger(__name__)


class InvoiceNotifier(Protocol):
    """
    Notification collaborator interface.

    Called after the invoicing transaction committed. Implementations may
    fail; the caller logs the failure and the invoice stays in place.
    """

    async def invoice_created(self, invoice: Invoice) -> None:
        ...


class LoggingInvoiceNotifier:
    """Default notifier: records the hand-off in the structured log."""

    async def invoice_created(self, invoice: Invoice) -> None:
        logger.info(
            "invoice_notification_queued",
            invoice_id=invoice.id,
            invoice_number=invoice.invoice_number,
            course_id=invoice.course_id,
            amount=format_money(invoice.amount),
            due_date=invoice.due_date.isoformat(),
        )
