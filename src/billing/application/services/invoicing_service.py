"""
Invoicing Service
The BillingReady -> Invoiced transition
"""
from __future__ import annotations

from datetime import date
from typing import Callable, Optional

from sqlalchemy.exc import IntegrityError

from billing.application.commands import CreateInvoiceCommand
from billing.application.dto import InvoiceDTO
from billing.domain.entities.invoice import Invoice
from billing.domain.services.billing_calculator import BillingCalculator, format_money
from billing.infrastructure.adapters.invoice_notifier import InvoiceNotifier, LoggingInvoiceNotifier
from courses.application.services.course_access import load_course, save_transition
from courses.domain.value_objects.course_status import CourseStatus, ensure_transition
from courses.infrastructure.adapters.course_unit_of_work import UnitOfWorkFactory
from shared.application.operation import operation
from shared.exceptions import ConflictError, InternalServerError, MissingPricingRuleError
from shared.infrastructure.database.errors import violates_unique
from shared.infrastructure.messaging.event_bus import EventBus
from shared.infrastructure.observability.logger import get_logger
from shared.roles import ACCOUNTING, ensure_role

logger = get_logger(__name__)


class InvoicingService:
    """
    Creates exactly one invoice per course.

    The course row is locked, its status re-checked, the attended headcount
    read fresh and priced against the catalog; the invoice insert and the
    status compare-and-swap commit together. The notifier runs after the
    commit and cannot undo it.
    """

    def __init__(
        self,
        uow_factory: UnitOfWorkFactory,
        event_bus: EventBus,
        notifier: Optional[InvoiceNotifier] = None,
        calculator: Optional[BillingCalculator] = None,
        clock: Callable[[], date] = date.today,
    ) -> None:
        self._uow_factory = uow_factory
        self._event_bus = event_bus
        self._notifier = notifier or LoggingInvoiceNotifier()
        self._calculator = calculator or BillingCalculator()
        self._clock = clock

    @operation
    async def create_invoice(self, command: CreateInvoiceCommand) -> InvoiceDTO:
        ensure_role(command.issued_by, ACCOUNTING, "create invoices")
        invoice_date = command.invoice_date or self._clock()
        uow = self._uow_factory()
        async with uow:
            course = await load_course(uow, command.course_id)
            if course.status == CourseStatus.INVOICED:
                raise ConflictError(
                    f"Course {course.course_number} has already been invoiced.",
                    details={"course_id": course.id},
                )
            ensure_transition(course.status, CourseStatus.INVOICED)

            rule = await uow.pricing_rules.find(course.organization_id, course.course_type_id)
            if rule is None:
                raise MissingPricingRuleError(
                    "No pricing rule exists for this organization and course type. "
                    "Add one before invoicing the course.",
                    details={
                        "organization_id": course.organization_id,
                        "course_type_id": course.course_type_id,
                    },
                )

            attended = await uow.students.count_attended(course.id)
            draft = self._calculator.calculate(course.id, attended, rule.price, invoice_date)
            invoice = await self._insert(uow, Invoice.from_draft(draft))

            expected = course.mark_invoiced(invoice.id, invoice.invoice_number, invoice.amount)
            await save_transition(uow, course, expected)
            await uow.commit()

        logger.info(
            "invoice_created",
            invoice_id=invoice.id,
            invoice_number=invoice.invoice_number,
            course_id=course.id,
            attended_count=draft.attended_count,
            rate=str(draft.rate),
            amount=format_money(invoice.amount),
        )
        await self._event_bus.publish_many(uow.committed_events)
        await self._notify(invoice)
        return InvoiceDTO.from_entity(invoice, self._clock(), course=course)

    @staticmethod
    async def _insert(uow, invoice: Invoice) -> Invoice:
        try:
            return await uow.invoices.add(invoice)
        except IntegrityError as e:
            if violates_unique(e, "invoices", "course_id"):
                raise ConflictError(
                    "An invoice already exists for this course.",
                    details={"course_id": invoice.course_id},
                )
            # invoice numbers embed the course id, so a collision here is a bug
            logger.error(
                "invoice_number_collision",
                invoice_number=invoice.invoice_number,
                course_id=invoice.course_id,
                error=str(e.orig),
            )
            raise InternalServerError(
                "The invoice number could not be allocated.",
                details={"invoice_number": invoice.invoice_number},
            )

    async def _notify(self, invoice: Invoice) -> None:
        try:
            await self._notifier.invoice_created(invoice)
        except Exception:
            logger.exception(
                "invoice_notification_failed",
                invoice_id=invoice.id,
                invoice_number=invoice.invoice_number,
            )
