"""
Course Unit of Work
Coordinates course and billing repositories within one transaction
"""
from __future__ import annotations

from typing import Callable

from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from billing.infrastructure.repositories import (
    SQLAlchemyInvoiceRepository,
    SQLAlchemyPaymentRepository,
    SQLAlchemyPricingRuleRepository,
)
from courses.infrastructure.repositories import (
    SQLAlchemyAvailabilityRepository,
    SQLAlchemyCourseRepository,
    SQLAlchemyReferenceRepository,
    SQLAlchemyStudentRepository,
)
from shared.infrastructure.database.sqlalchemy_unit_of_work import SQLAlchemyUnitOfWork


class CourseUnitOfWork(SQLAlchemyUnitOfWork):
    """
    Unit of Work for the course lifecycle.

    A transition such as invoicing touches the course row, the roster,
    the pricing catalog and the invoice table, so every repository shares
    the one session opened on ``__aenter__``.

    Usage:
        async with uow:
            course = await uow.courses.get_for_update(course_id)
            rule = await uow.pricing_rules.find(course.organization_id, course.course_type_id)
            ...
            await uow.commit()
    """

    courses: SQLAlchemyCourseRepository
    students: SQLAlchemyStudentRepository
    references: SQLAlchemyReferenceRepository
    availability: SQLAlchemyAvailabilityRepository
    pricing_rules: SQLAlchemyPricingRuleRepository
    invoices: SQLAlchemyInvoiceRepository
    payments: SQLAlchemyPaymentRepository

    def _bind_repositories(self, session: AsyncSession) -> None:
        self.courses = SQLAlchemyCourseRepository(session)
        self.students = SQLAlchemyStudentRepository(session)
        self.references = SQLAlchemyReferenceRepository(session)
        self.availability = SQLAlchemyAvailabilityRepository(session)
        self.pricing_rules = SQLAlchemyPricingRuleRepository(session)
        self.invoices = SQLAlchemyInvoiceRepository(session)
        self.payments = SQLAlchemyPaymentRepository(session)

    async def __aenter__(self) -> "CourseUnitOfWork":
        await super().__aenter__()
        return self


UnitOfWorkFactory = Callable[[], CourseUnitOfWork]


def course_uow_factory(session_factory: async_sessionmaker[AsyncSession]) -> UnitOfWorkFactory:
    """Build a factory handing out a fresh unit of work per operation attempt."""

    def factory() -> CourseUnitOfWork:
        return CourseUnitOfWork(session_factory)

    return factory
