from courses.infrastructure.adapters.course_unit_of_work import (
    CourseUnitOfWork,
    UnitOfWorkFactory,
    course_uow_factory,
)

__all__ = ["CourseUnitOfWork", "UnitOfWorkFactory", "course_uow_factory"]
