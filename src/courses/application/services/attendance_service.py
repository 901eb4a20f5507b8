"""
Attendance Service
Roster management and per-student attendance flags
"""
from __future__ import annotations

from courses.application.commands import AddStudentsCommand, SetAttendanceCommand
from courses.application.dto import AttendanceDTO, StudentDTO
from courses.application.services.course_access import load_course
from courses.domain.entities.course import Course
from courses.domain.entities.student import Student
from courses.domain.events import AttendanceUpdated
from courses.domain.value_objects.course_status import CourseStatus
from courses.infrastructure.adapters.course_unit_of_work import UnitOfWorkFactory
from shared.application.operation import operation
from shared.exceptions import ForbiddenError, InvalidTransitionError, NotFoundError, ValidationError
from shared.infrastructure.messaging.event_bus import EventBus
from shared.infrastructure.observability.logger import get_logger
from shared.roles import Actor, Role, ensure_role

logger = get_logger(__name__)

ROSTER_UPLOADERS = frozenset({Role.ORGANIZATION, Role.ADMIN, Role.SUPER_ADMIN})


class AttendanceService:
    """
    The AttendanceTracker.

    Attendance edits hold a shared lock on the course row and re-check the
    status inside their transaction. An edit therefore either commits
    before the invoicing transaction counts attendees, or sees the course
    invoiced and is rejected.
    """

    def __init__(self, uow_factory: UnitOfWorkFactory, event_bus: EventBus) -> None:
        self._uow_factory = uow_factory
        self._event_bus = event_bus

    @operation
    async def add_students(self, command: AddStudentsCommand) -> list[StudentDTO]:
        """Bulk roster upload by the organization or an admin while the course is open."""
        actor = command.issued_by
        ensure_role(actor, ROSTER_UPLOADERS, "upload course rosters")
        if not command.students:
            raise ValidationError("At least one student is required.", details={"field": "students"})
        uow = self._uow_factory()
        async with uow:
            course = await load_course(uow, command.course_id, lock="share")
            if actor.role == Role.ORGANIZATION and actor.organization_id != course.organization_id:
                raise ForbiddenError(
                    "Organizations can only add students to their own courses.",
                    details={"course_id": course.id},
                )
            course.ensure_roster_open()
            students = await self._enroll(uow, course, command)
            await uow.commit()
        logger.info("students_added", course_id=course.id, count=len(students))
        return [StudentDTO.from_entity(s) for s in students]

    @operation
    async def add_student(self, command: AddStudentsCommand) -> StudentDTO:
        """Ad-hoc addition by the assigned instructor on a scheduled course."""
        actor = command.issued_by
        if len(command.students) != 1:
            raise ValidationError("Exactly one student must be given.", details={"field": "students"})
        uow = self._uow_factory()
        async with uow:
            course = await load_course(uow, command.course_id, lock="share")
            course.ensure_owned_by(actor)
            if course.status != CourseStatus.SCHEDULED:
                raise InvalidTransitionError(
                    f"Students can only be added by the instructor while the course is scheduled, "
                    f"not {course.status.label}.",
                    details={"current_status": course.status.value},
                )
            students = await self._enroll(uow, course, command)
            await uow.commit()
        logger.info("student_added", course_id=course.id, student_id=students[0].id)
        return StudentDTO.from_entity(students[0])

    @operation
    async def set_attendance(self, command: SetAttendanceCommand) -> AttendanceDTO:
        actor: Actor = command.issued_by
        uow = self._uow_factory()
        async with uow:
            course = await load_course(uow, command.course_id, lock="share")
            course.ensure_owned_by(actor)
            course.ensure_attendance_open()
            student = await uow.students.get(command.student_id)
            if student is None or student.course_id != course.id:
                raise NotFoundError(
                    f"Student {command.student_id} is not on the roster of course {course.id}.",
                    details={"course_id": course.id, "student_id": command.student_id},
                )
            await uow.students.set_attended(student.id, command.attended)
            attended_count = await uow.students.count_attended(course.id)
            uow.add_events(
                [
                    AttendanceUpdated(
                        course_id=course.id,
                        attended_count=attended_count,
                        aggregate_id=course.id,
                        aggregate_type=Course.__name__,
                    )
                ]
            )
            await uow.commit()
        await self._event_bus.publish_many(uow.committed_events)
        logger.info(
            "attendance_updated",
            course_id=course.id,
            student_id=command.student_id,
            attended=command.attended,
            attended_count=attended_count,
        )
        return AttendanceDTO(
            course_id=course.id,
            student_id=command.student_id,
            attended=command.attended,
            attended_count=attended_count,
        )

    @staticmethod
    async def _enroll(uow, course: Course, command: AddStudentsCommand) -> list[Student]:
        course_id = course.require_id()
        students = [
            Student.enroll(course_id, s.first_name, s.last_name, s.email) for s in command.students
        ]
        return await uow.students.add_many(students)
