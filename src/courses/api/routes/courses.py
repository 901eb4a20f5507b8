"""
Course Lifecycle Routes
"""
from __future__ import annotations

from typing import Annotated

from fastapi import APIRouter, Depends, Query, status

from courses.api.dependencies import Attendance, CourseQueries, Lifecycle
from courses.api.schemas import (
    AddStudentsRequest,
    AttendanceResponse,
    CourseDetailResponse,
    CourseResponse,
    RequestCourseRequest,
    ScheduleCourseRequest,
    SetAttendanceRequest,
    StudentRequest,
    StudentResponse,
)
from courses.application.commands import (
    AddStudentsCommand,
    CancelCourseCommand,
    CompleteCourseCommand,
    MarkBillingReadyCommand,
    RequestCourseCommand,
    ScheduleCourseCommand,
    SetAttendanceCommand,
    StudentInput,
)
from courses.domain.value_objects.course_status import CourseStatus
from shared.api.dependencies import CurrentActor, require_roles
from shared.api.response_models import ERROR_RESPONSES, SuccessResponse
from shared.exceptions import ValidationError
from shared.roles import Actor, Role

router = APIRouter(responses=ERROR_RESPONSES)

AdminActor = Annotated[Actor, Depends(require_roles(Role.ADMIN, Role.SUPER_ADMIN))]
InstructorActor = Annotated[Actor, Depends(require_roles(Role.INSTRUCTOR))]


def _students(body: list[StudentRequest]) -> tuple[StudentInput, ...]:
    return tuple(StudentInput(s.first_name, s.last_name, s.email) for s in body)


# ----------------------------------------------------------------- commands

@router.post(
    "",
    response_model=SuccessResponse[CourseResponse],
    status_code=status.HTTP_201_CREATED,
    summary="Request Course",
    dependencies=[Depends(require_roles(Role.ORGANIZATION, Role.ADMIN, Role.SUPER_ADMIN))],
)
async def request_course(body: RequestCourseRequest, actor: CurrentActor, lifecycle: Lifecycle):
    organization_id = body.organization_id
    if organization_id is None:
        organization_id = actor.organization_id
    if organization_id is None:
        raise ValidationError("organization_id is required.", details={"field": "organization_id"})
    command = RequestCourseCommand(
        organization_id=organization_id,
        course_type_id=body.course_type_id,
        location=body.location,
        students_registered=body.students_registered,
        date_requested=body.date_requested,
        notes=body.notes,
        issued_by=actor,
    )
    dto = (await lifecycle.request_course(command)).unwrap()
    return SuccessResponse(data=CourseResponse.model_validate(dto), message="Course requested")


@router.post("/{course_id}/schedule", response_model=SuccessResponse[CourseResponse], summary="Schedule Course")
async def schedule_course(course_id: int, body: ScheduleCourseRequest, actor: AdminActor, lifecycle: Lifecycle):
    command = ScheduleCourseCommand(
        course_id=course_id,
        instructor_id=body.instructor_id,
        date_scheduled=body.date_scheduled,
        issued_by=actor,
    )
    dto = (await lifecycle.schedule_course(command)).unwrap()
    return SuccessResponse(data=CourseResponse.model_validate(dto), message="Course scheduled")


@router.post("/{course_id}/cancel", response_model=SuccessResponse[CourseResponse], summary="Cancel Course")
async def cancel_course(course_id: int, actor: AdminActor, lifecycle: Lifecycle):
    dto = (await lifecycle.cancel_course(CancelCourseCommand(course_id=course_id, issued_by=actor))).unwrap()
    return SuccessResponse(data=CourseResponse.model_validate(dto), message="Course cancelled")


@router.post("/{course_id}/complete", response_model=SuccessResponse[CourseResponse], summary="Complete Course")
async def complete_course(course_id: int, actor: InstructorActor, lifecycle: Lifecycle):
    dto = (await lifecycle.complete_course(CompleteCourseCommand(course_id=course_id, issued_by=actor))).unwrap()
    return SuccessResponse(data=CourseResponse.model_validate(dto), message="Course completed")


@router.post(
    "/{course_id}/billing-ready",
    response_model=SuccessResponse[CourseResponse],
    summary="Mark Course Billing-Ready",
)
async def mark_billing_ready(course_id: int, actor: AdminActor, lifecycle: Lifecycle):
    command = MarkBillingReadyCommand(course_id=course_id, issued_by=actor)
    dto = (await lifecycle.mark_billing_ready(command)).unwrap()
    return SuccessResponse(data=CourseResponse.model_validate(dto), message="Course ready for billing")


# ------------------------------------------------------------------- roster

@router.post(
    "/{course_id}/students",
    response_model=SuccessResponse[list[StudentResponse]],
    status_code=status.HTTP_201_CREATED,
    summary="Upload Roster",
)
async def add_students(course_id: int, body: AddStudentsRequest, actor: CurrentActor, attendance: Attendance):
    command = AddStudentsCommand(course_id=course_id, students=_students(body.students), issued_by=actor)
    dtos = (await attendance.add_students(command)).unwrap()
    return SuccessResponse(data=[StudentResponse.model_validate(d) for d in dtos])


@router.post(
    "/{course_id}/walk-ins",
    response_model=SuccessResponse[StudentResponse],
    status_code=status.HTTP_201_CREATED,
    summary="Add Walk-in Student",
)
async def add_walk_in(course_id: int, body: StudentRequest, actor: InstructorActor, attendance: Attendance):
    command = AddStudentsCommand(course_id=course_id, students=_students([body]), issued_by=actor)
    dto = (await attendance.add_student(command)).unwrap()
    return SuccessResponse(data=StudentResponse.model_validate(dto))


@router.put(
    "/{course_id}/students/{student_id}/attendance",
    response_model=SuccessResponse[AttendanceResponse],
    summary="Set Attendance",
)
async def set_attendance(
    course_id: int,
    student_id: int,
    body: SetAttendanceRequest,
    actor: InstructorActor,
    attendance: Attendance,
):
    command = SetAttendanceCommand(
        course_id=course_id,
        student_id=student_id,
        attended=body.attended,
        issued_by=actor,
    )
    dto = (await attendance.set_attendance(command)).unwrap()
    return SuccessResponse(data=AttendanceResponse.model_validate(dto))


# ------------------------------------------------------------------ queries

@router.get("", response_model=SuccessResponse[list[CourseResponse]], summary="List Courses by Status")
async def list_courses(
    actor: AdminActor,
    queries: CourseQueries,
    status_filter: Annotated[CourseStatus, Query(alias="status")] = CourseStatus.PENDING,
):
    dtos = (await queries.list_by_status(actor, status_filter)).unwrap()
    return SuccessResponse(data=[CourseResponse.model_validate(d) for d in dtos])


@router.get("/mine", response_model=SuccessResponse[list[CourseResponse]], summary="Organization Courses")
async def organization_courses(actor: CurrentActor, queries: CourseQueries):
    dtos = (await queries.organization_courses(actor)).unwrap()
    return SuccessResponse(data=[CourseResponse.model_validate(d) for d in dtos])


@router.get("/assigned", response_model=SuccessResponse[list[CourseResponse]], summary="Instructor Classes")
async def instructor_classes(actor: InstructorActor, queries: CourseQueries):
    dtos = (await queries.instructor_classes(actor)).unwrap()
    return SuccessResponse(data=[CourseResponse.model_validate(d) for d in dtos])


@router.get("/archive", response_model=SuccessResponse[list[CourseResponse]], summary="Instructor Archive")
async def instructor_archive(actor: InstructorActor, queries: CourseQueries):
    dtos = (await queries.instructor_archive(actor)).unwrap()
    return SuccessResponse(data=[CourseResponse.model_validate(d) for d in dtos])


@router.get("/billing-queue", response_model=SuccessResponse[list[CourseResponse]], summary="Billing Queue")
async def billing_queue(actor: CurrentActor, queries: CourseQueries):
    dtos = (await queries.billing_queue(actor)).unwrap()
    return SuccessResponse(data=[CourseResponse.model_validate(d) for d in dtos])


@router.get("/{course_id}", response_model=SuccessResponse[CourseDetailResponse], summary="Course Detail")
async def course_detail(course_id: int, actor: CurrentActor, queries: CourseQueries):
    dto = (await queries.course_detail(actor, course_id)).unwrap()
    return SuccessResponse(data=CourseDetailResponse.model_validate(dto))
