from courses.api.schemas.course_schemas import (
    AddStudentsRequest,
    AttendanceResponse,
    AvailabilityRequest,
    AvailabilityResponse,
    CourseDetailResponse,
    CourseResponse,
    RequestCourseRequest,
    ScheduleCourseRequest,
    SetAttendanceRequest,
    StudentRequest,
    StudentResponse,
)

__all__ = [
    "RequestCourseRequest",
    "ScheduleCourseRequest",
    "StudentRequest",
    "AddStudentsRequest",
    "SetAttendanceRequest",
    "AvailabilityRequest",
    "CourseResponse",
    "StudentResponse",
    "CourseDetailResponse",
    "AttendanceResponse",
    "AvailabilityResponse",
]
