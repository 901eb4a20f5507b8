from courses.application.dto.course_dto import (
    AttendanceDTO,
    AvailabilityDTO,
    CourseDetailDTO,
    CourseDTO,
    StudentDTO,
)

__all__ = ["CourseDTO", "StudentDTO", "CourseDetailDTO", "AttendanceDTO", "AvailabilityDTO"]
