from courses.application.services.attendance_service import AttendanceService
from courses.application.services.availability_service import AvailabilityService
from courses.application.services.course_query_service import CourseQueryService
from courses.application.services.lifecycle_service import LifecycleService

__all__ = [
    "LifecycleService",
    "AttendanceService",
    "AvailabilityService",
    "CourseQueryService",
]
