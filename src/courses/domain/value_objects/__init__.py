from courses.domain.value_objects.course_number import (
    MAX_SUFFIX,
    course_number_base,
    course_number_candidates,
    first_free_course_number,
)
from courses.domain.value_objects.course_status import (
    ATTENDANCE_STATUSES,
    BOOKED_STATUSES,
    CourseStatus,
    allowed_transitions,
    ensure_transition,
)

__all__ = [
    "CourseStatus",
    "ATTENDANCE_STATUSES",
    "BOOKED_STATUSES",
    "allowed_transitions",
    "ensure_transition",
    "MAX_SUFFIX",
    "course_number_base",
    "course_number_candidates",
    "first_free_course_number",
]
