from courses.infrastructure.models.course_model import (
    CourseModel,
    CourseTypeModel,
    InstructorAvailabilityModel,
    OrganizationModel,
    StudentModel,
)

__all__ = [
    "OrganizationModel",
    "CourseTypeModel",
    "CourseModel",
    "StudentModel",
    "InstructorAvailabilityModel",
]
