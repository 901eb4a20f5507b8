from courses.domain.entities.course import Course
from courses.domain.entities.reference import CourseType, InstructorAvailability, Organization
from courses.domain.entities.student import Student

__all__ = ["Course", "Student", "Organization", "CourseType", "InstructorAvailability"]
