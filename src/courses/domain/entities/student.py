# src/courses/domain/entities/student.py
"""Student entity - one roster line of a course."""

import re
from datetime import datetime
from typing import Optional

from shared.domain.base_entity import BaseEntity
from shared.exceptions import ValidationError

_EMAIL = re.compile(r"^[^@\s]+@[^@\s]+\.[^@\s]+$")


class Student(BaseEntity):
    """A registered student; ``attended`` is the billable flag."""

    NAME_MAX_LENGTH = 100

    def __init__(
        self,
        id: Optional[int],
        course_id: int,
        first_name: str,
        last_name: str,
        email: Optional[str] = None,
        attended: bool = False,
        created_at: Optional[datetime] = None,
        updated_at: Optional[datetime] = None,
    ):
        super().__init__(id, created_at=created_at, updated_at=updated_at)
        self.course_id = course_id
        self.first_name = first_name
        self.last_name = last_name
        self.email = email
        self.attended = attended

    @classmethod
    def enroll(
        cls,
        course_id: int,
        first_name: str,
        last_name: str,
        email: Optional[str] = None,
    ) -> "Student":
        first_name = (first_name or "").strip()
        last_name = (last_name or "").strip()
        email = (email or "").strip() or None
        if not first_name or not last_name:
            raise ValidationError(
                "Student first and last name are required.",
                details={"first_name": first_name, "last_name": last_name},
            )
        if len(first_name) > cls.NAME_MAX_LENGTH or len(last_name) > cls.NAME_MAX_LENGTH:
            raise ValidationError(f"Student names must be at most {cls.NAME_MAX_LENGTH} characters.")
        if email is not None and not _EMAIL.match(email):
            raise ValidationError(f"{email!r} is not a valid email address.", details={"email": email})
        return cls(id=None, course_id=course_id, first_name=first_name, last_name=last_name, email=email)

    @property
    def full_name(self) -> str:
        return f"{self.first_name} {self.last_name}"
