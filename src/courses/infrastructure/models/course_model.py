# src/courses/infrastructure/models/course_model.py
"""SQLAlchemy ORM models for courses, rosters and reference data."""

from datetime import date
from typing import Optional

from sqlalchemy import (
    Boolean,
    CheckConstraint,
    Date,
    ForeignKey,
    Index,
    Integer,
    String,
    UniqueConstraint,
    false,
    text,
)
from sqlalchemy.orm import Mapped, mapped_column

from courses.domain.value_objects.course_status import BOOKED_STATUSES, CourseStatus
from shared.infrastructure.database.base_model import Base

_STATUS_VALUES = ", ".join(f"'{s.value}'" for s in CourseStatus)
_BOOKED_FILTER = "status IN (" + ", ".join(f"'{s.value}'" for s in sorted(BOOKED_STATUSES)) + ")"


class OrganizationModel(Base):
    """Customer organization (managed elsewhere, read here)."""

    __tablename__ = "organizations"

    name: Mapped[str] = mapped_column(String(200), nullable=False)
    code: Mapped[str] = mapped_column(String(20), nullable=False, unique=True)


class CourseTypeModel(Base):
    """Kind of course offered (managed elsewhere, read here)."""

    __tablename__ = "course_types"

    name: Mapped[str] = mapped_column(String(200), nullable=False)
    code: Mapped[str] = mapped_column(String(20), nullable=False, unique=True)


class CourseModel(Base):
    """ORM model for courses."""

    __tablename__ = "courses"
    __table_args__ = (
        CheckConstraint(f"status IN ({_STATUS_VALUES})", name="status_valid"),
        CheckConstraint("students_registered >= 0", name="students_registered_non_negative"),
        Index("ix_courses_status_created", "status", "created_at"),
        # one booked course per instructor per day
        Index(
            "uq_courses_instructor_id_date_scheduled",
            "instructor_id",
            "date_scheduled",
            unique=True,
            postgresql_where=text(_BOOKED_FILTER),
            sqlite_where=text(_BOOKED_FILTER),
        ),
    )

    course_number: Mapped[str] = mapped_column(String(64), nullable=False, unique=True)
    organization_id: Mapped[int] = mapped_column(
        ForeignKey("organizations.id"), nullable=False, index=True
    )
    course_type_id: Mapped[int] = mapped_column(ForeignKey("course_types.id"), nullable=False)
    instructor_id: Mapped[Optional[int]] = mapped_column(Integer, nullable=True)
    date_requested: Mapped[date] = mapped_column(Date, nullable=False)
    date_scheduled: Mapped[Optional[date]] = mapped_column(Date, nullable=True)
    location: Mapped[str] = mapped_column(String(255), nullable=False)
    students_registered: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
    notes: Mapped[Optional[str]] = mapped_column(String(500), nullable=True)
    status: Mapped[str] = mapped_column(
        String(20), nullable=False, default=CourseStatus.PENDING.value
    )


class StudentModel(Base):
    """ORM model for a course roster line."""

    __tablename__ = "students"

    course_id: Mapped[int] = mapped_column(
        ForeignKey("courses.id", ondelete="CASCADE"), nullable=False, index=True
    )
    first_name: Mapped[str] = mapped_column(String(100), nullable=False)
    last_name: Mapped[str] = mapped_column(String(100), nullable=False)
    email: Mapped[Optional[str]] = mapped_column(String(255), nullable=True)
    attended: Mapped[bool] = mapped_column(
        Boolean, nullable=False, default=False, server_default=false()
    )


class InstructorAvailabilityModel(Base):
    """Dates an instructor declared as available."""

    __tablename__ = "instructor_availability"
    __table_args__ = (UniqueConstraint("instructor_id", "available_date"),)

    instructor_id: Mapped[int] = mapped_column(Integer, nullable=False, index=True)
    available_date: Mapped[date] = mapped_column(Date, nullable=False)
