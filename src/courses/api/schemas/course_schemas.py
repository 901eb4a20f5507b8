"""
Course API Schemas
"""
from __future__ import annotations

from datetime import date, datetime
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field


class RequestCourseRequest(BaseModel):
    """Organizations may omit organization_id; their own is used."""
    model_config = ConfigDict(extra="forbid", str_strip_whitespace=True)

    organization_id: Optional[int] = Field(None, description="Requesting organization")
    course_type_id: int = Field(..., description="Course type")
    location: str = Field(..., min_length=1, max_length=255)
    students_registered: int = Field(..., ge=0, description="Expected headcount")
    date_requested: Optional[date] = Field(None, description="Defaults to today")
    notes: Optional[str] = Field(None, max_length=500)


class ScheduleCourseRequest(BaseModel):
    model_config = ConfigDict(extra="forbid")

    instructor_id: int
    date_scheduled: date


class StudentRequest(BaseModel):
    model_config = ConfigDict(extra="forbid", str_strip_whitespace=True)

    first_name: str = Field(..., min_length=1, max_length=100)
    last_name: str = Field(..., min_length=1, max_length=100)
    email: Optional[str] = Field(None, max_length=255)


class AddStudentsRequest(BaseModel):
    model_config = ConfigDict(extra="forbid")

    students: list[StudentRequest] = Field(..., min_length=1)


class SetAttendanceRequest(BaseModel):
    model_config = ConfigDict(extra="forbid")

    attended: bool


class AvailabilityRequest(BaseModel):
    model_config = ConfigDict(extra="forbid")

    available_date: date


class CourseResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    course_number: str
    organization_id: int
    course_type_id: int
    instructor_id: Optional[int]
    date_requested: date
    date_scheduled: Optional[date]
    location: str
    students_registered: int
    notes: Optional[str]
    status: str
    created_at: datetime
    organization_name: Optional[str] = None
    course_type_name: Optional[str] = None
    attended_count: Optional[int] = None


class StudentResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    course_id: int
    first_name: str
    last_name: str
    email: Optional[str]
    attended: bool


class CourseDetailResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    course: CourseResponse
    students: list[StudentResponse]


class AttendanceResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    course_id: int
    student_id: int
    attended: bool
    attended_count: int


class AvailabilityResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    instructor_id: int
    dates: list[date]
