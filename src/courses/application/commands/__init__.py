from courses.application.commands.course_commands import (
    AddStudentsCommand,
    CancelCourseCommand,
    ChangeAvailabilityCommand,
    CompleteCourseCommand,
    MarkBillingReadyCommand,
    RequestCourseCommand,
    ScheduleCourseCommand,
    SetAttendanceCommand,
    StudentInput,
)

__all__ = [
    "RequestCourseCommand",
    "ScheduleCourseCommand",
    "CancelCourseCommand",
    "CompleteCourseCommand",
    "MarkBillingReadyCommand",
    "StudentInput",
    "AddStudentsCommand",
    "SetAttendanceCommand",
    "ChangeAvailabilityCommand",
]
