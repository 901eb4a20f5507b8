"""
Realtime Event Handlers
Translate committed domain events into push frames
"""
from __future__ import annotations

from billing.domain.services.billing_calculator import format_money
from courses.domain.events import (
    STATUS_EVENTS,
    AttendanceUpdated,
    CourseInvoiced,
    CourseScheduled,
    CourseStatusChanged,
)
from realtime.broadcaster import EventBroadcaster
from shared.infrastructure.messaging.event_bus import EventBus

COURSE_ASSIGNED = "course_assigned"
COURSE_STATUS_CHANGED = "course_status_changed"
ATTENDANCE_UPDATED = "attendance_updated"
INVOICE_CREATED = "invoice_created"


def register_realtime_handlers(event_bus: EventBus, broadcaster: EventBroadcaster) -> None:
    """
    Subscribe the broadcaster to the course events.

    - CourseScheduled: ``course_assigned`` to the assigned instructor only
    - every status change: ``course_status_changed`` to all sessions
    - AttendanceUpdated: ``attendance_updated`` to all sessions
    - CourseInvoiced: ``invoice_created`` to all sessions
    """

    async def on_course_scheduled(event: CourseScheduled) -> None:
        await broadcaster.send_to_user(event.instructor_id, COURSE_ASSIGNED, event.payload())

    async def on_status_changed(event: CourseStatusChanged) -> None:
        await broadcaster.broadcast(COURSE_STATUS_CHANGED, event.payload())

    async def on_attendance_updated(event: AttendanceUpdated) -> None:
        await broadcaster.broadcast(ATTENDANCE_UPDATED, event.payload())

    async def on_course_invoiced(event: CourseInvoiced) -> None:
        await broadcaster.broadcast(
            INVOICE_CREATED,
            {
                "invoiceId": event.invoice_id,
                "invoiceNumber": event.invoice_number,
                "courseId": event.course_id,
                "courseNumber": event.course_number,
                "organizationId": event.organization_id,
                "amount": format_money(event.amount),
            },
        )

    event_bus.subscribe(CourseScheduled.__name__, on_course_scheduled)
    for event_type in STATUS_EVENTS:
        event_bus.subscribe(event_type.__name__, on_status_changed)
    event_bus.subscribe(AttendanceUpdated.__name__, on_attendance_updated)
    event_bus.subscribe(CourseInvoiced.__name__, on_course_invoiced)
