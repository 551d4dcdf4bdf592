"""Event subscribers for the booking domain.

Notification delivery, payments and analytics react to these events
outside this project. The built-in subscriber keeps a structured audit
trail of every admission and status change.
"""

from __future__ import annotations

import structlog

from apps.bookings.domain.events import BookingRequested, BookingStatusChanged

audit_logger = structlog.get_logger("apps.bookings.audit")


def log_booking_requested(event: BookingRequested) -> None:
    audit_logger.info("booking_requested", **event.to_dict())


def log_booking_status_changed(event: BookingStatusChanged) -> None:
    audit_logger.info("booking_status_changed", **event.to_dict())


EVENT_SUBSCRIBERS = {
    BookingRequested: [log_booking_requested],
    BookingStatusChanged: [log_booking_status_changed],
}
