"""Celery tasks for the booking domain."""

from __future__ import annotations

import logging

from celery import shared_task  # type: ignore
from django.utils import timezone  # type: ignore

from shared.application.message_bus import message_bus

from .application.command_handlers import ChangeBookingStatusCommand
from .domain.entities import BookingStatus
from .domain.exceptions import DomainError
from .repositories import DjangoBookingRepository

logger = logging.getLogger(__name__)


def _advance_due_bookings(source: BookingStatus, target: BookingStatus, date_field: str) -> int:
    """Move every ``source`` booking whose ``date_field`` has been reached to ``target``."""

    today = timezone.localdate()
    moved = 0

    for booking in DjangoBookingRepository().list_due(source, date_field, today):
        try:
            message_bus.handle_command(
                ChangeBookingStatusCommand(booking_id=booking.id, target_status=target)
            )
            moved += 1
        except DomainError as e:
            logger.error(
                "Could not move booking %s from %s to %s: %s",
                booking.id,
                source.value,
                target.value,
                e,
            )

    return moved


# ============================================================================
# PERIODIC TASKS (run by Celery Beat)
# ============================================================================

@shared_task(name="bookings.activate_started_bookings")
def activate_started_bookings() -> dict[str, int]:
    """
    Approved bookings whose start date has been reached become ACTIVE.

    Runs hourly.

    Returns:
        dict: {"activated": number of bookings moved}
    """
    activated = _advance_due_bookings(BookingStatus.APPROVED, BookingStatus.ACTIVE, "start_date")

    if activated > 0:
        logger.info("Activated %d bookings", activated)

    return {"activated": activated}


@shared_task(name="bookings.complete_finished_bookings")
def complete_finished_bookings() -> dict[str, int]:
    """
    Active bookings whose end date has been reached become COMPLETED.

    Runs hourly.

    Returns:
        dict: {"completed": number of bookings moved}
    """
    completed = _advance_due_bookings(BookingStatus.ACTIVE, BookingStatus.COMPLETED, "end_date")

    if completed > 0:
        logger.info("Completed %d bookings", completed)

    return {"completed": completed}
