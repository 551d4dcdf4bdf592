"""Service layer wiring for booking workflows.

``bootstrap`` registers the command handlers and event subscribers on the
message bus; the API and Celery tasks dispatch commands through the bus.
Read-only helpers used by the API live here as well.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import date
from decimal import Decimal
from typing import List
from uuid import UUID

from shared.application.message_bus import MessageBus, message_bus
from shared.domain.value_objects import DateRange

from .application.command_handlers import (
    ChangeBookingStatusCommand,
    ChangeBookingStatusHandler,
    CreateBookingCommand,
    CreateBookingHandler,
)
from .domain.availability import find_conflicts
from .domain.pricing import compute_total
from .repositories import DjangoBookingRepository, DjangoHouseRepository
from .subscribers import EVENT_SUBSCRIBERS

logger = logging.getLogger(__name__)


def bootstrap(bus: MessageBus = message_bus) -> MessageBus:
    """Register booking command handlers and event subscribers (idempotent)."""

    booking_repo = DjangoBookingRepository()
    house_repo = DjangoHouseRepository()

    if not bus.has_command_handler(CreateBookingCommand):
        bus.register_command_handler(
            CreateBookingCommand,
            CreateBookingHandler(booking_repo, house_repo).handle,
        )
    if not bus.has_command_handler(ChangeBookingStatusCommand):
        bus.register_command_handler(
            ChangeBookingStatusCommand,
            ChangeBookingStatusHandler(booking_repo, house_repo).handle,
        )

    for event_type, handlers in EVENT_SUBSCRIBERS.items():
        for handler in handlers:
            bus.register_event_handler(event_type, handler)

    logger.debug("Booking handlers registered")
    return bus


@dataclass(frozen=True)
class AvailabilityQuote:
    house_id: int
    dates: DateRange
    total_amount: Decimal
    conflicting_booking_ids: List[UUID]

    @property
    def available(self) -> bool:
        return not self.conflicting_booking_ids


def quote_booking(house_id: int, start_date: date, end_date: date) -> AvailabilityQuote:
    """
    Price and availability of a stay without admitting it.

    No lock is taken: the answer is advisory and may be stale by the time
    the tenant submits the request.
    """
    house = DjangoHouseRepository().get(house_id)
    dates = DateRange(start_date, end_date)
    conflicts = find_conflicts(house, dates, DjangoBookingRepository().list_occupying(house.id))
    return AvailabilityQuote(
        house_id=house.id,
        dates=dates,
        total_amount=compute_total(house.price_per_month, start_date, end_date),
        conflicting_booking_ids=[booking.id for booking in conflicts],
    )


def booking_summary(user_id: int) -> dict[str, int]:
    """Dashboard counters: the user's bookings and requests awaiting their decision."""
    repo = DjangoBookingRepository()
    return {
        "bookings_count": repo.count_for_tenant(user_id),
        "pending_requests_count": repo.count_pending_for_owner(user_id),
    }
