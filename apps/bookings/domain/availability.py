"""
House Availability

Conflict detection for booking admission. This is the domain-level guard
against double bookings: a pure predicate over the bookings the caller
supplies for one house.

Only occupying bookings (APPROVED, ACTIVE) block dates. PENDING requests
never block each other; the owner decides which one wins when approving,
and the approval re-runs this check.

The check is only as fresh as the bookings it is given. Callers must hold
a per-house lock (SELECT FOR UPDATE on the house row) between reading the
bookings and writing the new one.
"""

from typing import Iterable, List
from uuid import UUID

from shared.domain.value_objects import DateRange

from .entities import Booking, House
from .exceptions import ConflictError


def find_conflicts(
    house: House,
    dates: DateRange,
    existing_bookings: Iterable[Booking],
    *,
    exclude_booking_id: UUID | None = None,
) -> List[Booking]:
    """
    Occupying bookings on ``house`` whose dates overlap ``dates``

    Bookings of other houses and the excluded booking are ignored.
    Order follows ``existing_bookings``.
    """
    return [
        booking for booking in existing_bookings
        if booking.house_id == house.id
        and booking.id != exclude_booking_id
        and booking.is_occupying
        and booking.dates.overlaps_with(dates)
    ]


def is_available(
    house: House,
    dates: DateRange,
    existing_bookings: Iterable[Booking],
    *,
    exclude_booking_id: UUID | None = None,
) -> bool:
    return not find_conflicts(
        house, dates, existing_bookings, exclude_booking_id=exclude_booking_id
    )


def check_availability(
    house: House,
    dates: DateRange,
    existing_bookings: Iterable[Booking],
    *,
    exclude_booking_id: UUID | None = None,
) -> None:
    """
    Admission gate

    Raises:
        ConflictError: with the IDs of every colliding booking
    """
    conflicts = find_conflicts(
        house, dates, existing_bookings, exclude_booking_id=exclude_booking_id
    )
    if conflicts:
        raise ConflictError([booking.id for booking in conflicts])
