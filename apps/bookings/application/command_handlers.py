"""
Booking Command Handlers

These are the use cases for the booking domain.
They orchestrate domain operations within transactions.

Commands:
- CreateBookingCommand: Admit a tenant's booking request
- ChangeBookingStatusCommand: Approve, reject, cancel, activate or complete
"""

from dataclasses import dataclass
from datetime import date
from uuid import UUID
import logging

from django.utils import timezone

from shared.application.uow import DjangoUnitOfWork
from shared.domain.value_objects import DateRange
from apps.bookings.application.actors import resolve_actor_role
from apps.bookings.domain.availability import check_availability
from apps.bookings.domain.entities import (
    NOTES_MAX_LENGTH,
    OCCUPYING_STATUSES,
    Booking,
    BookingStatus,
)
from apps.bookings.domain.events import BookingRequested, BookingStatusChanged
from apps.bookings.domain.exceptions import ValidationError
from apps.bookings.domain.lifecycle import transition
from apps.bookings.domain.pricing import compute_total

logger = logging.getLogger(__name__)


# ===== Commands =====

@dataclass
class CreateBookingCommand:
    """
    Command to create a new booking request

    This is the primary entry point for admitting bookings.
    """
    house_id: int
    tenant_id: int
    start_date: date
    end_date: date
    notes: str = ''


@dataclass
class ChangeBookingStatusCommand:
    """
    Command to move a booking to another status

    ``acting_user_id`` is None for scheduled jobs acting as the system.
    """
    booking_id: UUID
    target_status: BookingStatus
    acting_user_id: int | None = None
    rejection_reason: str | None = None


# ===== Command Handlers =====

class CreateBookingHandler:
    """
    Handler for CreateBooking command

    Strategy:
    1. Validate input that does not need the database
    2. Start database transaction (atomic)
    3. Lock the house row (SELECT FOR UPDATE) - one admission per house at a time
    4. Price the stay
    5. Check availability against the house's bookings
    6. Insert the PENDING booking
    7. Commit, then publish BookingRequested
    8. PostgreSQL EXCLUDE constraint guards occupying rows as final safety net
    """

    def __init__(self, booking_repo, house_repo, today=None):
        self.booking_repo = booking_repo
        self.house_repo = house_repo
        self._today = today or timezone.localdate

    def handle(self, command: CreateBookingCommand) -> Booking:
        """
        Handle booking creation

        Returns: Created Booking (PENDING)

        Raises:
            ValidationError: bad dates or notes
            NotFoundError: house does not exist
            ConflictError: dates overlap an approved or active booking
        """
        logger.info(
            "Creating booking for house %s, tenant %s, dates %s - %s",
            command.house_id,
            command.tenant_id,
            command.start_date,
            command.end_date,
        )

        dates = DateRange(command.start_date, command.end_date)

        if command.start_date <= self._today():
            raise ValidationError("Start date must be in the future")

        notes = (command.notes or '').strip()
        if len(notes) > NOTES_MAX_LENGTH:
            raise ValidationError(f"Notes must not exceed {NOTES_MAX_LENGTH} characters")

        with DjangoUnitOfWork() as uow:
            house = self.house_repo.get(command.house_id, lock=True)

            total_amount = compute_total(house.price_per_month, dates.start_date, dates.end_date)

            check_availability(house, dates, self.booking_repo.list_for_house(house.id))

            booking = Booking.request(
                house=house,
                tenant_id=command.tenant_id,
                dates=dates,
                total_amount=total_amount,
                notes=notes,
            )
            self.booking_repo.add(booking)
            uow.record(BookingRequested.from_booking(booking))

        logger.info("Booking %s requested (total %s)", booking.id, booking.total_amount)

        return booking


class ChangeBookingStatusHandler:
    """
    Handler for status changes

    The booking row is locked and the write is a compare-and-swap on the
    status that was read, so two actors racing on one booking cannot both
    succeed. Moving a booking into an occupying status also locks the
    house and re-checks availability, because PENDING requests never block
    each other at admission.
    """

    def __init__(self, booking_repo, house_repo, today=None):
        self.booking_repo = booking_repo
        self.house_repo = house_repo
        self._today = today or timezone.localdate

    def handle(self, command: ChangeBookingStatusCommand) -> Booking:
        """
        Handle status change

        Returns: Updated Booking

        Raises:
            NotFoundError: booking or house does not exist
            InvalidTransitionError: not allowed from the current status
            UnauthorizedError: acting user may not perform it
            ValidationError: missing rejection reason
            ConflictError: approving would overlap an occupying booking
        """
        target = command.target_status
        logger.info("Changing booking %s to %s", command.booking_id, target.value)

        with DjangoUnitOfWork() as uow:
            booking = self.booking_repo.get_by_id(command.booking_id, lock=True)

            becomes_occupying = (
                target in OCCUPYING_STATUSES and booking.status not in OCCUPYING_STATUSES
            )
            house = self.house_repo.get(booking.house_id, lock=becomes_occupying)

            actor_role = resolve_actor_role(booking, house, command.acting_user_id)

            updated = transition(
                booking,
                target,
                actor_role,
                command.rejection_reason,
                today=self._today(),
            )

            if becomes_occupying:
                check_availability(
                    house,
                    updated.dates,
                    self.booking_repo.list_for_house(house.id),
                    exclude_booking_id=updated.id,
                )

            self.booking_repo.save(updated, expected_status=booking.status)
            uow.record(BookingStatusChanged.between(booking, updated, actor_role))

        logger.info(
            "Booking %s moved %s -> %s by %s",
            updated.id,
            booking.status.value,
            updated.status.value,
            actor_role.value,
        )

        return updated
