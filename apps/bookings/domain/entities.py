"""
Booking Domain Entities

Core business entities for the booking domain:
- BookingStatus: FSM states for booking lifecycle
- ActorRole: who is asking for a status change, relative to one booking
- House: read-only snapshot of the listing terms the engine needs
- Booking: immutable snapshot of a tenant's claim on a house
"""

from dataclasses import dataclass
from datetime import date
from decimal import Decimal
from enum import Enum
from uuid import UUID

from shared.domain.base import Entity, ValueObject
from shared.domain.exceptions import ValidationError
from shared.domain.value_objects import DateRange

NOTES_MAX_LENGTH = 1000
REJECTION_REASON_MAX_LENGTH = 500


class BookingStatus(Enum):
    """
    Booking Status Finite State Machine

    State transitions (see lifecycle.TRANSITIONS):
    - PENDING -> APPROVED (owner accepts the request)
    - PENDING -> REJECTED (owner declines, reason required)
    - PENDING -> CANCELLED (tenant or owner)
    - APPROVED -> ACTIVE (start date reached)
    - APPROVED -> CANCELLED (tenant or owner)
    - ACTIVE -> COMPLETED (end date reached)
    """
    PENDING = 'pending'        # Waiting for owner decision
    APPROVED = 'approved'      # Accepted, dates are held
    REJECTED = 'rejected'      # Declined by owner
    ACTIVE = 'active'          # Tenant is in the house
    COMPLETED = 'completed'    # Stay is over
    CANCELLED = 'cancelled'    # Withdrawn by tenant or owner


# Statuses that hold the house for their date range
OCCUPYING_STATUSES = frozenset({BookingStatus.APPROVED, BookingStatus.ACTIVE})

TERMINAL_STATUSES = frozenset({
    BookingStatus.REJECTED,
    BookingStatus.COMPLETED,
    BookingStatus.CANCELLED,
})


class ActorRole(Enum):
    """Role of the caller relative to a specific booking"""
    OWNER = 'owner'      # Owns the booked house
    TENANT = 'tenant'    # Made the booking
    SYSTEM = 'system'    # Scheduled jobs
    NONE = 'none'        # Unrelated to the booking


@dataclass(frozen=True)
class House(ValueObject):
    """
    House snapshot

    The engine never owns house data; it only reads the owner for
    authorization and the monthly rate for pricing.
    """
    id: int
    owner_id: int
    price_per_month: Decimal


@dataclass(frozen=True, kw_only=True)
class Booking(Entity):
    """
    Booking snapshot

    Represents a tenant's request to rent a house for specific dates.

    Key invariants:
    - Booking must have valid date range (start_date < end_date)
    - Total amount is positive
    - Rejection reason is set if and only if status is REJECTED
    - Only APPROVED/ACTIVE bookings block house dates
    """

    house_id: int
    tenant_id: int
    dates: DateRange
    total_amount: Decimal
    status: BookingStatus = BookingStatus.PENDING
    rejection_reason: str | None = None
    notes: str = ''

    def __post_init__(self):
        if self.total_amount <= 0:
            raise ValidationError("Total amount must be greater than 0")

        if self.status == BookingStatus.REJECTED and not self.rejection_reason:
            raise ValidationError("Rejected booking must carry a rejection reason")
        if self.status != BookingStatus.REJECTED and self.rejection_reason:
            raise ValidationError("Rejection reason is only allowed on rejected bookings")

        if len(self.notes) > NOTES_MAX_LENGTH:
            raise ValidationError(f"Notes must not exceed {NOTES_MAX_LENGTH} characters")

    @classmethod
    def request(
        cls,
        house: House,
        tenant_id: int,
        dates: DateRange,
        total_amount: Decimal,
        notes: str = '',
    ) -> 'Booking':
        """New booking request in PENDING status"""
        return cls(
            house_id=house.id,
            tenant_id=tenant_id,
            dates=dates,
            total_amount=total_amount,
            notes=notes or '',
        )

    @property
    def start_date(self) -> date:
        return self.dates.start_date

    @property
    def end_date(self) -> date:
        return self.dates.end_date

    @property
    def is_occupying(self) -> bool:
        """Whether this booking blocks the house for its dates"""
        return self.status in OCCUPYING_STATUSES

    @property
    def is_terminal(self) -> bool:
        return self.status in TERMINAL_STATUSES

    def __str__(self):
        return f"Booking {self.id} ({self.status.value})"
