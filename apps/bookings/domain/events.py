"""
Booking Domain Events

Events that represent things that have happened in the booking domain.
These are published after successful transaction commits.
"""

from dataclasses import dataclass
from decimal import Decimal
from uuid import UUID

from shared.domain.base import DomainEvent
from shared.domain.value_objects import DateRange

from .entities import ActorRole, Booking, BookingStatus


@dataclass(frozen=True, kw_only=True)
class BookingRequested(DomainEvent):
    """
    Event: A tenant's booking request was admitted (status PENDING)

    Triggers:
    - Notify house owner of a request to review
    """
    booking_id: UUID
    house_id: int
    tenant_id: int
    dates: DateRange
    total_amount: Decimal

    @classmethod
    def from_booking(cls, booking: Booking) -> 'BookingRequested':
        return cls(
            aggregate_id=booking.id,
            booking_id=booking.id,
            house_id=booking.house_id,
            tenant_id=booking.tenant_id,
            dates=booking.dates,
            total_amount=booking.total_amount,
        )

    def to_dict(self) -> dict:
        data = super().to_dict()
        data.update({
            'booking_id': str(self.booking_id),
            'house_id': self.house_id,
            'tenant_id': self.tenant_id,
            'start_date': self.dates.start_date.isoformat(),
            'end_date': self.dates.end_date.isoformat(),
            'total_amount': str(self.total_amount),
        })
        return data


@dataclass(frozen=True, kw_only=True)
class BookingStatusChanged(DomainEvent):
    """
    Event: Booking moved from one status to another

    Triggers:
    - Notify tenant of approval / rejection
    - Notify owner of cancellation
    - Payment and payout flows (handled outside this engine)
    """
    booking_id: UUID
    house_id: int
    tenant_id: int
    old_status: BookingStatus
    new_status: BookingStatus
    actor_role: ActorRole
    rejection_reason: str | None = None

    @classmethod
    def between(cls, before: Booking, after: Booking, actor_role: ActorRole) -> 'BookingStatusChanged':
        return cls(
            aggregate_id=after.id,
            booking_id=after.id,
            house_id=after.house_id,
            tenant_id=after.tenant_id,
            old_status=before.status,
            new_status=after.status,
            actor_role=actor_role,
            rejection_reason=after.rejection_reason,
        )

    def to_dict(self) -> dict:
        data = super().to_dict()
        data.update({
            'booking_id': str(self.booking_id),
            'house_id': self.house_id,
            'tenant_id': self.tenant_id,
            'old_status': self.old_status.value,
            'new_status': self.new_status.value,
            'actor_role': self.actor_role.value,
            'rejection_reason': self.rejection_reason,
        })
        return data
