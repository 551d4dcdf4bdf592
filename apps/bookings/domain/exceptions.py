"""
Booking Domain Errors

Errors specific to booking admission and lifecycle. Generic validation
and lookup errors live in the shared kernel and are re-exported here so
callers can import the whole taxonomy from one place.
"""

from shared.domain.exceptions import (
    DomainError,
    InvalidRangeError,
    NotFoundError,
    ValidationError,
)

__all__ = [
    'DomainError',
    'ValidationError',
    'InvalidRangeError',
    'NotFoundError',
    'ConflictError',
    'InvalidTransitionError',
    'ConcurrentModificationError',
    'UnauthorizedError',
]


class ConflictError(DomainError):
    """Requested dates overlap one or more occupying bookings"""

    code = 'booking_conflict'

    def __init__(self, conflicting_booking_ids, message: str | None = None):
        self.conflicting_booking_ids = tuple(conflicting_booking_ids)
        if message is None:
            ids = ', '.join(str(booking_id) for booking_id in self.conflicting_booking_ids)
            message = f"House is not available for the selected dates (conflicts with: {ids})"
        super().__init__(message)


class InvalidTransitionError(DomainError):
    """Status change is not allowed from the booking's current status"""

    code = 'invalid_transition'

    def __init__(self, current_status, target_status, message: str | None = None):
        self.current_status = current_status
        self.target_status = target_status
        if message is None:
            message = (
                f"Cannot change booking status from {current_status.value} "
                f"to {target_status.value}"
            )
        super().__init__(message)


class ConcurrentModificationError(InvalidTransitionError):
    """Booking status changed between read and write"""

    code = 'concurrent_modification'


class UnauthorizedError(DomainError):
    """Acting role may not perform the requested transition"""

    code = 'unauthorized'

    def __init__(self, actor_role, target_status, message: str | None = None):
        self.actor_role = actor_role
        self.target_status = target_status
        if message is None:
            message = (
                f"Role {actor_role.value} is not allowed to move a booking "
                f"to {target_status.value}"
            )
        super().__init__(message)
