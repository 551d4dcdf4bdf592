"""
Booking Lifecycle

The booking finite state machine as data: every allowed (from, to) pair
maps to the actor roles permitted to trigger it. ``transition`` is a pure
function returning a new Booking snapshot; it never persists and never
changes its input.
"""

from dataclasses import replace
from datetime import date

from shared.domain.base import utcnow
from shared.domain.exceptions import ValidationError

from .entities import (
    REJECTION_REASON_MAX_LENGTH,
    TERMINAL_STATUSES,
    ActorRole,
    Booking,
    BookingStatus,
)
from .exceptions import InvalidTransitionError, UnauthorizedError

TRANSITIONS: dict[tuple[BookingStatus, BookingStatus], frozenset[ActorRole]] = {
    (BookingStatus.PENDING, BookingStatus.APPROVED): frozenset({ActorRole.OWNER}),
    (BookingStatus.PENDING, BookingStatus.REJECTED): frozenset({ActorRole.OWNER}),
    (BookingStatus.PENDING, BookingStatus.CANCELLED): frozenset({ActorRole.TENANT, ActorRole.OWNER}),
    (BookingStatus.APPROVED, BookingStatus.ACTIVE): frozenset({ActorRole.SYSTEM, ActorRole.OWNER}),
    (BookingStatus.APPROVED, BookingStatus.CANCELLED): frozenset({ActorRole.TENANT, ActorRole.OWNER}),
    (BookingStatus.ACTIVE, BookingStatus.COMPLETED): frozenset({ActorRole.SYSTEM, ActorRole.OWNER}),
}


def allowed_transitions(status: BookingStatus) -> list[BookingStatus]:
    """Statuses reachable from ``status`` in one step"""
    return [target for (source, target) in TRANSITIONS if source == status]


def allowed_roles(status: BookingStatus, target: BookingStatus) -> frozenset[ActorRole]:
    return TRANSITIONS.get((status, target), frozenset())


def is_terminal(status: BookingStatus) -> bool:
    return status in TERMINAL_STATUSES


def transition(
    booking: Booking,
    target_status: BookingStatus,
    actor_role: ActorRole,
    rejection_reason: str | None = None,
    *,
    today: date | None = None,
) -> Booking:
    """
    Move a booking to ``target_status``

    Args:
        booking: Current snapshot
        target_status: Requested status
        actor_role: Caller's role relative to this booking, resolved upstream
        rejection_reason: Required (non-blank) when rejecting, ignored otherwise
        today: Reference date for time-based transitions (defaults to today)

    Returns:
        New snapshot with the target status

    Raises:
        InvalidTransitionError: Pair not in TRANSITIONS, or start/end date not reached
        UnauthorizedError: Role not allowed for this transition
        ValidationError: Missing or too long rejection reason
    """
    key = (booking.status, target_status)
    if key not in TRANSITIONS:
        raise InvalidTransitionError(booking.status, target_status)

    if actor_role not in TRANSITIONS[key]:
        raise UnauthorizedError(actor_role, target_status)

    reason = None
    if target_status == BookingStatus.REJECTED:
        reason = (rejection_reason or '').strip()
        if not reason:
            raise ValidationError("Rejection reason is required")
        if len(reason) > REJECTION_REASON_MAX_LENGTH:
            raise ValidationError(
                f"Rejection reason must not exceed {REJECTION_REASON_MAX_LENGTH} characters"
            )

    today = today or date.today()
    if target_status == BookingStatus.ACTIVE and today < booking.start_date:
        raise InvalidTransitionError(
            booking.status,
            target_status,
            f"Booking cannot become active before its start date ({booking.start_date})",
        )
    if target_status == BookingStatus.COMPLETED and today < booking.end_date:
        raise InvalidTransitionError(
            booking.status,
            target_status,
            f"Booking cannot be completed before its end date ({booking.end_date})",
        )

    return replace(
        booking,
        status=target_status,
        rejection_reason=reason,
        updated_at=utcnow(),
    )
