"""
Actor Resolution

Maps the authenticated caller onto the role the lifecycle understands.
Resolution happens once, before the lifecycle runs, so the state machine
never sees users or sessions.
"""

from apps.bookings.domain.entities import ActorRole, Booking, House


def resolve_actor_role(booking: Booking, house: House, user_id: int | None) -> ActorRole:
    """
    Role of ``user_id`` relative to ``booking``

    ``None`` stands for the platform itself (scheduled jobs). The house
    owner wins over the tenant if they are the same user.
    """
    if user_id is None:
        return ActorRole.SYSTEM
    if house.owner_id == user_id:
        return ActorRole.OWNER
    if booking.tenant_id == user_id:
        return ActorRole.TENANT
    return ActorRole.NONE
