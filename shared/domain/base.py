"""
Base Domain Classes

Building blocks for the domain layer:
- Entity: Immutable snapshot of an object with unique identity
- ValueObject: Immutable objects compared by value
- DomainEvent: Events that represent something that happened

Entities are frozen: state changes produce a new snapshot through
``dataclasses.replace`` instead of mutating the existing one, so a failed
validation can never leave an object half-updated.
"""

from abc import ABC
from dataclasses import dataclass, field
from datetime import datetime, timezone
from uuid import UUID, uuid4


def utcnow() -> datetime:
    return datetime.now(timezone.utc)


@dataclass(frozen=True, kw_only=True)
class Entity(ABC):
    """
    Base class for all entities

    Entities have unique identity. Identity fields are keyword-only so
    subclasses can declare required positional fields.
    """
    id: UUID = field(default_factory=uuid4)
    created_at: datetime = field(default_factory=utcnow)
    updated_at: datetime = field(default_factory=utcnow)


@dataclass(frozen=True)
class ValueObject(ABC):
    """
    Base class for value objects

    Value objects are immutable and have no identity.
    Two value objects are equal if all their attributes are equal.
    """
    pass


@dataclass(frozen=True, kw_only=True)
class DomainEvent:
    """
    Base class for domain events

    Domain events represent something that happened in the domain.
    Subscribers (notifications, audit, analytics) react to them after
    the transaction that produced them has committed.
    """
    event_id: UUID = field(default_factory=uuid4)
    occurred_at: datetime = field(default_factory=utcnow)
    aggregate_id: UUID | None = None

    def to_dict(self) -> dict:
        """Convert event to dictionary for serialization"""
        return {
            'event_id': str(self.event_id),
            'event_type': self.__class__.__name__,
            'occurred_at': self.occurred_at.isoformat(),
            'aggregate_id': str(self.aggregate_id) if self.aggregate_id else None,
        }
