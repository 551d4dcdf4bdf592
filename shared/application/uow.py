"""
Unit of Work

One use case runs in one database transaction. Events recorded while the
transaction is open reach the message bus only once it has committed; a
rollback drops them together with the writes.
"""

from abc import ABC, abstractmethod
from functools import partial
from typing import List
import logging

from django.db import transaction

from shared.domain.base import DomainEvent

logger = logging.getLogger(__name__)


class AbstractUnitOfWork(ABC):
    """
    Transaction boundary for a use case

    Leaving the ``with`` block normally commits; leaving it with an
    exception rolls back and lets the exception propagate.
    """

    def __enter__(self):
        self.begin()
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        try:
            if exc_type is None:
                self.commit()
            else:
                self.rollback()
        finally:
            self.end(exc_type, exc_val, exc_tb)

    def begin(self):
        pass

    def end(self, exc_type=None, exc_val=None, exc_tb=None):
        pass

    @abstractmethod
    def record(self, *events: DomainEvent):
        """Queue events for publication after commit"""

    @abstractmethod
    def commit(self):
        pass

    @abstractmethod
    def rollback(self):
        pass


class DjangoUnitOfWork(AbstractUnitOfWork):
    """
    Unit of Work over ``transaction.atomic()``

    Nested inside an outer atomic block (tests, a calling use case) it
    becomes a savepoint, and publication waits for the outermost commit.

    Usage:
        with DjangoUnitOfWork() as uow:
            booking = booking_repo.get_by_id(booking_id, lock=True)
            approved = transition(booking, BookingStatus.APPROVED, ActorRole.OWNER)
            booking_repo.save(approved, expected_status=booking.status)
            uow.record(BookingStatusChanged.between(booking, approved, ActorRole.OWNER))
    """

    def __init__(self, bus=None):
        self._bus = bus
        self._atomic = None
        self._events: List[DomainEvent] = []

    def begin(self):
        self._atomic = transaction.atomic()
        self._atomic.__enter__()

    def end(self, exc_type=None, exc_val=None, exc_tb=None):
        atomic, self._atomic = self._atomic, None
        if atomic is not None:
            atomic.__exit__(exc_type, exc_val, exc_tb)

    def record(self, *events: DomainEvent):
        for event in events:
            logger.debug("Recorded %s for %s", type(event).__name__, event.aggregate_id)
        self._events.extend(events)

    def commit(self):
        events, self._events = self._events, []
        if not events:
            return
        logger.debug("%d events wait for transaction commit", len(events))
        # robust: Django logs subscriber failures instead of raising
        transaction.on_commit(partial(self._publish, events), robust=True)

    def rollback(self):
        if self._events:
            logger.info("Transaction rolled back, dropping %d events", len(self._events))
        self._events = []

    def _publish(self, events: List[DomainEvent]):
        bus = self._bus
        if bus is None:
            from shared.application.message_bus import message_bus as bus

        logger.info("Publishing %d domain events", len(events))
        bus.publish_events(events)
