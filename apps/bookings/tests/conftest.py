from datetime import date
from decimal import Decimal

import pytest
from django.utils import timezone

from apps.bookings.application.command_handlers import (
    ChangeBookingStatusHandler,
    CreateBookingHandler,
)
from apps.bookings.domain.events import BookingRequested, BookingStatusChanged
from apps.bookings.models import Booking
from apps.bookings.repositories import DjangoBookingRepository, DjangoHouseRepository
from apps.properties.models import House
from apps.users.models import User
from shared.application.message_bus import message_bus

TODAY = date(2030, 1, 10)


@pytest.fixture
def owner(db):
    return User.objects.create_user(
        email="owner@example.com",
        password="OwnerPass123",
        role=User.RoleChoices.LANDLORD,
    )


@pytest.fixture
def tenant(db):
    return User.objects.create_user(email="tenant@example.com", password="TenantPass123")


@pytest.fixture
def stranger(db):
    return User.objects.create_user(email="stranger@example.com", password="StrangerPass123")


@pytest.fixture
def house(owner):
    return House.objects.create(
        owner=owner,
        title="Lake house",
        address="1 Shore Rd",
        city="Madison",
        price_per_month=Decimal("3000.00"),
    )


@pytest.fixture
def make_booking(house, tenant):
    """Insert a booking row directly, bypassing admission."""

    def _make(start_date, end_date, status=Booking.Status.PENDING, **kwargs):
        now = timezone.now()
        kwargs.setdefault("created_at", now)
        kwargs.setdefault("updated_at", now)
        kwargs.setdefault("house", house)
        kwargs.setdefault("tenant", tenant)
        kwargs.setdefault("total_amount", Decimal("100.00"))
        if status == Booking.Status.REJECTED:
            kwargs.setdefault("rejection_reason", "Not available")
        return Booking.objects.create(
            start_date=start_date,
            end_date=end_date,
            status=status,
            **kwargs,
        )

    return _make


@pytest.fixture
def booking_repo():
    return DjangoBookingRepository()


@pytest.fixture
def create_handler(booking_repo):
    return CreateBookingHandler(booking_repo, DjangoHouseRepository(), today=lambda: TODAY)


@pytest.fixture
def status_handler(booking_repo):
    return ChangeBookingStatusHandler(booking_repo, DjangoHouseRepository(), today=lambda: TODAY)


@pytest.fixture
def published_events():
    """Events delivered by the message bus after commit."""

    events = []
    for event_type in (BookingRequested, BookingStatusChanged):
        message_bus.register_event_handler(event_type, events.append)
    yield events
    for event_type in (BookingRequested, BookingStatusChanged):
        message_bus.unregister_event_handler(event_type, events.append)
