"""Django ORM repositories for the booking domain.

Repositories translate between ORM rows and immutable domain snapshots.
Locking is opt-in (``lock=True``) and only takes effect inside
``transaction.atomic()``, e.g. within a ``DjangoUnitOfWork``.
"""

from __future__ import annotations

import logging
from typing import List
from uuid import UUID

from django.db import IntegrityError, transaction  # type: ignore
from django.db.utils import NotSupportedError  # type: ignore

from apps.bookings.domain.entities import Booking, BookingStatus, House
from apps.bookings.domain.exceptions import (
    ConcurrentModificationError,
    ConflictError,
    NotFoundError,
)
from apps.bookings.models import Booking as BookingModel
from apps.properties.models import House as HouseModel
from shared.domain.value_objects import DateRange

logger = logging.getLogger(__name__)

# Name of the PostgreSQL exclusion constraint created by migration 0002
OVERLAP_CONSTRAINT_NAME = "booking_no_overlapping_occupancy"


def _lock_queryset_if_possible(queryset):
    """Apply select_for_update when inside transaction.atomic()."""

    if not transaction.get_connection().in_atomic_block:
        return queryset

    try:
        return queryset.select_for_update()
    except NotSupportedError:
        return queryset


def _to_domain(row: BookingModel) -> Booking:
    return Booking(
        id=row.id,
        house_id=row.house_id,
        tenant_id=row.tenant_id,
        dates=DateRange(row.start_date, row.end_date),
        total_amount=row.total_amount,
        status=BookingStatus(row.status),
        rejection_reason=row.rejection_reason or None,
        notes=row.notes or "",
        created_at=row.created_at,
        updated_at=row.updated_at,
    )


class DjangoHouseRepository:
    """Read-only access to house terms."""

    def get(self, house_id: int, lock: bool = False) -> House:
        """
        Load a house snapshot.

        With ``lock=True`` the house row is locked for the rest of the
        transaction, which serializes admissions and approvals per house.
        """
        queryset = HouseModel.objects.filter(pk=house_id).only("id", "owner", "price_per_month")
        if lock:
            queryset = _lock_queryset_if_possible(queryset)
        row = queryset.first()
        if row is None:
            raise NotFoundError("House", house_id)
        return House(id=row.id, owner_id=row.owner_id, price_per_month=row.price_per_month)


class DjangoBookingRepository:
    """Booking store backed by ``apps.bookings.models.Booking``."""

    def get_by_id(self, booking_id: UUID, lock: bool = False) -> Booking:
        queryset = BookingModel.objects.filter(pk=booking_id)
        if lock:
            queryset = _lock_queryset_if_possible(queryset)
        row = queryset.first()
        if row is None:
            raise NotFoundError("Booking", booking_id)
        return _to_domain(row)

    def list_for_house(self, house_id: int) -> List[Booking]:
        """Every booking recorded for a house, occupying or not."""
        rows = BookingModel.objects.filter(house_id=house_id).order_by("start_date", "created_at")
        return [_to_domain(row) for row in rows]

    def list_occupying(self, house_id: int) -> List[Booking]:
        rows = BookingModel.objects.filter(
            house_id=house_id,
            status__in=BookingModel.OCCUPYING,
        ).order_by("start_date")
        return [_to_domain(row) for row in rows]

    def tenant_rows(self, tenant_id: int):
        """Queryset of a tenant's bookings, newest first; the tenant's API listing."""
        return BookingModel.objects.filter(tenant_id=tenant_id).order_by("-created_at")

    def owner_rows(self, owner_id: int):
        """Queryset of bookings on a landlord's houses, newest first; the landlord's API listing."""
        return BookingModel.objects.filter(house__owner_id=owner_id).order_by("-created_at")

    def list_for_tenant(self, tenant_id: int) -> List[Booking]:
        return [_to_domain(row) for row in self.tenant_rows(tenant_id)]

    def list_for_owner(self, owner_id: int) -> List[Booking]:
        return [_to_domain(row) for row in self.owner_rows(owner_id)]

    def list_due(self, status: BookingStatus, date_field: str, on_or_before) -> List[Booking]:
        """Bookings in ``status`` whose ``start_date``/``end_date`` is not after a date."""
        if date_field not in ("start_date", "end_date"):
            raise ValueError(f"Unsupported date field: {date_field}")
        rows = BookingModel.objects.filter(
            status=status.value,
            **{f"{date_field}__lte": on_or_before},
        ).order_by(date_field)
        return [_to_domain(row) for row in rows]

    def count_for_tenant(self, tenant_id: int) -> int:
        return self.tenant_rows(tenant_id).count()

    def count_pending_for_owner(self, owner_id: int) -> int:
        return self.owner_rows(owner_id).filter(status=BookingModel.Status.PENDING).count()

    def add(self, booking: Booking) -> Booking:
        """Insert a new booking."""
        try:
            with transaction.atomic():
                BookingModel.objects.create(
                    id=booking.id,
                    house_id=booking.house_id,
                    tenant_id=booking.tenant_id,
                    start_date=booking.start_date,
                    end_date=booking.end_date,
                    total_amount=booking.total_amount,
                    status=booking.status.value,
                    rejection_reason=booking.rejection_reason,
                    notes=booking.notes,
                    created_at=booking.created_at,
                    updated_at=booking.updated_at,
                )
        except IntegrityError as exc:
            self._raise_if_overlap(exc, booking)
            raise
        return booking

    def save(self, booking: Booking, expected_status: BookingStatus) -> Booking:
        """
        Persist a status change with compare-and-swap on the status column.

        Raises:
            ConcurrentModificationError: the stored status is no longer ``expected_status``
            ConflictError: the database rejected an overlapping occupancy
        """
        try:
            with transaction.atomic():
                updated = BookingModel.objects.filter(
                    pk=booking.id,
                    status=expected_status.value,
                ).update(
                    status=booking.status.value,
                    rejection_reason=booking.rejection_reason,
                    notes=booking.notes,
                    updated_at=booking.updated_at,
                )
        except IntegrityError as exc:
            self._raise_if_overlap(exc, booking)
            raise

        if updated == 0:
            if not BookingModel.objects.filter(pk=booking.id).exists():
                raise NotFoundError("Booking", booking.id)
            raise ConcurrentModificationError(
                expected_status,
                booking.status,
                f"Booking {booking.id} is no longer {expected_status.value}",
            )
        return booking

    def _raise_if_overlap(self, exc: IntegrityError, booking: Booking) -> None:
        if OVERLAP_CONSTRAINT_NAME not in str(exc):
            return
        logger.warning(
            "Database rejected overlapping occupancy for booking %s on house %s",
            booking.id,
            booking.house_id,
        )
        conflicting = BookingModel.objects.filter(
            house_id=booking.house_id,
            status__in=BookingModel.OCCUPYING,
            start_date__lt=booking.end_date,
            end_date__gt=booking.start_date,
        ).exclude(pk=booking.id).values_list("id", flat=True)
        raise ConflictError(list(conflicting)) from exc
