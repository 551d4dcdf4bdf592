from datetime import date
from decimal import Decimal

import pytest

from apps.bookings.domain.availability import check_availability, find_conflicts, is_available
from apps.bookings.domain.entities import Booking, BookingStatus, House
from apps.bookings.domain.exceptions import ConflictError
from shared.domain.value_objects import DateRange

HOUSE = House(id=1, owner_id=10, price_per_month=Decimal("3000.00"))


def booking(start, end, status=BookingStatus.APPROVED, house_id=1):
    return Booking(
        house_id=house_id,
        tenant_id=20,
        dates=DateRange(start, end),
        total_amount=Decimal("100.00"),
        status=status,
        rejection_reason="No" if status == BookingStatus.REJECTED else None,
    )


def test_empty_house_is_available():
    dates = DateRange(date(2030, 3, 1), date(2030, 3, 10))

    assert is_available(HOUSE, dates, [])
    check_availability(HOUSE, dates, [])


def test_overlap_with_approved_booking_conflicts():
    existing = booking(date(2030, 3, 1), date(2030, 3, 10))

    with pytest.raises(ConflictError) as excinfo:
        check_availability(HOUSE, DateRange(date(2030, 3, 5), date(2030, 3, 15)), [existing])

    assert excinfo.value.conflicting_booking_ids == (existing.id,)


def test_active_booking_also_blocks():
    existing = booking(date(2030, 3, 1), date(2030, 3, 10), BookingStatus.ACTIVE)

    assert not is_available(HOUSE, DateRange(date(2030, 3, 9), date(2030, 3, 12)), [existing])


@pytest.mark.parametrize(
    "status",
    [BookingStatus.PENDING, BookingStatus.REJECTED, BookingStatus.CANCELLED, BookingStatus.COMPLETED],
)
def test_non_occupying_bookings_never_block(status):
    existing = booking(date(2030, 3, 1), date(2030, 3, 10), status)

    assert is_available(HOUSE, DateRange(date(2030, 3, 1), date(2030, 3, 10)), [existing])


def test_touching_ranges_are_allowed():
    existing = booking(date(2030, 3, 1), date(2030, 3, 10))

    assert is_available(HOUSE, DateRange(date(2030, 3, 10), date(2030, 3, 20)), [existing])
    assert is_available(HOUSE, DateRange(date(2030, 2, 20), date(2030, 3, 1)), [existing])


def test_every_conflict_is_reported():
    first = booking(date(2030, 3, 1), date(2030, 3, 5))
    second = booking(date(2030, 3, 8), date(2030, 3, 12), BookingStatus.ACTIVE)
    clear = booking(date(2030, 3, 20), date(2030, 3, 25))

    with pytest.raises(ConflictError) as excinfo:
        check_availability(HOUSE, DateRange(date(2030, 3, 3), date(2030, 3, 10)), [first, clear, second])

    assert excinfo.value.conflicting_booking_ids == (first.id, second.id)
    assert str(first.id) in excinfo.value.message


def test_bookings_of_other_houses_are_ignored():
    elsewhere = booking(date(2030, 3, 1), date(2030, 3, 10), house_id=2)

    assert find_conflicts(HOUSE, DateRange(date(2030, 3, 1), date(2030, 3, 10)), [elsewhere]) == []


def test_excluded_booking_does_not_conflict_with_itself():
    existing = booking(date(2030, 3, 1), date(2030, 3, 10))

    assert is_available(HOUSE, existing.dates, [existing], exclude_booking_id=existing.id)


def test_check_is_repeatable():
    existing = [booking(date(2024, 6, 1), date(2024, 6, 10))]
    dates = DateRange(date(2024, 6, 5), date(2024, 6, 15))

    first = find_conflicts(HOUSE, dates, existing)
    second = find_conflicts(HOUSE, dates, existing)

    assert first == second == existing
