from datetime import date
from decimal import Decimal

import pytest

from apps.bookings.domain.exceptions import InvalidRangeError, ValidationError
from apps.bookings.domain.pricing import compute_total


@pytest.mark.parametrize(
    ("price", "start", "end", "expected"),
    [
        (Decimal("3000.00"), date(2030, 1, 1), date(2030, 1, 31), Decimal("3000.00")),
        (Decimal("3000.00"), date(2030, 1, 1), date(2030, 1, 16), Decimal("1500.00")),
        (Decimal("1000.00"), date(2030, 1, 1), date(2030, 1, 2), Decimal("33.33")),
        (Decimal("1000.00"), date(2030, 1, 1), date(2030, 1, 3), Decimal("66.67")),
        (Decimal("1200.00"), date(2030, 1, 1), date(2030, 3, 2), Decimal("2400.00")),
        (Decimal("1000"), date(2024, 1, 1), date(2024, 1, 31), Decimal("1000.00")),
        (Decimal("900"), date(2024, 3, 1), date(2024, 3, 16), Decimal("450.00")),
    ],
)
def test_total_is_prorated_on_a_thirty_day_month(price, start, end, expected):
    assert compute_total(price, start, end) == expected


def test_february_is_billed_like_any_other_thirty_days():
    # 28 nights cost the same whichever month they fall in
    assert compute_total(Decimal("3000"), date(2030, 2, 1), date(2030, 3, 1)) == Decimal("2800.00")
    assert compute_total(Decimal("3000"), date(2030, 7, 1), date(2030, 7, 29)) == Decimal("2800.00")


def test_rounding_is_half_up():
    # 0.15 / 30 == 0.005 exactly
    assert compute_total(Decimal("0.15"), date(2030, 1, 1), date(2030, 1, 2)) == Decimal("0.01")


def test_result_has_two_decimal_places():
    total = compute_total(Decimal("999"), date(2030, 1, 1), date(2030, 1, 8))

    assert total.as_tuple().exponent == -2


def test_float_price_is_converted_without_binary_noise():
    assert compute_total(1500.1, date(2030, 1, 1), date(2030, 1, 31)) == Decimal("1500.10")


@pytest.mark.parametrize("end", [date(2030, 1, 10), date(2030, 1, 9)])
def test_empty_or_reversed_range_is_rejected(end):
    with pytest.raises(InvalidRangeError):
        compute_total(Decimal("1000"), date(2030, 1, 10), end)


@pytest.mark.parametrize("price", [Decimal("0"), Decimal("-100")])
def test_non_positive_price_is_rejected(price):
    with pytest.raises(ValidationError):
        compute_total(price, date(2030, 1, 1), date(2030, 1, 5))
