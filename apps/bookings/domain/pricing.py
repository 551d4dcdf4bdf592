"""
Booking Pricing

Total amount for a booking derived from the house's monthly rate.

A month is billed as a flat 30 days regardless of the calendar, so the
same number of days always costs the same. Callers that need
calendar-accurate proration must adjust the result themselves.
"""

from datetime import date
from decimal import ROUND_HALF_UP, Decimal

from shared.domain.exceptions import InvalidRangeError, ValidationError

DAYS_PER_BILLING_MONTH = 30
CENT = Decimal('0.01')


def compute_total(price_per_month: Decimal, start_date: date, end_date: date) -> Decimal:
    """
    Price of a stay from start_date (inclusive) to end_date (exclusive)

    total = price_per_month * days / 30, rounded half-up to cents.

    Raises:
        InvalidRangeError: end_date is not after start_date
        ValidationError: price_per_month is not positive
    """
    if end_date <= start_date:
        raise InvalidRangeError(
            f"End date ({end_date}) must be after start date ({start_date})"
        )
    price = Decimal(str(price_per_month))
    if price <= 0:
        raise ValidationError("Price per month must be greater than 0")

    days = (end_date - start_date).days
    total = price * days / DAYS_PER_BILLING_MONTH
    return total.quantize(CENT, rounding=ROUND_HALF_UP)
