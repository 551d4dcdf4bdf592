"""
Common Value Objects

- DateRange: half-open span of calendar days, ``[start_date, end_date)``
"""

from dataclasses import dataclass
from datetime import date

from shared.domain.base import ValueObject
from shared.domain.exceptions import InvalidRangeError


@dataclass(frozen=True)
class DateRange(ValueObject):
    """
    Half-open date range

    ``start_date`` is the first booked day, ``end_date`` the day the house
    is free again. A stay ending on the 10th and one starting on the 10th
    therefore share no day.
    """
    start_date: date
    end_date: date

    def __post_init__(self):
        if self.end_date <= self.start_date:
            raise InvalidRangeError(
                f"End date ({self.end_date}) must be after start date ({self.start_date})"
            )

    def overlaps_with(self, other: 'DateRange') -> bool:
        if not isinstance(other, DateRange):
            raise TypeError(f"Expected DateRange, got {type(other).__name__}")
        return self.start_date < other.end_date and other.start_date < self.end_date

    def contains(self, day: date) -> bool:
        return self.start_date <= day < self.end_date

    def __len__(self) -> int:
        """Days covered; the end date is not counted"""
        return (self.end_date - self.start_date).days

    def __str__(self):
        return f"{self.start_date:%Y-%m-%d} - {self.end_date:%Y-%m-%d}"

    def __repr__(self):
        return f"DateRange({self.start_date.isoformat()}, {self.end_date.isoformat()})"
