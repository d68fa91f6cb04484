"""
Common Value Objects

Value objects used across the booking apps:
- TimeSlot: A wall-clock interval [start, end) within a single day
- DatePeriod: An inclusive range of calendar days used for reporting
"""

from dataclasses import dataclass
from datetime import date, datetime, time

from shared.domain.base import ValueObject


@dataclass(frozen=True)
class TimeSlot(ValueObject):
    """
    Time slot value object

    Represents a half-open interval from start_time (inclusive) to
    end_time (exclusive) on one calendar day. Slots never cross midnight.
    """
    start_time: time
    end_time: time

    def __post_init__(self):
        if self.start_time >= self.end_time:
            raise ValueError(
                f"Start time ({self.start_time:%H:%M}) must be before end time ({self.end_time:%H:%M})"
            )

    @property
    def minutes(self) -> int:
        """Length of the slot in minutes"""
        anchor = date.min
        delta = datetime.combine(anchor, self.end_time) - datetime.combine(anchor, self.start_time)
        return int(delta.total_seconds() // 60)

    def __str__(self):
        return f"{self.start_time:%H:%M} - {self.end_time:%H:%M}"

    def __repr__(self):
        return f"TimeSlot({self.start_time}, {self.end_time})"


@dataclass(frozen=True)
class DatePeriod(ValueObject):
    """
    Date period value object

    Inclusive on both ends, as used by reporting filters
    (start_date <= day <= end_date).
    """
    start_date: date
    end_date: date

    def __post_init__(self):
        if self.start_date > self.end_date:
            raise ValueError(f"Start date ({self.start_date}) must not be after end date ({self.end_date})")

    def __len__(self) -> int:
        """Number of days in the period"""
        return (self.end_date - self.start_date).days + 1

    def __str__(self):
        return f"{self.start_date.strftime('%d.%m.%Y')} - {self.end_date.strftime('%d.%m.%Y')}"


def intervals_overlap(start_a: time, end_a: time, start_b: time, end_b: time) -> bool:
    """Half-open interval overlap: start1 < end2 AND start2 < end1"""
    return start_a < end_b and start_b < end_a
