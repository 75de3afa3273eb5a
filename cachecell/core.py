"""
Core time primitives shared by the expiry policies.
"""
import calendar
from datetime import datetime, timedelta, timezone
from enum import Enum
from typing import Callable


Clock = Callable[[], datetime]


def system_clock() -> datetime:
    """Current wall-clock time as an aware UTC datetime."""
    return datetime.now(timezone.utc)


class ExpiryUnit(Enum):
    """Calendar units a time window can be expressed in."""
    SECOND = "second"
    MINUTE = "minute"
    HOUR = "hour"
    DAY = "day"
    WEEK = "week"      # plain 7-day addition
    MONTH = "month"    # calendar month, day clamped to month length

    @classmethod
    def parse(cls, unit) -> "ExpiryUnit":
        """Accept an ExpiryUnit or its (case-insensitive) string value."""
        if isinstance(unit, cls):
            return unit
        return cls(str(unit).strip().lower())


_FIXED_OFFSETS = {
    ExpiryUnit.SECOND: timedelta(seconds=1),
    ExpiryUnit.MINUTE: timedelta(minutes=1),
    ExpiryUnit.HOUR: timedelta(hours=1),
    ExpiryUnit.DAY: timedelta(days=1),
    ExpiryUnit.WEEK: timedelta(weeks=1),
}


def _add_months(moment: datetime, months: int) -> datetime:
    month_index = moment.month - 1 + months
    year = moment.year + month_index // 12
    month = month_index % 12 + 1
    day = min(moment.day, calendar.monthrange(year, month)[1])
    return moment.replace(year=year, month=month, day=day)


def add_offset(moment: datetime, amount: int, unit: ExpiryUnit) -> datetime:
    """
    Shift a timestamp by `amount` units.

    Args:
        moment: Starting timestamp
        amount: Number of units, may be zero or negative
        unit: Unit of the offset

    Returns:
        The shifted timestamp
    """
    unit = ExpiryUnit.parse(unit)
    if unit == ExpiryUnit.MONTH:
        return _add_months(moment, amount)
    return moment + _FIXED_OFFSETS[unit] * amount
