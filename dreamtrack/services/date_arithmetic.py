from __future__ import annotations

import calendar
from datetime import MAXYEAR, MINYEAR, date, datetime, timedelta, tzinfo


def normalize_to_local_midnight(value: date | datetime, tz: tzinfo | None = None) -> date:
    """Return the calendar day of ``value``, dropping any time of day.

    Aware datetimes are converted to ``tz`` first (the system local zone when
    ``tz`` is None) so the day is the one seen on the local calendar.
    Naive datetimes are taken to already be local.
    """
    if isinstance(value, datetime):
        if value.tzinfo is not None:
            value = value.astimezone(tz)
        return value.date()
    return value


def get_last_day_of_month(year: int, month: int) -> int:
    return calendar.monthrange(year, month)[1]


def _shift_month(year: int, month: int, offset: int) -> tuple[int, int]:
    zero_based = (year * 12 + (month - 1)) + offset
    return zero_based // 12, (zero_based % 12) + 1


def _clamped_date(year: int, month: int, day: int) -> date:
    if year > MAXYEAR:
        return date.max
    if year < MINYEAR:
        return date.min
    return date(year, month, min(day, get_last_day_of_month(year, month)))


def add_days(value: date | datetime, days: int) -> date:
    current = normalize_to_local_midnight(value)
    try:
        return current + timedelta(days=days)
    except OverflowError:
        return date.max if days > 0 else date.min


def add_months(value: date | datetime, months: int) -> date:
    # Jan 31 + 1 month lands on the last day of February, never in March.
    current = normalize_to_local_midnight(value)
    year, month = _shift_month(current.year, current.month, months)
    return _clamped_date(year, month, current.day)


def add_years(value: date | datetime, years: int) -> date:
    # Only Feb 29 can overflow; it clamps to Feb 28 in non-leap years.
    current = normalize_to_local_midnight(value)
    return _clamped_date(current.year + years, current.month, current.day)
