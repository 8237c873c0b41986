"""Helpers for calendar arithmetic and timestamp normalization."""

import calendar
from datetime import date, datetime, timezone

TURKISH_MONTH_NAMES = (
    "Ocak",
    "Şubat",
    "Mart",
    "Nisan",
    "Mayıs",
    "Haziran",
    "Temmuz",
    "Ağustos",
    "Eylül",
    "Ekim",
    "Kasım",
    "Aralık",
)


def coerce_datetime(value) -> datetime:
    """Normalize timestamps to naive datetimes.

    Aware values are converted to UTC before the timezone is dropped so that
    records coming from different sources stay comparable.

    Args:
        value: ``datetime``, ``date`` or ISO 8601 string.

    Returns:
        datetime: Naive timestamp.

    Raises:
        ValueError: If a string value is not ISO 8601.
        TypeError: If the value has an unsupported type.
    """
    if isinstance(value, datetime):
        parsed = value
    elif isinstance(value, date):
        return datetime(value.year, value.month, value.day)
    elif isinstance(value, str):
        raw = value.strip()
        if raw.endswith("Z"):
            raw = raw[:-1] + "+00:00"
        parsed = datetime.fromisoformat(raw)
    else:
        raise TypeError(f"Unsupported timestamp value: {value!r}")
    if parsed.tzinfo is not None:
        parsed = parsed.astimezone(timezone.utc).replace(tzinfo=None)
    return parsed


def to_day(value: date | datetime) -> date:
    """Return the calendar day of a date or timestamp."""
    if isinstance(value, datetime):
        return value.date()
    return value


def start_of_month(day: date) -> date:
    """Return the first day of the month containing ``day``."""
    return date(day.year, day.month, 1)


def end_of_month(day: date) -> date:
    """Return the last day of the month containing ``day``."""
    last = calendar.monthrange(day.year, day.month)[1]
    return date(day.year, day.month, last)


def add_months(value, months: int):
    """Shift a date or datetime by whole calendar months.

    The day of month is kept when the target month has it and clamped to the
    target month's last day otherwise (Jan 31 + 1 month = Feb 28/29).

    Args:
        value: ``date`` or ``datetime`` to shift.
        months: Number of months, negative to go back.

    Returns:
        Same type as ``value``.
    """
    month_index = value.year * 12 + (value.month - 1) + months
    year, month = divmod(month_index, 12)
    month += 1
    day = min(value.day, calendar.monthrange(year, month)[1])
    return value.replace(year=year, month=month, day=day)


def is_within(value: date | datetime, start: date, end: date) -> bool:
    """Return True when the day of ``value`` lies in ``[start, end]``."""
    return start <= to_day(value) <= end


def month_label(day: date) -> str:
    """Return the month name and year label, e.g. ``Ocak 2024``."""
    return f"{TURKISH_MONTH_NAMES[day.month - 1]} {day.year}"


__all__ = [
    "TURKISH_MONTH_NAMES",
    "coerce_datetime",
    "to_day",
    "start_of_month",
    "end_of_month",
    "add_months",
    "is_within",
    "month_label",
]
