"""Helpers for canonical date ("YYYY-MM-DD") and time ("HH:MM") strings.

Stored dates and times are always zero-padded, so plain string comparison
and sorting give chronological order.
"""
import re
from datetime import date, datetime
from typing import Optional

from agenda.errors import ValidationError

# ASCII digits only, matched against the whole string with fullmatch
DATE_PATTERN = re.compile(r"[0-9]{4}-[0-9]{2}-[0-9]{2}")
TIME_PATTERN = re.compile(r"[0-9]{2}:[0-9]{2}")
PHONE_PATTERN = re.compile(r"\([0-9]{2}\) [0-9]{5}-[0-9]{4}")

WEEKDAYS = ["monday", "tuesday", "wednesday", "thursday", "friday", "saturday", "sunday"]

MINUTES_PER_DAY = 24 * 60


def is_valid_date(value: Optional[str]) -> bool:
    """Check the canonical date format and that the date exists."""
    if not isinstance(value, str) or not DATE_PATTERN.fullmatch(value):
        return False
    try:
        date.fromisoformat(value)
    except ValueError:
        return False
    return True


def is_valid_time(value: Optional[str]) -> bool:
    """Check the canonical 24h time format."""
    if not isinstance(value, str) or not TIME_PATTERN.fullmatch(value):
        return False
    hours, minutes = int(value[:2]), int(value[3:])
    return hours < 24 and minutes < 60


def to_minutes(value: str) -> int:
    """Minutes since midnight for an "HH:MM" string."""
    hours, minutes = value.split(":")
    return int(hours) * 60 + int(minutes)


def from_minutes(total: int) -> str:
    """Inverse of to_minutes. Does not wrap past midnight."""
    return f"{total // 60:02d}:{total % 60:02d}"


def add_minutes(value: str, minutes: int) -> Optional[str]:
    """Shift a time string; None if the result leaves the day."""
    total = to_minutes(value) + minutes
    if total < 0 or total >= MINUTES_PER_DAY:
        return None
    return from_minutes(total)


def weekday_name(value: str) -> str:
    """Lowercase English weekday name for a date string."""
    return WEEKDAYS[date.fromisoformat(value).weekday()]


def slot_datetime(day: str, time: str) -> datetime:
    """Naive datetime for a (date, time) pair."""
    return datetime.combine(date.fromisoformat(day), datetime.strptime(time, "%H:%M").time())


def require_date(value, field: str = "date") -> str:
    """Return ``value`` if it is a canonical date, else raise ValidationError."""
    if not is_valid_date(value):
        raise ValidationError({field: "Date must be in YYYY-MM-DD format"})
    return value


def require_time(value, field: str = "time") -> str:
    if not is_valid_time(value):
        raise ValidationError({field: "Time must be in HH:MM format"})
    return value
