"""Calendar helpers for tick timestamps."""

from __future__ import annotations

from datetime import datetime, timezone

TICK_TIME_FORMAT = "%m/%d/%Y %H:%M:%S"
ISO_FORMAT = "%Y-%m-%d %H:%M:%S"

_MONTH_OFFSETS = (0, 3, 2, 5, 0, 3, 5, 1, 4, 6, 2, 4)


def day_of_week(year: int, month: int, day: int) -> int:
    """Day of week for a Gregorian date, Sunday is 0."""
    if month < 3:
        year -= 1
    return (year + year // 4 - year // 100 + year // 400 + _MONTH_OFFSETS[month - 1] + day) % 7


def is_sunday(moment: datetime) -> bool:
    return day_of_week(moment.year, moment.month, moment.day) == 0


def parse_tick_time(value: str) -> datetime:
    return datetime.strptime(value.strip(), TICK_TIME_FORMAT)


def to_iso(moment: datetime | None) -> str:
    if moment is None:
        return ""
    return moment.strftime(ISO_FORMAT)


def epoch_seconds(moment: datetime) -> int:
    # tick times are naive and interpreted as UTC
    if moment.tzinfo is None:
        moment = moment.replace(tzinfo=timezone.utc)
    return int(moment.timestamp())
