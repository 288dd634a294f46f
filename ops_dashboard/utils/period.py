from datetime import datetime, time, timedelta, timezone
from enum import Enum


class DateRange(str, Enum):
    today = "today"
    last7 = "last7"
    this_week = "thisWeek"
    last30 = "last30"
    all_time = "allTime"


_RANGE_DAYS = {"last7": 7, "last30": 30}


def iso_utc(dt: datetime) -> str:
    """Millisecond ISO 8601 in UTC with a 'Z' suffix, e.g. 2024-09-01T08:00:00.000Z.

    Every stored timestamp uses this shape so plain string comparison orders them.
    """
    if dt.tzinfo is None:
        dt = dt.replace(tzinfo=timezone.utc)
    dt = dt.astimezone(timezone.utc)
    return dt.strftime("%Y-%m-%dT%H:%M:%S.") + f"{dt.microsecond // 1000:03d}Z"


def parse_iso(raw: str) -> datetime | None:
    """Lenient ISO 8601 parse. Naive values are taken as UTC; garbage -> None."""
    try:
        dt = datetime.fromisoformat(raw.strip().replace("Z", "+00:00"))
    except (ValueError, AttributeError):
        return None
    if dt.tzinfo is None:
        dt = dt.replace(tzinfo=timezone.utc)
    return dt


def date_range_bounds(
    preset: str, now: datetime | None = None
) -> tuple[str | None, str | None]:
    """Return inclusive (start, end) ISO strings for a preset, (None, None) for allTime.

    The end is always the last millisecond of the current day.
    """
    if preset == DateRange.all_time.value:
        return None, None
    now = now or datetime.now(timezone.utc)
    today = now.date()
    end = datetime.combine(today, time(23, 59, 59, 999000), tzinfo=timezone.utc)
    if preset == DateRange.today.value:
        start_day = today
    elif preset == DateRange.this_week.value:
        # Weeks start on Sunday
        start_day = today - timedelta(days=(today.weekday() + 1) % 7)
    else:
        start_day = today - timedelta(days=_RANGE_DAYS.get(preset, 7))
    start = datetime.combine(start_day, time(0, 0), tzinfo=timezone.utc)
    return iso_utc(start), iso_utc(end)
