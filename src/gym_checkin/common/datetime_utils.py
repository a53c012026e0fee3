from __future__ import annotations

import calendar
from datetime import date, datetime, timezone
from zoneinfo import ZoneInfo


def now_utc() -> datetime:
    """Current time as an aware UTC datetime.

    Note: Wrapped so tests can patch/mocked easier.
    """
    return datetime.now(timezone.utc)


def ensure_aware(value: datetime) -> datetime:
    """Treat naive datetimes (as returned by MySQL DATETIME) as UTC."""
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value


def to_zone(value: datetime, tz: ZoneInfo) -> datetime:
    return ensure_aware(value).astimezone(tz)


def local_day(now: datetime, tz: ZoneInfo) -> date:
    """Calendar day of `now` in the gym time zone."""
    return to_zone(now, tz).date()


def minutes_since_midnight(now: datetime, tz: ZoneInfo) -> int:
    """Minute of day (0-1439) of `now` in the gym time zone."""
    local = to_zone(now, tz)
    return local.hour * 60 + local.minute


def add_months(value: datetime, months: int) -> datetime:
    """Shift by whole calendar months, clamping to the last day of the target month."""
    month_index = value.month - 1 + int(months)
    year = value.year + month_index // 12
    month = month_index % 12 + 1
    day = min(value.day, calendar.monthrange(year, month)[1])
    return value.replace(year=year, month=month, day=day)


def format_local(value: datetime, tz: ZoneInfo) -> str:
    return to_zone(value, tz).strftime("%Y-%m-%d %H:%M")


def to_iso(value: datetime) -> str:
    return ensure_aware(value).astimezone(timezone.utc).isoformat().replace("+00:00", "Z")
