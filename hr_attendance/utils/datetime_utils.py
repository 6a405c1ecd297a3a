"""
Timezone-aware datetime helpers.
- Store and compute in UTC in DB.
- "Today" and time-of-day come from the attendance timezone (settings.ATTENDANCE_TZ).
- API responses expose datetimes in the attendance timezone with offset; never Z.
"""
from datetime import date, datetime, timezone
from typing import Optional

from hr_attendance.core.config import settings

UTC = timezone.utc


def now_utc() -> datetime:
    """Current time in UTC (timezone-aware)."""
    return datetime.now(UTC)


def now_local() -> datetime:
    """Current time in the attendance timezone (timezone-aware)."""
    return datetime.now(settings.get_timezone())


def ensure_utc(dt: Optional[datetime]) -> Optional[datetime]:
    """If dt is naive, treat as UTC and return timezone-aware UTC. If already aware, convert to UTC."""
    if dt is None:
        return None
    if dt.tzinfo is None:
        dt = dt.replace(tzinfo=UTC)
    else:
        dt = dt.astimezone(UTC)
    return dt


def to_local(dt: Optional[datetime]) -> Optional[datetime]:
    """Convert to the attendance timezone. Naive datetimes are treated as UTC (SQLite drops tzinfo)."""
    if dt is None:
        return None
    if dt.tzinfo is None:
        dt = dt.replace(tzinfo=UTC)
    return dt.astimezone(settings.get_timezone())


def iso_local(dt: Optional[datetime]) -> Optional[str]:
    """Serialize as ISO-8601 in the attendance timezone, with offset. Never returns Z."""
    if dt is None:
        return None
    return to_local(dt).isoformat()


def get_work_date(now: Optional[datetime] = None) -> date:
    """Attendance date for the given instant (default now)."""
    return to_local(now or now_utc()).date()


def seconds_of_day(dt: datetime) -> int:
    """Seconds since local midnight in the attendance timezone."""
    local = to_local(dt)
    return local.hour * 3600 + local.minute * 60 + local.second


def format_seconds_of_day(total: int) -> str:
    """HH:MM:SS for a number of seconds since midnight."""
    total = int(total) % 86400
    hours, rest = divmod(total, 3600)
    minutes, seconds = divmod(rest, 60)
    return f"{hours:02d}:{minutes:02d}:{seconds:02d}"
