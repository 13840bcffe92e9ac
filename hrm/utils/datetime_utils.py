"""
Datetime helpers.
- Timestamps are stored as naive local time (desktop application, one machine).
- Employee date fields are ISO "YYYY-MM-DD" strings, so windows compare as text.
"""
from datetime import date, datetime, timedelta
from typing import Optional, Union


def now_local() -> datetime:
    """Current local time, naive, second precision. Wrapped so tests can patch it."""
    return datetime.now().replace(microsecond=0)


def today_local() -> date:
    return now_local().date()


def days_ago(days: int, today: Optional[date] = None) -> date:
    """The calendar date `days` before today"""
    return (today or today_local()) - timedelta(days=days)


def iso_date(value: Union[date, datetime, str, None]) -> Optional[str]:
    """Normalize a date-like value to YYYY-MM-DD; blank strings become None"""
    if value is None:
        return None
    if isinstance(value, datetime):
        return value.date().isoformat()
    if isinstance(value, date):
        return value.isoformat()
    value = str(value).strip()
    return value or None


def format_timestamp(dt: Optional[datetime]) -> Optional[str]:
    """Serialize as 'YYYY-MM-DD HH:MM:SS' (the format SQLite's CURRENT_TIMESTAMP uses)"""
    if dt is None:
        return None
    return dt.strftime("%Y-%m-%d %H:%M:%S")
