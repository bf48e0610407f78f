"""Date helpers.

Event dates are calendar dates. Anything that carries a time of day is
truncated before it is compared, so an event is "upcoming" for the whole of
its day.
"""

from datetime import date, datetime, timezone
from typing import Optional, Union
from zoneinfo import ZoneInfo

from ..config.settings import DateConfig

DateLike = Union[date, datetime, str]

def club_timezone(name: Optional[str] = None) -> ZoneInfo:
    """Get the configured club timezone."""
    return ZoneInfo(name or DateConfig().timezone)

def now_utc() -> datetime:
    """Current time as a timezone-aware UTC datetime."""
    return datetime.now(timezone.utc)

def today(tz_name: Optional[str] = None) -> date:
    """Today's date in the club timezone."""
    return datetime.now(club_timezone(tz_name)).date()

def as_date(value: DateLike) -> date:
    """
    Normalize a date-like value to a calendar date.

    Accepts date objects, datetimes (time of day dropped) and ISO strings,
    either 'YYYY-MM-DD' or a full ISO datetime with an optional trailing 'Z'.

    Raises:
        ValueError: If the value cannot be read as a date
    """
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    if isinstance(value, str):
        text = value.strip()
        if not text:
            raise ValueError("Date is empty")
        try:
            return date.fromisoformat(text)
        except ValueError:
            pass
        try:
            return datetime.fromisoformat(text.replace('Z', '+00:00')).date()
        except ValueError:
            raise ValueError(f"Invalid date: {value!r}") from None
    raise ValueError(f"Invalid date type: {type(value).__name__}")

def as_datetime(value: Union[datetime, str, None]) -> Optional[datetime]:
    """Parse an ISO timestamp into an aware datetime (UTC assumed when naive)."""
    if value is None or value == '':
        return None
    if isinstance(value, str):
        value = datetime.fromisoformat(value.replace('Z', '+00:00'))
    if value.tzinfo is None:
        value = value.replace(tzinfo=timezone.utc)
    return value
