from __future__ import annotations

from datetime import date, datetime, timedelta
from typing import Optional, Tuple, Union

from ..core.constants import STATS_PERIOD_DAYS
from ..core.exceptions import ValidationError

DateLike = Union[date, datetime, str]


def parse_iso_date(value: str) -> date:
    """Parse YYYY-MM-DD string into date."""
    try:
        return datetime.strptime(value, "%Y-%m-%d").date()
    except (TypeError, ValueError):
        raise ValidationError(f"Invalid date {value!r}, expected YYYY-MM-DD")


def to_iso(value: Optional[DateLike]) -> Optional[str]:
    """Serialize a date bound as ISO-8601, passing ``None`` through."""
    if value is None:
        return None
    if isinstance(value, (date, datetime)):
        return value.isoformat()
    return str(value)


def now_local() -> datetime:
    """Current local time.

    Note: Wrapped so tests can patch/mocked easier.
    """
    return datetime.now()


def period_range(period: str, *, today: Optional[date] = None) -> Tuple[date, date]:
    """Start/end dates for a report preset such as ``"week"``."""
    days = STATS_PERIOD_DAYS.get(period)
    if days is None:
        raise ValidationError(f"Unknown period {period!r}")
    end = today or now_local().date()
    return end - timedelta(days=days), end
