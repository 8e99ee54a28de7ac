# devflow-backend/core/datetime_utils.py
"""
Centralized datetime handling.

Embedded workspace entities are stored as JSON, so every timestamp crosses
an ISO 8601 string boundary through these helpers.
"""
from datetime import datetime, time
from typing import Optional
from django.utils import timezone
from django.utils.dateparse import parse_date, parse_datetime


def now() -> datetime:
    """
    Get current datetime (timezone-aware, USE_TZ=True).

    This is the single source of truth for "now".
    """
    return timezone.now()


def format_for_api(dt: Optional[datetime]) -> Optional[str]:
    """
    Format datetime for API responses and JSON storage (ISO 8601).

    Returns None if input is None.
    """
    if dt is None:
        return None
    return dt.isoformat()


def parse_iso(value) -> Optional[datetime]:
    """
    Parse an ISO 8601 datetime or date string.

    Plain dates become midnight in the current timezone; naive datetimes
    are made aware. Returns None if parsing fails.
    """
    if isinstance(value, datetime):
        dt = value
    else:
        if not isinstance(value, str) or not value.strip():
            return None
        text = value.strip()
        try:
            dt = parse_datetime(text.replace("Z", "+00:00"))
            if dt is None:
                day = parse_date(text)
                if day is None:
                    return None
                dt = datetime.combine(day, time.min)
        except ValueError:
            # Well formed but out of range, e.g. 2024-02-30
            return None

    if timezone.is_naive(dt):
        dt = timezone.make_aware(dt, timezone.get_current_timezone())
    return dt
