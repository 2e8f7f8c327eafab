from datetime import datetime, timedelta, timezone
from typing import Optional, Tuple

# Dashboard periods in days
PERIOD_DAYS = {
    '7d': 7,
    '30d': 30,
    '90d': 90,
    '1y': 365
}

DEFAULT_PERIOD = '30d'


def utc_now() -> datetime:
    return datetime.now(timezone.utc)


def ensure_aware(value: Optional[datetime]) -> Optional[datetime]:
    """Treat naive datetimes as UTC"""
    if value is None:
        return None
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value


def start_of_day(value: Optional[datetime] = None) -> datetime:
    """Midnight UTC of the given instant (today when omitted)"""
    value = ensure_aware(value) or utc_now()
    value = value.astimezone(timezone.utc)
    return value.replace(hour=0, minute=0, second=0, microsecond=0)


def get_period_range(period: str, end_date: Optional[datetime] = None) -> Tuple[datetime, datetime]:
    """Calculate start/end for a dashboard period; unknown periods use 30 days"""
    end_date = ensure_aware(end_date) or utc_now()
    days = PERIOD_DAYS.get(period, PERIOD_DAYS[DEFAULT_PERIOD])
    return end_date - timedelta(days=days), end_date


def parse_iso_datetime(value) -> Optional[datetime]:
    """
    Parse an ISO-8601 date or datetime string

    Raises:
        ValueError: If the value is not a valid ISO date
    """
    if value is None or value == "":
        return None
    if isinstance(value, datetime):
        return ensure_aware(value)
    if not isinstance(value, str):
        raise ValueError(f"Invalid date: {value!r}")

    text = value.strip()
    if text.endswith('Z'):
        text = text[:-1] + '+00:00'
    return ensure_aware(datetime.fromisoformat(text))


def isoformat_or_none(value: Optional[datetime]) -> Optional[str]:
    value = ensure_aware(value)
    return value.isoformat() if value else None
