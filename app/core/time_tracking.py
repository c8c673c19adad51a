# app/core/time_tracking.py
from datetime import datetime, timedelta, timezone
from typing import Optional

def as_utc(value: Optional[datetime]) -> Optional[datetime]:
    """
    Наивные datetime (SQLite отдаёт именно такие) считаются UTC.
    """
    if value is None:
        return None
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value.astimezone(timezone.utc)

def compute_duration(start: Optional[datetime], end: Optional[datetime]) -> Optional[int]:
    """
    Длительность в целых секундах (с округлением вниз) или None, если интервал открыт.
    """
    if start is None or end is None:
        return None
    return (as_utc(end) - as_utc(start)) // timedelta(seconds=1)
