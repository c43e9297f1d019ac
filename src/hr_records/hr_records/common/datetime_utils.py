from __future__ import annotations

from datetime import date, datetime, time
from typing import Optional


def parse_iso_date(value: str) -> date:
    """Parse YYYY-MM-DD string into date."""
    return datetime.strptime(value, "%Y-%m-%d").date()


def parse_time_of_day(value: str) -> time:
    """Parse HH:MM:SS (or HH:MM) string into a wall-clock time."""
    v = value.strip()
    fmt = "%H:%M:%S" if v.count(":") == 2 else "%H:%M"
    return datetime.strptime(v, fmt).time()


def minutes_since_midnight(value: time) -> int:
    return value.hour * 60 + value.minute


def format_date(value: Optional[date]) -> Optional[str]:
    return value.strftime("%Y-%m-%d") if value else None


def format_time(value: Optional[time]) -> Optional[str]:
    return value.strftime("%H:%M:%S") if value else None
