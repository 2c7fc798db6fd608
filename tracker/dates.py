from datetime import date, datetime, time
from typing import Optional

from .config import DATE_FORMAT, TIMESTAMP_FORMAT, TIME_FORMAT


def parse_date(value: str) -> date:
    """Parse ``YYYY-MM-DD``; raises ValueError on anything else."""
    return datetime.strptime(value.strip(), DATE_FORMAT).date()


def parse_deadline(value: str) -> datetime:
    """Accepts ``YYYY-MM-DD HH:MM:SS`` or a bare ``YYYY-MM-DD`` (midnight)."""
    value = value.strip()
    try:
        return datetime.strptime(value, TIMESTAMP_FORMAT)
    except ValueError:
        return datetime.strptime(value, DATE_FORMAT)


def parse_time(value: str) -> time:
    return datetime.strptime(value.strip(), TIME_FORMAT).time()


def format_timestamp(value: Optional[datetime]) -> Optional[str]:
    return value.strftime(TIMESTAMP_FORMAT) if value is not None else None


def format_time(value: Optional[time]) -> Optional[str]:
    return value.strftime(TIME_FORMAT) if value is not None else None
