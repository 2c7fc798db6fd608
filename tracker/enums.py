"""
Enumerations for the study tracker
"""
from enum import Enum


class Status(str, Enum):
    """Assignment status, valued by its stored database text"""
    PENDING = "pending"
    IN_PROGRESS = "in-progress"
    COMPLETED = "completed"
    OVERDUE = "overdue"

    @classmethod
    def from_db_value(cls, value: str) -> "Status":
        status = _STATUS_BY_VALUE.get(value)
        if status is None:
            raise ValueError(f"Unknown status: {value}")
        return status

    def __str__(self):
        return self.value


_STATUS_BY_VALUE = {s.value: s for s in Status}


class Weekday(str, Enum):
    """Day of the week a schedule entry falls on"""
    MONDAY = "MONDAY"
    TUESDAY = "TUESDAY"
    WEDNESDAY = "WEDNESDAY"
    THURSDAY = "THURSDAY"
    FRIDAY = "FRIDAY"
    SATURDAY = "SATURDAY"
    SUNDAY = "SUNDAY"

    @classmethod
    def from_string(cls, value: str) -> "Weekday":
        weekday = _WEEKDAY_BY_NAME.get(value.strip().upper()) if isinstance(value, str) else None
        if weekday is None:
            raise ValueError(f"Unknown weekday: {value}")
        return weekday

    def __str__(self):
        return self.value


_WEEKDAY_BY_NAME = {w.value: w for w in Weekday}
