"""
Entity records handed out by the DAOs and rendered by the API.

Records are detached snapshots of a row; changing one never touches the
database.
"""
from datetime import date, datetime, time
from typing import Optional

from pydantic import BaseModel, ConfigDict, field_serializer

from .dates import format_time, format_timestamp
from .enums import Status, Weekday


class StudentRecord(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    student_id: int
    name: str
    email: str
    role: str


class CourseRecord(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    course_id: int
    student_id: int
    course_name: str
    start_date: Optional[date] = None
    end_date: Optional[date] = None


class AssignmentRecord(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    assignment_id: int
    student_id: int
    course_id: Optional[int] = None
    title: str
    description: Optional[str] = None
    deadline: datetime
    status: Status = Status.PENDING

    @field_serializer("deadline")
    def _serialize_deadline(self, deadline: datetime) -> str:
        return format_timestamp(deadline)

    @field_serializer("status")
    def _serialize_status(self, status: Status) -> str:
        return status.value


class ScheduleRecord(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    schedule_id: int
    course_id: int
    weekday: Weekday
    start_time: time
    end_time: time

    @field_serializer("start_time", "end_time")
    def _serialize_time(self, value: time) -> str:
        return format_time(value)

    @field_serializer("weekday")
    def _serialize_weekday(self, weekday: Weekday) -> str:
        return weekday.value
