import logging
from datetime import time
from typing import List, Optional

from db.database import DB_ERRORS, SessionLocal
from db.models.courses import Course
from db.models.schedules import Schedule
from .entities import ScheduleRecord
from .enums import Weekday

logger = logging.getLogger(__name__)


def _valid_slot(course_id, weekday, start_time, end_time) -> bool:
    if course_id is None or weekday is None or start_time is None or end_time is None:
        logger.warning("Rejected schedule: course, weekday, start time and end time are required")
        return False
    if start_time >= end_time:
        logger.warning("Rejected schedule: start time %s must be before end time %s", start_time, end_time)
        return False
    return True


class ScheduleDao:
    """CRUD for the weekly ``schedule`` slots of a course."""

    def __init__(self, session_factory=SessionLocal):
        self.session_factory = session_factory

    def insert_schedule(
        self,
        course_id: int,
        weekday: Weekday,
        start_time: time,
        end_time: time,
    ) -> Optional[ScheduleRecord]:
        if not _valid_slot(course_id, weekday, start_time, end_time):
            return None

        with self.session_factory() as db:
            try:
                if db.get(Course, course_id) is None:
                    logger.warning("Rejected schedule: course %s does not exist", course_id)
                    return None

                schedule = Schedule(
                    course_id=course_id,
                    weekday=weekday,
                    start_time=start_time,
                    end_time=end_time,
                )
                db.add(schedule)
                db.commit()
                db.refresh(schedule)
            except DB_ERRORS as e:
                db.rollback()
                logger.error("Error inserting schedule: %s", e)
                return None

            return ScheduleRecord.model_validate(schedule)

    def get_schedule(self, schedule_id: int) -> Optional[ScheduleRecord]:
        with self.session_factory() as db:
            try:
                schedule = db.get(Schedule, schedule_id)
            except DB_ERRORS as e:
                logger.error("Error retrieving schedule %s: %s", schedule_id, e)
                return None
            return ScheduleRecord.model_validate(schedule) if schedule else None

    def get_all_schedules_for_course(self, course_id: int) -> List[ScheduleRecord]:
        with self.session_factory() as db:
            try:
                schedules = (
                    db.query(Schedule)
                    .filter(Schedule.course_id == course_id)
                    .order_by(Schedule.schedule_id)
                    .all()
                )
            except DB_ERRORS as e:
                logger.error("Error retrieving schedules for course %s: %s", course_id, e)
                return []
            return [ScheduleRecord.model_validate(s) for s in schedules]

    def get_all_schedules_for_student(self, student_id: int) -> List[ScheduleRecord]:
        with self.session_factory() as db:
            try:
                schedules = (
                    db.query(Schedule)
                    .join(Course, Schedule.course_id == Course.course_id)
                    .filter(Course.student_id == student_id)
                    .order_by(Schedule.schedule_id)
                    .all()
                )
            except DB_ERRORS as e:
                logger.error("Error retrieving schedules for student %s: %s", student_id, e)
                return []
            return [ScheduleRecord.model_validate(s) for s in schedules]

    def update_schedule(
        self,
        schedule_id: int,
        course_id: int,
        weekday: Weekday,
        start_time: time,
        end_time: time,
    ) -> bool:
        if not _valid_slot(course_id, weekday, start_time, end_time):
            return False

        with self.session_factory() as db:
            try:
                schedule = db.get(Schedule, schedule_id)
                if schedule is None:
                    return False
                if db.get(Course, course_id) is None:
                    logger.warning("Rejected schedule update: course %s does not exist", course_id)
                    return False

                schedule.course_id = course_id
                schedule.weekday = weekday
                schedule.start_time = start_time
                schedule.end_time = end_time
                db.commit()
            except DB_ERRORS as e:
                db.rollback()
                logger.error("Error updating schedule %s: %s", schedule_id, e)
                return False
            return True

    def delete_schedule(self, schedule_id: int) -> bool:
        with self.session_factory() as db:
            try:
                rows = db.query(Schedule).filter(
                    Schedule.schedule_id == schedule_id
                ).delete(synchronize_session=False)
                db.commit()
            except DB_ERRORS as e:
                db.rollback()
                logger.error("Error deleting schedule %s: %s", schedule_id, e)
                return False
            return rows > 0
