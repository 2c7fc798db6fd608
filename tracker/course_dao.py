import logging
from datetime import date
from typing import List, Optional

from db.database import DB_ERRORS, SessionLocal
from db.models.courses import Course
from db.models.schedules import Schedule
from db.models.students import Student
from .entities import CourseRecord

logger = logging.getLogger(__name__)


def _dates_in_order(start: Optional[date], end: Optional[date]) -> bool:
    return start is None or end is None or end >= start


class CourseDao:
    """CRUD for the ``courses`` table."""

    def __init__(self, session_factory=SessionLocal):
        self.session_factory = session_factory

    def add_course(
        self,
        student_id: int,
        course_name: str,
        start_date: Optional[date],
        end_date: Optional[date],
    ) -> Optional[CourseRecord]:
        if not _dates_in_order(start_date, end_date):
            logger.warning("Rejected course: end date %s is before start date %s", end_date, start_date)
            return None
        if not course_name:
            logger.warning("Rejected course: course name cannot be empty")
            return None

        with self.session_factory() as db:
            try:
                if db.get(Student, student_id) is None:
                    logger.warning("Rejected course: student %s does not exist", student_id)
                    return None

                course = Course(
                    student_id=student_id,
                    course_name=course_name,
                    start_date=start_date,
                    end_date=end_date,
                )
                db.add(course)
                db.commit()
                db.refresh(course)
            except DB_ERRORS as e:
                db.rollback()
                logger.error("Error adding course: %s", e)
                return None

            return CourseRecord.model_validate(course)

    def get_course_by_id(self, course_id: int) -> Optional[CourseRecord]:
        with self.session_factory() as db:
            try:
                course = db.get(Course, course_id)
            except DB_ERRORS as e:
                logger.error("Error retrieving course %s: %s", course_id, e)
                return None
            return CourseRecord.model_validate(course) if course else None

    def get_all_courses(self, student_id: int) -> List[CourseRecord]:
        with self.session_factory() as db:
            try:
                courses = (
                    db.query(Course)
                    .filter(Course.student_id == student_id)
                    .order_by(Course.course_id)
                    .all()
                )
            except DB_ERRORS as e:
                logger.error("Error retrieving courses for student %s: %s", student_id, e)
                return []
            return [CourseRecord.model_validate(c) for c in courses]

    def update_course(
        self,
        course_id: int,
        course_name: Optional[str] = None,
        start_date: Optional[date] = None,
        end_date: Optional[date] = None,
    ) -> bool:
        """
        Partial update: a None (or empty) field keeps its stored value.
        Fails only for an unknown id or when the resulting end date is
        before the resulting start date.
        """
        with self.session_factory() as db:
            try:
                course = db.get(Course, course_id)
                if course is None:
                    return False

                new_name = course_name or course.course_name
                new_start = start_date if start_date is not None else course.start_date
                new_end = end_date if end_date is not None else course.end_date

                if not _dates_in_order(new_start, new_end):
                    logger.warning("Rejected course update: end date %s is before start date %s", new_end, new_start)
                    return False

                course.course_name = new_name
                course.start_date = new_start
                course.end_date = new_end
                db.commit()
            except DB_ERRORS as e:
                db.rollback()
                logger.error("Error updating course %s: %s", course_id, e)
                return False
            return True

    def delete_course(self, course_id: int) -> bool:
        """Delete a course and its schedule entries."""
        with self.session_factory() as db:
            try:
                db.query(Schedule).filter(
                    Schedule.course_id == course_id
                ).delete(synchronize_session=False)
                rows = db.query(Course).filter(
                    Course.course_id == course_id
                ).delete(synchronize_session=False)
                db.commit()
            except DB_ERRORS as e:
                db.rollback()
                logger.error("Error deleting course %s: %s", course_id, e)
                return False
            return rows > 0
