import logging
from typing import Optional

from sqlalchemy import select

from auth.security import hash_password
from db.database import DB_ERRORS, SessionLocal
from db.models.assignments import Assignment
from db.models.courses import Course
from db.models.schedules import Schedule
from db.models.students import Student
from .config import DEFAULT_ROLE
from .entities import StudentRecord

logger = logging.getLogger(__name__)


class StudentDao:
    """CRUD for the ``students`` table. Failures come back as None / False."""

    def __init__(self, session_factory=SessionLocal):
        self.session_factory = session_factory

    def add_student(self, name: str, email: str, password: str) -> Optional[StudentRecord]:
        if not name or not email or not password:
            logger.warning("Rejected student: name, email and password are required")
            return None

        with self.session_factory() as db:
            try:
                if db.query(Student).filter(Student.email == email).first():
                    logger.warning("Rejected student: email %s already exists", email)
                    return None

                student = Student(
                    name=name,
                    email=email,
                    password_hash=hash_password(password),
                    role=DEFAULT_ROLE,
                )
                db.add(student)
                db.commit()
                db.refresh(student)
            except DB_ERRORS as e:
                db.rollback()
                logger.error("Error adding student: %s", e)
                return None

            return StudentRecord.model_validate(student)

    def get_student(self, email: str) -> Optional[StudentRecord]:
        with self.session_factory() as db:
            try:
                student = db.query(Student).filter(Student.email == email).first()
            except DB_ERRORS as e:
                logger.error("Error retrieving student by email: %s", e)
                return None
            return StudentRecord.model_validate(student) if student else None

    def get_student_by_id(self, student_id: int) -> Optional[StudentRecord]:
        with self.session_factory() as db:
            try:
                student = db.get(Student, student_id)
            except DB_ERRORS as e:
                logger.error("Error retrieving student %s: %s", student_id, e)
                return None
            return StudentRecord.model_validate(student) if student else None

    def get_password_hash(self, email: str) -> Optional[str]:
        with self.session_factory() as db:
            try:
                student = db.query(Student).filter(Student.email == email).first()
            except DB_ERRORS as e:
                logger.error("Error retrieving password hash: %s", e)
                return None
            return student.password_hash if student else None

    def update_student_name(self, student_id: int, new_name: str) -> bool:
        if not new_name:
            logger.warning("Rejected name update: name cannot be empty")
            return False
        return self._update(student_id, name=new_name)

    def update_student_email(self, student_id: int, new_email: str) -> bool:
        if not new_email:
            logger.warning("Rejected email update: email cannot be empty")
            return False
        return self._update(student_id, email=new_email)

    def _update(self, student_id: int, **values) -> bool:
        with self.session_factory() as db:
            try:
                rows = (
                    db.query(Student)
                    .filter(Student.student_id == student_id)
                    .update(values, synchronize_session=False)
                )
                db.commit()
            except DB_ERRORS as e:
                db.rollback()
                logger.error("Error updating student %s: %s", student_id, e)
                return False
            return rows > 0

    def delete_student(self, student_id: int) -> bool:
        """Delete a student together with their assignments, courses and schedules."""
        with self.session_factory() as db:
            try:
                course_ids = select(Course.course_id).where(Course.student_id == student_id)

                db.query(Assignment).filter(
                    Assignment.student_id == student_id
                ).delete(synchronize_session=False)
                db.query(Schedule).filter(
                    Schedule.course_id.in_(course_ids)
                ).delete(synchronize_session=False)
                db.query(Course).filter(
                    Course.student_id == student_id
                ).delete(synchronize_session=False)
                rows = db.query(Student).filter(
                    Student.student_id == student_id
                ).delete(synchronize_session=False)

                db.commit()
            except DB_ERRORS as e:
                db.rollback()
                logger.error("Error deleting student %s and related data: %s", student_id, e)
                return False
            return rows > 0
