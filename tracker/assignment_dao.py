import logging
from datetime import date, datetime
from typing import Any, List, Optional

from db.database import DB_ERRORS, SessionLocal
from db.models.assignments import Assignment
from db.models.courses import Course
from db.models.students import Student
from .entities import AssignmentRecord
from .enums import Status

logger = logging.getLogger(__name__)

# marks an update_assignment field that should keep its stored value
UNCHANGED: Any = object()


def _as_timestamp(deadline: Optional[date]) -> Optional[datetime]:
    if deadline is None or isinstance(deadline, datetime):
        return deadline
    return datetime(deadline.year, deadline.month, deadline.day)


class AssignmentDao:
    """CRUD for the ``assignments`` table."""

    def __init__(self, session_factory=SessionLocal):
        self.session_factory = session_factory

    def insert_assignment(
        self,
        student_id: int,
        course_id: Optional[int],
        title: str,
        description: Optional[str],
        deadline: Optional[date],
    ) -> Optional[AssignmentRecord]:
        if not title or deadline is None:
            logger.warning("Rejected assignment: title and deadline are required")
            return None

        with self.session_factory() as db:
            try:
                if db.get(Student, student_id) is None:
                    logger.warning("Rejected assignment: student %s does not exist", student_id)
                    return None
                if course_id is not None and db.get(Course, course_id) is None:
                    logger.warning("Rejected assignment: course %s does not exist", course_id)
                    return None

                assignment = Assignment(
                    student_id=student_id,
                    course_id=course_id,
                    title=title,
                    description=description,
                    deadline=_as_timestamp(deadline),
                    status=Status.PENDING,
                )
                db.add(assignment)
                db.commit()
                db.refresh(assignment)
            except DB_ERRORS as e:
                db.rollback()
                logger.error("Error inserting assignment: %s", e)
                return None

            return AssignmentRecord.model_validate(assignment)

    def get_assignment_by_id(self, assignment_id: int) -> Optional[AssignmentRecord]:
        with self.session_factory() as db:
            try:
                assignment = db.get(Assignment, assignment_id)
            except DB_ERRORS as e:
                logger.error("Error retrieving assignment %s: %s", assignment_id, e)
                return None
            return AssignmentRecord.model_validate(assignment) if assignment else None

    def get_assignments(self, student_id: int) -> List[AssignmentRecord]:
        with self.session_factory() as db:
            try:
                assignments = (
                    db.query(Assignment)
                    .filter(Assignment.student_id == student_id)
                    .order_by(Assignment.deadline, Assignment.assignment_id)
                    .all()
                )
            except DB_ERRORS as e:
                logger.error("Error retrieving assignments for student %s: %s", student_id, e)
                return []
            return [AssignmentRecord.model_validate(a) for a in assignments]

    def set_status(self, assignment_id: int, status: Optional[Status]) -> bool:
        if status is None:
            logger.warning("Rejected status update: status cannot be null")
            return False
        if not isinstance(status, Status):
            try:
                status = Status.from_db_value(status)
            except ValueError as e:
                logger.warning("Rejected status update: %s", e)
                return False

        with self.session_factory() as db:
            try:
                rows = (
                    db.query(Assignment)
                    .filter(Assignment.assignment_id == assignment_id)
                    .update({Assignment.status: status}, synchronize_session=False)
                )
                db.commit()
            except DB_ERRORS as e:
                db.rollback()
                logger.error("Error updating status of assignment %s: %s", assignment_id, e)
                return False
            return rows > 0

    def update_assignment(
        self,
        assignment_id: int,
        title: Optional[str] = UNCHANGED,
        description: Optional[str] = UNCHANGED,
        deadline: Optional[date] = UNCHANGED,
        course_id: Optional[int] = UNCHANGED,
        status: Optional[Status] = UNCHANGED,
    ) -> bool:
        """
        Update the editable fields of an assignment in one transaction.

        Fields left as ``UNCHANGED`` keep their stored value. ``course_id=None``
        detaches the assignment from its course, while a None title, deadline
        or status fails the whole update and nothing is written.
        """
        if status is not UNCHANGED and not isinstance(status, Status):
            try:
                status = Status.from_db_value(status)
            except ValueError as e:
                logger.warning("Rejected update of assignment %s: %s", assignment_id, e)
                return False

        with self.session_factory() as db:
            try:
                assignment = db.get(Assignment, assignment_id)
                if assignment is None:
                    return False

                new_title = assignment.title if title is UNCHANGED else title
                new_deadline = assignment.deadline if deadline is UNCHANGED else _as_timestamp(deadline)
                if not new_title or new_deadline is None:
                    logger.warning("Rejected update of assignment %s: title and deadline are required", assignment_id)
                    return False

                if course_id is not UNCHANGED:
                    if course_id is not None and db.get(Course, course_id) is None:
                        logger.warning("Rejected update of assignment %s: course %s does not exist", assignment_id, course_id)
                        return False
                    assignment.course_id = course_id
                if description is not UNCHANGED:
                    assignment.description = description
                if status is not UNCHANGED:
                    assignment.status = status
                assignment.title = new_title
                assignment.deadline = new_deadline
                db.commit()
            except DB_ERRORS as e:
                db.rollback()
                logger.error("Error updating assignment %s: %s", assignment_id, e)
                return False
            return True

    def delete_assignment(self, assignment_id: int) -> bool:
        with self.session_factory() as db:
            try:
                rows = db.query(Assignment).filter(
                    Assignment.assignment_id == assignment_id
                ).delete(synchronize_session=False)
                db.commit()
            except DB_ERRORS as e:
                db.rollback()
                logger.error("Error deleting assignment %s: %s", assignment_id, e)
                return False
            return rows > 0
