from typing import List, Optional

from .assignment_dao import AssignmentDao
from .course_dao import CourseDao
from .dates import parse_deadline
from .entities import AssignmentRecord, CourseRecord
from .enums import Status

INVALID_ID = -1


class AssignmentsModifier:
    def __init__(self, assignment_dao: Optional[AssignmentDao] = None):
        self.assignment_dao = assignment_dao or AssignmentDao()

    def add_assignment(
        self,
        user_id: int,
        course_id: Optional[int],
        title: str,
        description: Optional[str],
        deadline: str,
    ) -> int:
        """Returns the new assignment id, or INVALID_ID when nothing was stored."""
        try:
            parsed_deadline = parse_deadline(deadline)
        except (ValueError, AttributeError):
            return INVALID_ID

        assignment = self.assignment_dao.insert_assignment(
            user_id, course_id, title, description, parsed_deadline
        )
        return assignment.assignment_id if assignment else INVALID_ID

    def remove_assignment(self, assignment_id: int) -> bool:
        return self.assignment_dao.delete_assignment(assignment_id)

    def change_assignment_status(self, assignment_id: int, status: Status) -> bool:
        return self.assignment_dao.set_status(assignment_id, status)


class DataFetcher:
    def __init__(
        self,
        assignment_dao: Optional[AssignmentDao] = None,
        course_dao: Optional[CourseDao] = None,
    ):
        self.assignment_dao = assignment_dao or AssignmentDao()
        self.course_dao = course_dao or CourseDao()

    def fetch_user_assignments(self, user_id: int) -> List[AssignmentRecord]:
        return self.assignment_dao.get_assignments(user_id)

    def fetch_course(self, course_id: int) -> Optional[CourseRecord]:
        return self.course_dao.get_course_by_id(course_id)

    def fetch_user_courses(self, user_id: int) -> List[CourseRecord]:
        return self.course_dao.get_all_courses(user_id)
