import logging
from typing import Optional

from auth.service import AuthService
from .console import Console
from .services import AssignmentsModifier, DataFetcher, INVALID_ID
from .student_dao import StudentDao

logger = logging.getLogger(__name__)


class TextInterface:
    """Console front end that talks to the services in-process."""

    def __init__(
        self,
        console: Optional[Console] = None,
        auth_service: Optional[AuthService] = None,
        fetcher: Optional[DataFetcher] = None,
        modifier: Optional[AssignmentsModifier] = None,
    ):
        self.console = console or Console()
        self.auth_service = auth_service or AuthService(StudentDao())
        self.fetcher = fetcher or DataFetcher()
        self.modifier = modifier or AssignmentsModifier()
        self.user_id = INVALID_ID

    def handle_login(self) -> int:
        self.console.say("Handling login via text interface...")

        while True:
            email = self.console.ask("Enter your email: ")
            password = self.console.ask_secret("Enter your password: ")
            student = self.auth_service.try_login(email, password)
            if student:
                break
            self.console.say("Login failed. Please try again.")

        self.user_id = student.student_id
        self.console.say(f"Login successful! User ID: {self.user_id}")
        self.console.rule()
        return self.user_id

    def handle_get_data(self, user_id: int) -> None:
        self.console.say(f"Fetching data for user ID: {user_id}")
        self.console.rule()

        self.console.say("Assignments:")
        for assignment in self.fetcher.fetch_user_assignments(user_id):
            self.console.say(_assignment_line(assignment))
        self.console.rule()

        self.console.say("Courses:")
        for course in self.fetcher.fetch_user_courses(user_id):
            self.console.say(f"{course.course_id}: {course.course_name} ({course.start_date} - {course.end_date})")
        self.console.rule()

    def display_options(self) -> None:
        self.console.run_menu({
            "1": self.add_assignment,
            "2": self.remove_assignment,
            "3": self.change_status,
            "4": lambda: self.handle_get_data(self.user_id),
        })

    def add_assignment(self) -> None:
        course_id, title, description, deadline = self.console.ask_assignment()
        assignment_id = self.modifier.add_assignment(
            self.user_id, course_id, title, description or None, deadline
        )
        if assignment_id != INVALID_ID:
            self.console.say(f"Assignment added successfully with ID: {assignment_id}")
        else:
            self.console.say("Failed to add assignment.")

    def remove_assignment(self) -> None:
        assignment_id = self.console.ask_int("Enter assignment id: ")
        if not self._owns(assignment_id):
            self.console.say("Failed to remove assignment.")
            return
        if self.modifier.remove_assignment(assignment_id):
            self.console.say("Assignment removed successfully.")
        else:
            self.console.say("Failed to remove assignment.")

    def change_status(self) -> None:
        assignment_id = self.console.ask_int("Enter assignment id: ")
        status = self.console.choose_status()
        if not self._owns(assignment_id):
            self.console.say("Failed to change assignment status.")
            return
        if self.modifier.change_assignment_status(assignment_id, status):
            self.console.say("Assignment status changed successfully.")
        else:
            self.console.say("Failed to change assignment status.")

    def _owns(self, assignment_id: int) -> bool:
        # the menu only ever touches the logged-in student's assignments
        owned = any(a.assignment_id == assignment_id for a in self.fetcher.fetch_user_assignments(self.user_id))
        if not owned:
            logger.info("Student %s has no assignment %s", self.user_id, assignment_id)
        return owned


def _assignment_line(assignment) -> str:
    course = assignment.course_id if assignment.course_id is not None else "-"
    return (
        f"[{assignment.assignment_id}] {assignment.title} "
        f"(course {course}) due {assignment.deadline} - {assignment.status}"
    )
