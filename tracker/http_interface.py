import logging
from typing import Optional

import httpx

from .console import Console
from .services import INVALID_ID

logger = logging.getLogger(__name__)


class HttpInterface:
    """Console front end that goes through the HTTP API."""

    def __init__(self, client: httpx.Client, console: Optional[Console] = None):
        self.client = client
        self.console = console or Console()
        self.user_id = INVALID_ID
        self.role = None

    @property
    def headers(self):
        return {"student_id": str(self.user_id), "role": self.role or ""}

    def handle_login(self) -> int:
        self.console.say(f"Logging in through {self.client.base_url} ...")

        while True:
            email = self.console.ask("Enter your email: ")
            password = self.console.ask_secret("Enter your password: ")
            res = self.client.post("/login", json={"email": email, "password": password})
            if res.status_code == 200:
                break
            self.console.say(f"Login failed: {_detail(res)}. Please try again.")

        body = res.json()
        self.user_id = body["studentId"]
        self.role = body["role"]
        self.console.say(f"Login successful! User ID: {self.user_id}")
        self.console.rule()
        return self.user_id

    def handle_get_data(self, user_id: int) -> None:
        self.console.say(f"Fetching data for user ID: {user_id}")
        self.console.rule()

        self.console.say("Assignments:")
        for a in self._get_list(f"/assignments/students/{user_id}"):
            course = a["course_id"] if a["course_id"] is not None else "-"
            self.console.say(f"[{a['assignment_id']}] {a['title']} (course {course}) due {a['deadline']} - {a['status']}")
        self.console.rule()

        self.console.say("Courses:")
        for c in self._get_list(f"/courses/students/{user_id}"):
            self.console.say(f"{c['course_id']}: {c['course_name']} ({c['start_date']} - {c['end_date']})")
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
        payload = {
            "course_id": course_id,
            "title": title,
            "description": description or None,
            "deadline": deadline,
        }
        res = self.client.post("/assignments/", json=payload, headers=self.headers)
        if res.status_code == 201:
            self.console.say(f"Assignment added successfully with ID: {res.json()['assignment_id']}")
        else:
            self.console.say(f"Failed to add assignment: {_detail(res)}")

    def remove_assignment(self) -> None:
        assignment_id = self.console.ask_int("Enter assignment id: ")
        res = self.client.delete(f"/assignments/{assignment_id}", headers=self.headers)
        if res.status_code == 200:
            self.console.say("Assignment removed successfully.")
        else:
            self.console.say(f"Failed to remove assignment: {_detail(res)}")

    def change_status(self) -> None:
        assignment_id = self.console.ask_int("Enter assignment id: ")
        status = self.console.choose_status()
        res = self.client.put(
            f"/assignments/{assignment_id}",
            json={"status": status.value},
            headers=self.headers,
        )
        if res.status_code == 200:
            self.console.say("Assignment status changed successfully.")
        else:
            self.console.say(f"Failed to change assignment status: {_detail(res)}")

    def _get_list(self, path: str) -> list:
        res = self.client.get(path, headers=self.headers)
        if res.status_code == 404:
            return []
        if res.status_code != 200:
            logger.warning("GET %s returned %s: %s", path, res.status_code, _detail(res))
            return []
        return res.json()


def _detail(res: httpx.Response) -> str:
    try:
        return str(res.json().get("detail", res.status_code))
    except ValueError:
        return res.text or str(res.status_code)
