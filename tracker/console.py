"""
Prompt and menu helpers shared by the console interfaces.

Input and output go through injectable callables so a session can be
scripted.
"""
import getpass
from typing import Callable, Dict, Optional, Tuple

from .enums import Status

RULE = "-" * 80

MENU = (
    "Options:",
    "1. add Assignment",
    "2. remove Assignment",
    "3. change Assignment status",
    "4. print Assignments and courses",
    "Type 'exit' to quit.",
)


class Console:
    def __init__(
        self,
        input_func: Callable[[str], str] = input,
        output_func: Callable[[str], None] = print,
        secret_func: Callable[[str], str] = getpass.getpass,
    ):
        self.input_func = input_func
        self.output_func = output_func
        self.secret_func = secret_func

    def say(self, *lines) -> None:
        for line in lines:
            self.output_func(str(line))

    def rule(self) -> None:
        self.say(RULE)

    def ask(self, prompt: str) -> str:
        return self.input_func(prompt).strip()

    def ask_secret(self, prompt: str) -> str:
        return self.secret_func(prompt)

    def ask_int(self, prompt: str, optional: bool = False) -> Optional[int]:
        """Keep asking until the answer is a whole number (or blank when optional)."""
        while True:
            answer = self.ask(prompt)
            if optional and not answer:
                return None
            try:
                return int(answer)
            except ValueError:
                self.say(f"'{answer}' is not a valid number. Please try again.")

    def ask_assignment(self) -> Tuple[Optional[int], str, str, str]:
        course_id = self.ask_int("Enter course id (blank for none): ", optional=True)
        title = self.ask("Enter assignment title: ")
        description = self.ask("Enter assignment description: ")
        deadline = self.ask("Enter assignment deadline (YYYY-MM-DD): ")
        return course_id, title, description, deadline

    def choose_status(self) -> Status:
        statuses = list(Status)
        while True:
            self.say("Select new status:")
            self.say(*(f"{i}. {status}" for i, status in enumerate(statuses, start=1)))
            choice = self.ask_int("Enter the number corresponding to the new status: ")
            if 1 <= choice <= len(statuses):
                return statuses[choice - 1]
            self.say("Invalid choice. Please try again.")

    def run_menu(self, actions: Dict[str, Callable[[], None]]) -> None:
        """Dispatch menu choices until the user types ``exit`` or input runs out."""
        while True:
            self.say(*MENU)
            try:
                option = self.ask("Choose an option: ")
            except EOFError:
                option = "exit"
            self.rule()

            if option == "exit":
                self.say("Exiting...")
                return
            action = actions.get(option)
            if action is None:
                self.say("Invalid option. Please try again.")
                continue
            action()
