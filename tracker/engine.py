from typing import Protocol


class ControlInterface(Protocol):
    """What the engine needs from a user-facing front end."""

    def handle_login(self) -> int:
        ...

    def handle_get_data(self, user_id: int) -> None:
        ...

    def display_options(self) -> None:
        ...


class Engine:
    def __init__(self, ui: ControlInterface):
        self.ui = ui
        self.user_id = None

    def start(self) -> None:
        self.user_id = self.ui.handle_login()
        self.ui.handle_get_data(self.user_id)
        self.ui.display_options()
