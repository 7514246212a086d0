"""
epictrack terminal UI.

Shows the Navigator's current page and reads one command per line. Each
command becomes an action that runs in a worker thread, so prompts can
wait on modal screens while the event loop keeps drawing.
"""

import logging
import queue
from typing import Any, Optional

from textual import on, work
from textual.app import App, ComposeResult
from textual.binding import Binding
from textual.containers import VerticalScroll
from textual.screen import Screen
from textual.widgets import Footer, Header, Input, Static
from textual.worker import get_current_worker

from epictrack.lib.errors import StoreError, TrackerError
from epictrack.lib.tui import ConfirmModal, EntryModal, StatusModal
from epictrack.pm.repository import Repository
from epictrack.ui import actions
from epictrack.ui.navigator import Navigator
from epictrack.ui.pages import handle_input, render_page
from epictrack.ui.prompts import Prompts

logger = logging.getLogger(__name__)

# Seconds between checks for worker cancellation while a modal is open
PROMPT_POLL_SECONDS = 0.5

EXIT_OK = 0
EXIT_HALTED = 1


class TextualPrompts(Prompts):
    """Prompts answered through modal screens.

    Must be called from a thread worker: the modal is pushed on the event
    loop and the worker blocks until it is dismissed.
    """

    def __init__(self, app: App) -> None:
        super().__init__(
            create_epic=lambda: self._ask(EntryModal("Epic"), None),
            create_story=lambda: self._ask(EntryModal("Story"), None),
            delete_epic=lambda: self._ask(
                ConfirmModal("Delete epic", "Are you sure you want to delete this epic and all of its stories?"), False
            ),
            delete_story=lambda: self._ask(
                ConfirmModal("Delete story", "Are you sure you want to delete this story?"), False
            ),
            update_status=lambda: self._ask(StatusModal(), None),
        )
        self.app = app

    def _ask(self, screen: Screen, declined: Any) -> Any:
        answers: queue.Queue = queue.Queue(maxsize=1)
        self.app.call_from_thread(self.app.push_screen, screen, answers.put)

        worker = get_current_worker()
        while True:
            try:
                return answers.get(timeout=PROMPT_POLL_SECONDS)
            except queue.Empty:
                if worker.is_cancelled:
                    return declined


class TrackerApp(App):
    """Main tracker TUI application."""

    TITLE = "epictrack"

    CSS = """
    #page-scroll {
        height: 1fr;
        padding: 1;
    }

    #command-input {
        dock: bottom;
    }
    """

    BINDINGS = [
        Binding("ctrl+q", "quit", "Quit"),
    ]

    def __init__(self, repository: Repository) -> None:
        super().__init__()
        self.repository = repository
        self.navigator = Navigator(repository, prompts=TextualPrompts(self))

    def compose(self) -> ComposeResult:
        yield Header()
        yield VerticalScroll(Static(id="page-body"), id="page-scroll")
        yield Input(placeholder="Enter a command", id="command-input")
        yield Footer()

    def on_mount(self) -> None:
        self.refresh_page()

    def halt(self, message: str) -> None:
        """Stop the loop after an unrecoverable error."""
        logger.error(f"[APP] halting: {message}")
        self.exit(result=EXIT_HALTED, message=message)

    def refresh_page(self) -> None:
        """Render the current page, or exit when the stack is empty."""
        page = self.navigator.current_page
        if page is None:
            self.exit(result=EXIT_OK)
            return

        try:
            body = render_page(page, self.repository)
        except TrackerError as e:
            self.halt(f"Error rendering page: {e}")
            return

        self.query_one("#page-body", Static).update(body)
        self.sub_title = type(page).__name__
        command_input = self.query_one("#command-input", Input)
        command_input.disabled = False
        command_input.focus()

    @on(Input.Submitted, "#command-input")
    def on_command(self, event: Input.Submitted) -> None:
        raw = event.value.strip()
        event.input.value = ""

        page = self.navigator.current_page
        if page is None:
            return

        try:
            action = handle_input(page, raw, self.repository)
        except TrackerError as e:
            self.halt(f"Error reading user input: {e}")
            return

        if action is None:
            self.notify(f"Unrecognized input: {raw!r}", severity="warning")
            return

        event.input.disabled = True
        self.execute_action(action)

    @work(thread=True, exclusive=True)
    def execute_action(self, action: "actions.Action") -> None:
        """Execute one action off the event loop so prompts can block."""
        try:
            self.navigator.handle_action(action)
        except StoreError as e:
            self.call_from_thread(self.halt, f"Error handling input: {e}")
            return
        except TrackerError as e:
            logger.warning(f"[APP] {type(action).__name__} failed: {e}")
            self.call_from_thread(self.notify, str(e), severity="error")

        self.call_from_thread(self.refresh_page)


def run_app(repository: Repository) -> int:
    """Run the tracker until the page stack empties or the loop halts."""
    app = TrackerApp(repository)
    result: Optional[int] = app.run()
    return EXIT_OK if result is None else result

