"""Shared TUI components for the tracker app."""

from typing import Optional

from textual import on
from textual.app import ComposeResult
from textual.binding import Binding
from textual.containers import Container
from textual.screen import ModalScreen
from textual.widgets import Input, Label, Static

from epictrack.ui.prompts import STATUS_CHOICES, STATUS_PROMPT, ItemEntry, make_entry
from epictrack.workflow.state_machine import Status


class ConfirmModal(ModalScreen[bool]):
    """Yes/no modal shown before a delete. Anything but yes keeps the item."""

    CSS = """
    ConfirmModal {
        align: center middle;
    }

    #confirm-dialog {
        width: 60;
        height: auto;
        padding: 1 2;
        background: $surface;
        border: thick $error;
    }

    #confirm-title {
        text-style: bold;
        color: $error;
    }

    #confirm-message {
        margin: 1 0;
    }

    #confirm-hint {
        color: $text-muted;
    }
    """

    BINDINGS = [
        Binding("y", "confirm", "Delete"),
        Binding("n", "cancel", "Keep"),
        Binding("escape", "cancel", "Keep"),
    ]

    def __init__(self, title: str, message: str) -> None:
        super().__init__()
        self.title_text = title
        self.message = message

    def compose(self) -> ComposeResult:
        yield Container(
            Label(self.title_text, id="confirm-title"),
            Static(self.message, id="confirm-message"),
            Static("\\[y]es, delete / \\[n]o, keep it", id="confirm-hint"),
            id="confirm-dialog",
        )

    def action_confirm(self) -> None:
        self.dismiss(True)

    def action_cancel(self) -> None:
        self.dismiss(False)


class EntryModal(ModalScreen[Optional[ItemEntry]]):
    """Modal asking for the name and description of a new epic or story."""

    CSS = """
    EntryModal {
        align: center middle;
    }

    #entry-dialog {
        width: 60;
        height: auto;
        padding: 1 2;
        background: $surface;
        border: thick $primary;
    }

    #entry-hint {
        margin-top: 1;
        color: $text-muted;
    }
    """

    BINDINGS = [
        Binding("escape", "cancel", "Cancel"),
    ]

    def __init__(self, kind: str) -> None:
        super().__init__()
        self.kind = kind

    def compose(self) -> ComposeResult:
        yield Container(
            Label(f"{self.kind} Name:"),
            Input(placeholder="Name", id="entry-name"),
            Label(f"{self.kind} Description:"),
            Input(placeholder="Description", id="entry-description"),
            Label("Press Enter to submit, Escape to cancel", id="entry-hint"),
            id="entry-dialog",
        )

    def on_mount(self) -> None:
        self.query_one("#entry-name", Input).focus()

    @on(Input.Submitted, "#entry-name")
    def on_name_submitted(self, event: Input.Submitted) -> None:
        self.query_one("#entry-description", Input).focus()

    @on(Input.Submitted, "#entry-description")
    def on_description_submitted(self, event: Input.Submitted) -> None:
        name = self.query_one("#entry-name", Input).value
        self.submit(name, event.value)

    def submit(self, name: str, description: str) -> None:
        entry = make_entry(name, description)
        if entry is None:
            self.notify("Name is required", severity="warning")
            self.query_one("#entry-name", Input).focus()
            return
        self.dismiss(entry)

    def action_cancel(self) -> None:
        self.dismiss(None)


class StatusModal(ModalScreen[Optional[Status]]):
    """Modal asking for the new status of an epic or story."""

    CSS = """
    StatusModal {
        align: center middle;
    }

    #status-dialog {
        width: auto;
        height: auto;
        padding: 1 2;
        background: $surface;
        border: solid $primary;
    }

    #status-hint {
        margin-top: 1;
        color: $text-muted;
    }
    """

    BINDINGS = [
        Binding("1", "choose('1')", "Open"),
        Binding("2", "choose('2')", "In progress"),
        Binding("3", "choose('3')", "Resolved"),
        Binding("4", "choose('4')", "Closed"),
        Binding("escape", "cancel", "Cancel"),
    ]

    def compose(self) -> ComposeResult:
        yield Container(
            Static(STATUS_PROMPT, id="status-message"),
            Static("Press 1-4 to choose, Escape to cancel", id="status-hint"),
            id="status-dialog",
        )

    def action_choose(self, choice: str) -> None:
        self.dismiss(STATUS_CHOICES.get(choice))

    def action_cancel(self) -> None:
        self.dismiss(None)
