"""
Pages shown by the tracker UI.

A page is a small descriptor naming what it displays. render_page() and
handle_input() dispatch on the page kind:
- HomePage lists all epics
- EpicDetailPage shows one epic and its stories
- StoryDetailPage shows one story
"""

from dataclasses import dataclass
from typing import Optional, Union

from rich.text import Text

from epictrack.lib.constants import (
    DESCRIPTION_COLUMN_WIDTH,
    ID_COLUMN_WIDTH,
    NAME_COLUMN_WIDTH,
    STATUS_COLUMN_WIDTH,
)
from epictrack.lib.errors import NotFoundError
from epictrack.pm.repository import Repository
from epictrack.ui import actions
from epictrack.workflow.state_machine import Status


@dataclass(frozen=True)
class HomePage:
    pass


@dataclass(frozen=True)
class EpicDetailPage:
    epic_id: int


@dataclass(frozen=True)
class StoryDetailPage:
    epic_id: int
    story_id: int


Page = Union[HomePage, EpicDetailPage, StoryDetailPage]


STATUS_STYLES = {
    Status.OPEN: "cyan",
    Status.IN_PROGRESS: "yellow",
    Status.RESOLVED: "green",
    Status.CLOSED: "dim",
}

HOME_MENU = "[q] quit | [c] create epic | [:id:] navigate to epic"
EPIC_MENU = "[p] previous | [u] update epic | [d] delete epic | [c] create story | [:id:] navigate to story"
STORY_MENU = "[p] previous | [u] update story | [d] delete story"


def get_column_string(text: str, width: int) -> str:
    """Fit text into a fixed-width column.

    Longer text is cut and ends with "..."; shorter text is padded with spaces.
    """
    if len(text) <= width:
        return text.ljust(width)
    if width <= 3:
        return "." * width
    return text[:width - 3] + "..."


def _parse_id(raw: str) -> Optional[int]:
    if raw.isascii() and raw.isdigit():
        return int(raw)
    return None


def _status_cell(status: Status) -> tuple[str, str]:
    return get_column_string(status.value, STATUS_COLUMN_WIDTH), STATUS_STYLES[status]


def _header(columns: list[tuple[str, int]]) -> str:
    """Column titles centred over cells of the same widths."""
    return " | ".join(title.center(width) for title, width in columns) + "\n"


LIST_HEADER = _header([
    ("id", ID_COLUMN_WIDTH),
    ("name", NAME_COLUMN_WIDTH),
    ("status", STATUS_COLUMN_WIDTH),
])
DETAIL_HEADER = _header([
    ("id", ID_COLUMN_WIDTH),
    ("name", NAME_COLUMN_WIDTH),
    ("description", DESCRIPTION_COLUMN_WIDTH),
    ("status", STATUS_COLUMN_WIDTH),
])


def _append_row(text: Text, cells: list) -> None:
    """Append one table row. Cells are plain strings or (string, style) pairs."""
    for i, cell in enumerate(cells):
        if i:
            text.append(" | ")
        if isinstance(cell, tuple):
            text.append(*cell)
        else:
            text.append(cell)
    text.append("\n")


def _render_home(repository: Repository) -> Text:
    text = Text()
    text.append("----------------------------- EPICS -----------------------------\n", style="bold")
    text.append(LIST_HEADER)

    for epic in repository.list_epics():
        _append_row(text, [
            get_column_string(str(epic.id), ID_COLUMN_WIDTH),
            get_column_string(epic.name, NAME_COLUMN_WIDTH),
            _status_cell(epic.status),
        ])

    text.append("\n\n")
    text.append(HOME_MENU, style="dim")
    return text


def _render_epic_detail(page: EpicDetailPage, repository: Repository) -> Text:
    epic = repository.get_epic(page.epic_id)
    if epic is None:
        raise NotFoundError("epic", page.epic_id)

    text = Text()
    text.append("------------------------------ EPIC ------------------------------\n", style="bold")
    text.append(DETAIL_HEADER)
    _append_row(text, [
        get_column_string(str(epic.id), ID_COLUMN_WIDTH),
        get_column_string(epic.name, NAME_COLUMN_WIDTH),
        get_column_string(epic.description, DESCRIPTION_COLUMN_WIDTH),
        _status_cell(epic.status),
    ])

    text.append("\n")
    text.append("---------------------------- STORIES ----------------------------\n", style="bold")
    text.append(LIST_HEADER)

    for story in repository.list_stories(page.epic_id):
        _append_row(text, [
            get_column_string(str(story.id), ID_COLUMN_WIDTH),
            get_column_string(story.name, NAME_COLUMN_WIDTH),
            _status_cell(story.status),
        ])

    text.append("\n\n")
    text.append(EPIC_MENU, style="dim")
    return text


def _render_story_detail(page: StoryDetailPage, repository: Repository) -> Text:
    story = repository.get_story(page.story_id)
    if story is None:
        raise NotFoundError("story", page.story_id)

    text = Text()
    text.append("------------------------------ STORY ------------------------------\n", style="bold")
    text.append(DETAIL_HEADER)
    _append_row(text, [
        get_column_string(str(story.id), ID_COLUMN_WIDTH),
        get_column_string(story.name, NAME_COLUMN_WIDTH),
        get_column_string(story.description, DESCRIPTION_COLUMN_WIDTH),
        _status_cell(story.status),
    ])

    text.append("\n\n")
    text.append(STORY_MENU, style="dim")
    return text


def render_page(page: Page, repository: Repository) -> Text:
    """Render a page from the current repository state.

    Raises:
        NotFoundError: If the epic or story the page shows no longer exists
        StoreError: If the snapshot cannot be read
    """
    if isinstance(page, HomePage):
        return _render_home(repository)
    if isinstance(page, EpicDetailPage):
        return _render_epic_detail(page, repository)
    if isinstance(page, StoryDetailPage):
        return _render_story_detail(page, repository)
    raise TypeError(f"Unknown page: {page!r}")


def handle_input(page: Page, raw: str, repository: Repository) -> Optional["actions.Action"]:
    """Turn one line of user input into an action.

    Only exact commands are recognized. Anything else returns None.

    Raises:
        StoreError: If the snapshot cannot be read
    """
    if isinstance(page, HomePage):
        if raw == "q":
            return actions.Exit()
        if raw == "c":
            return actions.CreateEpic()
        epic_id = _parse_id(raw)
        if epic_id is not None and repository.get_epic(epic_id) is not None:
            return actions.NavigateTo(EpicDetailPage(epic_id))
        return None

    if isinstance(page, EpicDetailPage):
        if raw == "p":
            return actions.NavigateBack()
        if raw == "u":
            return actions.UpdateEpicStatus(page.epic_id)
        if raw == "d":
            return actions.DeleteEpic(page.epic_id)
        if raw == "c":
            return actions.CreateStory(page.epic_id)
        story_id = _parse_id(raw)
        if story_id is not None:
            epic = repository.get_epic(page.epic_id)
            if epic is not None and story_id in epic.story_ids:
                return actions.NavigateTo(StoryDetailPage(page.epic_id, story_id))
        return None

    if isinstance(page, StoryDetailPage):
        if raw == "p":
            return actions.NavigateBack()
        if raw == "u":
            return actions.UpdateStoryStatus(page.story_id)
        if raw == "d":
            return actions.DeleteStory(page.epic_id, page.story_id)
        return None

    return None
