"""
Actions produced by pages from user input and executed by the Navigator.
"""

from dataclasses import dataclass
from typing import TYPE_CHECKING, Union

if TYPE_CHECKING:
    from epictrack.ui.pages import Page


@dataclass(frozen=True)
class NavigateTo:
    page: "Page"


@dataclass(frozen=True)
class NavigateBack:
    pass


@dataclass(frozen=True)
class CreateEpic:
    pass


@dataclass(frozen=True)
class CreateStory:
    epic_id: int


@dataclass(frozen=True)
class UpdateEpicStatus:
    epic_id: int


@dataclass(frozen=True)
class UpdateStoryStatus:
    story_id: int


@dataclass(frozen=True)
class DeleteEpic:
    epic_id: int


@dataclass(frozen=True)
class DeleteStory:
    epic_id: int
    story_id: int


@dataclass(frozen=True)
class Exit:
    pass


Action = Union[
    NavigateTo,
    NavigateBack,
    CreateEpic,
    CreateStory,
    UpdateEpicStatus,
    UpdateStoryStatus,
    DeleteEpic,
    DeleteStory,
    Exit,
]
