"""
Data models for PM module.
"""

from dataclasses import dataclass, field

from epictrack.workflow.state_machine import Status


@dataclass
class Epic:
    """Top-level grouping of stories.

    The epic owns the list of story ids it references, not the Story
    records themselves.
    """
    id: int
    name: str
    description: str
    status: Status = Status.OPEN
    story_ids: list[int] = field(default_factory=list)  # Unique, insertion order

    def add_story(self, story_id: int) -> None:
        """Reference a story. Adding an id already present is a no-op."""
        if story_id not in self.story_ids:
            self.story_ids.append(story_id)

    def remove_story(self, story_id: int) -> None:
        if story_id in self.story_ids:
            self.story_ids.remove(story_id)


@dataclass
class Story:
    """A task belonging to exactly one epic."""
    id: int
    epic_id: int                               # Back-reference to owning epic
    name: str
    description: str
    status: Status = Status.OPEN


@dataclass
class Snapshot:
    """The complete persisted state: all epics, stories and the last issued id."""
    last_item_id: int = 0
    epics: dict[int, Epic] = field(default_factory=dict)
    stories: dict[int, Story] = field(default_factory=dict)

    def next_id(self) -> int:
        """Id the next create will use. Reserves nothing."""
        return self.last_item_id + 1
