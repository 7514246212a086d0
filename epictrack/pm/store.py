"""
Snapshot stores for PM module.

A store reads and writes the whole snapshot as one unit. The persisted
form is a single JSON document:

  {
    "last_item_id": 2,
    "epics": {"1": {"name": ..., "description": ..., "status": "Open", "stories": [2]}},
    "stories": {"2": {"name": ..., "description": ..., "status": "Open"}}
  }

Stories do not store their epic; the link is rebuilt from the owning
epic's "stories" array on load.
"""

import copy
import json
import logging
from pathlib import Path
from typing import Protocol

from epictrack.lib.errors import SnapshotIOError, SnapshotParseError
from epictrack.lib.validate import ValidationError, validate, validate_before_write
from epictrack.pm.models import Epic, Snapshot, Story
from epictrack.workflow.state_machine import Status

logger = logging.getLogger(__name__)

SCHEMA_NAME = "snapshot"


class SnapshotStore(Protocol):
    def retrieve(self) -> Snapshot:
        """Return the current snapshot. The caller owns the returned object."""
        ...

    def persist(self, snapshot: Snapshot) -> None:
        ...


def snapshot_to_dict(snapshot: Snapshot) -> dict:
    """Convert a snapshot to its persisted JSON form."""
    return {
        "last_item_id": snapshot.last_item_id,
        "epics": {
            str(epic_id): {
                "name": epic.name,
                "description": epic.description,
                "status": epic.status.value,
                "stories": list(epic.story_ids),
            }
            for epic_id, epic in sorted(snapshot.epics.items())
        },
        "stories": {
            str(story_id): {
                "name": story.name,
                "description": story.description,
                "status": story.status.value,
            }
            for story_id, story in sorted(snapshot.stories.items())
        },
    }


def snapshot_from_dict(data: dict, source: Path | None = None) -> Snapshot:
    """Build a snapshot from its persisted JSON form.

    The data must already match the snapshot schema. Linkage between epics
    and stories is checked here.

    Raises:
        SnapshotParseError: If the data is internally inconsistent
    """
    owner: dict[int, int] = {}
    epics: dict[int, Epic] = {}
    for key, raw in data["epics"].items():
        epic_id = int(key)
        for story_id in raw["stories"]:
            if story_id in owner:
                raise SnapshotParseError(
                    f"Story {story_id} referenced by epics {owner[story_id]} and {epic_id}", source
                )
            owner[story_id] = epic_id
        epics[epic_id] = Epic(
            id=epic_id,
            name=raw["name"],
            description=raw["description"],
            status=Status(raw["status"]),
            story_ids=list(raw["stories"]),
        )

    stories: dict[int, Story] = {}
    for key, raw in data["stories"].items():
        story_id = int(key)
        if story_id not in owner:
            raise SnapshotParseError(f"Story {story_id} is not referenced by any epic", source)
        stories[story_id] = Story(
            id=story_id,
            epic_id=owner[story_id],
            name=raw["name"],
            description=raw["description"],
            status=Status(raw["status"]),
        )

    shared = sorted(set(epics) & set(stories))
    if shared:
        raise SnapshotParseError(f"Ids {shared} are used by both an epic and a story", source)

    missing = sorted(set(owner) - set(stories))
    if missing:
        raise SnapshotParseError(f"Epics reference missing stories {missing}", source)

    last_item_id = data["last_item_id"]
    highest = max([*epics, *stories], default=0)
    if highest > last_item_id:
        raise SnapshotParseError(
            f"last_item_id {last_item_id} is lower than id {highest} in use", source
        )

    return Snapshot(last_item_id=last_item_id, epics=epics, stories=stories)


class JsonFileStore:
    """Snapshot store backed by one JSON file."""

    def __init__(self, path: Path):
        self.path = Path(path)

    def retrieve(self) -> Snapshot:
        try:
            content = self.path.read_text()
        except OSError as e:
            raise SnapshotIOError(f"Failed to read snapshot: {e}", self.path) from e

        try:
            data = json.loads(content)
        except json.JSONDecodeError as e:
            raise SnapshotParseError(f"Invalid JSON: {e}", self.path) from None

        try:
            validate(data, SCHEMA_NAME)
        except ValidationError as e:
            raise SnapshotParseError(str(e), self.path) from None

        return snapshot_from_dict(data, self.path)

    def persist(self, snapshot: Snapshot) -> None:
        data = snapshot_to_dict(snapshot)
        try:
            validate_before_write(data, SCHEMA_NAME, self.path)
        except ValidationError as e:
            raise SnapshotParseError(str(e), self.path) from None

        try:
            self.path.write_text(json.dumps(data, indent=2))
        except OSError as e:
            raise SnapshotIOError(f"Failed to write snapshot: {e}", self.path) from e

        logger.debug(f"[STORE] wrote snapshot (last_item_id={snapshot.last_item_id}) to {self.path}")

    def initialize(self) -> bool:
        """Write an empty snapshot if the file does not exist yet.

        Returns:
            True if a new file was created
        """
        if self.path.exists():
            return False

        try:
            self.path.parent.mkdir(parents=True, exist_ok=True)
        except OSError as e:
            raise SnapshotIOError(f"Failed to create data directory: {e}", self.path) from e

        self.persist(Snapshot())
        logger.info(f"[STORE] created empty snapshot at {self.path}")
        return True


class InMemoryStore:
    """Snapshot store kept in memory. Every call works on a copy."""

    def __init__(self, snapshot: Snapshot | None = None):
        self._snapshot = copy.deepcopy(snapshot) if snapshot else Snapshot()

    def retrieve(self) -> Snapshot:
        return copy.deepcopy(self._snapshot)

    def persist(self, snapshot: Snapshot) -> None:
        self._snapshot = copy.deepcopy(snapshot)
