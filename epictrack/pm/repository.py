"""
Epic and story CRUD operations for PM module.

Every operation is one retrieve -> mutate -> persist cycle against the
snapshot store. Nothing is held between calls, and a failed operation is
never persisted.
"""

import logging
import threading
from contextlib import contextmanager
from typing import Iterator, Optional

from epictrack.lib.errors import LinkageError, NotFoundError
from epictrack.pm.models import Epic, Snapshot, Story
from epictrack.pm.store import SnapshotStore
from epictrack.workflow.state_machine import Status, StatusTransitionError, transition

logger = logging.getLogger(__name__)


class Repository:
    """Epics and stories over a snapshot store.

    Keeps the links consistent: every story id listed by an epic exists and
    points back to that epic, and every story's epic lists it.
    """

    def __init__(self, store: SnapshotStore):
        self.store = store
        # One cycle at a time; the TUI runs actions off the event loop thread
        self._lock = threading.Lock()

    @contextmanager
    def _transaction(self) -> Iterator[Snapshot]:
        """Retrieve the snapshot, yield it for mutation, persist on success.

        If the body raises, the mutated copy is dropped and persist is not
        called.
        """
        with self._lock:
            snapshot = self.store.retrieve()
            yield snapshot
            self.store.persist(snapshot)

    def _read(self) -> Snapshot:
        with self._lock:
            return self.store.retrieve()

    def read_snapshot(self) -> Snapshot:
        """Return a copy of the whole current snapshot."""
        return self._read()

    def next_id(self) -> int:
        """Id the next create will use. Reserves nothing."""
        return self._read().next_id()

    def create_epic(self, name: str, description: str) -> int:
        """Create a new epic.

        Returns:
            The new epic id
        """
        with self._transaction() as snapshot:
            epic_id = snapshot.next_id()
            snapshot.epics[epic_id] = Epic(id=epic_id, name=name, description=description)
            snapshot.last_item_id = epic_id

        logger.info(f"[REPO] created epic {epic_id}")
        return epic_id

    def create_story(self, name: str, description: str, epic_id: int) -> int:
        """Create a new story under an existing epic.

        Returns:
            The new story id

        Raises:
            NotFoundError: If the epic does not exist
        """
        with self._transaction() as snapshot:
            epic = snapshot.epics.get(epic_id)
            if epic is None:
                logger.warning(f"[REPO] cannot create story: epic {epic_id} not found")
                raise NotFoundError("epic", epic_id)

            story_id = snapshot.next_id()
            snapshot.stories[story_id] = Story(
                id=story_id,
                epic_id=epic_id,
                name=name,
                description=description,
            )
            epic.add_story(story_id)
            snapshot.last_item_id = story_id

        logger.info(f"[REPO] created story {story_id} in epic {epic_id}")
        return story_id

    def get_epic(self, epic_id: int) -> Optional[Epic]:
        """Load an epic by id. Returns None if not found."""
        return self._read().epics.get(epic_id)

    def get_story(self, story_id: int) -> Optional[Story]:
        """Load a story by id. Returns None if not found."""
        return self._read().stories.get(story_id)

    def list_epics(self) -> list[Epic]:
        """List all epics ordered by id."""
        snapshot = self._read()
        return [snapshot.epics[epic_id] for epic_id in sorted(snapshot.epics)]

    def list_stories(self, epic_id: int) -> list[Story]:
        """List an epic's stories in the order the epic references them.

        Raises:
            NotFoundError: If the epic does not exist
        """
        snapshot = self._read()
        epic = snapshot.epics.get(epic_id)
        if epic is None:
            raise NotFoundError("epic", epic_id)
        return [snapshot.stories[story_id] for story_id in epic.story_ids]

    def update_epic_status(self, epic_id: int, status: Status) -> None:
        """Move an epic to a new status through the lifecycle.

        Raises:
            NotFoundError: If the epic does not exist
            StatusTransitionError: If the lifecycle rejects the change
        """
        with self._transaction() as snapshot:
            epic = snapshot.epics.get(epic_id)
            if epic is None:
                logger.warning(f"[REPO] cannot update epic {epic_id}: not found")
                raise NotFoundError("epic", epic_id)
            try:
                epic.status = transition(epic.status, status, item=f"epic {epic_id}")
            except StatusTransitionError as e:
                logger.warning(f"[REPO] {e}")
                raise

        logger.info(f"[REPO] epic {epic_id} status is now {status.value}")

    def update_story_status(self, story_id: int, status: Status) -> None:
        """Move a story to a new status through the lifecycle.

        Raises:
            NotFoundError: If the story does not exist
            StatusTransitionError: If the lifecycle rejects the change
        """
        with self._transaction() as snapshot:
            story = snapshot.stories.get(story_id)
            if story is None:
                logger.warning(f"[REPO] cannot update story {story_id}: not found")
                raise NotFoundError("story", story_id)
            try:
                story.status = transition(story.status, status, item=f"story {story_id}")
            except StatusTransitionError as e:
                logger.warning(f"[REPO] {e}")
                raise

        logger.info(f"[REPO] story {story_id} status is now {status.value}")

    def delete_epic(self, epic_id: int) -> None:
        """Delete an epic and every story it references.

        Raises:
            NotFoundError: If the epic does not exist
        """
        with self._transaction() as snapshot:
            epic = snapshot.epics.get(epic_id)
            if epic is None:
                logger.warning(f"[REPO] cannot delete epic {epic_id}: not found")
                raise NotFoundError("epic", epic_id)

            for story_id in epic.story_ids:
                snapshot.stories.pop(story_id, None)
            del snapshot.epics[epic_id]

        logger.info(f"[REPO] deleted epic {epic_id} with stories {epic.story_ids}")

    def delete_story(self, epic_id: int, story_id: int) -> None:
        """Delete a story from the epic that owns it.

        Raises:
            NotFoundError: If the epic or the story does not exist
            LinkageError: If the story belongs to a different epic
        """
        with self._transaction() as snapshot:
            epic = snapshot.epics.get(epic_id)
            if epic is None:
                logger.warning(f"[REPO] cannot delete story {story_id}: epic {epic_id} not found")
                raise NotFoundError("epic", epic_id)
            if story_id not in snapshot.stories:
                logger.warning(f"[REPO] cannot delete story {story_id}: not found")
                raise NotFoundError("story", story_id)
            if story_id not in epic.story_ids:
                logger.warning(f"[REPO] cannot delete story {story_id}: not in epic {epic_id}")
                raise LinkageError(epic_id, story_id)

            epic.remove_story(story_id)
            del snapshot.stories[story_id]

        logger.info(f"[REPO] deleted story {story_id} from epic {epic_id}")
