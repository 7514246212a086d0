"""
Error taxonomy for epictrack.

Repository failures describe which integrity check failed. Store failures
mean the persisted snapshot can no longer be trusted to round-trip.
"""


class TrackerError(Exception):
    """Base class for all tracker failures."""


class NotFoundError(TrackerError):
    """A referenced epic or story does not exist."""

    def __init__(self, kind: str, item_id: int):
        self.kind = kind  # "epic" or "story"
        self.item_id = item_id
        super().__init__(f"Could not find {kind} {item_id}")


class LinkageError(TrackerError):
    """A story exists but is not linked to the given epic."""

    def __init__(self, epic_id: int, story_id: int):
        self.epic_id = epic_id
        self.story_id = story_id
        super().__init__(f"Story {story_id} does not belong to epic {epic_id}")


class StoreError(TrackerError):
    """Snapshot store failure."""

    def __init__(self, message: str, path=None):
        self.path = path
        super().__init__(message + (f" ({path})" if path else ""))


class SnapshotIOError(StoreError):
    """Snapshot could not be read or written."""


class SnapshotParseError(StoreError):
    """Snapshot content is malformed or inconsistent."""
