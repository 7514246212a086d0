"""
PM (Project Management) module for epictrack.

Holds the epic/story model, the snapshot stores, and the repository that
keeps epics and stories consistent across every change.
"""

from epictrack.pm.models import Epic, Snapshot, Story
from epictrack.pm.store import (
    InMemoryStore,
    JsonFileStore,
    SnapshotStore,
    snapshot_from_dict,
    snapshot_to_dict,
)
from epictrack.pm.repository import Repository

__all__ = [
    "Epic",
    "Snapshot",
    "Story",
    "InMemoryStore",
    "JsonFileStore",
    "SnapshotStore",
    "snapshot_from_dict",
    "snapshot_to_dict",
    "Repository",
]
