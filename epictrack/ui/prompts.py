"""
Prompt collaborators used by the Navigator.

Each prompt may decline (None or False). The Navigator treats a declined
prompt as a no-op.
"""

from dataclasses import dataclass
from typing import Callable, Optional

from epictrack.workflow.state_machine import Status


@dataclass(frozen=True)
class ItemEntry:
    """Name and description typed in for a new epic or story."""
    name: str
    description: str


# Choice number shown to the user -> status
STATUS_CHOICES = {
    "1": Status.OPEN,
    "2": Status.IN_PROGRESS,
    "3": Status.RESOLVED,
    "4": Status.CLOSED,
}

STATUS_PROMPT = "New Status (1 - OPEN, 2 - IN-PROGRESS, 3 - RESOLVED, 4 - CLOSED)"


def parse_status_choice(raw: str | None) -> Optional[Status]:
    """Map a typed choice to a status. Unknown input returns None."""
    if raw is None:
        return None
    return STATUS_CHOICES.get(raw.strip())


def make_entry(name: str | None, description: str | None) -> Optional[ItemEntry]:
    """Build an entry from raw prompt answers. An empty name cancels."""
    name = (name or "").strip()
    if not name:
        return None
    return ItemEntry(name=name, description=(description or "").strip())


def _no_entry() -> Optional[ItemEntry]:
    return None


def _no_status() -> Optional[Status]:
    return None


def _decline() -> bool:
    return False


@dataclass
class Prompts:
    """Functions that ask the user for data. Defaults decline everything."""
    create_epic: Callable[[], Optional[ItemEntry]] = _no_entry
    create_story: Callable[[], Optional[ItemEntry]] = _no_entry
    delete_epic: Callable[[], bool] = _decline
    delete_story: Callable[[], bool] = _decline
    update_status: Callable[[], Optional[Status]] = _no_status
