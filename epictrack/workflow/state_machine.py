"""Epic and story status with explicit transitions.

Thin wrapper around the FSM in fsm.py. All transition rules live in fsm.py -
this module provides:
- Status enum for type safety
- apply_operation() / transition() that return the new status or raise
- Convenience functions for status queries

Usage:
    from epictrack.workflow.state_machine import transition, Status

    epic.status = transition(epic.status, Status.IN_PROGRESS, item="epic 1")
"""

import logging
from enum import Enum

from epictrack.lib.errors import TrackerError

logger = logging.getLogger(__name__)


class Status(Enum):
    """All valid item statuses.

    Values match FSM state strings and the persisted tags.
    """

    OPEN = "Open"
    IN_PROGRESS = "InProgress"
    RESOLVED = "Resolved"
    CLOSED = "Closed"


class StatusTransitionError(TrackerError):
    """Raised when a lifecycle operation is not allowed from the current status."""

    def __init__(self, current: Status, operation: str, item: str = ""):
        self.current = current
        self.operation = operation
        self.item = item
        super().__init__(
            f"Cannot {operation} from status {current.value}"
            + (f" ({item})" if item else "")
        )


def parse_status(status_str: str | None) -> Status | None:
    """Parse a status string into Status enum.

    Returns None if status is unknown.
    """
    if status_str is None:
        return None
    for status in Status:
        if status.value == status_str:
            return status
    return None


def apply_operation(status: Status, operation: str, item: str = "") -> Status:
    """Run one lifecycle operation (start, close, resolve, open).

    Args:
        status: Current status
        operation: Trigger name
        item: Optional label for logging and errors, e.g. "story 4"

    Returns:
        The resulting status. The input is never modified.

    Raises:
        StatusTransitionError: If the operation is not allowed from status
    """
    from transitions import MachineError
    from epictrack.workflow.fsm import StatusFSM, OPERATIONS

    if operation not in OPERATIONS:
        raise StatusTransitionError(status, operation, item)

    fsm = StatusFSM(status.value, item=item)
    try:
        getattr(fsm, operation)()
    except MachineError as e:
        raise StatusTransitionError(status, operation, item) from e

    return Status(fsm.state)


def transition(status: Status, to_status: Status, item: str = "") -> Status:
    """Move towards to_status using the operation that leads there.

    Open is reached by open, InProgress by start, Resolved by resolve and
    Closed by close.

    Raises:
        StatusTransitionError: If the operation is not allowed from status
    """
    from epictrack.workflow.fsm import OPERATION_FOR

    return apply_operation(status, OPERATION_FOR[to_status.value], item)


def can_transition(status: Status, to_status: Status) -> bool:
    """Check if moving to to_status is allowed from status."""
    from epictrack.workflow.fsm import StatusFSM, OPERATION_FOR

    fsm = StatusFSM(status.value)
    return fsm.can(OPERATION_FOR[to_status.value])


def available_operations(status: Status) -> list[str]:
    """List the operations allowed from status."""
    from epictrack.workflow.fsm import StatusFSM

    return StatusFSM(status.value).get_available_triggers()
