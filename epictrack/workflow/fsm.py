"""Status lifecycle state machine using transitions library.

Epics and stories share one lifecycle:
- start, close and resolve are allowed from Open and InProgress
- open brings a Resolved or Closed item back to Open

There is no terminal state.

Usage:
    from epictrack.workflow.fsm import StatusFSM

    fsm = StatusFSM("Open")
    fsm.start()  # InProgress
    fsm.resolve()  # Resolved
    fsm.open()  # back to Open
"""

import logging
from typing import Callable

from transitions import Machine

logger = logging.getLogger(__name__)


# State values must match Status enum values (also the persisted tags)
STATES = [
    "Open",
    "InProgress",
    "Resolved",
    "Closed",
]

# Transitions defined as (trigger, source, dest)
# Each trigger becomes a method on the FSM
TRANSITIONS = [
    # Work on an item
    {"trigger": "start", "source": "Open", "dest": "InProgress"},
    {"trigger": "start", "source": "InProgress", "dest": "InProgress"},

    # Abandon
    {"trigger": "close", "source": "Open", "dest": "Closed"},
    {"trigger": "close", "source": "InProgress", "dest": "Closed"},

    # Finish
    {"trigger": "resolve", "source": "Open", "dest": "Resolved"},
    {"trigger": "resolve", "source": "InProgress", "dest": "Resolved"},

    # Reopen
    {"trigger": "open", "source": "Closed", "dest": "Open"},
    {"trigger": "open", "source": "Resolved", "dest": "Open"},
]

OPERATIONS = ["start", "close", "resolve", "open"]


# Pre-computed lookup: dest -> trigger name
# Every destination is reached by exactly one trigger
def _build_operation_lookup() -> dict[str, str]:
    """Build lookup from dest -> trigger name."""
    lookup: dict[str, str] = {}
    for t in TRANSITIONS:
        lookup.setdefault(t["dest"], t["trigger"])
    return lookup


OPERATION_FOR = _build_operation_lookup()


class StatusFSM:
    """State machine for one epic or story status.

    Wraps the transitions library:
    - Starts from the item's current status
    - Only explicit triggers (no auto transitions)
    - Logs all transitions
    """

    def __init__(
        self,
        status: str,
        item: str = "",
        on_transition: Callable[[str, str, str], None] | None = None,
    ):
        """Initialize FSM for an item.

        Args:
            status: Current status value (one of STATES)
            item: Label for log messages, e.g. "epic 3"
            on_transition: Optional callback(from_state, to_state, trigger) called after transitions
        """
        if status not in STATES:
            raise ValueError(f"Unknown status '{status}'")

        self.item = item
        self.on_transition = on_transition

        self.machine = Machine(
            model=self,
            states=STATES,
            transitions=TRANSITIONS,
            initial=status,
            auto_transitions=False,  # Only explicit transitions
            send_event=True,  # Pass EventData to callbacks
            after_state_change="on_state_change",  # Callback after any transition
        )

    def on_state_change(self, event) -> None:
        """Callback after any state transition."""
        from_state = event.transition.source
        to_state = event.transition.dest
        trigger = event.event.name

        label = f"{self.item}: " if self.item else ""
        logger.info(f"[STATUS] {label}{from_state} -> {to_state} ({trigger})")

        if self.on_transition:
            self.on_transition(from_state, to_state, trigger)

    def can(self, trigger: str) -> bool:
        """Check if a trigger can be executed in current state."""
        return trigger in self.machine.get_triggers(self.state)

    def get_available_triggers(self) -> list[str]:
        """Get list of triggers available in current state."""
        return self.machine.get_triggers(self.state)
