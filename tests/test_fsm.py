"""Tests for epictrack.workflow.fsm module."""

import pytest

from epictrack.workflow.fsm import (
    StatusFSM,
    STATES,
    TRANSITIONS,
    OPERATIONS,
    OPERATION_FOR,
)


class TestFSMStates:
    """Tests for FSM state definitions."""

    def test_all_states_defined(self):
        """All expected states should be defined."""
        assert set(STATES) == {"Open", "InProgress", "Resolved", "Closed"}

    def test_every_transition_uses_known_states(self):
        for t in TRANSITIONS:
            assert t["source"] in STATES
            assert t["dest"] in STATES
            assert t["trigger"] in OPERATIONS


class TestFSMBasic:
    """Basic FSM functionality tests."""

    def test_initial_state(self):
        fsm = StatusFSM("Resolved")
        assert fsm.state == "Resolved"

    def test_unknown_initial_state_raises(self):
        with pytest.raises(ValueError, match="Unknown status"):
            StatusFSM("bogus")

    def test_start_transition(self):
        """start should transition from Open to InProgress."""
        fsm = StatusFSM("Open")
        fsm.start()
        assert fsm.state == "InProgress"

    def test_start_is_allowed_while_in_progress(self):
        fsm = StatusFSM("InProgress")
        fsm.start()
        assert fsm.state == "InProgress"

    def test_full_lifecycle(self):
        """Open -> start -> close -> open -> resolve ends Resolved."""
        fsm = StatusFSM("Open")

        fsm.start()
        assert fsm.state == "InProgress"

        fsm.close()
        assert fsm.state == "Closed"

        fsm.open()
        assert fsm.state == "Open"

        fsm.resolve()
        assert fsm.state == "Resolved"

    def test_invalid_transition_raises(self):
        """Invalid transitions should raise."""
        fsm = StatusFSM("Resolved")

        with pytest.raises(Exception):  # transitions raises MachineError
            fsm.start()
        assert fsm.state == "Resolved"

    def test_open_rejected_from_open(self):
        fsm = StatusFSM("Open")

        with pytest.raises(Exception):
            fsm.open()
        assert fsm.state == "Open"

    def test_available_triggers(self):
        """get_available_triggers should return valid triggers."""
        fsm = StatusFSM("Open")

        triggers = fsm.get_available_triggers()
        assert set(triggers) == {"start", "close", "resolve"}

    def test_closed_only_allows_open(self):
        fsm = StatusFSM("Closed")
        assert fsm.get_available_triggers() == ["open"]

    def test_can_method(self):
        """can() should check if trigger is valid."""
        fsm = StatusFSM("Open")

        assert fsm.can("start") is True
        assert fsm.can("open") is False

    def test_on_transition_callback(self):
        """on_transition callback should be called."""
        transitions_recorded = []

        def callback(from_state, to_state, trigger):
            transitions_recorded.append((from_state, to_state, trigger))

        fsm = StatusFSM("Open", item="epic 1", on_transition=callback)
        fsm.resolve()

        assert transitions_recorded == [("Open", "Resolved", "resolve")]

    def test_transition_is_logged(self, caplog):
        import logging
        caplog.set_level(logging.INFO)

        fsm = StatusFSM("Open", item="story 7")
        fsm.close()

        assert "[STATUS] story 7: Open -> Closed (close)" in caplog.text


class TestOperationLookup:
    """Tests for OPERATION_FOR lookup table."""

    def test_maps_each_status_to_its_operation(self):
        assert OPERATION_FOR == {
            "InProgress": "start",
            "Closed": "close",
            "Resolved": "resolve",
            "Open": "open",
        }

    def test_no_terminal_state(self):
        """Every state has at least one outgoing transition."""
        sources = {t["source"] for t in TRANSITIONS}
        assert sources == set(STATES)
