#
# tests/unit/test_state.py
#
"""
Tests for RunState phase tracking.
"""

import pytest

from tprunner.protocols import OutcomeKind
from tprunner.state import PHASE_EMOJI_MAP, RunPhase, RunState


@pytest.fixture
def run_state() -> RunState:
    return RunState(project_id="proj-1", job_id="job-1")


class TestRunState:
    def test_initial_state(self, run_state: RunState) -> None:
        assert run_state.phase == RunPhase.START
        assert run_state.retries == 0
        assert run_state.execution_id is None
        assert run_state.display_emoji == PHASE_EMOJI_MAP[RunPhase.START]
        assert not run_state.is_terminal

    def test_phase_progression(self, run_state: RunState) -> None:
        for phase in (RunPhase.VALIDATING, RunPhase.STARTING, RunPhase.POLLING):
            run_state.update_phase(phase)
            assert run_state.phase == phase
            assert run_state.display_emoji == PHASE_EMOJI_MAP[phase]

        run_state.update_phase(RunPhase.PASSED)
        assert run_state.is_terminal
        assert run_state.error_message is None

    def test_error_phase_records_message(self, run_state: RunState) -> None:
        run_state.update_phase(RunPhase.POLLING)
        run_state.update_phase(RunPhase.TIMED_OUT, error_msg="Job Status Timed out...")

        assert run_state.error_message == "Job Status Timed out..."

    def test_terminal_phase_is_final(self, run_state: RunState) -> None:
        run_state.update_phase(RunPhase.FAILED, error_msg="Test failed.")

        with pytest.raises(RuntimeError):
            run_state.update_phase(RunPhase.POLLING)

    @pytest.mark.parametrize(
        ("kind", "phase"),
        [
            (OutcomeKind.PASSED, RunPhase.PASSED),
            (OutcomeKind.TEST_FAILED, RunPhase.FAILED),
            (OutcomeKind.TEST_ERRORED, RunPhase.ERRORED),
            (OutcomeKind.VALIDATION_FAILURE, RunPhase.ERRORED),
            (OutcomeKind.START_FAILURE, RunPhase.ERRORED),
            (OutcomeKind.MONITOR_TRANSPORT_FAILURE, RunPhase.ERRORED),
            (OutcomeKind.TIMEOUT, RunPhase.TIMED_OUT),
        ],
    )
    def test_finish_maps_every_outcome_kind(self, run_state: RunState, kind, phase) -> None:
        run_state.finish(kind)
        assert run_state.phase == phase

    def test_record_pending_poll_is_monotonic(self, run_state: RunState) -> None:
        run_state.update_phase(RunPhase.POLLING)
        for expected in range(1, 4):
            run_state.record_pending_poll("Running")
            assert run_state.retries == expected
        assert run_state.last_state == "Running"
