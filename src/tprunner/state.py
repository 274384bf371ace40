# tprunner/state.py
#
"""
Defines the in-memory state of a single monitored run.

Nothing here is persisted; the state lives for one invocation only.
"""

from enum import Enum, auto

import structlog
from attrs import field, mutable

from tprunner.protocols import OutcomeKind

log: structlog.stdlib.BoundLogger = structlog.get_logger("state")


class RunPhase(Enum):
    """Conceptual phases of one monitored run."""

    START = auto()
    VALIDATING = auto()  # Looking up the job definition.
    STARTING = auto()  # Requesting a new execution.
    POLLING = auto()  # Waiting for a terminal execution state.
    PASSED = auto()
    FAILED = auto()
    ERRORED = auto()
    TIMED_OUT = auto()


TERMINAL_PHASES = frozenset({RunPhase.PASSED, RunPhase.FAILED, RunPhase.ERRORED, RunPhase.TIMED_OUT})

PHASE_EMOJI_MAP = {
    RunPhase.START: "▶️",
    RunPhase.VALIDATING: "🔍",
    RunPhase.STARTING: "🚀",
    RunPhase.POLLING: "⏳",
    RunPhase.PASSED: "🎉",
    RunPhase.FAILED: "🚫",
    RunPhase.ERRORED: "❌",
    RunPhase.TIMED_OUT: "⏱️",
}

OUTCOME_PHASE_MAP = {
    OutcomeKind.PASSED: RunPhase.PASSED,
    OutcomeKind.TEST_FAILED: RunPhase.FAILED,
    OutcomeKind.TEST_ERRORED: RunPhase.ERRORED,
    OutcomeKind.VALIDATION_FAILURE: RunPhase.ERRORED,
    OutcomeKind.START_FAILURE: RunPhase.ERRORED,
    OutcomeKind.MONITOR_TRANSPORT_FAILURE: RunPhase.ERRORED,
    OutcomeKind.TIMEOUT: RunPhase.TIMED_OUT,
}


@mutable(slots=True)
class RunState:
    """
    Holds the dynamic state of one run: its phase, the execution it is
    tracking and how many non-terminal polls it has seen.
    """

    project_id: str = field()
    job_id: str = field()
    phase: RunPhase = field(default=RunPhase.START)
    execution_id: str | None = field(default=None)
    retries: int = field(default=0)
    last_state: str | None = field(default=None)
    error_message: str | None = field(default=None)
    display_emoji: str = field(default="❓")

    def __attrs_post_init__(self):
        self.display_emoji = PHASE_EMOJI_MAP.get(self.phase, "❓")
        log.debug(
            "Initialized run state",
            project_id=self.project_id,
            job_id=self.job_id,
            initial_phase=self.phase.name,
        )

    @property
    def is_terminal(self) -> bool:
        return self.phase in TERMINAL_PHASES

    def update_phase(self, new_phase: RunPhase, error_msg: str | None = None) -> None:
        """Moves the run to a new phase. Terminal phases are final."""
        old_phase = self.phase
        if old_phase == new_phase:
            return
        if self.is_terminal:
            raise RuntimeError(
                f"Run already finished in phase {old_phase.name}; cannot move to {new_phase.name}"
            )

        self.phase = new_phase
        self.display_emoji = PHASE_EMOJI_MAP.get(new_phase, "❓")
        log_func = log.debug

        if new_phase in (RunPhase.FAILED, RunPhase.ERRORED, RunPhase.TIMED_OUT):
            self.error_message = error_msg or "Unknown error"
            log_func = log.warning
        elif new_phase == RunPhase.PASSED:
            log_func = log.info

        log_func(
            "Run phase changed",
            project_id=self.project_id,
            job_id=self.job_id,
            execution_id=self.execution_id,
            old_phase=old_phase.name,
            new_phase=new_phase.name,
            **({"error": self.error_message} if self.error_message else {}),
        )

    def finish(self, kind: OutcomeKind, error_msg: str | None = None) -> None:
        """Moves the run into the terminal phase matching an outcome kind."""
        self.update_phase(OUTCOME_PHASE_MAP[kind], error_msg=error_msg)

    def record_pending_poll(self, state: str | None) -> None:
        """Counts one poll that did not reach a terminal state."""
        self.last_state = state
        self.retries += 1
        log.debug(
            "Execution not finished yet",
            execution_id=self.execution_id,
            state=state,
            retries=self.retries,
        )


# 🔼⚙️
