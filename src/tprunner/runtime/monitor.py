# tprunner/runtime/monitor.py

"""
Drives one job from "not started" to a terminal RunOutcome:
validate the job, start an execution, then poll its state on a fixed
interval until it passes, fails, errors or the poll budget runs out.
"""

import asyncio
from collections.abc import Awaitable, Callable
from typing import Any

import attrs
import structlog

from tprunner.config.models import JobIdentity, MonitorConfig
from tprunner.exceptions import ApiError
from tprunner.protocols import JobClient, OutcomeKind, RunOutcome
from tprunner.runtime.console import ConsoleInterface
from tprunner.state import RunPhase, RunState
from tprunner.telemetry import StructLogger

log: StructLogger = structlog.get_logger("runtime.monitor")

Sleeper = Callable[[float], Awaitable[None]]

VALIDATION_FAILURE_MESSAGE = "Could not retrieve job details..."
START_FAILURE_MESSAGE = "Could not start job..."
MONITOR_FAILURE_MESSAGE = "Could not monitor job..."
TIMEOUT_MESSAGE = "Job Status Timed out..."

# Remote state tag -> (outcome kind, success, error message).
# "Failed" is an assertion failure, "Error" a runtime/infrastructure error;
# both are reported separately.
TERMINAL_STATES: dict[str, tuple[OutcomeKind, bool, str | None]] = {
    "Failed": (OutcomeKind.TEST_FAILED, False, "Test failed."),
    "Error": (OutcomeKind.TEST_ERRORED, False, "Failed due to error."),
    "Passed": (OutcomeKind.PASSED, True, None),
}


def classify_state(state: Any, report_url: str | None = None) -> RunOutcome | None:
    """
    Maps a remote state tag to a terminal outcome.

    Returns None for any non-terminal tag (e.g. "Running", "Queued"),
    including values that are not strings at all.
    The result depends on the tag alone, never on earlier polls.
    """
    if not isinstance(state, str):
        return None
    terminal = TERMINAL_STATES.get(state)
    if terminal is None:
        return None
    kind, success, error = terminal
    return RunOutcome(success=success, kind=kind, report_url=report_url, error=error)


class ExecutionMonitor:
    """Runs a job and waits for it to reach a terminal state."""

    def __init__(
        self,
        client: JobClient,
        identity: JobIdentity,
        config: MonitorConfig,
        console: ConsoleInterface | None = None,
        sleep: Sleeper = asyncio.sleep,
    ):
        self.client = client
        self.identity = identity
        self.config = config
        self.console = console or ConsoleInterface(verbose=config.verbose)
        self._sleep = sleep
        self.run_state = RunState(project_id=identity.project_id, job_id=identity.job_id)
        self._log = log.bind(project_id=identity.project_id, job_id=identity.job_id)

    async def run(self) -> RunOutcome:
        """
        Executes the full validate -> start -> poll sequence.

        Client failures are never retried: each one ends the run with the
        matching outcome kind. Only non-terminal states are polled again,
        at most `max_polls` times in total.
        """
        state = self.run_state
        self._log.info("Starting monitored run", max_polls=self.config.max_polls, queue=self.config.queue)

        # 1. Make sure the job exists
        state.update_phase(RunPhase.VALIDATING)
        try:
            details = await self.client.fetch_job_details(self.identity)
        except ApiError as e:
            self._log.error("Could not retrieve job details", error=str(e))
            return self._finish(
                RunOutcome(success=False, kind=OutcomeKind.VALIDATION_FAILURE, error=VALIDATION_FAILURE_MESSAGE)
            )
        self.console.post_job_details(details)

        # 2. Start an execution
        state.update_phase(RunPhase.STARTING)
        try:
            handle = await self.client.start_execution(self.identity, queue=self.config.queue)
        except ApiError as e:
            self._log.error("Could not start job", error=str(e))
            return self._finish(
                RunOutcome(success=False, kind=OutcomeKind.START_FAILURE, error=START_FAILURE_MESSAGE)
            )

        state.execution_id = handle.execution_id
        self._log = self._log.bind(execution_id=handle.execution_id)
        self.console.post_execution_started(handle.execution_id)
        self._log.info("Job execution started")

        # 3. Poll until terminal or out of budget
        state.update_phase(RunPhase.POLLING)
        polls = 0
        while state.retries < self.config.max_polls:
            polls += 1
            try:
                status = await self.client.fetch_execution_status(self.identity, handle)
            except ApiError as e:
                self._log.error("Could not monitor job", error=str(e), poll=polls)
                return self._finish(
                    RunOutcome(
                        success=False,
                        kind=OutcomeKind.MONITOR_TRANSPORT_FAILURE,
                        error=MONITOR_FAILURE_MESSAGE,
                        execution_id=handle.execution_id,
                        polls=polls,
                    )
                )

            self.console.post_status(status)
            outcome = classify_state(status.state, status.report_url)
            if outcome is not None:
                return self._finish(attrs.evolve(outcome, execution_id=handle.execution_id, polls=polls))

            state.record_pending_poll(status.state)
            if state.retries < self.config.max_polls:
                await self._sleep(self.config.poll_interval_seconds)

        self._log.warning("Gave up waiting for a terminal state", polls=polls, last_state=state.last_state)
        return self._finish(
            RunOutcome(
                success=False,
                kind=OutcomeKind.TIMEOUT,
                error=TIMEOUT_MESSAGE,
                execution_id=handle.execution_id,
                polls=polls,
            )
        )

    def _finish(self, outcome: RunOutcome) -> RunOutcome:
        self.run_state.finish(outcome.kind, error_msg=outcome.error)
        self._log.info(
            "Monitored run finished",
            outcome=outcome.kind.name,
            success=outcome.success,
            report_url=outcome.report_url,
            polls=outcome.polls,
        )
        return outcome


# 🔼⚙️
