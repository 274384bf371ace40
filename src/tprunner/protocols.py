#
# tprunner/protocols.py
#
"""
Runtime protocols and result data structures shared by the API client
and the execution monitor.
"""

from collections.abc import Mapping
from enum import Enum, auto
from typing import Any, Protocol, runtime_checkable

from attrs import define, field

from tprunner.config.models import JobIdentity


@define(frozen=True, slots=True)
class JobMetadata:
    """Job definition as returned by the service."""

    data: Mapping[str, Any] = field(factory=dict)

    @property
    def name(self) -> str | None:
        return self.data.get("name")


@define(frozen=True, slots=True)
class AgentMetadata:
    """Agent attached to a job, as returned by the service."""

    data: Mapping[str, Any] = field(factory=dict)

    @property
    def name(self) -> str | None:
        return self.data.get("alias") or self.data.get("name")


@define(frozen=True, slots=True)
class ExecutionHandle:
    """Identifies one run of one job."""

    execution_id: str = field()


@define(frozen=True, slots=True)
class ExecutionStatus:
    """A single status snapshot of a running execution."""

    state: str | None = field()
    report_url: str | None = field(default=None)
    raw: Mapping[str, Any] = field(factory=dict, repr=False)


class OutcomeKind(Enum):
    """How a monitored run ended."""

    PASSED = auto()
    VALIDATION_FAILURE = auto()  # Job lookup failed.
    START_FAILURE = auto()  # Execution could not be started.
    MONITOR_TRANSPORT_FAILURE = auto()  # A status request itself failed.
    TEST_FAILED = auto()  # Remote state "Failed" (assertion failure).
    TEST_ERRORED = auto()  # Remote state "Error" (runtime/infrastructure error).
    TIMEOUT = auto()  # Poll budget exhausted without a terminal state.


@define(frozen=True, slots=True)
class RunOutcome:
    """Terminal result of one monitored run."""

    success: bool
    kind: OutcomeKind
    report_url: str | None = None
    error: str | None = None
    execution_id: str | None = None
    polls: int = 0


@runtime_checkable
class JobClient(Protocol):
    """
    Protocol for the remote job service. Implementations never retry;
    every failure is raised as a subclass of `tprunner.exceptions.ApiError`.
    """

    async def fetch_job_details(self, identity: JobIdentity) -> JobMetadata: ...

    async def fetch_job_agent(self, identity: JobIdentity) -> AgentMetadata: ...

    async def start_execution(self, identity: JobIdentity, queue: bool = False) -> ExecutionHandle:
        """
        Starts one execution of the job.

        Args:
            identity: The job to run.
            queue: Ask the service to defer this run until executions
                already running on the job have finished.

        Returns:
            The handle used to poll the new execution.
        """
        ...

    async def fetch_execution_status(
        self, identity: JobIdentity, handle: ExecutionHandle
    ) -> ExecutionStatus: ...


# 🔼⚙️
