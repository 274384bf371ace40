import logging
from unittest.mock import AsyncMock

import pytest

from tprunner.config import JobIdentity, MonitorConfig
from tprunner.protocols import ExecutionHandle, ExecutionStatus, JobMetadata


@pytest.fixture(autouse=True)
def reset_root_logging():
    """Drops handlers the CLI installed so later tests never write to a closed stream."""
    yield
    root_logger = logging.getLogger()
    for handler in list(root_logger.handlers):
        handler.close()
        root_logger.removeHandler(handler)


@pytest.fixture
def identity() -> JobIdentity:
    return JobIdentity(project_id="proj-1", job_id="job-1")


@pytest.fixture
def monitor_config() -> MonitorConfig:
    return MonitorConfig(queue=True, max_polls=3)


@pytest.fixture
def mock_client() -> AsyncMock:
    """Provides a mock JobClient whose job exists and starts successfully."""
    client = AsyncMock()
    client.fetch_job_details.return_value = JobMetadata(data={"id": "job-1", "name": "Smoke"})
    client.start_execution.return_value = ExecutionHandle(execution_id="exec-1")
    client.fetch_execution_status.return_value = ExecutionStatus(state="Running")
    return client


class SleepRecorder:
    """Stands in for asyncio.sleep and remembers every requested delay."""

    def __init__(self) -> None:
        self.calls: list[float] = []

    async def __call__(self, seconds: float) -> None:
        self.calls.append(seconds)


@pytest.fixture
def sleep_recorder() -> SleepRecorder:
    return SleepRecorder()
