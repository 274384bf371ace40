#
# tprunner/client/api.py
#
"""
Thin async wrapper over the TestProject REST API.
"""

from typing import Any
from urllib.parse import quote

import httpx
import structlog

from tprunner.config.models import ApiConfig, JobIdentity
from tprunner.exceptions import (
    ApiNotFoundError,
    ApiResponseError,
    ApiStatusError,
    ApiTransportError,
    ApiUnauthorizedError,
)
from tprunner.protocols import (
    AgentMetadata,
    ExecutionHandle,
    ExecutionStatus,
    JobClient,
    JobMetadata,
)
from tprunner.telemetry import StructLogger

log: StructLogger = structlog.get_logger("client.api")

USER_AGENT = "tprunner (python-httpx)"


def _segment(value: str) -> str:
    return quote(value, safe="")


def _job_path(identity: JobIdentity) -> str:
    return f"/v2/projects/{_segment(identity.project_id)}/jobs/{_segment(identity.job_id)}"


class JobApiClient(JobClient):
    """
    Issues the job requests tprunner needs against the TestProject API.

    One instance owns one connection pool. Use it as an async context
    manager, or call `aclose()` when done.
    """

    def __init__(self, config: ApiConfig, transport: httpx.AsyncBaseTransport | None = None):
        self.config = config
        self._client = httpx.AsyncClient(
            base_url=config.base_url,
            headers={
                "Authorization": config.api_key,
                "Content-Type": "application/json",
                "Accept": "application/json",
                "User-Agent": USER_AGENT,
            },
            timeout=config.request_timeout,
            transport=transport,
        )
        self._log = log.bind(base_url=config.base_url)

    async def __aenter__(self) -> "JobApiClient":
        return self

    async def __aexit__(self, *exc_info: object) -> None:
        await self.aclose()

    async def aclose(self) -> None:
        await self._client.aclose()

    async def fetch_job_details(self, identity: JobIdentity) -> JobMetadata:
        """Returns job detail metadata."""
        return JobMetadata(data=await self._request("GET", _job_path(identity)))

    async def fetch_job_agent(self, identity: JobIdentity) -> AgentMetadata:
        """Returns details of the agent attached to a job."""
        return AgentMetadata(data=await self._request("GET", f"{_job_path(identity)}/agent"))

    async def start_execution(self, identity: JobIdentity, queue: bool = False) -> ExecutionHandle:
        """
        Triggers a job run.

        The `queue` key is only sent when set; an empty body asks the
        service to start the run right away.
        """
        path = f"{_job_path(identity)}/run"
        payload = {"queue": True} if queue else {}
        data = await self._request("POST", path, json=payload)

        execution_id = data.get("id")
        if not execution_id:
            self._log.error("Run response is missing the execution id", path=path, response=data)
            raise ApiResponseError("Run response did not include an execution 'id'", path=path)
        return ExecutionHandle(execution_id=str(execution_id))

    async def fetch_execution_status(
        self, identity: JobIdentity, handle: ExecutionHandle
    ) -> ExecutionStatus:
        """Returns the current state of an execution and its report link, if any."""
        path = f"{_job_path(identity)}/executions/{_segment(handle.execution_id)}/state"
        data = await self._request("GET", path)
        return ExecutionStatus(state=data.get("state"), report_url=data.get("report"), raw=data)

    async def _request(self, method: str, path: str, json: Any = None) -> dict[str, Any]:
        """Sends one request and returns the decoded JSON object body."""
        request_log = self._log.bind(method=method, path=path)
        request_log.debug("Sending request to TestProject API")

        try:
            response = await self._client.request(method, path, json=json)
            response.raise_for_status()
        except httpx.HTTPStatusError as e:
            status_code = e.response.status_code
            request_log.error(
                "TestProject API returned an error status",
                status_code=status_code,
                response_text=e.response.text,
            )
            if status_code == 404:
                error_class = ApiNotFoundError
                message = "Resource not found"
            elif status_code in (401, 403):
                error_class = ApiUnauthorizedError
                message = "API key was rejected"
            else:
                error_class = ApiStatusError
                message = "Request failed"
            raise error_class(
                message,
                status_code=status_code,
                response_text=e.response.text,
                path=path,
                details=e,
            ) from e
        except httpx.RequestError as e:
            request_log.error("TestProject API request failed", error=str(e), error_type=type(e).__name__)
            raise ApiTransportError(f"Could not reach {self.config.base_url}", path=path, details=e) from e

        try:
            data = response.json()
        except ValueError as e:
            request_log.error("TestProject API returned invalid JSON", response_text=response.text)
            raise ApiResponseError("Response body is not valid JSON", path=path, details=e) from e

        if not isinstance(data, dict):
            request_log.error("TestProject API returned an unexpected JSON shape", response=data)
            raise ApiResponseError("Response body is not a JSON object", path=path)

        request_log.debug("TestProject API response received", status_code=response.status_code)
        return data


# 🔼⚙️
