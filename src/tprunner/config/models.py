#
# config/models.py
#
"""
Attrs-based data models for tprunner invocation settings.
"""

from datetime import timedelta
from typing import Any

from attrs import define, field

# TestProject REST API root.
TP_API_URL = "https://api.testproject.io"
# Status requests issued before a run is considered timed out.
MAX_REQUESTS = 60
# Fixed delay between two status requests.
POLL_INTERVAL = timedelta(seconds=10)
DEFAULT_REQUEST_TIMEOUT = 30.0  # seconds


# --- Validators ---
def _validate_not_blank(inst: Any, attr: Any, value: str) -> None:
    """Validator ensures a string field carries a non-whitespace value."""
    if not isinstance(value, str) or not value.strip():
        raise ValueError(f"Field '{attr.name}' must not be blank")


def _validate_path_segment(inst: Any, attr: Any, value: str) -> None:
    """Validator for ids that become a single URL path segment."""
    _validate_not_blank(inst, attr, value)
    if value.strip() in (".", ".."):
        raise ValueError(f"Field '{attr.name}' must not be a relative path segment, got {value!r}")


def _validate_positive_int(inst: Any, attr: Any, value: int) -> None:
    """Validator ensures integer is positive."""
    if isinstance(value, bool) or not isinstance(value, int) or value <= 0:
        raise ValueError(f"Field '{attr.name}' must be positive integer, got {value}")


def _validate_positive_number(inst: Any, attr: Any, value: float) -> None:
    if value <= 0:
        raise ValueError(f"Field '{attr.name}' must be > 0, got {value}")


def _validate_non_negative_interval(inst: Any, attr: Any, value: timedelta) -> None:
    if value < timedelta(0):
        raise ValueError(f"Field '{attr.name}' must not be negative, got {value}")


@define(frozen=True, slots=True)
class ApiConfig:
    """Connection settings handed to the API client."""

    api_key: str = field(validator=_validate_not_blank, repr=False)
    base_url: str = field(default=TP_API_URL, validator=_validate_not_blank)
    request_timeout: float = field(default=DEFAULT_REQUEST_TIMEOUT, validator=_validate_positive_number)


@define(frozen=True, slots=True)
class JobIdentity:
    """A job definition, addressed by its project id and job id."""

    project_id: str = field(validator=_validate_path_segment)
    job_id: str = field(validator=_validate_path_segment)


@define(frozen=True, slots=True)
class MonitorConfig:
    """Settings for one monitored run."""

    queue: bool = field(default=True)
    max_polls: int = field(default=MAX_REQUESTS, validator=_validate_positive_int)
    poll_interval: timedelta = field(default=POLL_INTERVAL, validator=_validate_non_negative_interval)
    verbose: bool = field(default=False)

    @property
    def poll_interval_seconds(self) -> float:
        return self.poll_interval.total_seconds()


# 🔼⚙️
