#
# tests/unit/test_config_models.py
#
"""
Tests for the attrs settings models.
"""

from datetime import timedelta

import attrs
import pytest

from tprunner.config import MAX_REQUESTS, POLL_INTERVAL, TP_API_URL, ApiConfig, JobIdentity, MonitorConfig


class TestApiConfig:
    def test_defaults(self) -> None:
        config = ApiConfig(api_key="key")
        assert config.base_url == TP_API_URL
        assert config.request_timeout > 0

    def test_api_key_is_not_in_repr(self) -> None:
        assert "super-secret" not in repr(ApiConfig(api_key="super-secret"))

    @pytest.mark.parametrize("api_key", ["", "   "])
    def test_blank_api_key_rejected(self, api_key: str) -> None:
        with pytest.raises(ValueError, match="api_key"):
            ApiConfig(api_key=api_key)

    def test_is_immutable(self) -> None:
        config = ApiConfig(api_key="key")
        with pytest.raises(attrs.exceptions.FrozenInstanceError):
            config.api_key = "other"  # type: ignore[misc]


class TestJobIdentity:
    def test_blank_ids_rejected(self) -> None:
        with pytest.raises(ValueError, match="project_id"):
            JobIdentity(project_id="", job_id="job")
        with pytest.raises(ValueError, match="job_id"):
            JobIdentity(project_id="proj", job_id=" ")

    @pytest.mark.parametrize("job_id", [".", ".."])
    def test_relative_path_segments_rejected(self, job_id: str) -> None:
        with pytest.raises(ValueError, match="job_id"):
            JobIdentity(project_id="proj", job_id=job_id)

    def test_equality(self) -> None:
        assert JobIdentity("p", "j") == JobIdentity(project_id="p", job_id="j")


class TestMonitorConfig:
    def test_defaults(self) -> None:
        config = MonitorConfig()
        assert config.queue is True
        assert config.max_polls == MAX_REQUESTS == 60
        assert config.poll_interval == POLL_INTERVAL == timedelta(seconds=10)
        assert config.poll_interval_seconds == 10.0
        assert config.verbose is False

    @pytest.mark.parametrize("max_polls", [0, -1, True])
    def test_max_polls_must_be_positive(self, max_polls) -> None:
        with pytest.raises(ValueError, match="max_polls"):
            MonitorConfig(max_polls=max_polls)

    def test_negative_interval_rejected(self) -> None:
        with pytest.raises(ValueError, match="poll_interval"):
            MonitorConfig(poll_interval=timedelta(seconds=-1))
