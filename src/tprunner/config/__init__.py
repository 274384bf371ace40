#
# config/__init__.py
#
"""
Configuration handling sub-package for tprunner.

Exports the immutable settings models and their defaults.
"""

from .models import (
    DEFAULT_REQUEST_TIMEOUT,
    MAX_REQUESTS,
    POLL_INTERVAL,
    TP_API_URL,
    ApiConfig,
    JobIdentity,
    MonitorConfig,
)

__all__ = [
    "DEFAULT_REQUEST_TIMEOUT",
    "MAX_REQUESTS",
    "POLL_INTERVAL",
    "TP_API_URL",
    "ApiConfig",
    "JobIdentity",
    "MonitorConfig",
]

# 🔼⚙️
