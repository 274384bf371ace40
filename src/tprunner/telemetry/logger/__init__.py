#
# tprunner/telemetry/logger/__init__.py
#
"""
structlog setup for tprunner.
"""

from .base import BASE_LOGGER_NAME, StructLogger, setup_logging

__all__ = ["BASE_LOGGER_NAME", "StructLogger", "setup_logging"]

# 🔼⚙️
