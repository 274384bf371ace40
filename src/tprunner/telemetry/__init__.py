#
# tprunner/telemetry/__init__.py
#
"""
Telemetry sub-package for tprunner. Exports logging setup and the logger type.
"""

from .logger import StructLogger, setup_logging

__all__ = ["StructLogger", "setup_logging"]

# 🔼⚙️
