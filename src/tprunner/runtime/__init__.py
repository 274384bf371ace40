#
# tprunner/runtime/__init__.py
#
"""
Runtime sub-package: the execution monitor and its console bridge.
"""

from .console import ConsoleInterface
from .monitor import ExecutionMonitor, classify_state

__all__ = ["ConsoleInterface", "ExecutionMonitor", "classify_state"]

# 🔼⚙️
