#
# tprunner/client/__init__.py
#
"""
Remote job client sub-package for tprunner.
"""

from .api import JobApiClient

__all__ = ["JobApiClient"]

# 🔼⚙️
