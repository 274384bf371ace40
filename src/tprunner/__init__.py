#
# tprunner/__init__.py
#
"""
tprunner: trigger a TestProject job and wait for it to finish.
"""

from importlib.metadata import PackageNotFoundError, version

try:
    __version__ = version("tprunner")
except PackageNotFoundError:
    __version__ = "0.0.0-dev"

__all__ = ["__version__"]

# 🔼⚙️
