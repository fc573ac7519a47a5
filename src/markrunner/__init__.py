"""
markrunner - a minimal marker-based test execution engine.

This package provides tools to:
- Mark functions as tests, setup hooks or teardown hooks
- Discover marked tests in a module or an explicit registry
- Run each test against a fresh fixture with setup and teardown
- Stream results to the console and write a persisted report
"""

from markrunner.markers import Role, setup, teardown, test
from markrunner.registry import Registry

__version__ = "0.1.0"
__author__ = "markrunner Team"

__all__ = ["Role", "Registry", "setup", "teardown", "test"]
