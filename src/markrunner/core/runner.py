"""Test run orchestration."""

from types import ModuleType
from typing import Iterable, Optional, Union

from markrunner.core.discovery import DiscoveryResult, TestDiscovery
from markrunner.core.executor import RunListener, TestExecutor
from markrunner.core.results import ResultCollector
from markrunner.registry import Registry


class TestRunner:
    """Discovers and executes the tests of one module."""

    __test__ = False  # Prevent pytest from collecting this as a test class

    def __init__(self, listeners: Optional[Iterable[RunListener]] = None):
        """Initialize the test runner."""
        self.listeners = list(listeners or [])
        self.discovery = TestDiscovery()
        self.executor = TestExecutor(self.listeners)

    def discover(self, source: Union[Registry, ModuleType]) -> DiscoveryResult:
        """Discover tests without running them.

        Raises:
            DiscoveryError: If the source cannot be introspected
        """
        return self.discovery.discover(source)

    def run(self, source: Union[Registry, ModuleType]) -> ResultCollector:
        """Discover and execute all tests of a module or registry.

        Discovery faults propagate before any test runs. Per-test faults are
        recorded as failed results.
        """
        discovered = self.discover(source)

        for listener in self.listeners:
            listener.run_started(discovered.total_count)

        collector = self.executor.execute(discovered.tests)

        for listener in self.listeners:
            listener.run_finished(collector)

        return collector
