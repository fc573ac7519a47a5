"""Sequential test execution with per-test fixtures.

Each test gets a fresh fixture, an optional setup call, the test call and a
best-effort teardown call. Every per-test fault is converted into a failed
TestResult; nothing raised by a single test aborts the run.
"""

import contextlib
from typing import Any, Iterable, Optional, Protocol, Sequence

from markrunner.core.discovery import TestDescriptor
from markrunner.core.fixtures import NO_FIXTURE, bind, resolve_hooks
from markrunner.core.results import ResultCollector, TestResult


class RunListener(Protocol):
    """Receives synchronous progress notifications during a run."""

    def run_started(self, total: int) -> None: ...

    def test_finished(self, result: TestResult) -> None: ...

    def run_finished(self, collector: ResultCollector) -> None: ...


def describe_error(error: BaseException) -> str:
    """Get the message of an error, falling back to its type name."""
    try:
        message = str(error)
    except Exception:
        message = ""
    return message if message else type(error).__name__


class TestExecutor:
    """Executes discovered tests one at a time, in order."""

    __test__ = False  # Prevent pytest from collecting this as a test class

    def __init__(self, listeners: Optional[Iterable[RunListener]] = None):
        """Initialize test executor.

        Args:
            listeners: Objects notified after each test concludes
        """
        self.listeners = list(listeners or [])

    def execute(
        self,
        tests: Sequence[TestDescriptor],
        collector: Optional[ResultCollector] = None,
    ) -> ResultCollector:
        """Run every test and collect the results.

        Args:
            tests: Descriptors in discovery order
            collector: Collector to append to (default: a new one)

        Returns:
            The collector holding one result per descriptor
        """
        collector = collector if collector is not None else ResultCollector()

        for descriptor in tests:
            result = self.run_test(descriptor)
            collector.add(result)
            for listener in self.listeners:
                listener.test_finished(result)

        return collector

    def run_test(self, descriptor: TestDescriptor) -> TestResult:
        """Run a single test through construct, setup, invoke and teardown."""
        owner = descriptor.owner
        name = descriptor.full_name

        fixture: Any = NO_FIXTURE
        if descriptor.requires_instance:
            try:
                fixture = owner.create_fixture()
            except Exception as e:
                return TestResult.failure(name, describe_error(e))

        hooks = resolve_hooks(owner)

        try:
            if hooks.setup is not None:
                bind(owner, hooks.setup, fixture)()
            bind(owner, descriptor.member, fixture)()
        except Exception as e:
            result = TestResult.failure(name, describe_error(e))
        else:
            result = TestResult.success(name)
        finally:
            if hooks.teardown is not None:
                # Teardown errors are discarded on purpose: they must never
                # change or hide the verdict of the test itself.
                with contextlib.suppress(Exception):
                    bind(owner, hooks.teardown, fixture)()

        return result
