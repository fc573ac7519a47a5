"""Tests for the test executor."""

import pytest

import markrunner
import samples
from markrunner.core.discovery import TestDiscovery
from markrunner.core.executor import TestExecutor, describe_error
from markrunner.core.results import ResultCollector, TestResult
from markrunner.registry import Registry


def discover(*classes):
    registry = Registry()
    for cls in classes:
        registry.register(cls)
    return TestDiscovery().discover(registry).tests


class RecordingListener:
    """Listener that records the results it is notified of."""

    def __init__(self):
        self.results = []

    def run_started(self, total):
        pass

    def test_finished(self, result):
        self.results.append((result, list(samples.EVENTS)))

    def run_finished(self, collector):
        pass


class TestRunTest:
    """Tests for TestExecutor.run_test."""

    def test_passing_test(self):
        """Test that a test that raises nothing passes with no message."""
        (descriptor,) = discover(samples.AdditionSuite)

        result = TestExecutor().run_test(descriptor)

        assert result == TestResult(
            name="samples.AdditionSuite.Test_Addition_Works",
            passed=True,
            error_message=None,
        )

    def test_failing_test_keeps_message(self):
        """Test that the raised message is preserved verbatim."""
        (descriptor,) = discover(samples.FailureSuite)

        result = TestExecutor().run_test(descriptor)

        assert result.passed is False
        assert result.error_message == "Oops"

    def test_lifecycle_order(self):
        """Test setup, body and teardown run in order on one fixture."""
        first, _ = discover(samples.LifecycleSuite)

        TestExecutor().run_test(first)

        assert samples.EVENTS == ["setup:1", "first:1:ready", "teardown:1"]

    def test_setup_failure_skips_body(self):
        """Test a failing setup fails the test and still runs teardown once."""
        (descriptor,) = discover(samples.FailingSetupSuite)

        result = TestExecutor().run_test(descriptor)

        assert result.passed is False
        assert result.error_message == "database unavailable"
        assert samples.EVENTS == ["teardown"]

    def test_body_failure_still_runs_teardown(self):
        """Test a raising body keeps its message and teardown runs once."""
        (descriptor,) = discover(samples.FailingBodySuite)

        result = TestExecutor().run_test(descriptor)

        assert result.passed is False
        assert result.error_message == "assertion in body"
        assert samples.EVENTS == ["body", "teardown"]

    def test_teardown_failure_is_discarded(self):
        """Test a raising teardown never changes a passing verdict."""
        (descriptor,) = discover(samples.FailingTeardownSuite)

        result = TestExecutor().run_test(descriptor)

        assert result.passed is True
        assert result.error_message is None
        assert samples.EVENTS == ["body", "teardown"]

    def test_construction_failure(self):
        """Test a failing constructor fails the test and skips everything else."""
        (descriptor,) = discover(samples.BrokenConstructorSuite)

        result = TestExecutor().run_test(descriptor)

        assert result.passed is False
        assert result.error_message == "cannot build fixture"
        assert samples.EVENTS == []

    def test_only_first_hooks_are_invoked(self):
        """Test that exactly one setup and one teardown run."""
        (descriptor,) = discover(samples.MultipleHooksSuite)

        TestExecutor().run_test(descriptor)

        assert samples.EVENTS == ["first_setup", "body", "first_teardown"]

    def test_inherited_hooks_are_not_invoked(self):
        (descriptor,) = discover(samples.DerivedSuite)

        assert TestExecutor().run_test(descriptor).passed
        assert samples.EVENTS == ["derived"]

    def test_static_tests_run_without_instance(self):
        """Test type-level tests and hooks need no fixture."""
        static, classmethod_test = discover(samples.StaticSuite)

        executor = TestExecutor()
        assert executor.run_test(static).passed
        assert executor.run_test(classmethod_test).passed

        assert samples.EVENTS == [
            "static_setup",
            "static_body",
            "static_teardown",
            "static_setup",
            "class_body:StaticSuite",
            "static_teardown",
        ]

    def test_static_test_with_instance_setup_fails(self):
        """Test an instance setup cannot run for a type-level test."""
        (descriptor,) = discover(samples.StaticWithInstanceSetupSuite)

        result = TestExecutor().run_test(descriptor)

        assert result.passed is False
        assert "requires an instance" in result.error_message
        assert samples.EVENTS == []

    def test_error_without_message(self):
        """Test an empty error message falls back to the exception type."""
        registry = Registry()

        @registry.register
        class Suite:
            @staticmethod
            @markrunner.test
            def check():
                raise AssertionError()

        (descriptor,) = TestDiscovery().discover(registry).tests

        result = TestExecutor().run_test(descriptor)

        assert result.error_message == "AssertionError"

    def test_keyboard_interrupt_propagates(self):
        """Test that interrupts stop the run after attempting teardown."""
        registry = Registry()
        events = []

        @registry.register
        class Suite:
            @markrunner.test
            def interrupt(self):
                raise KeyboardInterrupt

            @markrunner.teardown
            def cleanup(self):
                events.append("teardown")

        (descriptor,) = TestDiscovery().discover(registry).tests

        with pytest.raises(KeyboardInterrupt):
            TestExecutor().run_test(descriptor)

        assert events == ["teardown"]


class TestExecute:
    """Tests for TestExecutor.execute."""

    def test_fresh_fixture_per_test(self):
        """Test that state never leaks between tests of one type."""
        tests = discover(samples.LifecycleSuite)

        TestExecutor().execute(tests)

        assert samples.EVENTS == [
            "setup:1",
            "first:1:ready",
            "teardown:1",
            "setup:2",
            "second:2:ready",
            "teardown:2",
        ]

    def test_failures_do_not_abort_run(self):
        """Test that one failing test does not stop the others."""
        tests = discover(
            samples.FailureSuite,
            samples.BrokenConstructorSuite,
            samples.AdditionSuite,
        )

        collector = TestExecutor().execute(tests)

        assert [r.passed for r in collector.results] == [False, False, True]
        assert collector.summary.total == 3

    def test_listener_notified_before_next_test(self):
        """Test notification happens synchronously after each test."""
        listener = RecordingListener()
        tests = discover(samples.LifecycleSuite)

        TestExecutor([listener]).execute(tests)

        (first, events_after_first), (second, _) = listener.results
        assert first.name.endswith("test_first")
        assert second.name.endswith("test_second")
        assert events_after_first == ["setup:1", "first:1:ready", "teardown:1"]

    def test_unprintable_error_does_not_abort_run(self):
        """Test an error whose message cannot be rendered is still recorded."""
        registry = Registry()

        class UnprintableError(Exception):
            def __str__(self):
                raise RuntimeError("no str")

        @registry.register
        class Suite:
            @staticmethod
            @markrunner.test
            def broken():
                raise UnprintableError()

            @staticmethod
            @markrunner.test
            def fine():
                pass

        tests = TestDiscovery().discover(registry).tests

        collector = TestExecutor().execute(tests)

        broken, fine = collector.results
        assert broken.passed is False
        assert broken.error_message == "UnprintableError"
        assert fine.passed is True

    def test_appends_to_given_collector(self):
        collector = ResultCollector()

        returned = TestExecutor().execute(discover(samples.AdditionSuite), collector)

        assert returned is collector
        assert len(collector) == 1

    def test_empty_run(self):
        collector = TestExecutor().execute([])

        assert collector.results == ()
        assert collector.exit_code == 0


class TestDescribeError:
    """Tests for describe_error."""

    def test_uses_message(self):
        assert describe_error(ValueError("bad value")) == "bad value"

    def test_falls_back_to_type_name(self):
        assert describe_error(RuntimeError()) == "RuntimeError"

    def test_unprintable_error_falls_back_to_type_name(self):
        class UnprintableError(Exception):
            def __str__(self):
                raise RuntimeError("no str")

        assert describe_error(UnprintableError()) == "UnprintableError"
