"""Data models for test outcomes and run aggregation."""

from dataclasses import dataclass
from typing import Iterable, Optional


@dataclass(frozen=True)
class TestResult:
    """Represents the result of a single test."""

    __test__ = False  # Prevent pytest from collecting this as a test class

    name: str
    passed: bool
    error_message: Optional[str] = None

    def __post_init__(self) -> None:
        if self.passed and self.error_message is not None:
            raise ValueError("A passed result cannot carry an error message")
        if not self.passed and not self.error_message:
            raise ValueError("A failed result requires an error message")

    @classmethod
    def success(cls, name: str) -> "TestResult":
        """Create a passed result."""
        return cls(name=name, passed=True)

    @classmethod
    def failure(cls, name: str, error_message: str) -> "TestResult":
        """Create a failed result."""
        return cls(name=name, passed=False, error_message=error_message)

    def to_dict(self) -> dict:
        """Convert to dictionary."""
        return {
            "name": self.name,
            "passed": self.passed,
            "error_message": self.error_message,
        }


@dataclass(frozen=True)
class RunSummary:
    """Counts derived from an ordered sequence of results."""

    passed: int = 0
    failed: int = 0

    @property
    def total(self) -> int:
        """Total number of tests run."""
        return self.passed + self.failed

    @property
    def exit_code(self) -> int:
        """Process exit code: 0 iff no test failed."""
        return 0 if self.failed == 0 else 1

    @classmethod
    def from_results(cls, results: Iterable[TestResult]) -> "RunSummary":
        """Compute the summary of a result sequence."""
        passed = failed = 0
        for result in results:
            if result.passed:
                passed += 1
            else:
                failed += 1
        return cls(passed=passed, failed=failed)

    def to_dict(self) -> dict:
        """Convert to dictionary."""
        return {"passed": self.passed, "failed": self.failed, "total": self.total}


class ResultCollector:
    """Accumulates results in execution order.

    Results are captured once and read by any number of report sinks.
    """

    def __init__(self) -> None:
        self._results: list[TestResult] = []

    def add(self, result: TestResult) -> None:
        """Append the outcome of one test."""
        self._results.append(result)

    @property
    def results(self) -> tuple[TestResult, ...]:
        """All results in execution order."""
        return tuple(self._results)

    @property
    def failed_results(self) -> list[TestResult]:
        """Failed results in execution order."""
        return [r for r in self._results if not r.passed]

    @property
    def summary(self) -> RunSummary:
        """Summary recomputed from the current results."""
        return RunSummary.from_results(self._results)

    @property
    def exit_code(self) -> int:
        """Process exit code for the run."""
        return self.summary.exit_code

    def __len__(self) -> int:
        return len(self._results)

    def to_dict(self) -> dict:
        """Convert to dictionary."""
        return {
            "summary": self.summary.to_dict(),
            "results": [r.to_dict() for r in self._results],
        }
