"""Live console output of a run using rich."""

from typing import Optional

from rich.console import Console
from rich.text import Text

from markrunner.core.results import ResultCollector, TestResult


def format_result_line(result: TestResult) -> str:
    """Format one result as ``[PASS] name`` or ``[FAIL] name -> message``."""
    if result.passed:
        return f"[PASS] {result.name}"
    return f"[FAIL] {result.name} -> {result.error_message}"


class ConsoleReporter:
    """Streams each result to the console as soon as it is known."""

    def __init__(
        self,
        console: Optional[Console] = None,
        verbose: bool = False,
        color: bool = True,
    ):
        self.console = console or Console(highlight=False, no_color=not color)
        self.verbose = verbose

    def info(self, message: str) -> None:
        """Print a dim diagnostic line when verbose output is enabled."""
        if self.verbose:
            self.console.print(Text(message, style="dim"), soft_wrap=True)

    def run_started(self, total: int) -> None:
        self.console.print(f"Discovered {total} test(s).")
        self.console.print()

    def test_finished(self, result: TestResult) -> None:
        # Text keeps error messages from being parsed as rich markup.
        line = Text(format_result_line(result), style="green" if result.passed else "red")
        self.console.print(line, soft_wrap=True)

    def run_finished(self, collector: ResultCollector) -> None:
        summary = collector.summary

        self.console.print()
        self.console.print("[bold]=== Test Summary ===[/bold]")
        self.console.print(f"Passed: [green]{summary.passed}[/green]")
        self.console.print(f"Failed: [red]{summary.failed}[/red]")
        self.console.print(f"Total : {summary.total}")
