"""Console and file reporting of run results."""

from markrunner.report.console import ConsoleReporter
from markrunner.report.generator import ReportGenerator

__all__ = ["ConsoleReporter", "ReportGenerator"]
