"""Core test discovery and execution functionality."""

from markrunner.core.discovery import DiscoveryError, TestDescriptor, TestDiscovery
from markrunner.core.executor import TestExecutor
from markrunner.core.results import ResultCollector, RunSummary, TestResult
from markrunner.core.runner import TestRunner

__all__ = [
    "DiscoveryError",
    "ResultCollector",
    "RunSummary",
    "TestDescriptor",
    "TestDiscovery",
    "TestExecutor",
    "TestResult",
    "TestRunner",
]
