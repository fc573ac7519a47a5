"""Persisted report generation using Jinja2 templates."""

import json
from pathlib import Path
from typing import Optional

from jinja2 import Environment, FileSystemLoader, select_autoescape

from markrunner.core.results import ResultCollector


class ReportGenerator:
    """Writes the results of a finished run to report files.

    Reports are rendered from the collected results only; no test is run
    again to produce them.
    """

    TEMPLATE_NAME = "results.txt.j2"

    def __init__(self, output_dir: Path | str):
        """Initialize the report generator.

        Args:
            output_dir: Directory receiving the report files
        """
        self.output_dir = Path(output_dir)

        template_dir = Path(__file__).parent / "templates"
        self.env = Environment(
            loader=FileSystemLoader(template_dir),
            autoescape=select_autoescape(["html", "xml"]),
            trim_blocks=True,
            lstrip_blocks=True,
            keep_trailing_newline=True,
        )

    def render(self, collector: ResultCollector) -> str:
        """Render the text report.

        Args:
            collector: Results of the finished run

        Returns:
            One ``[PASS]``/``[FAIL]`` line per test, a blank line and the
            Passed/Failed/Total block
        """
        template = self.env.get_template(self.TEMPLATE_NAME)
        return template.render(results=collector.results, summary=collector.summary)

    def generate(self, collector: ResultCollector, filename: str = "results.txt") -> Path:
        """Write the text report and return its path."""
        self.output_dir.mkdir(parents=True, exist_ok=True)

        report_path = self.output_dir / filename
        report_path.write_text(self.render(collector), encoding="utf-8")

        return report_path

    def generate_json(
        self, collector: ResultCollector, filename: Optional[str] = "results.json"
    ) -> Path:
        """Write the JSON report and return its path."""
        self.output_dir.mkdir(parents=True, exist_ok=True)

        report_path = self.output_dir / (filename or "results.json")
        with open(report_path, "w", encoding="utf-8") as f:
            json.dump(collector.to_dict(), f, indent=2)

        return report_path
