"""Configuration management for markrunner."""

import json
from pathlib import Path
from typing import Optional

from pydantic import BaseModel, Field, field_validator

CONFIG_NAMES = ["markrunner.json", ".markrunner.json"]


class DiscoveryConfig(BaseModel):
    """Where to look for tests."""

    target: Optional[str] = Field(
        default=None,
        description="Path to a .py file or a dotted module name containing tests",
    )

    @field_validator("target")
    @classmethod
    def validate_target(cls, v: Optional[str]) -> Optional[str]:
        if v is not None and not v.strip():
            raise ValueError("Discovery target cannot be empty")
        return v


class ReportConfig(BaseModel):
    """Persisted report configuration."""

    enabled: bool = Field(default=True, description="Write the text report after a run")
    output_dir: str = Field(default=".", description="Directory for report output")
    filename: str = Field(default="results.txt", description="Text report filename")
    json_filename: Optional[str] = Field(
        default=None, description="Optional JSON report filename"
    )

    @field_validator("filename")
    @classmethod
    def validate_filename(cls, v: str) -> str:
        if not v.strip():
            raise ValueError("Report filename cannot be empty")
        return v


class ConsoleConfig(BaseModel):
    """Console output configuration."""

    verbose: bool = Field(default=False, description="Print diagnostic lines")
    color: bool = Field(default=True, description="Colorize PASS/FAIL lines")


class RunnerConfig(BaseModel):
    """Main configuration for markrunner."""

    discovery: DiscoveryConfig = Field(default_factory=DiscoveryConfig)
    report: ReportConfig = Field(default_factory=ReportConfig)
    console: ConsoleConfig = Field(default_factory=ConsoleConfig)

    @classmethod
    def from_file(cls, path: Path | str) -> "RunnerConfig":
        """Load configuration from a JSON file."""
        path = Path(path)
        if not path.exists():
            raise FileNotFoundError(f"Configuration file not found: {path}")

        with open(path, "r") as f:
            data = json.load(f)

        return cls.model_validate(data)

    @staticmethod
    def find_file(start_dir: Path | str | None = None) -> Path:
        """Find the nearest configuration file, searching up the directory tree."""
        if start_dir is None:
            start_dir = Path.cwd()
        else:
            start_dir = Path(start_dir)

        current = start_dir.resolve()
        for directory in [current, *current.parents]:
            for name in CONFIG_NAMES:
                config_path = directory / name
                if config_path.exists():
                    return config_path

        raise FileNotFoundError(
            "No configuration file found. Create markrunner.json or run 'markrunner init'"
        )

    @classmethod
    def find_and_load(cls, start_dir: Path | str | None = None) -> "RunnerConfig":
        """Find and load configuration file, searching up the directory tree."""
        return cls.from_file(cls.find_file(start_dir))

    def to_file(self, path: Path | str) -> None:
        """Save configuration to a JSON file."""
        path = Path(path)
        path.parent.mkdir(parents=True, exist_ok=True)

        with open(path, "w") as f:
            json.dump(self.model_dump(), f, indent=2)

    def get_absolute_paths(self, base_dir: Path | str | None = None) -> dict[str, Optional[Path]]:
        """Get absolute paths for the report files."""
        if base_dir is None:
            base_dir = Path.cwd()
        else:
            base_dir = Path(base_dir)

        output_dir = (base_dir / self.report.output_dir).resolve()
        return {
            "report_output_dir": output_dir,
            "report_file": output_dir / self.report.filename,
            "json_report_file": (
                output_dir / self.report.json_filename if self.report.json_filename else None
            ),
        }


def get_default_config() -> RunnerConfig:
    """Return a default configuration."""
    return RunnerConfig(
        discovery=DiscoveryConfig(target=None),
        report=ReportConfig(output_dir=".", filename="results.txt"),
    )


def create_example_config(output_path: Path | str) -> Path:
    """Create an example configuration file."""
    output_path = Path(output_path)
    config = get_default_config()
    config.discovery.target = "examples/sample_tests.py"
    config.to_file(output_path)
    return output_path
