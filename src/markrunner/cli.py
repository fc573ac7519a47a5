"""Command-line interface for markrunner."""

import sys
from pathlib import Path
from typing import Optional

import click
from rich.console import Console
from rich.markup import escape
from rich.panel import Panel

from markrunner import __version__
from markrunner.config import RunnerConfig, create_example_config, get_default_config
from markrunner.core.discovery import DiscoveryError


console = Console(highlight=False)

EXIT_DISCOVERY_ERROR = 2


def print_banner() -> None:
    """Print the markrunner banner."""
    console.print(
        Panel.fit(
            "[bold blue]markrunner[/bold blue] - marker-based test runner",
            subtitle=f"v{__version__}",
        )
    )


def _load_config(config_path: Optional[str]) -> tuple[RunnerConfig, Path]:
    """Load the configuration and the directory its paths are relative to."""
    if config_path:
        return RunnerConfig.from_file(config_path), Path(config_path).parent

    try:
        found = RunnerConfig.find_file()
        return RunnerConfig.from_file(found), found.parent
    except FileNotFoundError:
        return get_default_config(), Path.cwd()


def _resolve_target(target: Optional[str], config: RunnerConfig, base_dir: Path) -> str:
    """Pick the command-line target, else the configured one relative to base_dir."""
    if target:
        return target

    resolved = config.discovery.target
    if not resolved:
        console.print("[red]Error:[/red] No test module given")
        console.print("Pass a TARGET or set discovery.target in markrunner.json")
        sys.exit(EXIT_DISCOVERY_ERROR)
    if resolved.endswith(".py"):
        return str(base_dir / resolved)
    return resolved


@click.group()
@click.version_option(version=__version__, prog_name="markrunner")
@click.option(
    "--config",
    "-c",
    type=click.Path(exists=False),
    help="Path to configuration file (default: markrunner.json)",
)
@click.option("--verbose", "-v", is_flag=True, help="Enable verbose output")
@click.pass_context
def main(ctx: click.Context, config: Optional[str], verbose: bool) -> None:
    """markrunner - a minimal marker-based test runner.

    Discovers functions marked as tests, runs each against a fresh fixture
    with optional setup and teardown, and writes a results report.
    """
    ctx.ensure_object(dict)
    ctx.obj["verbose"] = verbose
    ctx.obj["config_path"] = config


@main.command()
@click.option(
    "--output",
    "-o",
    type=click.Path(),
    default="markrunner.json",
    help="Output path for configuration file",
)
@click.option("--force", "-f", is_flag=True, help="Overwrite existing configuration")
def init(output: str, force: bool) -> None:
    """Initialize a new markrunner configuration file."""
    print_banner()

    output_path = Path(output)
    if output_path.exists() and not force:
        console.print(
            f"[yellow]Configuration file already exists:[/yellow] {output_path}"
        )
        console.print("Use --force to overwrite")
        sys.exit(1)

    try:
        create_example_config(output_path)
        console.print(f"[green]Created configuration file:[/green] {output_path}")
        console.print("\nNext steps:")
        console.print("  1. Point discovery.target at the module holding your tests")
        console.print("  2. Run [bold]markrunner run[/bold] to execute them")
    except OSError as e:
        console.print(f"[red]Error creating configuration:[/red] {e}")
        sys.exit(1)


@main.command()
@click.argument("target", required=False)
@click.option(
    "--report/--no-report",
    default=True,
    help="Write the results report after tests",
)
@click.option("--output", "-o", type=click.Path(), help="Path of the text report")
@click.option("--json", "json_path", type=click.Path(), help="Also write a JSON report")
@click.pass_context
def run(
    ctx: click.Context,
    target: Optional[str],
    report: bool,
    output: Optional[str],
    json_path: Optional[str],
) -> None:
    """Discover and execute the tests in TARGET (a .py file or module name)."""
    from markrunner.core.runner import TestRunner
    from markrunner.loader import load_module
    from markrunner.report.console import ConsoleReporter
    from markrunner.report.generator import ReportGenerator

    try:
        config, base_dir = _load_config(ctx.obj.get("config_path"))
    except FileNotFoundError as e:
        console.print(f"[red]Error:[/red] {escape(str(e))}")
        console.print("Run [bold]markrunner init[/bold] to create a configuration file")
        sys.exit(1)

    verbose = ctx.obj.get("verbose", False) or config.console.verbose
    reporter = ConsoleReporter(
        Console(highlight=False, no_color=not config.console.color),
        verbose=verbose,
    )
    module_target = _resolve_target(target, config, base_dir)

    try:
        module = load_module(module_target)
        reporter.info(f"Loaded test module: {module.__name__}")
        collector = TestRunner([reporter]).run(module)
    except DiscoveryError as e:
        console.print(f"[red]Error:[/red] {escape(str(e))}")
        sys.exit(EXIT_DISCOVERY_ERROR)

    write_report = report and config.report.enabled
    paths = config.get_absolute_paths(base_dir)

    if write_report:
        report_file = Path(output) if output else paths["report_file"]
        generator = ReportGenerator(report_file.parent)
        report_path = generator.generate(collector, report_file.name)
        console.print(f"\nResults written to: {report_path}", soft_wrap=True)

    json_file = Path(json_path) if json_path else paths["json_report_file"]
    if json_file is not None:
        report_path = ReportGenerator(json_file.parent).generate_json(collector, json_file.name)
        reporter.info(f"JSON report written to: {report_path}")

    sys.exit(collector.exit_code)


@main.command(name="list")
@click.argument("target", required=False)
@click.pass_context
def list_tests(ctx: click.Context, target: Optional[str]) -> None:
    """List the tests discovered in TARGET without running them."""
    from markrunner.core.discovery import TestDiscovery
    from markrunner.loader import load_module

    try:
        config, base_dir = _load_config(ctx.obj.get("config_path"))
    except FileNotFoundError as e:
        console.print(f"[red]Error:[/red] {escape(str(e))}")
        sys.exit(1)

    module_target = _resolve_target(target, config, base_dir)

    try:
        discovered = TestDiscovery().discover(load_module(module_target))
    except DiscoveryError as e:
        console.print(f"[red]Error:[/red] {escape(str(e))}")
        sys.exit(EXIT_DISCOVERY_ERROR)

    for descriptor in discovered.tests:
        kind = "instance" if descriptor.requires_instance else "static"
        console.print(f"{descriptor.full_name} [dim]({kind})[/dim]")

    console.print(f"\nDiscovered {discovered.total_count} test(s).")


if __name__ == "__main__":
    main()
