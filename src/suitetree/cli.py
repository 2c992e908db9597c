"""Command-line interface for SuiteTree."""

import logging
import sys
from pathlib import Path
from typing import Optional

import click
from pydantic import ValidationError
from rich.console import Console
from rich.logging import RichHandler
from rich.panel import Panel
from rich.table import Table

from suitetree import __version__
from suitetree.config import SuiteTreeConfig, create_example_config, get_default_config
from suitetree.core.declarations import build_suite, load_declaration
from suitetree.core.models import TestStatus
from suitetree.core.tree import WorkerSuite


console = Console()


def print_banner() -> None:
    """Print the SuiteTree banner."""
    console.print(
        Panel.fit(
            "[bold blue]SuiteTree[/bold blue] - worker test tree inspector",
            subtitle=f"v{__version__}",
        )
    )


def setup_logging(verbose: bool = False) -> None:
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(message)s",
        handlers=[RichHandler(console=console, show_path=False)],
    )


def _load_config(config_path: Optional[str]) -> SuiteTreeConfig:
    """Load the configuration, falling back to defaults when none exists."""
    if config_path:
        return SuiteTreeConfig.from_file(config_path)
    try:
        return SuiteTreeConfig.find_and_load()
    except FileNotFoundError:
        return get_default_config()


def _prepare_tree(ctx: click.Context, file: str, key: Optional[str]) -> tuple[WorkerSuite, SuiteTreeConfig]:
    """Load config and declaration, then number the tree."""
    try:
        config = _load_config(ctx.obj.get("config_path"))
        declaration = load_declaration(file)
    except (OSError, ValidationError, ValueError) as e:
        console.print(f"[red]Error:[/red] {e}")
        sys.exit(1)

    root = build_suite(declaration)
    root.renumber()
    root.assign_ids(key or config.run.configuration_key())
    return root, config


@click.group()
@click.version_option(version=__version__, prog_name="suitetree")
@click.option(
    "--config",
    "-c",
    type=click.Path(exists=False),
    help="Path to configuration file (default: suitetree.json)",
)
@click.option("--verbose", "-v", is_flag=True, help="Enable verbose output")
@click.pass_context
def main(ctx: click.Context, config: Optional[str], verbose: bool) -> None:
    """SuiteTree - inspect test trees as a worker sees them.

    Shows which tests are skipped, slow or flaky after inheritance and
    which ids they are reported under.
    """
    ctx.ensure_object(dict)
    ctx.obj["verbose"] = verbose
    ctx.obj["config_path"] = config
    setup_logging(verbose)


@main.command()
@click.option(
    "--output",
    "-o",
    type=click.Path(),
    default="suitetree.json",
    help="Output path for configuration file",
)
@click.option("--force", "-f", is_flag=True, help="Overwrite existing configuration")
def init(output: str, force: bool) -> None:
    """Initialize a new SuiteTree configuration file."""
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
    except OSError as e:
        console.print(f"[red]Error creating configuration:[/red] {e}")
        sys.exit(1)


@main.command()
@click.argument("file", type=click.Path())
@click.option("--key", "-k", default=None, help="Configuration key (default: from config)")
@click.pass_context
def show(ctx: click.Context, file: str, key: Optional[str]) -> None:
    """Show the tests declared in FILE with their inherited modifiers."""
    root, config = _prepare_tree(ctx, file, key)

    table = Table(title=f"Tests in {root.file}")
    table.add_column("Id", style="cyan")
    table.add_column("Title")
    table.add_column("Skipped")
    table.add_column("Slow")
    table.add_column("Flaky")
    table.add_column("Expected")
    table.add_column("Timeout", justify="right")
    table.add_column("Annotations")

    def flag(value: bool) -> str:
        return "[yellow]yes[/yellow]" if value else ""

    tests = root.all_tests()
    for test in tests:
        expected = test.expected_status()
        annotations = ", ".join(
            f"{a.type}: {a.description}" if a.description else a.type
            for a in test.collect_annotations()
        )
        table.add_row(
            test.id,
            " › ".join(test.title_path()),
            flag(test.is_skipped()),
            flag(test.is_slow()),
            flag(test.is_flaky()),
            f"[red]{expected.value}[/red]" if expected == TestStatus.FAILED else expected.value,
            f"{test.effective_timeout(config.timeouts.default_timeout_ms, config.timeouts.slow_multiplier)}ms",
            annotations,
        )

    console.print(table)

    skipped = sum(1 for test in tests if test.is_skipped())
    console.print(f"\n[bold]Total:[/bold] {len(tests)}  [yellow]Skipped:[/yellow] {skipped}")
    if root.has_runnable_tests():
        console.print("[green]File has tests to run[/green]")
    else:
        console.print("[yellow]Nothing to run in this file[/yellow]")


@main.command()
@click.argument("file", type=click.Path())
@click.option("--key", "-k", default=None, help="Configuration key (default: from config)")
@click.pass_context
def ids(ctx: click.Context, file: str, key: Optional[str]) -> None:
    """Print the id of every test declared in FILE, one per line."""
    root, _ = _prepare_tree(ctx, file, key)
    for test in root.all_tests():
        click.echo(test.id)


if __name__ == "__main__":
    main()
