"""RuleKit command-line interface."""

from __future__ import annotations

import sys
from importlib.metadata import PackageNotFoundError
from importlib.metadata import version as get_version
from pathlib import Path

import typer
from rich.console import Console
from rich.markup import escape
from rich.table import Table

from .exceptions import RuleKitError
from .models import DEFAULT_SUMMARY_HEADER, BuildConfig
from .pipeline import build as run_build
from .pipeline import load_sources
from .writer import OutputWriter

app = typer.Typer(
    name="rulekit",
    help="RuleKit: aggregate rule and mode definitions into agent artifacts",
    add_completion=False,
)
console = Console()

ROOT_OPTION = typer.Option(
    Path(),
    "--root",
    "-r",
    help="Project root; other paths are resolved against it",
    file_okay=False,
    dir_okay=True,
)
RULES_DIR_OPTION = typer.Option(
    None,
    "--rules-dir",
    help="Rules directory (defaults to .cline/rules)",
)
MODES_DIR_OPTION = typer.Option(
    None,
    "--modes-dir",
    help="Modes directory (defaults to .cline/roomodes)",
)


def _get_version_string() -> str:
    """Get the installed package version."""
    try:
        return get_version("rulekit")
    except PackageNotFoundError:
        return "unknown"


def version_callback(value: bool) -> None:
    """Callback for --version flag."""
    if value:
        console.print(f"RuleKit version {_get_version_string()}")
        raise typer.Exit


@app.callback()
def main_callback(
    version: bool = typer.Option(
        False,
        "--version",
        callback=version_callback,
        is_eager=True,
        help="Show version and exit",
    ),
) -> None:
    """RuleKit: aggregate rule and mode definitions into agent artifacts."""


@app.command()
def build(
    root: Path = ROOT_OPTION,
    rules_dir: Path | None = RULES_DIR_OPTION,
    modes_dir: Path | None = MODES_DIR_OPTION,
    rules_output: Path | None = typer.Option(
        None,
        "--rules-output",
        help="Merged rules file (defaults to .clinerules)",
    ),
    modes_output: Path | None = typer.Option(
        None,
        "--modes-output",
        help="Modes document (defaults to .roomodes)",
    ),
    sort_modes: bool = typer.Option(
        False,
        "--sort-modes",
        help="Emit modes sorted by slug instead of directory listing order",
    ),
    summary_header: str = typer.Option(
        DEFAULT_SUMMARY_HEADER,
        "--summary-header",
        help="Header line introducing the modes summary in the rules file",
    ),
    dry_run: bool = typer.Option(
        False,
        "--dry-run",
        help="Show what would be generated without writing files",
    ),
) -> None:
    """Generate the modes document and the merged rules file."""
    try:
        config = BuildConfig.for_root(
            root,
            rules_dir=rules_dir,
            modes_dir=modes_dir,
            rules_output=rules_output,
            modes_output=modes_output,
            sort_modes=sort_modes,
            summary_header=summary_header,
        )
        output = run_build(config, console=console, dry_run=dry_run)

        if dry_run:
            writer = OutputWriter(config, console)
            console.print("[bold blue]Dry run - generated artifacts:[/bold blue]")
            console.print(
                f"\n[bold]{escape(str(config.modes_output))}:[/bold] "
                f"({output.mode_count} modes)",
            )
            console.print(
                escape(writer.render_modes_document(output)),
                soft_wrap=True,
            )
            console.print(
                f"\n[bold]{escape(str(config.rules_output))}:[/bold] "
                f"({output.rule_count} rule files)",
            )
            console.print(escape(output.rules_text), soft_wrap=True)

    except RuleKitError as e:
        console.print(f"[red]Error:[/red] {escape(str(e))}")
        raise typer.Exit(1) from e


@app.command()
def inspect(
    root: Path = ROOT_OPTION,
    rules_dir: Path | None = RULES_DIR_OPTION,
    modes_dir: Path | None = MODES_DIR_OPTION,
) -> None:
    """Show the modes and rule files a build would aggregate."""
    try:
        config = BuildConfig.for_root(root, rules_dir=rules_dir, modes_dir=modes_dir)
        modes, rules = load_sources(config, console)
    except RuleKitError as e:
        console.print(f"[red]Error:[/red] {escape(str(e))}")
        raise typer.Exit(1) from e

    writer = OutputWriter(config, console)
    table = Table(title=f"Modes ({len(modes)})")
    table.add_column("Slug", style="cyan")
    table.add_column("Name", style="green")
    table.add_column("Source")
    for mode in modes:
        table.add_row(
            escape(mode.slug),
            escape("-" if mode.name is None else str(mode.name)),
            escape(writer.display_path(mode.source_path)),
        )
    console.print(table)

    console.print(f"\n[bold]Rule files ({len(rules)}):[/bold]")
    for index, rule in enumerate(rules, start=1):
        console.print(f"  {index}. {escape(rule.filename)}")


@app.command()
def version() -> None:
    """Show RuleKit version information."""
    console.print(f"RuleKit version {_get_version_string()}")


def main() -> None:
    """Entry point for the CLI."""
    try:
        app()
    except KeyboardInterrupt:
        console.print("\n[yellow]Interrupted[/yellow]")
        sys.exit(130)


if __name__ == "__main__":
    main()
