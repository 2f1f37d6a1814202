"""Aggregation pipeline: load modes and rules concurrently, then write."""

from __future__ import annotations

import concurrent.futures

from rich.console import Console
from rich.markup import escape

from .loaders import ModeLoader, RuleLoader, find_duplicate_slugs
from .models import AggregateOutput, BuildConfig, Mode, RuleDocument
from .writer import OutputWriter


def load_sources(
    config: BuildConfig,
    console: Console | None = None,
) -> tuple[list[Mode], list[RuleDocument]]:
    """Run both loaders side by side and wait for both results.

    Args:
        config: Build configuration
        console: Console for loader messages

    Returns:
        ``(modes, rules)``; modes are sorted by slug when ``config.sort_modes``
        is set, otherwise kept in directory listing order

    Raises:
        FrontMatterError: If a mode document has malformed front matter
    """
    console = console or Console()
    mode_loader = ModeLoader(
        config.modes_dir,
        extension=config.extension,
        console=console,
        max_workers=config.max_workers,
    )
    rule_loader = RuleLoader(
        config.rules_dir,
        extension=config.extension,
        console=console,
        max_workers=config.max_workers,
    )

    with concurrent.futures.ThreadPoolExecutor(max_workers=2) as executor:
        modes_future = executor.submit(mode_loader.load)
        rules_future = executor.submit(rule_loader.load)
        modes = modes_future.result()
        rules = rules_future.result()

    if config.sort_modes:
        modes = sorted(modes, key=lambda mode: mode.slug)

    for slug, paths in find_duplicate_slugs(modes).items():
        sources = ", ".join(str(path) for path in paths)
        console.print(
            f"[yellow]Warning:[/yellow] Duplicate mode slug '{escape(slug)}' "
            f"defined in: {escape(sources)}",
        )

    return modes, rules


def build(
    config: BuildConfig,
    console: Console | None = None,
    dry_run: bool = False,
) -> AggregateOutput:
    """Load, merge and (unless ``dry_run``) write both artifacts.

    Raises:
        FrontMatterError: If a mode document has malformed front matter
        OutputWriteError: If an artifact cannot be written
    """
    console = console or Console()
    modes, rules = load_sources(config, console)

    writer = OutputWriter(config, console)
    output = writer.compile(modes, rules)
    if not dry_run:
        writer.write(output)
    return output
