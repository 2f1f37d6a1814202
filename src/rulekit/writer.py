"""Output writer that merges loaded modes and rules into the two artifacts."""

from __future__ import annotations

import json
import os
from pathlib import Path

from rich.console import Console
from rich.markup import escape

from .exceptions import OutputWriteError
from .models import AggregateOutput, BuildConfig, Mode, RuleDocument

RULE_SEPARATOR = "\n\n"
MODES_DOCUMENT_KEY = "customModes"


class OutputWriter:
    """Compiles and persists the modes document and the merged rules text."""

    def __init__(self, config: BuildConfig, console: Console | None = None) -> None:
        """Initialize writer with output locations.

        Args:
            config: Build configuration holding output paths and project root
            console: Console for progress messages, defaults to stdout
        """
        self.config = config
        self.console = console or Console()

    def compile(
        self,
        modes: list[Mode],
        rules: list[RuleDocument],
    ) -> AggregateOutput:
        """Build both artifacts in memory, keeping the given order.

        Args:
            modes: Loaded modes, emitted in the order received
            rules: Rule documents, joined in the order received

        Returns:
            Compiled artifacts
        """
        return AggregateOutput(
            modes_document={MODES_DOCUMENT_KEY: [mode.to_record() for mode in modes]},
            rules_text=self.compile_rules_text(modes, rules),
            mode_count=len(modes),
            rule_count=len(rules),
        )

    def compile_rules_text(
        self,
        modes: list[Mode],
        rules: list[RuleDocument],
    ) -> str:
        """Join rule documents and append the modes summary when modes exist."""
        result = RULE_SEPARATOR.join(rule.content for rule in rules)
        if modes:
            result += RULE_SEPARATOR + self.config.summary_header
            for mode in modes:
                result += "\n" + self._format_summary_line(mode)
        return result

    def render_modes_document(self, output: AggregateOutput) -> str:
        """Render the modes document as pretty-printed JSON."""
        return json.dumps(
            output.modes_document,
            indent=2,
            ensure_ascii=False,
            default=str,
        )

    def write(self, output: AggregateOutput) -> None:
        """Overwrite both artifacts, modes document first.

        Raises:
            OutputWriteError: If either artifact cannot be written
        """
        self._write_artifact(self.config.modes_output, self.render_modes_document(output))
        self.console.print(
            f"[green]✓[/green] Generated {escape(self.display_path(self.config.modes_output))} "
            f"from {output.mode_count} mode files",
        )

        self._write_artifact(self.config.rules_output, output.rules_text)
        self.console.print(
            f"[green]✓[/green] Generated {escape(self.display_path(self.config.rules_output))} "
            f"from {output.rule_count} rule files",
        )

    def _format_summary_line(self, mode: Mode) -> str:
        label = mode.slug if mode.name is None else f"{mode.slug} {mode.name}"
        return f"- {label} at {self.display_path(mode.source_path)}"

    def display_path(self, path: Path) -> str:
        """Return ``path`` relative to the project root."""
        return os.path.relpath(path, self.config.root)

    def _write_artifact(self, target_path: Path, content: str) -> None:
        try:
            target_path.parent.mkdir(parents=True, exist_ok=True)
            target_path.write_text(content, encoding="utf-8")
        except OSError as e:
            msg = f"Failed to write {target_path}: {e}"
            raise OutputWriteError(msg, details={"path": str(target_path)}) from e
