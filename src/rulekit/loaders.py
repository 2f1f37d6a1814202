"""Loaders for mode definitions and rule documents."""

from __future__ import annotations

import concurrent.futures
from pathlib import Path

from rich.console import Console
from rich.markup import escape

from .frontmatter import parse_front_matter
from .models import Mode, RuleDocument


class ModeLoader:
    """Loads mode definitions from a directory of front-matter documents."""

    def __init__(
        self,
        modes_dir: Path,
        extension: str = ".md",
        console: Console | None = None,
        max_workers: int | None = None,
    ) -> None:
        """Initialize loader with the modes directory.

        Args:
            modes_dir: Directory holding one document per mode
            extension: Recognized document extension (matched case-insensitively)
            console: Console for warnings, defaults to stdout
            max_workers: Thread pool size for file reads
        """
        self.modes_dir = Path(modes_dir)
        self.extension = extension
        self.console = console or Console()
        self.max_workers = max_workers

    def discover(self) -> list[Path]:
        """List mode documents in directory listing order.

        Raises:
            OSError: If the directory cannot be listed
        """
        suffix = self.extension.lower()
        return [
            entry
            for entry in self.modes_dir.iterdir()
            if entry.name.lower().endswith(suffix) and entry.is_file()
        ]

    def load(self) -> list[Mode]:
        """Load every mode document.

        A missing or unreadable directory yields no modes and a warning.

        Returns:
            Modes in directory listing order, duplicates included

        Raises:
            FrontMatterError: If any document has a malformed front-matter block
        """
        try:
            paths = self.discover()
            with concurrent.futures.ThreadPoolExecutor(
                max_workers=self.max_workers,
            ) as executor:
                return list(executor.map(self.load_mode, paths))
        except (OSError, UnicodeDecodeError) as e:
            self.console.print(
                f"[yellow]Warning:[/yellow] Could not load modes from "
                f"{escape(str(self.modes_dir))}: {escape(str(e))}",
            )
            return []

    def load_mode(self, path: Path) -> Mode:
        """Read and parse a single mode document."""
        source_path = path.absolute()
        with source_path.open(encoding="utf-8", newline="") as f:
            content = f.read()
        metadata, body = parse_front_matter(content, source=str(source_path))
        slug = path.name[: -len(self.extension)]

        return Mode.from_front_matter(metadata, slug, body, source_path)


class RuleLoader:
    """Loads rule documents from a directory in sorted filename order."""

    def __init__(
        self,
        rules_dir: Path,
        extension: str = ".md",
        console: Console | None = None,
        max_workers: int | None = None,
    ) -> None:
        self.rules_dir = Path(rules_dir)
        self.extension = extension
        self.console = console or Console()
        self.max_workers = max_workers

    def discover(self) -> list[Path]:
        """List rule documents sorted by filename.

        Raises:
            OSError: If the directory cannot be listed
        """
        files = [
            entry
            for entry in self.rules_dir.iterdir()
            if entry.name.endswith(self.extension) and entry.is_file()
        ]
        return sorted(files, key=lambda entry: entry.name)

    def load(self) -> list[RuleDocument]:
        """Load every rule document.

        Reads run concurrently but results keep the sorted filename order.
        A missing or unreadable directory yields no documents and an error
        message.
        """
        try:
            paths = self.discover()
            with concurrent.futures.ThreadPoolExecutor(
                max_workers=self.max_workers,
            ) as executor:
                return list(executor.map(self._read_rule, paths))
        except (OSError, UnicodeDecodeError) as e:
            self.console.print(
                f"[red]Error:[/red] Could not load rules from "
                f"{escape(str(self.rules_dir))}: {escape(str(e))}",
            )
            return []

    @staticmethod
    def _read_rule(path: Path) -> RuleDocument:
        # Rules are merged verbatim, so line endings are not translated.
        with path.open(encoding="utf-8", newline="") as f:
            return RuleDocument(filename=path.name, content=f.read())


def find_duplicate_slugs(modes: list[Mode]) -> dict[str, list[Path]]:
    """Map each slug defined more than once to the paths defining it."""
    sources: dict[str, list[Path]] = {}
    for mode in modes:
        sources.setdefault(mode.slug, []).append(mode.source_path)
    return {slug: paths for slug, paths in sources.items() if len(paths) > 1}
