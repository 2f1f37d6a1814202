"""Core data models for the RuleKit aggregation pipeline."""

from __future__ import annotations

from pathlib import Path
from typing import Any

from pydantic import BaseModel, ConfigDict, Field

DEFAULT_RULES_DIR = Path(".cline") / "rules"
DEFAULT_MODES_DIR = Path(".cline") / "roomodes"
DEFAULT_RULES_OUTPUT = Path(".clinerules")
DEFAULT_MODES_OUTPUT = Path(".roomodes")
DEFAULT_SUMMARY_HEADER = "This project defines the following modes:"


class Mode(BaseModel):
    """A named behavior profile loaded from one mode definition file.

    Front-matter keys other than the declared fields are kept as pydantic
    extras and passed through to the generated modes document untouched.
    """

    model_config = ConfigDict(extra="allow", frozen=True, populate_by_name=True)

    slug: str = Field(..., description="Identifier derived from the filename")
    name: Any = Field(default=None, description="Display label, passed through as parsed")
    role_definition: str = Field(
        default="",
        alias="roleDefinition",
        description="Document body after the front matter is stripped",
    )
    source_path: Path = Field(
        ...,
        alias="sourcePath",
        description="Absolute path the definition was read from",
    )

    @classmethod
    def from_front_matter(
        cls,
        metadata: dict[str, Any],
        slug: str,
        body: str,
        source_path: Path,
    ) -> Mode:
        """Build a mode from parsed metadata, then apply the derived fields.

        ``slug``, ``roleDefinition`` and ``sourcePath`` always win over
        same-named keys in the metadata.
        """
        record = {str(key): value for key, value in metadata.items()}
        for key in ("role_definition", "source_path"):
            record.pop(key, None)
        record.update(
            {
                "slug": slug,
                "roleDefinition": body,
                "sourcePath": source_path,
            },
        )
        return cls.model_validate(record)

    @property
    def extra_fields(self) -> dict[str, Any]:
        """Pass-through front-matter fields."""
        return dict(self.model_extra or {})

    def to_record(self) -> dict[str, Any]:
        """Serialize the mode in modes-document field order."""
        record: dict[str, Any] = {"slug": self.slug}
        if self.name is not None:
            record["name"] = self.name
        record["roleDefinition"] = self.role_definition
        record.update(self.extra_fields)
        record["sourcePath"] = str(self.source_path)
        return record


class RuleDocument(BaseModel):
    """An opaque rule text block and the filename that orders it."""

    model_config = ConfigDict(frozen=True)

    filename: str = Field(..., description="Source filename, used for ordering")
    content: str = Field(..., description="Raw file content")


class AggregateOutput(BaseModel):
    """The two compiled artifacts, ready to be written."""

    modes_document: dict[str, Any] = Field(
        default_factory=dict,
        description="Structured modes document",
    )
    rules_text: str = Field(default="", description="Merged rules text")
    mode_count: int = Field(default=0, description="Number of modes compiled")
    rule_count: int = Field(default=0, description="Number of rule files merged")


class BuildConfig(BaseModel):
    """Input and output locations for one aggregation run."""

    root: Path = Field(..., description="Project root; summary paths are relative to it")
    rules_dir: Path = Field(..., description="Directory of rule documents")
    modes_dir: Path = Field(..., description="Directory of mode definitions")
    rules_output: Path = Field(..., description="Merged rules text artifact")
    modes_output: Path = Field(..., description="Structured modes artifact")
    extension: str = Field(default=".md", description="Recognized document extension")
    summary_header: str = Field(
        default=DEFAULT_SUMMARY_HEADER,
        description="Header line of the modes summary in the rules text",
    )
    sort_modes: bool = Field(
        default=False,
        description="Sort modes by slug instead of directory listing order",
    )
    max_workers: int | None = Field(
        default=None,
        description="Thread pool size for file reads",
    )

    @classmethod
    def for_root(
        cls,
        root: Path,
        *,
        rules_dir: Path | None = None,
        modes_dir: Path | None = None,
        rules_output: Path | None = None,
        modes_output: Path | None = None,
        **options: Any,
    ) -> BuildConfig:
        """Create a configuration using the conventional layout under ``root``.

        Relative overrides are resolved against ``root``.
        """
        root = Path(root).resolve()

        def _resolve(value: Path | None, default: Path) -> Path:
            return root / (value if value is not None else default)

        return cls(
            root=root,
            rules_dir=_resolve(rules_dir, DEFAULT_RULES_DIR),
            modes_dir=_resolve(modes_dir, DEFAULT_MODES_DIR),
            rules_output=_resolve(rules_output, DEFAULT_RULES_OUTPUT),
            modes_output=_resolve(modes_output, DEFAULT_MODES_OUTPUT),
            **options,
        )
