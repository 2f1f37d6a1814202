"""YAML front-matter splitting for mode definition documents."""

from __future__ import annotations

import re
from typing import Any

import yaml

from .exceptions import FrontMatterError

# Opening marker, non-empty payload, closing marker; only at the very start.
# Markers may end in CRLF; the body after the block is left untouched.
FRONT_MATTER_PATTERN = re.compile(r"---\r?\n(.+?)\r?\n---\r?\n", re.DOTALL)


def parse_front_matter(
    content: str,
    source: str | None = None,
) -> tuple[dict[str, Any], str]:
    """Split a document into its front-matter metadata and body.

    Args:
        content: Full document text
        source: Optional origin of the text, used in error details

    Returns:
        ``(metadata, body)``. Without a front-matter block the metadata is
        empty and the body is ``content`` unchanged.

    Raises:
        FrontMatterError: If the block is present but its payload is not a
            valid YAML mapping
    """
    match = FRONT_MATTER_PATTERN.match(content)
    if match is None:
        return {}, content

    location = f" in {source}" if source else ""
    try:
        metadata = yaml.safe_load(match.group(1))
    except yaml.YAMLError as e:
        msg = f"Failed to parse front matter{location}: {e}"
        raise FrontMatterError(msg, details={"source": source}) from e

    if metadata is None:
        metadata = {}
    elif not isinstance(metadata, dict):
        msg = (
            f"Front matter{location} must be a mapping, "
            f"got {type(metadata).__name__}"
        )
        raise FrontMatterError(msg, details={"source": source})

    return metadata, content[match.end():]
