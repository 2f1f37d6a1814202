"""Tests for front-matter splitting."""

import pytest

from rulekit.exceptions import FrontMatterError
from rulekit.frontmatter import parse_front_matter


class TestParseFrontMatter:
    """Test parse_front_matter."""

    def test_document_with_front_matter(self) -> None:
        """Test metadata is parsed and the block is removed from the body."""
        content = "---\nname: Reviewer\ngroups:\n  - read\n---\nReviews code."

        metadata, body = parse_front_matter(content)

        assert metadata == {"name": "Reviewer", "groups": ["read"]}
        assert body == "Reviews code."

    def test_document_without_front_matter(self) -> None:
        """Test a plain document is returned unchanged with empty metadata."""
        content = "# Heading\n\nJust a body."

        metadata, body = parse_front_matter(content)

        assert metadata == {}
        assert body == content

    def test_block_must_start_the_document(self) -> None:
        """Test a marker block later in the file is treated as body."""
        content = "Intro\n---\nname: Late\n---\nRest"

        metadata, body = parse_front_matter(content)

        assert metadata == {}
        assert body == content

    def test_unclosed_block_is_body(self) -> None:
        """Test an opening marker without a closing marker is not front matter."""
        content = "---\nname: Open\nno closing marker"

        assert parse_front_matter(content) == ({}, content)

    def test_closing_marker_needs_trailing_newline(self) -> None:
        """Test a closing marker at end of file does not match."""
        content = "---\nname: Reviewer\n---"

        assert parse_front_matter(content) == ({}, content)

    def test_empty_body(self) -> None:
        """Test a document that is only front matter has an empty body."""
        metadata, body = parse_front_matter("---\nname: Empty\n---\n")

        assert metadata == {"name": "Empty"}
        assert body == ""

    def test_only_first_block_is_removed(self) -> None:
        """Test later marker lines stay in the body."""
        content = "---\nname: A\n---\nBody\n---\nmore\n---\n"

        metadata, body = parse_front_matter(content)

        assert metadata == {"name": "A"}
        assert body == "Body\n---\nmore\n---\n"

    def test_comment_only_payload(self) -> None:
        """Test a payload that parses to nothing yields empty metadata."""
        metadata, body = parse_front_matter("---\n# just a comment\n---\nBody")

        assert metadata == {}
        assert body == "Body"

    def test_crlf_markers(self) -> None:
        """Test CRLF markers are recognized without rewriting the body."""
        content = "---\r\nname: Reviewer\r\n---\r\nLine one\r\nLine two"

        metadata, body = parse_front_matter(content)

        assert metadata == {"name": "Reviewer"}
        assert body == "Line one\r\nLine two"

    def test_malformed_payload_raises(self) -> None:
        """Test invalid YAML is reported instead of silently ignored."""
        content = "---\nname: [unclosed\n---\nBody"

        with pytest.raises(FrontMatterError, match="Failed to parse front matter"):
            parse_front_matter(content, source="modes/broken.md")

    def test_malformed_payload_carries_source(self) -> None:
        """Test the error details name the offending document."""
        with pytest.raises(FrontMatterError) as exc_info:
            parse_front_matter("---\nname: [unclosed\n---\n", source="modes/broken.md")

        assert exc_info.value.details == {"source": "modes/broken.md"}
        assert "modes/broken.md" in str(exc_info.value)

    def test_non_mapping_payload_raises(self) -> None:
        """Test a YAML list cannot be used as metadata."""
        with pytest.raises(FrontMatterError, match="must be a mapping"):
            parse_front_matter("---\n- one\n- two\n---\nBody")
