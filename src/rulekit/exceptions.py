"""Custom exceptions for RuleKit."""

from typing import Any


class RuleKitError(Exception):
    """Base exception for all RuleKit errors."""

    def __init__(
        self,
        message: str,
        details: dict[str, Any] | None = None,
    ) -> None:
        super().__init__(message)
        self.details = details or {}


class FrontMatterError(RuleKitError):
    """Raised when a front-matter block is present but cannot be parsed."""


class OutputWriteError(RuleKitError):
    """Raised when a generated artifact cannot be written."""
