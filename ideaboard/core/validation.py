"""Input validation for Ideaboard.

This module provides validation functions for all user inputs.
All validators raise ValidationError with descriptive messages.

Validation is limited to presence checks and whitespace trimming;
content is otherwise stored as given.
"""

from __future__ import annotations

from typing import Any, Optional

__all__ = [
    "ValidationError",
    "validate_idea_title",
    "normalize_description",
    "validate_note_content",
    "validate_upload_filename",
]


class ValidationError(ValueError):
    """Validation error with field and message attributes.

    The message is what API clients see, e.g. "Title is required".
    """

    def __init__(self, field: str, message: str) -> None:
        self.field = field
        self.message = message
        super().__init__(f"{field}: {message}")

    def __str__(self) -> str:
        return f"{self.field}: {self.message}"

    def __repr__(self) -> str:
        return f"ValidationError(field='{self.field}', message='{self.message}')"


def _trimmed(value: Any) -> str:
    """Return value stripped of surrounding whitespace, or "" for non-strings."""
    if not isinstance(value, str):
        return ""
    return value.strip()


def validate_idea_title(title: Any) -> str:
    """Validate an idea title and return it trimmed.

    Args:
        title: Raw title as received from the client

    Returns:
        The trimmed title

    Raises:
        ValidationError: If the title is missing, not a string, or blank
    """
    trimmed = _trimmed(title)
    if not trimmed:
        raise ValidationError("title", "Title is required")
    return trimmed


def normalize_description(description: Any) -> str:
    """Trim an optional description, defaulting to the empty string."""
    return _trimmed(description)


def validate_note_content(content: Any) -> str:
    """Validate note content and return it trimmed.

    Raises:
        ValidationError: If the content is missing, not a string, or blank
    """
    trimmed = _trimmed(content)
    if not trimmed:
        raise ValidationError("content", "Note content is required")
    return trimmed


def validate_upload_filename(filename: Optional[str]) -> str:
    """Validate the client-supplied name of an uploaded file.

    Raises:
        ValidationError: If no file name was supplied (no file uploaded)
    """
    if not filename:
        raise ValidationError("file", "No file uploaded")
    return filename
