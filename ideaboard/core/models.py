"""Data models for Ideaboard.

This module defines immutable dataclasses representing the core entities:
Idea, Note, and Attachment.

All IDs are UUID4 hex strings (32 characters, no hyphens). They are opaque:
no ordering semantics are implied.
"""

from __future__ import annotations

import sqlite3
from dataclasses import asdict, dataclass
from typing import Any, Dict


@dataclass(frozen=True)
class Idea:
    """Represents an idea in the system.

    Attributes:
        id: Unique identifier for the idea
        title: Trimmed, non-empty title
        description: Trimmed description ("" when none was given)
        votes: Vote count; starts at 0 and only ever increases
        created_at: When the idea was created
        updated_at: When the idea was created or last voted on
    """

    id: str
    title: str
    description: str
    votes: int
    created_at: str
    updated_at: str

    @classmethod
    def from_row(cls, row: sqlite3.Row) -> "Idea":
        return cls(
            id=row["id"],
            title=row["title"],
            description=row["description"] or "",
            votes=row["votes"],
            created_at=row["created_at"],
            updated_at=row["updated_at"],
        )

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)


@dataclass(frozen=True)
class IdeaSummary(Idea):
    """An idea augmented with counts of its notes and attachments."""

    note_count: int = 0
    attachment_count: int = 0

    @classmethod
    def from_row(cls, row: sqlite3.Row) -> "IdeaSummary":
        return cls(
            id=row["id"],
            title=row["title"],
            description=row["description"] or "",
            votes=row["votes"],
            created_at=row["created_at"],
            updated_at=row["updated_at"],
            note_count=row["note_count"],
            attachment_count=row["attachment_count"],
        )


@dataclass(frozen=True)
class Note:
    """Represents a note on an idea.

    Notes are immutable once created.

    Attributes:
        id: Unique identifier for the note
        idea_id: ID of the idea this note belongs to
        content: Trimmed, non-empty note text
        created_at: When the note was created
    """

    id: str
    idea_id: str
    content: str
    created_at: str

    @classmethod
    def from_row(cls, row: sqlite3.Row) -> "Note":
        return cls(
            id=row["id"],
            idea_id=row["idea_id"],
            content=row["content"],
            created_at=row["created_at"],
        )

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)


@dataclass(frozen=True)
class Attachment:
    """Represents a file attached to an idea.

    The bytes are stored in the blob store as `{uploads_directory}/{filename}`.
    The record and the file share that generated name.

    Attributes:
        id: Unique identifier for the attachment
        idea_id: ID of the idea this attachment belongs to
        filename: Generated storage name (UUID hex plus original extension)
        original_name: Filename as uploaded, used for display and download
        mimetype: MIME type as reported by the uploading client
        size: Size of the stored file in bytes
        created_at: When the attachment was uploaded
    """

    id: str
    idea_id: str
    filename: str
    original_name: str
    mimetype: str
    size: int
    created_at: str

    @classmethod
    def from_row(cls, row: sqlite3.Row) -> "Attachment":
        return cls(
            id=row["id"],
            idea_id=row["idea_id"],
            filename=row["filename"],
            original_name=row["original_name"],
            mimetype=row["mimetype"] or "",
            size=row["size"] or 0,
            created_at=row["created_at"],
        )

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)


# Fallback MIME type when the client does not report one
DEFAULT_MIMETYPE = "application/octet-stream"
