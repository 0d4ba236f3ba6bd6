"""Idea service for Ideaboard.

Combines the database and the blob store into the operations the web API
and CLI expose. Validation happens here, before anything is persisted.

CRITICAL: This module must have NO Flask dependencies.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Any, BinaryIO, Dict, List, Optional

from .blob_store import BlobStore
from .database import Database
from .errors import NotFoundError
from .models import DEFAULT_MIMETYPE
from .validation import (
    normalize_description,
    validate_idea_title,
    validate_note_content,
    validate_upload_filename,
)

logger = logging.getLogger(__name__)

__all__ = ["AttachmentDownload", "IdeaService"]


@dataclass(frozen=True)
class AttachmentDownload:
    """Everything needed to stream a stored attachment back to a client."""

    filename: str
    original_name: str
    mimetype: str
    path: Path

    def open(self) -> BinaryIO:
        """Open the stored file for binary reading."""
        return open(self.path, "rb")


class IdeaService:
    """Data access operations for ideas, notes and attachments."""

    def __init__(self, db: Database, blob_store: BlobStore) -> None:
        self.db = db
        self.blob_store = blob_store

    def list_ideas(self) -> List[Dict[str, Any]]:
        """List every idea with note_count and attachment_count, best voted first."""
        return self.db.get_all_ideas()

    def get_idea(self, idea_id: str) -> Dict[str, Any]:
        """Get an idea with its notes and attachments (each newest first).

        Raises:
            NotFoundError: If no idea has this ID
        """
        idea = self.db.get_idea(idea_id)
        if idea is None:
            raise NotFoundError("Idea not found")
        idea["notes"] = self.db.get_idea_notes(idea_id)
        idea["attachments"] = self.db.get_idea_attachments(idea_id)
        return idea

    def create_idea(self, title: Any, description: Any = None) -> Dict[str, Any]:
        """Create an idea with zero votes.

        Raises:
            ValidationError: If the title is missing or blank
        """
        clean_title = validate_idea_title(title)
        idea = self.db.create_idea(clean_title, normalize_description(description))
        logger.info(f"Created idea {idea['id']}")
        return idea

    def vote_idea(self, idea_id: str) -> Dict[str, Any]:
        """Add exactly one vote to an idea and return it.

        Raises:
            NotFoundError: If no idea has this ID
        """
        idea = self.db.vote_idea(idea_id)
        logger.info(f"Vote recorded for idea {idea_id} (now {idea['votes']})")
        return idea

    def add_note(self, idea_id: str, content: Any) -> Dict[str, Any]:
        """Add a note to an idea.

        The parent idea is not looked up first; a missing idea is rejected
        by the store's foreign key and surfaces as StoreError.

        Raises:
            ValidationError: If the content is missing or blank
            StoreError: If the note could not be stored
        """
        clean_content = validate_note_content(content)
        note = self.db.create_note(idea_id, clean_content)
        logger.info(f"Added note {note['id']} to idea {idea_id}")
        return note

    def add_attachment(
        self,
        idea_id: str,
        stream: BinaryIO,
        original_name: Optional[str],
        mimetype: Optional[str] = None,
        size: Optional[int] = None,
    ) -> Dict[str, Any]:
        """Store an uploaded file and record it against an idea.

        Args:
            idea_id: ID of the idea to attach to
            stream: Readable binary stream of the file contents
            original_name: Filename as uploaded
            mimetype: MIME type reported by the client
            size: Size reported by the caller; the written byte count is
                used when not given

        Raises:
            ValidationError: If no file name was supplied
            StoreError: If the record could not be stored; the written
                file has been deleted by then
        """
        original_name = validate_upload_filename(original_name)
        stored_name, written = self.blob_store.write(stream, original_name)
        try:
            attachment = self.db.create_attachment(
                idea_id,
                stored_name,
                original_name,
                mimetype or DEFAULT_MIMETYPE,
                size if size is not None else written,
            )
        except Exception:
            logger.error(f"Removing orphaned upload {stored_name} for idea {idea_id}")
            self.blob_store.delete(stored_name)
            raise
        logger.info(f"Stored attachment {attachment['id']} ({original_name}) as {stored_name}")
        return attachment

    def get_attachment_for_download(self, attachment_id: str) -> AttachmentDownload:
        """Resolve an attachment to its file on disk.

        Raises:
            NotFoundError: "Attachment not found" if there is no record,
                "File not found" if the record's file is missing
        """
        attachment = self.db.get_attachment(attachment_id)
        if attachment is None:
            raise NotFoundError("Attachment not found")

        path = self.blob_store.get_file_path(attachment["filename"])
        if path is None:
            logger.warning(
                f"Attachment {attachment_id} has no file {attachment['filename']} on disk"
            )
            raise NotFoundError("File not found")

        return AttachmentDownload(
            filename=attachment["filename"],
            original_name=attachment["original_name"],
            mimetype=attachment["mimetype"] or DEFAULT_MIMETYPE,
            path=path,
        )

    def delete_idea(self, idea_id: str) -> None:
        """Delete an idea together with its notes, attachments and files.

        Raises:
            NotFoundError: If no idea has this ID
        """
        filenames = self.db.delete_idea(idea_id)
        if filenames is None:
            raise NotFoundError("Idea not found")
        for name in filenames:
            self.blob_store.delete(name)
        logger.info(f"Deleted idea {idea_id} and {len(filenames)} attachment file(s)")
