"""Database operations for Ideaboard.

This module provides all data access functionality using SQLite.
All methods return JSON-serializable types (dicts, lists, primitives)
so the web API and CLI can emit them directly.

CRITICAL: This module must have NO Flask dependencies.
"""

from __future__ import annotations

import logging
import sqlite3
import threading
import uuid
from contextlib import contextmanager
from pathlib import Path
from typing import Any, Dict, Iterator, List, Optional, Union

from .errors import NotFoundError, StoreError
from .models import Attachment, Idea, IdeaSummary, Note
from .timestamp_utils import current_timestamp

logger = logging.getLogger(__name__)

__all__ = ["Database", "SCHEMA"]

SCHEMA = """
CREATE TABLE IF NOT EXISTS ideas (
    id TEXT PRIMARY KEY,
    title TEXT NOT NULL,
    description TEXT NOT NULL DEFAULT '',
    votes INTEGER NOT NULL DEFAULT 0 CHECK (votes >= 0),
    created_at TEXT NOT NULL,
    updated_at TEXT NOT NULL
);

CREATE TABLE IF NOT EXISTS notes (
    id TEXT PRIMARY KEY,
    idea_id TEXT NOT NULL,
    content TEXT NOT NULL,
    created_at TEXT NOT NULL,
    FOREIGN KEY (idea_id) REFERENCES ideas(id) ON DELETE CASCADE
);

CREATE TABLE IF NOT EXISTS attachments (
    id TEXT PRIMARY KEY,
    idea_id TEXT NOT NULL,
    filename TEXT NOT NULL UNIQUE,
    original_name TEXT NOT NULL,
    mimetype TEXT,
    size INTEGER,
    created_at TEXT NOT NULL,
    FOREIGN KEY (idea_id) REFERENCES ideas(id) ON DELETE CASCADE
);

CREATE INDEX IF NOT EXISTS idx_ideas_ranking ON ideas(votes DESC, created_at DESC);
CREATE INDEX IF NOT EXISTS idx_notes_idea_id ON notes(idea_id, created_at);
CREATE INDEX IF NOT EXISTS idx_attachments_idea_id ON attachments(idea_id, created_at);
"""


def new_id() -> str:
    """Generate a new opaque identifier (UUID4 hex, 32 characters)."""
    return uuid.uuid4().hex


class Database:
    """SQLite-backed store for ideas, notes and attachments.

    One connection is shared by every request thread. Statements are
    serialized through a lock; each public method runs in its own
    transaction.
    """

    def __init__(self, db_path: Union[Path, str]) -> None:
        """Initialize database connection and create the schema.

        Args:
            db_path: Path to the SQLite database file, or ':memory:' for in-memory
        """
        path_str = str(db_path) if isinstance(db_path, Path) else db_path
        self.db_path = path_str
        self._lock = threading.RLock()
        try:
            self.conn = sqlite3.connect(path_str, check_same_thread=False)
            self.conn.row_factory = sqlite3.Row
            self.conn.execute("PRAGMA foreign_keys = ON")
            with self.conn:
                self.conn.executescript(SCHEMA)
        except sqlite3.Error as e:
            raise StoreError(str(e)) from e
        logger.info(f"Opened database at {path_str}")

    def close(self) -> None:
        """Close the database connection."""
        with self._lock:
            self.conn.close()

    @contextmanager
    def _transaction(self) -> Iterator[sqlite3.Connection]:
        """Run a block in a locked transaction, mapping driver errors to StoreError."""
        with self._lock:
            try:
                with self.conn:
                    yield self.conn
            except sqlite3.Error as e:
                logger.error(f"Database error: {e}")
                raise StoreError(str(e)) from e

    # ===== Ideas =====

    def get_all_ideas(self) -> List[Dict[str, Any]]:
        """Get all ideas with note and attachment counts.

        Ordered by votes (highest first), then creation time (newest first).
        Counts use correlated subqueries so the two joins cannot multiply.
        """
        with self._transaction() as conn:
            rows = conn.execute(
                """
                SELECT i.*,
                       (SELECT COUNT(*) FROM notes n WHERE n.idea_id = i.id) AS note_count,
                       (SELECT COUNT(*) FROM attachments a WHERE a.idea_id = i.id) AS attachment_count
                FROM ideas i
                ORDER BY i.votes DESC, i.created_at DESC, i.rowid DESC
                """
            ).fetchall()
        return [IdeaSummary.from_row(row).to_dict() for row in rows]

    def get_idea(self, idea_id: str) -> Optional[Dict[str, Any]]:
        """Get a specific idea by ID (without notes or attachments)."""
        with self._transaction() as conn:
            row = conn.execute("SELECT * FROM ideas WHERE id = ?", (idea_id,)).fetchone()
        return Idea.from_row(row).to_dict() if row else None

    def create_idea(self, title: str, description: str = "") -> Dict[str, Any]:
        """Insert a new idea with zero votes.

        Args:
            title: Already validated and trimmed title
            description: Already trimmed description

        Returns:
            The persisted idea
        """
        idea_id = new_id()
        now = current_timestamp()
        with self._transaction() as conn:
            conn.execute(
                "INSERT INTO ideas (id, title, description, votes, created_at, updated_at) "
                "VALUES (?, ?, ?, 0, ?, ?)",
                (idea_id, title, description, now, now),
            )
            row = conn.execute("SELECT * FROM ideas WHERE id = ?", (idea_id,)).fetchone()
        return Idea.from_row(row).to_dict()

    def vote_idea(self, idea_id: str) -> Dict[str, Any]:
        """Add one vote to an idea.

        The increment is a single UPDATE statement so concurrent votes
        are never lost.

        Returns:
            The updated idea

        Raises:
            NotFoundError: If no idea has this ID
        """
        with self._transaction() as conn:
            cursor = conn.execute(
                "UPDATE ideas SET votes = votes + 1, updated_at = ? WHERE id = ?",
                (current_timestamp(), idea_id),
            )
            if cursor.rowcount == 0:
                raise NotFoundError("Idea not found")
            row = conn.execute("SELECT * FROM ideas WHERE id = ?", (idea_id,)).fetchone()
        return Idea.from_row(row).to_dict()

    def delete_idea(self, idea_id: str) -> Optional[List[str]]:
        """Delete an idea; the schema cascades to its notes and attachments.

        Returns:
            Stored filenames of the attachments that were removed, or None
            if no idea has this ID
        """
        with self._transaction() as conn:
            filenames = [
                row["filename"]
                for row in conn.execute(
                    "SELECT filename FROM attachments WHERE idea_id = ?", (idea_id,)
                )
            ]
            cursor = conn.execute("DELETE FROM ideas WHERE id = ?", (idea_id,))
            if cursor.rowcount == 0:
                return None
        return filenames

    # ===== Notes =====

    def get_idea_notes(self, idea_id: str) -> List[Dict[str, Any]]:
        """Get all notes for an idea, newest first."""
        with self._transaction() as conn:
            rows = conn.execute(
                "SELECT * FROM notes WHERE idea_id = ? ORDER BY created_at DESC, rowid DESC",
                (idea_id,),
            ).fetchall()
        return [Note.from_row(row).to_dict() for row in rows]

    def create_note(self, idea_id: str, content: str) -> Dict[str, Any]:
        """Insert a note for an idea.

        Raises:
            StoreError: If the idea does not exist (foreign key violation)
        """
        note_id = new_id()
        with self._transaction() as conn:
            conn.execute(
                "INSERT INTO notes (id, idea_id, content, created_at) VALUES (?, ?, ?, ?)",
                (note_id, idea_id, content, current_timestamp()),
            )
            row = conn.execute("SELECT * FROM notes WHERE id = ?", (note_id,)).fetchone()
        return Note.from_row(row).to_dict()

    # ===== Attachments =====

    def get_idea_attachments(self, idea_id: str) -> List[Dict[str, Any]]:
        """Get all attachments for an idea, newest first."""
        with self._transaction() as conn:
            rows = conn.execute(
                "SELECT * FROM attachments WHERE idea_id = ? ORDER BY created_at DESC, rowid DESC",
                (idea_id,),
            ).fetchall()
        return [Attachment.from_row(row).to_dict() for row in rows]

    def get_attachment(self, attachment_id: str) -> Optional[Dict[str, Any]]:
        """Get a specific attachment record by ID."""
        with self._transaction() as conn:
            row = conn.execute(
                "SELECT * FROM attachments WHERE id = ?", (attachment_id,)
            ).fetchone()
        return Attachment.from_row(row).to_dict() if row else None

    def create_attachment(
        self,
        idea_id: str,
        filename: str,
        original_name: str,
        mimetype: str,
        size: int,
    ) -> Dict[str, Any]:
        """Insert an attachment record pointing at a stored file.

        Raises:
            StoreError: If the idea does not exist (foreign key violation)
        """
        attachment_id = new_id()
        with self._transaction() as conn:
            conn.execute(
                "INSERT INTO attachments "
                "(id, idea_id, filename, original_name, mimetype, size, created_at) "
                "VALUES (?, ?, ?, ?, ?, ?, ?)",
                (attachment_id, idea_id, filename, original_name, mimetype, size,
                 current_timestamp()),
            )
            row = conn.execute(
                "SELECT * FROM attachments WHERE id = ?", (attachment_id,)
            ).fetchone()
        return Attachment.from_row(row).to_dict()
