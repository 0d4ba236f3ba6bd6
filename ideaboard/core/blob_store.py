"""Attachment blob store for Ideaboard.

This module handles file operations for uploaded attachments:
- Writing uploaded bytes under a generated name
- Deleting stored files
- Getting file paths
"""

from __future__ import annotations

import os
import shutil
import uuid
from pathlib import Path
from typing import BinaryIO, Optional, Tuple

# Copy buffer for streaming uploads to disk
CHUNK_SIZE = 64 * 1024


class BlobStore:
    """Manages attachment files on disk.

    Files are stored as {directory}/{uuid}{extension}, where the extension
    is taken from the original filename. The original filename itself is
    never used as a path component.
    """

    def __init__(self, directory: Path | str) -> None:
        """Initialize the blob store.

        Args:
            directory: Path to the directory where attachment files are stored.
        """
        self.directory = Path(directory)

    def ensure_directory(self) -> None:
        """Create the blob directory if it doesn't exist."""
        self.directory.mkdir(parents=True, exist_ok=True)

    def generate_name(self, original_name: str) -> str:
        """Generate a collision-resistant storage name.

        Args:
            original_name: Filename as uploaded by the client.

        Returns:
            UUID hex string followed by the original extension (with dot),
            e.g. "3f2b...9a.pdf". No extension if the original has none.
        """
        # Only the final path component counts; clients may send "a/b.txt"
        base = original_name.replace("\\", "/").rsplit("/", 1)[-1]
        extension = os.path.splitext(base)[1]
        return f"{uuid.uuid4().hex}{extension}"

    def write(self, stream: BinaryIO, original_name: str) -> Tuple[str, int]:
        """Write a byte stream to a newly named file.

        Args:
            stream: Readable binary stream positioned at the start of the data.
            original_name: Filename as uploaded, used for its extension only.

        Returns:
            Tuple of (stored filename, number of bytes written).
        """
        self.ensure_directory()
        name = self.generate_name(original_name)
        dest = self.directory / name
        with open(dest, "xb") as f:
            try:
                shutil.copyfileobj(stream, f, CHUNK_SIZE)
            except BaseException:
                # Partial writes never stay behind
                f.close()
                dest.unlink(missing_ok=True)
                raise
        return name, dest.stat().st_size

    def delete(self, name: str) -> bool:
        """Delete a stored file.

        Args:
            name: Stored filename.

        Returns:
            True if the file was deleted, False if it didn't exist.
        """
        path = self.directory / name
        try:
            path.unlink()
        except FileNotFoundError:
            return False
        return True

    def get_file_path(self, name: str) -> Optional[Path]:
        """Get the path to a stored file if it exists.

        Args:
            name: Stored filename.

        Returns:
            Path to the file if it exists, None otherwise.
        """
        path = self.directory / name
        return path if path.is_file() else None

    def file_exists(self, name: str) -> bool:
        """Check if a stored file exists."""
        return (self.directory / name).is_file()
