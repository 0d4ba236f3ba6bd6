"""Unit tests for BlobStore.

Tests file operations for attachments including:
- Generating storage names
- Writing streams to disk
- Deleting files
- Getting file paths
"""

from __future__ import annotations

from io import BytesIO
from pathlib import Path

import pytest

from ideaboard.core.blob_store import BlobStore


@pytest.mark.unit
class TestBlobStoreInit:
    """Test BlobStore initialization."""

    def test_initializes_with_directory(self, tmp_path: Path) -> None:
        store = BlobStore(tmp_path / "uploads")
        assert store.directory == tmp_path / "uploads"

    def test_initializes_with_string_path(self, tmp_path: Path) -> None:
        store = BlobStore(str(tmp_path / "uploads"))
        assert store.directory == tmp_path / "uploads"

    def test_ensure_directory(self, tmp_path: Path) -> None:
        store = BlobStore(tmp_path / "a" / "b" / "uploads")
        store.ensure_directory()
        assert store.directory.is_dir()


@pytest.mark.unit
class TestGenerateName:
    """Test generate_name method."""

    def test_preserves_extension(self, tmp_path: Path) -> None:
        name = BlobStore(tmp_path).generate_name("report.final.PDF")
        assert name.endswith(".PDF")
        assert len(name) == 32 + len(".PDF")

    def test_no_extension(self, tmp_path: Path) -> None:
        name = BlobStore(tmp_path).generate_name("Makefile")
        assert len(name) == 32
        assert "." not in name

    def test_dotfile_has_no_extension(self, tmp_path: Path) -> None:
        assert len(BlobStore(tmp_path).generate_name(".bashrc")) == 32

    def test_strips_client_directories(self, tmp_path: Path) -> None:
        """Directory parts of the uploaded name never reach the stored name."""
        store = BlobStore(tmp_path)
        for original in ("../../etc/passwd.txt", "C:\\Users\\me\\notes.txt", "a/b.dir/file"):
            name = store.generate_name(original)
            assert "/" not in name
            assert "\\" not in name
            assert ".." not in name

    def test_names_are_unique(self, tmp_path: Path) -> None:
        store = BlobStore(tmp_path)
        names = {store.generate_name("same.txt") for _ in range(1000)}
        assert len(names) == 1000


@pytest.mark.unit
class TestWrite:
    """Test write method."""

    def test_writes_bytes(self, tmp_path: Path) -> None:
        store = BlobStore(tmp_path / "uploads")
        name, size = store.write(BytesIO(b"Test file content"), "test-file.txt")

        assert name.endswith(".txt")
        assert name != "test-file.txt"
        assert size == len(b"Test file content")
        assert (tmp_path / "uploads" / name).read_bytes() == b"Test file content"

    def test_creates_directory_if_not_exists(self, tmp_path: Path) -> None:
        store = BlobStore(tmp_path / "nonexistent" / "uploads")
        name, _ = store.write(BytesIO(b"x"), "x.bin")
        assert store.file_exists(name)

    def test_empty_file(self, tmp_path: Path) -> None:
        store = BlobStore(tmp_path)
        name, size = store.write(BytesIO(b""), "empty.txt")
        assert size == 0
        assert store.file_exists(name)

    def test_large_stream_is_copied_completely(self, tmp_path: Path) -> None:
        data = bytes(range(256)) * 4096  # 1 MiB, spans many chunks
        store = BlobStore(tmp_path)
        name, size = store.write(BytesIO(data), "blob.bin")
        assert size == len(data)
        assert (tmp_path / name).read_bytes() == data


@pytest.mark.unit
class TestDeleteAndLookup:
    """Test delete, get_file_path and file_exists."""

    def test_delete_existing(self, tmp_path: Path) -> None:
        store = BlobStore(tmp_path)
        name, _ = store.write(BytesIO(b"data"), "a.txt")

        assert store.delete(name) is True
        assert not store.file_exists(name)

    def test_delete_missing_returns_false(self, tmp_path: Path) -> None:
        assert BlobStore(tmp_path).delete("missing.txt") is False

    def test_get_file_path(self, tmp_path: Path) -> None:
        store = BlobStore(tmp_path)
        name, _ = store.write(BytesIO(b"data"), "a.txt")
        assert store.get_file_path(name) == tmp_path / name

    def test_get_file_path_missing(self, tmp_path: Path) -> None:
        assert BlobStore(tmp_path).get_file_path("missing.txt") is None
