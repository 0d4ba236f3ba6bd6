"""Pytest fixtures for Ideaboard tests.

This module provides fixtures for test configuration, database, blob store
and service setup.
"""

from __future__ import annotations

from io import BytesIO
from pathlib import Path
from typing import Generator

import pytest

from ideaboard.core.blob_store import BlobStore
from ideaboard.core.config import Config
from ideaboard.core.database import Database
from ideaboard.core.idea_service import IdeaService
from tests.helpers import ATTACHMENT_IDS, IDEA_IDS


@pytest.fixture
def test_config_dir(tmp_path: Path) -> Path:
    """Create temporary config (data) directory for tests.

    Args:
        tmp_path: pytest temporary directory fixture

    Returns:
        Path to temporary config directory.
    """
    config_dir = tmp_path / "ideaboard_test"
    config_dir.mkdir(parents=True, exist_ok=True)
    return config_dir


@pytest.fixture
def test_config(test_config_dir: Path) -> Config:
    """Create test configuration."""
    return Config(config_dir=test_config_dir)


@pytest.fixture
def test_db_path(test_config_dir: Path) -> Path:
    """Get path for test database.

    Matches the default database_file so the web app and CLI see the
    same data as the fixtures.
    """
    return test_config_dir / "ideas.db"


@pytest.fixture
def blob_store(test_config_dir: Path) -> BlobStore:
    """Create a blob store in the default uploads directory."""
    store = BlobStore(test_config_dir / "uploads")
    store.ensure_directory()
    return store


@pytest.fixture
def empty_db(test_db_path: Path) -> Generator[Database, None, None]:
    """Create empty test database.

    Yields:
        Empty Database instance.
    """
    db = Database(test_db_path)
    yield db
    db.close()


@pytest.fixture
def service(empty_db: Database, blob_store: BlobStore) -> IdeaService:
    """Create a service over an empty database."""
    return IdeaService(empty_db, blob_store)


@pytest.fixture
def populated_db(
    test_db_path: Path, blob_store: BlobStore
) -> Generator[Database, None, None]:
    """Create test database with sample data.

    Ideas, in creation order:
        dark_mode   "Add dark mode"       3 votes
        csv_export  "Export to CSV"       1 vote, 2 notes
        shortcuts   "Keyboard shortcuts"  1 vote
        offline     "Offline support"     0 votes, 1 attachment (spec.txt)

    Expected list order: dark_mode, shortcuts, csv_export, offline.

    Yields:
        Populated Database instance.
    """
    IDEA_IDS.clear()
    ATTACHMENT_IDS.clear()

    db = Database(test_db_path)
    svc = IdeaService(db, blob_store)

    ideas = [
        ("dark_mode", "Add dark mode", "Easier on the eyes at night", 3),
        ("csv_export", "Export to CSV", "", 1),
        ("shortcuts", "Keyboard shortcuts", "Vim-style navigation", 1),
        ("offline", "Offline support", "", 0),
    ]
    for key, title, description, votes in ideas:
        idea = svc.create_idea(title, description)
        IDEA_IDS[key] = idea["id"]
        for _ in range(votes):
            svc.vote_idea(idea["id"])

    svc.add_note(IDEA_IDS["csv_export"], "Should include notes too")
    svc.add_note(IDEA_IDS["csv_export"], "Excel compatibility matters")

    attachment = svc.add_attachment(
        IDEA_IDS["offline"], BytesIO(b"offline spec contents"), "spec.txt", "text/plain"
    )
    ATTACHMENT_IDS["spec"] = attachment["id"]

    yield db
    db.close()


@pytest.fixture
def populated_service(populated_db: Database, blob_store: BlobStore) -> IdeaService:
    """Create a service over the populated database."""
    return IdeaService(populated_db, blob_store)
