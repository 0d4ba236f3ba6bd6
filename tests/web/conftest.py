"""Pytest fixtures for web API tests.

Provides Flask test client and test database for web API testing.
"""

from __future__ import annotations

from pathlib import Path
from typing import Generator

import pytest
from flask import Flask
from flask.testing import FlaskClient

from ideaboard.core.database import Database
from ideaboard.web import create_app


@pytest.fixture
def web_app(test_config_dir: Path, populated_db: Database) -> Generator[Flask, None, None]:
    """Create Flask app for testing.

    Args:
        test_config_dir: Data directory shared with the populated database
        populated_db: Populated database fixture

    Yields:
        Flask application instance
    """
    app = create_app(config_dir=test_config_dir)
    app.config["TESTING"] = True
    yield app
    app.extensions["ideaboard"].db.close()


@pytest.fixture
def client(web_app: Flask) -> FlaskClient:
    """Create Flask test client.

    Args:
        web_app: Flask application

    Returns:
        Flask test client for making requests
    """
    return web_app.test_client()
