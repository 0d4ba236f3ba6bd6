"""Test helper functions for Ideaboard tests.

The populated_db fixture registers the IDs it creates here so tests can
look them up by key.
"""

from __future__ import annotations

import subprocess
import sys
from pathlib import Path
from typing import Dict, Optional

# Valid-looking ID that never exists in any fixture database
NONEXISTENT_ID = "00000000000040008000000000009999"

IDEA_IDS: Dict[str, str] = {}
ATTACHMENT_IDS: Dict[str, str] = {}


def get_idea_id(key: str) -> str:
    """Get idea ID by key name."""
    idea_id = IDEA_IDS.get(key)
    if idea_id:
        return idea_id
    raise KeyError(f"Idea key '{key}' not found. Make sure populated_db fixture is used.")


def get_attachment_id(key: str) -> str:
    """Get attachment ID by key name."""
    attachment_id = ATTACHMENT_IDS.get(key)
    if attachment_id:
        return attachment_id
    raise KeyError(f"Attachment key '{key}' not found. Make sure populated_db fixture is used.")


PROJECT_ROOT = Path(__file__).resolve().parent.parent


def run_cli(
    data_dir: Path, *args: str, stdin: Optional[str] = None
) -> subprocess.CompletedProcess:
    """Run the ideaboard CLI against a data directory in a subprocess.

    Args:
        data_dir: Data directory passed via -d
        *args: Arguments after "cli" (e.g. "--format", "json", "list-ideas")
        stdin: Text to feed on standard input

    Returns:
        Completed process with text stdout and stderr
    """
    return subprocess.run(
        [sys.executable, "-m", "ideaboard.main", "-d", str(data_dir), "cli", *args],
        input=stdin,
        capture_output=True,
        text=True,
        cwd=PROJECT_ROOT,
    )
