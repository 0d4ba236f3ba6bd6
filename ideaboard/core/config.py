"""Configuration management for Ideaboard.

This module handles loading and saving application configuration to/from
a JSON file. The config directory doubles as the data directory holding
the database and the uploads directory. It can be customized via CLI
argument or the IDEABOARD_DATA_DIR (or DATA_DIR) environment variable.

CRITICAL: This module must have NO Flask dependencies.
"""

from __future__ import annotations

import json
import logging
import os
from pathlib import Path
from typing import Any, Dict, Optional

logger = logging.getLogger(__name__)

__all__ = [
    "Config",
    "ConfigError",
    "DATA_DIR_ENV",
    "DEFAULT_MAX_UPLOAD_SIZE",
    "LEGACY_DATA_DIR_ENV",
    "PORT_ENV",
]

DATA_DIR_ENV = "IDEABOARD_DATA_DIR"
# Names understood by existing deployments
LEGACY_DATA_DIR_ENV = "DATA_DIR"
PORT_ENV = "PORT"
DEFAULT_MAX_UPLOAD_SIZE = 10 * 1024 * 1024  # 10 MiB
DEFAULT_WEB_HOST = "127.0.0.1"
DEFAULT_WEB_PORT = 3000

KNOWN_KEYS = frozenset([
    "database_file",
    "uploads_directory",
    "max_upload_size",
    "web_host",
    "web_port",
])


class ConfigError(KeyError):
    """Raised when setting a key the configuration does not know about."""


class Config:
    """Manages application configuration stored in JSON format.

    Attributes:
        config_dir: Path to the configuration (and data) directory
        config_file: Path to config.json inside config_dir
    """

    def __init__(self, config_dir: Optional[Path] = None) -> None:
        """Initialize configuration manager.

        Args:
            config_dir: Custom config directory path. If None, uses
                $IDEABOARD_DATA_DIR, then $DATA_DIR, then ~/.config/ideaboard/
        """
        if config_dir is None:
            env_dir = os.environ.get(DATA_DIR_ENV) or os.environ.get(LEGACY_DATA_DIR_ENV)
            config_dir = Path(env_dir) if env_dir else Path.home() / ".config" / "ideaboard"
        self.config_dir = Path(config_dir)
        self.config_dir.mkdir(parents=True, exist_ok=True)
        self.config_file = self.config_dir / "config.json"
        self.config_data = self.load_config()

    def _defaults(self) -> Dict[str, Any]:
        return {
            "database_file": str(self.config_dir / "ideas.db"),
            "uploads_directory": str(self.config_dir / "uploads"),
            "max_upload_size": DEFAULT_MAX_UPLOAD_SIZE,
            "web_host": DEFAULT_WEB_HOST,
            "web_port": DEFAULT_WEB_PORT,
        }

    def load_config(self) -> Dict[str, Any]:
        """Load configuration from file, creating it with defaults if missing.

        Unreadable or invalid JSON falls back to the defaults; the file is
        left untouched in that case.

        Returns:
            Configuration dict with every known key present
        """
        config = self._defaults()
        if not self.config_file.exists():
            self.save_config(config)
            return config

        try:
            with open(self.config_file, "r", encoding="utf-8") as f:
                loaded = json.load(f)
        except (OSError, json.JSONDecodeError) as e:
            logger.warning(f"Could not read {self.config_file}, using defaults: {e}")
            return config

        if not isinstance(loaded, dict):
            logger.warning(f"Ignoring {self.config_file}: top level is not an object")
            return config

        for key, value in loaded.items():
            if key in KNOWN_KEYS and value is not None:
                config[key] = value
        return config

    def save_config(self, config: Dict[str, Any]) -> None:
        """Write configuration to config.json."""
        with open(self.config_file, "w", encoding="utf-8") as f:
            json.dump(config, f, indent=2)

    def get(self, key: str, default: Any = None) -> Any:
        """Get a configuration value."""
        result = self.config_data.get(key)
        return result if result is not None else default

    def set(self, key: str, value: Any) -> None:
        """Set a configuration value and save to file.

        Raises:
            ConfigError: If key is not a known configuration key
        """
        if key not in KNOWN_KEYS:
            raise ConfigError(f"Unknown configuration key: {key}")
        self.config_data[key] = value
        self.save_config(self.config_data)

    def get_config_dir(self) -> Path:
        """Get the configuration directory path."""
        return self.config_dir

    def get_database_path(self) -> Path:
        """Get the SQLite database path, creating its parent directory."""
        db_path = Path(self.get("database_file"))
        db_path.parent.mkdir(parents=True, exist_ok=True)
        return db_path

    def get_uploads_directory(self) -> Path:
        """Get the attachment blob directory path."""
        return Path(self.get("uploads_directory"))

    def get_max_upload_size(self) -> int:
        """Get the maximum accepted request size in bytes."""
        return int(self.get("max_upload_size", DEFAULT_MAX_UPLOAD_SIZE))

    def get_web_port(self) -> int:
        """Get the web server port.

        The PORT environment variable, when set, overrides web_port.
        """
        env_port = os.environ.get(PORT_ENV)
        if env_port:
            return int(env_port)
        return int(self.get("web_port", DEFAULT_WEB_PORT))
