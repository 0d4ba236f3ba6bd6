#!/usr/bin/env python3
"""Web API for Ideaboard.

This module provides a RESTful HTTP API for ideas, votes, notes and
attachments, and serves the static front end at the root path.
Uses only core/ modules for data access.

Endpoints:
    GET    /api/ideas                      List ideas (best voted first)
    POST   /api/ideas                      Create an idea
    GET    /api/ideas/<id>                 Get an idea with notes and attachments
    DELETE /api/ideas/<id>                 Delete an idea
    POST   /api/ideas/<id>/vote            Add one vote to an idea
    POST   /api/ideas/<id>/notes           Add a note to an idea
    POST   /api/ideas/<id>/attachments     Upload an attachment (multipart field "file")
    GET    /api/attachments/<id>/download  Download an attachment
    GET    /api/health                     Health check

All endpoints except the download return JSON. Errors are returned as
{"error": "<message>"}. IDs are UUID4 hex strings (32 characters, no hyphens).

POST /api/ideas body:
    - title: Idea title (string, required, trimmed)
    - description: Idea description (string, optional, trimmed)

POST /api/ideas/<id>/notes body:
    - content: Note content (string, required, trimmed)

Request bodies larger than max_upload_size (10 MiB by default) are
rejected by werkzeug with 413 as soon as the body is read; that response
is werkzeug's own, not a JSON error body.
"""

from __future__ import annotations

import argparse
import functools
import logging
from pathlib import Path
from typing import Any, Callable, Dict, Optional

from flask import Flask, Response, current_app, jsonify, request, send_file
from flask_cors import CORS
from werkzeug.exceptions import HTTPException

from ideaboard.core.blob_store import BlobStore
from ideaboard.core.config import Config
from ideaboard.core.database import Database
from ideaboard.core.errors import NotFoundError, StoreError
from ideaboard.core.idea_service import IdeaService
from ideaboard.core.validation import ValidationError

logger = logging.getLogger(__name__)

STATIC_DIR = Path(__file__).parent / "static"


def get_service() -> IdeaService:
    """Get the IdeaService of the application handling the current request."""
    return current_app.extensions["ideaboard"]


def get_json_object() -> Dict[str, Any]:
    """Get the request body as a JSON object.

    Missing, invalid or non-object bodies (arrays, strings, numbers) yield
    an empty dict, so required fields are reported as missing.
    """
    data = request.get_json(silent=True)
    if not isinstance(data, dict):
        return {}
    return data


def api_endpoint(func: Callable) -> Callable:
    """Decorator for consistent API error handling.

    Catches ValidationError (400), NotFoundError (404), StoreError (500)
    and Exception (500) with proper JSON error responses and logging.
    HTTP errors raised by werkzeug, such as 413 for oversized uploads,
    pass through unchanged.
    """
    @functools.wraps(func)
    def wrapper(*args: Any, **kwargs: Any) -> Any:
        try:
            return func(*args, **kwargs)
        except ValidationError as e:
            logger.warning(f"Validation error in {func.__name__}: {e}")
            return jsonify({"error": e.message}), 400
        except NotFoundError as e:
            logger.warning(f"Not found in {func.__name__}: {e.message}")
            return jsonify({"error": e.message}), 404
        except StoreError as e:
            logger.error(f"Store error in {func.__name__}: {e.message}")
            return jsonify({"error": e.message}), 500
        except HTTPException:
            raise
        except Exception as e:
            logger.exception(f"Error in {func.__name__}: {e}")
            return jsonify({"error": "Something went wrong!"}), 500
    return wrapper


def create_app(config_dir: Optional[Path] = None) -> Flask:
    """Create and configure Flask application.

    Args:
        config_dir: Custom configuration directory (default: None)

    Returns:
        Configured Flask application
    """
    app = Flask(__name__, static_folder=str(STATIC_DIR), static_url_path="/static")
    CORS(app, send_wildcard=True)  # Enable CORS for all routes and origins

    # Initialize config, database and blob store
    config = Config(config_dir=config_dir)
    app.config["MAX_CONTENT_LENGTH"] = config.get_max_upload_size()

    db_path = config.get_database_path()
    blob_store = BlobStore(config.get_uploads_directory())
    blob_store.ensure_directory()

    app.extensions["ideaboard"] = IdeaService(Database(db_path), blob_store)

    logger.info(f"Web API initialized with database: {db_path}")
    logger.info(f"Attachments stored in: {blob_store.directory}")

    # Error handlers
    @app.errorhandler(404)
    def not_found(error: Any) -> tuple[Response, int]:
        """Handle 404 errors."""
        return jsonify({"error": "Not found"}), 404

    @app.errorhandler(500)
    def internal_error(error: Any) -> tuple[Response, int]:
        """Handle 500 errors."""
        logger.error(f"Internal error: {error}")
        return jsonify({"error": "Something went wrong!"}), 500

    # Routes
    @app.route("/", methods=["GET"])
    def index() -> Response:
        """Serve the front end."""
        return app.send_static_file("index.html")

    @app.route('/<any("app.js", "styles.css"):filename>', methods=["GET"])
    def asset(filename: str) -> Response:
        """Serve a front-end asset referenced by index.html."""
        return app.send_static_file(filename)

    @app.route("/api/ideas", methods=["GET"])
    @api_endpoint
    def list_ideas() -> Response:
        """Get all ideas with note and attachment counts."""
        return jsonify(get_service().list_ideas())

    @app.route("/api/ideas", methods=["POST"])
    @api_endpoint
    def create_idea() -> tuple[Response, int]:
        """Create a new idea."""
        data = get_json_object()
        idea = get_service().create_idea(data.get("title"), data.get("description"))
        return jsonify(idea), 201

    @app.route("/api/ideas/<idea_id>", methods=["GET"])
    @api_endpoint
    def get_idea(idea_id: str) -> tuple[Response, int]:
        """Get an idea with its notes and attachments."""
        return jsonify(get_service().get_idea(idea_id)), 200

    @app.route("/api/ideas/<idea_id>", methods=["DELETE"])
    @api_endpoint
    def delete_idea(idea_id: str) -> tuple[Response, int]:
        """Delete an idea with its notes and attachments."""
        get_service().delete_idea(idea_id)
        return jsonify({"message": f"Idea {idea_id} deleted"}), 200

    @app.route("/api/ideas/<idea_id>/vote", methods=["POST"])
    @api_endpoint
    def vote_idea(idea_id: str) -> tuple[Response, int]:
        """Add one vote to an idea."""
        return jsonify(get_service().vote_idea(idea_id)), 200

    @app.route("/api/ideas/<idea_id>/notes", methods=["POST"])
    @api_endpoint
    def add_note(idea_id: str) -> tuple[Response, int]:
        """Add a note to an idea."""
        data = get_json_object()
        note = get_service().add_note(idea_id, data.get("content"))
        return jsonify(note), 201

    @app.route("/api/ideas/<idea_id>/attachments", methods=["POST"])
    @api_endpoint
    def upload_attachment(idea_id: str) -> tuple[Response, int]:
        """Upload a file and attach it to an idea."""
        upload = request.files.get("file")
        if upload is None or not upload.filename:
            return jsonify({"error": "No file uploaded"}), 400

        attachment = get_service().add_attachment(
            idea_id, upload.stream, upload.filename, upload.mimetype
        )
        return jsonify(attachment), 201

    @app.route("/api/attachments/<attachment_id>/download", methods=["GET"])
    @api_endpoint
    def download_attachment(attachment_id: str) -> Response:
        """Stream an attachment under its original filename."""
        download = get_service().get_attachment_for_download(attachment_id)
        return send_file(
            download.path,
            mimetype=download.mimetype,
            as_attachment=True,
            download_name=download.original_name,
        )

    @app.route("/api/health", methods=["GET"])
    def health_check() -> tuple[Response, int]:
        """Health check endpoint.

        Returns:
            JSON response indicating service health
        """
        return jsonify({"status": "ok"}), 200

    return app


def add_web_subparser(subparsers: argparse._SubParsersAction[argparse.ArgumentParser]) -> None:
    """Add web subparser and its arguments.

    Args:
        subparsers: Parent subparsers object to add web parser to
    """
    web_parser = subparsers.add_parser(
        "web",
        help="Start web server",
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )

    web_parser.add_argument(
        "--host",
        type=str,
        default=None,
        help="Host to bind to (default: web_host from config, 127.0.0.1)"
    )

    web_parser.add_argument(
        "--port",
        type=int,
        default=None,
        help="Port to bind to (default: $PORT, then web_port from config, 3000)"
    )

    web_parser.add_argument(
        "--debug",
        action="store_true",
        help="Enable debug mode"
    )


def run(config_dir: Optional[Path], args: argparse.Namespace) -> int:
    """Run web server with given arguments.

    Args:
        config_dir: Custom configuration directory or None for default
        args: Parsed command-line arguments (should have host, port, debug attributes)

    Returns:
        Exit code (0 for success)
    """
    logger.info("Starting Ideaboard web server")
    if config_dir:
        logger.info(f"Using custom config directory: {config_dir}")

    config = Config(config_dir=config_dir)
    app = create_app(config_dir=config_dir)

    app.run(
        host=args.host or config.get("web_host"),
        port=args.port or config.get_web_port(),
        debug=args.debug,
    )

    return 0
