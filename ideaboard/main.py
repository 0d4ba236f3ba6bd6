#!/usr/bin/env python3
"""Ideaboard application entry point.

This module provides a unified entry point for both interfaces:
- Web: RESTful HTTP API plus the browser front end
- CLI: Command-line interface

Usage:
    python -m ideaboard.main                          # Start web server
    python -m ideaboard.main web [--port 8080]        # Start web server
    python -m ideaboard.main cli list-ideas           # Use CLI
    python -m ideaboard.main -d ./data cli vote <id>  # Use a custom data directory
"""

from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path
from typing import NoReturn

# Configure logging
logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s"
)
logger = logging.getLogger(__name__)


def create_parser() -> argparse.ArgumentParser:
    """Create the unified argument parser.

    Returns:
        Configured ArgumentParser instance
    """
    parser = argparse.ArgumentParser(
        description="Ideaboard - collect, vote on, and discuss ideas",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  python -m ideaboard.main web --port 8080           Start web server on port 8080
  python -m ideaboard.main cli list-ideas            List ideas via CLI
  python -m ideaboard.main cli new-idea "Dark mode"  Create an idea
  python -m ideaboard.main cli --format json show-idea <id>
""",
    )

    parser.add_argument(
        "-d", "--config-dir",
        type=Path,
        default=None,
        help="Data directory holding config.json, the database and uploads "
             "(default: $IDEABOARD_DATA_DIR or ~/.config/ideaboard/)"
    )

    subparsers = parser.add_subparsers(dest="interface", help="Interface to use")

    from ideaboard.cli import add_cli_subparser
    add_cli_subparser(subparsers)

    from ideaboard.web import add_web_subparser
    add_web_subparser(subparsers)

    return parser


def main() -> NoReturn:
    """Main entry point for Ideaboard.

    Parses arguments and dispatches to the appropriate interface.
    """
    parser = create_parser()
    args = parser.parse_args()

    # No interface given: serve the web app with default options
    if not args.interface:
        logger.info("No interface specified, starting web server")
        args = parser.parse_args([*sys.argv[1:], "web"])

    if args.interface == "cli":
        from ideaboard.cli import run as run_cli
        exit_code = run_cli(args.config_dir, args)
    elif args.interface == "web":
        from ideaboard.web import run as run_web
        exit_code = run_web(args.config_dir, args)
    else:
        parser.print_help()
        exit_code = 1

    sys.exit(exit_code)


if __name__ == "__main__":
    main()
