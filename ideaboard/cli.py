#!/usr/bin/env python3
"""Command-line interface for Ideaboard.

This module provides CLI commands for working with ideas directly against
the data directory, without going through the web server.

Commands:
    list-ideas                      List all ideas, best voted first
    show-idea <id>                  Show an idea with its notes and attachments
    new-idea <title> [-m DESC]      Create a new idea
    vote <id>                       Add one vote to an idea
    add-note <id> [content]         Add a note to an idea
    attach <id> <path>              Attach a file to an idea
    delete-idea <id>                Delete an idea with its notes and attachments
"""

from __future__ import annotations

import argparse
import json
import mimetypes
import sys
from pathlib import Path
from typing import Any, Dict, Optional

from ideaboard.core.blob_store import BlobStore
from ideaboard.core.config import Config
from ideaboard.core.database import Database
from ideaboard.core.errors import NotFoundError, StoreError
from ideaboard.core.idea_service import IdeaService
from ideaboard.core.timestamp_utils import format_timestamp
from ideaboard.core.validation import ValidationError


def format_size(size: int) -> str:
    """Format a byte count for display, e.g. 1536 -> "1.5 KB"."""
    if size < 1024:
        return f"{size} Bytes"
    value = size / 1024
    unit = "KB"
    for next_unit in ("MB", "GB"):
        if value < 1024:
            break
        value /= 1024
        unit = next_unit
    return f"{round(value, 2):g} {unit}"


def format_idea(idea: Dict[str, Any]) -> str:
    """Format a single idea with its notes and attachments for display.

    Args:
        idea: Idea dictionary, optionally with notes and attachments

    Returns:
        Formatted multi-line string
    """
    lines = [
        f"ID: {idea['id']}",
        f"Title: {idea['title']}",
        f"Votes: {idea['votes']}",
        f"Created: {format_timestamp(idea['created_at'])}",
    ]
    if idea.get("description"):
        lines.append(f"\n{idea['description']}")

    notes = idea.get("notes", [])
    lines.append(f"\nNotes ({len(notes)}):")
    for note in notes:
        lines.append(f"  [{format_timestamp(note['created_at'])}] {note['content']}")

    attachments = idea.get("attachments", [])
    lines.append(f"\nAttachments ({len(attachments)}):")
    for att in attachments:
        lines.append(
            f"  {att['id']}  {att['original_name']} ({format_size(att['size'])}, {att['mimetype']})"
        )
    return "\n".join(lines)


def print_json(data: Any) -> None:
    print(json.dumps(data, indent=2, ensure_ascii=False))


def cmd_list_ideas(service: IdeaService, args: argparse.Namespace) -> int:
    """List all ideas.

    Args:
        service: IdeaService instance
        args: Parsed command-line arguments

    Returns:
        Exit code (0 for success)
    """
    ideas = service.list_ideas()

    if args.format == "json":
        print_json(ideas)
        return 0

    if not ideas:
        print("No ideas found.")
        return 0

    for i, idea in enumerate(ideas):
        if i > 0:
            print("\n" + "=" * 60 + "\n")
        print(f"ID: {idea['id']} | Votes: {idea['votes']} | Created: {format_timestamp(idea['created_at'])}")
        print(idea["title"])
        print(f"Notes: {idea['note_count']} | Attachments: {idea['attachment_count']}")

    return 0


def cmd_show_idea(service: IdeaService, args: argparse.Namespace) -> int:
    """Show an idea with its notes and attachments."""
    idea = service.get_idea(args.idea_id)
    if args.format == "json":
        print_json(idea)
    else:
        print(format_idea(idea))
    return 0


def cmd_new_idea(service: IdeaService, args: argparse.Namespace) -> int:
    """Create a new idea."""
    idea = service.create_idea(args.title, args.description)
    if args.format == "json":
        print_json(idea)
    else:
        print(f"Created idea {idea['id']}")
    return 0


def cmd_vote(service: IdeaService, args: argparse.Namespace) -> int:
    """Add one vote to an idea."""
    idea = service.vote_idea(args.idea_id)
    if args.format == "json":
        print_json(idea)
    else:
        print(f"Idea {idea['id']} now has {idea['votes']} vote(s)")
    return 0


def cmd_add_note(service: IdeaService, args: argparse.Namespace) -> int:
    """Add a note to an idea, reading content from stdin if not given."""
    content = args.content
    if content is None:
        content = sys.stdin.read()

    note = service.add_note(args.idea_id, content)
    if args.format == "json":
        print_json(note)
    else:
        print(f"Added note {note['id']}")
    return 0


def cmd_attach(service: IdeaService, args: argparse.Namespace) -> int:
    """Attach a file from disk to an idea."""
    path = Path(args.path)
    if not path.is_file():
        print(f"Error: File not found: {path}", file=sys.stderr)
        return 1

    mimetype = mimetypes.guess_type(path.name)[0]
    with open(path, "rb") as f:
        attachment = service.add_attachment(args.idea_id, f, path.name, mimetype)

    if args.format == "json":
        print_json(attachment)
    else:
        print(f"Attached {attachment['original_name']} as {attachment['id']}")
    return 0


def cmd_delete_idea(service: IdeaService, args: argparse.Namespace) -> int:
    """Delete an idea with its notes and attachments."""
    service.delete_idea(args.idea_id)
    if args.format == "json":
        print_json({"deleted": args.idea_id})
    else:
        print(f"Deleted idea {args.idea_id}")
    return 0


COMMANDS = {
    "list-ideas": cmd_list_ideas,
    "show-idea": cmd_show_idea,
    "new-idea": cmd_new_idea,
    "vote": cmd_vote,
    "add-note": cmd_add_note,
    "attach": cmd_attach,
    "delete-idea": cmd_delete_idea,
}


def add_cli_subparser(subparsers: argparse._SubParsersAction[argparse.ArgumentParser]) -> None:
    """Add CLI subparser and its nested subcommands.

    Args:
        subparsers: Parent subparsers object to add CLI parser to
    """
    cli_parser = subparsers.add_parser(
        "cli",
        help="Command-line interface",
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )

    cli_parser.add_argument(
        "--format",
        choices=["text", "json"],
        default="text",
        help="Output format (default: text)"
    )

    # Nested subcommands for CLI
    cli_subparsers = cli_parser.add_subparsers(dest="cli_command", help="CLI commands")

    cli_subparsers.add_parser("list-ideas", help="List all ideas, best voted first")

    show_parser = cli_subparsers.add_parser(
        "show-idea",
        help="Show an idea with its notes and attachments"
    )
    show_parser.add_argument("idea_id", type=str, help="ID of the idea to show")

    new_idea_parser = cli_subparsers.add_parser("new-idea", help="Create a new idea")
    new_idea_parser.add_argument("title", type=str, help="Idea title")
    new_idea_parser.add_argument(
        "-m", "--description",
        type=str,
        default="",
        help="Idea description"
    )

    vote_parser = cli_subparsers.add_parser("vote", help="Add one vote to an idea")
    vote_parser.add_argument("idea_id", type=str, help="ID of the idea to vote for")

    note_parser = cli_subparsers.add_parser("add-note", help="Add a note to an idea")
    note_parser.add_argument("idea_id", type=str, help="ID of the idea")
    note_parser.add_argument(
        "content",
        nargs="?",
        type=str,
        help="Note content (reads from stdin if not provided)"
    )

    attach_parser = cli_subparsers.add_parser("attach", help="Attach a file to an idea")
    attach_parser.add_argument("idea_id", type=str, help="ID of the idea")
    attach_parser.add_argument("path", type=str, help="Path of the file to attach")

    delete_parser = cli_subparsers.add_parser(
        "delete-idea",
        help="Delete an idea with its notes and attachments"
    )
    delete_parser.add_argument("idea_id", type=str, help="ID of the idea to delete")


def run(config_dir: Optional[Path], args: argparse.Namespace) -> int:
    """Run CLI with given arguments.

    Args:
        config_dir: Custom configuration directory or None for default
        args: Parsed command-line arguments (should have cli_command attribute)

    Returns:
        Exit code (0 for success, 1 for error)
    """
    if not getattr(args, "cli_command", None):
        print("Error: No CLI command specified. Use --help for available commands.", file=sys.stderr)
        return 1

    config = Config(config_dir=config_dir)
    db = Database(config.get_database_path())
    service = IdeaService(db, BlobStore(config.get_uploads_directory()))

    try:
        return COMMANDS[args.cli_command](service, args)
    except ValidationError as e:
        print(f"Error: {e.message}", file=sys.stderr)
        return 1
    except NotFoundError as e:
        print(f"Error: {e.message}", file=sys.stderr)
        return 1
    except StoreError as e:
        print(f"Error: {e.message}", file=sys.stderr)
        return 1
    finally:
        db.close()
