"""Entry point: python -m jotter <command>

- list [--title Q] [--tag LABEL ...]   Visible notes (title AND all tags)
- show ID                              One note with its tags and body
- new TITLE [--body TEXT] [--tag ...]  Create a note; unknown labels become tags
- edit ID [--title] [--body] [--tag]   Replace a note's fields
- rm ID                                Delete a note
- tags / tag-add / tag-rename / tag-rm Manage tags
"""

from __future__ import annotations

import argparse
import logging
import sys

from jotter.config import load_config
from jotter.core import Notebook
from jotter.errors import JotterError
from jotter.models import DenormalizedNote, Tag

logger = logging.getLogger("jotter")


def _setup_logging(level: str) -> None:
    logging.basicConfig(
        level=getattr(logging, level.upper(), logging.WARNING),
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
        datefmt="%H:%M:%S",
    )


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="jotter", description="Tagged notes")
    sub = parser.add_subparsers(dest="command", required=True)

    p = sub.add_parser("list", help="List notes matching a title and tags")
    p.add_argument("--title", default="")
    p.add_argument("--tag", action="append", default=[], metavar="LABEL")

    p = sub.add_parser("show", help="Show one note")
    p.add_argument("id")

    p = sub.add_parser("new", help="Create a note")
    p.add_argument("title")
    p.add_argument("--body", default="")
    p.add_argument("--tag", action="append", default=[], metavar="LABEL")

    p = sub.add_parser("edit", help="Replace a note's title, body or tags")
    p.add_argument("id")
    p.add_argument("--title")
    p.add_argument("--body")
    p.add_argument("--tag", action="append", metavar="LABEL")

    p = sub.add_parser("rm", help="Delete a note")
    p.add_argument("id")

    sub.add_parser("tags", help="List tags")

    p = sub.add_parser("tag-add", help="Create a tag")
    p.add_argument("label")

    p = sub.add_parser("tag-rename", help="Rename a tag")
    p.add_argument("id")
    p.add_argument("label")

    p = sub.add_parser("tag-rm", help="Delete a tag")
    p.add_argument("id")

    return parser


def _resolve_tags(notebook: Notebook, labels: list[str], create: bool) -> list[Tag]:
    """Map labels to tags. With ``create``, unknown labels become new tags."""
    tags = []
    for label in labels:
        tag = notebook.registry.find_by_label(label)
        if tag is None:
            if not create:
                raise SystemExit(f"Unknown tag: {label}")
            tag = notebook.create_tag(label)
        tags.append(tag)
    return tags


def _format_row(note: DenormalizedNote) -> str:
    labels = ", ".join(tag.label for tag in note.tags)
    return f"{note.id}  {note.title}" + (f"  [{labels}]" if labels else "")


def run(argv: list[str], notebook: Notebook) -> int:
    args = _build_parser().parse_args(argv)

    if args.command == "list":
        tag_query = _resolve_tags(notebook, args.tag, create=False)
        for note in notebook.list_visible_notes(args.title, tag_query):
            print(_format_row(note))
    elif args.command == "show":
        note = notebook.get_note(args.id)
        if note is None:
            print(f"Note not found: {args.id}", file=sys.stderr)
            return 1
        print(f"# {note.title}")
        if note.tags:
            print("tags: " + ", ".join(tag.label for tag in note.tags))
        print()
        print(note.body)
    elif args.command == "new":
        tags = _resolve_tags(notebook, args.tag, create=True)
        print(notebook.create_note(args.title, args.body, tags))
    elif args.command == "edit":
        current = notebook.get_note(args.id)
        if current is None:
            print(f"Note not found: {args.id}", file=sys.stderr)
            return 1
        tags = (
            _resolve_tags(notebook, args.tag, create=True)
            if args.tag is not None
            else list(current.tags)
        )
        notebook.update_note(
            args.id,
            args.title if args.title is not None else current.title,
            args.body if args.body is not None else current.body,
            tags,
        )
    elif args.command == "rm":
        notebook.delete_note(args.id)
    elif args.command == "tags":
        for tag in notebook.list_tags():
            print(f"{tag.id}  {tag.label}")
    elif args.command == "tag-add":
        print(notebook.create_tag(args.label).id)
    elif args.command == "tag-rename":
        notebook.rename_tag(args.id, args.label)
    elif args.command == "tag-rm":
        notebook.delete_tag(args.id)
    return 0


def main(argv: list[str] | None = None) -> None:
    argv = sys.argv[1:] if argv is None else argv
    try:
        config = load_config()
        _setup_logging(config.log_level)
        notebook = Notebook.open(config)
        code = run(argv, notebook)
    except JotterError as e:
        logger.debug("Command failed", exc_info=True)
        print(f"Error: {e}", file=sys.stderr)
        sys.exit(1)
    sys.exit(code)


if __name__ == "__main__":
    main()
