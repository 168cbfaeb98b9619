# main.py
"""CLI entry point for chapter context assembly."""

from __future__ import annotations

import argparse
import sys

from orchestration.cli_runner import run


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="Assemble prioritized LLM context from a story snapshot."
    )
    parser.add_argument("story", help="Path to a YAML story snapshot")
    parser.add_argument("--chapter", type=int, help="Chapter id to build context for")
    parser.add_argument(
        "--pin",
        action="append",
        default=[],
        metavar="TEXT",
        help="Extra text to include as a user-selected item (repeatable)",
    )
    parser.add_argument(
        "--format",
        action="store_true",
        dest="formatted",
        help="Print the formatted context instead of an item table",
    )
    mode = parser.add_mutually_exclusive_group()
    mode.add_argument(
        "--full",
        action="store_const",
        const="full",
        dest="global_mode",
        help="Build story-wide context with moderate detail",
    )
    mode.add_argument(
        "--summary",
        action="store_const",
        const="summary",
        dest="global_mode",
        help="Build a story-wide summary of names and statuses",
    )
    return parser


def main(argv: list[str] | None = None) -> int:
    """Parse command-line arguments and print the assembled context."""
    parser = build_parser()
    args = parser.parse_args(argv)
    if args.global_mode is None and args.chapter is None:
        parser.error("--chapter is required unless --full or --summary is given")
    return run(
        args.story,
        chapter_id=args.chapter,
        pins=args.pin,
        formatted=args.formatted,
        global_mode=args.global_mode,
    )


if __name__ == "__main__":
    sys.exit(main())
