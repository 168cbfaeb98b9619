# orchestration/cli_runner.py
"""Command-line runner for context assembly."""

from __future__ import annotations

import asyncio
from collections.abc import Sequence
from typing import Literal

import structlog
from chapter_context import (
    BuiltContext,
    ChapterContextBuilder,
    ContextItem,
    ContextItemType,
    EntityNotFoundError,
    GlobalContextBuilder,
    format_context,
)
from data_access.memory_repository import repositories_from_snapshot
from data_access.repository import ContextRepositories
from pydantic import ValidationError
from rich.console import Console
from rich.table import Table
from utils.logging import setup_logging
from yaml_parser import load_yaml_file

logger = structlog.get_logger(__name__)

GlobalMode = Literal["full", "summary"]


def pinned_items(pins: Sequence[str]) -> list[ContextItem]:
    """Turn ``--pin`` texts into user-selected items without a priority."""
    return [
        ContextItem(type=ContextItemType.CUSTOM, id=f"pin-{n}", content=text)
        for n, text in enumerate(pins, start=1)
    ]


def load_repositories(story_path: str) -> ContextRepositories | None:
    """Load a YAML story snapshot, or return None if it is unusable."""
    raw = load_yaml_file(story_path, normalize_keys=False)
    if raw is None:
        return None
    try:
        return repositories_from_snapshot(raw)
    except ValidationError as e:
        logger.error(
            "Story snapshot failed validation",
            path=story_path,
            errors=e.error_count(),
            detail=str(e),
        )
        return None


async def _build(
    repos: ContextRepositories,
    chapter_id: int | None,
    pins: Sequence[str],
    global_mode: GlobalMode | None,
) -> BuiltContext:
    if global_mode == "full":
        return await GlobalContextBuilder(repos).build_full()
    if global_mode == "summary":
        return await GlobalContextBuilder(repos).build_summary()
    assert chapter_id is not None
    return await ChapterContextBuilder(repos).build(chapter_id, pinned_items(pins))


def render_table(result: BuiltContext, console: Console) -> None:
    table = Table(title="Selected context items")
    table.add_column("Type")
    table.add_column("Id")
    table.add_column("Priority", justify="right")
    table.add_column("Preview")
    for item in result.items:
        preview = item.content.replace("\n", " ")
        table.add_row(
            item.type.value,
            item.id or "-",
            str(item.priority),
            preview[:60] + ("..." if len(preview) > 60 else ""),
        )
    console.print(table)
    console.print(
        f"{len(result.items)}/{result.candidate_count} items, "
        f"{result.total_tokens} tokens"
        + (" (truncated)" if result.truncated else "")
    )


def run(
    story_path: str,
    chapter_id: int | None = None,
    pins: Sequence[str] = (),
    formatted: bool = False,
    global_mode: GlobalMode | None = None,
    console: Console | None = None,
) -> int:
    """Assemble context from a story file and print it. Returns an exit code."""
    setup_logging()
    console = console or Console()

    repos = load_repositories(story_path)
    if repos is None:
        console.print(f"Could not load story snapshot: {story_path}")
        return 1

    try:
        result = asyncio.run(_build(repos, chapter_id, pins, global_mode))
    except EntityNotFoundError as e:
        logger.error("Context assembly failed", code=e.code, error=str(e))
        console.print(str(e))
        return 1

    if formatted:
        console.out(format_context(result.items), highlight=False)
    else:
        render_table(result, console)
    return 0
