# chapter_context/formatter.py
"""Render selected context items as one prompt-ready block."""

from __future__ import annotations

from collections.abc import Iterable
from enum import Enum
from typing import assert_never

from .context_models import ContextItem, ContextItemType

CONTEXT_OPEN_TAG = "<context>"
CONTEXT_CLOSE_TAG = "</context>"


class ContextSection(Enum):
    """Prompt sections in output order, valued by heading."""

    PREVIOUS_CONTENT = "Previous Content"
    CHAPTER_OUTLINE = "Chapter Outline"
    CHARACTER_PROFILES = "Character Profiles"
    WORLD_RULES = "World Rules"
    PLOT_THREADS = "Plot Threads"
    ADDITIONAL_INFORMATION = "Additional Information"


def section_for(item_type: ContextItemType) -> ContextSection:
    match item_type:
        case ContextItemType.CHAPTER_CONTENT | ContextItemType.CHAPTER_PREV_TAIL:
            return ContextSection.PREVIOUS_CONTENT
        case ContextItemType.CHAPTER_OUTLINE | ContextItemType.ARC:
            return ContextSection.CHAPTER_OUTLINE
        case ContextItemType.CHARACTER | ContextItemType.RELATIONSHIP:
            return ContextSection.CHARACTER_PROFILES
        case (
            ContextItemType.LOCATION
            | ContextItemType.POWER_SYSTEM
            | ContextItemType.SOCIAL_RULES
        ):
            return ContextSection.WORLD_RULES
        case ContextItemType.FORESHADOWING | ContextItemType.HOOK:
            return ContextSection.PLOT_THREADS
        case ContextItemType.CUSTOM:
            return ContextSection.ADDITIONAL_INFORMATION
        case _:
            assert_never(item_type)


def format_context(items: Iterable[ContextItem]) -> str:
    """Group items by section and wrap them in context tags.

    Section order is fixed and sections without items are omitted. Within a
    section items keep their given order.
    """
    grouped: dict[ContextSection, list[str]] = {section: [] for section in ContextSection}
    for item in items:
        grouped[section_for(item.type)].append(item.content)

    sections = [
        f"## {section.value}\n" + "\n\n".join(contents)
        for section, contents in grouped.items()
        if contents
    ]
    return f"{CONTEXT_OPEN_TAG}\n" + "\n\n".join(sections) + f"\n{CONTEXT_CLOSE_TAG}"
