# chapter_context/context_models.py
"""Data models used for context assembly."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum


class ContextItemType(str, Enum):
    """Closed set of context item kinds."""

    CHAPTER_CONTENT = "chapter_content"
    CHAPTER_OUTLINE = "chapter_outline"
    CHAPTER_PREV_TAIL = "chapter_prev_tail"
    CHARACTER = "character"
    RELATIONSHIP = "relationship"
    LOCATION = "location"
    ARC = "arc"
    FORESHADOWING = "foreshadowing"
    HOOK = "hook"
    POWER_SYSTEM = "power_system"
    SOCIAL_RULES = "social_rules"
    CUSTOM = "custom"


class Tier(int, Enum):
    """Relevance bands, most important first."""

    L1_REQUIRED = 1
    L2_FK_EXPANSION = 2
    L3_PLOT_AWARENESS = 3
    L4_WORLD_RULES = 4
    L5_USER_SELECTED = 5


@dataclass(frozen=True)
class ContextItem:
    """A single rendered piece of context.

    ``priority`` is ``None`` only on caller-supplied items that have not yet
    been assigned the L5 default.
    """

    type: ContextItemType
    content: str
    id: str | None = None
    priority: int | None = None

    def __post_init__(self) -> None:
        # Accept plain strings; unknown kinds raise ValueError.
        object.__setattr__(self, "type", ContextItemType(self.type))


@dataclass(frozen=True)
class BuiltContext:
    """Result of one assembly call."""

    items: list[ContextItem] = field(default_factory=list)
    total_tokens: int = 0
    truncated: bool = False
    candidate_count: int = 0
