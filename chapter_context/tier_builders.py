# chapter_context/tier_builders.py
"""Pure builders turning fetched story data into prioritized context items.

Each builder receives everything it needs already loaded, so it performs no
I/O and returns items in a deterministic order. Fetching lives in
:mod:`chapter_context.chapter_builder`.
"""

from __future__ import annotations

import dataclasses
from collections.abc import Iterable, Sequence
from typing import TypeVar

from models.story_models import (
    Arc,
    Chapter,
    Character,
    Foreshadowing,
    Hook,
    Location,
    Relationship,
    World,
)

from . import renderers
from .context_models import ContextItem, ContextItemType

_E = TypeVar("_E", Character, Location, Foreshadowing)


def previous_chapter_tail(content: str | None, tail_length: int) -> str:
    """Return the last ``tail_length`` characters of ``content``."""
    if not content:
        return ""
    return content[-tail_length:]


def build_required_items(
    chapter: Chapter,
    prev_chapter: Chapter | None,
    priority: int,
    tail_length: int,
) -> list[ContextItem]:
    """L1: chapter content, outline and the previous chapter's tail."""
    items: list[ContextItem] = []
    chapter_key = str(chapter.id)

    if chapter.content:
        items.append(
            ContextItem(
                type=ContextItemType.CHAPTER_CONTENT,
                id=chapter_key,
                content=chapter.content,
                priority=priority,
            )
        )

    outline_text = renderers.format_outline(chapter.outline)
    if outline_text:
        items.append(
            ContextItem(
                type=ContextItemType.CHAPTER_OUTLINE,
                id=chapter_key,
                content=outline_text,
                priority=priority,
            )
        )

    if prev_chapter is not None:
        tail = previous_chapter_tail(prev_chapter.content, tail_length)
        if tail:
            items.append(
                ContextItem(
                    type=ContextItemType.CHAPTER_PREV_TAIL,
                    id=f"prev-{prev_chapter.id}",
                    content=tail,
                    priority=priority,
                )
            )

    return items


def in_linked_order(linked_ids: Sequence[str], entities: Iterable[_E]) -> list[_E]:
    """Order fetched entities by ``linked_ids``; unresolved ids are skipped."""
    by_id = {entity.id: entity for entity in entities}
    return [by_id[i] for i in dict.fromkeys(linked_ids) if i in by_id]


def build_fk_expansion_items(
    chapter: Chapter,
    characters: Iterable[Character],
    relationships: Iterable[Relationship],
    locations: Iterable[Location],
    arc: Arc | None,
    priority: int,
) -> list[ContextItem]:
    """L2: linked characters, their mutual relationships, locations and arc.

    A relationship is kept only when both endpoints are linked characters
    that resolved.
    """
    items: list[ContextItem] = []

    linked_characters = in_linked_order(chapter.characters, characters)
    by_id = {character.id: character for character in linked_characters}
    for character in linked_characters:
        items.append(
            ContextItem(
                type=ContextItemType.CHARACTER,
                id=character.id,
                content=renderers.format_character(character),
                priority=priority,
            )
        )

    seen: set[int] = set()
    for rel in relationships:
        source = by_id.get(rel.source_id)
        target = by_id.get(rel.target_id)
        if rel.id in seen or source is None or target is None:
            continue
        seen.add(rel.id)
        items.append(
            ContextItem(
                type=ContextItemType.RELATIONSHIP,
                id=f"rel-{rel.id}",
                content=renderers.format_relationship(rel, source.name, target.name),
                priority=priority,
            )
        )

    for location in in_linked_order(chapter.locations, locations):
        items.append(
            ContextItem(
                type=ContextItemType.LOCATION,
                id=location.id,
                content=renderers.format_location(location),
                priority=priority,
            )
        )

    if arc is not None:
        items.append(
            ContextItem(
                type=ContextItemType.ARC,
                id=arc.id,
                content=renderers.format_arc(arc),
                priority=priority,
            )
        )

    return items


def build_plot_awareness_items(
    chapter: Chapter,
    hinted: Iterable[Foreshadowing],
    active: Iterable[Foreshadowing],
    prev_chapter_hooks: Iterable[Hook],
    priority: int,
) -> list[ContextItem]:
    """L3: hinted foreshadowing, other open foreshadowing, previous hooks.

    Active foreshadowing already hinted in this chapter is not repeated.
    """
    items: list[ContextItem] = []

    for fs in in_linked_order(chapter.foreshadowing_hinted, hinted):
        items.append(
            ContextItem(
                type=ContextItemType.FORESHADOWING,
                id=fs.id,
                content=renderers.format_foreshadowing(fs, hinted=True),
                priority=priority,
            )
        )

    hinted_set = set(chapter.foreshadowing_hinted)
    for fs in active:
        if fs.id in hinted_set:
            continue
        items.append(
            ContextItem(
                type=ContextItemType.FORESHADOWING,
                id=f"active-{fs.id}",
                content=renderers.format_foreshadowing(fs, hinted=False),
                priority=priority,
            )
        )

    for hook in prev_chapter_hooks:
        items.append(
            ContextItem(
                type=ContextItemType.HOOK,
                id=hook.id,
                content=renderers.format_hook(hook),
                priority=priority,
            )
        )

    return items


def build_world_rule_items(world: World | None, priority: int) -> list[ContextItem]:
    """L4: power system (only with core rules) and social rules."""
    if world is None:
        return []
    items: list[ContextItem] = []

    if world.power_system is not None and world.power_system.core_rules:
        items.append(
            ContextItem(
                type=ContextItemType.POWER_SYSTEM,
                id="power-system",
                content=renderers.format_power_system(world.power_system),
                priority=priority,
            )
        )

    if world.social_rules:
        items.append(
            ContextItem(
                type=ContextItemType.SOCIAL_RULES,
                id="social-rules",
                content=renderers.format_social_rules(world.social_rules),
                priority=priority,
            )
        )

    return items


def build_user_selected_items(
    additional_items: Sequence[ContextItem] | None, priority: int
) -> list[ContextItem]:
    """L5: caller-supplied items; those without a priority get ``priority``."""
    if not additional_items:
        return []
    return [
        item
        if item.priority is not None
        else dataclasses.replace(item, priority=priority)
        for item in additional_items
    ]
