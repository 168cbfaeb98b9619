# chapter_context/chapter_builder.py
"""Five-tier context assembly for a single chapter.

Tier priorities (higher = included first):
  L1 (1000) - Required: chapter content, outline, previous chapter tail
  L2 (800)  - FK expansion: characters, scoped relationships, locations, arc
  L3 (600)  - Plot awareness: hinted and active foreshadowing, previous hooks
  L4 (400)  - World rules: power system core rules, social rules
  L5 (200)  - User-selected: items passed by the caller

The budget is the total ceiling minus output and prompt reserves. When it is
exceeded, items are dropped lowest priority first by the greedy fitter.
"""

from __future__ import annotations

import asyncio
from collections.abc import Sequence
from typing import Any

import structlog

from models.story_models import Arc, Chapter, Hook

from . import tier_builders
from .base_builder import BaseContextBuilder
from .context_models import BuiltContext, ContextItem, Tier
from .errors import EntityNotFoundError

logger = structlog.get_logger(__name__)


class ChapterContextBuilder(BaseContextBuilder):
    """Assemble prioritized, budget-fitted context for one chapter."""

    async def build(
        self,
        chapter_id: int,
        additional_items: Sequence[ContextItem] | None = None,
    ) -> BuiltContext:
        """Build context for a chapter.

        Raises:
            EntityNotFoundError: if the chapter does not exist.
        """
        chapter = await self.repos.chapters.get_chapter_with_content(chapter_id)
        if chapter is None:
            raise EntityNotFoundError("Chapter", chapter_id)

        prev_chapter = await self.get_previous_chapter(chapter)

        fk_items, plot_items, world_items = await asyncio.gather(
            self._build_fk_expansion(chapter),
            self._build_plot_awareness(chapter, prev_chapter),
            self._build_world_rules(),
        )
        items = [
            *tier_builders.build_required_items(
                chapter,
                prev_chapter,
                self.priority_for(Tier.L1_REQUIRED),
                self.settings.PREV_CHAPTER_TAIL_LENGTH,
            ),
            *fk_items,
            *plot_items,
            *world_items,
            *tier_builders.build_user_selected_items(
                additional_items, self.priority_for(Tier.L5_USER_SELECTED)
            ),
        ]

        result = self.fit_to_budget(items)
        logger.info(
            "Built chapter context",
            chapter_id=chapter_id,
            candidates=result.candidate_count,
            selected=len(result.items),
            total_tokens=result.total_tokens,
            budget=self.budget,
            truncated=result.truncated,
        )
        return result

    async def get_previous_chapter(self, chapter: Chapter) -> Chapter | None:
        """Find the chapter immediately before ``chapter``, with content.

        Chapters of the same volume are used when the chapter has one,
        otherwise all chapters.
        """
        if chapter.volume_id is not None:
            chapters = await self.repos.chapters.list_chapters_by_volume(
                chapter.volume_id
            )
        else:
            chapters = await self.repos.chapters.list_all_chapters()

        ordered = sorted(chapters, key=lambda c: c.sequence_key)
        idx = next((i for i, c in enumerate(ordered) if c.id == chapter.id), -1)
        if idx <= 0:
            return None
        return await self.repos.chapters.get_chapter_with_content(ordered[idx - 1].id)

    async def _build_fk_expansion(self, chapter: Chapter) -> list[ContextItem]:
        characters, relationships, locations, arc = await asyncio.gather(
            self._get_many(self.repos.characters, chapter.characters, "characters"),
            self.get_scoped_relationships(chapter.characters),
            self._get_many(self.repos.locations, chapter.locations, "locations"),
            self._get_arc(chapter.arc_id),
        )
        return tier_builders.build_fk_expansion_items(
            chapter,
            characters,
            relationships,
            locations,
            arc,
            self.priority_for(Tier.L2_FK_EXPANSION),
        )

    async def _build_plot_awareness(
        self, chapter: Chapter, prev_chapter: Chapter | None
    ) -> list[ContextItem]:
        hinted, active, hooks = await asyncio.gather(
            self._get_many(
                self.repos.foreshadowing,
                chapter.foreshadowing_hinted,
                "foreshadowing",
            ),
            self.repos.foreshadowing.list_active(),
            self._get_prev_hooks(prev_chapter),
        )
        return tier_builders.build_plot_awareness_items(
            chapter,
            hinted,
            active,
            hooks,
            self.priority_for(Tier.L3_PLOT_AWARENESS),
        )

    async def _build_world_rules(self) -> list[ContextItem]:
        world = await self.repos.world.get()
        return tier_builders.build_world_rule_items(
            world, self.priority_for(Tier.L4_WORLD_RULES)
        )

    async def _get_many(
        self, repo: Any, ids: Sequence[str], kind: str
    ) -> list[Any]:
        if not ids:
            return []
        found = await repo.get_many(ids)
        if len(found) < len(set(ids)):
            resolved = {entity.id for entity in found}
            logger.debug(
                "Dropped dangling references",
                kind=kind,
                missing=[i for i in dict.fromkeys(ids) if i not in resolved],
            )
        return found

    async def _get_arc(self, arc_id: str | None) -> Arc | None:
        if not arc_id:
            return None
        return await self.repos.arcs.get(arc_id)

    async def _get_prev_hooks(self, prev_chapter: Chapter | None) -> list[Hook]:
        if prev_chapter is None:
            return []
        return await self.repos.hooks.list_by_chapter(prev_chapter.id)
