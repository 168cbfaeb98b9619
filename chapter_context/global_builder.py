# chapter_context/global_builder.py
"""Story-wide context assembly.

Unlike :class:`ChapterContextBuilder` this reads every story bible entity
rather than the references of a single chapter. Two modes are offered:

* ``build_full`` - all entities with moderate detail, for questions about the
  story as a whole.
* ``build_summary`` - names and statuses only, for lightweight prompts such
  as brainstorming.

Both return a :class:`BuiltContext` fitted to the same budget.
"""

from __future__ import annotations

import asyncio

import structlog

from . import renderers
from .base_builder import BaseContextBuilder
from .context_models import BuiltContext, ContextItem, ContextItemType, Tier

logger = structlog.get_logger(__name__)


class GlobalContextBuilder(BaseContextBuilder):
    """Assemble context from the whole story bible."""

    async def build_full(self) -> BuiltContext:
        characters, relationships, arcs, locations, foreshadowing, world = (
            await asyncio.gather(
                self.repos.characters.list_all(),
                self.repos.relationships.list_all(),
                self.repos.arcs.list_all(),
                self.repos.locations.list_all(),
                self.repos.foreshadowing.list_all(),
                self.repos.world.get(),
            )
        )
        l2 = self.priority_for(Tier.L2_FK_EXPANSION)
        l3 = self.priority_for(Tier.L3_PLOT_AWARENESS)
        l4 = self.priority_for(Tier.L4_WORLD_RULES)
        items: list[ContextItem] = []

        if characters:
            lines = []
            for c in characters:
                lines.append(f"- {c.name} ({c.role})")
                if c.motivation and c.motivation.surface:
                    lines.append(f"  Motivation: {c.motivation.surface}")
                if c.facets and c.facets.public:
                    lines.append(f"  Personality: {c.facets.public}")
            items.append(
                ContextItem(
                    type=ContextItemType.CHARACTER,
                    id="global-characters",
                    content="## Characters\n" + "\n".join(lines),
                    priority=l2,
                )
            )

        if relationships:
            names = {c.id: c.name for c in characters}
            lines = [
                f"- {names.get(r.source_id, r.source_id)} → "
                f"{names.get(r.target_id, r.target_id)}: {r.type}"
                for r in relationships
            ]
            items.append(
                ContextItem(
                    type=ContextItemType.RELATIONSHIP,
                    id="global-relationships",
                    content="## Relationships\n" + "\n".join(lines),
                    priority=l2,
                )
            )

        if arcs:
            items.append(
                ContextItem(
                    type=ContextItemType.ARC,
                    id="global-arcs",
                    content="## Story arcs\n"
                    + "\n".join(f"- {a.name} ({a.type}, {a.status})" for a in arcs),
                    priority=l2,
                )
            )

        if locations:
            items.append(
                ContextItem(
                    type=ContextItemType.LOCATION,
                    id="global-locations",
                    content="## Locations\n"
                    + "\n".join(
                        f"- {loc.name} ({loc.type})" if loc.type else f"- {loc.name}"
                        for loc in locations
                    ),
                    priority=l2,
                )
            )

        if foreshadowing:
            items.append(
                ContextItem(
                    type=ContextItemType.FORESHADOWING,
                    id="global-foreshadowing",
                    content="## Foreshadowing\n"
                    + "\n".join(
                        f"- {fs.content} ({fs.status.value})" for fs in foreshadowing
                    ),
                    priority=l3,
                )
            )

        if world is not None and world.power_system is not None:
            parts = [f"## Power system: {world.power_system.name}"]
            if world.power_system.core_rules:
                parts.append(f"Core rules: {', '.join(world.power_system.core_rules)}")
            items.append(
                ContextItem(
                    type=ContextItemType.POWER_SYSTEM,
                    id="global-power-system",
                    content="\n".join(parts),
                    priority=l4,
                )
            )
        if world is not None and world.social_rules:
            items.append(
                ContextItem(
                    type=ContextItemType.SOCIAL_RULES,
                    id="global-social-rules",
                    content=renderers.format_social_rules(world.social_rules),
                    priority=l4,
                )
            )

        result = self.fit_to_budget(items)
        logger.info(
            "Built global context",
            mode="full",
            selected=len(result.items),
            total_tokens=result.total_tokens,
            truncated=result.truncated,
        )
        return result

    async def build_summary(self) -> BuiltContext:
        characters, arcs, active = await asyncio.gather(
            self.repos.characters.list_all(),
            self.repos.arcs.list_all(),
            self.repos.foreshadowing.list_active(),
        )
        items: list[ContextItem] = []

        if characters:
            items.append(
                ContextItem(
                    type=ContextItemType.CHARACTER,
                    id="summary-characters",
                    content="Characters: "
                    + ", ".join(f"{c.name}({c.role})" for c in characters),
                    priority=self.priority_for(Tier.L2_FK_EXPANSION),
                )
            )
        if arcs:
            items.append(
                ContextItem(
                    type=ContextItemType.ARC,
                    id="summary-arcs",
                    content="Story arcs: "
                    + ", ".join(f"{a.name}({a.status})" for a in arcs),
                    priority=self.priority_for(Tier.L2_FK_EXPANSION),
                )
            )
        if active:
            items.append(
                ContextItem(
                    type=ContextItemType.FORESHADOWING,
                    id="summary-foreshadowing",
                    content="Active foreshadowing: "
                    + "; ".join(fs.content for fs in active),
                    priority=self.priority_for(Tier.L3_PLOT_AWARENESS),
                )
            )

        result = self.fit_to_budget(items)
        logger.info(
            "Built global context",
            mode="summary",
            selected=len(result.items),
            total_tokens=result.total_tokens,
            truncated=result.truncated,
        )
        return result
