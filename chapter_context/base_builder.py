# chapter_context/base_builder.py
"""Shared infrastructure for chapter-scoped and story-wide context builders."""

from __future__ import annotations

import asyncio
import itertools
from collections.abc import Iterable, Sequence

from config import ContextSettings
from config import settings as default_settings
from core.token_counter import count_tokens
from data_access.repository import ContextRepositories
from models.story_models import Relationship

from .budget import TokenEstimator, fit_to_budget
from .context_models import BuiltContext, ContextItem, Tier
from .formatter import format_context


class BaseContextBuilder:
    """Holds repositories, settings and the token estimator.

    Builders keep no per-call state, so one instance can serve concurrent
    calls.
    """

    def __init__(
        self,
        repos: ContextRepositories,
        estimate_tokens: TokenEstimator | None = None,
        settings: ContextSettings | None = None,
    ) -> None:
        self.repos = repos
        self.estimate_tokens = estimate_tokens or count_tokens
        self.settings = settings or default_settings

    @property
    def budget(self) -> int:
        return self.settings.context_budget

    def priority_for(self, tier: Tier) -> int:
        match tier:
            case Tier.L1_REQUIRED:
                return self.settings.L1_PRIORITY
            case Tier.L2_FK_EXPANSION:
                return self.settings.L2_PRIORITY
            case Tier.L3_PLOT_AWARENESS:
                return self.settings.L3_PRIORITY
            case Tier.L4_WORLD_RULES:
                return self.settings.L4_PRIORITY
            case Tier.L5_USER_SELECTED:
                return self.settings.L5_PRIORITY

    async def get_scoped_relationships(
        self, character_ids: Sequence[str]
    ) -> list[Relationship]:
        """Relationships whose endpoints are both in ``character_ids``.

        Every unordered pair is probed in both directions; a relationship
        found twice is returned once.
        """
        unique_ids = list(dict.fromkeys(character_ids))
        probes = []
        for id_a, id_b in itertools.combinations(unique_ids, 2):
            probes.append(self.repos.relationships.get_between(id_a, id_b))
            probes.append(self.repos.relationships.get_between(id_b, id_a))
        found = await asyncio.gather(*probes)

        relationships: list[Relationship] = []
        seen: set[int] = set()
        for rel in found:
            if rel is not None and rel.id not in seen:
                seen.add(rel.id)
                relationships.append(rel)
        return relationships

    def fit_to_budget(self, items: Sequence[ContextItem]) -> BuiltContext:
        return fit_to_budget(items, self.budget, self.estimate_tokens)

    def format_context(self, items: Iterable[ContextItem]) -> str:
        """Format items into structured text for prompt injection."""
        return format_context(items)
