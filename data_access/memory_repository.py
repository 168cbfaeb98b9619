# data_access/memory_repository.py
"""In-memory repositories backed by a validated story snapshot."""

from __future__ import annotations

from collections.abc import Mapping, Sequence
from typing import Any

import structlog
from pydantic import BaseModel, ConfigDict, Field

from models.story_models import (
    Arc,
    Chapter,
    Character,
    Foreshadowing,
    ForeshadowingStatus,
    Hook,
    Location,
    Relationship,
    World,
)

from .repository import ContextRepositories

logger = structlog.get_logger(__name__)


class StorySnapshot(BaseModel):
    """Everything context assembly can read about one story."""

    model_config = ConfigDict(extra="ignore")

    chapters: list[Chapter] = Field(default_factory=list)
    characters: list[Character] = Field(default_factory=list)
    locations: list[Location] = Field(default_factory=list)
    arcs: list[Arc] = Field(default_factory=list)
    relationships: list[Relationship] = Field(default_factory=list)
    foreshadowing: list[Foreshadowing] = Field(default_factory=list)
    hooks: list[Hook] = Field(default_factory=list)
    world: World | None = None


def _pick(index: Mapping[str, Any], ids: Sequence[str]) -> list[Any]:
    # Unknown ids are dropped; request order is kept.
    return [index[i] for i in dict.fromkeys(ids) if i in index]


class InMemoryChapterRepository:
    def __init__(self, chapters: Sequence[Chapter]) -> None:
        self._chapters = {chapter.id: chapter for chapter in chapters}

    def _ordered(self, chapters: Sequence[Chapter]) -> list[Chapter]:
        return [
            chapter.model_copy(update={"content": None})
            for chapter in sorted(chapters, key=lambda c: c.sequence_key)
        ]

    async def get_chapter_with_content(self, chapter_id: int) -> Chapter | None:
        return self._chapters.get(chapter_id)

    async def list_chapters_by_volume(self, volume_id: int) -> list[Chapter]:
        return self._ordered(
            [c for c in self._chapters.values() if c.volume_id == volume_id]
        )

    async def list_all_chapters(self) -> list[Chapter]:
        return self._ordered(list(self._chapters.values()))


class InMemoryCharacterRepository:
    def __init__(self, characters: Sequence[Character]) -> None:
        self._characters = {character.id: character for character in characters}

    async def get_many(self, ids: Sequence[str]) -> list[Character]:
        return _pick(self._characters, ids)

    async def list_all(self) -> list[Character]:
        return list(self._characters.values())


class InMemoryLocationRepository:
    def __init__(self, locations: Sequence[Location]) -> None:
        self._locations = {location.id: location for location in locations}

    async def get_many(self, ids: Sequence[str]) -> list[Location]:
        return _pick(self._locations, ids)

    async def list_all(self) -> list[Location]:
        return list(self._locations.values())


class InMemoryArcRepository:
    def __init__(self, arcs: Sequence[Arc]) -> None:
        self._arcs = {arc.id: arc for arc in arcs}

    async def get(self, arc_id: str) -> Arc | None:
        return self._arcs.get(arc_id)

    async def list_all(self) -> list[Arc]:
        return list(self._arcs.values())


class InMemoryRelationshipRepository:
    def __init__(self, relationships: Sequence[Relationship]) -> None:
        self._relationships = list(relationships)

    async def get_between(
        self, source_id: str, target_id: str
    ) -> Relationship | None:
        for rel in self._relationships:
            if rel.source_id == source_id and rel.target_id == target_id:
                return rel
        return None

    async def list_all(self) -> list[Relationship]:
        return list(self._relationships)


class InMemoryForeshadowingRepository:
    def __init__(self, foreshadowing: Sequence[Foreshadowing]) -> None:
        self._foreshadowing = {fs.id: fs for fs in foreshadowing}

    async def get_many(self, ids: Sequence[str]) -> list[Foreshadowing]:
        return _pick(self._foreshadowing, ids)

    async def list_active(self) -> list[Foreshadowing]:
        return [
            fs
            for fs in self._foreshadowing.values()
            if fs.status is ForeshadowingStatus.ACTIVE
        ]

    async def list_all(self) -> list[Foreshadowing]:
        return list(self._foreshadowing.values())


class InMemoryHookRepository:
    def __init__(self, hooks: Sequence[Hook]) -> None:
        self._hooks = list(hooks)

    async def list_by_chapter(self, chapter_id: int) -> list[Hook]:
        return [hook for hook in self._hooks if hook.chapter_id == chapter_id]


class InMemoryWorldRepository:
    def __init__(self, world: World | None) -> None:
        self._world = world

    async def get(self) -> World | None:
        return self._world


def repositories_from_snapshot(
    snapshot: StorySnapshot | Mapping[str, Any],
) -> ContextRepositories:
    """Build read-only repositories over a snapshot or its raw mapping."""
    if not isinstance(snapshot, StorySnapshot):
        snapshot = StorySnapshot.model_validate(snapshot)
    logger.debug(
        "Loaded story snapshot",
        chapters=len(snapshot.chapters),
        characters=len(snapshot.characters),
        locations=len(snapshot.locations),
        arcs=len(snapshot.arcs),
        relationships=len(snapshot.relationships),
        foreshadowing=len(snapshot.foreshadowing),
        hooks=len(snapshot.hooks),
        has_world=snapshot.world is not None,
    )
    return ContextRepositories(
        chapters=InMemoryChapterRepository(snapshot.chapters),
        characters=InMemoryCharacterRepository(snapshot.characters),
        locations=InMemoryLocationRepository(snapshot.locations),
        arcs=InMemoryArcRepository(snapshot.arcs),
        relationships=InMemoryRelationshipRepository(snapshot.relationships),
        foreshadowing=InMemoryForeshadowingRepository(snapshot.foreshadowing),
        hooks=InMemoryHookRepository(snapshot.hooks),
        world=InMemoryWorldRepository(snapshot.world),
    )
