# data_access/repository.py
"""Read-only repository interfaces used by context assembly."""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass
from typing import Protocol

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

__all__ = [
    "ChapterRepository",
    "CharacterRepository",
    "LocationRepository",
    "ArcRepository",
    "RelationshipRepository",
    "ForeshadowingRepository",
    "HookRepository",
    "WorldRepository",
    "ContextRepositories",
]


class ChapterRepository(Protocol):
    async def get_chapter_with_content(self, chapter_id: int) -> Chapter | None:
        """Return the chapter including its content, or None."""
        ...

    async def list_chapters_by_volume(self, volume_id: int) -> list[Chapter]:
        """Return chapters of a volume in sequence order (content may be omitted)."""
        ...

    async def list_all_chapters(self) -> list[Chapter]:
        """Return every chapter in sequence order (content may be omitted)."""
        ...


class CharacterRepository(Protocol):
    async def get_many(self, ids: Sequence[str]) -> list[Character]:
        """Return the characters that exist among ``ids`` in one query."""
        ...

    async def list_all(self) -> list[Character]: ...


class LocationRepository(Protocol):
    async def get_many(self, ids: Sequence[str]) -> list[Location]:
        """Return the locations that exist among ``ids`` in one query."""
        ...

    async def list_all(self) -> list[Location]: ...


class ArcRepository(Protocol):
    async def get(self, arc_id: str) -> Arc | None: ...

    async def list_all(self) -> list[Arc]: ...


class RelationshipRepository(Protocol):
    async def get_between(
        self, source_id: str, target_id: str
    ) -> Relationship | None:
        """Return the relationship directed from ``source_id`` to ``target_id``."""
        ...

    async def list_all(self) -> list[Relationship]: ...


class ForeshadowingRepository(Protocol):
    async def get_many(self, ids: Sequence[str]) -> list[Foreshadowing]: ...

    async def list_active(self) -> list[Foreshadowing]:
        """Return all foreshadowing whose status is still active."""
        ...

    async def list_all(self) -> list[Foreshadowing]: ...


class HookRepository(Protocol):
    async def list_by_chapter(self, chapter_id: int) -> list[Hook]: ...


class WorldRepository(Protocol):
    async def get(self) -> World | None:
        """Return the single world record, if one exists."""
        ...


@dataclass(frozen=True)
class ContextRepositories:
    """Repositories needed for context assembly."""

    chapters: ChapterRepository
    characters: CharacterRepository
    locations: LocationRepository
    arcs: ArcRepository
    relationships: RelationshipRepository
    foreshadowing: ForeshadowingRepository
    hooks: HookRepository
    world: WorldRepository
