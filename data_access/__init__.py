# data_access/__init__.py
# Repository interfaces and the in-memory implementations used by the CLI.

from .memory_repository import StorySnapshot, repositories_from_snapshot
from .repository import (
    ArcRepository,
    ChapterRepository,
    CharacterRepository,
    ContextRepositories,
    ForeshadowingRepository,
    HookRepository,
    LocationRepository,
    RelationshipRepository,
    WorldRepository,
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
    "StorySnapshot",
    "repositories_from_snapshot",
]
