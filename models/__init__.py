"""Central package for story bible data models."""

from .story_models import (
    Arc,
    ArcSection,
    Chapter,
    ChapterOutline,
    Character,
    CharacterFacets,
    CharacterMotivation,
    Foreshadowing,
    ForeshadowingStatus,
    Hook,
    Location,
    PowerSystem,
    Relationship,
    World,
)

__all__ = [
    "Chapter",
    "ChapterOutline",
    "Character",
    "CharacterMotivation",
    "CharacterFacets",
    "Relationship",
    "Location",
    "Arc",
    "ArcSection",
    "Foreshadowing",
    "ForeshadowingStatus",
    "Hook",
    "PowerSystem",
    "World",
]
