# models/story_models.py
"""Read-only story bible entities consumed by context assembly."""

from __future__ import annotations

from enum import Enum

from pydantic import BaseModel, ConfigDict, Field


class StoryBaseModel(BaseModel):
    """Base model for story entities; instances are treated as immutable."""

    model_config = ConfigDict(frozen=True, extra="ignore", populate_by_name=True)


class ForeshadowingStatus(str, Enum):
    ACTIVE = "active"
    RESOLVED = "resolved"
    ABANDONED = "abandoned"


class ChapterOutline(StoryBaseModel):
    """Author's plan for a chapter."""

    goal: str | None = None
    scenes: list[str] = Field(default_factory=list)
    hook_ending: str | None = None


class Chapter(StoryBaseModel):
    """A chapter with its outline, content and linked entity ids."""

    id: int
    volume_id: int | None = None
    arc_id: str | None = None
    title: str | None = None
    status: str = "outline"
    sort_order: int = 0
    outline: ChapterOutline | None = None
    content: str | None = None
    characters: list[str] = Field(default_factory=list)
    locations: list[str] = Field(default_factory=list)
    foreshadowing_planted: list[str] = Field(default_factory=list)
    foreshadowing_hinted: list[str] = Field(default_factory=list)
    foreshadowing_resolved: list[str] = Field(default_factory=list)

    @property
    def sequence_key(self) -> tuple[int, int]:
        """Natural reading order within a volume or the whole book."""
        return (self.sort_order, self.id)


class CharacterMotivation(StoryBaseModel):
    surface: str
    hidden: str | None = None
    core: str | None = None


class CharacterFacets(StoryBaseModel):
    public: str
    private: str | None = None
    hidden: str | None = None
    under_pressure: str | None = None


class Character(StoryBaseModel):
    """A character profile."""

    id: str
    name: str
    role: str = "supporting"
    appearance: str | None = None
    voice_samples: list[str] = Field(default_factory=list)
    motivation: CharacterMotivation | None = None
    facets: CharacterFacets | None = None


class Relationship(StoryBaseModel):
    """A directed relationship from ``source_id`` to ``target_id``."""

    id: int
    source_id: str
    target_id: str
    type: str
    join_reason: str | None = None
    independent_goal: str | None = None


class Location(StoryBaseModel):
    id: str
    name: str
    type: str | None = None
    atmosphere: str | None = None
    significance: str | None = None


class ArcSection(StoryBaseModel):
    name: str
    chapters: list[int] = Field(default_factory=list)
    type: str | None = None
    status: str = "planned"


class Arc(StoryBaseModel):
    """A story arc and its ordered sections."""

    id: str
    name: str
    type: str = "main"
    status: str = "planned"
    sections: list[ArcSection] = Field(default_factory=list)


class Foreshadowing(StoryBaseModel):
    id: str
    content: str
    status: ForeshadowingStatus = ForeshadowingStatus.ACTIVE


class Hook(StoryBaseModel):
    """A cliffhanger attached to a chapter."""

    id: str
    content: str
    chapter_id: int | None = None
    type: str = "chapter"
    strength: int | None = None


class PowerSystem(StoryBaseModel):
    name: str
    levels: list[str] = Field(default_factory=list)
    core_rules: list[str] = Field(default_factory=list)
    constraints: list[str] = Field(default_factory=list)


class World(StoryBaseModel):
    """The single world record of a story."""

    id: str = "world"
    power_system: PowerSystem | None = None
    social_rules: dict[str, str] = Field(default_factory=dict)
