# chapter_context/renderers.py
"""Render story entities as human-readable context text."""

from __future__ import annotations

from models.story_models import (
    Arc,
    ChapterOutline,
    Character,
    Foreshadowing,
    Hook,
    Location,
    PowerSystem,
    Relationship,
)


def _bullets(values: list[str]) -> str:
    return "\n".join(f"  - {value}" for value in values)


def format_outline(outline: ChapterOutline | None) -> str:
    """Return goal, numbered scenes and ending hook; empty if none are set."""
    if outline is None:
        return ""
    parts: list[str] = []
    if outline.goal:
        parts.append(f"Goal: {outline.goal}")
    if outline.scenes:
        scenes = "\n".join(
            f"  {i}. {scene}" for i, scene in enumerate(outline.scenes, start=1)
        )
        parts.append(f"Scenes:\n{scenes}")
    if outline.hook_ending:
        parts.append(f"Ending hook: {outline.hook_ending}")
    return "\n".join(parts)


def format_character(character: Character) -> str:
    """Format a character entity into a readable context string."""
    parts = [f"### {character.name} ({character.role})"]

    if character.appearance:
        parts.append(f"Appearance: {character.appearance}")

    if character.motivation:
        motivation = ["Motivation:", f"  Surface: {character.motivation.surface}"]
        if character.motivation.hidden:
            motivation.append(f"  Hidden: {character.motivation.hidden}")
        if character.motivation.core:
            motivation.append(f"  Core: {character.motivation.core}")
        parts.append("\n".join(motivation))

    if character.facets:
        facets = ["Personality:", f"  Public: {character.facets.public}"]
        if character.facets.private:
            facets.append(f"  Private: {character.facets.private}")
        if character.facets.hidden:
            facets.append(f"  Hidden: {character.facets.hidden}")
        if character.facets.under_pressure:
            facets.append(f"  Under pressure: {character.facets.under_pressure}")
        parts.append("\n".join(facets))

    if character.voice_samples:
        parts.append(f'Voice sample: "{character.voice_samples[0]}"')

    return "\n".join(parts)


def format_relationship(
    relationship: Relationship, source_name: str, target_name: str
) -> str:
    parts = [f"[Relationship] {source_name} → {target_name}: {relationship.type}"]
    if relationship.join_reason:
        parts.append(f"  Bond: {relationship.join_reason}")
    if relationship.independent_goal:
        parts.append(f"  Own goal: {relationship.independent_goal}")
    return "\n".join(parts)


def format_location(location: Location) -> str:
    parts = [f"### {location.name}"]
    if location.type:
        parts.append(f"Type: {location.type}")
    if location.atmosphere:
        parts.append(f"Atmosphere: {location.atmosphere}")
    if location.significance:
        parts.append(f"Significance: {location.significance}")
    return "\n".join(parts)


def format_arc(arc: Arc) -> str:
    parts = [
        f"### Story arc: {arc.name}",
        f"Type: {arc.type}",
        f"Status: {arc.status}",
    ]
    if arc.sections:
        parts.append("Sections:")
        parts.extend(f"  - {section.name} ({section.status})" for section in arc.sections)
    return "\n".join(parts)


def format_foreshadowing(foreshadowing: Foreshadowing, *, hinted: bool) -> str:
    label = "Foreshadowing hint" if hinted else "Active foreshadowing"
    return f"[{label}] {foreshadowing.content} (status: {foreshadowing.status.value})"


def format_hook(hook: Hook) -> str:
    strength = hook.strength if hook.strength is not None else "unset"
    return f"[Previous chapter hook] {hook.content} (strength: {strength})"


def format_power_system(power_system: PowerSystem) -> str:
    """Render a power system; callers decide whether it qualifies."""
    parts = [f"### Power system: {power_system.name}"]
    if power_system.levels:
        parts.append(f"Levels: {' → '.join(power_system.levels)}")
    parts.append(f"Core rules:\n{_bullets(power_system.core_rules)}")
    if power_system.constraints:
        parts.append(f"Constraints:\n{_bullets(power_system.constraints)}")
    return "\n".join(parts)


def format_social_rules(social_rules: dict[str, str]) -> str:
    parts = ["### Social rules"]
    parts.extend(f"- {key}: {value}" for key, value in social_rules.items())
    return "\n".join(parts)
