# tests/conftest.py
import os
import sys

import pytest

# Ensure repository root is on PYTHONPATH for tests
repo_root = os.path.abspath(os.path.join(os.path.dirname(__file__), os.pardir))
if repo_root not in sys.path:
    sys.path.insert(0, repo_root)

# Keep token counting offline and deterministic during tests
os.environ.setdefault("TOKEN_COUNTER_MODE", "heuristic")
os.environ.setdefault("ENABLE_RICH_LOGGING", "false")

from data_access.memory_repository import repositories_from_snapshot  # noqa: E402


def build_snapshot() -> dict:
    """A small two-volume story with one of everything."""
    return {
        "chapters": [
            {
                "id": 1,
                "volume_id": 1,
                "sort_order": 1,
                "title": "The Road",
                "content": "a" * 100 + "b" * 500,
                "characters": ["aria"],
            },
            {
                "id": 2,
                "volume_id": 1,
                "arc_id": "arc-1",
                "sort_order": 2,
                "title": "The Gate",
                "content": "The gate creaked open.",
                "outline": {
                    "goal": "enter the ruins",
                    "scenes": ["approach", "enter"],
                    "hook_ending": "something watches",
                },
                "characters": ["aria", "bren", "ghost"],
                "locations": ["ruins"],
                "foreshadowing_hinted": ["fs-eye"],
            },
            {
                "id": 3,
                "volume_id": 2,
                "sort_order": 1,
                "content": "A new volume begins.",
            },
        ],
        "characters": [
            {
                "id": "aria",
                "name": "Aria",
                "role": "protagonist",
                "appearance": "Grey cloak",
                "voice_samples": ["We go on.", "Never back."],
                "motivation": {"surface": "find her brother"},
                "facets": {"public": "calm", "under_pressure": "reckless"},
            },
            {"id": "bren", "name": "Bren", "role": "supporting"},
            {"id": "cole", "name": "Cole", "role": "antagonist"},
        ],
        "relationships": [
            {"id": 1, "source_id": "aria", "target_id": "bren", "type": "rival"},
            {"id": 2, "source_id": "cole", "target_id": "aria", "type": "hunter"},
        ],
        "locations": [
            {"id": "ruins", "name": "Old Ruins", "type": "ruin", "atmosphere": "damp"},
            {"id": "town", "name": "Harrow", "type": "town"},
        ],
        "arcs": [
            {
                "id": "arc-1",
                "name": "Into the Dark",
                "status": "active",
                "sections": [{"name": "Descent", "chapters": [2], "status": "active"}],
            }
        ],
        "foreshadowing": [
            {"id": "fs-eye", "content": "An eye carved in the gate"},
            {"id": "fs-song", "content": "A song nobody taught her"},
            {"id": "fs-old", "content": "The broken sword", "status": "resolved"},
        ],
        "hooks": [
            {"id": "hook-1", "content": "A shadow on the road", "chapter_id": 1, "strength": 7},
            {"id": "hook-2", "content": "The gate closes", "chapter_id": 2},
        ],
        "world": {
            "power_system": {
                "name": "Resonance",
                "levels": ["Spark", "Flame"],
                "core_rules": ["Every song costs a memory"],
            },
            "social_rules": {"guilds": "Guilds rule the cities"},
        },
    }


@pytest.fixture
def story_snapshot() -> dict:
    return build_snapshot()


@pytest.fixture
def repos(story_snapshot):
    return repositories_from_snapshot(story_snapshot)
