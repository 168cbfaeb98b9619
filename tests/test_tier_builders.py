# tests/test_tier_builders.py
from chapter_context import tier_builders
from chapter_context.context_models import ContextItem, ContextItemType
from models.story_models import (
    Chapter,
    Character,
    Location,
    PowerSystem,
    Relationship,
    World,
)


def test_previous_chapter_tail():
    assert tier_builders.previous_chapter_tail("abcdef", 3) == "def"
    assert tier_builders.previous_chapter_tail("ab", 3) == "ab"
    assert tier_builders.previous_chapter_tail(None, 3) == ""
    assert tier_builders.previous_chapter_tail("", 3) == ""


def test_required_items_skip_empty_fields():
    chapter = Chapter(id=4)
    prev = Chapter(id=3, content="")

    assert tier_builders.build_required_items(chapter, prev, 1000, 500) == []


def test_in_linked_order_follows_chapter_links():
    entities = [Location(id="b", name="B"), Location(id="a", name="A")]

    ordered = tier_builders.in_linked_order(["a", "missing", "b", "a"], entities)

    assert [e.id for e in ordered] == ["a", "b"]


def test_relationship_needs_both_endpoints_resolved():
    chapter = Chapter(id=1, characters=["a", "b"])
    characters = [Character(id="a", name="A")]
    relationships = [Relationship(id=1, source_id="a", target_id="b", type="ally")]

    items = tier_builders.build_fk_expansion_items(
        chapter, characters, relationships, [], None, 800
    )

    assert [i.type for i in items] == [ContextItemType.CHARACTER]


def test_relationship_with_bond_and_goal():
    chapter = Chapter(id=1, characters=["a", "b"])
    characters = [Character(id="b", name="B"), Character(id="a", name="A")]
    rel = Relationship(
        id=5,
        source_id="a",
        target_id="b",
        type="mentor",
        join_reason="saved at sea",
        independent_goal="reclaim the crown",
    )

    items = tier_builders.build_fk_expansion_items(
        chapter, characters, [rel, rel], [], None, 800
    )

    assert [i.id for i in items] == ["a", "b", "rel-5"]
    assert items[-1].content == (
        "[Relationship] A → B: mentor\n"
        "  Bond: saved at sea\n"
        "  Own goal: reclaim the crown"
    )


def test_world_rules_without_world():
    assert tier_builders.build_world_rule_items(None, 400) == []


def test_world_rules_rendering():
    world = World(
        power_system=PowerSystem(
            name="Tide",
            levels=["Ripple", "Wave"],
            core_rules=["The sea remembers"],
            constraints=["No casting on land"],
        ),
        social_rules={"oaths": "Broken oaths are punished"},
    )

    items = tier_builders.build_world_rule_items(world, 400)

    assert [i.id for i in items] == ["power-system", "social-rules"]
    assert items[0].content == (
        "### Power system: Tide\n"
        "Levels: Ripple → Wave\n"
        "Core rules:\n  - The sea remembers\n"
        "Constraints:\n  - No casting on land"
    )
    assert items[1].content == "### Social rules\n- oaths: Broken oaths are punished"
    assert all(i.priority == 400 for i in items)


def test_user_selected_items_only_fill_missing_priority():
    items = [
        ContextItem(type="custom", id="n", content="none"),
        ContextItem(type="custom", id="z", content="zero", priority=0),
    ]

    result = tier_builders.build_user_selected_items(items, 200)

    assert [i.priority for i in result] == [200, 0]


def test_user_selected_items_empty():
    assert tier_builders.build_user_selected_items(None, 200) == []
