# tests/test_context_models.py
import dataclasses

import pytest
from chapter_context.context_models import BuiltContext, ContextItem, ContextItemType
from chapter_context.errors import ContextAssemblyError, EntityNotFoundError


def test_item_type_accepts_plain_string():
    item = ContextItem(type="foreshadowing", content="c")
    assert item.type is ContextItemType.FORESHADOWING


def test_unknown_item_type_rejected():
    with pytest.raises(ValueError):
        ContextItem(type="weather", content="c")


def test_items_are_immutable():
    item = ContextItem(type=ContextItemType.CUSTOM, content="c")
    with pytest.raises(dataclasses.FrozenInstanceError):
        item.priority = 5  # type: ignore[misc]


def test_built_context_defaults():
    built = BuiltContext()
    assert built.items == []
    assert built.total_tokens == 0
    assert built.truncated is False


def test_base_error_serialization_without_context():
    err = ContextAssemblyError("boom")
    assert err.status_code == 500
    assert err.to_dict() == {"code": "CONTEXT_ERROR", "message": "boom"}


def test_not_found_error_attributes():
    err = EntityNotFoundError("Character", "aria")
    assert isinstance(err, ContextAssemblyError)
    assert str(err) == "Character aria not found"
    assert err.entity_type == "Character"
    assert err.entity_id == "aria"
    assert err.code == "NOT_FOUND"
