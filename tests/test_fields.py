"""Tests for FieldRegistry."""

from __future__ import annotations

import pytest

from webutil_query import FieldConfig, FieldRegistry


def test_lookup_known_and_unknown(fields: FieldRegistry) -> None:
    config = fields.lookup("name")
    assert config is not None
    assert config.physical_column == "u.name"
    assert fields.lookup("missing") is None


def test_permissions_default_to_false() -> None:
    config = FieldConfig("t.col")
    assert not config.allow_filter
    assert not config.allow_sort
    assert not config.allow_group
    assert config.value_transform is None


def test_registry_is_a_read_only_mapping(fields: FieldRegistry) -> None:
    assert "email" in fields
    assert len(fields) == 6
    assert fields["id"].allow_sort
    with pytest.raises(TypeError):
        fields["id"] = FieldConfig("x")  # type: ignore[index]


def test_registry_copies_its_input() -> None:
    source = {"a": FieldConfig("t.a", allow_filter=True)}
    registry = FieldRegistry(source)
    source["b"] = FieldConfig("t.b")
    assert "b" not in registry


def test_field_config_is_frozen() -> None:
    config = FieldConfig("t.a")
    with pytest.raises(AttributeError):
        config.allow_filter = True  # type: ignore[misc]


def test_empty_registry() -> None:
    registry = FieldRegistry()
    assert len(registry) == 0
    assert registry.lookup("anything") is None
