"""Unit tests for the naming inflections."""

from __future__ import annotations

import types

import pytest

from modularity.core.inflector import camelize, resolve_dotted


@pytest.mark.parametrize(
    "name, expected",
    [
        ("comparable", "Comparable"),
        ("soft_deletable", "SoftDeletable"),
        ("admin/user_role", "Admin.UserRole"),
        ("has_2fa", "Has2fa"),
    ],
)
def test_camelize(name, expected):
    """Test snake_case to CamelCase conversion."""
    assert camelize(name) == expected


def test_resolve_dotted_walks_classes():
    """Test resolving a nested class path from a module."""
    module = types.ModuleType("fake_traits")

    class BoxTraits:
        class ComparableTrait:
            pass

    module.BoxTraits = BoxTraits

    assert resolve_dotted(module, "BoxTraits.ComparableTrait") is BoxTraits.ComparableTrait
    assert resolve_dotted(module, "BoxTraits.SortableTrait") is None
    assert resolve_dotted(module, "CrateTraits") is None


def test_resolve_dotted_from_dict():
    """Test that the first segment is looked up as a key on dict roots."""

    class Holder:
        value = 3

    assert resolve_dotted({"Holder": Holder}, "Holder.value") == 3
    assert resolve_dotted({}, "Holder") is None
