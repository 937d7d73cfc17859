"""Unit tests for TraitBuilder."""

from __future__ import annotations

import pytest

from modularity.core.builder import TraitBuilder


class Target:
    """Class receiving members in these tests."""


@pytest.fixture
def target():
    """Create a fresh target class per test."""

    class Box:
        weight = 4

    return Box


def test_define_with_name_and_value(target):
    """Test the two-argument form of define."""
    builder = TraitBuilder(target)
    builder.define("double", lambda self: self.weight * 2)
    builder.commit()

    assert target().double() == 8


def test_define_as_decorator(target):
    """Test define used as a decorator keeps the function."""
    builder = TraitBuilder(target)

    @builder.define
    def heavier_than(self, limit):
        return self.weight > limit

    assert callable(heavier_than)
    builder.commit()
    assert target().heavier_than(3) is True


def test_define_infers_names_of_wrapped_callables(target):
    """Test that classmethod and property objects are named after their function."""
    builder = TraitBuilder(target)

    def kind(cls):
        return cls.__name__

    def grams(self):
        return self.weight * 1000

    builder.define(classmethod(kind))
    builder.define(property(grams))
    builder.commit()

    assert target.kind() == "Box"
    assert target().grams == 4000


def test_define_rejects_unnamed_values(target):
    """Test define without a name on a value that has none."""
    builder = TraitBuilder(target)
    with pytest.raises(TypeError):
        builder.define(42)


def test_helper_definitions(target):
    """Test classmethod, staticmethod, property and attribute helpers."""
    builder = TraitBuilder(target)

    @builder.define_classmethod
    def create(cls, weight):
        box = cls()
        box.weight = weight
        return box

    @builder.define_staticmethod
    def unit():
        return "kg"

    def label(self):
        return f"{self.weight}{self.unit()}"

    def set_label(self, value):
        self.weight = int(value.rstrip("kg"))

    builder.define_property(label, set_label)
    builder.attribute("fragile", False)
    builder.commit()

    box = target.create(7)
    assert box.label == "7kg"
    box.label = "9kg"
    assert box.weight == 9
    assert target.unit() == "kg"
    assert target.fragile is False


def test_nothing_changes_before_commit(target):
    """Test that queued members are invisible until commit."""
    builder = TraitBuilder(target)
    builder.attribute("color", "red")

    assert not hasattr(target, "color")
    assert builder.commit() == ["color"]
    assert target.color == "red"


def test_commit_renames_functions_into_target():
    """Test that committed functions report the target's qualified name."""
    builder = TraitBuilder(Target)

    @builder.define
    def describe(self):
        return "target"

    builder.commit()

    assert Target.describe.__qualname__ == "Target.describe"
    assert Target.describe.__module__ == Target.__module__


def test_commit_calls_set_name(target):
    """Test that descriptors learn their attribute name on commit."""

    class Named:
        def __set_name__(self, owner, name):
            self.owner = owner
            self.name = name

    descriptor = Named()
    builder = TraitBuilder(target)
    builder.define("slot", descriptor)
    builder.commit()

    assert descriptor.owner is target
    assert descriptor.name == "slot"


def test_does_queues_includes(target):
    """Test that nested trait inclusions are queued, not applied."""
    builder = TraitBuilder(target)
    builder.does("sortable", "weight", reverse=True)

    assert builder.includes == [("sortable", ("weight",), {"reverse": True})]
    assert builder.commit() == []


def test_shared_function_keeps_names_per_target():
    """Test that one function defined on two classes is renamed per class only."""

    def describe(self):
        return type(self).__name__

    original_qualname = describe.__qualname__

    class First:
        pass

    class Second:
        pass

    for target in (First, Second):
        builder = TraitBuilder(target)
        builder.define(describe)
        builder.commit()

    assert First.describe.__qualname__.endswith("First.describe")
    assert Second.describe.__qualname__.endswith("Second.describe")
    assert describe.__qualname__ == original_qualname
    assert First().describe() == "First"
    assert Second().describe() == "Second"
