"""Tests for DependencyIdentifier and DependencySet."""

from __future__ import annotations

import pytest

from camel_inspect.exceptions import UnsupportedDependencyTypeError
from camel_inspect.models.dependency import DependencyIdentifier, DependencySet


class TestDependencyIdentifier:
    @pytest.mark.parametrize(
        "value",
        ["bom:org.acme/bom/1.0", "camel:timer", "camel-k:runtime-http", "camel-quarkus:log", "mvn:org.acme:lib:1.0", "github:apache/camel-k"],
    )
    def test_parse_accepted_types(self, value):
        dep = DependencyIdentifier.parse(value)
        assert str(dep) == value

    def test_type_ends_at_first_colon(self):
        dep = DependencyIdentifier.parse("mvn:org.acme:lib:1.0")
        assert dep.type == "mvn"
        assert dep.name == "org.acme:lib:1.0"

    def test_unknown_type(self):
        with pytest.raises(UnsupportedDependencyTypeError) as exc_info:
            DependencyIdentifier.parse("unknown-type:foo")
        assert exc_info.value.dependency == "unknown-type:foo"
        assert exc_info.value.dependency_type == "unknown-type"
        assert "{bom|camel|camel-k|camel-quarkus|mvn|github}" in str(exc_info.value)

    def test_missing_separator(self):
        with pytest.raises(UnsupportedDependencyTypeError):
            DependencyIdentifier.parse("timer")

    def test_empty_name(self):
        with pytest.raises(UnsupportedDependencyTypeError):
            DependencyIdentifier.parse("camel:")

    def test_constructor_validates_type(self):
        with pytest.raises(UnsupportedDependencyTypeError):
            DependencyIdentifier("npm", "left-pad")

    def test_hashable_and_equal(self):
        a = DependencyIdentifier.parse("camel:log")
        b = DependencyIdentifier("camel", "log")
        assert a == b
        assert len({a, b}) == 1


class TestDependencySet:
    def test_iteration_is_sorted(self):
        deps = DependencySet.of("camel:timer", "camel:log", "bom:a/b/1")
        assert deps.to_list() == ["bom:a/b/1", "camel:log", "camel:timer"]

    def test_duplicates_collapse(self):
        deps = DependencySet.of("camel:log", "camel:log")
        assert len(deps) == 1

    def test_contains_accepts_strings(self):
        deps = DependencySet.of("camel:log")
        assert "camel:log" in deps
        assert DependencyIdentifier("camel", "log") in deps
        assert "camel:timer" not in deps

    def test_union_returns_new_set(self):
        a = DependencySet.of("camel:log")
        b = DependencySet.of("camel:timer")
        merged = a | b
        assert merged.to_list() == ["camel:log", "camel:timer"]
        assert a.to_list() == ["camel:log"]
        assert b.to_list() == ["camel:timer"]

    def test_union_commutative(self):
        a = DependencySet.of("camel:log", "mvn:g:a:1")
        b = DependencySet.of("camel:timer", "camel:log")
        assert a | b == b | a

    def test_union_associative(self):
        a = DependencySet.of("camel:log")
        b = DependencySet.of("camel:timer")
        c = DependencySet.of("camel-k:runtime-http", "camel:log")
        assert (a | b) | c == a | (b | c)

    def test_union_idempotent(self):
        a = DependencySet.of("camel:log", "camel:timer")
        assert a | a == a

    def test_equality_with_other_types(self):
        assert DependencySet() != ["camel:log"]
