"""Tests for skylark.core.methods — built-ins, overrides, reserved names."""

import pytest

from skylark.core.methods import MethodRegistry
from skylark.errors import ReservedNameError


class TestMethodRegistry:
    def test_map_and_resolve(self) -> None:
        registry = MethodRegistry()
        registry.map("hello", print)
        callback = registry.resolve("hello")
        assert callback is not None
        assert callback.func is print

    def test_unknown_resolves_to_none(self) -> None:
        assert MethodRegistry().resolve("missing") is None

    def test_builtin_cannot_be_overridden(self) -> None:
        registry = MethodRegistry()
        registry.builtin("start", print)
        with pytest.raises(ReservedNameError, match="start"):
            registry.map("start", repr)
        assert registry.resolve("start").func is print

    def test_reserved_name_cannot_be_mapped(self) -> None:
        registry = MethodRegistry(reserved={"map"})
        with pytest.raises(ReservedNameError) as exc_info:
            registry.map("map", print)
        assert exc_info.value.name == "map"

    def test_remap_replaces(self) -> None:
        registry = MethodRegistry()
        registry.map("hello", print)
        registry.map("hello", repr)
        assert registry.resolve("hello").func is repr

    def test_contains_and_iter(self) -> None:
        registry = MethodRegistry()
        registry.builtin("start", print)
        registry.map("hello", repr)
        assert "start" in registry
        assert "hello" in registry
        assert list(registry) == ["start", "hello"]

    def test_clear_keeps_builtins(self) -> None:
        registry = MethodRegistry()
        registry.builtin("start", print)
        registry.map("hello", repr)
        registry.clear()
        assert "hello" not in registry
        assert "start" in registry
