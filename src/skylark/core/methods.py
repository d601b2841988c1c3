"""Method registry — built-in operations and user overrides."""

from collections.abc import Iterable, Iterator
from typing import Any

from skylark.core.callback import Callback, as_callback
from skylark.errors import ReservedNameError


class MethodRegistry:
    """Maps operation names to callbacks.

    Built-ins are installed by the framework; overrides come from
    ``map()``. Built-in names and any *reserved* names can never be
    overridden, so a lookup for a built-in always yields the built-in.
    """

    __slots__ = ("_builtins", "_overrides", "_reserved")

    def __init__(self, reserved: Iterable[str] = ()) -> None:
        self._builtins: dict[str, Callback] = {}
        self._overrides: dict[str, Callback] = {}
        self._reserved: frozenset[str] = frozenset(reserved)

    def builtin(self, name: str, callback: Any) -> None:
        """Install a framework operation."""
        self._builtins[name] = as_callback(callback)

    def map(self, name: str, callback: Any) -> None:
        """Install a user override for *name*."""
        if self.is_reserved(name):
            raise ReservedNameError(name)
        self._overrides[name] = as_callback(callback)

    def is_reserved(self, name: str) -> bool:
        return name in self._builtins or name in self._reserved

    def resolve(self, name: str) -> Callback | None:
        """Return the override for *name*, else the built-in, else ``None``."""
        callback = self._overrides.get(name)
        if callback is None:
            callback = self._builtins.get(name)
        return callback

    def __contains__(self, name: object) -> bool:
        return name in self._overrides or name in self._builtins

    def __iter__(self) -> Iterator[str]:
        yield from self._builtins
        yield from (name for name in self._overrides if name not in self._builtins)

    def clear(self) -> None:
        """Drop user overrides. Built-ins stay installed."""
        self._overrides.clear()
