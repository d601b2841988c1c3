"""Variable store — a flat key/value namespace owned by the app."""

from collections.abc import Iterator, Mapping
from typing import Any


class VariableStore:
    """Mutable string-keyed store.

    Usage::

        store.set("site.title", "Skylark")
        store.set({"a": 1, "b": 2})
        store.set(settings_object)     # copies vars(settings_object)
    """

    __slots__ = ("_vars",)

    def __init__(self) -> None:
        self._vars: dict[str, Any] = {}

    def get(self, key: str, default: Any = None) -> Any:
        return self._vars.get(key, default)

    def set(self, key: str | Mapping[str, Any] | object, value: Any = None) -> None:
        """Set one variable, or bulk-set from a mapping or an object's fields."""
        if isinstance(key, str):
            self._vars[key] = value
        elif isinstance(key, Mapping):
            self._vars.update(key)
        else:
            self._vars.update(vars(key))

    def has(self, key: str) -> bool:
        return key in self._vars

    def clear(self, key: str | None = None) -> None:
        """Remove *key*, or every variable when *key* is ``None``."""
        if key is None:
            self._vars.clear()
        else:
            self._vars.pop(key, None)

    def __contains__(self, key: object) -> bool:
        return key in self._vars

    def __iter__(self) -> Iterator[str]:
        return iter(self._vars)

    def __len__(self) -> int:
        return len(self._vars)

    def __repr__(self) -> str:
        return f"VariableStore({self._vars!r})"
