"""Incoming request headers as a case-insensitive mapping.

Repeated fields are folded into one comma-separated value, so every
header reads as a single string. Names are stored lowercased.
"""

from collections.abc import Iterable, Iterator, Mapping


def _fold(fields: dict[str, str], name: str, value: str) -> None:
    key = name.lower()
    if key in fields:
        fields[key] = f"{fields[key]}, {value}"
    else:
        fields[key] = value


class Headers(Mapping[str, str]):
    """Read-only request headers.

    Usage::

        headers = Headers({"If-None-Match": '"v1"'})
        headers["if-none-match"]      # '"v1"'
    """

    __slots__ = ("_fields",)

    def __init__(self, fields: Mapping[str, str] | None = None) -> None:
        self._fields: dict[str, str] = {}
        for name, value in (fields or {}).items():
            _fold(self._fields, name, value)

    @classmethod
    def from_asgi(cls, raw: Iterable[tuple[bytes, bytes]]) -> "Headers":
        """Build headers from the ASGI scope's byte pairs."""
        headers = cls()
        for name, value in raw:
            _fold(headers._fields, name.decode("latin-1"), value.decode("latin-1"))
        return headers

    def __getitem__(self, key: str) -> str:
        return self._fields[key.lower()]

    def __contains__(self, key: object) -> bool:
        return isinstance(key, str) and key.lower() in self._fields

    def __iter__(self) -> Iterator[str]:
        return iter(self._fields)

    def __len__(self) -> int:
        return len(self._fields)

    def __repr__(self) -> str:
        return f"Headers({self._fields!r})"
