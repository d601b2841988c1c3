"""Query string parameters as a read-only mapping."""

from collections.abc import Iterator, Mapping
from urllib.parse import parse_qsl


class QueryParams(Mapping[str, str]):
    """Decoded ``?key=value`` pairs.

    A repeated key keeps its last value. Blank values are kept, so
    ``?flag=`` reads as ``""`` rather than missing. The undecoded
    string stays available as ``string`` for rebuilding the URL.
    """

    __slots__ = ("_values", "string")

    def __init__(self, query_string: bytes | str = b"") -> None:
        if isinstance(query_string, bytes):
            query_string = query_string.decode("latin-1")
        self.string = query_string
        self._values: dict[str, str] = dict(parse_qsl(query_string, keep_blank_values=True))

    def __getitem__(self, key: str) -> str:
        return self._values[key]

    def __iter__(self) -> Iterator[str]:
        return iter(self._values)

    def __len__(self) -> int:
        return len(self._values)

    def __repr__(self) -> str:
        return f"QueryParams({self._values!r})"
