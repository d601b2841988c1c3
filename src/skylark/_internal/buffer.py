"""Output buffer — collects handler output until ``stop`` flushes it."""

import io


class OutputBuffer:
    """Append-only text buffer drained once per request.

    Handlers and views write here instead of to the response; the
    ``stop`` operation moves the contents into the response body.
    """

    __slots__ = ("_buffer",)

    def __init__(self) -> None:
        self._buffer = io.StringIO()

    def write(self, data: str | bytes) -> None:
        if isinstance(data, bytes):
            data = data.decode("utf-8")
        self._buffer.write(data)

    def getvalue(self) -> str:
        return self._buffer.getvalue()

    def drain(self) -> str:
        """Return the buffered output and empty the buffer."""
        value = self._buffer.getvalue()
        self._buffer = io.StringIO()
        return value

    def __len__(self) -> int:
        return len(self._buffer.getvalue())
