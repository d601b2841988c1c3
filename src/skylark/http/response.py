"""Mutable HTTP response with a chainable API.

Lifecycle operations build the response step by step and finish with
``send()``::

    response.status(404).header("X-Reason", "gone").write("Not here").send()

``send()`` does no I/O. It marks the response as the request's outcome
and notifies the sink bound by the app; the ASGI edge emits it later.
"""

import time
from collections.abc import Callable
from email.utils import formatdate

DEFAULT_CONTENT_TYPE = "text/html; charset=utf-8"

_NO_CACHE_HEADERS: tuple[tuple[str, str], ...] = (
    ("Expires", "Mon, 26 Jul 1997 05:00:00 GMT"),
    ("Cache-Control", "no-store, no-cache, must-revalidate, max-age=0"),
    ("Pragma", "no-cache"),
)


class Response:
    """An HTTP response under construction."""

    __slots__ = ("_body", "_headers", "_sink", "_status", "content_type", "sent")

    def __init__(
        self,
        body: str | bytes = "",
        status: int = 200,
        headers: tuple[tuple[str, str], ...] = (),
        content_type: str = DEFAULT_CONTENT_TYPE,
    ) -> None:
        self._status = status
        self._headers: list[tuple[str, str]] = []
        self._body: list[bytes] = []
        self._sink: Callable[[Response], None] | None = None
        self.content_type = content_type
        for name, value in headers:
            self.header(name, value)
        self.sent = False
        if body:
            self.write(body)

    # -- Chainable API --

    def status(self, code: int) -> "Response":
        """Set the status code."""
        self._status = code
        return self

    def header(self, name: str, value: str) -> "Response":
        """Set a header, replacing any existing value of the same name.

        ``Content-Type`` is stored as ``content_type`` so the response
        never carries two of them.
        """
        if name.lower() == "content-type":
            self.content_type = value
            return self
        self._remove_header(name)
        self._headers.append((name, value))
        return self

    def write(self, body: str | bytes) -> "Response":
        """Append to the response body."""
        self._body.append(body.encode("utf-8") if isinstance(body, str) else body)
        return self

    def cache(self, expires: bool | int) -> "Response":
        """Control client caching.

        ``False`` sends no-cache headers; ``True`` removes them; an int
        allows caching for that many seconds.
        """
        for name, _ in _NO_CACHE_HEADERS:
            self._remove_header(name)
        if expires is False:
            self._headers.extend(_NO_CACHE_HEADERS)
        elif expires is not True and expires > 0:
            self._headers.append(("Cache-Control", f"max-age={expires}"))
            self._headers.append(("Expires", formatdate(time.time() + expires, usegmt=True)))
        return self

    def clear(self) -> "Response":
        """Reset status, headers, content type and body."""
        self._status = 200
        self.content_type = DEFAULT_CONTENT_TYPE
        self._headers.clear()
        self._body.clear()
        return self

    def send(self) -> "Response":
        """Mark the response as sent and notify the bound sink."""
        self.sent = True
        if self._sink is not None:
            self._sink(self)
        return self

    def bind(self, sink: Callable[["Response"], None]) -> "Response":
        """Register the callable notified on ``send()``."""
        self._sink = sink
        return self

    # -- Accessors --

    @property
    def status_code(self) -> int:
        return self._status

    @property
    def headers(self) -> tuple[tuple[str, str], ...]:
        return tuple(self._headers)

    def get_header(self, name: str, default: str | None = None) -> str | None:
        lowered = name.lower()
        if lowered == "content-type":
            return self.content_type
        for key, value in self._headers:
            if key.lower() == lowered:
                return value
        return default

    @property
    def body_bytes(self) -> bytes:
        return b"".join(self._body)

    @property
    def text(self) -> str:
        return self.body_bytes.decode("utf-8")

    def __repr__(self) -> str:
        return f"<Response {self._status} sent={self.sent}>"

    def _remove_header(self, name: str) -> None:
        lowered = name.lower()
        self._headers = [(k, v) for k, v in self._headers if k.lower() != lowered]
