"""Immutable HTTP request.

Frozen metadata plus the already-received body. The app core is
synchronous, so the ASGI edge reads the whole body before dispatch.
"""

from __future__ import annotations

import json as json_module
from collections.abc import Mapping
from dataclasses import dataclass, field
from typing import Any
from urllib.parse import parse_qsl

from skylark._internal.asgi import Scope
from skylark.http.headers import Headers
from skylark.http.query import QueryParams


@dataclass(frozen=True, slots=True)
class Request:
    """An immutable HTTP request.

    Every field has a default, so ``Request()`` is a valid empty GET for
    ``/``, which is how the service registry builds it on the fresh path.
    """

    method: str = "GET"
    path: str = "/"
    headers: Headers = field(default_factory=Headers)
    query: QueryParams = field(default_factory=QueryParams)
    body: bytes = b""
    scheme: str = "http"
    http_version: str = "1.1"
    client: tuple[str, int] | None = None

    # -- Computed properties --

    @property
    def is_ajax(self) -> bool:
        """True for ``X-Requested-With: XMLHttpRequest`` requests."""
        return self.headers.get("x-requested-with", "").lower() == "xmlhttprequest"

    @property
    def content_type(self) -> str | None:
        return self.headers.get("content-type")

    @property
    def url(self) -> str:
        """Path plus query string."""
        if self.query.string:
            return f"{self.path}?{self.query.string}"
        return self.path

    def header(self, name: str, default: str | None = None) -> str | None:
        """Case-insensitive lookup of an incoming header."""
        return self.headers.get(name, default)

    # -- Body access --

    @property
    def text(self) -> str:
        return self.body.decode("utf-8")

    def json(self) -> Any:
        return json_module.loads(self.body)

    def form(self) -> Mapping[str, str]:
        """Parse an ``application/x-www-form-urlencoded`` body."""
        return dict(parse_qsl(self.text, keep_blank_values=True))

    # -- Factory --

    @classmethod
    def from_asgi(cls, scope: Scope, body: bytes = b"") -> Request:
        """Create a Request from an ASGI HTTP scope and its received body."""
        client = scope.get("client")
        return cls(
            method=scope["method"],
            path=scope["path"],
            headers=Headers.from_asgi(scope.get("headers", ())),
            query=QueryParams(scope.get("query_string", b"")),
            body=body,
            scheme=scope.get("scheme", "http"),
            http_version=scope.get("http_version", "1.1"),
            client=tuple(client) if client else None,
        )
