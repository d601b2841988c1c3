"""Trie-based router.

Patterns are a path with an optional method prefix::

    "/"                       any method
    "GET /users/{id:int}"     GET only, id converted to int
    "GET|POST /contact"       GET or POST
    "/files/{rest:path}"      catch-all, consumes the remaining path
    "*"                       any method, any path
"""

import re
from collections.abc import Callable
from dataclasses import dataclass, field
from typing import Any

from skylark.http.request import Request
from skylark.routing.route import PathSegment, Route, RouteMatch

# Segment parameter types: the pattern a segment must match, then its conversion.
# "path" is not listed; it is the catch-all and takes the rest of the path as a str.
_CONVERTERS: dict[str, tuple[re.Pattern[str], Callable[[str], Any]]] = {
    "str": (re.compile(r"[^/]+"), str),
    "int": (re.compile(r"-?\d+"), int),
    "float": (re.compile(r"-?\d+(?:\.\d+)?"), float),
}


def parse_pattern(pattern: str) -> tuple[frozenset[str], str]:
    """Split ``"GET|POST /path"`` into its methods and path."""
    pattern = pattern.strip()
    if " " in pattern:
        methods, path = pattern.split(None, 1)
        return frozenset(m.upper() for m in methods.split("|") if m), path.strip()
    return frozenset({"*"}), pattern


def parse_path(path: str) -> list[PathSegment]:
    """Parse a route path string into segments.

    Examples::

        "/users"          -> [PathSegment("users")]
        "/users/{id:int}" -> [PathSegment("users"), PathSegment("{id:int}", is_param=True, ...)]
    """
    segments: list[PathSegment] = []
    for part in path.strip("/").split("/"):
        if not part:
            continue
        if part.startswith("{") and part.endswith("}"):
            inner = part[1:-1]
            if ":" in inner:
                param_name, param_type = inner.split(":", 1)
            else:
                param_name = inner
                param_type = "str"
            segments.append(
                PathSegment(
                    value=part,
                    is_param=True,
                    param_name=param_name,
                    param_type=param_type,
                )
            )
        else:
            segments.append(PathSegment(value=part))
    return segments


class _TrieNode:
    """A node in the route trie."""

    __slots__ = ("catch_all", "children", "param_child", "routes")

    def __init__(self) -> None:
        self.children: dict[str, _TrieNode] = {}
        self.param_child: _ParamEdge | None = None
        self.catch_all: list[Route] = []
        # Routes ending at this node, in registration order
        self.routes: list[Route] = []


@dataclass(slots=True)
class _ParamEdge:
    """A parameter edge in the trie."""

    param_type: str
    regex: re.Pattern[str]
    convert: Callable[[str], Any]
    node: _TrieNode = field(default_factory=_TrieNode)


class Router:
    """Maps patterns to callbacks and matches requests against them.

    Usage::

        router = Router()
        router.map("GET /users/{id:int}", show_user)
        match = router.route(request)   # RouteMatch(show_user, [42]) or None
    """

    __slots__ = ("_root", "_routes")

    def __init__(self) -> None:
        self._root = _TrieNode()
        self._routes: list[Route] = []

    def map(self, pattern: str, callback: Any) -> Route:
        """Add a route for *pattern*.

        Raises ``ValueError`` for a parameter type other than
        ``str``, ``int``, ``float`` or ``path``.
        """
        methods, path = parse_pattern(pattern)
        segments = [] if path == "*" else parse_path(path)
        for seg in segments:
            if seg.is_param and seg.param_type != "path" and seg.param_type not in _CONVERTERS:
                msg = f"Unknown parameter type {seg.param_type!r} in route {pattern!r}"
                raise ValueError(msg)

        route = Route(pattern=pattern, path=path, methods=methods, callback=callback)
        self._routes.append(route)

        if path == "*":
            self._root.catch_all.append(route)
            return route

        node = self._root
        for seg in segments:
            if seg.is_param and seg.param_type == "path":
                # Catch-all: consumes rest of path, must be last segment
                node.catch_all.append(route)
                return route
            if seg.is_param:
                if node.param_child is None:
                    regex, convert = _CONVERTERS[seg.param_type]
                    node.param_child = _ParamEdge(seg.param_type, regex, convert)
                node = node.param_child.node
            else:
                node = node.children.setdefault(seg.value, _TrieNode())
        node.routes.append(route)
        return route

    @property
    def routes(self) -> list[Route]:
        """All mapped routes, in registration order."""
        return list(self._routes)

    def route(self, request: Request) -> RouteMatch | None:
        """Match *request* against the mapped routes.

        Returns ``None`` when no route matches the path and method.
        """
        parts = [p for p in request.path.strip("/").split("/") if p]
        return self._match_node(self._root, parts, 0, [], request.method)

    def _match_node(
        self,
        node: _TrieNode,
        parts: list[str],
        index: int,
        params: list[Any],
        method: str,
    ) -> RouteMatch | None:
        """Recursively match path parts: static, then param, then catch-all."""
        if index == len(parts):
            for route in node.routes:
                if route.allows(method):
                    return RouteMatch(route.callback, params)
        else:
            part = parts[index]

            child = node.children.get(part)
            if child is not None:
                result = self._match_node(child, parts, index + 1, params, method)
                if result is not None:
                    return result

            edge = node.param_child
            if edge is not None and edge.regex.fullmatch(part):
                value = edge.convert(part)
                result = self._match_node(edge.node, parts, index + 1, [*params, value], method)
                if result is not None:
                    return result

        for route in node.catch_all:
            if route.allows(method):
                if route.path == "*":
                    return RouteMatch(route.callback, params)
                if index < len(parts):
                    return RouteMatch(route.callback, [*params, "/".join(parts[index:])])
        return None
