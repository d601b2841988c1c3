"""Route definitions and match results."""

from dataclasses import dataclass
from typing import Any, NamedTuple


@dataclass(frozen=True, slots=True)
class PathSegment:
    """A parsed segment of a route path.

    Static:  ``/users``  (is_param=False)
    Param:   ``/{id}``   (is_param=True, param_name="id")
    Typed:   ``/{id:int}`` (is_param=True, param_name="id", param_type="int")
    """

    value: str
    is_param: bool = False
    param_name: str | None = None
    param_type: str = "str"


@dataclass(frozen=True, slots=True)
class Route:
    """A mapped route. ``methods`` holds ``"*"`` for any method."""

    pattern: str
    path: str
    methods: frozenset[str]
    callback: Any

    def allows(self, method: str) -> bool:
        return "*" in self.methods or method.upper() in self.methods


class RouteMatch(NamedTuple):
    """A matched callback and its converted params, in pattern order."""

    callback: Any
    params: list[Any]
