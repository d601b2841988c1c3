"""Routing — maps URL patterns to callbacks.

Routes can be added at any point during setup; matching walks a trie
keyed by path segment.
"""

from skylark.routing.route import Route, RouteMatch
from skylark.routing.router import Router

__all__ = ["Route", "RouteMatch", "Router"]
