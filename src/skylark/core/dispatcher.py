"""Dispatcher — resolves a name to a mapped call or a service load.

A name with an override or a built-in is a *mapped call*: it runs
through the before-filters, the callback, then the after-filters.
Every other name is a *service load*, answered by the service registry.
Both share one namespace and one call syntax.
"""

import logging
from collections.abc import Sequence
from typing import Any

from skylark.core.callback import Callback, invoke
from skylark.core.filters import FilterRegistry, run_filters
from skylark.core.methods import MethodRegistry
from skylark.core.services import ServiceRegistry

logger = logging.getLogger("skylark.dispatch")


class Dispatcher:
    """The dispatch facade over the method, filter and service registries."""

    __slots__ = ("filters", "methods", "services")

    def __init__(
        self,
        methods: MethodRegistry | None = None,
        filters: FilterRegistry | None = None,
        services: ServiceRegistry | None = None,
    ) -> None:
        self.methods = methods or MethodRegistry()
        self.filters = filters or FilterRegistry()
        self.services = services or ServiceRegistry()

    def map(self, name: str, callback: Any) -> None:
        self.methods.map(name, callback)

    def before(self, name: str, callback: Any) -> None:
        self.filters.add("before", name, callback)

    def after(self, name: str, callback: Any) -> None:
        self.filters.add("after", name, callback)

    def dispatch(self, name: str, args: Sequence[Any] = ()) -> Any:
        """Resolve and run *name* with *args*.

        For a service load the first argument, when given, selects the
        shared (truthy) or fresh (falsy) instance; it defaults to shared.
        """
        callback = self.methods.resolve(name)
        if callback is None:
            shared = bool(args[0]) if args else True
            return self.services.load(name, shared=shared)
        return self.call(name, callback, args)

    def call(self, name: str, callback: Callback, args: Sequence[Any]) -> Any:
        """Run *callback* as the operation *name*, wrapped in its filters."""
        before = run_filters(self.filters.before(name), list(args))
        if before.halted:
            logger.debug("before-filters halted %r", name)
            return None

        if isinstance(before.data, (str, bytes)) or not isinstance(before.data, Sequence):
            kind = type(before.data).__name__
            msg = f"before-filters of {name!r} must leave an argument sequence, got {kind}"
            raise TypeError(msg)

        result = invoke(callback, before.data)

        after = run_filters(self.filters.after(name), result)
        if after.halted:
            logger.debug("after-filters halted %r", name)
        return after.data
