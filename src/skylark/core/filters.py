"""Filter chains — ordered interceptors around a named operation.

A before-filter receives the pending argument list; an after-filter
receives the pending result. Each filter sees every mutation made by
the filters ahead of it in the same chain.

A filter controls the chain through its return value::

    def require_login(args):
        if not session.user:
            return Halt()          # stop the chain, skip the operation

    def shout(result):
        return Continue(result.upper())   # replace the data downstream

Returning ``False`` also halts. Any other value (including ``None``)
continues with the current data.
"""

from collections.abc import Iterable
from dataclasses import dataclass, field
from typing import Any, Literal

from skylark.core.callback import Callback, as_callback, invoke

type Stage = Literal["before", "after"]


@dataclass(frozen=True, slots=True)
class Continue:
    """Continue the chain with *data* in place of the current value.

    In a before-chain *data* is the argument list, so it must be a
    sequence such as ``Continue(["bob"])``, never a bare string.
    """

    data: Any


@dataclass(frozen=True, slots=True)
class Halt:
    """Stop the chain immediately."""


@dataclass(frozen=True, slots=True)
class FilterOutcome:
    """Result of running a chain: the final data and whether it halted."""

    data: Any
    halted: bool = False


def run_filters(filters: Iterable[Callback], data: Any) -> FilterOutcome:
    """Run *filters* in order over *data*."""
    for callback in filters:
        result = invoke(callback, [data])
        if result is False or isinstance(result, Halt):
            return FilterOutcome(data, halted=True)
        if isinstance(result, Continue):
            data = result.data
    return FilterOutcome(data)


@dataclass(slots=True)
class FilterRegistry:
    """Before/after filter lists keyed by operation name. Append-only."""

    _before: dict[str, list[Callback]] = field(default_factory=dict)
    _after: dict[str, list[Callback]] = field(default_factory=dict)

    def add(self, stage: Stage, name: str, callback: Any) -> None:
        chains = self._before if stage == "before" else self._after
        chains.setdefault(name, []).append(as_callback(callback))

    def before(self, name: str) -> tuple[Callback, ...]:
        return tuple(self._before.get(name, ()))

    def after(self, name: str) -> tuple[Callback, ...]:
        return tuple(self._after.get(name, ()))

    def clear(self) -> None:
        self._before.clear()
        self._after.clear()
