"""Callbacks and the invocation helpers.

A callback is either a plain function value or a ``(target, method)``
pair, where the target is a class (static dispatch) or an instance
(bound dispatch). Every place that calls user code goes through
``invoke`` so the not-callable check lives in exactly one place.

Usage::

    from skylark.core.callback import as_callback, invoke

    invoke(as_callback(greet), ["world"])
    invoke(as_callback((Greeter, "greet")), ["world"])
"""

from collections.abc import Callable, Sequence
from dataclasses import dataclass
from typing import Any

from skylark.errors import NotCallableError


@dataclass(frozen=True, slots=True)
class FunctionCallback:
    """A free-standing function value (or any other callable object)."""

    func: Callable[..., Any]

    def resolve(self) -> Callable[..., Any]:
        return self.func

    def __str__(self) -> str:
        return getattr(self.func, "__qualname__", repr(self.func))


@dataclass(frozen=True, slots=True)
class MethodCallback:
    """A ``(target, method)`` pair resolved by attribute lookup at call time."""

    target: Any
    method: str

    @property
    def is_static(self) -> bool:
        """True when the target is a class rather than an instance."""
        return isinstance(self.target, type)

    def resolve(self) -> Callable[..., Any]:
        try:
            return getattr(self.target, self.method)
        except AttributeError:
            msg = f"{self} does not exist"
            raise NotCallableError(msg) from None

    def __str__(self) -> str:
        owner = self.target if self.is_static else type(self.target)
        return f"{owner.__qualname__}.{self.method}"


type Callback = FunctionCallback | MethodCallback


def as_callback(value: Any) -> Callback:
    """Normalise *value* into a ``Callback``.

    Accepts an existing callback, a ``(target, "method")`` tuple, or any
    callable. Raises ``NotCallableError`` for everything else.
    """
    if isinstance(value, (FunctionCallback, MethodCallback)):
        return value
    if isinstance(value, tuple) and len(value) == 2 and isinstance(value[1], str):
        return MethodCallback(value[0], value[1])
    if callable(value):
        return FunctionCallback(value)
    msg = f"{value!r} is not a valid callback"
    raise NotCallableError(msg)


def invoke(callback: Callback, args: Sequence[Any] = ()) -> Any:
    """Call *callback* with *args* as positional arguments.

    Named arguments are not supported; argument lists map one-to-one
    onto positional parameters.
    """
    func = callback.resolve()
    if not callable(func):
        msg = f"{callback} is not callable"
        raise NotCallableError(msg)
    return func(*args)


def construct(factory: Any, args: Sequence[Any] = ()) -> Any:
    """Build an instance of *factory* from positional *args*."""
    if not callable(factory):
        msg = f"{factory!r} cannot be constructed"
        raise NotCallableError(msg)
    return factory(*args)
