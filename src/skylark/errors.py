"""Skylark exception hierarchy.

Shared across the dispatcher, registries, and lifecycle operations so
every module raises and catches the same types.
"""

from typing import Any


class SkylarkError(Exception):
    """Base for all skylark-specific errors."""


class ConfigurationError(SkylarkError):
    """Raised when app configuration is invalid."""


class ReservedNameError(SkylarkError):
    """Raised when ``map()`` or ``register()`` targets a framework method name."""

    def __init__(self, name: str) -> None:
        self.name = name
        super().__init__(f"Cannot override an existing framework method: {name!r}")


class NotCallableError(SkylarkError):
    """Raised when a resolved callback target cannot be invoked."""


class ServiceResolutionError(SkylarkError):
    """Raised when a service cannot be resolved or its construction fails."""

    def __init__(self, name: str, detail: str = "") -> None:
        self.name = name
        self.detail = detail
        message = f"Cannot resolve service {name!r}"
        if detail:
            message = f"{message}: {detail}"
        super().__init__(message)


class RouteLoadError(SkylarkError):
    """Raised when the autoloader cannot locate a class file."""


class RequestTerminated(SkylarkError):  # noqa: N818
    """A response was sent and processing of the current request must stop.

    Raised by ``halt``, ``redirect``, ``not_found`` and ``error`` after
    they send. The request driver in ``App.handle()`` consumes it; it never
    escapes to the server.
    """

    def __init__(self, response: Any) -> None:
        self.response = response
        super().__init__(f"request terminated with status {response.status_code}")
