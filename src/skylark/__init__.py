"""Skylark — an extensible micro-framework built on named, filterable calls.

Every framework verb (``start``, ``halt``, ``render``...) is a named call
that users can wrap with before/after filters, and any other name is
either a mapped method or a lazily built service.

Basic usage::

    from skylark import App

    app = App()

    @app.route("/")
    def index():
        return "Hello, World!"

    app.run()
"""

__version__ = "0.1.0-dev"
__all__ = [
    "App",
    "AppConfig",
    "Continue",
    "Halt",
    "NotCallableError",
    "ReservedNameError",
    "Request",
    "RequestTerminated",
    "Response",
    "RouteLoadError",
    "ServiceResolutionError",
    "SkylarkError",
]


def __getattr__(name: str) -> object:
    """Lazy imports for public API.

    Keeps ``import skylark`` fast while providing a clean top-level API.
    """
    if name == "App":
        from skylark.app import App

        return App

    if name == "AppConfig":
        from skylark.config import AppConfig

        return AppConfig

    if name == "Request":
        from skylark.http.request import Request

        return Request

    if name == "Response":
        from skylark.http.response import Response

        return Response

    if name in ("Continue", "Halt"):
        from skylark.core import filters as _filters

        return getattr(_filters, name)

    if name in (
        "NotCallableError",
        "ReservedNameError",
        "RequestTerminated",
        "RouteLoadError",
        "ServiceResolutionError",
        "SkylarkError",
    ):
        from skylark import errors as _errors

        return getattr(_errors, name)

    msg = f"module {__name__!r} has no attribute {name!r}"
    raise AttributeError(msg)
