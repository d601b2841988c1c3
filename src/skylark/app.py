"""Skylark application.

The App is the dispatch context: it owns the method, filter and service
registries, the variable store and the output buffer for one process or
one isolated worker. Every framework verb is a named call through
``dispatch``, so users can wrap any of them with filters or add their
own::

    app = App()

    @app.route("GET /hello/{name}")
    def hello(name):
        return f"Hello, {name}!"

    app.map("greet", lambda who: f"hi {who}")
    app.before("greet", lambda args: args.__setitem__(0, args[0].upper()))
    app.greet("bob")   # "hi BOB"
"""

import html
import logging
import threading
from collections.abc import Callable, Mapping, Sequence
from datetime import UTC, datetime
from email.utils import formatdate, parsedate_to_datetime
from typing import Any

from skylark._internal.asgi import Receive, Scope, Send, read_body
from skylark._internal.buffer import OutputBuffer
from skylark.config import AppConfig
from skylark.core.callback import MethodCallback, as_callback, invoke
from skylark.core.dispatcher import Dispatcher
from skylark.core.filters import FilterRegistry
from skylark.core.methods import MethodRegistry
from skylark.core.services import Resolver, ServiceRecipe, ServiceRegistry
from skylark.core.variables import VariableStore
from skylark.errors import RequestTerminated
from skylark.http.request import Request
from skylark.http.response import Response
from skylark.loader import Autoloader
from skylark.routing.router import Router
from skylark.server.errors import NOT_FOUND_PAGE, fallback_response, render_error_page
from skylark.server.sender import send_response
from skylark.templating.view import View

logger = logging.getLogger("skylark.server")

# Lifecycle operations installed as built-in methods (implemented as ``_<name>``)
BUILTIN_METHODS: tuple[str, ...] = (
    "start",
    "stop",
    "route",
    "halt",
    "error",
    "not_found",
    "redirect",
    "render",
    "etag",
    "last_modified",
)

LIB_PATH_VAR = "skylark.lib.path"


class App:
    """The skylark application and dispatch context.

    Thread safety:
        Setup (``map``, ``register``, ``before``, ``route``...) is expected
        to happen single-threaded at import time. ``handle()`` serialises
        whole request cycles on a lock, because a cycle mutates the shared
        request/response instances and the output buffer. Servers that
        need parallel requests should give each worker its own App.
    """

    __slots__ = (
        "_dispatcher",
        "_initialized",
        "_loader",
        "_lock",
        "_outcome",
        "_resolver",
        "_vars",
        "config",
        "output",
    )

    def __init__(
        self,
        config: AppConfig | None = None,
        *,
        resolver: Resolver | None = None,
    ) -> None:
        self.config: AppConfig = config or AppConfig()
        self._resolver = resolver
        self._lock = threading.Lock()
        self._loader: Autoloader | None = None
        self._initialized = False
        self._build_registries()
        self.init()

    def _build_registries(self) -> None:
        self._dispatcher = Dispatcher(
            MethodRegistry(reserved=RESERVED_NAMES),
            FilterRegistry(),
            ServiceRegistry(self._resolver or self._autoload_recipe, reserved=RESERVED_NAMES),
        )
        self._vars = VariableStore()
        self.output = OutputBuffer()
        self._outcome: Response | None = None

    # -- Setup --

    def init(self) -> None:
        """Install the default services, built-in methods and filters.

        Idempotent: only the first call has any effect. Called by
        ``__init__`` and again by ``reset()``.
        """
        if self._initialized:
            return

        services = self._dispatcher.services
        services.register("request", Request)
        services.register("response", Response, (), MethodCallback(self, "_track_response"))
        services.register("router", Router)
        services.register(
            "view",
            View,
            (self.config.template_dir, self.config.template_extension, self.config.autoescape),
        )

        for name in BUILTIN_METHODS:
            self._dispatcher.methods.builtin(name, MethodCallback(self, f"_{name}"))

        # Normal completion of start always flushes the response
        self._dispatcher.after("start", MethodCallback(self, "_flush_after_start"))

        self._vars.set(LIB_PATH_VAR, str(self.config.lib_path))
        self._initialized = True

    def reset(self) -> None:
        """Drop every mapped method, filter, service and variable, then re-init."""
        self._initialized = False
        self._loader = None
        self._build_registries()
        self.init()

    @property
    def dispatcher(self) -> Dispatcher:
        return self._dispatcher

    # -- Extension API --

    def map(self, name: str, callback: Any = None) -> Any:
        """Map *callback* to the framework method *name*.

        Without a callback, returns a decorator. Raises
        ``ReservedNameError`` for built-in and App method names.
        """
        if callback is None:

            def decorator(func: Callable[..., Any]) -> Callable[..., Any]:
                self._dispatcher.map(name, func)
                return func

            return decorator
        self._dispatcher.map(name, callback)
        return callback

    def register(
        self,
        name: str,
        cls: Any,
        args: Sequence[Any] = (),
        callback: Any = None,
    ) -> None:
        """Register *cls* as the service *name*.

        *args* are passed positionally on construction; *callback* runs
        with each newly built instance.
        """
        self._dispatcher.services.register(name, cls, args, callback)

    def before(self, name: str, callback: Any = None) -> Any:
        """Add a filter that runs before *name*. Usable as a decorator."""
        return self._add_filter("before", name, callback)

    def after(self, name: str, callback: Any = None) -> Any:
        """Add a filter that runs after *name*. Usable as a decorator."""
        return self._add_filter("after", name, callback)

    def _add_filter(self, stage: str, name: str, callback: Any) -> Any:
        add = self._dispatcher.before if stage == "before" else self._dispatcher.after
        if callback is None:

            def decorator(func: Callable[..., Any]) -> Callable[..., Any]:
                add(name, func)
                return func

            return decorator
        add(name, callback)
        return callback

    def dispatch(self, name: str, *args: Any) -> Any:
        """Run the mapped call *name*, or load the service *name*."""
        return self._dispatcher.dispatch(name, args)

    def load(self, name: str, shared: bool = True) -> Any:
        """Load the service *name*, bypassing any mapped method."""
        return self._dispatcher.services.load(name, shared)

    def execute(self, callback: Any, *args: Any) -> Any:
        """Invoke any callback form with positional *args*."""
        return invoke(as_callback(callback), args)

    # -- Variables --

    def get(self, key: str, default: Any = None) -> Any:
        return self._vars.get(key, default)

    def set(self, key: str | Mapping[str, Any] | object, value: Any = None) -> None:
        self._vars.set(key, value)

    def has(self, key: str) -> bool:
        return self._vars.has(key)

    def clear(self, key: str | None = None) -> None:
        self._vars.clear(key)

    # -- Dynamic verbs --

    def __getattr__(self, name: str) -> Callable[..., Any]:
        """Expose every dispatchable name as a method: ``app.halt(404)``."""
        if name.startswith("_"):
            raise AttributeError(name)

        def call(*args: Any) -> Any:
            return self.dispatch(name, *args)

        call.__name__ = call.__qualname__ = name
        return call

    # -- Request cycle --

    def handle(self, request: Request) -> Response:
        """Run one request through ``start`` and return the sent response."""
        with self._lock:
            services = self._dispatcher.services
            services.evict("request", "response")
            services.seed("request", request)
            self.output = OutputBuffer()
            self._outcome = None

            try:
                self.dispatch("start")
            except RequestTerminated:
                pass
            except Exception as exc:
                if not self.config.handle_errors:
                    raise
                self.handle_exception(exc)

            response = self._outcome
            if response is None:
                response = self.dispatch("response")

        logger.debug("%s %s -> %d", request.method, request.path, response.status_code)
        return response

    def handle_exception(self, exc: Exception) -> None:
        """Turn *exc* into a 500 response through the ``error`` operation.

        If producing that response fails too, a static fallback page
        becomes the outcome and nothing else is dispatched.
        """
        try:
            self.dispatch("error", exc)
        except RequestTerminated:
            pass
        except Exception as fault:
            logger.critical("Failed to send error response for %r", exc, exc_info=fault)
            self._outcome = fallback_response(fault, debug=self.config.debug)

    def _track_response(self, response: Response) -> None:
        response.bind(self._record_outcome)

    def _record_outcome(self, response: Response) -> None:
        self._outcome = response

    def _autoload_recipe(self, name: str) -> ServiceRecipe | None:
        """Resolve an unregistered name to its capitalised class on the lib path."""
        base_path = self._vars.get(LIB_PATH_VAR, ".")
        if self._loader is None or str(self._loader.base_path) != str(base_path):
            self._loader = Autoloader(base_path)
        class_name = name[:1].upper() + name[1:]
        if not self._loader.path_for(class_name).is_file():
            return None
        return ServiceRecipe(self._loader.load(class_name))

    # -- Built-in methods --

    def _route(self, pattern: str, callback: Any = None) -> Any:
        router: Router = self.dispatch("router")
        if callback is None:

            def decorator(func: Callable[..., Any]) -> Callable[..., Any]:
                router.map(pattern, func)
                return func

            return decorator
        router.map(pattern, callback)
        return callback

    def _start(self) -> None:
        request: Request = self.dispatch("request")
        match = self.dispatch("router").route(request)

        if match is None:
            self.dispatch("not_found")
        else:
            result = invoke(as_callback(match.callback), match.params)
            if isinstance(result, (str, bytes)):
                self.output.write(result)

        if request.is_ajax:
            self.dispatch("response").cache(False)

    def _flush_after_start(self, _result: Any) -> None:
        self.dispatch("stop")

    def _stop(self) -> None:
        self.dispatch("response").write(self.output.drain()).send()

    def _halt(self, code: int = 200, text: str = "") -> None:
        response: Response = self.dispatch("response", False)
        response.status(code).write(text).cache(False).send()
        raise RequestTerminated(response)

    def _error(self, exc: BaseException) -> None:
        if self.config.log_errors:
            request: Request = self.dispatch("request")
            logger.error("500 %s %s", request.method, request.path, exc_info=exc)
        response: Response = self.dispatch("response", False)
        response.status(500).write(render_error_page(exc, debug=self.config.debug)).send()
        raise RequestTerminated(response)

    def _not_found(self) -> None:
        response: Response = self.dispatch("response", False)
        response.status(404).write(NOT_FOUND_PAGE).send()
        raise RequestTerminated(response)

    def _redirect(self, url: str, code: int = 303) -> None:
        response: Response = self.dispatch("response", False)
        response.status(code).header("Location", url).write(html.escape(url)).send()
        raise RequestTerminated(response)

    def _render(self, template: str, data: Mapping[str, Any] | None = None) -> None:
        self.output.write(self.dispatch("view").render(template, data))

    def _etag(self, id: str, kind: str = "strong") -> None:  # noqa: A002
        value = f'"{id}"'
        if kind == "weak":
            value = f"W/{value}"
        self.dispatch("response").header("ETag", value)

        request: Request = self.dispatch("request")
        if _etag_matches(request.header("If-None-Match"), value):
            self.dispatch("halt", 304)

    def _last_modified(self, timestamp: int | float | datetime) -> None:
        if isinstance(timestamp, datetime):
            timestamp = timestamp.timestamp()
        seconds = int(timestamp)
        self.dispatch("response").header("Last-Modified", formatdate(seconds, usegmt=True))

        request: Request = self.dispatch("request")
        since = _parse_http_date(request.header("If-Modified-Since"))
        if since is not None and seconds <= since:
            self.dispatch("halt", 304)

    # -- ASGI --

    async def __call__(self, scope: Scope, receive: Receive, send: Send) -> None:
        """ASGI 3.0 entry point.

        Answers the lifespan protocol, then runs each HTTP request through
        the synchronous ``handle()`` cycle.
        """
        if scope["type"] == "lifespan":
            await self._handle_lifespan(receive, send)
            return
        if scope["type"] != "http":
            return

        body = await read_body(receive)
        response = self.handle(Request.from_asgi(scope, body))
        await send_response(response, send)

    async def _handle_lifespan(self, receive: Receive, send: Send) -> None:
        while True:
            message = await receive()
            if message["type"] == "lifespan.startup":
                await send({"type": "lifespan.startup.complete"})
            elif message["type"] == "lifespan.shutdown":
                await send({"type": "lifespan.shutdown.complete"})
                return

    def run(self, host: str | None = None, port: int | None = None) -> None:
        """Serve the app with the development server."""
        from skylark.server.dev import run_dev_server

        run_dev_server(self, host or self.config.host, port or self.config.port)


RESERVED_NAMES: frozenset[str] = frozenset(BUILTIN_METHODS) | frozenset(
    name for name in dir(App) if not name.startswith("_")
)
"""Names that ``map()`` and ``register()`` refuse."""


def _etag_matches(header: str | None, etag: str) -> bool:
    """Weak comparison of *etag* against an ``If-None-Match`` value."""
    if not header:
        return False
    candidates = [c.strip() for c in header.split(",")]
    if "*" in candidates:
        return True
    return etag.removeprefix("W/") in {c.removeprefix("W/") for c in candidates}


def _parse_http_date(value: str | None) -> int | None:
    if not value:
        return None
    try:
        parsed = parsedate_to_datetime(value)
    except (TypeError, ValueError):
        return None
    if parsed.tzinfo is None:
        parsed = parsed.replace(tzinfo=UTC)
    return int(parsed.timestamp())
