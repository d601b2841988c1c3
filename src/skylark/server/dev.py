"""Development server.

Serves the live App object with pounce. pounce takes an import string
in its ``run()`` helper, so the ``Server`` class is used directly.
"""


def run_dev_server(
    app: object,
    host: str,
    port: int,
    *,
    reload: bool = False,
    app_path: str | None = None,
) -> None:
    """Start a single-worker pounce server for *app*.

    Args:
        app: ASGI callable (skylark App instance).
        host: Bind host address.
        port: Bind port number.
        reload: Restart on file changes; needs *app_path*.
        app_path: Optional ``"module:attribute"`` import string, used by
            pounce to reimport the app on each reload cycle.
    """
    from pounce.config import ServerConfig
    from pounce.server import Server

    config = ServerConfig(host=host, port=port, workers=1, reload=reload)
    server = Server(config, app, app_path=app_path)
    server.run()
