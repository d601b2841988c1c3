"""Skylark CLI — development server and route listing.

Entry point registered as ``skylark`` in ``pyproject.toml``::

    [project.scripts]
    skylark = "skylark.cli:main"
"""

import argparse
import sys


def main(argv: list[str] | None = None) -> None:
    """CLI entry point for the ``skylark`` command."""
    parser = argparse.ArgumentParser(
        prog="skylark",
        description="Skylark: an extensible micro-framework built on named, filterable calls.",
    )
    subparsers = parser.add_subparsers(dest="command")

    # -- skylark run ------------------------------------------------------
    run_parser = subparsers.add_parser("run", help="Start the development server")
    run_parser.add_argument("app", help="Import string (e.g. myapp:app)")
    run_parser.add_argument("--host", default=None, help="Bind host address")
    run_parser.add_argument("--port", type=int, default=None, help="Bind port number")
    run_parser.add_argument("--reload", action="store_true", help="Reload on file changes")

    # -- skylark routes ---------------------------------------------------
    routes_parser = subparsers.add_parser("routes", help="List mapped routes")
    routes_parser.add_argument("app", help="Import string (e.g. myapp:app)")

    args = parser.parse_args(argv)

    if args.command is None:
        parser.print_help()
        sys.exit(0)

    if args.command == "run":
        from skylark.cli._run import run_server

        run_server(args)
    elif args.command == "routes":
        from skylark.cli._routes import run_routes

        run_routes(args)
