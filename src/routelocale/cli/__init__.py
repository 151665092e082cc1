"""routelocale CLI — inspect the compiled, localized route table.

Entry point registered as ``routelocale`` in ``pyproject.toml``::

    [project.scripts]
    routelocale = "routelocale.cli:main"
"""

import argparse
import sys


def main(argv: list[str] | None = None) -> None:
    """CLI entry point for the ``routelocale`` command."""
    parser = argparse.ArgumentParser(
        prog="routelocale",
        description="routelocale — per-culture attribute routes.",
    )
    subparsers = parser.add_subparsers(dest="command")

    # -- routelocale routes ----------------------------------------------
    routes_parser = subparsers.add_parser("routes", help="List compiled routes")
    routes_parser.add_argument(
        "app",
        help="Import string (e.g. myapp:app)",
    )
    routes_parser.add_argument(
        "--culture",
        default=None,
        help="Only list variants for this culture ('-' for original routes)",
    )

    # -- routelocale match -----------------------------------------------
    match_parser = subparsers.add_parser("match", help="Show which action a path resolves to")
    match_parser.add_argument(
        "app",
        help="Import string (e.g. myapp:app)",
    )
    match_parser.add_argument("path", help="Request path (e.g. /de/Heim/Buch)")
    match_parser.add_argument("--method", default="GET", help="HTTP method (default: GET)")

    args = parser.parse_args(argv)

    if args.command is None:
        parser.print_help()
        sys.exit(0)

    if args.command == "routes":
        from routelocale.cli._routes import run_routes

        run_routes(args)
    elif args.command == "match":
        from routelocale.cli._routes import run_match

        run_match(args)
