"""``routelocale routes`` and ``routelocale match``.

Resolve an import string to an App, compile it (running the
localization conventions), and print what the router ended up with.
"""

import argparse
import sys

from routelocale.app import App
from routelocale.cli._resolve import resolve_app
from routelocale.errors import HTTPError, RouteLocaleError
from routelocale.routing.route import Route


def _load(import_string: str) -> App:
    try:
        return resolve_app(import_string)
    except (ModuleNotFoundError, AttributeError, TypeError) as exc:
        print(f"Error: {exc}", file=sys.stderr)
        raise SystemExit(1) from exc


def _compiled_routes(app: App) -> list[Route]:
    try:
        return app.routes
    except RouteLocaleError as exc:
        print(f"Error: {exc}", file=sys.stderr)
        raise SystemExit(1) from exc


def _handler_label(route: Route) -> str:
    if route.controller:
        label = f"{route.controller}.{route.action}"
    else:
        label = getattr(route.handler, "__name__", str(route.handler))
    if route.name and route.name != label:
        label = f"{label} ({route.name})"
    return label


def run_routes(args: argparse.Namespace) -> None:
    """Print a table of METHOD, PATH, CULTURE, and HANDLER.

    ``--culture de`` keeps only German variants; ``--culture -`` keeps
    only original routes.
    """
    app = _load(args.app)
    routes = _compiled_routes(app)

    culture = getattr(args, "culture", None)
    if culture == "-":
        routes = [r for r in routes if r.culture is None]
    elif culture:
        routes = [r for r in routes if r.culture == culture]

    if not routes:
        print("No routes registered.")
        return

    rows: list[tuple[str, str, str, str]] = [
        (", ".join(sorted(r.methods)), r.path, r.culture or "-", _handler_label(r))
        for r in routes
    ]

    max_methods = max(6, *(len(r[0]) for r in rows))  # "METHOD" header
    max_path = max(4, *(len(r[1]) for r in rows))  # "PATH" header
    max_culture = max(7, *(len(r[2]) for r in rows))  # "CULTURE" header

    fmt = f"{{:<{max_methods}}}  {{:<{max_path}}}  {{:<{max_culture}}}  {{}}"
    print(fmt.format("METHOD", "PATH", "CULTURE", "HANDLER"))
    sep_len = max_methods + max_path + max_culture + 6 + max(len(r[3]) for r in rows)
    print("-" * min(sep_len, 80))
    for row in rows:
        print(fmt.format(*row))


def run_match(args: argparse.Namespace) -> None:
    """Print the route a path resolves to, or exit 1 when nothing matches."""
    app = _load(args.app)
    _compiled_routes(app)

    try:
        match = app.match(args.method, args.path)
    except HTTPError as exc:
        print(f"{args.method.upper()} {args.path}: {exc}", file=sys.stderr)
        raise SystemExit(1) from exc

    route = match.route
    print(f"route:   {route.path}")
    print(f"handler: {_handler_label(route)}")
    print(f"culture: {route.culture or '-'}")
    if route.original is not None:
        print(f"original: {route.original.path}")
    for name, value in match.path_params.items():
        print(f"param:   {name}={value}")
