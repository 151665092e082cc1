"""Mutable route table used while the app is being configured.

Holds every original attribute route plus the localized variants the
localization conventions add. Routes are tracked by identity, so two
actions sharing a template stay distinct. The table is only touched
during ``App._freeze()``; afterwards it is compiled into a ``Router``.
"""

from collections.abc import Iterable, Iterator

from routelocale.routing.route import Route


class RouteTable:
    """Ordered collection of routes with identity-based membership.

    Usage::

        table = RouteTable(discovered_routes)
        for route in table.originals():
            ...
        table.replace(old_variant, new_variant)
    """

    __slots__ = ("_routes",)

    def __init__(self, routes: Iterable[Route] = ()) -> None:
        self._routes: list[Route] = list(routes)

    def add(self, route: Route) -> None:
        self._routes.append(route)

    def remove(self, route: Route) -> None:
        """Remove *route*. Raises ``KeyError`` if it is not in the table."""
        self._routes.pop(self._index(route))

    def replace(self, old: Route, new: Route) -> None:
        """Swap *old* for *new*, keeping its position in the table."""
        self._routes[self._index(old)] = new

    def originals(self) -> list[Route]:
        """Routes discovered from controllers, in registration order."""
        return [route for route in self._routes if not route.is_localized]

    def localized(self, culture: str | None = None) -> list[Route]:
        """Localized variants, optionally only those for *culture*."""
        return [
            route
            for route in self._routes
            if route.is_localized and (culture is None or route.culture == culture)
        ]

    def variants(self, original: Route) -> list[Route]:
        """All localized variants derived from *original*."""
        return [route for route in self._routes if route.original is original]

    def variant(self, original: Route, culture: str) -> Route | None:
        """The variant of *original* for *culture*, or ``None``."""
        for route in self._routes:
            if route.original is original and route.culture == culture:
                return route
        return None

    def _index(self, route: Route) -> int:
        for i, candidate in enumerate(self._routes):
            if candidate is route:
                return i
        msg = f"Route {route.path!r} is not in the route table"
        raise KeyError(msg)

    def __contains__(self, route: object) -> bool:
        return any(candidate is route for candidate in self._routes)

    def __iter__(self) -> Iterator[Route]:
        return iter(list(self._routes))

    def __len__(self) -> int:
        return len(self._routes)

    def __repr__(self) -> str:
        return f"<RouteTable originals={len(self.originals())} localized={len(self.localized())}>"
