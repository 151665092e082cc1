"""Route selectors — decide which original routes a processor touches.

A selector is any object with a ``select(table)`` method returning the
original routes it picks. No base class required::

    class OnlyPosts:
        def select(self, table: RouteTable) -> list[Route]:
            return [r for r in table.originals() if "POST" in r.methods]

Selectors never return localized variants: processors always start from
the original route and find or create its variant themselves.
"""

from collections.abc import Sequence
from typing import Protocol

from routelocale.localization.localizer import Localizer
from routelocale.routing.route import Route
from routelocale.routing.table import RouteTable


class RouteSelector(Protocol):
    """Protocol for route selectors."""

    def select(self, table: RouteTable) -> list[Route]: ...


class _RouteCriteria:
    """Controller/action criteria shared by the basic and filter selectors.

    An unset criterion (``None`` or, for the namespace, ``""``) matches
    everything. ``action_arguments`` matches as an exact type sequence.
    """

    __slots__ = ("action", "action_arguments", "controller", "controller_namespace")

    def __init__(self) -> None:
        self.controller: str | None = None
        self.controller_namespace: str | None = None
        self.action: str | None = None
        self.action_arguments: tuple[type, ...] | None = None

    def matches(self, route: Route) -> bool:
        if self.controller is not None and route.controller != self.controller:
            return False
        if self.controller_namespace and route.controller_namespace != self.controller_namespace:
            return False
        if self.action is not None and route.action != self.action:
            return False
        return self.action_arguments is None or route.action_arguments == tuple(
            self.action_arguments
        )

    def describe(self) -> str:
        parts = [
            f"{label}={value!r}"
            for label, value in (
                ("controller", self.controller),
                ("namespace", self.controller_namespace),
                ("action", self.action),
                ("arguments", self.action_arguments),
            )
            if value
        ]
        return ", ".join(parts) or "any route"


class BasicRouteCriteriaRouteSelector(_RouteCriteria):
    """Select original routes by controller, namespace, action, and arguments."""

    __slots__ = ("localizer",)

    def __init__(self, localizer: Localizer) -> None:
        super().__init__()
        self.localizer = localizer

    def select(self, table: RouteTable) -> list[Route]:
        return [
            route
            for route in table
            if self.localizer.is_original(route) and self.matches(route)
        ]

    def __repr__(self) -> str:
        return f"<BasicRouteCriteriaRouteSelector {self.describe()}>"


class FilterRouteSelector(_RouteCriteria):
    """Wrap another selector and drop the routes matching these criteria.

    ::

        selector = FilterRouteSelector(inner)
        selector.controller = "Home"
        selector.action = "book"
        selector.select(table)  # inner's routes, minus Home.book
    """

    __slots__ = ("inner",)

    def __init__(self, inner: RouteSelector) -> None:
        super().__init__()
        self.inner = inner

    def select(self, table: RouteTable) -> list[Route]:
        return [route for route in self.inner.select(table) if not self.matches(route)]

    def __repr__(self) -> str:
        return f"<FilterRouteSelector not({self.describe()}) of {self.inner!r}>"


class TranslatedRoutesRouteSelector:
    """Select original routes that have a variant for every given culture."""

    __slots__ = ("cultures", "localizer")

    def __init__(self, localizer: Localizer, cultures: Sequence[str]) -> None:
        self.localizer = localizer
        self.cultures = tuple(cultures)

    def select(self, table: RouteTable) -> list[Route]:
        return [
            route
            for route in table.originals()
            if all(self.localizer.has_translation(table, route, c) for c in self.cultures)
        ]

    def __repr__(self) -> str:
        return f"<TranslatedRoutesRouteSelector cultures={self.cultures!r}>"


class UntranslatedRoutesRouteSelector:
    """Select original routes that have no variant for the culture yet."""

    __slots__ = ("culture", "localizer")

    def __init__(self, localizer: Localizer, culture: str) -> None:
        self.localizer = localizer
        self.culture = culture

    def select(self, table: RouteTable) -> list[Route]:
        return [
            route
            for route in table.originals()
            if not self.localizer.has_translation(table, route, self.culture)
        ]

    def __repr__(self) -> str:
        return f"<UntranslatedRoutesRouteSelector culture={self.culture!r}>"
