"""Route processors — mutate the route table for the selected routes.

A processor is any object with a ``process(table, routes)`` method. It
receives the original routes a selector picked and edits the table in
place: adding variants, retemplating them, or removing originals.
"""

import logging
from collections.abc import Sequence
from typing import Protocol

from routelocale.localization.localizer import Localizer
from routelocale.routing.route import Route
from routelocale.routing.table import RouteTable

logger = logging.getLogger("routelocale.localization")


class RouteProcessor(Protocol):
    """Protocol for route processors."""

    def process(self, table: RouteTable, routes: Sequence[Route]) -> None: ...


class CopyTemplateRouteProcessor:
    """Add a variant that keeps the original templates.

    With the culture prefix enabled, ``/Home/Book`` becomes
    ``/en/Home/Book``. Routes that already have a variant are left alone.
    """

    __slots__ = ("culture", "localizer")

    def __init__(self, localizer: Localizer, culture: str) -> None:
        self.localizer = localizer
        self.culture = localizer.check_culture(culture)

    def process(self, table: RouteTable, routes: Sequence[Route]) -> None:
        for route in routes:
            if self.localizer.has_translation(table, route, self.culture):
                logger.debug(
                    "%s already has a %s variant, not copying", route.path, self.culture
                )
                continue
            table.add(self.localizer.create_variant(route, self.culture))

    def __repr__(self) -> str:
        return f"<CopyTemplateRouteProcessor culture={self.culture!r}>"


class TranslateControllerRouteProcessor:
    """Replace the controller template of each selected route's variant."""

    __slots__ = ("culture", "localizer", "template")

    def __init__(self, localizer: Localizer, culture: str, template: str) -> None:
        self.localizer = localizer
        self.culture = localizer.check_culture(culture)
        self.template = template

    def process(self, table: RouteTable, routes: Sequence[Route]) -> None:
        for route in routes:
            variant = self.localizer.ensure_variant(table, route, self.culture)
            translated = self.localizer.retemplate(variant, controller_template=self.template)
            table.replace(variant, translated)
            logger.debug("Translated %s -> %s [%s]", route.path, translated.path, self.culture)

    def __repr__(self) -> str:
        return f"<TranslateControllerRouteProcessor culture={self.culture!r} template={self.template!r}>"


class TranslateActionRouteProcessor:
    """Replace the action template of each selected route's variant.

    An action template is meant for a single action; applying one to
    routes of several actions is allowed but logged as a warning.
    """

    __slots__ = ("culture", "localizer", "template")

    def __init__(self, localizer: Localizer, culture: str, template: str) -> None:
        self.localizer = localizer
        self.culture = localizer.check_culture(culture)
        self.template = template

    def process(self, table: RouteTable, routes: Sequence[Route]) -> None:
        actions = {(r.controller_namespace, r.controller, r.action) for r in routes}
        if len(actions) > 1:
            logger.warning(
                "Action template %r [%s] applied to %d different actions: %s",
                self.template,
                self.culture,
                len(actions),
                ", ".join(sorted(f"{c}.{a}" for _, c, a in actions)),
            )
        for route in routes:
            variant = self.localizer.ensure_variant(table, route, self.culture)
            translated = self.localizer.retemplate(variant, action_template=self.template)
            table.replace(variant, translated)
            logger.debug("Translated %s -> %s [%s]", route.path, translated.path, self.culture)

    def __repr__(self) -> str:
        return f"<TranslateActionRouteProcessor culture={self.culture!r} template={self.template!r}>"


class DisableOriginalRouteProcessor:
    """Remove selected original routes once every culture has a variant.

    Originals still missing a variant for one of the cultures are kept
    (their action would otherwise become unreachable) and a warning names
    the missing cultures.
    """

    __slots__ = ("cultures", "localizer")

    def __init__(self, localizer: Localizer, cultures: Sequence[str]) -> None:
        self.localizer = localizer
        self.cultures = tuple(localizer.check_culture(c) for c in cultures)

    def process(self, table: RouteTable, routes: Sequence[Route]) -> None:
        for route in routes:
            missing = [
                c for c in self.cultures if not self.localizer.has_translation(table, route, c)
            ]
            if missing:
                logger.warning(
                    "Keeping original route %s: no variant for %s",
                    route.path,
                    ", ".join(missing),
                )
                continue
            table.remove(route)
            logger.debug("Removed original route %s", route.path)

    def __repr__(self) -> str:
        return f"<DisableOriginalRouteProcessor cultures={self.cultures!r}>"
