"""Localizer — creates and recognises localized route variants.

Selectors and processors never build variants themselves; they go
through the ``Localizer`` so the culture prefix, template validation,
and the original/variant bookkeeping live in one place.
"""

import logging
from dataclasses import replace

from routelocale.errors import ConfigurationError
from routelocale.localization.config import LocalizationConfig
from routelocale.routing.route import Route
from routelocale.routing.table import RouteTable
from routelocale.routing.templates import combine_templates, template_params

logger = logging.getLogger("routelocale.localization")


class Localizer:
    """Route-variant helper bound to a ``LocalizationConfig``."""

    __slots__ = ("config",)

    def __init__(self, config: LocalizationConfig) -> None:
        self.config = config

    def check_culture(self, culture: str) -> str:
        """Return *culture*, or raise ``ConfigurationError`` if it is not accepted."""
        if culture not in self.config.accepted_cultures:
            msg = (
                f"Culture {culture!r} is not accepted. "
                f"Accepted cultures: {', '.join(self.config.accepted_cultures)}"
            )
            raise ConfigurationError(msg)
        return culture

    def is_localized(self, route: Route) -> bool:
        return route.is_localized

    def is_original(self, route: Route) -> bool:
        return not route.is_localized

    def variant(self, table: RouteTable, route: Route, culture: str) -> Route | None:
        """The variant of *route* (or of its original) for *culture*."""
        return table.variant(route.source, culture)

    def has_translation(self, table: RouteTable, route: Route, culture: str) -> bool:
        return self.variant(table, route, culture) is not None

    def create_variant(self, route: Route, culture: str) -> Route:
        """A localized copy of an original route, not yet added to any table."""
        if route.is_localized:
            msg = f"Cannot localize {route.path!r}: it is already a {route.culture!r} variant"
            raise ConfigurationError(msg)
        self.check_culture(culture)
        return replace(
            route,
            path=self._compose(culture, route.controller_template, route.action_template),
            culture=culture,
            original=route,
        )

    def ensure_variant(self, table: RouteTable, route: Route, culture: str) -> Route:
        """Return the existing variant for *culture*, adding a fresh copy if needed."""
        existing = self.variant(table, route, culture)
        if existing is not None:
            return existing
        created = self.create_variant(route, culture)
        table.add(created)
        logger.debug("Added %s variant %s for %s", culture, created.path, route.path)
        return created

    def retemplate(
        self,
        route: Route,
        *,
        controller_template: str | None = None,
        action_template: str | None = None,
    ) -> Route:
        """Copy of a variant with new controller and/or action templates.

        The translated templates must declare exactly the parameters of
        the original ones, otherwise ``ConfigurationError`` is raised.
        """
        if not route.is_localized:
            msg = f"Only localized variants can be retemplated, not original route {route.path!r}"
            raise ConfigurationError(msg)
        new_controller = route.controller_template if controller_template is None else controller_template
        new_action = route.action_template if action_template is None else action_template

        source = route.source
        expected = template_params(
            combine_templates(None, source.controller_template, source.action_template)
        )
        actual = template_params(combine_templates(None, new_controller, new_action))
        if expected != actual:
            msg = (
                f"Translated template for {source.controller}.{source.action} "
                f"[{route.culture}] must keep the route parameters {_fmt(expected)}, "
                f"got {_fmt(actual)}"
            )
            raise ConfigurationError(msg)

        return replace(
            route,
            path=self._compose(route.culture, new_controller, new_action),
            controller_template=new_controller,
            action_template=new_action,
        )

    def _compose(self, culture: str | None, controller_template: str, action_template: str) -> str:
        prefix = culture if self.config.add_culture_as_route_prefix else None
        return combine_templates(prefix, controller_template, action_template)


def _fmt(params: dict[str, str]) -> str:
    if not params:
        return "(none)"
    return ", ".join(f"{{{name}:{kind}}}" for name, kind in sorted(params.items()))
