"""Route and RouteMatch frozen dataclasses."""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass
from typing import Any


@dataclass(frozen=True, slots=True)
class PathSegment:
    """A parsed segment of a route path.

    Static:  ``/users``  (is_param=False)
    Param:   ``/{id}``   (is_param=True, param_name="id")
    Typed:   ``/{id:int}`` (is_param=True, param_name="id", param_type="int")
    """

    value: str
    is_param: bool = False
    param_name: str | None = None
    param_type: str = "str"


@dataclass(frozen=True, slots=True, eq=False)
class Route:
    """A frozen attribute route for one controller action.

    Originals are discovered from controllers; localized variants are
    copies made by the localization processors with ``culture`` set and
    ``original`` pointing back at the route they translate. Routes
    compare by identity: two actions may share a template.

    ``path`` is always the composition of the culture prefix (variants
    only), ``controller_template`` and ``action_template``.
    """

    path: str
    handler: Callable[..., Any]
    methods: frozenset[str]
    name: str | None = None
    controller_class: type | None = None
    controller: str = ""
    controller_namespace: str = ""
    action: str = ""
    action_arguments: tuple[type, ...] = ()
    controller_template: str = ""
    action_template: str = ""
    culture: str | None = None
    original: Route | None = None

    @property
    def is_localized(self) -> bool:
        return self.culture is not None

    @property
    def source(self) -> Route:
        """The original route this one was derived from (itself for originals)."""
        return self.original if self.original is not None else self


@dataclass(frozen=True, slots=True)
class RouteMatch:
    """Result of a successful route match."""

    route: Route
    path_params: dict[str, str]

    @property
    def culture(self) -> str | None:
        return self.route.culture
