"""Compiled router with trie-based path matching.

Built from the final ``RouteTable`` when the app freezes, after the
localization conventions have added their variants. Besides matching,
the router builds URLs by route name, picking the variant for the
requested culture.
"""

import re
from dataclasses import dataclass, field
from typing import TypeAlias
from urllib.parse import quote, urlencode

from routelocale.errors import ConfigurationError, MethodNotAllowed, NotFound, URLBuildError
from routelocale.routing.params import CONVERTERS
from routelocale.routing.route import Route, RouteMatch
from routelocale.routing.templates import parse_path

# Parameter edges are tried in this order; anything unlisted comes last
_CONVERTER_PRIORITY = {"int": 0, "float": 1}

# method -> (route, parameter names in template order)
_Terminal: TypeAlias = dict[str, tuple[Route, tuple[str, ...]]]


class _TrieNode:
    """A node in the route trie. Mutable during compilation only."""

    __slots__ = ("catch_all", "children", "param_edges", "routes_by_method")

    def __init__(self) -> None:
        # Static segment children: "users" -> node
        self.children: dict[str, _TrieNode] = {}
        # One edge per converter type, most specific first
        self.param_edges: list[_ParamEdge] = []
        # Catch-all routes (path converter)
        self.catch_all: _Terminal = {}
        # Routes ending at this node
        self.routes_by_method: _Terminal = {}


@dataclass(slots=True)
class _ParamEdge:
    """A parameter edge in the trie, shared by every route with this converter here.

    Parameter names are not stored on the edge: two routes may name the
    segment differently, so names are taken from the matched route.
    """

    param_type: str
    regex: re.Pattern[str]
    node: _TrieNode = field(default_factory=_TrieNode)


class Router:
    """Compiled router with trie-based path matching.

    Usage::

        router = Router(case_sensitive=False)
        for route in table:
            router.add(route)
        router.compile()
        match = router.match("GET", "/de/heim/buch")
        url = router.url_for("Home.book", culture="de")

    Sibling parameter routes such as ``/Blog/{id:int}`` and
    ``/Blog/{slug}/comments`` live on separate edges; ``int`` and
    ``float`` segments are tried before ``str``.
    """

    __slots__ = ("_case_sensitive", "_compiled", "_names", "_root", "_routes")

    def __init__(self, *, case_sensitive: bool = True) -> None:
        self._root = _TrieNode()
        self._compiled = False
        self._case_sensitive = case_sensitive
        self._routes: list[Route] = []
        # name -> culture (None for originals) -> route
        self._names: dict[str, dict[str | None, Route]] = {}

    def _key(self, segment: str) -> str:
        return segment if self._case_sensitive else segment.casefold()

    def add(self, route: Route) -> None:
        """Add a route to the router. Must be called before compile().

        Raises ``ConfigurationError`` if another route already answers
        the same method and path. Templates differing only in parameter
        names (``{id:int}`` vs ``{num:int}``) count as the same path.
        """
        if self._compiled:
            msg = "Cannot add routes after compilation."
            raise RuntimeError(msg)

        segments = parse_path(route.path)
        names: list[str] = []
        node = self._root
        terminal: _Terminal | None = None

        for seg in segments:
            if seg.is_param:
                names.append(seg.param_name or "")
            if seg.is_param and seg.param_type == "path":
                # Catch-all: consumes rest of path, must be last segment
                terminal = node.catch_all
                break

            if seg.is_param:
                node = self._param_edge(node, seg.param_type).node
            else:
                key = self._key(seg.value)
                if key not in node.children:
                    node.children[key] = _TrieNode()
                node = node.children[key]

        if terminal is None:
            terminal = node.routes_by_method

        for method in route.methods:
            existing = terminal.get(method)
            if existing is not None:
                msg = (
                    f"Route conflict: {method} {route.path!r} is registered by both "
                    f"{_describe(existing[0])} and {_describe(route)}."
                )
                raise ConfigurationError(msg)
            terminal[method] = (route, tuple(names))

        self._routes.append(route)
        if route.name:
            self._names.setdefault(route.name, {}).setdefault(route.culture, route)

    @staticmethod
    def _param_edge(node: _TrieNode, param_type: str) -> _ParamEdge:
        for edge in node.param_edges:
            if edge.param_type == param_type:
                return edge
        pattern, _ = CONVERTERS[param_type]
        edge = _ParamEdge(param_type=param_type, regex=re.compile(f"^{pattern}$"))
        node.param_edges.append(edge)
        node.param_edges.sort(key=_edge_priority)
        return edge

    @property
    def routes(self) -> list[Route]:
        """Return all registered routes in registration order."""
        return list(self._routes)

    def compile(self) -> None:
        """Freeze the router. No more routes can be added."""
        self._compiled = True

    def match(self, method: str, path: str) -> RouteMatch:
        """Match a request path and method against compiled routes.

        Returns a ``RouteMatch`` on success.
        Raises ``NotFound`` if no route matches the path.
        Raises ``MethodNotAllowed`` if the path matches but the method doesn't.
        """
        parts = [p for p in path.strip("/").split("/") if p]
        result = self._match_node(self._root, parts, 0, ())

        if result is None:
            raise NotFound(f"No route matches {method} {path!r}")

        terminal, values = result

        if method in terminal:
            route, names = terminal[method]
            return RouteMatch(route=route, path_params=dict(zip(names, values, strict=True)))

        raise MethodNotAllowed(frozenset(terminal))

    def _match_node(
        self,
        node: _TrieNode,
        parts: list[str],
        index: int,
        values: tuple[str, ...],
    ) -> tuple[_Terminal, tuple[str, ...]] | None:
        """Recursively match path parts against the trie.

        *values* collects the captured segments in path order.
        """
        if index == len(parts):
            if node.routes_by_method:
                return node.routes_by_method, values
            return None

        part = parts[index]

        # 1. Try static child first (exact match)
        key = self._key(part)
        if key in node.children:
            result = self._match_node(node.children[key], parts, index + 1, values)
            if result is not None:
                return result

        # 2. Try parameter edges, most specific converter first
        for edge in node.param_edges:
            if edge.regex.match(part):
                result = self._match_node(edge.node, parts, index + 1, (*values, part))
                if result is not None:
                    return result

        # 3. Try catch-all
        if node.catch_all:
            return node.catch_all, (*values, "/".join(parts[index:]))

        return None

    # -- URL building --

    def url_for(
        self,
        name: str,
        culture: str | None = None,
        *,
        lowercase: bool = False,
        **params: object,
    ) -> str:
        """Build the URL of the route called *name*.

        Prefers the variant for *culture*, then the original route, then
        any variant when the original was removed. Parameters that do not
        appear in the template are appended as a query string.

        Raises ``URLBuildError`` for unknown names and missing parameters.
        """
        by_culture = self._names.get(name)
        if not by_culture:
            msg = f"No route named {name!r}"
            raise URLBuildError(msg)

        route = by_culture.get(culture) or by_culture.get(None)
        if route is None:
            route = next(iter(by_culture.values()))

        built: list[str] = []
        used: set[str] = set()
        for seg in parse_path(route.path):
            if not seg.is_param:
                built.append(seg.value.lower() if lowercase else seg.value)
                continue
            param_name = seg.param_name or ""
            if param_name not in params:
                msg = f"Missing parameter {param_name!r} for route {name!r} ({route.path})"
                raise URLBuildError(msg)
            used.add(param_name)
            safe = "/" if seg.param_type == "path" else ""
            built.append(quote(str(params[param_name]), safe=safe))

        url = "/" + "/".join(built)
        extra = {k: v for k, v in params.items() if k not in used}
        if extra:
            url = f"{url}?{urlencode(extra)}"
        return url


def _describe(route: Route) -> str:
    if route.controller:
        label = f"{route.controller}.{route.action}"
    else:
        label = getattr(route.handler, "__qualname__", repr(route.handler))
    if route.culture:
        label = f"{label} [{route.culture}]"
    return label


def _edge_priority(edge: _ParamEdge) -> int:
    return _CONVERTER_PRIORITY.get(edge.param_type, len(_CONVERTER_PRIORITY))
