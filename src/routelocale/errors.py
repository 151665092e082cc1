"""routelocale exception hierarchy.

Shared across the controller model, route table, router, and the
localization builder so every module raises and catches the same types.
"""

from dataclasses import dataclass


class RouteLocaleError(Exception):
    """Base for all routelocale-specific errors."""


class ConfigurationError(RouteLocaleError):
    """Raised when app or localization configuration is invalid.

    Builder misuse surfaces immediately; template problems surface when
    the localization conventions run during ``App._freeze()``.
    """


class SelectorNotDefinedError(ConfigurationError):
    """A builder call needs a route selector but none has been defined.

    Raised by ``filter()`` and by every processor operation
    (``translate_action()``, ``remove_original_routes()``, ...) when no
    ``where_*()`` call came first.
    """


class ActionReferenceError(ConfigurationError, ValueError):
    """An action reference does not name a method of its controller.

    Raised by ``filter()`` and the typed ``where_action()`` when handed
    something other than an action method of the controller class.
    """


class URLBuildError(RouteLocaleError, LookupError):
    """``url_for`` could not build a URL.

    The route name is unknown, or a path parameter is missing.
    """


@dataclass(frozen=True, slots=True)
class HTTPError(RouteLocaleError):
    """An error that maps directly to an HTTP status code.

    Raised by the router when a path cannot be resolved.
    """

    status: int
    detail: str = ""
    headers: tuple[tuple[str, str], ...] = ()

    def __str__(self) -> str:
        if self.detail:
            return f"{self.status}: {self.detail}"
        return str(self.status)


class NotFound(HTTPError):  # noqa: N818 — conventional name in web frameworks
    """404 — no route matched the request path."""

    def __init__(self, detail: str = "Not Found") -> None:
        super().__init__(status=404, detail=detail)


class MethodNotAllowed(HTTPError):  # noqa: N818 — conventional name in web frameworks
    """405 — route exists but not for this HTTP method.

    Includes an ``Allow`` header listing the valid methods.
    """

    def __init__(self, allowed: frozenset[str], detail: str = "") -> None:
        allow_value = ", ".join(sorted(allowed))
        default_detail = f"Method not allowed. Allowed methods: {allow_value}"
        super().__init__(
            status=405,
            detail=detail or default_detail,
            headers=(("Allow", allow_value),),
        )
