"""Dispatch-scoped culture via ContextVar.

``App.dispatch()`` sets ``culture_var`` to the culture of the matched
route for the duration of the action call. Original (unlocalized) routes
leave it unset, so ``get_culture()`` raises ``LookupError`` there.

Thread safety:
    ``ContextVar`` is task-local under asyncio and thread-local under
    free-threading. No locks needed.
"""

from contextvars import ContextVar

culture_var: ContextVar[str] = ContextVar("routelocale_culture")
"""Culture of the route being dispatched."""


def get_culture() -> str:
    """Return the culture of the route being dispatched.

    Raises ``LookupError`` outside a dispatch or for an unlocalized route.
    """
    return culture_var.get()


def current_culture(default: str | None = None) -> str | None:
    """Like ``get_culture()`` but returns *default* instead of raising."""
    return culture_var.get(default)
