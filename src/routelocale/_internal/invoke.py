"""Action invocation — one place that knows how to run a routed action.

Actions are methods on a ``Controller`` subclass and may be ``def`` or
``async def``. A fresh controller instance is created per call.

Usage::

    from routelocale._internal.invoke import call_action

    result = await call_action(route, {"id": 7})
"""

import inspect
from collections.abc import Mapping
from typing import Any

from routelocale.errors import ConfigurationError
from routelocale.routing.route import Route


async def call_action(route: Route, params: Mapping[str, Any]) -> Any:
    """Instantiate the route's controller, call its action, await if needed."""
    controller_cls = route.controller_class
    if controller_cls is None:
        msg = f"Route {route.path!r} has no controller class to dispatch to"
        raise ConfigurationError(msg)
    result = route.handler(controller_cls(), **params)
    if inspect.isawaitable(result):
        result = await result
    return result
