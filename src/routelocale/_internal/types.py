"""Shared type aliases used across routelocale modules."""

from collections.abc import Callable
from typing import TypeAlias

from routelocale.routing.table import RouteTable

# Route-table convention: receives the table at freeze time and edits it in place
Convention: TypeAlias = Callable[[RouteTable], None]
