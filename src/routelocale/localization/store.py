"""Selector/processor pairs accumulated by the builder."""

from dataclasses import dataclass

from routelocale.localization.processors import RouteProcessor
from routelocale.localization.selectors import RouteSelector


@dataclass(frozen=True, slots=True)
class RouteSelectorProcessorPair:
    selector: RouteSelector
    processor: RouteProcessor


class RouteTranslationStore(list[RouteSelectorProcessorPair]):
    """Ordered pairs, applied first to last when the app freezes."""
