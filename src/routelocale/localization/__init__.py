"""Route localization — per-culture variants of attribute routes.

A fluent ``RouteTranslationBuilder`` records selector/processor pairs;
``LocalizationConvention`` applies them to the route table when the app
freezes.
"""

from routelocale.localization.builder import RouteTranslationBuilder, TypedRouteTranslationBuilder
from routelocale.localization.config import LocalizationConfig
from routelocale.localization.convention import LocalizationConvention
from routelocale.localization.localizer import Localizer
from routelocale.localization.processors import (
    CopyTemplateRouteProcessor,
    DisableOriginalRouteProcessor,
    RouteProcessor,
    TranslateActionRouteProcessor,
    TranslateControllerRouteProcessor,
)
from routelocale.localization.selectors import (
    BasicRouteCriteriaRouteSelector,
    FilterRouteSelector,
    RouteSelector,
    TranslatedRoutesRouteSelector,
    UntranslatedRoutesRouteSelector,
)
from routelocale.localization.store import RouteSelectorProcessorPair, RouteTranslationStore

__all__ = [
    "BasicRouteCriteriaRouteSelector",
    "CopyTemplateRouteProcessor",
    "DisableOriginalRouteProcessor",
    "FilterRouteSelector",
    "LocalizationConfig",
    "LocalizationConvention",
    "Localizer",
    "RouteProcessor",
    "RouteSelector",
    "RouteSelectorProcessorPair",
    "RouteTranslationBuilder",
    "RouteTranslationStore",
    "TranslateActionRouteProcessor",
    "TranslateControllerRouteProcessor",
    "TranslatedRoutesRouteSelector",
    "TypedRouteTranslationBuilder",
    "UntranslatedRoutesRouteSelector",
]
