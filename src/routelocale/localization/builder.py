"""Fluent builder for route translations.

The builder only records what to do. Every processor call appends a
``RouteSelectorProcessorPair`` to the store; the pairs run against the
route table when the app freezes::

    localization = app.localize(LocalizationConfig(("en", "de"), default_culture="en"))

    (
        localization.use_culture("de")
        .where_controller(HomeController)
        .translate_controller("Heim")
        .where_action(HomeController.book)
        .translate_action("Buch")
    )
    localization.use_culture("en").where_untranslated().add_default_translation()
    localization.use_cultures(["en", "de"]).where_translated().remove_original_routes()

State carried between calls: the current cultures and a factory for the
current selector. The selector is instantiated each time a processor is
added, so later ``where_*`` calls never affect pairs already stored.
"""

from __future__ import annotations

import logging
from collections.abc import Callable, Sequence
from typing import Any, TypeAlias

from routelocale.controllers import controller_name, discover_actions, is_controller, resolve_action
from routelocale.errors import ActionReferenceError, ConfigurationError, SelectorNotDefinedError
from routelocale.localization.config import LocalizationConfig
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

logger = logging.getLogger("routelocale.localization")

SelectorFactory: TypeAlias = "Callable[[RouteTranslationBuilder], RouteSelector]"
_CriteriaStep: TypeAlias = Callable[[BasicRouteCriteriaRouteSelector], None]


class _CriteriaFactory:
    """Selector factory that applies accumulated controller/action criteria."""

    __slots__ = ("steps",)

    def __init__(self, steps: tuple[_CriteriaStep, ...] = ()) -> None:
        self.steps = steps

    def extend(self, step: _CriteriaStep) -> _CriteriaFactory:
        return _CriteriaFactory((*self.steps, step))

    def __call__(self, builder: RouteTranslationBuilder) -> BasicRouteCriteriaRouteSelector:
        selector = BasicRouteCriteriaRouteSelector(builder.localizer)
        for step in self.steps:
            step(selector)
        return selector


class RouteTranslationBuilder:
    """Accumulates selector/processor pairs into a ``RouteTranslationStore``.

    Every method returns a builder so calls chain. ``where_controller()``
    with a controller class returns a ``TypedRouteTranslationBuilder``
    sharing the same store.
    """

    __slots__ = ("_cultures", "_selector_factory", "config", "localizer", "store")

    def __init__(
        self,
        config: LocalizationConfig,
        store: RouteTranslationStore,
        localizer: Localizer | None = None,
    ) -> None:
        self.config = config
        self.store = store
        self.localizer = localizer or Localizer(config)
        self._cultures: tuple[str, ...] | None = None
        self._selector_factory: SelectorFactory | None = None

    @property
    def cultures(self) -> tuple[str, ...] | None:
        """The cultures the next processor will use."""
        return self._cultures

    # -- Cultures --

    def use_culture(self, culture: str) -> RouteTranslationBuilder:
        self._cultures = (self.localizer.check_culture(culture),)
        return self

    def use_cultures(self, cultures: Sequence[str]) -> RouteTranslationBuilder:
        if isinstance(cultures, str):
            cultures = [cultures]
        if not cultures:
            msg = "use_cultures() needs at least one culture."
            raise ConfigurationError(msg)
        self._cultures = tuple(self.localizer.check_culture(c) for c in cultures)
        return self

    # -- Selection --

    def where_controller(
        self, controller: type | str, namespace: str | None = None
    ) -> RouteTranslationBuilder:
        """Select the routes of one controller.

        Pass the controller class to match on name and module (and get a
        typed builder), or its name (``"Home"`` or ``"HomeController"``)
        to match on name only, optionally narrowed by *namespace*.
        Clears any action criteria set before.
        """
        if isinstance(controller, str):
            name = controller_name(controller)
            controller_namespace = namespace or ""
        elif is_controller(controller):
            name = controller_name(controller)
            controller_namespace = namespace if namespace is not None else controller.__module__
        else:
            msg = f"where_controller() expects a Controller subclass or a name, got {controller!r}"
            raise ConfigurationError(msg)

        def step(selector: BasicRouteCriteriaRouteSelector) -> None:
            selector.action = None
            selector.action_arguments = None
            selector.controller = name
            selector.controller_namespace = controller_namespace

        self._set_criteria(step)
        if isinstance(controller, type):
            return self._to_typed(controller)
        if isinstance(self, TypedRouteTranslationBuilder):
            return self._to_untyped()
        return self

    def where_action(
        self,
        action: str | Callable[..., Any],
        action_arguments: Sequence[type] | None = None,
    ) -> RouteTranslationBuilder:
        """Narrow the selection to one action name.

        *action_arguments* additionally requires the action's annotated
        parameter types to equal that sequence (methods sharing an action
        name differ only there).
        """
        if not isinstance(action, str):
            msg = (
                "where_action() takes an action name here; method references "
                "need a controller class selected with where_controller()"
            )
            raise ActionReferenceError(msg)
        arguments = tuple(action_arguments) if action_arguments is not None else None

        def step(selector: BasicRouteCriteriaRouteSelector) -> None:
            selector.action = action
            selector.action_arguments = arguments

        self._set_criteria(step)
        return self

    def where_translated(self) -> RouteTranslationBuilder:
        """Select original routes translated into every current culture."""
        self._replace_selector("where_translated", _translated_factory)
        return self

    def where_untranslated(self) -> RouteTranslationBuilder:
        """Select original routes not yet translated into the current culture."""
        self._replace_selector("where_untranslated", _untranslated_factory)
        return self

    def filter(
        self,
        controller: type | str,
        action: str | Callable[..., Any] | None = None,
    ) -> RouteTranslationBuilder:
        """Exclude a controller, or one of its actions, from the current selection.

        ::

            builder.where_untranslated().filter(HomeController, HomeController.book)

        Raises ``ActionReferenceError`` if *action* is not an action of
        *controller*, ``SelectorNotDefinedError`` if nothing is selected yet.
        """
        name, controller_namespace, action_name, arguments = _filter_criteria(controller, action)

        previous = self._selector_factory
        if previous is None:
            msg = "filter() cannot be used before any route selector is defined."
            raise SelectorNotDefinedError(msg)

        def factory(builder: RouteTranslationBuilder) -> RouteSelector:
            selector = FilterRouteSelector(previous(builder))
            selector.controller = name
            selector.controller_namespace = controller_namespace
            selector.action = action_name
            selector.action_arguments = arguments
            return selector

        self._selector_factory = factory
        return self

    # -- Processors --

    def add_default_translation(self) -> RouteTranslationBuilder:
        """Copy the selected routes unchanged into each current culture."""
        cultures = self._require_cultures("add_default_translation")
        factory = self._require_selector("add_default_translation")
        try:
            for culture in cultures:
                self._cultures = (culture,)
                self._add(factory, CopyTemplateRouteProcessor(self.localizer, culture))
        finally:
            self._cultures = cultures
        return self

    def translate_controller(self, template: str) -> RouteTranslationBuilder:
        """Replace the controller part of the selected routes' templates."""
        culture = self._single_culture("translate_controller")
        factory = self._require_selector("translate_controller")
        self._add(factory, TranslateControllerRouteProcessor(self.localizer, culture, template))
        return self

    def translate_action(self, template: str) -> RouteTranslationBuilder:
        """Replace the action part of the selected routes' templates."""
        culture = self._single_culture("translate_action")
        factory = self._require_selector("translate_action")
        self._add(factory, TranslateActionRouteProcessor(self.localizer, culture, template))
        return self

    def remove_original_routes(self) -> RouteTranslationBuilder:
        """Drop the selected originals once every current culture has a variant."""
        cultures = self._require_cultures("remove_original_routes")
        factory = self._require_selector("remove_original_routes")
        self._add(factory, DisableOriginalRouteProcessor(self.localizer, cultures))
        return self

    # -- Internal --

    def _add(self, factory: SelectorFactory, processor: RouteProcessor) -> None:
        selector = factory(self)
        self.store.append(RouteSelectorProcessorPair(selector=selector, processor=processor))
        logger.debug("Registered %r for %r", processor, selector)

    def _set_criteria(self, step: _CriteriaStep) -> None:
        factory = self._selector_factory
        if not isinstance(factory, _CriteriaFactory):
            if factory is not None:
                logger.warning(
                    "Current route selector is not a controller/action selector, "
                    "it will be replaced."
                )
            factory = _CriteriaFactory()
        self._selector_factory = factory.extend(step)

    def _replace_selector(self, operation: str, factory: SelectorFactory) -> None:
        if self._selector_factory is not None:
            logger.warning("%s(): current route selector will be replaced.", operation)
        self._selector_factory = factory

    def _require_selector(self, operation: str) -> SelectorFactory:
        factory = self._selector_factory
        if factory is None:
            msg = (
                f"{operation}() needs a route selector. Call where_controller(), "
                "where_action(), where_translated() or where_untranslated() first."
            )
            raise SelectorNotDefinedError(msg)
        return factory

    def _require_cultures(self, operation: str) -> tuple[str, ...]:
        if not self._cultures:
            msg = f"{operation}() needs a culture. Call use_culture() or use_cultures() first."
            raise ConfigurationError(msg)
        return self._cultures

    def _single_culture(self, operation: str) -> str:
        cultures = self._require_cultures(operation)
        if len(cultures) != 1:
            msg = f"{operation}() needs exactly one culture, got {', '.join(cultures)}"
            raise ConfigurationError(msg)
        return cultures[0]

    def _to_typed(self, controller: type) -> TypedRouteTranslationBuilder:
        typed = TypedRouteTranslationBuilder(controller, self.config, self.store, self.localizer)
        typed._cultures = self._cultures
        typed._selector_factory = self._selector_factory
        return typed

    def _to_untyped(self) -> RouteTranslationBuilder:
        plain = RouteTranslationBuilder(self.config, self.store, self.localizer)
        plain._cultures = self._cultures
        plain._selector_factory = self._selector_factory
        return plain


class TypedRouteTranslationBuilder(RouteTranslationBuilder):
    """Builder bound to one controller class.

    ``where_action()`` and ``filter()`` also accept method references of
    that class, which pin the action name and its argument types::

        builder.where_controller(HomeController).where_action(HomeController.book)
    """

    __slots__ = ("controller",)

    def __init__(
        self,
        controller: type,
        config: LocalizationConfig,
        store: RouteTranslationStore,
        localizer: Localizer | None = None,
    ) -> None:
        super().__init__(config, store, localizer)
        self.controller = controller

    def where_action(
        self,
        action: str | Callable[..., Any],
        action_arguments: Sequence[type] | None = None,
    ) -> RouteTranslationBuilder:
        if isinstance(action, str):
            _check_action_name(self.controller, action)
            return super().where_action(action, action_arguments)
        descriptor = resolve_action(self.controller, action)
        return super().where_action(descriptor.action, descriptor.action_arguments)

    def filter(
        self,
        controller: type | str | Callable[..., Any],
        action: str | Callable[..., Any] | None = None,
    ) -> RouteTranslationBuilder:
        """Also accepts ``filter(HomeController.book)`` for the bound controller."""
        if action is None and not isinstance(controller, (str, type)):
            return super().filter(self.controller, controller)
        return super().filter(controller, action)  # type: ignore[arg-type]


def _translated_factory(builder: RouteTranslationBuilder) -> RouteSelector:
    return TranslatedRoutesRouteSelector(
        builder.localizer, builder._require_cultures("where_translated")
    )


def _untranslated_factory(builder: RouteTranslationBuilder) -> RouteSelector:
    return UntranslatedRoutesRouteSelector(
        builder.localizer, builder._single_culture("where_untranslated")
    )


def _check_action_name(controller: type, action: str) -> None:
    if not any(d.action == action for d in discover_actions(controller)):
        msg = f"{controller.__name__} has no action named {action!r}"
        raise ActionReferenceError(msg)


def _filter_criteria(
    controller: type | str,
    action: str | Callable[..., Any] | None,
) -> tuple[str, str, str | None, tuple[type, ...] | None]:
    """Resolve ``filter()`` arguments to (controller, namespace, action, arguments)."""
    if isinstance(controller, str):
        if action is not None and not isinstance(action, str):
            msg = "filter() with a controller name takes an action name, not a method reference"
            raise ActionReferenceError(msg)
        return controller_name(controller), "", action, None

    if not is_controller(controller):
        msg = f"filter() expects a Controller subclass or a name, got {controller!r}"
        raise ConfigurationError(msg)

    name = controller_name(controller)
    if action is None:
        return name, controller.__module__, None, None
    if isinstance(action, str):
        _check_action_name(controller, action)
        return name, controller.__module__, action, None
    descriptor = resolve_action(controller, action)
    return name, controller.__module__, descriptor.action, descriptor.action_arguments
