"""routelocale application class.

Mutable during setup (controller registration, conventions, localization).
Frozen on first use: routes are discovered, conventions rewrite the route
table, and the result is compiled into a ``Router``.
"""

import logging
import threading
from typing import Any

from routelocale._internal.invoke import call_action
from routelocale._internal.types import Convention
from routelocale.config import AppConfig
from routelocale.context import culture_var, current_culture
from routelocale.controllers import discover_actions, is_controller
from routelocale.errors import ConfigurationError
from routelocale.localization.builder import RouteTranslationBuilder
from routelocale.localization.config import LocalizationConfig
from routelocale.localization.convention import LocalizationConvention
from routelocale.localization.localizer import Localizer
from routelocale.localization.store import RouteTranslationStore
from routelocale.routing.params import convert_params
from routelocale.routing.route import Route, RouteMatch
from routelocale.routing.router import Router
from routelocale.routing.table import RouteTable
from routelocale.routing.templates import template_params

logger = logging.getLogger("routelocale.app")


class App:
    """The routelocale application.

    Usage::

        app = App()
        app.add_controller(HomeController)

        localization = app.localize(LocalizationConfig(("en", "de"), default_culture="en"))
        localization.use_culture("de").where_controller(HomeController).translate_controller("Heim")

        match = app.match("GET", "/de/Heim/Book")

    Thread safety:
        The setup phase is single-threaded (module import time). The
        freeze transition uses a Lock + double-check so exactly one thread
        compiles the route table, even when several workers hit the app
        on first use.
    """

    __slots__ = (
        "_controllers",
        "_conventions",
        "_default_culture",
        "_freeze_lock",
        "_frozen",
        # Compiled state (populated by _freeze)
        "_router",
        "config",
    )

    def __init__(self, config: AppConfig | None = None) -> None:
        self.config: AppConfig = config or AppConfig()
        self._controllers: list[type] = []
        self._conventions: list[Convention] = []
        self._default_culture: str | None = None
        self._frozen: bool = False
        self._freeze_lock: threading.Lock = threading.Lock()

        self._router: Router | None = None

    # -- Registration --

    def add_controller(self, controller: type) -> None:
        """Register a controller class. Its ``@action`` methods become routes."""
        self._check_not_frozen()
        if not is_controller(controller):
            msg = f"{controller!r} is not a Controller subclass"
            raise ConfigurationError(msg)
        if controller in self._controllers:
            logger.debug("Controller %s registered twice, ignoring", controller.__qualname__)
            return
        self._controllers.append(controller)

    def controller(self, cls: type) -> type:
        """Class decorator form of ``add_controller()``.

        Usage::

            @app.controller
            class HomeController(Controller):
                ...
        """
        self.add_controller(cls)
        return cls

    def add_convention(self, convention: Convention) -> None:
        """Register a callable that edits the route table at freeze time.

        Conventions run in registration order, after route discovery.
        """
        self._check_not_frozen()
        self._conventions.append(convention)

    def localize(
        self,
        config: LocalizationConfig,
        *,
        localizer: Localizer | None = None,
    ) -> RouteTranslationBuilder:
        """Start a route localization chain.

        Registers a ``LocalizationConvention`` over a fresh store and
        returns the builder that fills it.
        """
        self._check_not_frozen()
        if config.default_culture is not None:
            self._default_culture = config.default_culture
        store = RouteTranslationStore()
        self.add_convention(LocalizationConvention(store))
        return RouteTranslationBuilder(config, store, localizer)

    # -- Compiled surface --

    @property
    def routes(self) -> list[Route]:
        """Every compiled route, originals and localized variants."""
        self._ensure_frozen()
        assert self._router is not None
        return self._router.routes

    def match(self, method: str, path: str) -> RouteMatch:
        """Resolve *path*. Raises ``NotFound`` / ``MethodNotAllowed``."""
        self._ensure_frozen()
        assert self._router is not None
        return self._router.match(method.upper(), path)

    def url_for(self, name: str, culture: str | None = None, **params: object) -> str:
        """Build a URL by route name.

        *culture* defaults to the culture of the route being dispatched,
        so links rendered by a German action stay German, then to the
        default culture of the localization config.
        """
        self._ensure_frozen()
        assert self._router is not None
        if culture is None:
            culture = current_culture(self._default_culture)
        return self._router.url_for(
            name,
            culture,
            lowercase=self.config.lowercase_urls,
            **params,
        )

    async def dispatch(self, method: str, path: str) -> Any:
        """Match *path* and call its action.

        A fresh controller instance receives the converted path
        parameters as keyword arguments. The matched culture is visible
        through ``routelocale.context`` while the action runs.
        """
        match = self.match(method, path)
        route = match.route
        params = convert_params(match.path_params, template_params(route.path))

        token = culture_var.set(route.culture) if route.culture is not None else None
        try:
            return await call_action(route, params)
        finally:
            if token is not None:
                culture_var.reset(token)

    # -- Internal --

    def _ensure_frozen(self) -> None:
        """Thread-safe freeze with double-check locking."""
        if self._frozen:
            return
        with self._freeze_lock:
            if self._frozen:
                return
            self._freeze()

    def _freeze(self) -> None:
        """Compile the app into its frozen runtime state.

        MUST only be called while holding _freeze_lock.
        """
        # 1. Discover attribute routes
        table = RouteTable(
            descriptor.to_route()
            for controller in self._controllers
            for descriptor in discover_actions(controller)
        )

        # 2. Conventions (route localization among them) edit the table
        for convention in self._conventions:
            convention(table)

        # 3. Compile route table
        router = Router(case_sensitive=self.config.case_sensitive)
        for route in table:
            router.add(route)
        router.compile()

        self._router = router
        self._frozen = True

        if self.config.debug:
            for route in router.routes:
                logger.debug(
                    "%-12s %-40s %-6s %s.%s",
                    ",".join(sorted(route.methods)),
                    route.path,
                    route.culture or "-",
                    route.controller,
                    route.action,
                )

    def _check_not_frozen(self) -> None:
        if self._frozen:
            msg = (
                "Cannot modify the app after its routes have been compiled. "
                "Register controllers and localization before the first request."
            )
            raise RuntimeError(msg)
