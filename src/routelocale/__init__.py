"""routelocale — per-culture variants of attribute routes.

Registers localized copies of controller/action routes, e.g. serving
``/Home/Book`` as ``/de/Heim/Buch`` for German.

Basic usage::

    from routelocale import App, Controller, LocalizationConfig, action

    class HomeController(Controller):
        @action("Book")
        def book(self):
            return "book"

    app = App()
    app.add_controller(HomeController)

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

    app.match("GET", "/de/Heim/Buch").culture  # "de"
"""

__version__ = "0.1.0-dev"
__all__ = [
    "ActionReferenceError",
    "App",
    "AppConfig",
    "ConfigurationError",
    "Controller",
    "HTTPError",
    "LocalizationConfig",
    "MethodNotAllowed",
    "NotFound",
    "RouteLocaleError",
    "RouteTranslationBuilder",
    "SelectorNotDefinedError",
    "URLBuildError",
    "action",
    "current_culture",
    "get_culture",
]


def __getattr__(name: str) -> object:
    """Lazy imports for public API.

    Keeps ``import routelocale`` fast while providing a clean top-level API.
    """
    if name == "App":
        from routelocale.app import App

        return App

    if name == "AppConfig":
        from routelocale.config import AppConfig

        return AppConfig

    if name in ("Controller", "action"):
        from routelocale import controllers as _controllers

        return getattr(_controllers, name)

    if name in ("LocalizationConfig", "RouteTranslationBuilder"):
        from routelocale import localization as _localization

        return getattr(_localization, name)

    if name in ("current_culture", "get_culture"):
        from routelocale import context as _ctx

        return getattr(_ctx, name)

    if name in (
        "ActionReferenceError",
        "ConfigurationError",
        "HTTPError",
        "MethodNotAllowed",
        "NotFound",
        "RouteLocaleError",
        "SelectorNotDefinedError",
        "URLBuildError",
    ):
        from routelocale import errors as _errors

        return getattr(_errors, name)

    msg = f"module {__name__!r} has no attribute {name!r}"
    raise AttributeError(msg)
