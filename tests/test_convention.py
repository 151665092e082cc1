"""Tests for routelocale.localization.convention — running stored pairs."""

import logging

import pytest

from routelocale.controllers import discover_actions
from routelocale.localization.builder import RouteTranslationBuilder
from routelocale.localization.config import LocalizationConfig
from routelocale.localization.convention import LocalizationConvention
from routelocale.localization.store import RouteTranslationStore
from routelocale.routing.table import RouteTable

from sample_app import HomeController, ProductsController


def _table() -> RouteTable:
    return RouteTable(
        d.to_route()
        for cls in (HomeController, ProductsController)
        for d in discover_actions(cls)
    )


def _builder() -> RouteTranslationBuilder:
    config = LocalizationConfig(accepted_cultures=("en", "de"), default_culture="en")
    return RouteTranslationBuilder(config, RouteTranslationStore())


class TestLocalizationConvention:
    def test_empty_store_leaves_table(self) -> None:
        table = _table()
        LocalizationConvention(RouteTranslationStore())(table)
        assert len(table) == 6
        assert table.localized() == []

    def test_pairs_run_in_order(self) -> None:
        builder = _builder()
        typed = builder.use_culture("de").where_controller(HomeController)
        typed.translate_controller("Heim").where_action(HomeController.book).translate_action(
            "Buch/{id:int}"
        )
        builder.use_culture("en").where_untranslated().add_default_translation()
        builder.use_cultures(["en", "de"]).where_translated().remove_original_routes()

        table = _table()
        LocalizationConvention(builder.store)(table)

        assert [r.path for r in table.localized("de")] == [
            "/de/Heim/Index",
            "/de/Heim/Buch/{id:int}",
            "/de/Heim/Book/{id:int}",
            "/de/about",
        ]
        assert [r.path for r in table.localized("en")] == [
            "/en/Home/Index",
            "/en/Home/Book/{id:int}",
            "/en/Home/Book/{id:int}",
            "/en/about",
            "/en/Products",
            "/en/Products/{slug}",
        ]
        # Products has no German variant, so its originals stay.
        assert [r.path for r in table.originals()] == ["/Products", "/Products/{slug}"]
        assert len(table) == 12

    def test_later_pairs_see_earlier_changes(self) -> None:
        builder = _builder()
        builder.use_culture("de").where_untranslated().add_default_translation()
        builder.use_culture("de").where_untranslated().add_default_translation()

        table = _table()
        LocalizationConvention(builder.store)(table)

        assert len(table.localized("de")) == 6

    def test_empty_selection_warns_and_skips(self, caplog: pytest.LogCaptureFixture) -> None:
        builder = _builder()
        builder.use_culture("de").where_controller("Missing").translate_controller("Fehlt")

        table = _table()
        with caplog.at_level(logging.WARNING, logger="routelocale.localization"):
            LocalizationConvention(builder.store)(table)

        assert "selected no routes" in caplog.text
        assert "controller='Missing'" in caplog.text
        assert table.localized() == []

    def test_summary_logged(self, caplog: pytest.LogCaptureFixture) -> None:
        builder = _builder()
        builder.use_culture("en").where_untranslated().add_default_translation()

        with caplog.at_level(logging.INFO, logger="routelocale.localization"):
            LocalizationConvention(builder.store)(_table())

        assert "applied 1 rules: 6 localized routes added, 6 original routes left" in caplog.text

    def test_store_is_reusable(self) -> None:
        builder = _builder()
        builder.use_culture("de").where_controller(ProductsController).translate_controller(
            "Produkte"
        )
        convention = LocalizationConvention(builder.store)

        first, second = _table(), _table()
        convention(first)
        convention(second)

        assert [r.path for r in second.localized("de")] == [
            "/de/Produkte",
            "/de/Produkte/{slug}",
        ]
