"""Tests for routelocale.routing.table — the configuration-time route table."""

import pytest

from routelocale.routing.route import Route
from routelocale.routing.table import RouteTable


def _handler() -> str:
    return "ok"


def _original(path: str) -> Route:
    return Route(path=path, handler=_handler, methods=frozenset({"GET"}))


def _variant(original: Route, culture: str, path: str) -> Route:
    return Route(
        path=path,
        handler=_handler,
        methods=frozenset({"GET"}),
        culture=culture,
        original=original,
    )


class TestRouteTable:
    def test_add_and_iterate(self) -> None:
        a, b = _original("/a"), _original("/b")
        table = RouteTable([a])
        table.add(b)
        assert list(table) == [a, b]
        assert len(table) == 2

    def test_originals_and_localized(self) -> None:
        a = _original("/a")
        de = _variant(a, "de", "/de/a")
        en = _variant(a, "en", "/en/a")
        table = RouteTable([a, de, en])

        assert table.originals() == [a]
        assert table.localized() == [de, en]
        assert table.localized("de") == [de]

    def test_variant_lookup(self) -> None:
        a, b = _original("/a"), _original("/b")
        de = _variant(a, "de", "/de/a")
        table = RouteTable([a, b, de])

        assert table.variant(a, "de") is de
        assert table.variant(a, "en") is None
        assert table.variant(b, "de") is None
        assert table.variants(a) == [de]

    def test_membership_is_by_identity(self) -> None:
        a = _original("/a")
        twin = _original("/a")
        table = RouteTable([a])
        assert a in table
        assert twin not in table

    def test_replace_keeps_position(self) -> None:
        a, b, c = _original("/a"), _original("/b"), _original("/c")
        table = RouteTable([a, b])
        table.replace(a, c)
        assert list(table) == [c, b]

    def test_remove(self) -> None:
        a, b = _original("/a"), _original("/b")
        table = RouteTable([a, b])
        table.remove(a)
        assert list(table) == [b]

    def test_remove_missing_raises(self) -> None:
        with pytest.raises(KeyError, match="not in the route table"):
            RouteTable().remove(_original("/a"))

    def test_iteration_is_a_snapshot(self) -> None:
        a, b = _original("/a"), _original("/b")
        table = RouteTable([a])
        for _route in table:
            table.add(b)
        assert len(table) == 2
