"""Tests for routelocale.cli._resolve — App import resolution."""

import sys
import types

import pytest

from routelocale.app import App
from routelocale.cli._resolve import resolve_app


def _broken_factory() -> App:
    msg = "boom"
    raise RuntimeError(msg)


@pytest.fixture
def _fake_app_module(monkeypatch: pytest.MonkeyPatch) -> None:
    """Register a fake module with a routelocale App on sys.modules."""
    mod = types.ModuleType("_fake_routelocale_app")
    mod.app = App()  # type: ignore[attr-defined]
    mod.custom = App()  # type: ignore[attr-defined]
    mod.create_app = App  # type: ignore[attr-defined]
    mod.broken = _broken_factory  # type: ignore[attr-defined]
    mod.not_an_app = "just a string"  # type: ignore[attr-defined]
    monkeypatch.setitem(sys.modules, "_fake_routelocale_app", mod)


@pytest.mark.usefixtures("_fake_app_module")
class TestResolveApp:
    def test_explicit_attribute(self) -> None:
        assert isinstance(resolve_app("_fake_routelocale_app:app"), App)

    def test_custom_attribute(self) -> None:
        app = resolve_app("_fake_routelocale_app:custom")
        assert app is sys.modules["_fake_routelocale_app"].custom

    def test_default_attribute(self) -> None:
        """Omitting :attr defaults to 'app'."""
        app = resolve_app("_fake_routelocale_app")
        assert app is sys.modules["_fake_routelocale_app"].app

    def test_factory(self) -> None:
        assert isinstance(resolve_app("_fake_routelocale_app:create_app"), App)

    def test_failing_factory(self) -> None:
        with pytest.raises(TypeError, match="raised an error: boom"):
            resolve_app("_fake_routelocale_app:broken")

    def test_missing_module(self) -> None:
        with pytest.raises(ModuleNotFoundError):
            resolve_app("nonexistent_module_xyz:app")

    def test_missing_attribute(self) -> None:
        with pytest.raises(AttributeError):
            resolve_app("_fake_routelocale_app:does_not_exist")

    def test_wrong_type(self) -> None:
        with pytest.raises(TypeError, match=r"not a routelocale\.App instance"):
            resolve_app("_fake_routelocale_app:not_an_app")
