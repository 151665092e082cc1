"""Tests for routelocale.routing.router — compiled trie router and URL building."""

import pytest

from routelocale.errors import ConfigurationError, MethodNotAllowed, NotFound, URLBuildError
from routelocale.routing.route import Route
from routelocale.routing.router import Router


def _handler() -> str:
    return "ok"


def _route(
    path: str,
    methods: frozenset[str] | None = None,
    *,
    name: str | None = None,
    culture: str | None = None,
) -> Route:
    return Route(
        path=path,
        handler=_handler,
        methods=methods or frozenset({"GET"}),
        name=name,
        culture=culture,
    )


def _router(*routes: Route, case_sensitive: bool = True) -> Router:
    r = Router(case_sensitive=case_sensitive)
    for route in routes:
        r.add(route)
    r.compile()
    return r


class TestRouterStaticRoutes:
    def test_root(self) -> None:
        r = _router(_route("/"))
        assert r.match("GET", "/").path_params == {}

    def test_nested_path(self) -> None:
        r = _router(_route("/api/v2/users"))
        assert r.match("GET", "/api/v2/users").route.path == "/api/v2/users"

    def test_multiple_routes(self) -> None:
        r = _router(_route("/users"), _route("/posts"))
        assert r.match("GET", "/users").route.path == "/users"
        assert r.match("GET", "/posts").route.path == "/posts"

    def test_trailing_slash_ignored(self) -> None:
        r = _router(_route("/users"))
        assert r.match("GET", "/users/").route.path == "/users"

    def test_routes_in_registration_order(self) -> None:
        a, b, c = _route("/b"), _route("/a"), _route("/c")
        assert _router(a, b, c).routes == [a, b, c]


class TestRouterCase:
    def test_case_sensitive_by_default(self) -> None:
        r = _router(_route("/Home/Book"))
        with pytest.raises(NotFound):
            r.match("GET", "/home/book")

    def test_case_insensitive(self) -> None:
        r = _router(_route("/Home/Book"), case_sensitive=False)
        assert r.match("GET", "/home/BOOK").route.path == "/Home/Book"

    def test_case_insensitive_keeps_param_value(self) -> None:
        r = _router(_route("/Products/{slug}"), case_sensitive=False)
        assert r.match("GET", "/products/Red-Shoes").path_params == {"slug": "Red-Shoes"}


class TestRouterParams:
    def test_string_param(self) -> None:
        r = _router(_route("/users/{name}"))
        assert r.match("GET", "/users/alice").path_params == {"name": "alice"}

    def test_int_param_rejects_non_digit(self) -> None:
        r = _router(_route("/users/{id:int}"))
        with pytest.raises(NotFound):
            r.match("GET", "/users/alice")

    def test_multiple_params(self) -> None:
        r = _router(_route("/users/{user_id:int}/posts/{post_id:int}"))
        match = r.match("GET", "/users/1/posts/42")
        assert match.path_params == {"user_id": "1", "post_id": "42"}

    def test_path_param(self) -> None:
        r = _router(_route("/files/{filepath:path}"))
        match = r.match("GET", "/files/docs/api/v2/index.html")
        assert match.path_params == {"filepath": "docs/api/v2/index.html"}

    def test_static_preferred_over_param(self) -> None:
        r = _router(_route("/users/me"), _route("/users/{id}"))
        assert r.match("GET", "/users/me").route.path == "/users/me"
        assert r.match("GET", "/users/42").route.path == "/users/{id}"

    def test_sibling_params_keep_their_names(self) -> None:
        by_id, comments = _route("/Blog/{id:int}"), _route("/Blog/{slug}/comments")
        r = _router(by_id, comments)

        match = r.match("GET", "/Blog/12/comments")
        assert match.route is comments
        assert match.path_params == {"slug": "12"}

        match = r.match("GET", "/Blog/hello/comments")
        assert match.route is comments
        assert match.path_params == {"slug": "hello"}

        match = r.match("GET", "/Blog/12")
        assert match.route is by_id
        assert match.path_params == {"id": "12"}

    def test_typed_param_tried_before_str(self) -> None:
        by_slug, by_id = _route("/Blog/{slug}"), _route("/Blog/{id:int}")
        r = _router(by_slug, by_id)

        assert r.match("GET", "/Blog/7").route is by_id
        assert r.match("GET", "/Blog/seven").path_params == {"slug": "seven"}

    def test_same_converter_different_names(self) -> None:
        posts = _route("/users/{user_id:int}/posts")
        profile = _route("/users/{id:int}")
        r = _router(posts, profile)

        assert r.match("GET", "/users/3/posts").path_params == {"user_id": "3"}
        assert r.match("GET", "/users/3").path_params == {"id": "3"}

    def test_catch_all_after_sibling_param(self) -> None:
        r = _router(_route("/files/{id:int}"), _route("/files/{rest:path}"))
        assert r.match("GET", "/files/4").path_params == {"id": "4"}
        assert r.match("GET", "/files/a/b").path_params == {"rest": "a/b"}


class TestRouterMethods:
    def test_method_filtering(self) -> None:
        r = _router(_route("/users", frozenset({"GET"})), _route("/users", frozenset({"POST"})))
        assert "GET" in r.match("GET", "/users").route.methods
        assert "POST" in r.match("POST", "/users").route.methods

    def test_method_not_allowed(self) -> None:
        r = _router(_route("/users", frozenset({"GET"})))

        with pytest.raises(MethodNotAllowed) as exc_info:
            r.match("POST", "/users")

        assert exc_info.value.status == 405
        assert "GET" in dict(exc_info.value.headers)["Allow"]


class TestRouterErrors:
    def test_not_found(self) -> None:
        r = _router(_route("/users"))
        with pytest.raises(NotFound) as exc_info:
            r.match("GET", "/nonexistent")
        assert exc_info.value.status == 404

    def test_add_after_compile_raises(self) -> None:
        r = Router()
        r.compile()
        with pytest.raises(RuntimeError, match="Cannot add routes after compilation"):
            r.add(_route("/users"))

    def test_duplicate_method_and_path_raises(self) -> None:
        r = Router()
        r.add(_route("/de/Buch"))
        with pytest.raises(ConfigurationError, match="Route conflict: GET '/de/Buch'"):
            r.add(_route("/de/Buch", culture="de"))

    def test_case_insensitive_duplicate_raises(self) -> None:
        r = Router(case_sensitive=False)
        r.add(_route("/Home"))
        with pytest.raises(ConfigurationError, match="Route conflict"):
            r.add(_route("/home"))

    def test_renamed_param_same_converter_raises(self) -> None:
        r = Router()
        r.add(_route("/Blog/{id:int}"))
        with pytest.raises(ConfigurationError, match="Route conflict: GET '/Blog/\\{num:int\\}'"):
            r.add(_route("/Blog/{num:int}"))

    def test_different_converters_do_not_conflict(self) -> None:
        r = Router()
        r.add(_route("/Blog/{id:int}"))
        r.add(_route("/Blog/{slug}"))
        assert len(r.routes) == 2

    def test_add_rejects_flask_style_param(self) -> None:
        with pytest.raises(ConfigurationError, match="<param>.*\\{param\\}"):
            Router().add(_route("/share/<slug>"))


class TestUrlFor:
    def test_static(self) -> None:
        r = _router(_route("/Home/Index", name="Home.index"))
        assert r.url_for("Home.index") == "/Home/Index"

    def test_params_substituted(self) -> None:
        r = _router(_route("/Home/Book/{id:int}", name="Home.book"))
        assert r.url_for("Home.book", id=7) == "/Home/Book/7"

    def test_culture_variant_preferred(self) -> None:
        r = _router(
            _route("/Home/Book", name="Home.book"),
            _route("/de/Heim/Buch", name="Home.book", culture="de"),
        )
        assert r.url_for("Home.book", culture="de") == "/de/Heim/Buch"
        assert r.url_for("Home.book") == "/Home/Book"

    def test_unknown_culture_falls_back_to_original(self) -> None:
        r = _router(
            _route("/Home/Book", name="Home.book"),
            _route("/de/Heim/Buch", name="Home.book", culture="de"),
        )
        assert r.url_for("Home.book", culture="fr") == "/Home/Book"

    def test_removed_original_falls_back_to_a_variant(self) -> None:
        r = _router(_route("/de/Heim/Buch", name="Home.book", culture="de"))
        assert r.url_for("Home.book") == "/de/Heim/Buch"

    def test_extra_params_become_query_string(self) -> None:
        r = _router(_route("/Products/{slug}", name="Products.detail"))
        assert r.url_for("Products.detail", slug="shoes", page=2) == "/Products/shoes?page=2"

    def test_param_values_are_quoted(self) -> None:
        r = _router(_route("/Products/{slug}", name="Products.detail"))
        assert r.url_for("Products.detail", slug="a b/c") == "/Products/a%20b%2Fc"

    def test_lowercase_leaves_params_alone(self) -> None:
        r = _router(_route("/Products/{slug}", name="Products.detail"))
        assert r.url_for("Products.detail", lowercase=True, slug="Red") == "/products/Red"

    def test_unknown_name(self) -> None:
        with pytest.raises(URLBuildError, match="No route named 'missing'"):
            _router().url_for("missing")

    def test_missing_param(self) -> None:
        r = _router(_route("/Home/Book/{id:int}", name="Home.book"))
        with pytest.raises(URLBuildError, match="Missing parameter 'id'"):
            r.url_for("Home.book")
