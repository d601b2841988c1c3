"""Tests for skylark.routing — pattern parsing and trie matching."""

import pytest

from skylark.http.request import Request
from skylark.routing.router import Router, parse_path, parse_pattern


def _req(path: str, method: str = "GET") -> Request:
    return Request(method=method, path=path)


def show(*args: object) -> None:
    pass


class TestParsing:
    def test_pattern_without_methods_allows_any(self) -> None:
        assert parse_pattern("/users") == (frozenset({"*"}), "/users")

    def test_pattern_with_methods(self) -> None:
        methods, path = parse_pattern("get|POST /contact")
        assert methods == frozenset({"GET", "POST"})
        assert path == "/contact"

    def test_parse_path_segments(self) -> None:
        segments = parse_path("/users/{id:int}/{slug}")
        assert [s.value for s in segments] == ["users", "{id:int}", "{slug}"]
        assert segments[1].param_type == "int"
        assert segments[2].param_name == "slug"
        assert segments[2].param_type == "str"

    def test_unknown_param_type_rejected(self) -> None:
        router = Router()
        with pytest.raises(ValueError, match="uuid"):
            router.map("/items/{id:uuid}", show)
        assert router.routes == []


class TestMatching:
    def test_static_route(self) -> None:
        router = Router()
        router.map("/about", show)
        match = router.route(_req("/about"))
        assert match is not None
        assert match.callback is show
        assert match.params == []

    def test_root(self) -> None:
        router = Router()
        router.map("/", show)
        assert router.route(_req("/")) is not None

    def test_no_match_returns_none(self) -> None:
        assert Router().route(_req("/nothing")) is None

    def test_params_are_positional_and_converted(self) -> None:
        router = Router()
        router.map("/posts/{year:int}/{slug}", show)
        match = router.route(_req("/posts/2024/hello"))
        assert match is not None
        assert match.params == [2024, "hello"]

    def test_numeric_conversions(self) -> None:
        router = Router()
        router.map("/offset/{n:int}", show)
        router.map("/scale/{f:float}", show)
        offset = router.route(_req("/offset/-3"))
        scale = router.route(_req("/scale/1.5"))
        assert offset is not None
        assert offset.params == [-3]
        assert scale is not None
        assert scale.params == [pytest.approx(1.5)]

    def test_int_param_rejects_text(self) -> None:
        router = Router()
        router.map("/users/{id:int}", show)
        assert router.route(_req("/users/bob")) is None

    def test_static_wins_over_param(self) -> None:
        def me() -> None:
            pass

        router = Router()
        router.map("/users/{name}", show)
        router.map("/users/me", me)
        match = router.route(_req("/users/me"))
        assert match is not None
        assert match.callback is me

    def test_method_filtering(self) -> None:
        router = Router()
        router.map("POST /submit", show)
        assert router.route(_req("/submit", "GET")) is None
        assert router.route(_req("/submit", "POST")) is not None

    def test_first_registered_wins(self) -> None:
        def second() -> None:
            pass

        router = Router()
        router.map("/page", show)
        router.map("/page", second)
        match = router.route(_req("/page"))
        assert match is not None
        assert match.callback is show

    def test_catch_all_path_param(self) -> None:
        router = Router()
        router.map("/files/{rest:path}", show)
        match = router.route(_req("/files/docs/api/v2"))
        assert match is not None
        assert match.params == ["docs/api/v2"]

    def test_catch_all_needs_remainder(self) -> None:
        router = Router()
        router.map("/files/{rest:path}", show)
        assert router.route(_req("/files")) is None

    def test_wildcard(self) -> None:
        router = Router()
        router.map("*", show)
        assert router.route(_req("/any/thing", "DELETE")) is not None

    def test_routes_listing(self) -> None:
        router = Router()
        router.map("GET /a", show)
        router.map("/b", show)
        assert [r.path for r in router.routes] == ["/a", "/b"]
        assert router.routes[0].methods == frozenset({"GET"})
