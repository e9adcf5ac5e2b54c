"""Tests for routedoc.routing.route — Route, RouteMatch, PathSegment."""

import pytest

from routedoc.routing.route import PathSegment, Route, RouteMatch


def _auth() -> None:
    return None


def _handler() -> str:
    return "ok"


class TestPathSegment:
    def test_static(self) -> None:
        seg = PathSegment(value="users")
        assert seg.is_param is False
        assert seg.param_name is None
        assert seg.catch_all is False

    def test_frozen(self) -> None:
        seg = PathSegment(value="users")
        with pytest.raises(AttributeError):
            seg.value = "other"  # type: ignore[misc]


class TestRoute:
    def test_handler_is_last_in_chain(self) -> None:
        route = Route(path="/users", method="GET", handlers=(_auth, _handler))
        assert route.handler is _handler
        assert route.handlers == (_auth, _handler)
        assert route.name is None

    def test_frozen(self) -> None:
        route = Route(path="/users", method="GET", handlers=(_handler,))
        with pytest.raises(AttributeError):
            route.path = "/other"  # type: ignore[misc]


class TestRouteMatch:
    def test_creation(self) -> None:
        route = Route(path="/users/:id", method="GET", handlers=(_handler,))
        match = RouteMatch(route=route, path_params={"id": "42"})
        assert match.route is route
        assert match.path_params == {"id": "42"}
