"""Tests for wren.routing.table — the immutable routing table."""

import pytest

from wren.routing.route import MatchResult, NotFound, compile_route
from wren.routing.table import RoutingTable, format_routes


def show() -> None: ...


def create() -> None: ...


def _table(*specs: tuple[str, str]) -> RoutingTable:
    return RoutingTable(compile_route(spec, method, show) for spec, method in specs)


class TestRoutingTable:
    def test_priority_order(self) -> None:
        table = _table(("files/[...p]", "GET"), ("users/[id]", "GET"), ("users/new", "GET"), ("page", "GET"))
        assert [r.path for r in table] == ["/users/new", "/", "/users/:id", "/files/*p"]

    def test_partitioned_by_method(self) -> None:
        table = _table(("users", "GET"), ("users", "POST"), ("users/[id]", "DELETE"))
        assert table.methods == frozenset({"GET", "POST", "DELETE"})
        assert [r.path for r in table.candidates("DELETE")] == ["/users/:id"]
        assert table.candidates("PATCH") == ()

    def test_candidates_case_insensitive(self) -> None:
        table = _table(("users", "GET"))
        assert len(table.candidates("get")) == 1

    def test_match(self) -> None:
        table = _table(("users/[id]", "GET"))
        result = table.match("GET", "/users/9")
        assert isinstance(result, MatchResult)
        assert result.params == {"id": "9"}

    def test_not_found_carries_request(self) -> None:
        table = _table(("users/[id]", "GET"))
        assert table.match("GET", "/nope") == NotFound(method="GET", path="/nope")

    def test_allowed_methods(self) -> None:
        table = _table(("users", "GET"), ("users/[id]", "PUT"), ("[...all]", "DELETE"))
        assert table.allowed_methods("/users") == frozenset({"GET", "DELETE"})
        assert table.allowed_methods("/users/1") == frozenset({"PUT", "DELETE"})
        assert table.allowed_methods("/") == frozenset()

    def test_empty(self) -> None:
        table = RoutingTable()
        assert len(table) == 0
        assert isinstance(table.match("GET", "/"), NotFound)

    def test_routes_immutable(self) -> None:
        table = _table(("users", "GET"))
        assert isinstance(table.routes, tuple)
        with pytest.raises(AttributeError):
            table.extra = 1  # type: ignore[attr-defined]

    def test_repr(self) -> None:
        assert repr(_table(("a", "GET"), ("b", "GET"))) == "<RoutingTable routes=2>"


class TestFormatRoutes:
    def test_empty(self) -> None:
        assert format_routes(RoutingTable()) == "No routes registered."

    def test_rows_in_match_order(self) -> None:
        table = RoutingTable(
            [
                compile_route("users/[id]", "GET", show),
                compile_route("users", "POST", create, middleware=("auth",)),
            ]
        )
        lines = format_routes(table).splitlines()

        assert lines[0].split() == ["METHOD", "PATH", "PRIORITY", "HANDLER"]
        assert set(lines[1]) == {"-"}
        assert lines[2].split() == ["POST", "/users", "1010", "create", "+mw(1)"]
        assert lines[3].split() == ["GET", "/users/:id", "920", "show"]

    def test_non_callable_handler(self) -> None:
        table = RoutingTable([compile_route("users", "GET", "users.list")])
        assert "'users.list'" in format_routes(table)
