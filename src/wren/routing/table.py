"""Immutable, priority-ordered routing table.

Built once per compile cycle and never mutated afterwards, so any
number of threads can call :meth:`RoutingTable.match` without locking.
"""

from __future__ import annotations

from collections.abc import Iterable, Iterator, Mapping
from types import MappingProxyType

from wren.routing.pattern import split_path
from wren.routing.route import CompiledRoute, MatchResult, NotFound


class RoutingTable:
    """Routes partitioned by method, each partition in priority order.

    Usage::

        table = RoutingTable(routes)
        result = table.match("GET", "/users/42")
        if result:
            result.handler, result.params
    """

    __slots__ = ("_by_method", "_routes")

    def __init__(self, routes: Iterable[CompiledRoute] = ()) -> None:
        ordered = sorted(routes, key=lambda r: (r.order_key, r.method))
        by_method: dict[str, list[CompiledRoute]] = {}
        for route in ordered:
            by_method.setdefault(route.method, []).append(route)

        self._routes: tuple[CompiledRoute, ...] = tuple(ordered)
        self._by_method: Mapping[str, tuple[CompiledRoute, ...]] = MappingProxyType(
            {method: tuple(rs) for method, rs in by_method.items()}
        )

    @property
    def routes(self) -> tuple[CompiledRoute, ...]:
        """Every route, most specific first."""
        return self._routes

    @property
    def methods(self) -> frozenset[str]:
        return frozenset(self._by_method)

    def candidates(self, method: str) -> tuple[CompiledRoute, ...]:
        """Routes for *method* in the order they are tried."""
        return self._by_method.get(method.upper(), ())

    def match(self, method: str, path: str) -> MatchResult | NotFound:
        """Find the most specific route for *method* and *path*.

        Returns a :class:`MatchResult` on success, :class:`NotFound`
        otherwise.  A path that only matches under another method is
        still ``NotFound``; see :meth:`allowed_methods`.
        """
        parts = split_path(path)
        for route in self.candidates(method):
            params = route.pattern.match(parts)
            if params is not None:
                return MatchResult(route=route, params=params)
        return NotFound(method=method, path=path)

    def allowed_methods(self, path: str) -> frozenset[str]:
        """Methods with at least one route matching *path*.

        Lets an HTTP layer tell a 405 apart from a 404.
        """
        parts = split_path(path)
        return frozenset(
            method
            for method, routes in self._by_method.items()
            if any(r.pattern.match(parts) is not None for r in routes)
        )

    def __len__(self) -> int:
        return len(self._routes)

    def __iter__(self) -> Iterator[CompiledRoute]:
        return iter(self._routes)

    def __repr__(self) -> str:
        return f"<RoutingTable routes={len(self._routes)}>"


def _handler_name(handler: object) -> str:
    return getattr(handler, "__qualname__", None) or getattr(handler, "__name__", None) or repr(handler)


def format_routes(table: RoutingTable) -> str:
    """Render a METHOD / PATH / PRIORITY / HANDLER listing.

    Rows come out in the table's match order.  Routes with middleware
    are flagged with ``+mw``.
    """
    if not len(table):
        return "No routes registered."

    rows: list[tuple[str, str, str, str]] = []
    for route in table:
        name = _handler_name(route.handler)
        if route.middleware:
            name = f"{name} +mw({len(route.middleware)})"
        rows.append((route.method, route.path, str(route.priority), name))

    # Column widths, never narrower than the headers
    max_method = max(6, *(len(r[0]) for r in rows))
    max_path = max(4, *(len(r[1]) for r in rows))
    max_priority = max(8, *(len(r[2]) for r in rows))

    fmt = f"{{:<{max_method}}}  {{:<{max_path}}}  {{:>{max_priority}}}  {{}}"
    lines = [fmt.format("METHOD", "PATH", "PRIORITY", "HANDLER")]
    sep_len = max_method + max_path + max_priority + 6 + max(len(r[3]) for r in rows)
    lines.append("-" * min(sep_len, 80))
    lines.extend(fmt.format(*row) for row in rows)
    return "\n".join(lines)
