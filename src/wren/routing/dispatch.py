"""Batch compilation and the hot-swappable dispatcher.

The discovery collaborator hands over :class:`RouteDeclaration` records
and :class:`MiddlewareBinding` records.  :func:`build_table` compiles a
fresh :class:`RoutingTable` from them; :class:`Dispatcher` serves
whichever table was installed last.

Reloading never mutates a live table: a new one is built off to the
side and swapped in with a single reference assignment, so readers see
either the old table or the new one, never a half-built one.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable
from dataclasses import dataclass
from typing import Any

from wren.config import RouterConfig
from wren.errors import ConfigurationError, InvalidSpecification, NotReady, WrenError
from wren.routing.middleware import MiddlewareBinding
from wren.routing.route import MatchResult, NotFound
from wren.routing.router import Router
from wren.routing.table import RoutingTable

logger = logging.getLogger("wren.routing")


@dataclass(frozen=True, slots=True)
class RouteDeclaration:
    """One discovered route: where it came from and what serves it.

    Attributes:
        specification: Path specification, e.g. ``"users/[id]/route.py"``.
        method: HTTP method.
        handler: Opaque handler reference.
        middleware: Route-local middleware, run before scoped middleware.
    """

    specification: str
    method: str
    handler: Any
    middleware: tuple[Any, ...] = ()


@dataclass(frozen=True, slots=True)
class BuildResult:
    """A compiled table plus the declarations that were rejected."""

    table: RoutingTable
    rejected: tuple[tuple[RouteDeclaration, WrenError], ...] = ()

    @property
    def ok(self) -> bool:
        return not self.rejected


def build_table(
    declarations: Iterable[RouteDeclaration],
    bindings: Iterable[MiddlewareBinding] = (),
    config: RouterConfig | None = None,
) -> BuildResult:
    """Compile declarations and bindings into a new routing table.

    A malformed specification or an unsupported method rejects only its
    own declaration: it is logged, collected in
    :attr:`BuildResult.rejected`, and the rest of the batch still compiles.
    """
    router = Router(config)
    rejected: list[tuple[RouteDeclaration, WrenError]] = []

    for declaration in declarations:
        try:
            router.add(
                declaration.specification,
                declaration.method,
                declaration.handler,
                middleware=declaration.middleware,
            )
        except (InvalidSpecification, ConfigurationError) as exc:
            logger.warning("Skipping %s %s: %s", declaration.method, declaration.specification, exc)
            rejected.append((declaration, exc))

    for binding in bindings:
        router.bind(binding)

    return BuildResult(table=router.compile(), rejected=tuple(rejected))


class Dispatcher:
    """Serves matches from the most recently installed routing table.

    Usage::

        dispatcher = Dispatcher()
        dispatcher.reload(declarations, bindings)
        result = dispatcher.match("GET", "/users/42")
    """

    __slots__ = ("_config", "_table")

    def __init__(self, table: RoutingTable | None = None, config: RouterConfig | None = None) -> None:
        self._config = config or RouterConfig()
        self._table = table

    @property
    def ready(self) -> bool:
        return self._table is not None

    @property
    def table(self) -> RoutingTable:
        table = self._table
        if table is None:
            raise NotReady
        return table

    def install(self, table: RoutingTable) -> RoutingTable | None:
        """Swap in *table*.  Returns the table it replaced, if any."""
        previous = self._table
        self._table = table
        logger.info("Installed routing table with %d routes", len(table))
        return previous

    def reload(
        self,
        declarations: Iterable[RouteDeclaration],
        bindings: Iterable[MiddlewareBinding] = (),
    ) -> BuildResult:
        """Build a new table from scratch and install it."""
        result = build_table(declarations, bindings, self._config)
        self.install(result.table)
        return result

    def match(self, method: str, path: str) -> MatchResult | NotFound:
        """Match against the current table.

        Raises :class:`NotReady` if no table has been installed yet.
        """
        return self.table.match(method, path)
