"""Route registration and compilation.

Routes and middleware bindings are registered while the router is
uncompiled.  ``compile()`` resolves middleware scopes, sorts by
specificity and freezes the result into a :class:`RoutingTable`.
"""

import logging
import threading
import time
from dataclasses import replace
from typing import Any

from wren.config import RouterConfig
from wren.errors import AlreadyCompiled, NotReady
from wren.routing.middleware import MiddlewareBinding, applicable_middleware
from wren.routing.route import (
    CompiledRoute,
    MatchResult,
    NotFound,
    compile_route,
    normalize_method,
)
from wren.routing.table import RoutingTable, format_routes

logger = logging.getLogger("wren.routing")


class Router:
    """Two-state route builder: uncompiled, then compiled.

    Usage::

        router = Router()
        router.add("users/[id]/route.py", "GET", show_user)
        router.bind(MiddlewareBinding("/users", (auth,)))
        router.compile()
        result = router.match("GET", "/users/42")

    While uncompiled, ``register``/``add``/``bind`` are accepted and
    ``match`` raises :class:`NotReady`.  Once compiled, registration
    raises :class:`AlreadyCompiled` and ``match`` is served from the
    immutable table.  ``reset()`` starts a fresh cycle.
    """

    __slots__ = ("_bindings", "_config", "_lock", "_routes", "_table")

    def __init__(self, config: RouterConfig | None = None) -> None:
        self._config = config or RouterConfig()
        self._routes: dict[tuple[str, str], CompiledRoute] = {}
        self._bindings: list[MiddlewareBinding] = []
        self._table: RoutingTable | None = None
        self._lock = threading.Lock()

    @property
    def config(self) -> RouterConfig:
        return self._config

    @property
    def compiled(self) -> bool:
        return self._table is not None

    @property
    def table(self) -> RoutingTable:
        """The compiled table.  Raises :class:`NotReady` before compile."""
        table = self._table
        if table is None:
            raise NotReady
        return table

    # -- Registration --

    def _check_not_compiled(self) -> None:
        if self._table is not None:
            raise AlreadyCompiled

    def register(self, route: CompiledRoute) -> None:
        """Register a compiled route.

        A route with the same ``(method, pattern)`` key replaces the
        earlier one; this is the normal re-registration path, not an error.

        The method is upper-cased and checked against the configured set;
        an unsupported method raises :class:`ConfigurationError`.
        """
        method = normalize_method(route.method, self._config)
        if method != route.method or not isinstance(route.middleware, tuple):
            route = replace(route, method=method, middleware=tuple(route.middleware))
        with self._lock:
            self._check_not_compiled()
            previous = self._routes.pop(route.key, None)
            self._routes[route.key] = route
        if previous is not None:
            logger.debug(
                "Replaced %s %s (%r -> %r)",
                route.method,
                route.path,
                previous.specification,
                route.specification,
            )
        else:
            logger.debug("Registered %s %s (priority %d)", route.method, route.path, route.priority)

    def add(
        self,
        specification: str,
        method: str,
        handler: Any,
        *,
        middleware: tuple[Any, ...] = (),
    ) -> CompiledRoute:
        """Compile a declaration and register it.  Returns the route."""
        route = compile_route(
            specification, method, handler, middleware=middleware, config=self._config
        )
        self.register(route)
        return route

    def bind(self, binding: MiddlewareBinding) -> None:
        """Register a middleware binding.  Applied at compile time."""
        with self._lock:
            self._check_not_compiled()
            self._bindings.append(binding)
        logger.debug(
            "Bound %d middleware to prefix %r", len(binding.middleware), binding.path_prefix
        )

    # -- Compilation --

    def compile(self) -> RoutingTable:
        """Freeze the router and return the compiled table.

        Compiling an already-compiled router returns the existing table.
        """
        with self._lock:
            if self._table is not None:
                return self._table

            start = time.perf_counter()
            segment_aware = self._config.segment_aware_middleware
            routes = []
            for route in self._routes.values():
                scoped = applicable_middleware(
                    route.path, self._bindings, segment_aware=segment_aware
                )
                if scoped:
                    route = replace(route, middleware=(*route.middleware, *scoped))
                routes.append(route)

            table = RoutingTable(routes)
            self._table = table
            elapsed_ms = (time.perf_counter() - start) * 1000

        logger.info("Compiled %d routes in %.2fms", len(table), elapsed_ms)
        if self._config.log_routes:
            logger.info("Route table:\n%s", format_routes(table))
        return table

    def reset(self) -> None:
        """Drop the compiled table and every registration."""
        with self._lock:
            self._routes = {}
            self._bindings = []
            self._table = None
        logger.debug("Router reset")

    # -- Matching --

    def match(self, method: str, path: str) -> MatchResult | NotFound:
        """Match *method* and *path* against the compiled table.

        Returns ``MatchResult`` or ``NotFound``.  Raises
        :class:`NotReady` if the router has not been compiled.
        """
        return self.table.match(method, path)
