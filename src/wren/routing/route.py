"""CompiledRoute, MatchResult and NotFound frozen dataclasses."""

from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass
from typing import Any

from wren.config import RouterConfig
from wren.errors import ConfigurationError
from wren.routing.pattern import CompiledPattern, Params, compile_pattern
from wren.routing.priority import score_pattern, sort_key
from wren.routing.segments import parse_specification


@dataclass(frozen=True, slots=True)
class CompiledRoute:
    """A compiled route definition.

    Immutable once created.  Two routes with the same :attr:`key`
    are the same route; the router keeps the last one registered.

    Attributes:
        method: Upper-case HTTP method.
        pattern: The compiled URL pattern.
        handler: Opaque handler reference, never inspected.
        priority: Specificity score (higher wins).
        middleware: Opaque middleware references, in run order.
        specification: The specification the route was compiled from.
    """

    method: str
    pattern: CompiledPattern
    handler: Any
    priority: int
    middleware: tuple[Any, ...] = ()
    specification: str = ""

    @property
    def path(self) -> str:
        return self.pattern.canonical

    @property
    def param_names(self) -> tuple[str, ...]:
        return self.pattern.param_names

    @property
    def is_dynamic(self) -> bool:
        return self.pattern.is_dynamic

    @property
    def key(self) -> tuple[str, str]:
        return (self.method, self.pattern.canonical)

    @property
    def order_key(self) -> tuple[int, str]:
        return sort_key(self.priority, self.pattern.canonical)


@dataclass(frozen=True, slots=True)
class MatchResult:
    """Result of a successful route match.

    Catch-all parameters are bound to a tuple of path segments,
    everything else to a single string.
    """

    route: CompiledRoute
    params: Params

    @property
    def handler(self) -> Any:
        return self.route.handler

    @property
    def middleware(self) -> tuple[Any, ...]:
        return self.route.middleware


@dataclass(frozen=True, slots=True)
class NotFound:
    """No route matched.  A normal negative result, not an error.

    Falsy, so callers can write ``if result := router.match(...)``.
    """

    method: str
    path: str

    def __bool__(self) -> bool:
        return False


def normalize_method(method: str, config: RouterConfig) -> str:
    """Upper-case *method* and check it against the configured set."""
    normalized = method.upper()
    if normalized not in config.methods:
        allowed = ", ".join(config.methods)
        msg = f"Unsupported HTTP method {method!r}. Allowed methods: {allowed}"
        raise ConfigurationError(msg)
    return normalized


def compile_route(
    specification: str,
    method: str,
    handler: Any,
    *,
    middleware: Iterable[Any] = (),
    config: RouterConfig | None = None,
) -> CompiledRoute:
    """Parse, compile and score one route declaration.

    Raises :class:`~wren.errors.InvalidSpecification` for a malformed
    specification and :class:`~wren.errors.ConfigurationError` for an
    unsupported method.
    """
    config = config or RouterConfig()
    pattern = compile_pattern(parse_specification(specification, config))
    return CompiledRoute(
        method=normalize_method(method, config),
        pattern=pattern,
        handler=handler,
        priority=score_pattern(pattern),
        middleware=tuple(middleware),
        specification=specification,
    )
