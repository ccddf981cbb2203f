"""Middleware scoping by path prefix.

A :class:`MiddlewareBinding` ties an ordered list of middleware to a
path prefix.  A route picks up every binding whose prefix covers its
canonical pattern, in registration order, without deduplication.

By default the prefix test is a plain string prefix on the rendered
pattern, so ``/user`` also covers ``/users``.  Pass
``segment_aware=True`` to only match whole segments.
"""

from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass
from typing import Any

from wren.config import RouterConfig
from wren.routing.pattern import render_pattern
from wren.routing.segments import classify_token, split_specification

_MIDDLEWARE_NAMES = ("_middleware", "middleware")


@dataclass(frozen=True, slots=True)
class MiddlewareBinding:
    """Middleware declared for every route under *path_prefix*.

    Attributes:
        path_prefix: Canonical path prefix, e.g. ``/admin``.
        middleware: Opaque middleware references, run in order.
    """

    path_prefix: str
    middleware: tuple[Any, ...]

    @classmethod
    def from_specification(
        cls,
        specification: str,
        middleware: Iterable[Any],
        config: RouterConfig | None = None,
    ) -> MiddlewareBinding:
        """Build a binding from a middleware file's specification.

        ``"(app)/admin/_middleware.py"`` -> prefix ``/admin``.  Groups
        are elided, so a middleware file inside a group applies to the
        group's URL prefix.
        """
        config = config or RouterConfig()
        reserved = (*config.reserved_names, *_MIDDLEWARE_NAMES)
        tokens = split_specification(specification, config, reserved=reserved)
        segments = [classify_token(t, specification) for t in tokens]
        return cls(path_prefix=render_pattern(segments), middleware=tuple(middleware))


def covers(prefix: str, pattern: str, *, segment_aware: bool = False) -> bool:
    """Return True if a binding at *prefix* applies to *pattern*."""
    if not segment_aware:
        return pattern.startswith(prefix)
    if prefix == "/" or pattern == prefix:
        return True
    return pattern.startswith(prefix.rstrip("/") + "/")


def applicable_middleware(
    pattern: str,
    bindings: Iterable[MiddlewareBinding],
    *,
    segment_aware: bool = False,
) -> tuple[Any, ...]:
    """Collect the middleware that apply to a canonical *pattern*.

    Bindings are visited in registration order; within one binding the
    declared order is kept.  Duplicates are not removed.
    """
    result: list[Any] = []
    for binding in bindings:
        if covers(binding.path_prefix, pattern, segment_aware=segment_aware):
            result.extend(binding.middleware)
    return tuple(result)
