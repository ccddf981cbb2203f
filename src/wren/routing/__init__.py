"""Routing: specification parsing, pattern compilation, priority-ordered matching.

Routes are registered during setup and compiled into an immutable
lookup structure that any number of threads can match against.
"""

from wren.routing.dispatch import BuildResult, Dispatcher, RouteDeclaration, build_table
from wren.routing.middleware import MiddlewareBinding, applicable_middleware
from wren.routing.pattern import CompiledPattern, compile_pattern
from wren.routing.priority import score
from wren.routing.route import CompiledRoute, MatchResult, NotFound, compile_route
from wren.routing.router import Router
from wren.routing.segments import FileRole, Segment, SegmentKind, file_role, parse_specification
from wren.routing.table import RoutingTable, format_routes

__all__ = [
    "BuildResult",
    "CompiledPattern",
    "CompiledRoute",
    "Dispatcher",
    "FileRole",
    "MatchResult",
    "MiddlewareBinding",
    "NotFound",
    "RouteDeclaration",
    "Router",
    "RoutingTable",
    "Segment",
    "SegmentKind",
    "applicable_middleware",
    "build_table",
    "compile_pattern",
    "compile_route",
    "file_role",
    "format_routes",
    "parse_specification",
    "score",
]
