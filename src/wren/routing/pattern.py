"""Pattern compilation and request-path matching.

A compiled pattern has three faces:

- the canonical string (``/users/:id``, ``/files/*slug``, ``/``)
- the ordered parameter names
- a matcher over split request paths
"""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass

from wren.routing.segments import Segment, SegmentKind

type ParamValue = str | tuple[str, ...]
type Params = dict[str, ParamValue]


def split_path(path: str) -> list[str]:
    """Split a request path into non-empty literal segments.

    ``"/users/42/"`` -> ``["users", "42"]``.  Trailing and repeated
    slashes are ignored.
    """
    return [p for p in path.split("/") if p]


def render_pattern(segments: Sequence[Segment]) -> str:
    """Join the URL-visible segments into the canonical pattern string."""
    parts = [r for r in (s.render() for s in segments) if r is not None]
    if not parts:
        return "/"
    return "/" + "/".join(parts)


@dataclass(frozen=True, slots=True)
class CompiledPattern:
    """A compiled, URL-facing route pattern.

    Attributes:
        canonical: Canonical pattern string, e.g. ``/users/:id``.
        segments: URL-visible segments (groups removed).
        param_names: Parameter names in left-to-right order.
        source: Every parsed segment, groups included.
    """

    canonical: str
    segments: tuple[Segment, ...]
    param_names: tuple[str, ...]
    source: tuple[Segment, ...] = ()

    @property
    def is_dynamic(self) -> bool:
        return bool(self.param_names)

    @property
    def has_catch_all(self) -> bool:
        # A catch-all can only ever be the last URL-visible segment
        return bool(self.segments) and self.segments[-1].kind is SegmentKind.CATCH_ALL

    def match(self, parts: Sequence[str]) -> Params | None:
        """Match split request segments against this pattern.

        Returns the parameter bindings on success, ``None`` otherwise.
        Static segments compare case-sensitively; a dynamic segment
        takes exactly one part; a trailing catch-all takes one or more.
        """
        segments = self.segments
        if self.has_catch_all:
            # Catch-all must absorb at least one part
            if len(parts) < len(segments):
                return None
        elif len(parts) != len(segments):
            return None

        params: Params = {}
        for index, segment in enumerate(segments):
            kind = segment.kind
            if kind is SegmentKind.STATIC:
                if parts[index] != segment.value:
                    return None
            elif kind is SegmentKind.DYNAMIC:
                params[segment.value] = parts[index]
            else:
                params[segment.value] = tuple(parts[index:])
                break
        return params

    def match_path(self, path: str) -> Params | None:
        """Convenience wrapper: split *path* and match it."""
        return self.match(split_path(path))


def compile_pattern(segments: Sequence[Segment]) -> CompiledPattern:
    """Compile parsed segments into a :class:`CompiledPattern`.

    Examples::

        [STATIC users, DYNAMIC id]      -> "/users/:id", ("id",)
        [GROUP auth, STATIC login]      -> "/login", ()
        []                              -> "/", ()
    """
    visible = tuple(s for s in segments if not s.is_group)
    return CompiledPattern(
        canonical=render_pattern(visible),
        segments=visible,
        param_names=tuple(s.value for s in visible if s.is_param),
        source=tuple(segments),
    )
