"""Path specification parsing.

Turns a filesystem-shaped specification into typed segments::

    "users/[id]/page.py"      -> [STATIC users, DYNAMIC id]
    "docs/[...slug]"          -> [STATIC docs, CATCH_ALL slug]
    "(marketing)/about"       -> [GROUP marketing, STATIC about]

Groups carry no URL meaning but are kept for traceability.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum

from wren.config import RouterConfig
from wren.errors import InvalidSpecification

_DEFAULT_CONFIG = RouterConfig()

_CATCH_ALL_PREFIX = "..."

# Delimiters that may not appear inside a parameter name or group label
_MARKER_CHARS = frozenset("[]()")


class SegmentKind(Enum):
    """Classification of one specification token."""

    STATIC = "static"
    DYNAMIC = "dynamic"
    CATCH_ALL = "catch_all"
    GROUP = "group"


@dataclass(frozen=True, slots=True)
class Segment:
    """A parsed segment of a path specification.

    Static:    ``users``      (value="users")
    Dynamic:   ``[id]``       (value="id")
    Catch-all: ``[...slug]``  (value="slug")
    Group:     ``(admin)``    (value="admin")
    """

    kind: SegmentKind
    value: str
    raw: str

    @property
    def is_param(self) -> bool:
        return self.kind in (SegmentKind.DYNAMIC, SegmentKind.CATCH_ALL)

    @property
    def is_group(self) -> bool:
        return self.kind is SegmentKind.GROUP

    def render(self) -> str | None:
        """Render the URL-facing form, or ``None`` for groups."""
        match self.kind:
            case SegmentKind.STATIC:
                return self.value
            case SegmentKind.DYNAMIC:
                return f":{self.value}"
            case SegmentKind.CATCH_ALL:
                return f"*{self.value}"
            case SegmentKind.GROUP:
                return None


class FileRole(Enum):
    """Role a discovered file plays, derived from its stem."""

    PAGE = "page"
    ROUTE = "route"
    LAYOUT = "layout"
    MIDDLEWARE = "middleware"
    LOADING = "loading"
    ERROR = "error"
    NOT_FOUND = "not-found"
    GLOBAL_ERROR = "global-error"


_ROLE_BY_STEM: dict[str, FileRole] = {role.value: role for role in FileRole}
_ROLE_BY_STEM["_middleware"] = FileRole.MIDDLEWARE


def file_role(filename: str, config: RouterConfig | None = None) -> FileRole | None:
    """Classify a file name by its conventional role.

    ``"page.tsx"`` -> ``FileRole.PAGE``, ``"_middleware.py"`` ->
    ``FileRole.MIDDLEWARE``.  Returns ``None`` for files with an
    unrecognised stem or an extension not listed in the config.
    """
    config = config or _DEFAULT_CONFIG
    name = filename.replace("\\", "/").rsplit("/", 1)[-1]
    stem, dot, ext = name.rpartition(".")
    if not dot or f".{ext}" not in config.extensions:
        return None
    return _ROLE_BY_STEM.get(stem)


def split_specification(
    specification: str,
    config: RouterConfig | None = None,
    *,
    reserved: tuple[str, ...] | None = None,
) -> list[str]:
    """Split a specification into tokens and strip the file suffix.

    The extension on the last token and a trailing reserved role token
    are removed.  This is normalisation only: no token is
    classified here.
    """
    config = config or _DEFAULT_CONFIG
    reserved = config.reserved_names if reserved is None else reserved

    tokens = [t for t in specification.replace("\\", "/").split("/") if t]
    if tokens:
        last = tokens[-1]
        for ext in config.extensions:
            if last.endswith(ext) and len(last) > len(ext):
                tokens[-1] = last[: -len(ext)]
                break
    # Only the file's own role is stripped; a directory named "page" stays
    if tokens and tokens[-1] in reserved:
        tokens.pop()
    return tokens


def _check_name(name: str, token: str, specification: str) -> None:
    if _MARKER_CHARS.intersection(name):
        raise InvalidSpecification(specification, f"malformed marker {token!r}")


def classify_token(token: str, specification: str) -> Segment:
    """Classify one token of *specification* into a :class:`Segment`.

    Raises :class:`InvalidSpecification` for empty or malformed markers
    such as ``[]``, ``[[id]]`` or ``[a]b]``.
    """
    if token.startswith("(") and token.endswith(")") and len(token) >= 2:
        label = token[1:-1]
        if not label:
            raise InvalidSpecification(specification, "group marker '()' has no label")
        _check_name(label, token, specification)
        return Segment(SegmentKind.GROUP, label, token)

    if token.startswith("[") and token.endswith("]") and len(token) >= 2:
        inner = token[1:-1]
        if inner.startswith(_CATCH_ALL_PREFIX):
            name = inner[len(_CATCH_ALL_PREFIX) :]
            if not name:
                raise InvalidSpecification(specification, f"catch-all marker {token!r} has no parameter name")
            _check_name(name, token, specification)
            return Segment(SegmentKind.CATCH_ALL, name, token)
        if not inner:
            raise InvalidSpecification(specification, "dynamic marker '[]' has no parameter name")
        _check_name(inner, token, specification)
        return Segment(SegmentKind.DYNAMIC, inner, token)

    return Segment(SegmentKind.STATIC, token, token)


def parse_specification(
    specification: str,
    config: RouterConfig | None = None,
) -> list[Segment]:
    """Parse a path specification into an ordered list of segments.

    Examples::

        "page.tsx"                 -> []
        "(pages)/users/[id]/page"  -> [GROUP pages, STATIC users, DYNAMIC id]
        "api/files/[...path]/route.ts" -> [STATIC api, STATIC files, CATCH_ALL path]

    Raises :class:`InvalidSpecification` when a marker has no name, a
    parameter name repeats, or a catch-all is not the last URL segment.
    """
    segments: list[Segment] = []
    seen: set[str] = set()
    catch_all: Segment | None = None

    for token in split_specification(specification, config):
        segment = classify_token(token, specification)

        if segment.is_group:
            segments.append(segment)
            continue

        if catch_all is not None:
            raise InvalidSpecification(
                specification,
                f"catch-all {catch_all.raw!r} must be the last segment, found {token!r} after it",
            )

        if segment.is_param:
            if segment.value in seen:
                raise InvalidSpecification(
                    specification, f"duplicate parameter name {segment.value!r}"
                )
            seen.add(segment.value)
            if segment.kind is SegmentKind.CATCH_ALL:
                catch_all = segment

        segments.append(segment)

    return segments
