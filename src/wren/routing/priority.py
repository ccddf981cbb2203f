"""Route specificity scoring.

Higher scores win.  The constants are part of the routing contract:
changing them changes which of two overlapping routes is selected.

    score = 1000 + 10 * segments - 100 * dynamic - 200 * catch_all
"""

from collections.abc import Iterable

from wren.routing.pattern import CompiledPattern
from wren.routing.segments import Segment, SegmentKind

BASE_PRIORITY = 1000
SEGMENT_BONUS = 10
DYNAMIC_PENALTY = 100
CATCH_ALL_PENALTY = 200


def score(segments: Iterable[Segment]) -> int:
    """Compute the priority of a sequence of segments.

    Group segments are not URL-visible and do not count.
    """
    priority = BASE_PRIORITY
    for segment in segments:
        if segment.is_group:
            continue
        priority += SEGMENT_BONUS
        if segment.kind is SegmentKind.DYNAMIC:
            priority -= DYNAMIC_PENALTY
        elif segment.kind is SegmentKind.CATCH_ALL:
            priority -= CATCH_ALL_PENALTY
    return priority


def score_pattern(pattern: CompiledPattern) -> int:
    return score(pattern.segments)


def sort_key(priority: int, canonical: str) -> tuple[int, str]:
    """Total-order key: descending priority, then ascending pattern string."""
    return (-priority, canonical)
