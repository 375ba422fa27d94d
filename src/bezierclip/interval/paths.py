"""Arc-length ranges over trimmable curve paths.

The path type itself (tessellation, splitting, arc length) lives in the
curve-processing layer; this module only reads lengths and start tangents
from it and asks it to trim.
"""

import logging
from collections.abc import Sequence
from typing import Protocol, runtime_checkable

from bezierclip.interval.core import Interval, hull, intersect

_LOGGER = logging.getLogger(__name__)


@runtime_checkable
class CurvePath(Protocol):
    """Path collaborator. Lengths are arc lengths from the path start."""

    def length(self) -> float: ...

    def tangent_at_start(self) -> float: ...

    def sub_paths(self) -> Sequence["CurvePath"]: ...

    def count_sub_paths(self) -> int: ...

    def subpath_index_for_element(self, element: int) -> int: ...

    def trimmed_from_length(self, length: float) -> "CurvePath":
        """Return the part of the path after ``length``."""
        ...

    def trimmed_to_length(self, length: float) -> "CurvePath":
        """Return the part of the path up to ``length``."""
        ...

    def append_path_removing_initial_move(self, other: "CurvePath") -> None:
        ...


def length_range(path: CurvePath) -> Interval:
    return Interval(0.0, path.length())


def length_spans(path: CurvePath) -> list[Interval]:
    """Cumulative arc-length span of each sub-path, in path order."""
    spans: list[Interval] = []
    start = 0.0
    for sub_path in path.sub_paths():
        end = start + sub_path.length()
        spans.append(Interval(start, end))
        start = end
    return spans


def tangent_range(path: CurvePath) -> Interval:
    return hull(
        Interval(sub_path.tangent_at_start()) for sub_path in path.sub_paths()
    )


def subpath_at_length(path: CurvePath, length: float) -> int | None:
    for index, span in enumerate(length_spans(path)):
        if span.contains(length):
            return index
    return None


def trim_to_span(path: CurvePath, span: Interval) -> CurvePath:
    if span.is_empty():
        raise ValueError(f"Cannot trim to empty span {span!r}")

    full = length_range(path)
    clipped = intersect(span, full)
    if clipped is None:
        raise ValueError(
            f"Span {span!r} lies outside the path length range {full!r}"
        )
    if clipped != span:
        _LOGGER.debug("trim_to_span clipped %r to %r", span, clipped)

    head = path.trimmed_to_length(clipped.max())
    return head.trimmed_from_length(clipped.min())
