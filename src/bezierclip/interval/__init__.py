"""interval: closed real intervals for curve clipping and trimming."""

from bezierclip.interval.core import (
    EPSILON,
    Interval,
    add,
    are_near,
    hull,
    intersect,
    multiply,
    subtract,
    unify,
)
from bezierclip.interval.models import IntervalRecord, Operation
from bezierclip.interval.paths import (
    CurvePath,
    length_range,
    length_spans,
    subpath_at_length,
    tangent_range,
    trim_to_span,
)

__all__ = [
    "EPSILON",
    "CurvePath",
    "Interval",
    "IntervalRecord",
    "Operation",
    "add",
    "are_near",
    "hull",
    "intersect",
    "length_range",
    "length_spans",
    "multiply",
    "subpath_at_length",
    "subtract",
    "tangent_range",
    "trim_to_span",
    "unify",
]
