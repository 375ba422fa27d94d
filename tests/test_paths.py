import logging
from collections.abc import Sequence

import pytest

from bezierclip.interval.core import Interval
from bezierclip.interval.paths import (
    CurvePath,
    length_range,
    length_spans,
    subpath_at_length,
    tangent_range,
    trim_to_span,
)


class _FakePath:
    """Straight-segment path; trimming only moves the [start, end] window."""

    def __init__(
        self,
        segments: Sequence[tuple[float, float]],
        start: float = 0.0,
        end: float | None = None,
    ) -> None:
        self.segments = list(segments)
        self.start = start
        self.end = (
            sum(length for length, _ in self.segments) if end is None else end
        )
        self.appended: list["_FakePath"] = []

    def length(self) -> float:
        return self.end - self.start

    def tangent_at_start(self) -> float:
        return self.segments[0][1] if self.segments else 0.0

    def sub_paths(self) -> list["_FakePath"]:
        return [_FakePath([segment]) for segment in self.segments]

    def count_sub_paths(self) -> int:
        return len(self.segments)

    def subpath_index_for_element(self, element: int) -> int:
        return element

    def trimmed_from_length(self, length: float) -> "_FakePath":
        return _FakePath(self.segments, self.start + length, self.end)

    def trimmed_to_length(self, length: float) -> "_FakePath":
        return _FakePath(self.segments, self.start, self.start + length)

    def append_path_removing_initial_move(self, other: "_FakePath") -> None:
        self.appended.append(other)


@pytest.fixture
def path() -> _FakePath:
    return _FakePath([(2.0, 0.1), (3.0, 0.5), (1.0, -0.2)])


def test_fake_path_satisfies_protocol(path: _FakePath) -> None:
    assert isinstance(path, CurvePath)
    assert not isinstance(object(), CurvePath)


def test_length_range(path: _FakePath) -> None:
    assert length_range(path) == Interval(0.0, 6.0)


def test_length_spans_are_cumulative(path: _FakePath) -> None:
    assert length_spans(path) == [
        Interval(0.0, 2.0),
        Interval(2.0, 5.0),
        Interval(5.0, 6.0),
    ]


def test_length_spans_of_path_without_sub_paths() -> None:
    assert length_spans(_FakePath([])) == []


def test_tangent_range(path: _FakePath) -> None:
    assert tangent_range(path) == Interval(-0.2, 0.5)


def test_tangent_range_without_sub_paths_is_empty() -> None:
    assert tangent_range(_FakePath([])).is_empty()


@pytest.mark.parametrize(
    ("length", "expected"),
    [(0.0, 0), (1.0, 0), (2.0, 0), (4.5, 1), (5.5, 2), (6.0, 2), (7.0, None)],
)
def test_subpath_at_length(
    path: _FakePath, length: float, expected: int | None
) -> None:
    assert subpath_at_length(path, length) == expected


def test_trim_to_span_inside(path: _FakePath) -> None:
    trimmed = trim_to_span(path, Interval(1.0, 4.0))

    assert isinstance(trimmed, _FakePath)
    assert (trimmed.start, trimmed.end) == (1.0, 4.0)
    assert trimmed.length() == 3.0


def test_trim_to_span_clips_to_path(
    path: _FakePath, caplog: pytest.LogCaptureFixture
) -> None:
    caplog.set_level(logging.DEBUG, logger="bezierclip.interval.paths")

    trimmed = trim_to_span(path, Interval(-2.0, 3.0))

    assert (trimmed.start, trimmed.end) == (0.0, 3.0)
    assert "clipped" in caplog.text


def test_trim_to_span_clips_past_end(path: _FakePath) -> None:
    trimmed = trim_to_span(path, Interval(4.0, 10.0))

    assert (trimmed.start, trimmed.end) == (4.0, 6.0)


def test_trim_to_empty_span_raises(path: _FakePath) -> None:
    with pytest.raises(ValueError, match="empty span"):
        trim_to_span(path, Interval())


def test_trim_to_disjoint_span_raises(path: _FakePath) -> None:
    with pytest.raises(ValueError, match="outside"):
        trim_to_span(path, Interval(7.0, 9.0))
