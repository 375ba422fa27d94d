"""Closed real intervals with IEEE-transparent arithmetic."""

import logging
import math
from collections.abc import Iterable, Sequence
from typing import Any

import numpy as np

_LOGGER = logging.getLogger(__name__)

EPSILON = 1e-5


def are_near(a: float, b: float, eps: float = EPSILON) -> bool:
    return abs(a - b) <= eps


def _ieee_divide(value: float, divisor: float) -> float:
    with np.errstate(divide="ignore", invalid="ignore"):
        return float(np.float64(value) / np.float64(divisor))


class Interval:
    """Closed range ``[lo, hi]`` of floats.

    ``Interval()`` is the canonical empty interval ``[+inf, -inf]``, so a
    following ``extend_to(p)`` collapses it to ``[p, p]``. Any state with
    ``lo > hi`` reports ``is_empty()``. ``Interval(u, v)`` orders its bounds.
    """

    __slots__ = ("_lo", "_hi")
    __hash__ = None  # type: ignore[assignment]

    def __init__(self, u: float | None = None, v: float | None = None) -> None:
        if u is None:
            if v is not None:
                raise TypeError("upper bound given without a lower bound")
            self._lo = math.inf
            self._hi = -math.inf
        elif v is None:
            self._lo = self._hi = float(u)
        elif u < v:
            self._lo, self._hi = float(u), float(v)
        else:
            self._lo, self._hi = float(v), float(u)

    @classmethod
    def empty(cls) -> "Interval":
        return cls()

    @classmethod
    def point(cls, u: float) -> "Interval":
        return cls(u)

    @classmethod
    def from_bounds(cls, u: float, v: float) -> "Interval":
        return cls(u, v)

    @classmethod
    def from_array(
        cls, values: Sequence[float] | np.ndarray, n: int | None = None
    ) -> "Interval":
        """Smallest interval holding the first ``n`` values.

        NaN values after the first leave the bounds untouched.
        """
        data = np.asarray(values, dtype=np.float64)
        if data.ndim != 1:
            raise ValueError(
                f"values must be one-dimensional, got shape {data.shape}"
            )
        if n is None:
            n = len(data)
        if n <= 0:
            raise ValueError(f"n must be > 0, got {n}")
        if n > len(data):
            raise ValueError(
                f"n ({n}) exceeds the number of values ({len(data)})"
            )

        result = cls(float(data[0]))
        for value in data[1:n]:
            result.extend_to(float(value))

        n_nan = int(np.isnan(data[1:n]).sum())
        if n_nan:
            _LOGGER.debug("from_array ignored %d NaN value(s)", n_nan)
        return result

    def copy(self) -> "Interval":
        return Interval()._assign(self)

    def _assign(self, other: "Interval") -> "Interval":
        self._lo, self._hi = other._lo, other._hi
        return self

    @property
    def lo(self) -> float:
        return self._lo

    @property
    def hi(self) -> float:
        return self._hi

    def min(self) -> float:
        return self._lo

    def max(self) -> float:
        return self._hi

    def extent(self) -> float:
        return self._hi - self._lo

    def middle(self) -> float:
        return (self._lo + self._hi) * 0.5

    def is_empty(self) -> bool:
        return self._lo > self._hi

    def contains(self, value: "float | Interval") -> bool:
        if isinstance(value, Interval):
            return self._lo <= value._lo and value._hi <= self._hi
        return self._lo <= value <= self._hi

    def intersects(self, other: "Interval") -> bool:
        # An empty operand intersects nothing, itself included.
        if self.is_empty() or other.is_empty():
            return False
        return (
            self.contains(other._lo)
            or self.contains(other._hi)
            or other.contains(self)
        )

    # Translation and scaling

    def translate(self, amount: float) -> "Interval":
        self._lo += amount
        self._hi += amount
        return self

    def translated(self, amount: float) -> "Interval":
        return self.copy().translate(amount)

    def scale(self, s: float) -> "Interval":
        if s < 0:
            self._lo, self._hi = self._hi * s, self._lo * s
        else:
            self._lo *= s
            self._hi *= s
        return self

    def scaled(self, s: float) -> "Interval":
        return self.copy().scale(s)

    def divide(self, s: float) -> "Interval":
        # s == 0 yields infinities or NaN, never ZeroDivisionError
        lo = _ieee_divide(self._lo, s)
        hi = _ieee_divide(self._hi, s)
        if s < 0:
            self._lo, self._hi = hi, lo
        else:
            self._lo, self._hi = lo, hi
        return self

    def divided(self, s: float) -> "Interval":
        return self.copy().divide(s)

    # Range growth

    def set_min(self, value: float) -> "Interval":
        # Past hi, the old hi becomes lo instead of inverting.
        if value > self._hi:
            self._lo = self._hi
            self._hi = value
        else:
            self._lo = value
        return self

    def set_max(self, value: float) -> "Interval":
        if value < self._lo:
            self._hi = self._lo
            self._lo = value
        else:
            self._hi = value
        return self

    def extend_to(self, value: float) -> "Interval":
        if value < self._lo:
            self._lo = value
        if value > self._hi:  # no elif: NaN must touch neither bound
            self._hi = value
        return self

    def expand_by(self, amount: float) -> "Interval":
        self._lo -= amount
        self._hi += amount
        return self

    def union_with(self, other: "Interval") -> "Interval":
        if other._lo < self._lo:
            self._lo = other._lo
        if other._hi > self._hi:
            self._hi = other._hi
        return self

    # Python protocol

    def __getitem__(self, index: int) -> float:
        if index == 0:
            return self._lo
        if index == 1:
            return self._hi
        raise IndexError(f"Interval index must be 0 or 1, got {index}")

    def __setitem__(self, index: int, value: float) -> None:
        if index == 0:
            self._lo = value
        elif index == 1:
            self._hi = value
        else:
            raise IndexError(f"Interval index must be 0 or 1, got {index}")

    def __contains__(self, value: "float | Interval") -> bool:
        return self.contains(value)

    def __eq__(self, other: Any) -> bool:
        if not isinstance(other, Interval):
            return NotImplemented
        return self._lo == other._lo and self._hi == other._hi

    def __ne__(self, other: Any) -> bool:
        if not isinstance(other, Interval):
            return NotImplemented
        return self._lo != other._lo or self._hi != other._hi

    def __repr__(self) -> str:
        if self._lo == math.inf and self._hi == -math.inf:
            return "Interval()"
        return f"Interval({self._lo!r}, {self._hi!r})"

    def __neg__(self) -> "Interval":
        # Identity copy; the bounds are not mirrored.
        return self.copy()

    def __add__(self, other: "Interval | float") -> "Interval":
        if isinstance(other, Interval):
            return add(self, other)
        return self.translated(other)

    def __radd__(self, other: float) -> "Interval":
        return self.translated(other)

    def __iadd__(self, other: "Interval | float") -> "Interval":
        if isinstance(other, Interval):
            return self._assign(add(self, other))
        return self.translate(other)

    def __sub__(self, other: "Interval | float") -> "Interval":
        if isinstance(other, Interval):
            return subtract(self, other)
        return self.translated(-other)

    def __isub__(self, other: "Interval | float") -> "Interval":
        if isinstance(other, Interval):
            return self._assign(subtract(self, other))
        return self.translate(-other)

    def __mul__(self, other: "Interval | float") -> "Interval":
        if isinstance(other, Interval):
            return multiply(self, other)
        return self.scaled(other)

    def __rmul__(self, other: float) -> "Interval":
        return self.scaled(other)

    def __imul__(self, other: "Interval | float") -> "Interval":
        if isinstance(other, Interval):
            return self._assign(multiply(self, other))
        return self.scale(other)

    def __truediv__(self, s: float) -> "Interval":
        return self.divided(s)

    def __itruediv__(self, s: float) -> "Interval":
        return self.divide(s)


def add(a: Interval, b: Interval) -> Interval:
    return Interval(a.min() + b.min(), a.max() + b.max())


def subtract(a: Interval, b: Interval) -> Interval:
    # Cross terms: the widest difference pairs a.lo with b.hi.
    return Interval(a.min() - b.max(), a.max() - b.min())


def multiply(a: Interval, b: Interval) -> Interval:
    """Span of the four corner products of ``a`` and ``b``."""
    result = Interval(a.min() * b.min())
    result.extend_to(a.min() * b.max())
    result.extend_to(a.max() * b.min())
    result.extend_to(a.max() * b.max())
    return result


def unify(a: Interval, b: Interval) -> Interval:
    # Not normalized, so two empty inputs stay the canonical empty.
    return a.copy().union_with(b)


def intersect(a: Interval, b: Interval) -> Interval | None:
    """Common part of ``a`` and ``b``, or ``None`` when they are disjoint."""
    lo = max(a.min(), b.min())
    hi = min(a.max(), b.max())
    if lo > hi:
        return None
    return Interval(lo, hi)


def hull(intervals: Iterable[Interval]) -> Interval:
    result = Interval()
    for interval in intervals:
        result.union_with(interval)
    return result
