import math
from collections.abc import Callable
from enum import Enum
from typing import Annotated

from pydantic import BaseModel, Field, model_validator

from bezierclip.interval.core import (
    Interval,
    add,
    intersect,
    multiply,
    subtract,
    unify,
)


FiniteFloat = Annotated[float, Field(allow_inf_nan=False)]


class Operation(str, Enum):
    ADD = "add"
    SUBTRACT = "subtract"
    MULTIPLY = "multiply"
    UNIFY = "unify"
    INTERSECT = "intersect"


_BinaryOp = Callable[[Interval, Interval], Interval | None]

_OPERATIONS: dict[Operation, _BinaryOp] = {
    Operation.ADD: add,
    Operation.SUBTRACT: subtract,
    Operation.MULTIPLY: multiply,
    Operation.UNIFY: unify,
    Operation.INTERSECT: intersect,
}


def apply_operation(
    operation: Operation, left: Interval, right: Interval
) -> Interval | None:
    return _OPERATIONS[operation](left, right)


class IntervalRecord(BaseModel):
    """Serialized interval. ``lo`` and ``hi`` both ``None`` mean empty."""

    lo: FiniteFloat | None = Field(default=None, description="Lower bound")
    hi: FiniteFloat | None = Field(default=None, description="Upper bound")

    @model_validator(mode="after")
    def validate_bounds(self) -> "IntervalRecord":
        if (self.lo is None) != (self.hi is None):
            raise ValueError("lo and hi must both be set or both be null")
        if self.lo is not None and self.hi is not None and self.lo > self.hi:
            raise ValueError(f"lo ({self.lo}) must be <= hi ({self.hi})")
        return self

    @property
    def is_empty(self) -> bool:
        return self.lo is None

    @classmethod
    def from_interval(cls, interval: Interval) -> "IntervalRecord":
        if interval.is_empty():
            return cls()
        if not (math.isfinite(interval.lo) and math.isfinite(interval.hi)):
            raise ValueError(
                f"cannot serialize unbounded interval {interval!r}"
            )
        return cls(lo=interval.lo, hi=interval.hi)

    def to_interval(self) -> Interval:
        if self.lo is None or self.hi is None:
            return Interval()
        return Interval(self.lo, self.hi)
