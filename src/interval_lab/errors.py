"""Exception taxonomy for interval computations.

Undefined results (0/0, square root of a negative interval) are not errors:
they are returned as the empty interval and detected with ``is_empty``.
"""

from __future__ import annotations


class IntervalLabError(Exception):
    """Base class for all errors raised by interval_lab."""


class InvalidBoundsError(IntervalLabError, ValueError):
    """Raised when an interval is built with lower bound greater than upper."""

    def __init__(self, lower: float, upper: float) -> None:
        self.lower = lower
        self.upper = upper
        super().__init__(
            f"Lower bound is greater than upper bound: {lower!r} > {upper!r}"
        )


class DimensionMismatchError(IntervalLabError, ValueError):
    """Raised when vector/matrix operands have incompatible shapes."""

    def __init__(self, operation: str, left: tuple[int, ...], right: tuple[int, ...]):
        self.operation = operation
        self.left = left
        self.right = right
        super().__init__(f"{operation}: size mismatch {left} vs {right}")


class ParallelExecutionError(ExceptionGroup):
    """Aggregate of worker failures raised at the join point of a parallel loop."""


__all__ = [
    "DimensionMismatchError",
    "IntervalLabError",
    "InvalidBoundsError",
    "ParallelExecutionError",
]
