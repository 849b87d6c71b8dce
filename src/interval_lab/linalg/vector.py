"""Vectors of intervals.

A ``Vector`` owns its element list: the list passed to the constructor is
used as-is, not copied, and the caller must not keep mutating it. Use
``Vector.from_values`` to build a vector from plain numbers.
"""

from __future__ import annotations

from collections.abc import Iterator, Sequence
from typing import TYPE_CHECKING

import numpy as np

from interval_lab.arithmetic.elementary import sqrt
from interval_lab.arithmetic.interval import ZERO, Interval
from interval_lab.errors import DimensionMismatchError
from interval_lab.parallel import ParallelConfig, parallel_for

if TYPE_CHECKING:
    from collections.abc import Callable

    from numpy.typing import ArrayLike, NDArray


class Vector:
    """Fixed-size vector with Interval elements.

    Example:
        >>> v = Vector.from_values([3, 4], exact=True)
        >>> v.norm()
        Interval(lower=5.0, upper=5.0)
    """

    __slots__ = ("_elements",)

    def __init__(self, elements: list[Interval]) -> None:
        """Wrap an element list (taken over, not copied)."""
        self._elements = elements

    @classmethod
    def from_values(cls, values: ArrayLike, *, exact: bool = False) -> Vector:
        """
        Create a vector from scalars.

        Args:
            values: 1-D array-like of numbers.
            exact: Build exact points instead of measured (ULP-padded) values.

        Raises:
            ValueError: If values is not one-dimensional.
        """
        data = np.asarray(values, dtype=np.float64)
        if data.ndim != 1:
            msg = f"Expected a 1-D array, got shape {data.shape}"
            raise ValueError(msg)
        return cls([Interval.from_value(x, exact=exact) for x in data.tolist()])

    # -------------------------------------------------------------------------
    # Access
    # -------------------------------------------------------------------------

    @property
    def size(self) -> int:
        """Number of elements."""
        return len(self._elements)

    @property
    def elements(self) -> list[Interval]:
        """The owned element list (no copy)."""
        return self._elements

    def __len__(self) -> int:
        return len(self._elements)

    def __getitem__(self, index: int) -> Interval:
        return self._elements[index]

    def __iter__(self) -> Iterator[Interval]:
        return iter(self._elements)

    def midpoints(self) -> NDArray[np.float64]:
        """Midpoints of all elements."""
        return np.array([x.midpoint for x in self._elements], dtype=np.float64)

    def widths(self) -> NDArray[np.float64]:
        """Widths of all elements."""
        return np.array([x.width for x in self._elements], dtype=np.float64)

    # -------------------------------------------------------------------------
    # Operations
    # -------------------------------------------------------------------------

    def add(self, other: Vector, *, config: ParallelConfig | None = None) -> Vector:
        """Component-wise sum."""
        self._check_size(other, "add")
        a, b = self._elements, other._elements
        return _build(self.size, lambda i: a[i] + b[i], config)

    def subtract(self, other: Vector, *, config: ParallelConfig | None = None) -> Vector:
        """Component-wise difference."""
        self._check_size(other, "subtract")
        a, b = self._elements, other._elements
        return _build(self.size, lambda i: a[i] - b[i], config)

    def scale(self, scalar: Interval, *, config: ParallelConfig | None = None) -> Vector:
        """Multiply every element by a scalar interval."""
        a = self._elements
        return _build(self.size, lambda i: scalar * a[i], config)

    def negate(self, *, config: ParallelConfig | None = None) -> Vector:
        """Component-wise negation."""
        a = self._elements
        return _build(self.size, lambda i: -a[i], config)

    def dot(self, other: Vector) -> Interval:
        """
        Scalar product, accumulated in index order.

        Interval addition is not associative under outward rounding, so the
        summation order is fixed and never parallelized.
        """
        self._check_size(other, "dot")
        total = ZERO
        for x, y in zip(self._elements, other._elements):
            total = total + x * y
        return total

    def norm2(self) -> Interval:
        """Squared Euclidean norm."""
        return self.dot(self)

    def norm(self) -> Interval:
        """Euclidean norm."""
        return sqrt(self.norm2())

    def _check_size(self, other: Vector, operation: str) -> None:
        if self.size != other.size:
            raise DimensionMismatchError(f"Vector {operation}", (self.size,), (other.size,))

    # -------------------------------------------------------------------------
    # Operators
    # -------------------------------------------------------------------------

    def __add__(self, other: object) -> Vector:
        if not isinstance(other, Vector):
            return NotImplemented
        return self.add(other)

    def __sub__(self, other: object) -> Vector:
        if not isinstance(other, Vector):
            return NotImplemented
        return self.subtract(other)

    def __mul__(self, other: object) -> Interval:
        if not isinstance(other, Vector):
            return NotImplemented
        return self.dot(other)

    def __rmul__(self, other: object) -> Vector:
        if not isinstance(other, Interval):
            return NotImplemented
        return self.scale(other)

    def __neg__(self) -> Vector:
        return self.negate()

    def __str__(self) -> str:
        return "(" + ", ".join(str(x) for x in self._elements) + ")"

    def __repr__(self) -> str:
        return f"Vector({self._elements!r})"


def _build(
    n: int,
    op: Callable[[int], Interval],
    config: ParallelConfig | None,
) -> Vector:
    """Fill a fresh vector with op(i) through the parallel dispatcher."""
    result: list[Interval] = [ZERO] * n

    def body(i: int) -> None:
        result[i] = op(i)

    parallel_for(0, n, body, n, config=config)
    return Vector(result)


def vector_from_intervals(values: Sequence[Interval]) -> Vector:
    """Create a vector from a copy of an interval sequence."""
    return Vector(list(values))


__all__ = [
    "Vector",
    "vector_from_intervals",
]
