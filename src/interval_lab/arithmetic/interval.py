"""Closed intervals of binary64 values with outward-rounded arithmetic.

Every arithmetic operator returns an interval that contains the exact
mathematical result for any choice of operands inside the input intervals.
Bounds computed in floating point are widened by their own ULP (see
``interval_lab.data.ulp``) to absorb the rounding error of the bound itself.

Key Properties:
- Intervals are immutable values; every operation returns a new interval
- The empty interval (NaN bounds) is a value, not an error: it marks
  "no certain result" (0/0, square root of a negative number)
- Point intervals (lower == upper) combine exactly with each other

References:
- Moore, R.E., Kearfott, R.B., Cloud, M.J.: "Introduction to Interval
  Analysis" (2009)
- IEEE 1788-2015 Standard for Interval Arithmetic
"""

from __future__ import annotations

import math
from dataclasses import dataclass
from typing import TYPE_CHECKING

from interval_lab.data.float_layout import MAX_FLOAT, MIN_SUBNORMAL, is_finite
from interval_lab.data.ulp import unit_last_place
from interval_lab.errors import InvalidBoundsError

if TYPE_CHECKING:
    from fractions import Fraction

    Real = float | Fraction


@dataclass(frozen=True, slots=True, eq=False)
class Interval:
    """Closed interval [lower, upper] of binary64 values.

    Example:
        >>> a = Interval.exact(5)
        >>> b = Interval.exact(3)
        >>> (a + b).is_point, (a + b).lower
        (True, 8.0)
        >>> Interval(-1, 1) / Interval(-1, 1)
        Interval(lower=nan, upper=nan)
    """

    lower: float
    """Lower bound."""

    upper: float
    """Upper bound."""

    def __post_init__(self) -> None:
        lower = float(self.lower)
        upper = float(self.upper)
        if lower > upper:
            raise InvalidBoundsError(lower, upper)
        object.__setattr__(self, "lower", lower)
        object.__setattr__(self, "upper", upper)

    # -------------------------------------------------------------------------
    # Construction
    # -------------------------------------------------------------------------

    @classmethod
    def exact(cls, value: float) -> Interval:
        """Point interval [value, value], a true mathematical number."""
        return cls(value, value)

    @classmethod
    def measured(cls, value: float) -> Interval:
        """
        Interval [value - ulp, value + ulp] around an approximate input.

        ulp(0) is 0, so a measured zero is the exact point [0, 0].
        """
        value = float(value)
        ulp = unit_last_place(value)
        return cls(value - ulp, value + ulp)

    @classmethod
    def from_value(cls, value: float, *, exact: bool = False) -> Interval:
        """Build an interval from a scalar, exact point or measured value."""
        if exact:
            return cls.exact(value)
        return cls.measured(value)

    # -------------------------------------------------------------------------
    # Properties
    # -------------------------------------------------------------------------

    @property
    def midpoint(self) -> float:
        """Center of the interval."""
        center = (self.lower + self.upper) / 2
        if math.isinf(center) and is_finite(self.lower) and is_finite(self.upper):
            # lower + upper overflowed
            return self.lower / 2 + self.upper / 2
        return center

    @property
    def width(self) -> float:
        """Length upper - lower."""
        return self.upper - self.lower

    @property
    def is_empty(self) -> bool:
        """True if the interval holds no value."""
        return math.isnan(self.lower) or math.isnan(self.upper) or self.upper < self.lower

    @property
    def is_point(self) -> bool:
        """True if the interval is degenerate (a single number)."""
        return not self.is_empty and self.lower == self.upper

    @property
    def contains_zero(self) -> bool:
        """True if 0 lies in the interval."""
        return self.lower <= 0 <= self.upper

    # -------------------------------------------------------------------------
    # Set operations (exact)
    # -------------------------------------------------------------------------

    def contains(self, other: Interval | Real) -> bool:
        """Check containment of a number or of a whole interval."""
        if isinstance(other, Interval):
            return self.contains(other.lower) and self.contains(other.upper)
        return self.lower <= other <= self.upper

    def intersects(self, other: Interval) -> bool:
        """True if both intervals share at least one number."""
        if self.is_empty or other.is_empty:
            return False
        return not (other.upper < self.lower or other.lower > self.upper)

    def intersection(self, other: Interval) -> Interval:
        """Largest interval contained in both; EMPTY if they are disjoint."""
        if self.is_empty or other.is_empty:
            return EMPTY
        lower = max(self.lower, other.lower)
        upper = min(self.upper, other.upper)
        if lower > upper:
            return EMPTY
        return Interval(lower, upper)

    def union(self, other: Interval) -> Interval:
        """Smallest interval containing both (the convex hull)."""
        if self.is_empty:
            return other
        if other.is_empty:
            return self
        return Interval(min(self.lower, other.lower), max(self.upper, other.upper))

    # -------------------------------------------------------------------------
    # Arithmetic
    # -------------------------------------------------------------------------

    def add(self, other: Interval) -> Interval:
        """Outward-rounded sum."""
        if self.is_empty or other.is_empty:
            return EMPTY
        if self.is_point and other.is_point:
            total = self.lower + other.lower
            if is_finite(total):
                return Interval.exact(total)
        # A floating sum that rounds to zero is exactly zero.
        return _widen(self.lower + other.lower, self.upper + other.upper)

    def subtract(self, other: Interval) -> Interval:
        """Outward-rounded difference."""
        if self.is_empty or other.is_empty:
            return EMPTY
        if self.is_point and other.is_point:
            diff = self.lower - other.lower
            if is_finite(diff):
                return Interval.exact(diff)
        return _widen(self.lower - other.upper, self.upper - other.lower)

    def negate(self) -> Interval:
        """Exact negation [-upper, -lower]."""
        if self.is_empty:
            return EMPTY
        return Interval(-self.upper, -self.lower)

    def multiply(self, other: Interval) -> Interval:
        """Outward-rounded product."""
        if self.is_empty or other.is_empty:
            return EMPTY
        if self.is_point and other.is_point:
            product = self.lower * other.lower
            if is_finite(product) and (product != 0 or self.lower == 0 or other.lower == 0):
                return Interval.exact(product)

        corners = []
        for x in (self.lower, self.upper):
            for y in (other.lower, other.upper):
                corners.append(_corner(x * y, x == 0 or y == 0))
        return _hull(corners)

    def divide(self, other: Interval) -> Interval:
        """Outward-rounded quotient.

        A divisor containing zero yields ENTIRE, or EMPTY when the dividend
        contains zero as well (0/0 has no certain value).
        """
        if self.is_empty or other.is_empty:
            return EMPTY
        if other.contains_zero:
            if self.contains_zero:
                return EMPTY
            return ENTIRE
        if self.is_point and other.is_point:
            quotient = self.lower / other.lower
            if is_finite(quotient) and (quotient != 0 or self.lower == 0):
                return Interval.exact(quotient)

        corners = []
        for x in (self.lower, self.upper):
            for y in (other.lower, other.upper):
                corners.append(_corner(x / y, x == 0 or math.isinf(y)))
        return _hull(corners)

    def sqrt(self) -> Interval:
        """Square root, see ``interval_lab.arithmetic.elementary.sqrt``."""
        from interval_lab.arithmetic.elementary import sqrt

        return sqrt(self)

    def exp(self) -> Interval:
        """Exponential, see ``interval_lab.arithmetic.elementary.exp``."""
        from interval_lab.arithmetic.elementary import exp

        return exp(self)

    def abs(self) -> Interval:
        """Absolute value, see ``interval_lab.arithmetic.elementary.interval_abs``."""
        from interval_lab.arithmetic.elementary import interval_abs

        return interval_abs(self)

    # -------------------------------------------------------------------------
    # Operators
    # -------------------------------------------------------------------------

    def __add__(self, other: object) -> Interval:
        if not isinstance(other, Interval):
            return NotImplemented
        return self.add(other)

    def __sub__(self, other: object) -> Interval:
        if not isinstance(other, Interval):
            return NotImplemented
        return self.subtract(other)

    def __mul__(self, other: object) -> Interval:
        if not isinstance(other, Interval):
            return NotImplemented
        return self.multiply(other)

    def __truediv__(self, other: object) -> Interval:
        if not isinstance(other, Interval):
            return NotImplemented
        return self.divide(other)

    def __neg__(self) -> Interval:
        return self.negate()

    def __abs__(self) -> Interval:
        return self.abs()

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Interval):
            return NotImplemented
        return intervals_equal(self, other)

    def __hash__(self) -> int:
        if self.is_empty:
            return hash(("Interval", "empty"))
        return hash(("Interval", self.lower, self.upper))

    def __str__(self) -> str:
        return format_interval(self)


# =============================================================================
# CONSTANTS
# =============================================================================

EMPTY = Interval(math.nan, math.nan)
"""The empty interval: no certain result."""

ENTIRE = Interval(-math.inf, math.inf)
"""The whole real line."""

ZERO = Interval.exact(0.0)
"""Exact zero."""

ONE = Interval.exact(1.0)
"""Exact one."""


# =============================================================================
# PUBLIC API
# =============================================================================


def intersection(a: Interval, b: Interval) -> Interval:
    """Intersection of two intervals; EMPTY if they are disjoint."""
    return a.intersection(b)


def union(a: Interval, b: Interval) -> Interval:
    """Convex hull of two intervals; an empty operand is ignored."""
    return a.union(b)


def intervals_equal(a: Interval, b: Interval) -> bool:
    """Equality with all empty intervals considered equal."""
    if a.is_empty or b.is_empty:
        return a.is_empty and b.is_empty
    return a.lower == b.lower and a.upper == b.upper


def format_interval(x: Interval) -> str:
    """
    Render an interval as text.

    A single number is printed when the width is within one order of
    magnitude of the ULP of the midpoint, ``[lower; upper]`` otherwise.

    Example:
        >>> format_interval(Interval.measured(2.5))
        '2.5'
        >>> format_interval(Interval(1, 2))
        '[1.0; 2.0]'
    """
    if x.is_empty:
        return "[]"
    center = x.midpoint
    if x.width > 10 * unit_last_place(center):
        return f"[{x.lower!r}; {x.upper!r}]"
    return repr(center)


# =============================================================================
# INTERNAL HELPERS
# =============================================================================


def _pad_down(x: float, zero_is_exact: bool) -> float:
    """Move a lower bound down by its own ULP."""
    if x == 0:
        return 0.0 if zero_is_exact else -MIN_SUBNORMAL
    if x == math.inf:
        # overflowed lower bound
        return MAX_FLOAT
    return x - unit_last_place(x)


def _pad_up(x: float, zero_is_exact: bool) -> float:
    """Move an upper bound up by its own ULP."""
    if x == 0:
        return 0.0 if zero_is_exact else MIN_SUBNORMAL
    if x == -math.inf:
        return -MAX_FLOAT
    return x + unit_last_place(x)


def _widen(lower: float, upper: float, *, zero_is_exact: bool = True) -> Interval:
    """Create an interval from computed bounds, widened outward."""
    return Interval(_pad_down(lower, zero_is_exact), _pad_up(upper, zero_is_exact))


def _corner(value: float, zero_is_exact: bool) -> tuple[float, bool]:
    """Corner value of a product/quotient; 0 * inf counts as an exact 0."""
    if math.isnan(value):
        return 0.0, True
    return value, zero_is_exact


def _hull(corners: list[tuple[float, bool]]) -> Interval:
    """Widened hull of four corner values.

    A zero bound is exact only if every corner that evaluated to zero is a
    genuine zero (zero factor) rather than an underflow.
    """
    values = [value for value, _ in corners]
    zero_is_exact = all(exact for value, exact in corners if value == 0)
    return _widen(min(values), max(values), zero_is_exact=zero_is_exact)


__all__ = [
    "EMPTY",
    "ENTIRE",
    "ONE",
    "ZERO",
    "Interval",
    "format_interval",
    "intersection",
    "intervals_equal",
    "union",
]
