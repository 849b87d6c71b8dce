"""Elementary functions over intervals.

All functions are monotone extensions built from the interval core: the
bounds are the function values at the endpoints, widened outward by one ULP
unless the input is a point.
"""

from __future__ import annotations

import math

from interval_lab.arithmetic.interval import EMPTY, Interval, _widen


def sqrt(x: Interval) -> Interval:
    """
    Square root of an interval.

    Args:
        x: The interval.

    Returns:
        The square root; EMPTY if x is empty or its lower bound is negative.
    """
    if x.is_empty or x.lower < 0:
        return EMPTY
    lower = math.sqrt(x.lower)
    if x.is_point:
        return Interval.exact(lower)
    return _widen(lower, math.sqrt(x.upper))


def exp(x: Interval) -> Interval:
    """
    Exponential e**x of an interval.

    Args:
        x: The exponent.

    Returns:
        The exponential; EMPTY if x is empty.
    """
    if x.is_empty:
        return EMPTY
    lower = _exp(x.lower)
    if x.is_point and 0 < lower < math.inf:
        return Interval.exact(lower)
    # exp underflows to zero but is never zero
    result = _widen(lower, _exp(x.upper), zero_is_exact=False)
    if result.lower < 0:
        return Interval(0.0, result.upper)
    return result


def interval_abs(x: Interval) -> Interval:
    """
    Absolute value of an interval.

    No rounding is involved: the bounds are magnitudes of the input bounds.
    """
    if x.is_empty:
        return EMPTY
    if x.is_point:
        return Interval.exact(abs(x.lower))
    lower = abs(x.lower)
    upper = abs(x.upper)
    if x.lower < 0 < x.upper:
        return Interval(0.0, max(lower, upper))
    return Interval(min(lower, upper), max(lower, upper))


def square(x: Interval) -> Interval:
    """Square x * x (as used by vector and matrix norms)."""
    return x * x


def _exp(value: float) -> float:
    try:
        return math.exp(value)
    except OverflowError:
        return math.inf


__all__ = [
    "exp",
    "interval_abs",
    "sqrt",
    "square",
]
