"""Interval arithmetic module.

This module contains:
- The Interval value type with outward-rounded arithmetic
- Exact set operations (containment, intersection, union)
- Elementary functions (sqrt, exp, abs)
"""

from interval_lab.arithmetic.elementary import exp, interval_abs, sqrt, square
from interval_lab.arithmetic.interval import (
    EMPTY,
    ENTIRE,
    ONE,
    ZERO,
    Interval,
    format_interval,
    intersection,
    intervals_equal,
    union,
)

__all__ = [
    # Interval core
    "EMPTY",
    "ENTIRE",
    "ONE",
    "ZERO",
    "Interval",
    "format_interval",
    "intersection",
    "intervals_equal",
    "union",
    # Elementary functions
    "exp",
    "interval_abs",
    "sqrt",
    "square",
]
