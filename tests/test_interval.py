"""Tests for the Interval value type."""

import math

import pytest

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
from interval_lab.data.float_layout import MAX_FLOAT, MIN_SUBNORMAL
from interval_lab.errors import IntervalLabError, InvalidBoundsError


class TestConstruction:
    """Tests for Interval constructors."""

    def test_bounds(self) -> None:
        """Two-bound constructor stores both bounds."""
        x = Interval(1, 2)
        assert x.lower == 1.0
        assert x.upper == 2.0

    def test_bounds_converted_to_float(self) -> None:
        """Integer bounds become floats."""
        x = Interval(1, 2)
        assert isinstance(x.lower, float)
        assert isinstance(x.upper, float)

    def test_reversed_bounds_raise(self) -> None:
        """Lower bound greater than upper bound is rejected."""
        with pytest.raises(InvalidBoundsError, match="greater than upper"):
            Interval(2, 1)

    def test_invalid_bounds_error_hierarchy(self) -> None:
        """InvalidBoundsError is both a library error and a ValueError."""
        with pytest.raises(ValueError):
            Interval(2, 1)
        with pytest.raises(IntervalLabError):
            Interval(2, 1)

    def test_exact(self) -> None:
        """Exact construction gives a point."""
        x = Interval.exact(0.1)
        assert x.lower == x.upper == 0.1
        assert x.is_point

    def test_measured(self) -> None:
        """Measured construction pads by one ULP on each side."""
        x = Interval.measured(1.0)
        assert x.lower == 1.0 - 2.0**-52
        assert x.upper == 1.0 + 2.0**-52
        assert not x.is_point
        assert x.contains(1.0)

    def test_measured_zero_is_point(self) -> None:
        """Zero has no rounding slack."""
        assert Interval.measured(0.0).is_point

    @pytest.mark.parametrize("exact", [True, False])
    def test_from_value(self, exact: bool) -> None:
        """from_value dispatches on the exact flag."""
        expected = Interval.exact(3.5) if exact else Interval.measured(3.5)
        assert Interval.from_value(3.5, exact=exact) == expected

    def test_immutable(self) -> None:
        """Intervals should be immutable."""
        x = Interval(1, 2)
        with pytest.raises(AttributeError):
            x.lower = 0.0  # type: ignore[misc]

    def test_slots(self) -> None:
        """Intervals should use slots (no __dict__)."""
        assert not hasattr(Interval(1, 2), "__dict__")


class TestProperties:
    """Tests for derived properties."""

    def test_midpoint_and_width(self) -> None:
        """Midpoint and width of [1, 3]."""
        x = Interval(1, 3)
        assert x.midpoint == 2.0
        assert x.width == 2.0

    @pytest.mark.parametrize(
        "x",
        [Interval.exact(MAX_FLOAT), Interval(1e308, 1.5e308), Interval(-MAX_FLOAT, -1e308)],
    )
    def test_midpoint_of_large_bounds(self, x: Interval) -> None:
        """The midpoint stays finite and inside when lower + upper overflows."""
        assert math.isfinite(x.midpoint)
        assert x.contains(x.midpoint)

    def test_midpoint_of_max_float_point(self) -> None:
        """The midpoint of [MAX_FLOAT, MAX_FLOAT] is MAX_FLOAT."""
        assert Interval.exact(MAX_FLOAT).midpoint == MAX_FLOAT

    def test_empty(self) -> None:
        """EMPTY is empty and not a point."""
        assert EMPTY.is_empty
        assert not EMPTY.is_point

    def test_half_nan_is_empty(self) -> None:
        """A single NaN bound makes the interval empty."""
        assert Interval(math.nan, 1.0).is_empty

    def test_incidental_point(self) -> None:
        """Equal computed bounds make a point, without an exact flag."""
        assert Interval(2, 2).is_point

    def test_contains_zero(self) -> None:
        """Zero containment, including at the bounds."""
        assert Interval(-1, 1).contains_zero
        assert Interval(0, 1).contains_zero
        assert not Interval(0.5, 1).contains_zero

    def test_constants(self) -> None:
        """Module constants."""
        assert ZERO.is_point and ZERO.lower == 0.0
        assert ONE.is_point and ONE.lower == 1.0
        assert ENTIRE.lower == -math.inf and ENTIRE.upper == math.inf


class TestSetOperations:
    """Tests for containment, intersection and union."""

    def test_contains_number(self) -> None:
        """Numbers inside and at the bounds are contained."""
        x = Interval(1, 2)
        assert x.contains(1.0)
        assert x.contains(1.5)
        assert x.contains(2.0)
        assert not x.contains(2.5)

    def test_contains_interval(self) -> None:
        """Interval containment requires both bounds inside."""
        x = Interval(0, 10)
        assert x.contains(Interval(1, 2))
        assert not x.contains(Interval(5, 11))
        assert not x.contains(EMPTY)

    def test_empty_contains_nothing(self) -> None:
        """The empty interval contains no number."""
        assert not EMPTY.contains(0.0)

    def test_intersects(self) -> None:
        """Touching and overlapping intervals intersect, disjoint ones do not."""
        assert Interval(1, 2).intersects(Interval(2, 3))
        assert Interval(1, 3).intersects(Interval(2, 5))
        assert not Interval(1, 2).intersects(Interval(3, 4))
        assert not EMPTY.intersects(Interval(1, 2))

    def test_intersection(self) -> None:
        """Overlap of [1, 3] and [2, 5] is [2, 3]."""
        assert intersection(Interval(1, 3), Interval(2, 5)) == Interval(2, 3)

    def test_intersection_with_itself(self) -> None:
        """A ∩ A = A."""
        a = Interval(-1.5, 7.25)
        assert a.intersection(a) == a

    def test_intersection_disjoint_is_empty(self) -> None:
        """Disjoint intervals have an empty intersection."""
        assert intersection(Interval(1, 2), Interval(3, 4)) == EMPTY

    def test_intersection_with_empty(self) -> None:
        """Intersection with EMPTY is EMPTY."""
        assert Interval(1, 2).intersection(EMPTY).is_empty

    def test_union(self) -> None:
        """Union is the convex hull."""
        assert union(Interval(1, 2), Interval(4, 5)) == Interval(1, 5)

    def test_union_with_empty(self) -> None:
        """Union with EMPTY returns the other operand."""
        x = Interval(1, 2)
        assert union(EMPTY, x) == x
        assert union(x, EMPTY) == x


class TestEquality:
    """Tests for equality and hashing."""

    def test_empty_equals_empty(self) -> None:
        """All empty intervals compare equal."""
        assert EMPTY == Interval(math.nan, math.nan)
        assert intervals_equal(EMPTY, Interval(math.nan, 0.0))

    def test_empty_not_equal_to_zero(self) -> None:
        """EMPTY differs from every non-empty interval."""
        assert EMPTY != ZERO

    def test_hash_consistent(self) -> None:
        """Equal intervals hash equally."""
        assert len({EMPTY, Interval(math.nan, math.nan), Interval(1, 2), Interval(1, 2)}) == 2

    def test_not_equal_to_float(self) -> None:
        """Intervals never equal plain numbers."""
        assert Interval.exact(1.0) != 1.0


class TestAddSubtract:
    """Tests for outward-rounded addition and subtraction."""

    def test_exact_points(self) -> None:
        """Point + point is an exact point."""
        result = Interval.exact(5) + Interval.exact(3)
        assert result == Interval.exact(8)
        assert result.width == 0.0
        assert result.is_point

    def test_exact_difference(self) -> None:
        """Point - point is an exact point."""
        assert Interval.exact(5) - Interval.exact(3) == Interval.exact(2)

    def test_general_sum_widened(self) -> None:
        """Bounds of a general sum move outward by their own ULP."""
        result = Interval(1, 2) + Interval(3, 4)
        assert result.lower == 4.0 - 2.0**-50
        assert result.upper == 6.0 + 2.0**-50

    def test_general_difference(self) -> None:
        """[1, 2] - [3, 4] uses crossed bounds."""
        result = Interval(1, 2) - Interval(3, 4)
        assert result.lower == -3.0 - 2.0**-51
        assert result.upper == -1.0 + 2.0**-52

    def test_zero_sum_stays_exact(self) -> None:
        """A bound that sums to zero is not widened."""
        result = Interval(-1, 1) + Interval(1, 2)
        assert result.lower == 0.0

    def test_overflow(self) -> None:
        """An overflowed lower bound is pulled back to the largest double."""
        big = Interval(1e308, 1.5e308)
        result = big + big
        assert result.lower == MAX_FLOAT
        assert result.upper == math.inf

    def test_point_overflow_not_a_point(self) -> None:
        """Point sums that overflow fall back to widened bounds."""
        result = Interval.exact(1e308) + Interval.exact(1e308)
        assert not result.is_point
        assert result.upper == math.inf

    def test_empty_operand(self) -> None:
        """Sums with EMPTY are EMPTY."""
        assert (EMPTY + Interval(1, 2)).is_empty
        assert (Interval(1, 2) - EMPTY).is_empty

    def test_named_methods(self) -> None:
        """Named methods match the operators."""
        a, b = Interval(1, 2), Interval(3, 4)
        assert a.add(b) == a + b
        assert a.subtract(b) == a - b

    def test_no_implicit_scalar_coercion(self) -> None:
        """Scalars must be wrapped explicitly."""
        with pytest.raises(TypeError):
            Interval(1, 2) + 1.0  # type: ignore[operator]
        with pytest.raises(TypeError):
            2.0 * Interval(1, 2)  # type: ignore[operator]


class TestNegate:
    """Tests for unary minus."""

    def test_negate(self) -> None:
        """-[1, 2] = [-2, -1], exact."""
        assert -Interval(1, 2) == Interval(-2, -1)
        assert Interval(1, 2).negate() == Interval(-2, -1)

    def test_negate_empty(self) -> None:
        """-EMPTY is EMPTY."""
        assert (-EMPTY).is_empty


class TestMultiply:
    """Tests for outward-rounded multiplication."""

    def test_exact_points(self) -> None:
        """Point * point is an exact point."""
        assert Interval.exact(5) * Interval.exact(3) == Interval.exact(15)

    def test_sign_mixed(self) -> None:
        """[-1, 2] * [3, 4] takes min/max over the four corners."""
        result = Interval(-1, 2) * Interval(3, 4)
        assert result.lower == -4.0 - 2.0**-50
        assert result.upper == 8.0 + 2.0**-49

    def test_zero_factor_exact(self) -> None:
        """A zero bound from a zero factor stays exactly zero."""
        result = Interval(0, 1) * Interval(2, 3)
        assert result.lower == 0.0
        assert result.upper == 3.0 + 2.0**-51

    def test_underflow_widened(self) -> None:
        """Products that underflow to zero still bound the tiny true value."""
        tiny = Interval(1e-200, 2e-200)
        result = tiny * tiny
        assert result.lower <= 0.0
        assert result.upper >= MIN_SUBNORMAL

    def test_point_underflow_not_a_point(self) -> None:
        """Point products that underflow fall back to widened bounds."""
        result = Interval.exact(1e-200) * Interval.exact(1e-200)
        assert not result.is_point
        assert result.upper > 0.0

    def test_zero_times_entire(self) -> None:
        """0 * [-inf, inf] is 0."""
        assert ZERO * ENTIRE == ZERO

    def test_empty_operand(self) -> None:
        """Products with EMPTY are EMPTY."""
        assert (Interval(1, 2) * EMPTY).is_empty


class TestDivide:
    """Tests for outward-rounded division."""

    def test_exact_points(self) -> None:
        """Point / point is an exact point."""
        assert Interval.exact(6) / Interval.exact(3) == Interval.exact(2)

    def test_zero_over_zero_is_empty(self) -> None:
        """[-1, 1] / [-1, 1] has no certain result."""
        assert Interval(-1, 1) / Interval(-1, 1) == EMPTY

    def test_zero_divisor_is_entire(self) -> None:
        """[2, 3] / [-1, 1] is unbounded."""
        result = Interval(2, 3) / Interval(-1, 1)
        assert result == ENTIRE
        assert result.lower == -math.inf
        assert result.upper == math.inf

    def test_divisor_touching_zero(self) -> None:
        """A divisor with a zero bound counts as containing zero."""
        assert Interval(1, 2) / Interval(0, 1) == ENTIRE

    def test_general_quotient(self) -> None:
        """[1, 2] / [4, 8] contains [1/8, 1/2]."""
        result = Interval(1, 2) / Interval(4, 8)
        assert result.lower < 0.125
        assert result.upper > 0.5
        assert result.contains(Interval(0.125, 0.5))

    def test_zero_dividend_bound_exact(self) -> None:
        """A zero dividend bound gives an exact zero bound."""
        result = Interval(0, 1) / Interval(2, 4)
        assert result.lower == 0.0

    def test_empty_operand(self) -> None:
        """Division with EMPTY is EMPTY."""
        assert (EMPTY / Interval(1, 2)).is_empty
        assert (Interval(1, 2) / EMPTY).is_empty


class TestFormatting:
    """Tests for the textual rendering."""

    def test_empty(self) -> None:
        """EMPTY renders as []."""
        assert str(EMPTY) == "[]"

    def test_point(self) -> None:
        """A point renders as a single number."""
        assert str(Interval.exact(5)) == "5.0"

    def test_large_point(self) -> None:
        """A finite point near the overflow threshold renders finite."""
        assert str(Interval.exact(MAX_FLOAT)) == repr(MAX_FLOAT)

    def test_measured_renders_as_number(self) -> None:
        """Width within an order of magnitude of the ULP renders as a number."""
        assert format_interval(Interval.measured(2.5)) == "2.5"

    def test_wide_interval_bracketed(self) -> None:
        """Wide intervals render as [lower; upper]."""
        assert str(Interval(1, 2)) == "[1.0; 2.0]"

    def test_entire(self) -> None:
        """ENTIRE renders with infinite bounds."""
        assert str(ENTIRE) == "[-inf; inf]"
