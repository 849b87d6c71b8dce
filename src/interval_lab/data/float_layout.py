"""
IEEE-754 binary64 Layout - Single Source of Truth

This module describes the bit layout of a 64-bit double as seen through four
16-bit words, the view used by the ULP unit to read and build exponents
without arithmetic.

Word numbering follows memory order: on a little-endian platform the
sign/exponent word is the last of the four, on a big-endian platform the
first.

References:
    - IEEE 754-2019 Standard for Floating-Point Arithmetic
    - Abrams, S. et al.: "Efficient and Reliable Methods for Rounded
      Interval Arithmetic" (1998)
"""

import sys
from dataclasses import dataclass

import numpy as np


@dataclass(frozen=True, slots=True)
class Float64Layout:
    """Bit layout of an IEEE-754 double as four 16-bit words."""

    bits: int
    mantissa_bits: int
    exponent_bits: int
    exponent_bias: int
    word_bits: int
    exponent_mask: int  # exponent field within the most-significant word
    exponent_shift: int  # position of the exponent field within that word
    msw_index: int  # memory index of the most-significant word

    @property
    def words(self) -> int:
        """Number of 16-bit words in one value."""
        return self.bits // self.word_bits

    @property
    def mantissa_span(self) -> int:
        """Biased-exponent offset of one ULP, pre-shifted into the MSW.

        0x0340 is 52 shifted left by the exponent position (4 bits).
        """
        return self.mantissa_bits << self.exponent_shift


def most_significant_word_index(byteorder: str = sys.byteorder) -> int:
    """
    Return the memory index of the 16-bit word holding sign and exponent.

    Args:
        byteorder: 'little' or 'big' (defaults to the running platform)

    Returns:
        3 on little-endian platforms, 0 on big-endian platforms

    Raises:
        ValueError: If byteorder is unknown
    """
    if byteorder == "little":
        return 3
    if byteorder == "big":
        return 0
    raise ValueError(f"Unknown byte order: '{byteorder}'. Valid: ['little', 'big']")


# =============================================================================
# BINARY64 CONSTANTS
# =============================================================================

FLOAT64 = Float64Layout(
    bits=64,
    mantissa_bits=52,
    exponent_bits=11,
    exponent_bias=1023,
    word_bits=16,
    exponent_mask=0x7FF0,
    exponent_shift=4,
    msw_index=most_significant_word_index(),
)

MIN_SUBNORMAL: float = float(np.finfo(np.float64).smallest_subnormal)
"""Smallest positive subnormal double, 2^-1074."""

MAX_FLOAT: float = float(np.finfo(np.float64).max)
"""Largest finite double."""

MACHINE_EPSILON: float = float(np.finfo(np.float64).eps)
"""Machine epsilon, 2^-52 (the ULP of 1.0)."""


def is_finite(x: float) -> bool:
    """Return True if x is neither NaN nor infinite."""
    return bool(np.isfinite(x))


__all__ = [
    "FLOAT64",
    "MACHINE_EPSILON",
    "MAX_FLOAT",
    "MIN_SUBNORMAL",
    "Float64Layout",
    "is_finite",
    "most_significant_word_index",
]
