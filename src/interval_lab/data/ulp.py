"""Unit in the last place (ULP) of binary64 values.

The ULP is computed from the IEEE-754 bit pattern alone, no "next
representable value" primitive is involved. The value is viewed as four
16-bit words; the result is assembled word by word, either as a power of two
with exponent ``e - 52`` or, close to the subnormal range, by placing a single
mantissa bit.

References:
- Abrams, S. et al.: "Efficient and Reliable Methods for Rounded Interval
  Arithmetic", Computer-Aided Design 30 (1998)
"""

from __future__ import annotations

from typing import TYPE_CHECKING

import numpy as np

from interval_lab.data.float_layout import FLOAT64, Float64Layout

if TYPE_CHECKING:
    from numpy.typing import NDArray


def ulp_words(
    words: NDArray[np.uint16],
    layout: Float64Layout = FLOAT64,
) -> NDArray[np.uint16]:
    """Compute the ULP bit pattern from the 16-bit words of a nonzero value.

    Args:
        words: The value as ``layout.words`` 16-bit words, in the memory order
            described by ``layout.msw_index``.
        layout: Word layout (defaults to the running platform).

    Returns:
        The ULP as 16-bit words in the same memory order.
    """
    msw = int(words[layout.msw_index]) & layout.exponent_mask
    result = np.zeros(layout.words, dtype=np.uint16)

    if msw > layout.mantissa_span:
        # exponent e - 52, mantissa zero
        result[layout.msw_index] = msw - layout.mantissa_span
        return result

    # Subnormal result: set mantissa bit (biased exponent - 1).
    # A subnormal input has biased exponent 0 and maps to bit 0.
    bit_index = max((msw >> layout.exponent_shift) - 1, 0)
    word, bit = divmod(bit_index, layout.word_bits)
    if layout.msw_index == 0:
        word = layout.words - 1 - word
    result[word] = 1 << bit
    return result


def unit_last_place(x: float) -> float:
    """
    Return the unit in the last place of a double.

    Args:
        x: The value.

    Returns:
        Positive magnitude of the last mantissa bit of ``x``; ``0.0`` for zero.

    Example:
        >>> unit_last_place(1.0) == 2.0**-52
        True
        >>> unit_last_place(0.0)
        0.0
    """
    if x == 0:
        return 0.0
    words = np.array([x], dtype=np.float64).view(np.uint16)
    return float(ulp_words(words).view(np.float64)[0])


__all__ = [
    "ulp_words",
    "unit_last_place",
]
