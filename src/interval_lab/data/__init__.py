"""Data module for the binary64 layout and the ULP unit."""

from interval_lab.data.float_layout import (
    FLOAT64,
    MACHINE_EPSILON,
    MAX_FLOAT,
    MIN_SUBNORMAL,
    Float64Layout,
    is_finite,
    most_significant_word_index,
)
from interval_lab.data.ulp import ulp_words, unit_last_place

__all__ = [
    "FLOAT64",
    "MACHINE_EPSILON",
    "MAX_FLOAT",
    "MIN_SUBNORMAL",
    "Float64Layout",
    "is_finite",
    "most_significant_word_index",
    "ulp_words",
    "unit_last_place",
]
