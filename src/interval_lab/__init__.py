"""Interval Lab: Validated numerics with outward-rounded interval arithmetic."""

import logging

__version__ = "0.1.0"

from interval_lab.arithmetic import (
    EMPTY,
    ENTIRE,
    ONE,
    ZERO,
    Interval,
    exp,
    format_interval,
    interval_abs,
    intersection,
    sqrt,
    union,
)
from interval_lab.data import unit_last_place
from interval_lab.errors import (
    DimensionMismatchError,
    IntervalLabError,
    InvalidBoundsError,
    ParallelExecutionError,
)
from interval_lab.linalg import Matrix, Vector
from interval_lab.parallel import (
    ParallelConfig,
    configure_parallel,
    get_parallel_config,
    use_parallel_config,
)

logging.getLogger(__name__).addHandler(logging.NullHandler())

__all__ = [
    "__version__",
    "EMPTY",
    "ENTIRE",
    "ONE",
    "ZERO",
    "DimensionMismatchError",
    "Interval",
    "IntervalLabError",
    "InvalidBoundsError",
    "Matrix",
    "ParallelConfig",
    "ParallelExecutionError",
    "Vector",
    "configure_parallel",
    "exp",
    "format_interval",
    "get_parallel_config",
    "interval_abs",
    "intersection",
    "sqrt",
    "union",
    "unit_last_place",
    "use_parallel_config",
]
