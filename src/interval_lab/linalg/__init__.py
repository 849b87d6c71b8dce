"""Interval linear algebra module.

This module contains:
- Vector: interval vectors with dot product and Euclidean norm
- Matrix: dense interval matrices with products, transpose and Frobenius norm
"""

from interval_lab.linalg.matrix import Matrix
from interval_lab.linalg.vector import Vector, vector_from_intervals

__all__ = [
    "Matrix",
    "Vector",
    "vector_from_intervals",
]
