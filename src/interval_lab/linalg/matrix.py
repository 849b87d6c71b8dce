"""Dense matrices of intervals.

Cells are stored row-major as a list of row lists. Dimensions are fixed at
construction; single cells, rows and columns are mutable through explicit
accessors.

Every element-wise construction (copy, transpose, scaling, sums, negation,
products) goes through ``Matrix._set_elementwise``, which forks over rows via
``interval_lab.parallel.parallel_for``. Each output cell is computed
independently, so no locking is needed there. The Frobenius norm is the one
reduction: rows accumulate private partial sums that are merged into a shared
total under a lock. Because the merge order depends on scheduling, the
parallel result may differ from the sequential one in the last bits; both
contain the exact value.
"""

from __future__ import annotations

import threading
from collections.abc import Callable, Sequence
from typing import TYPE_CHECKING

import numpy as np

from interval_lab.arithmetic.elementary import sqrt
from interval_lab.arithmetic.interval import ZERO, Interval
from interval_lab.errors import DimensionMismatchError
from interval_lab.linalg.vector import Vector
from interval_lab.parallel import ParallelConfig, parallel_for

if TYPE_CHECKING:
    from numpy.typing import ArrayLike, NDArray


_MAX_SHOWN = 5
"""Rows/columns shown by ``str(matrix)``."""


class Matrix:
    """Dense rows x columns matrix with Interval cells.

    Example:
        >>> m = Matrix.from_values([[1, 2], [3, 4]], exact=True)
        >>> (m * Matrix.create_identity(2))[1, 0]
        Interval(lower=3.0, upper=3.0)
    """

    __slots__ = ("_elements", "_rows", "_cols")

    def __init__(self, rows: int, columns: int) -> None:
        """Create a zero-filled matrix."""
        if rows < 0 or columns < 0:
            msg = f"Matrix dimensions must be non-negative, got {rows}x{columns}"
            raise ValueError(msg)
        self._rows = rows
        self._cols = columns
        self._elements: list[list[Interval]] = [[ZERO] * columns for _ in range(rows)]

    # -------------------------------------------------------------------------
    # Construction
    # -------------------------------------------------------------------------

    @classmethod
    def from_intervals(cls, data: list[list[Interval]]) -> Matrix:
        """
        Wrap a list of rows (taken over, not copied).

        Raises:
            ValueError: If the rows have different lengths.
        """
        columns = len(data[0]) if data else 0
        for row in data:
            if len(row) != columns:
                msg = f"Ragged rows: expected {columns} columns, got {len(row)}"
                raise ValueError(msg)
        m = cls.__new__(cls)
        m._rows = len(data)
        m._cols = columns
        m._elements = data
        return m

    @classmethod
    def from_values(cls, data: ArrayLike, *, exact: bool = False) -> Matrix:
        """
        Create a matrix from a 2-D array of numbers.

        Args:
            data: 2-D array-like.
            exact: Build exact points instead of measured (ULP-padded) values.
        """
        values = np.asarray(data, dtype=np.float64)
        if values.ndim != 2:
            msg = f"Expected a 2-D array, got shape {values.shape}"
            raise ValueError(msg)
        return cls.from_intervals(
            [[Interval.from_value(x, exact=exact) for x in row] for row in values.tolist()]
        )

    @classmethod
    def from_array(cls, values: Sequence[Interval], *, column: bool = True) -> Matrix:
        """Column (n x 1) or row (1 x n) matrix from intervals."""
        if column:
            return cls.from_intervals([[x] for x in values])
        return cls.from_intervals([list(values)])

    @classmethod
    def from_vector(cls, v: Vector, *, column: bool = True) -> Matrix:
        """Column (n x 1) or row (1 x n) matrix from a vector."""
        m = cls(v.size, 1) if column else cls(1, v.size)
        if column:
            m.set_column(0, v.elements)
        else:
            m.set_row(0, v.elements)
        return m

    @classmethod
    def create_diagonal(cls, n: int, d: Interval) -> Matrix:
        """n x n matrix with d on the diagonal and exact zeros elsewhere."""
        m = cls(n, n)
        for i in range(n):
            m._elements[i][i] = d
        return m

    @classmethod
    def create_identity(cls, n: int, *, exact: bool = True) -> Matrix:
        """n x n identity matrix."""
        return cls.create_diagonal(n, Interval.from_value(1.0, exact=exact))

    # -------------------------------------------------------------------------
    # Member access
    # -------------------------------------------------------------------------

    @property
    def row_count(self) -> int:
        """Number of rows."""
        return self._rows

    @property
    def column_count(self) -> int:
        """Number of columns."""
        return self._cols

    @property
    def shape(self) -> tuple[int, int]:
        return self._rows, self._cols

    @property
    def elements(self) -> list[list[Interval]]:
        """The underlying rows (no copy)."""
        return self._elements

    def __getitem__(self, index: tuple[int, int]) -> Interval:
        row, column = index
        return self._elements[row][column]

    def __setitem__(self, index: tuple[int, int], value: Interval) -> None:
        row, column = index
        self._elements[row][column] = value

    def fill_row(self, row: int, out: list[Interval]) -> None:
        """Copy a row into ``out``."""
        out[: self._cols] = self._elements[row]

    def fill_column(self, column: int, out: list[Interval]) -> None:
        """Copy a column into ``out``."""
        for i in range(self._rows):
            out[i] = self._elements[i][column]

    def get_row(self, row: int) -> Vector:
        """Row as a new vector."""
        out = [ZERO] * self._cols
        self.fill_row(row, out)
        return Vector(out)

    def get_column(self, column: int) -> Vector:
        """Column as a new vector."""
        out = [ZERO] * self._rows
        self.fill_column(column, out)
        return Vector(out)

    def set_row(self, row: int, values: Sequence[Interval]) -> None:
        """Overwrite a row with the first ``column_count`` values."""
        target = self._elements[row]
        for j in range(self._cols):
            target[j] = values[j]

    def set_column(self, column: int, values: Sequence[Interval]) -> None:
        """Overwrite a column with the first ``row_count`` values."""
        for i in range(self._rows):
            self._elements[i][column] = values[i]

    def swap_rows(self, row1: int, row2: int) -> None:
        """Exchange two rows in place."""
        rows = self._elements
        rows[row1], rows[row2] = rows[row2], rows[row1]

    def swap_columns(self, col1: int, col2: int) -> None:
        """Exchange two columns in place."""
        for row in self._elements:
            row[col1], row[col2] = row[col2], row[col1]

    # -------------------------------------------------------------------------
    # Element-wise construction
    # -------------------------------------------------------------------------

    def _set_elementwise(
        self,
        op: Callable[[int, int], Interval],
        complexity: int,
        config: ParallelConfig | None,
    ) -> None:
        """Set every cell to op(row, column), forking over rows."""
        columns = self._cols
        rows = self._elements

        def body(i: int) -> None:
            target = rows[i]
            for j in range(columns):
                target[j] = op(i, j)

        parallel_for(0, self._rows, body, complexity, config=config)

    def copy(self, *, config: ParallelConfig | None = None) -> Matrix:
        """Cell-by-cell copy."""
        src = self._elements
        m = Matrix(self._rows, self._cols)
        m._set_elementwise(lambda i, j: src[i][j], self._rows * self._cols, config)
        return m

    def transpose(self, *, config: ParallelConfig | None = None) -> Matrix:
        """Transposed matrix."""
        src = self._elements
        m = Matrix(self._cols, self._rows)
        m._set_elementwise(lambda i, j: src[j][i], self._rows * self._cols, config)
        return m

    # -------------------------------------------------------------------------
    # Operations
    # -------------------------------------------------------------------------

    def scale(self, scalar: Interval, *, config: ParallelConfig | None = None) -> Matrix:
        """Multiply every cell by a scalar interval."""
        src = self._elements
        m = Matrix(self._rows, self._cols)
        m._set_elementwise(lambda i, j: scalar * src[i][j], self._rows * self._cols, config)
        return m

    def add(self, other: Matrix, *, config: ParallelConfig | None = None) -> Matrix:
        """Cell-wise sum."""
        self._check_same_shape(other, "add")
        a, b = self._elements, other._elements
        m = Matrix(self._rows, self._cols)
        m._set_elementwise(lambda i, j: a[i][j] + b[i][j], self._rows * self._cols, config)
        return m

    def subtract(self, other: Matrix, *, config: ParallelConfig | None = None) -> Matrix:
        """Cell-wise difference."""
        self._check_same_shape(other, "subtract")
        a, b = self._elements, other._elements
        m = Matrix(self._rows, self._cols)
        m._set_elementwise(lambda i, j: a[i][j] - b[i][j], self._rows * self._cols, config)
        return m

    def negate(self, *, config: ParallelConfig | None = None) -> Matrix:
        """Cell-wise negation."""
        src = self._elements
        m = Matrix(self._rows, self._cols)
        m._set_elementwise(lambda i, j: -src[i][j], self._rows * self._cols, config)
        return m

    def multiply(
        self,
        other: Matrix | Vector | Sequence[Interval],
        *,
        config: ParallelConfig | None = None,
    ) -> Matrix | Vector | list[Interval]:
        """
        Matrix product with a matrix, a vector or a list of intervals.

        Returns a matrix, a vector or a list respectively.

        Raises:
            DimensionMismatchError: If the inner dimensions differ.
        """
        if isinstance(other, Matrix):
            return self.matmul(other, config=config)
        if isinstance(other, Vector):
            return Vector(self.multiply_array(other.elements, config=config))
        return self.multiply_array(other, config=config)

    def matmul(self, other: Matrix, *, config: ParallelConfig | None = None) -> Matrix:
        """Matrix-matrix product, O(rows * columns * inner)."""
        inner = self._cols
        if inner != other._rows:
            raise DimensionMismatchError("Matrix multiply", self.shape, other.shape)
        a, b = self._elements, other._elements
        m = Matrix(self._rows, other._cols)
        if inner == 0:
            return m

        def cell(i: int, j: int) -> Interval:
            row = a[i]
            total = row[0] * b[0][j]
            for k in range(1, inner):
                total = total + row[k] * b[k][j]
            return total

        m._set_elementwise(cell, self._rows * other._cols * inner, config)
        return m

    def multiply_array(
        self,
        values: Sequence[Interval],
        *,
        config: ParallelConfig | None = None,
    ) -> list[Interval]:
        """Matrix times column vector given as a sequence of intervals."""
        if len(values) != self._cols:
            raise DimensionMismatchError("Matrix-vector multiply", self.shape, (len(values),))
        rows = self._elements
        result: list[Interval] = [ZERO] * self._rows

        def body(i: int) -> None:
            total = ZERO
            for x, y in zip(rows[i], values):
                total = total + x * y
            result[i] = total

        parallel_for(0, self._rows, body, self._rows * self._cols, config=config)
        return result

    def frobenius_norm2(self, *, config: ParallelConfig | None = None) -> Interval:
        """Squared Frobenius norm, the sum of all squared cells."""
        rows = self._elements
        lock = threading.Lock()
        total = ZERO

        def body(i: int) -> None:
            nonlocal total
            partial = ZERO
            for x in rows[i]:
                partial = partial + x * x
            with lock:
                total = total + partial

        parallel_for(0, self._rows, body, self._rows * self._cols, config=config)
        return total

    def frobenius_norm(self, *, config: ParallelConfig | None = None) -> Interval:
        """Frobenius norm."""
        return sqrt(self.frobenius_norm2(config=config))

    def midpoints(self) -> NDArray[np.float64]:
        """Midpoints of all cells as a rows x columns array."""
        return self._to_array(lambda x: x.midpoint)

    def lower_bounds(self) -> NDArray[np.float64]:
        """Lower bounds of all cells."""
        return self._to_array(lambda x: x.lower)

    def upper_bounds(self) -> NDArray[np.float64]:
        """Upper bounds of all cells."""
        return self._to_array(lambda x: x.upper)

    def _to_array(self, field: Callable[[Interval], float]) -> NDArray[np.float64]:
        out = np.empty((self._rows, self._cols), dtype=np.float64)
        for i, row in enumerate(self._elements):
            out[i, :] = [field(x) for x in row]
        return out

    def _check_same_shape(self, other: Matrix, operation: str) -> None:
        if self.shape != other.shape:
            raise DimensionMismatchError(f"Matrix {operation}", self.shape, other.shape)

    # -------------------------------------------------------------------------
    # Operators
    # -------------------------------------------------------------------------

    def __add__(self, other: object) -> Matrix:
        if not isinstance(other, Matrix):
            return NotImplemented
        return self.add(other)

    def __sub__(self, other: object) -> Matrix:
        if not isinstance(other, Matrix):
            return NotImplemented
        return self.subtract(other)

    def __neg__(self) -> Matrix:
        return self.negate()

    def __mul__(self, other: object) -> Matrix | Vector | list[Interval]:
        if isinstance(other, Matrix | Vector | list | tuple):
            return self.multiply(other)
        return NotImplemented

    def __rmul__(self, other: object) -> Matrix:
        if not isinstance(other, Interval):
            return NotImplemented
        return self.scale(other)

    def __str__(self) -> str:
        shown_rows = min(self._rows, _MAX_SHOWN)
        shown_cols = min(self._cols, _MAX_SHOWN)
        lines = []
        for i in range(shown_rows):
            edge = i == 0 or i == shown_rows - 1
            cells = ", ".join(str(x) for x in self._elements[i][:shown_cols])
            if shown_cols < self._cols:
                cells += ",..."
            lines.append(f"({cells})" if edge else f"|{cells}|")
        if shown_rows < self._rows:
            lines.append("   ......")
        return "\n".join(lines)

    def __repr__(self) -> str:
        return f"Matrix(rows={self._rows}, columns={self._cols})"


__all__ = [
    "Matrix",
]
