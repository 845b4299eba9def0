"""
Dense matrices over strided buffers.

A Matrix owns its MatrixBuffer exclusively, unless it was built around an
externally supplied buffer with from_buffer() (ownership transfers to the
matrix). Elements are addressed with 1-based (row, col).

Sharing contract:
    row_vector() and column_vector() return live views. Writing through a
    view writes the matrix, and writes to the matrix show through every
    view. Views keep the addressing that was current when they were taken:
    after transpose() a view obtained earlier still addresses the same
    stored elements, which now form a column (or row) of the transposed
    matrix. copy() shares nothing with the original.

Mutation:
    transpose, transform, populate, add, subtract, multiply_constant, the
    elementary row operations and the elimination methods all work in place
    and return None. multiply, invert, copy, transposed and the operators
    (+, -, *, @) return new matrices.

Structural predicates compare exactly by default; pass ``tol`` to accept
entries within an absolute tolerance of the expected value.
"""

import math
import warnings
from typing import TYPE_CHECKING, Any, Callable, Sequence

import numpy as np
from numpy.typing import ArrayLike, NDArray

from pylinearalgebra.core.compute.tolerances import (
    ToleranceTier,
    CPU_FP64,
    ILL_CONDITIONED_RATIO,
    SINGULARITY_THRESHOLD,
)
from pylinearalgebra.core.exceptions import (
    DimensionError,
    SingularMatrixError,
    ValidationError,
)
from pylinearalgebra.core.shape import Position, Size
from pylinearalgebra.core.validation import (
    check_2d,
    check_array,
    check_dimension,
    check_index,
    check_same_dimension,
    check_same_size,
    check_square,
)
from pylinearalgebra.linalg import positions
from pylinearalgebra.linalg.formatting import NumberFormatter
from pylinearalgebra.linalg.vector import Vector
from pylinearalgebra.storage.buffer import Layout, MatrixBuffer

if TYPE_CHECKING:
    from pylinearalgebra.decomposition.solution import LUDecompositionResult


class Matrix:
    """
    Two-dimensional numeric container.

    Construct through the factories (identity, zero, of, from_array, ...)
    rather than the constructor, which wraps an existing buffer as-is.
    """

    __slots__ = ('_buffer',)

    def __init__(self, buffer: MatrixBuffer):
        if buffer is None:
            raise ValidationError("buffer: can't be None")
        self._buffer = buffer

    # === Factories ===

    @classmethod
    def identity(cls, n: int, layout: Layout = Layout.ROW_MAJOR) -> 'Matrix':
        """n x n identity matrix."""
        matrix = cls.zero(n, n, layout=layout)
        idx = np.arange(n)
        matrix._array()[idx, idx] = 1.0
        return matrix

    @classmethod
    def zero(cls, rows: int, cols: int, layout: Layout = Layout.ROW_MAJOR) -> 'Matrix':
        check_dimension(rows, 'rows')
        check_dimension(cols, 'cols')
        return cls(MatrixBuffer.allocate(rows, cols, layout))

    @classmethod
    def constant(
        cls,
        rows: int,
        cols: int,
        value: float,
        layout: Layout = Layout.ROW_MAJOR,
    ) -> 'Matrix':
        matrix = cls.zero(rows, cols, layout=layout)
        matrix._array()[:, :] = value
        return matrix

    @classmethod
    def random(
        cls,
        rows: int,
        cols: int,
        min_value: float,
        max_value: float,
        rng: np.random.Generator | None = None,
    ) -> 'Matrix':
        """
        Matrix with elements drawn uniformly from [min_value, max_value).

        Args:
            rows: Number of rows
            cols: Number of columns
            min_value: Inclusive lower bound
            max_value: Exclusive upper bound
            rng: Random generator (a fresh default_rng() if None)
        """
        check_dimension(rows, 'rows')
        check_dimension(cols, 'cols')
        if min_value > max_value:
            raise ValidationError(
                f"random: min_value ({min_value}) must not exceed max_value ({max_value})"
            )
        rng = rng if rng is not None else np.random.default_rng()
        return cls(MatrixBuffer.wrap(rng.uniform(min_value, max_value, rows * cols), rows, cols))

    @classmethod
    def from_row_major_sequence(cls, rows: int, cols: int, values: Sequence[float]) -> 'Matrix':
        """
        Matrix from a flat sequence listing the elements row by row.

        Raises:
            DimensionError: If values does not hold exactly rows * cols elements
        """
        size = Size(rows, cols)
        flat = check_array(values, 'values')
        if flat.ndim != 1 or flat.shape[0] != size.count:
            raise DimensionError(
                f"values: must contain exactly {rows} x {cols} = {size.count} elements, "
                f"got shape {flat.shape}"
            )
        return cls(MatrixBuffer.wrap(flat.copy(), rows, cols))

    @classmethod
    def of(cls, rows: Sequence[Sequence[float]]) -> 'Matrix':
        """Matrix from explicit rows, e.g. Matrix.of([[1, 2], [3, 4]])."""
        return cls.from_array(rows)

    @classmethod
    def from_buffer(cls, buffer: MatrixBuffer) -> 'Matrix':
        """Matrix taking ownership of an existing buffer (no copy)."""
        return cls(buffer)

    @classmethod
    def from_array(cls, array: ArrayLike, layout: Layout = Layout.ROW_MAJOR) -> 'Matrix':
        """Matrix holding a copy of a 2-D array-like."""
        values = check_array(array, 'array')
        check_2d(values, 'array')
        rows, cols = values.shape
        check_dimension(rows, 'rows')
        check_dimension(cols, 'cols')
        order = 'C' if layout is Layout.ROW_MAJOR else 'F'
        flat = np.array(values.ravel(order=order), dtype=np.float64)
        return cls(MatrixBuffer.wrap(flat, rows, cols, layout))

    # === Accessors ===

    @property
    def size(self) -> Size:
        return self._buffer.size

    @property
    def rows(self) -> int:
        return self._buffer.rows

    @property
    def cols(self) -> int:
        return self._buffer.cols

    @property
    def buffer(self) -> MatrixBuffer:
        return self._buffer

    @property
    def layout(self) -> Layout:
        return self._buffer.layout

    def at(self, row: int, col: int) -> float:
        """Element at 1-based (row, col)."""
        self._check_row(row)
        self._check_column(col)
        return self._buffer.get(row - 1, col - 1)

    def set_at(self, row: int, col: int, value: float) -> None:
        """Set element at 1-based (row, col)."""
        self._check_row(row)
        self._check_column(col)
        self._buffer.set(row - 1, col - 1, value)

    def row_vector(self, row: int) -> Vector:
        """Live view of a row: writes go through to this matrix."""
        self._check_row(row)
        return Vector.from_buffer(self._buffer.row(row - 1))

    def column_vector(self, col: int) -> Vector:
        """Live view of a column: writes go through to this matrix."""
        self._check_column(col)
        return Vector.from_buffer(self._buffer.column(col - 1))

    def to_numpy(self) -> NDArray[np.float64]:
        """Independent 2-D copy of the elements."""
        return self._array().copy()

    def copy(self) -> 'Matrix':
        """Fully independent matrix with no shared storage."""
        return Matrix(self._buffer.copy())

    # === Structural predicates ===

    def is_square(self) -> bool:
        return self.rows == self.cols

    def is_identity(self, tol: float = 0.0) -> bool:
        if not self.is_square():
            return False
        return bool(np.all(np.abs(self._array() - np.eye(self.rows)) <= tol))

    def is_zero(self, tol: float = 0.0) -> bool:
        """A zero matrix has all of its entries equal to zero."""
        return bool(np.all(np.abs(self._array()) <= tol))

    def is_diagonal(self, tol: float = 0.0) -> bool:
        """
        Square, with nonzero diagonal entries and zeros everywhere else.

        A zero on the diagonal disqualifies the matrix.
        """
        if not self.is_square():
            return False
        a = np.abs(self._array())
        on_diagonal = np.eye(self.rows, dtype=bool)
        return bool(np.all(a[on_diagonal] > tol) and np.all(a[~on_diagonal] <= tol))

    def is_symmetrical(self, tol: float = 0.0) -> bool:
        """Identical to its transpose; only the strict lower triangle is compared."""
        if not self.is_square():
            return False
        a = self._array()
        lower = np.tril_indices(self.rows, -1)
        return bool(np.all(np.abs(a[lower] - a.T[lower]) <= tol))

    def is_upper_triangular(self, tol: float = 0.0) -> bool:
        if not self.is_square():
            return False
        return bool(np.all(np.abs(np.tril(self._array(), -1)) <= tol))

    def is_lower_triangular(self, tol: float = 0.0) -> bool:
        if not self.is_square():
            return False
        return bool(np.all(np.abs(np.triu(self._array(), 1)) <= tol))

    def is_triangular(self, tol: float = 0.0) -> bool:
        return self.is_upper_triangular(tol) or self.is_lower_triangular(tol)

    def is_orthogonal(self, tol: float = 0.0) -> bool:
        """A . A^T equals the identity (costs a full multiplication)."""
        return self.multiply(self.transposed()).is_identity(tol)

    def is_involutory(self, tol: float = 0.0) -> bool:
        """
        An involutory matrix is its own inverse: A . A = I.

        Involutory matrices are the square roots of the identity matrix.
        """
        return self.is_square() and self.multiply(self).is_identity(tol)

    def is_invertible(self) -> bool:
        """Square with nonzero determinant (i.e. not singular)."""
        return self.is_square() and self.determinant() != 0.0

    def is_close_to(self, other: 'Matrix', tier: ToleranceTier = CPU_FP64) -> bool:
        """Elementwise agreement within a tolerance tier."""
        if other is None:
            raise ValidationError("other: can't be None")
        check_same_size(self.size, other.size, 'comparison')
        return tier.allclose(self._array(), other._array())

    # === Arithmetic ===

    def multiply(self, other: 'Matrix') -> 'Matrix':
        """
        Matrix product using the naive O(n^3) algorithm.

        Each result element is the inner product of a row view of this
        matrix and a column view of other; no operand is copied.

        Raises:
            DimensionError: If self.cols != other.rows
        """
        if other is None:
            raise ValidationError("other: can't be None")
        if self.cols != other.rows:
            raise DimensionError(
                f"multiply: number of columns in first matrix ({self.cols}) must match "
                f"number of rows in second matrix ({other.rows})"
            )
        result = Matrix.zero(self.rows, other.cols)
        for i in range(1, self.rows + 1):
            row = self.row_vector(i)
            for j in range(1, other.cols + 1):
                result._buffer.set(i - 1, j - 1, row.inner_product(other.column_vector(j)))
        return result

    def multiply_vector(self, vector: Vector) -> Vector:
        """Matrix-vector product A . v as a new vector."""
        if vector is None:
            raise ValidationError("vector: can't be None")
        check_same_dimension(self.cols, vector.dimension, 'multiply vector')
        return Vector.from_array([self.row_vector(i).inner_product(vector) for i in range(1, self.rows + 1)])

    def multiply_constant(self, constant: float) -> None:
        self._array()[:, :] *= constant

    def add(self, other: 'Matrix') -> None:
        if other is None:
            raise ValidationError("other: can't be None")
        check_same_size(self.size, other.size, 'add')
        self._array()[:, :] += other._array()

    def subtract(self, other: 'Matrix') -> None:
        if other is None:
            raise ValidationError("other: can't be None")
        check_same_size(self.size, other.size, 'subtract')
        self._array()[:, :] -= other._array()

    def transpose(self) -> None:
        """
        Reflect the elements across the diagonal, in place.

        Only the buffer's strides are swapped, so no element value changes
        and transposing twice restores the original exactly.
        Properties: (X + Y)^T = X^T + Y^T, (XZ)^T = Z^T X^T, (X^T)^T = X.
        """
        self._buffer.transpose()

    def transposed(self) -> 'Matrix':
        """Transposed copy; this matrix is left untouched."""
        result = self.copy()
        result.transpose()
        return result

    # === Functional helpers ===

    def transform(self, func: Callable[[Position, float], float]) -> None:
        """Replace each element v at position p with func(p, v), in row-major order."""
        if func is None:
            raise ValidationError("func: can't be None")
        for p in positions.row_major(self.size):
            value = self._buffer.get(p.row - 1, p.col - 1)
            self._buffer.set(p.row - 1, p.col - 1, func(p, value))

    def populate(self, supplier: Callable[[], float]) -> None:
        if supplier is None:
            raise ValidationError("supplier: can't be None")
        self.transform(lambda p, v: supplier())

    def for_each(self, consumer: Callable[[Position, float], None]) -> None:
        if consumer is None:
            raise ValidationError("consumer: can't be None")
        for p in positions.row_major(self.size):
            consumer(p, self._buffer.get(p.row - 1, p.col - 1))

    def any_match(self, predicate: Callable[[Position, float], bool]) -> bool:
        if predicate is None:
            raise ValidationError("predicate: can't be None")
        return any(
            predicate(p, self._buffer.get(p.row - 1, p.col - 1))
            for p in positions.row_major(self.size)
        )

    # === Elementary row operations ===

    def multiply_row(self, row: int, constant: float) -> None:
        """
        Multiply every element of a row by a nonzero constant.

        A set of these is equivalent to multiplying by a scaling matrix.
        """
        self._check_row(row)
        if constant == 0.0:
            raise ValidationError("multiply row: constant must be nonzero")
        self.row_vector(row).multiply(constant)

    def swap_rows(self, row_a: int, row_b: int) -> None:
        """
        Exchange two rows.

        A set of these is equivalent to multiplying by a permutation matrix.
        """
        self._check_row(row_a)
        self._check_row(row_b)
        if row_a == row_b:
            return
        first = self.row_vector(row_a)
        second = self.row_vector(row_b)
        saved = first.copy()
        first.assign(second)
        second.assign(saved)

    def add_multiple_of_row(self, row: int, multiple: float, other_row: int) -> None:
        """
        Add multiple x other_row to row.

        A set of these is equivalent to multiplying by an elimination matrix.

        Raises:
            ValidationError: If row == other_row
        """
        self._check_row(row)
        self._check_row(other_row)
        if row == other_row:
            raise ValidationError(f"add multiple of row: can't add a multiple of row {row} to itself")
        self.row_vector(row).add(self.row_vector(other_row) * multiple)

    # === Elimination and decomposition ===

    def gaussian_elimination(self, threshold: float = SINGULARITY_THRESHOLD) -> None:
        """Reduce to row echelon form in place (see linalg.elimination)."""
        from pylinearalgebra.linalg.elimination import gaussian_elimination
        gaussian_elimination(self, threshold=threshold)

    def gauss_jordan_elimination(self, threshold: float = SINGULARITY_THRESHOLD) -> None:
        """Reduce to reduced row echelon form in place (see linalg.elimination)."""
        from pylinearalgebra.linalg.elimination import gauss_jordan_elimination
        gauss_jordan_elimination(self, threshold=threshold)

    def lu_decomposition(self, threshold: float = SINGULARITY_THRESHOLD) -> 'LUDecompositionResult':
        """Doolittle LU decomposition with partial pivoting of a copy of this matrix."""
        from pylinearalgebra.decomposition.lu import lu_decompose
        return lu_decompose(self, threshold=threshold)

    def determinant(self) -> float:
        """
        Determinant of a square matrix.

        2 x 2 and 3 x 3 matrices use the closed-form cofactor expansion,
        triangular matrices the product of the diagonal, and everything else
        the LU decomposition (sign x product of U's diagonal). A matrix the
        decomposition finds singular has determinant 0.0.

        Properties: det(I) = 1, det(A^T) = det(A), det(A^-1) = 1/det(A),
        det(AB) = det(A) det(B). Swapping two rows flips the sign; adding a
        multiple of one row to another leaves it unchanged.

        Raises:
            DimensionError: If the matrix is not square
        """
        check_square(self.rows, self.cols, 'determinant')
        e = self._buffer.get

        if self.rows == 2:
            # ad - bc
            return e(0, 0) * e(1, 1) - e(0, 1) * e(1, 0)

        if self.rows == 3:
            # aei - afh - bdi + bfg + cdh - ceg
            return (e(0, 0) * e(1, 1) * e(2, 2)
                    - e(0, 0) * e(1, 2) * e(2, 1)
                    - e(0, 1) * e(1, 0) * e(2, 2)
                    + e(0, 1) * e(1, 2) * e(2, 0)
                    + e(0, 2) * e(1, 0) * e(2, 1)
                    - e(0, 2) * e(1, 1) * e(2, 0))

        if self.is_triangular():
            return math.prod(e(k, k) for k in range(self.rows))

        try:
            return self.lu_decomposition().determinant()
        except SingularMatrixError:
            return 0.0

    def invert(self) -> 'Matrix':
        """
        Inverse of a square, nonsingular matrix.

        2 x 2 and 3 x 3 matrices use the adjugate divided by the determinant;
        larger ones solve A x = e_i for every standard basis column through
        the LU decomposition.

        Properties: A^-1 A = I, (A^-1)^-1 = A, (kA)^-1 = k^-1 A^-1,
        (A^T)^-1 = (A^-1)^T, det(A^-1) = det(A)^-1.

        Raises:
            DimensionError: If the matrix is not square
            SingularMatrixError: If the matrix is singular
        """
        check_square(self.rows, self.cols, 'invert')

        if self.rows == 2:
            e = self._buffer.get
            # a b
            # c d
            determinant = e(0, 0) * e(1, 1) - e(0, 1) * e(1, 0)
            self._check_closed_form_determinant(determinant)
            return Matrix.of([
                [e(1, 1) / determinant, -e(0, 1) / determinant],
                [-e(1, 0) / determinant, e(0, 0) / determinant],
            ])

        if self.rows == 3:
            return self._invert_3x3()

        return self.lu_decomposition().inverse()

    def solve(self, b: Vector) -> Vector:
        """Solve A x = b through the LU decomposition."""
        return self.lu_decomposition().solve(b)

    # === Operators (pure) ===

    def __add__(self, other: 'Matrix') -> 'Matrix':
        if not isinstance(other, Matrix):
            return NotImplemented
        result = self.copy()
        result.add(other)
        return result

    def __sub__(self, other: 'Matrix') -> 'Matrix':
        if not isinstance(other, Matrix):
            return NotImplemented
        result = self.copy()
        result.subtract(other)
        return result

    def __mul__(self, constant: float) -> 'Matrix':
        if not isinstance(constant, (int, float, np.number)):
            return NotImplemented
        result = self.copy()
        result.multiply_constant(constant)
        return result

    __rmul__ = __mul__

    def __matmul__(self, other: Any) -> Any:
        if isinstance(other, Matrix):
            return self.multiply(other)
        if isinstance(other, Vector):
            return self.multiply_vector(other)
        return NotImplemented

    def __eq__(self, other: object) -> bool:
        if self is other:
            return True
        if not isinstance(other, Matrix):
            return NotImplemented
        return self.size == other.size and bool(np.array_equal(self._array(), other._array()))

    __hash__ = None  # mutable

    def to_string(self, formatter: Callable[[float], str] | None = None) -> str:
        """One line per row, elements separated by spaces."""
        formatter = formatter if formatter is not None else NumberFormatter.pretty()
        return "".join(
            " ".join(formatter(float(v)) for v in row) + "\n"
            for row in self._array()
        )

    def __str__(self) -> str:
        return self.to_string()

    def __repr__(self) -> str:
        return f"Matrix({self.size}, layout={self.layout.name})"

    # === Internals ===

    def _array(self) -> NDArray[np.float64]:
        return self._buffer.as_array()

    def _check_row(self, row: int) -> None:
        check_index(row, self.rows, 'row')

    def _check_column(self, col: int) -> None:
        check_index(col, self.cols, 'column')

    def _check_closed_form_determinant(self, determinant: float) -> None:
        if determinant == 0.0:
            raise SingularMatrixError(
                f"invert: {self.size} matrix is singular (determinant is 0)",
                matrix_name='A',
            )
        scale = float(np.max(np.abs(self._array()))) ** self.rows
        if abs(determinant) <= ILL_CONDITIONED_RATIO * scale:
            warnings.warn(
                f"invert: {self.size} matrix is nearly singular "
                f"(determinant {determinant:.3e} relative to element scale {scale:.3e}); "
                f"the inverse may be inaccurate",
                RuntimeWarning,
                stacklevel=3,
            )

    def _invert_3x3(self) -> 'Matrix':
        e = self._buffer.get
        # a b c
        # d e f
        # g h i
        A = (e(1, 1) * e(2, 2) - e(1, 2) * e(2, 1))    # ei - fh
        B = -(e(1, 0) * e(2, 2) - e(1, 2) * e(2, 0))   # -(di - fg)
        C = (e(1, 0) * e(2, 1) - e(1, 1) * e(2, 0))    # dh - eg
        D = -(e(0, 1) * e(2, 2) - e(0, 2) * e(2, 1))   # -(bi - ch)
        E = (e(0, 0) * e(2, 2) - e(0, 2) * e(2, 0))    # ai - cg
        F = -(e(0, 0) * e(2, 1) - e(0, 1) * e(2, 0))   # -(ah - bg)
        G = (e(0, 1) * e(1, 2) - e(0, 2) * e(1, 1))    # bf - ce
        H = -(e(0, 0) * e(1, 2) - e(0, 2) * e(1, 0))   # -(af - cd)
        I = (e(0, 0) * e(1, 1) - e(0, 1) * e(1, 0))    # ae - bd

        determinant = e(0, 0) * A + e(0, 1) * B + e(0, 2) * C  # aA + bB + cC
        self._check_closed_form_determinant(determinant)

        # Transposed cofactors (adjugate) over the determinant
        return Matrix.of([
            [A / determinant, D / determinant, G / determinant],
            [B / determinant, E / determinant, H / determinant],
            [C / determinant, F / determinant, I / determinant],
        ])
