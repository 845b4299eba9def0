"""
Result type for the LU decomposition.

The combined LU matrix is stored privately and never handed out: every
accessor returns an independent copy, so a result can be shared freely and
reused for any number of right-hand sides.
"""

from dataclasses import dataclass

import numpy as np
from numpy.typing import NDArray

from pylinearalgebra.core.exceptions import ValidationError
from pylinearalgebra.core.validation import check_same_dimension
from pylinearalgebra.linalg.matrix import Matrix
from pylinearalgebra.linalg.vector import Vector


@dataclass(frozen=True)
class LUDecompositionResult:
    """
    Doolittle factorization P A = L U of a square matrix.

    The strictly lower part of the combined matrix holds L (whose diagonal
    is implicitly all ones); the diagonal and upper part hold U.

    Attributes:
        _lu: Combined L and U factors (private, never exposed)
        _pivots: 0-based row permutation; pi[i] is the original row that
            ended up in row i
        _sign: +1.0 or -1.0, parity of the row swaps performed
    """
    _lu: Matrix
    _pivots: tuple[int, ...]
    _sign: float

    @property
    def size(self) -> int:
        """Order n of the decomposed n x n matrix."""
        return self._lu.rows

    @property
    def lu(self) -> Matrix:
        """Copy of the combined LU matrix."""
        return self._lu.copy()

    @property
    def pivots(self) -> tuple[int, ...]:
        return self._pivots

    @property
    def sign(self) -> float:
        return self._sign

    def determinant(self) -> float:
        """sign x product of U's diagonal."""
        det = self._sign
        for k in range(1, self.size + 1):
            det *= self._lu.at(k, k)
        return det

    def permutation_matrix(self) -> Matrix:
        """P with P[i][pi[i]] = 1, so that P A = L U."""
        p = Matrix.zero(self.size, self.size)
        for i, source in enumerate(self._pivots):
            p.set_at(i + 1, source + 1, 1.0)
        return p

    def lower_matrix(self) -> Matrix:
        """Unit lower triangular factor L."""
        lu = self._lu.to_numpy()
        return Matrix.from_array(np.tril(lu, -1) + np.eye(self.size))

    def upper_matrix(self) -> Matrix:
        """Upper triangular factor U."""
        return Matrix.from_array(np.triu(self._lu.to_numpy()))

    def solve(self, b: Vector) -> Vector:
        """
        Solve A x = b by forward then backward substitution.

        Raises:
            DimensionError: If b's dimension differs from the matrix order
        """
        if b is None:
            raise ValidationError("b: can't be None")
        check_same_dimension(self.size, b.dimension, 'solve')
        return Vector.from_array(self._substitute(b.to_numpy()))

    def inverse(self) -> Matrix:
        """A^-1, one column per standard basis vector e_i."""
        n = self.size
        inverse = Matrix.zero(n, n)
        for i in range(n):
            basis = np.zeros(n)
            basis[i] = 1.0
            inverse.column_vector(i + 1).assign(Vector.from_array(self._substitute(basis)))
        return inverse

    def _substitute(self, rhs: NDArray[np.float64]) -> NDArray[np.float64]:
        n = self.size
        lu = self._lu.buffer.as_array()
        pi = self._pivots

        # L y = P b
        y = np.zeros(n)
        for i in range(n):
            y[i] = rhs[pi[i]] - lu[i, :i] @ y[:i]

        # U x = y
        x = np.zeros(n)
        for i in range(n - 1, -1, -1):
            x[i] = (y[i] - lu[i, i + 1:] @ x[i + 1:]) / lu[i, i]
        return x
