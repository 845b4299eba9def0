"""
Linear system design.

A design holds a validated square coefficient matrix A and right-hand side
b for the system A x = b. Backends trust a design: all checking happens
when it is built.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any

import numpy as np
from numpy.typing import ArrayLike, NDArray

from pylinearalgebra.core.exceptions import ValidationError
from pylinearalgebra.core.validation import (
    check_1d,
    check_2d,
    check_array,
    check_consistent_length,
    check_finite,
    check_square,
)
from pylinearalgebra.linalg.matrix import Matrix
from pylinearalgebra.linalg.vector import Vector


@dataclass(frozen=True)
class LinearSystemDesign:
    """
    Square linear system A x = b.

    Immutable after construction.

    Construction:
        LinearSystemDesign.from_arrays(A, b)       # coefficient matrix and rhs
        LinearSystemDesign.from_arrays(Ab)         # augmented n x (n + 1) matrix
        LinearSystemDesign.from_matrix(A, b)       # Matrix and Vector
    """
    _A: NDArray[np.floating[Any]]
    _b: NDArray[np.floating[Any]]
    _n: int

    @classmethod
    def from_arrays(cls, A: ArrayLike, b: ArrayLike | None = None) -> LinearSystemDesign:
        """
        Build a design from array-likes.

        Args:
            A: Coefficient matrix (n x n), or the augmented matrix [A | b]
               (n x (n + 1)) when b is None
            b: Right-hand side (n,) or (n, 1)

        Raises:
            ValidationError: If an input is not numeric, not finite or has
                the wrong number of dimensions
            DimensionError: If A is not square or b does not match it
        """
        A_arr = check_array(A, 'A')
        check_2d(A_arr, 'A')

        if b is None:
            n, cols = A_arr.shape
            if cols != n + 1:
                raise ValidationError(
                    f"A: without b, expected an augmented n x (n + 1) matrix, got {n} x {cols}"
                )
            b_arr = A_arr[:, -1]
            A_arr = A_arr[:, :-1]
        else:
            b_arr = check_array(b, 'b')
            if b_arr.ndim == 2 and b_arr.shape[1] == 1:
                b_arr = b_arr.ravel()

        return cls._build(A_arr, b_arr)

    @classmethod
    def from_matrix(cls, A: Matrix, b: Vector) -> LinearSystemDesign:
        """Build a design from a Matrix and a Vector (both copied)."""
        if A is None:
            raise ValidationError("A: can't be None")
        if b is None:
            raise ValidationError("b: can't be None")
        return cls._build(A.to_numpy(), b.to_numpy())

    @classmethod
    def _build(cls, A: NDArray, b: NDArray) -> LinearSystemDesign:
        """Internal builder with validation."""
        check_1d(b, 'b')
        check_finite(A, 'A')
        check_finite(b, 'b')
        check_square(A.shape[0], A.shape[1], 'A')
        check_consistent_length(A, b, names=('A', 'b'))

        A = np.array(A, dtype=np.float64)
        b = np.array(b, dtype=np.float64)
        A.setflags(write=False)
        b.setflags(write=False)
        return cls(_A=A, _b=b, _n=A.shape[0])

    # === Properties ===

    @property
    def A(self) -> NDArray[np.floating[Any]]:
        """Coefficient matrix (n x n), read-only."""
        return self._A

    @property
    def b(self) -> NDArray[np.floating[Any]]:
        """Right-hand side (n,), read-only."""
        return self._b

    @property
    def n(self) -> int:
        """Number of equations (and unknowns)."""
        return self._n

    def coefficient_matrix(self) -> Matrix:
        """A as a new Matrix."""
        return Matrix.from_array(self._A)

    def rhs_vector(self) -> Vector:
        """b as a new Vector."""
        return Vector.from_array(self._b)

    def augmented(self) -> Matrix:
        """[A | b] as a new n x (n + 1) Matrix."""
        return Matrix.from_array(np.column_stack([self._A, self._b]))
