"""
Solver dispatch for linear systems.

This module provides the solve(), determinant() and inverse() functions
(public API) and backend selection.
"""

from typing import Literal

import numpy as np
from numpy.typing import ArrayLike, NDArray

from pylinearalgebra.core.validation import check_2d, check_array, check_finite
from pylinearalgebra.linalg.matrix import Matrix
from pylinearalgebra.systems.backends.gauss_jordan import GaussJordanBackend
from pylinearalgebra.systems.backends.lu import LUBackend
from pylinearalgebra.systems.design import LinearSystemDesign
from pylinearalgebra.systems.solution import LinearSystemSolution


# Type alias for method selection
MethodChoice = Literal['auto', 'lu', 'gauss_jordan']


def solve(
    A: ArrayLike,
    b: ArrayLike | None = None,
    *,
    method: MethodChoice = 'auto',
) -> LinearSystemSolution:
    """
    Solve the square linear system A x = b.

    This is the primary public API for linear systems. All input validation,
    backend selection, and result wrapping happens here.

    Args:
        A: Coefficient matrix (n x n), or the augmented matrix [A | b]
           (n x (n + 1)) when b is omitted
        b: Right-hand side (n,)
        method: Elimination method:
            - 'auto': LU decomposition
            - 'lu': Doolittle LU with partial pivoting
            - 'gauss_jordan': Gauss-Jordan reduction of [A | b]

    Returns:
        LinearSystemSolution with x, determinant, residuals and summary

    Raises:
        ValidationError: If inputs are invalid
        DimensionError: If A is not square or b does not match it
        SingularMatrixError: If A is singular
        ValueError: If method is unknown

    Example:
        >>> from pylinearalgebra.systems import solve
        >>> result = solve([[1, 1, 1], [0, 2, 5], [2, 5, -1]], [6, -4, 27])
        >>> result.x
        array([ 5.,  3., -2.])
    """
    # === Select Backend ===
    # Unknown methods fail before any work is done
    backend_impl = _get_backend(method)

    # === Construct Design ===
    design = LinearSystemDesign.from_arrays(A, b)

    # === Solve ===
    result = backend_impl.solve(design)

    # === Wrap and Return ===
    return LinearSystemSolution(_result=result, _design=design)


def determinant(A: ArrayLike) -> float:
    """
    Determinant of a square matrix (0.0 when singular).

    Raises:
        ValidationError: If A is not a finite 2-D numeric array
        DimensionError: If A is not square
    """
    return _to_matrix(A).determinant()


def inverse(A: ArrayLike) -> NDArray[np.float64]:
    """
    Inverse of a square, nonsingular matrix.

    Raises:
        ValidationError: If A is not a finite 2-D numeric array
        DimensionError: If A is not square
        SingularMatrixError: If A is singular
    """
    return _to_matrix(A).invert().to_numpy()


def _to_matrix(A: ArrayLike) -> Matrix:
    A_arr = check_array(A, 'A')
    check_2d(A_arr, 'A')
    check_finite(A_arr, 'A')
    return Matrix.from_array(A_arr)


def _get_backend(choice: MethodChoice):
    """
    Select and instantiate the appropriate backend.

    Raises:
        ValueError: If unknown method specified
    """
    if choice in ('auto', 'lu'):
        return LUBackend()

    elif choice == 'gauss_jordan':
        return GaussJordanBackend()

    else:
        raise ValueError(f"Unknown method: {choice!r}")
