"""
Gaussian and Gauss-Jordan elimination with partial pivoting.

Both routines reduce a matrix in place using only the elementary row
operations (swap_rows, multiply_row, add_multiple_of_row), so they work
unchanged on row-major, column-major and transposed matrices. Rectangular
matrices are allowed: pivoting runs over the first min(rows, cols) columns,
which makes these suitable for reducing an augmented matrix [A | b].
"""

from typing import TYPE_CHECKING

import numpy as np

from pylinearalgebra.core.compute.tolerances import SINGULARITY_THRESHOLD
from pylinearalgebra.core.exceptions import SingularMatrixError
from pylinearalgebra.core.validation import check_index

if TYPE_CHECKING:
    from pylinearalgebra.linalg.matrix import Matrix


def partial_pivot_row(matrix: 'Matrix', k: int, threshold: float = SINGULARITY_THRESHOLD) -> int:
    """
    Row holding the largest |value| in column k, among rows k..rows.

    Ties keep the first (topmost) row.

    Args:
        matrix: Matrix being reduced
        k: 1-based pivot step (column and first candidate row)
        threshold: Largest magnitude still treated as zero

    Returns:
        1-based pivot row index, >= k

    Raises:
        SingularMatrixError: If the largest magnitude does not exceed threshold
    """
    check_index(k, min(matrix.rows, matrix.cols), 'pivot step')
    candidates = np.abs(matrix.column_vector(k).to_numpy()[k - 1:])
    offset = int(np.argmax(candidates))
    largest = float(candidates[offset])
    if not largest > threshold:
        raise SingularMatrixError(
            f"matrix is singular: no pivot in column {k} exceeds {threshold:g} "
            f"(largest magnitude {largest:g})",
            matrix_name='A',
            pivot_index=k,
            pivot_value=largest,
            threshold=threshold,
        )
    return k + offset


def gaussian_elimination(matrix: 'Matrix', threshold: float = SINGULARITY_THRESHOLD) -> None:
    """
    Reduce a matrix to row echelon form, in place.

    At each step k the row with the largest |A[i][k]| (i >= k) is swapped
    into position k, then every row below has multiplier x row k
    subtracted from it, where multiplier = A[i][k] / A[k][k]. The
    eliminated entry is stored as an exact 0.0.

    Raises:
        SingularMatrixError: If some column has no usable pivot
    """
    steps = min(matrix.rows, matrix.cols)
    for k in range(1, steps + 1):
        pivot_row = partial_pivot_row(matrix, k, threshold)
        if pivot_row != k:
            matrix.swap_rows(k, pivot_row)

        pivot = matrix.at(k, k)
        for i in range(k + 1, matrix.rows + 1):
            multiplier = matrix.at(i, k) / pivot
            matrix.add_multiple_of_row(i, -multiplier, k)
            matrix.set_at(i, k, 0.0)


def gauss_jordan_elimination(matrix: 'Matrix', threshold: float = SINGULARITY_THRESHOLD) -> None:
    """
    Reduce a matrix to reduced row echelon form, in place.

    Runs Gaussian elimination followed by jordan_reduction().

    For an augmented n x (n + 1) matrix [A | b] the last column ends up
    holding the solution of A x = b.

    Raises:
        SingularMatrixError: If some column has no usable pivot
    """
    gaussian_elimination(matrix, threshold)
    jordan_reduction(matrix)


def jordan_reduction(matrix: 'Matrix') -> None:
    """
    Take a row echelon matrix to reduced row echelon form, in place.

    Scales each pivot row so the pivot is exactly 1.0, then clears the
    entries above every pivot working from the last pivot column back to
    the second. The pivots must be nonzero, as gaussian_elimination leaves
    them.
    """
    steps = min(matrix.rows, matrix.cols)
    for k in range(1, steps + 1):
        pivot = matrix.at(k, k)
        if pivot != 1.0:
            matrix.multiply_row(k, 1.0 / pivot)
            matrix.set_at(k, k, 1.0)

    # Back substitution
    for k in range(steps, 1, -1):
        for i in range(k - 1, 0, -1):
            multiplier = matrix.at(i, k)
            matrix.add_multiple_of_row(i, -multiplier, k)
            matrix.set_at(i, k, 0.0)
