"""
Doolittle LU decomposition with partial pivoting.

Works on a copy of the input, which is never modified. At step k the
column k entries of the active rows are first reduced by the finalized
parts of L and U; the pivot is then chosen among those reduced values,
which is what the pivot of U will actually be. Choosing among the raw
input values instead can pick a zero pivot on a nonsingular matrix such as

    1 1 0
    1 1 1
    0 1 1
"""

from pylinearalgebra.core.compute.tolerances import SINGULARITY_THRESHOLD
from pylinearalgebra.core.exceptions import ValidationError
from pylinearalgebra.core.validation import check_square
from pylinearalgebra.decomposition.solution import LUDecompositionResult
from pylinearalgebra.linalg.elimination import partial_pivot_row
from pylinearalgebra.linalg.matrix import Matrix


def lu_decompose(matrix: Matrix, threshold: float = SINGULARITY_THRESHOLD) -> LUDecompositionResult:
    """
    Factor a square matrix as P A = L U.

    Args:
        matrix: Square matrix (left unchanged)
        threshold: Largest pivot magnitude still treated as zero

    Returns:
        LUDecompositionResult holding the combined factors, the row
        permutation and the swap parity

    Raises:
        DimensionError: If the matrix is not square
        SingularMatrixError: If no pivot above threshold exists at some step
    """
    if matrix is None:
        raise ValidationError("matrix: can't be None")
    check_square(matrix.rows, matrix.cols, 'LU decomposition')

    n = matrix.rows
    lu = matrix.copy()
    a = lu.buffer.as_array()
    pivots = list(range(n))
    sign = 1.0

    for k in range(n):
        # Column k of the active rows, less the finalized L and U parts
        for i in range(k, n):
            a[i, k] -= a[i, :k] @ a[:k, k]

        pivot_row = partial_pivot_row(lu, k + 1, threshold) - 1
        if pivot_row != k:
            pivots[k], pivots[pivot_row] = pivots[pivot_row], pivots[k]
            lu.swap_rows(k + 1, pivot_row + 1)
            sign = -sign

        # Row k of U
        for j in range(k + 1, n):
            a[k, j] -= a[k, :k] @ a[:k, j]

        # Column k of L
        for i in range(k + 1, n):
            a[i, k] /= a[k, k]

    return LUDecompositionResult(lu, tuple(pivots), sign)
