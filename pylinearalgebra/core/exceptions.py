"""
Exception hierarchy for pylinearalgebra.

All exceptions inherit from LinearAlgebraError to allow catching any
library-specific error. Two families matter to callers:

    - ValidationError: the call itself is malformed (bad index, mismatched
      operand sizes, non-square matrix where a square one is required).
    - NumericalError: the call is well-formed but the data defeats the
      algorithm (a singular matrix during elimination or inversion).

Design principles:
    - Exceptions carry diagnostic information as attributes
    - Error messages are actionable with actual vs expected values
    - Never catch and re-raise with less information
"""


class LinearAlgebraError(Exception):
    """Base exception for all pylinearalgebra errors."""
    pass


class ValidationError(LinearAlgebraError):
    """
    Input validation failed.

    Raised when caller-provided arguments fail validation checks: missing
    values, indices outside the 1-based range, zero dimensions, a zero row
    multiplier, or adding a multiple of a row to itself.
    """
    pass


class DimensionError(ValidationError):
    """
    Operand dimensions are incorrect or inconsistent.

    Raised when vector dimensions or matrix sizes don't match, when a square
    matrix is required, or when an input array has the wrong number of axes.
    """
    pass


class NumericalError(LinearAlgebraError):
    """
    Numerical computation failed.

    Base class for errors arising from the data rather than the call shape.
    """
    pass


class SingularMatrixError(NumericalError):
    """
    Matrix is singular or numerically singular.

    Raised when elimination or decomposition finds no pivot whose magnitude
    exceeds the singularity threshold, or when a closed-form inverse meets a
    zero determinant.

    Attributes:
        matrix_name: Name/description of the problematic matrix
        pivot_index: 1-based column where pivoting failed, if known
        pivot_value: Largest candidate pivot magnitude found, if known
        threshold: Threshold the pivot magnitude failed to exceed
    """

    def __init__(
        self,
        message: str,
        matrix_name: str | None = None,
        pivot_index: int | None = None,
        pivot_value: float | None = None,
        threshold: float | None = None
    ):
        super().__init__(message)
        self.matrix_name = matrix_name
        self.pivot_index = pivot_index
        self.pivot_value = pivot_value
        self.threshold = threshold
