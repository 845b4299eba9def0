"""
Core infrastructure for pylinearalgebra.

This module provides shared abstractions used by the storage, linalg,
decomposition and systems packages.

Key components:
    exceptions: Exception hierarchy
    validation: Input validators
    shape: Size and Position value types
    result: Generic Result[P] envelope
    compute: Timing, singularity threshold, tolerance tiers
"""

from pylinearalgebra.core.shape import Size, Position
from pylinearalgebra.core.result import Result
from pylinearalgebra.core.exceptions import (
    LinearAlgebraError,
    ValidationError,
    DimensionError,
    NumericalError,
    SingularMatrixError,
)

__all__ = [
    # Shapes
    "Size",
    "Position",
    # Result
    "Result",
    # Exceptions
    "LinearAlgebraError",
    "ValidationError",
    "DimensionError",
    "NumericalError",
    "SingularMatrixError",
]
