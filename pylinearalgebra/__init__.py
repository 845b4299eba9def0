"""
PyLinearAlgebra: dense linear algebra over strided numpy storage.

Vectors and matrices with zero-copy row/column views, elementary row
operations, Gaussian and Gauss-Jordan elimination, and Doolittle LU
decomposition with partial pivoting for determinants, inverses and
linear systems.

Submodules:
    storage: Strided vector and matrix buffers
    linalg: Vector, Matrix, Gram-Schmidt, elimination
    decomposition: LU decomposition
    systems: Array-level solve(), determinant(), inverse()
"""

__version__ = "0.1.0"

from pylinearalgebra import storage
from pylinearalgebra import linalg
from pylinearalgebra import decomposition
from pylinearalgebra import systems
from pylinearalgebra.linalg import Vector, Matrix
from pylinearalgebra.core.exceptions import (
    LinearAlgebraError,
    ValidationError,
    DimensionError,
    NumericalError,
    SingularMatrixError,
)

__all__ = [
    "__version__",
    "storage",
    "linalg",
    "decomposition",
    "systems",
    "Vector",
    "Matrix",
    "LinearAlgebraError",
    "ValidationError",
    "DimensionError",
    "NumericalError",
    "SingularMatrixError",
]
