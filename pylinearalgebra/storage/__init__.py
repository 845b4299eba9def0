"""
Strided backing storage shared by vectors and matrices.

Public API:
    Layout: ROW_MAJOR / COLUMN_MAJOR allocation order
    VectorBuffer: 1-D strided view (owning or aliasing a matrix row/column)
    MatrixBuffer: 2-D strided storage with zero-copy row/column views
"""

from pylinearalgebra.storage.buffer import Layout, VectorBuffer, MatrixBuffer

__all__ = [
    "Layout",
    "VectorBuffer",
    "MatrixBuffer",
]
