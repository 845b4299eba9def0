"""
Strided backing storage for vectors and matrices.

A buffer is a flat float64 numpy array plus addressing parameters (base
offset and stride(s)). Row and column extraction returns a VectorBuffer
over the SAME array: nothing is copied, and writes through either buffer
are visible through the other. This aliasing is the contract Vector and
Matrix rely on for live row/column views.

Layout discipline:
    A MatrixBuffer is allocated row-major or column-major. transpose()
    swaps the row/column strides (and the row/column counts) in place; the
    backing array is never reflowed. Buffers derived afterwards via row()
    or column() use the current strides. Transposing twice restores the
    original addressing exactly.

Indices at this level are 0-based. Out-of-range addressing is a
programming error and raises IndexError immediately; the 1-based,
ValidationError-raising checks live in Vector and Matrix.
"""

from enum import Enum, auto
from typing import Any

import numpy as np
from numpy.lib.stride_tricks import as_strided
from numpy.typing import NDArray

from pylinearalgebra.core.shape import Size


class Layout(Enum):
    """Element order of a matrix buffer's backing array."""
    ROW_MAJOR = auto()      # consecutive elements of a row are adjacent
    COLUMN_MAJOR = auto()   # consecutive elements of a column are adjacent

    def flipped(self) -> 'Layout':
        if self is Layout.ROW_MAJOR:
            return Layout.COLUMN_MAJOR
        return Layout.ROW_MAJOR


class VectorBuffer:
    """
    One-dimensional strided view: element i lives at values[base + stride * i].

    Either owns its array (allocate) or addresses a slice of a matrix
    buffer's array (MatrixBuffer.row / MatrixBuffer.column).
    """

    __slots__ = ('_values', '_base', '_stride', '_size')

    def __init__(self, values: NDArray[np.float64], base: int, stride: int, size: int):
        last = base + stride * (size - 1)
        if size < 1 or stride < 1 or base < 0 or last >= values.shape[0]:
            raise IndexError(
                f"vector buffer (base={base}, stride={stride}, size={size}) "
                f"does not fit in array of length {values.shape[0]}"
            )
        self._values = values
        self._base = base
        self._stride = stride
        self._size = size

    @classmethod
    def allocate(cls, size: int) -> 'VectorBuffer':
        """Zero-filled buffer owning a fresh contiguous array."""
        return cls(np.zeros(size, dtype=np.float64), 0, 1, size)

    @classmethod
    def wrap(cls, values: NDArray[np.float64]) -> 'VectorBuffer':
        """Buffer over an existing 1-D float64 array (no copy)."""
        return cls(values, 0, 1, values.shape[0])

    @property
    def size(self) -> int:
        return self._size

    @property
    def base(self) -> int:
        return self._base

    @property
    def stride(self) -> int:
        return self._stride

    def get(self, index: int) -> float:
        return float(self._values[self._address(index)])

    def set(self, index: int, value: float) -> None:
        self._values[self._address(index)] = value

    def copy(self) -> 'VectorBuffer':
        """Compact, independent copy (base 0, stride 1)."""
        return VectorBuffer(self.as_array().copy(), 0, 1, self._size)

    def as_array(self) -> NDArray[np.float64]:
        """Writable numpy view over the addressed elements (no copy)."""
        stop = self._base + self._stride * (self._size - 1) + 1
        return self._values[self._base:stop:self._stride]

    def shares_memory(self, other: 'VectorBuffer | MatrixBuffer') -> bool:
        """True if both buffers address the same backing array."""
        return np.shares_memory(self._values, other._values)

    def _address(self, index: int) -> int:
        if index < 0 or index >= self._size:
            raise IndexError(f"index {index} out of range for vector buffer of size {self._size}")
        return self._base + self._stride * index

    def __repr__(self) -> str:
        return f"VectorBuffer(size={self._size}, base={self._base}, stride={self._stride})"


class MatrixBuffer:
    """
    Two-dimensional strided storage:
    element (i, j) lives at values[base + row_stride * i + col_stride * j].
    """

    __slots__ = ('_values', '_rows', '_cols', '_base', '_row_stride', '_col_stride', '_layout')

    def __init__(
        self,
        values: NDArray[np.float64],
        rows: int,
        cols: int,
        base: int,
        row_stride: int,
        col_stride: int,
        layout: Layout,
    ):
        if values.ndim != 1:
            raise IndexError(f"matrix buffer needs a flat array, got shape {values.shape}")
        last = base + row_stride * (rows - 1) + col_stride * (cols - 1)
        if (rows < 1 or cols < 1 or base < 0 or row_stride < 1 or col_stride < 1
                or last >= values.shape[0]):
            raise IndexError(
                f"matrix buffer (rows={rows}, cols={cols}, base={base}, "
                f"strides=({row_stride}, {col_stride})) does not fit in array "
                f"of length {values.shape[0]}"
            )
        if rows > 1 and cols > 1 and not (
            row_stride >= col_stride * cols or col_stride >= row_stride * rows
        ):
            raise IndexError(
                f"matrix buffer strides ({row_stride}, {col_stride}) address "
                f"overlapping elements for a {rows} x {cols} buffer"
            )
        self._values = values
        self._rows = rows
        self._cols = cols
        self._base = base
        self._row_stride = row_stride
        self._col_stride = col_stride
        self._layout = layout

    @classmethod
    def allocate(cls, rows: int, cols: int, layout: Layout = Layout.ROW_MAJOR) -> 'MatrixBuffer':
        """Zero-filled buffer of the given size and layout."""
        return cls.wrap(np.zeros(Size(rows, cols).count, dtype=np.float64), rows, cols, layout)

    @classmethod
    def wrap(
        cls,
        values: NDArray[Any],
        rows: int,
        cols: int,
        layout: Layout = Layout.ROW_MAJOR,
    ) -> 'MatrixBuffer':
        """
        Buffer over an existing flat array holding rows * cols elements.

        A 1-D float64 array is used as-is (no copy): the caller hands over
        ownership and should not keep writing to it.

        Raises:
            ValueError: If values is not 1-D or has the wrong length
        """
        size = Size(rows, cols)
        values = np.asarray(values, dtype=np.float64)
        if values.ndim != 1 or values.shape[0] != size.count:
            raise ValueError(
                f"expected a flat array of {size.count} elements for a {size} buffer, "
                f"got shape {values.shape}"
            )
        if layout is Layout.ROW_MAJOR:
            return cls(values, rows, cols, 0, cols, 1, layout)
        return cls(values, rows, cols, 0, 1, rows, layout)

    @property
    def size(self) -> Size:
        return Size(self._rows, self._cols)

    @property
    def rows(self) -> int:
        return self._rows

    @property
    def cols(self) -> int:
        return self._cols

    @property
    def layout(self) -> Layout:
        """Current addressing layout (flips on every transpose)."""
        return self._layout

    @property
    def strides(self) -> tuple[int, int]:
        """(row_stride, col_stride) in elements."""
        return self._row_stride, self._col_stride

    def get(self, row: int, col: int) -> float:
        return float(self._values[self._address(row, col)])

    def set(self, row: int, col: int, value: float) -> None:
        self._values[self._address(row, col)] = value

    def row(self, row: int) -> VectorBuffer:
        """View of one row sharing this buffer's array."""
        if row < 0 or row >= self._rows:
            raise IndexError(f"row {row} out of range for {self.size} buffer")
        return VectorBuffer(self._values, self._base + row * self._row_stride, self._col_stride, self._cols)

    def column(self, col: int) -> VectorBuffer:
        """View of one column sharing this buffer's array."""
        if col < 0 or col >= self._cols:
            raise IndexError(f"column {col} out of range for {self.size} buffer")
        return VectorBuffer(self._values, self._base + col * self._col_stride, self._row_stride, self._rows)

    def copy(self) -> 'MatrixBuffer':
        """Deep copy with identical addressing and no shared storage."""
        return MatrixBuffer(
            self._values.copy(), self._rows, self._cols,
            self._base, self._row_stride, self._col_stride, self._layout,
        )

    def transpose(self) -> None:
        """Swap row/column roles in place by exchanging strides."""
        self._rows, self._cols = self._cols, self._rows
        self._row_stride, self._col_stride = self._col_stride, self._row_stride
        self._layout = self._layout.flipped()

    def as_array(self) -> NDArray[np.float64]:
        """
        Writable 2-D numpy view honouring the current strides (no copy).

        The view is only valid until the next transpose(): it keeps the
        strides that were current when it was created.
        """
        item = self._values.strides[0]
        return as_strided(
            self._values[self._base:],
            shape=(self._rows, self._cols),
            strides=(self._row_stride * item, self._col_stride * item),
        )

    def shares_memory(self, other: 'VectorBuffer | MatrixBuffer') -> bool:
        """True if both buffers address the same backing array."""
        return np.shares_memory(self._values, other._values)

    def _address(self, row: int, col: int) -> int:
        if row < 0 or row >= self._rows or col < 0 or col >= self._cols:
            raise IndexError(f"({row}, {col}) out of range for {self.size} buffer")
        return self._base + self._row_stride * row + self._col_stride * col

    def __repr__(self) -> str:
        return (
            f"MatrixBuffer(size={self.size}, layout={self._layout.name}, "
            f"strides={self.strides})"
        )
