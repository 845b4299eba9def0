"""
Matrix shape and element position value types.

Both are immutable and compare by value. Positions are 1-based, matching
the indexing convention exposed by Vector and Matrix.
"""

from dataclasses import dataclass

from pylinearalgebra.core.validation import check_dimension


@dataclass(frozen=True)
class Size:
    """Number of rows and columns of a matrix (both >= 1)."""
    rows: int
    cols: int

    def __post_init__(self):
        check_dimension(self.rows, 'rows')
        check_dimension(self.cols, 'cols')

    @property
    def count(self) -> int:
        """Total number of elements."""
        return self.rows * self.cols

    @property
    def is_square(self) -> bool:
        return self.rows == self.cols

    def transposed(self) -> 'Size':
        """Size with rows and columns exchanged."""
        return Size(self.cols, self.rows)

    def __str__(self) -> str:
        return f"{self.rows} x {self.cols}"


@dataclass(frozen=True)
class Position:
    """1-based (row, col) position of a matrix element."""
    row: int
    col: int

    @property
    def is_on_diagonal(self) -> bool:
        return self.row == self.col

    @property
    def is_above_diagonal(self) -> bool:
        return self.col > self.row

    @property
    def is_below_diagonal(self) -> bool:
        return self.col < self.row
