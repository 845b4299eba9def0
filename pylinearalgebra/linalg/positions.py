"""
Generators over 1-based matrix element positions.

Matrix.transform, for_each and any_match visit positions in row-major
order; the other orders are used by predicates and by callers that need to
address a particular region (a diagonal, a triangle, a single row).
"""

from typing import Iterator

from pylinearalgebra.core.shape import Position, Size


def row_major(size: Size) -> Iterator[Position]:
    """All positions, row by row."""
    for i in range(1, size.rows + 1):
        for j in range(1, size.cols + 1):
            yield Position(i, j)


def column_major(size: Size) -> Iterator[Position]:
    """All positions, column by column."""
    for j in range(1, size.cols + 1):
        for i in range(1, size.rows + 1):
            yield Position(i, j)


def diagonal(size: Size) -> Iterator[Position]:
    """(1,1), (2,2), ... up to min(rows, cols)."""
    for k in range(1, min(size.rows, size.cols) + 1):
        yield Position(k, k)


def lower_triangle(size: Size) -> Iterator[Position]:
    """Positions strictly below the diagonal, row by row."""
    for i in range(2, size.rows + 1):
        for j in range(1, min(i, size.cols + 1)):
            yield Position(i, j)


def upper_triangle(size: Size) -> Iterator[Position]:
    """Positions strictly above the diagonal, row by row."""
    for i in range(1, size.rows + 1):
        for j in range(i + 1, size.cols + 1):
            yield Position(i, j)


def row(size: Size, row: int) -> Iterator[Position]:
    """Positions of one row, left to right."""
    for j in range(1, size.cols + 1):
        yield Position(row, j)


def column(size: Size, col: int) -> Iterator[Position]:
    """Positions of one column, top to bottom."""
    for i in range(1, size.rows + 1):
        yield Position(i, col)
