"""
Input validation utilities for pylinearalgebra.

These validators follow the "fail fast, fail loud" principle. They raise
immediately with clear error messages rather than silently correcting
or making assumptions about caller intent.

Design principles:
    - No silent type coercion (except np.asarray on array-likes)
    - Clear, actionable error messages with actual values
    - Each function validates ONE thing
    - Parameter names included in all error messages
"""

from typing import Any

import numpy as np
from numpy.typing import ArrayLike, NDArray

from pylinearalgebra.core.exceptions import ValidationError, DimensionError


def check_array(
    array: ArrayLike,
    name: str,
) -> NDArray[np.floating[Any]]:
    """
    Validate and convert input to a float64 numpy array.

    Accepts any array-like and converts to numpy array. Rejects inputs
    that result in object dtype (indicating mixed types or non-numeric data).

    Args:
        array: Input to validate
        name: Parameter name for error messages

    Returns:
        numpy.ndarray with float64 dtype

    Raises:
        ValidationError: If input is missing or cannot be converted to a
            numeric array
    """
    if array is None:
        raise ValidationError(f"{name}: can't be None")

    try:
        result = np.asarray(array)
    except (ValueError, TypeError) as e:
        raise ValidationError(f"{name}: cannot convert to array: {e}") from e

    if result.dtype == object:
        raise ValidationError(
            f"{name}: converted to object dtype, indicating mixed types or non-numeric data"
        )

    if not np.issubdtype(result.dtype, np.number) or np.issubdtype(result.dtype, np.complexfloating):
        raise ValidationError(
            f"{name}: non-numeric dtype {result.dtype}, expected real numeric data"
        )

    return result.astype(np.float64, copy=False)


def check_finite(array: NDArray[np.floating[Any]], name: str) -> None:
    """
    Verify array contains no NaN or Inf values.

    Args:
        array: Array to check
        name: Parameter name for error messages

    Raises:
        ValidationError: If array contains non-finite values
    """
    if not np.all(np.isfinite(array)):
        n_nan = int(np.sum(np.isnan(array)))
        n_inf = int(np.sum(np.isinf(array)))
        raise ValidationError(
            f"{name}: contains non-finite values ({n_nan} NaN, {n_inf} Inf)"
        )


def check_ndim(array: NDArray[np.floating[Any]], ndim: int, name: str) -> None:
    """
    Verify array has exactly the specified number of dimensions.

    Raises:
        DimensionError: If array has wrong number of dimensions
    """
    if array.ndim != ndim:
        raise DimensionError(
            f"{name}: expected {ndim}D array, got {array.ndim}D with shape {array.shape}"
        )


def check_1d(array: NDArray[np.floating[Any]], name: str) -> None:
    """Verify array is 1-dimensional."""
    check_ndim(array, 1, name)


def check_2d(array: NDArray[np.floating[Any]], name: str) -> None:
    """Verify array is 2-dimensional."""
    check_ndim(array, 2, name)


def check_square(rows: int, cols: int, name: str) -> None:
    """
    Verify a matrix shape is square.

    Args:
        rows: Number of rows
        cols: Number of columns
        name: Parameter name (or operation) for error messages

    Raises:
        DimensionError: If rows != cols
    """
    if rows != cols:
        raise DimensionError(
            f"{name}: requires a square matrix, got {rows} x {cols}"
        )


def check_consistent_length(
    *arrays: NDArray[np.floating[Any]],
    names: tuple[str, ...]
) -> None:
    """
    Verify all arrays have the same length (first dimension).

    Raises:
        ValueError: If number of names doesn't match number of arrays
        DimensionError: If arrays have inconsistent lengths
    """
    if len(arrays) != len(names):
        raise ValueError(
            f"Number of arrays ({len(arrays)}) must match number of names ({len(names)})"
        )

    if len(arrays) < 2:
        return

    lengths = [arr.shape[0] for arr in arrays]
    if len(set(lengths)) > 1:
        details = ", ".join(f"{name}={length}" for name, length in zip(names, lengths))
        raise DimensionError(f"Inconsistent lengths: {details}")


def check_dimension(value: int, name: str) -> None:
    """
    Verify a count (dimension, rows, cols) is at least 1.

    Raises:
        ValidationError: If value is not an integer >= 1
    """
    if isinstance(value, bool) or not isinstance(value, (int, np.integer)):
        raise ValidationError(f"{name}: expected an integer, got {type(value).__name__}")
    if value < 1:
        raise ValidationError(f"{name}: must be 1 or higher, got {value}")


def check_index(index: int, upper: int, name: str) -> None:
    """
    Verify a 1-based index lies in [1, upper].

    Raises:
        ValidationError: If index is out of range
    """
    if isinstance(index, bool) or not isinstance(index, (int, np.integer)):
        raise ValidationError(f"{name}: expected an integer, got {type(index).__name__}")
    if index < 1 or index > upper:
        raise ValidationError(
            f"{name}: must be between 1 and {upper}, got {index}"
        )


def check_same_dimension(first: int, second: int, operation: str) -> None:
    """
    Verify two vector dimensions match.

    Raises:
        DimensionError: If the dimensions differ
    """
    if first != second:
        raise DimensionError(
            f"{operation}: vectors of different dimension ({first} and {second})"
        )


def check_same_size(first: Any, second: Any, operation: str) -> None:
    """
    Verify two matrix sizes match exactly.

    Args:
        first: Size of the left operand
        second: Size of the right operand
        operation: Operation name for error messages

    Raises:
        DimensionError: If the sizes differ
    """
    if first != second:
        raise DimensionError(
            f"{operation}: matrices of different size ({first} and {second})"
        )
