"""
Fixed-dimension numeric vectors.

A Vector either owns its storage (created through one of the factories)
or is a live, non-owning view of a matrix row or column (created through
Matrix.row_vector / Matrix.column_vector). Views alias the matrix:

    >>> A = Matrix.identity(3)
    >>> r = A.row_vector(2)
    >>> r.multiply(5.0)        # also scales row 2 of A
    >>> A.at(2, 2)
    5.0

Indices are 1-based. Mutating methods (add, subtract, multiply, divide,
normalize, assign, transform) work in place and return None; the
operators (+, -, *, /) return new vectors and never touch their operands.

Structural predicates (is_zero_vector, is_normalized_vector,
is_orthogonal_to) compare exactly by default. Accumulated rounding makes
exact comparison fail on computed results, so each accepts an absolute
tolerance ``tol``.
"""

import math
from typing import Any, Callable, Iterator, Sequence

import numpy as np
from numpy.typing import ArrayLike, NDArray

from pylinearalgebra.core.compute.tolerances import ToleranceTier, CPU_FP64
from pylinearalgebra.core.exceptions import DimensionError, ValidationError
from pylinearalgebra.core.validation import (
    check_1d,
    check_array,
    check_dimension,
    check_index,
    check_same_dimension,
)
from pylinearalgebra.linalg.formatting import NumberFormatter
from pylinearalgebra.storage.buffer import VectorBuffer


class Vector:
    """
    Vector over a strided buffer.

    Construct through the factories (of, zero, constant, ...) rather than
    the constructor, which wraps an existing buffer as-is.
    """

    __slots__ = ('_buffer',)

    def __init__(self, buffer: VectorBuffer):
        if buffer is None:
            raise ValidationError("buffer: can't be None")
        self._buffer = buffer

    # === Factories ===

    @classmethod
    def of(cls, *values: float) -> 'Vector':
        """Vector with the given components, e.g. Vector.of(3, 1, 2)."""
        check_dimension(len(values), 'dimension')
        return cls.from_array(values)

    @classmethod
    def of_dimension(cls, dimension: int) -> 'Vector':
        """Zero-filled vector of the given dimension."""
        check_dimension(dimension, 'dimension')
        return cls(VectorBuffer.allocate(dimension))

    @classmethod
    def zero(cls, dimension: int) -> 'Vector':
        return cls.constant(dimension, 0.0)

    @classmethod
    def constant(cls, dimension: int, value: float) -> 'Vector':
        vector = cls.of_dimension(dimension)
        vector._array()[:] = value
        return vector

    @classmethod
    def random(
        cls,
        dimension: int,
        min_value: float,
        max_value: float,
        rng: np.random.Generator | None = None,
    ) -> 'Vector':
        """
        Vector with components drawn uniformly from [min_value, max_value).

        Args:
            dimension: Number of components
            min_value: Inclusive lower bound
            max_value: Exclusive upper bound
            rng: Random generator (a fresh default_rng() if None)
        """
        check_dimension(dimension, 'dimension')
        if min_value > max_value:
            raise ValidationError(
                f"random: min_value ({min_value}) must not exceed max_value ({max_value})"
            )
        rng = rng if rng is not None else np.random.default_rng()
        return cls(VectorBuffer.wrap(rng.uniform(min_value, max_value, dimension)))

    @classmethod
    def from_buffer(cls, buffer: VectorBuffer) -> 'Vector':
        """Vector over an existing buffer (shares its storage)."""
        return cls(buffer)

    @classmethod
    def from_array(cls, array: ArrayLike) -> 'Vector':
        """Vector holding a copy of a 1-D array-like."""
        values = check_array(array, 'array')
        check_1d(values, 'array')
        check_dimension(values.shape[0], 'dimension')
        return cls(VectorBuffer.wrap(values.copy()))

    # === Accessors ===

    @property
    def dimension(self) -> int:
        return self._buffer.size

    @property
    def buffer(self) -> VectorBuffer:
        """Backing buffer (shared with the parent matrix for views)."""
        return self._buffer

    def at(self, index: int) -> float:
        """Component at 1-based index."""
        check_index(index, self.dimension, 'index')
        return self._buffer.get(index - 1)

    def set_at(self, index: int, value: float) -> None:
        """Set component at 1-based index."""
        check_index(index, self.dimension, 'index')
        self._buffer.set(index - 1, value)

    def components(self) -> Iterator[float]:
        """Components in index order."""
        return (float(v) for v in self._array())

    def to_numpy(self) -> NDArray[np.float64]:
        """Independent copy of the components."""
        return self._array().copy()

    def copy(self) -> 'Vector':
        """Standalone vector with the same components and no shared storage."""
        return Vector(self._buffer.copy())

    def shares_storage_with(self, other: Any) -> bool:
        """True if this vector aliases the storage of another Vector or Matrix."""
        return self._buffer.shares_memory(other.buffer)

    # === In-place arithmetic ===

    def add(self, other: 'Vector') -> None:
        self._check_operand(other, 'add')
        self._array()[:] += other._array()

    def subtract(self, other: 'Vector') -> None:
        self._check_operand(other, 'subtract')
        self._array()[:] -= other._array()

    def multiply(self, value: float) -> None:
        self._array()[:] *= value

    def divide(self, value: float) -> None:
        self._array()[:] /= value

    def normalize(self) -> None:
        """
        Scale to unit length.

        A zero vector has no direction: its components become NaN.
        """
        self.divide(self.length())

    def assign(self, other: 'Vector') -> None:
        """Overwrite every component with the corresponding one of other."""
        self._check_operand(other, 'assign')
        self._array()[:] = other._array()

    # === Products and projections ===

    def length(self) -> float:
        """Euclidean norm (also called magnitude)."""
        a = self._array()
        return math.sqrt(float(np.dot(a, a)))

    def inner_product(self, other: 'Vector') -> float:
        """Sum of componentwise products (dot product)."""
        self._check_operand(other, 'inner product')
        return float(np.dot(self._array(), other._array()))

    def cross_product(self, other: 'Vector') -> 'Vector':
        """
        Cross product of two three-dimensional vectors.

        The result is perpendicular to both operands; it is the zero vector
        when they are parallel or either one has zero length. b x a = -(a x b).

        Raises:
            DimensionError: If either vector is not three-dimensional
        """
        self._check_operand(other, 'cross product')
        if self.dimension != 3:
            raise DimensionError(
                f"cross product: defined for three-dimensional vectors only, got {self.dimension}"
            )
        a1, a2, a3 = self._array()
        b1, b2, b3 = other._array()
        return Vector.of(a2 * b3 - a3 * b2, a3 * b1 - a1 * b3, a1 * b2 - a2 * b1)

    def project_onto(self, other: 'Vector') -> 'Vector':
        """
        Orthogonal projection of this vector onto the line spanned by other.

        Returns a new vector; the projection onto the zero vector is the zero
        vector.
        """
        self._check_operand(other, 'projection')
        if other.is_zero_vector():
            return Vector.zero(other.dimension)
        projection = other.copy()
        projection.multiply(self.inner_product(other) / other.inner_product(other))
        return projection

    # === Predicates ===

    def is_zero_vector(self, tol: float = 0.0) -> bool:
        return bool(np.all(np.abs(self._array()) <= tol))

    def is_normalized_vector(self, tol: float = 0.0) -> bool:
        """True for a unit vector."""
        return abs(self.length() - 1.0) <= tol

    def is_orthogonal_to(self, other: 'Vector', tol: float = 0.0) -> bool:
        return abs(self.inner_product(other)) <= tol

    def is_orthonormal_to(self, other: 'Vector', tol: float = 0.0) -> bool:
        if other is None:
            raise ValidationError("other: can't be None")
        return (
            self.is_normalized_vector(tol)
            and other.is_normalized_vector(tol)
            and self.is_orthogonal_to(other, tol)
        )

    def is_close_to(self, other: 'Vector', tier: ToleranceTier = CPU_FP64) -> bool:
        """Componentwise agreement within a tolerance tier."""
        self._check_operand(other, 'comparison')
        return tier.allclose(self._array(), other._array())

    # === Functional helpers ===

    def transform(self, func: Callable[[int, float], float]) -> None:
        """Replace each component v at 1-based index i with func(i, v), in index order."""
        if func is None:
            raise ValidationError("func: can't be None")
        a = self._array()
        for i in range(self.dimension):
            a[i] = func(i + 1, float(a[i]))

    def populate(self, supplier: Callable[[], float]) -> None:
        """Fill every component from a zero-argument supplier."""
        if supplier is None:
            raise ValidationError("supplier: can't be None")
        self.transform(lambda i, v: supplier())

    def for_each(self, consumer: Callable[[int, float], None]) -> None:
        if consumer is None:
            raise ValidationError("consumer: can't be None")
        for i, v in enumerate(self.components(), start=1):
            consumer(i, v)

    def any_match(self, predicate: Callable[[int, float], bool]) -> bool:
        if predicate is None:
            raise ValidationError("predicate: can't be None")
        return any(predicate(i, v) for i, v in enumerate(self.components(), start=1))

    # === Operators (pure) ===

    def __add__(self, other: 'Vector') -> 'Vector':
        if not isinstance(other, Vector):
            return NotImplemented
        result = self.copy()
        result.add(other)
        return result

    def __sub__(self, other: 'Vector') -> 'Vector':
        if not isinstance(other, Vector):
            return NotImplemented
        result = self.copy()
        result.subtract(other)
        return result

    def __mul__(self, value: float) -> 'Vector':
        if not isinstance(value, (int, float, np.number)):
            return NotImplemented
        result = self.copy()
        result.multiply(value)
        return result

    __rmul__ = __mul__

    def __truediv__(self, value: float) -> 'Vector':
        if not isinstance(value, (int, float, np.number)):
            return NotImplemented
        result = self.copy()
        result.divide(value)
        return result

    def __neg__(self) -> 'Vector':
        return self * -1.0

    def __matmul__(self, other: 'Vector') -> float:
        if not isinstance(other, Vector):
            return NotImplemented
        return self.inner_product(other)

    def __len__(self) -> int:
        return self.dimension

    def __iter__(self) -> Iterator[float]:
        return self.components()

    def __eq__(self, other: object) -> bool:
        if self is other:
            return True
        if not isinstance(other, Vector):
            return NotImplemented
        return self.dimension == other.dimension and bool(np.array_equal(self._array(), other._array()))

    __hash__ = None  # mutable

    def to_string(self, formatter: Callable[[float], str] | None = None) -> str:
        """Components on one line, separated by spaces."""
        formatter = formatter if formatter is not None else NumberFormatter.pretty()
        return " ".join(formatter(v) for v in self.components()) + "\n"

    def __str__(self) -> str:
        return self.to_string()

    def __repr__(self) -> str:
        return f"Vector.of({', '.join(repr(v) for v in self.components())})"

    # === Internals ===

    def _array(self) -> NDArray[np.float64]:
        return self._buffer.as_array()

    def _check_operand(self, other: 'Vector', operation: str) -> None:
        if other is None:
            raise ValidationError(f"{operation}: other can't be None")
        check_same_dimension(self.dimension, other.dimension, operation)


def orthogonalize(vectors: Sequence[Vector]) -> None:
    """
    Gram-Schmidt orthogonalization, in place.

    Same as orthonormalize() without the normalization step: afterwards the
    vectors are mutually orthogonal and span the same subspace.
    """
    _gram_schmidt(vectors, normalize=False, operation='orthogonalize')


def orthonormalize(vectors: Sequence[Vector]) -> None:
    """
    Modified Gram-Schmidt orthonormalization, in place.

    Takes a linearly independent set {v1, ..., vk} and turns it into an
    orthonormal set spanning the same k-dimensional subspace. Each vi is
    normalized and then immediately removed from every later vj, so each
    later vector is projected against already-corrected directions.

    Raises:
        ValidationError: If fewer than two vectors are given
        DimensionError: If the vectors differ in dimension
    """
    _gram_schmidt(vectors, normalize=True, operation='orthonormalize')


def _gram_schmidt(vectors: Sequence[Vector], normalize: bool, operation: str) -> None:
    if vectors is None:
        raise ValidationError(f"{operation}: vectors can't be None")
    if len(vectors) < 2:
        raise ValidationError(f"{operation}: need two or more vectors, got {len(vectors)}")
    first = vectors[0].dimension
    for v in vectors[1:]:
        check_same_dimension(first, v.dimension, operation)

    k = len(vectors)
    for i in range(k):
        vi = vectors[i]
        if normalize:
            vi.normalize()
        for j in range(i + 1, k):
            # Remove component in direction vi from vj
            vj = vectors[j]
            vj.subtract(vj.project_onto(vi))
