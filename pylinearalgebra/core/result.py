"""
Generic result container for pylinearalgebra computations.

The Result class provides a standardized envelope that array-level solvers
return. Backends fill in their own parameter payload while timing,
backend identification and non-fatal warnings travel alongside it.

Design decisions:
    - Generic over parameter payload P for type safety
    - info dict for flexible metadata (method, pivots, determinant)
    - timing is optional (don't burden unit tests)
    - Immutable (frozen=True) for reproducibility
"""

from dataclasses import dataclass, field
from typing import TypeVar, Generic, Any

P = TypeVar('P')  # Parameter payload type


@dataclass(frozen=True)
class Result(Generic[P]):
    """
    Immutable result envelope for linear algebra computations.

    Type Parameters:
        P: The parameter payload type

    Attributes:
        params: Computed payload (solution vector, determinant, ...)
        info: Structured metadata (method, pivot order, diagnostics)
        timing: Execution timing breakdown, or None if not measured
        backend_name: Identifier of the backend that produced this result
        warnings: Non-fatal issues encountered during computation

    Examples:
        >>> Result(
        ...     params=LinearSystemParams(x=x, determinant=6.0, pivot_ratio=0.25),
        ...     info={'method': 'lu', 'pivots': (1, 2, 0)},
        ...     timing={'total_seconds': 0.001},
        ...     backend_name='lu'
        ... )
    """
    params: P
    info: dict[str, Any]
    timing: dict[str, float] | None
    backend_name: str
    warnings: tuple[str, ...] = field(default_factory=tuple)

    def has_warning(self, substring: str) -> bool:
        """Check if any warning contains the given substring."""
        return any(substring in w for w in self.warnings)
