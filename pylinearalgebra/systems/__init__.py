"""
Square linear systems over numpy arrays.

Public API:
    solve(A, b, ...) -> LinearSystemSolution
    determinant(A) -> float
    inverse(A) -> ndarray

solve() handles:
    - Input validation
    - Design construction
    - Backend selection
    - Result wrapping

Example:
    >>> from pylinearalgebra.systems import solve
    >>> result = solve(A, b)
    >>> print(result.x)
    >>> print(result.summary())
"""

from pylinearalgebra.systems.design import LinearSystemDesign
from pylinearalgebra.systems.solution import LinearSystemSolution, LinearSystemParams
from pylinearalgebra.systems.solvers import solve, determinant, inverse

__all__ = [
    "solve",
    "determinant",
    "inverse",
    "LinearSystemDesign",
    "LinearSystemSolution",
    "LinearSystemParams",
]
