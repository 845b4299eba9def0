"""
Linear system solution types.

Contains the parameter payload and user-facing solution wrapper.
"""

from dataclasses import dataclass
from typing import Any, TYPE_CHECKING

import numpy as np
from numpy.typing import NDArray

from pylinearalgebra.core.result import Result
from pylinearalgebra.linalg.vector import Vector

if TYPE_CHECKING:
    from pylinearalgebra.systems.design import LinearSystemDesign


@dataclass(frozen=True)
class LinearSystemParams:
    """
    Parameter payload for a solved linear system.

    This is the immutable data computed by backends.
    """
    x: NDArray[np.floating[Any]]
    determinant: float
    pivot_ratio: float


@dataclass
class LinearSystemSolution:
    """
    User-facing linear system results.

    Wraps the backend Result and provides accessors for the solution and
    its residual diagnostics.
    """
    _result: Result[LinearSystemParams]
    _design: 'LinearSystemDesign'

    # Cached computations
    _residuals: NDArray[np.floating[Any]] | None = None

    @property
    def x(self) -> NDArray[np.floating[Any]]:
        return self._result.params.x

    @property
    def solution_vector(self) -> Vector:
        """x as a new Vector."""
        return Vector.from_array(self.x)

    @property
    def determinant(self) -> float:
        return self._result.params.determinant

    @property
    def pivot_ratio(self) -> float:
        """min|pivot| / max|pivot| of the elimination (1.0 is best)."""
        return self._result.params.pivot_ratio

    @property
    def residuals(self) -> NDArray[np.floating[Any]]:
        """b - A x."""
        if self._residuals is None:
            self._residuals = self._design.b - self._design.A @ self.x
        return self._residuals

    @property
    def residual_norm(self) -> float:
        """Euclidean norm of the residuals."""
        return float(np.linalg.norm(self.residuals))

    @property
    def method(self) -> str:
        return self._result.info['method']

    @property
    def info(self) -> dict[str, Any]:
        return self._result.info

    @property
    def timing(self) -> dict[str, float] | None:
        return self._result.timing

    @property
    def backend_name(self) -> str:
        return self._result.backend_name

    @property
    def warnings(self) -> tuple[str, ...]:
        return self._result.warnings

    def summary(self) -> str:
        """Plain-text report of the solve."""
        lines = [
            "Linear System Results",
            "=" * 60,
            f"Equations: {self._design.n}",
            f"Method: {self.method}",
            f"Determinant: {self.determinant:.6g}",
            f"Pivot ratio: {self.pivot_ratio:.3e}",
            f"Residual norm: {self.residual_norm:.3e}",
            "",
            "Solution:",
            "-" * 60,
            f"{'':>8} {'x':>16} {'Residual':>14}",
        ]
        for i, (value, residual) in enumerate(zip(self.x, self.residuals), start=1):
            lines.append(f"{'x' + str(i):>8} {value:>16.8g} {residual:>14.3e}")

        if self.warnings:
            lines.append("")
            lines.append("Warnings:")
            for w in self.warnings:
                lines.append(f"  {w}")

        if self.timing:
            lines.append("")
            lines.append(f"Computed in {self.timing['total_seconds']:.4f}s")

        return "\n".join(lines)
