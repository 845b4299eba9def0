"""
Gauss-Jordan backend for linear systems.

Reduces the augmented matrix [A | b] to reduced row echelon form; the last
column is then the solution.
"""

from typing import Any

import numpy as np

from pylinearalgebra.core.compute.timing import Timer
from pylinearalgebra.core.result import Result
from pylinearalgebra.linalg.elimination import gaussian_elimination, jordan_reduction
from pylinearalgebra.systems.backends._conditioning import conditioning_warnings, pivot_ratio
from pylinearalgebra.systems.design import LinearSystemDesign
from pylinearalgebra.systems.solution import LinearSystemParams


class GaussJordanBackend:
    """
    Backend reducing the augmented matrix.

    Turns a LinearSystemDesign into a Result[LinearSystemParams].
    """

    @property
    def name(self) -> str:
        return 'gauss_jordan'

    def solve(self, design: LinearSystemDesign) -> Result[LinearSystemParams]:
        """
        Solve A x = b by Gauss-Jordan elimination of [A | b].

        Raises:
            SingularMatrixError: If A is singular
        """
        timer = Timer()
        timer.start()

        n = design.n
        augmented = design.augmented()

        with timer.section('elimination'):
            gaussian_elimination(augmented)
        pivots = [augmented.at(k, k) for k in range(1, n + 1)]

        with timer.section('back_substitution'):
            jordan_reduction(augmented)
            x = augmented.column_vector(n + 1).to_numpy()

        with timer.section('determinant'):
            determinant = design.coefficient_matrix().determinant()

        timer.stop()

        ratio = pivot_ratio(pivots)
        warnings_list = conditioning_warnings(ratio)

        info: dict[str, Any] = {
            'method': 'gauss_jordan',
            'echelon_pivots': tuple(pivots),
        }

        return Result(
            params=LinearSystemParams(x=np.asarray(x), determinant=determinant, pivot_ratio=ratio),
            info=info,
            timing=timer.result(),
            backend_name=self.name,
            warnings=tuple(warnings_list),
        )
