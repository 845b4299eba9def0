"""
LU backend for linear systems.

Factors A once with Doolittle LU and partial pivoting, then solves by
forward and backward substitution. The determinant comes from the same
factorization at no extra cost.
"""

from typing import Any

import numpy as np

from pylinearalgebra.core.compute.timing import Timer
from pylinearalgebra.core.result import Result
from pylinearalgebra.decomposition.lu import lu_decompose
from pylinearalgebra.systems.backends._conditioning import conditioning_warnings, pivot_ratio
from pylinearalgebra.systems.design import LinearSystemDesign
from pylinearalgebra.systems.solution import LinearSystemParams


class LUBackend:
    """
    Backend using the LU decomposition.

    Turns a LinearSystemDesign into a Result[LinearSystemParams].
    """

    @property
    def name(self) -> str:
        return 'lu'

    def solve(self, design: LinearSystemDesign) -> Result[LinearSystemParams]:
        """
        Solve A x = b via P A = L U.

        Algorithm:
            1. Decompose P A = L U
            2. Solve L y = P b, then U x = y
            3. det(A) = sign x product of U's diagonal

        Raises:
            SingularMatrixError: If A is singular
        """
        timer = Timer()
        timer.start()

        with timer.section('decomposition'):
            lu = lu_decompose(design.coefficient_matrix())

        with timer.section('substitution'):
            x = lu.solve(design.rhs_vector()).to_numpy()

        with timer.section('determinant'):
            determinant = lu.determinant()

        timer.stop()

        ratio = pivot_ratio(np.diag(lu.lu.to_numpy()))
        warnings_list = conditioning_warnings(ratio)

        info: dict[str, Any] = {
            'method': 'lu',
            'pivots': lu.pivots,
            'sign': lu.sign,
        }

        return Result(
            params=LinearSystemParams(x=x, determinant=determinant, pivot_ratio=ratio),
            info=info,
            timing=timer.result(),
            backend_name=self.name,
            warnings=tuple(warnings_list),
        )
