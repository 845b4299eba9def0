"""
Numerical thresholds and tolerance tiers.

The singularity threshold is the floor below which a pivot magnitude is
treated as zero by Gaussian elimination and LU decomposition. Tolerance
tiers describe how closely two computed results must agree; structural
predicates default to the EXACT tier.

Used by the algorithms, the test suite, and the linear system backends'
conditioning check.
"""

from dataclasses import dataclass

import numpy as np
from numpy.typing import ArrayLike


# A pivot whose magnitude does not exceed this value is treated as zero.
SINGULARITY_THRESHOLD = 1e-20

# Ratio min|pivot| / max|pivot| under which solvers attach an
# ill-conditioning warning to their result. The closed-form 2x2 and 3x3
# inverse also uses it as the near-singular bound |det| / max|a_ij|^n.
ILL_CONDITIONED_RATIO = 1e-12


@dataclass(frozen=True)
class ToleranceTier:
    """Tolerance specification for numerical comparison."""
    rtol: float
    atol: float
    name: str
    description: str

    def allclose(self, actual: ArrayLike, expected: ArrayLike) -> bool:
        """True if all elements agree within |a - e| <= atol + rtol * |e|."""
        return bool(np.allclose(actual, expected, rtol=self.rtol, atol=self.atol))


# Bitwise agreement (the default for structural predicates)
EXACT = ToleranceTier(
    rtol=0.0,
    atol=0.0,
    name='exact',
    description='Exact floating-point equality',
)

# Double precision direct methods on well-conditioned input
CPU_FP64 = ToleranceTier(
    rtol=1e-10,
    atol=1e-12,
    name='cpu_fp64',
    description='Double precision, well-conditioned',
)

# Double precision, ill-conditioned input
CPU_FP64_ILL_CONDITIONED = ToleranceTier(
    rtol=1e-4,
    atol=1e-6,
    name='cpu_fp64_ill_conditioned',
    description='Double precision, ill-conditioned (small pivot ratio)',
)


def select_tolerance(is_ill_conditioned: bool = False) -> ToleranceTier:
    """Select the comparison tier for a solve."""
    if is_ill_conditioned:
        return CPU_FP64_ILL_CONDITIONED
    return CPU_FP64
