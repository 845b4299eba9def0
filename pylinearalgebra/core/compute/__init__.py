"""
Shared compute infrastructure for pylinearalgebra.

Submodules:
    timing: Execution timing utilities
    tolerances: Singularity threshold and comparison tolerance tiers
"""

from pylinearalgebra.core.compute.timing import Timer, timed
from pylinearalgebra.core.compute.tolerances import (
    ToleranceTier,
    EXACT,
    CPU_FP64,
    CPU_FP64_ILL_CONDITIONED,
    SINGULARITY_THRESHOLD,
    ILL_CONDITIONED_RATIO,
    select_tolerance,
)

__all__ = [
    # Timing
    "Timer",
    "timed",
    # Tolerances
    "ToleranceTier",
    "EXACT",
    "CPU_FP64",
    "CPU_FP64_ILL_CONDITIONED",
    "SINGULARITY_THRESHOLD",
    "ILL_CONDITIONED_RATIO",
    "select_tolerance",
]
