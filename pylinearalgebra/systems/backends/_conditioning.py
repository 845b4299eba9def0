"""Pivot-ratio conditioning check shared by the linear system backends."""

import warnings

import numpy as np
from numpy.typing import ArrayLike

from pylinearalgebra.core.compute.tolerances import ILL_CONDITIONED_RATIO


def pivot_ratio(pivots: ArrayLike) -> float:
    """min|pivot| / max|pivot| over the elimination pivots."""
    magnitudes = np.abs(np.asarray(pivots, dtype=np.float64))
    return float(magnitudes.min() / magnitudes.max())


def conditioning_warnings(ratio: float) -> list[str]:
    """
    Warn (and return the message) when the pivot ratio is tiny.

    Returns:
        List holding the warning message, or empty if well conditioned
    """
    if ratio >= ILL_CONDITIONED_RATIO:
        return []
    message = (
        f"Matrix is ill-conditioned: pivot ratio {ratio:.3e} is below "
        f"{ILL_CONDITIONED_RATIO:.0e}; the solution may be inaccurate"
    )
    warnings.warn(message, RuntimeWarning, stacklevel=3)
    return [message]
