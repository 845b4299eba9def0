"""
pytest configuration and shared fixtures.
"""

import pytest
import numpy as np

from pylinearalgebra.linalg.matrix import Matrix


@pytest.fixture
def rng():
    """Seeded random number generator for reproducible tests."""
    return np.random.default_rng(42)


@pytest.fixture
def reference_system():
    """Worked 3 x 3 system: det 6, x = (2, -1, 1)."""
    A = Matrix.of([
        [1.0, 2.0, 4.0],
        [3.0, 8.0, 14.0],
        [2.0, 6.0, 13.0],
    ])
    b = np.array([4.0, 12.0, 11.0])
    x = np.array([2.0, -1.0, 1.0])
    return A, b, x


@pytest.fixture
def well_conditioned_matrix(rng):
    """Random 6 x 6 matrix made diagonally dominant (safely invertible)."""
    n = 6
    a = rng.uniform(-1.0, 1.0, (n, n)) + n * np.eye(n)
    return Matrix.from_array(a)


@pytest.fixture
def singular_matrix():
    """4 x 4 matrix whose last row repeats the second."""
    return Matrix.of([
        [1.0, 2.0, 3.0, 4.0],
        [2.0, 1.0, 0.0, 1.0],
        [0.0, 1.0, 5.0, 2.0],
        [2.0, 1.0, 0.0, 1.0],
    ])
