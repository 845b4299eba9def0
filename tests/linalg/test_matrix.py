"""
Tests for Matrix.

Validates:
    - Factories, layouts and 1-based access
    - Live row/column views (aliasing contract)
    - In-place transpose via stride swap
    - Structural predicates (exact by default, tol on request)
    - Multiplication, addition and the pure operators
    - Elementary row operations
    - Determinant, inverse and transpose identities
    - Functional helpers and display
"""

import numpy as np
import pytest

from pylinearalgebra.core.compute.tolerances import CPU_FP64
from pylinearalgebra.core.exceptions import (
    DimensionError,
    SingularMatrixError,
    ValidationError,
)
from pylinearalgebra.core.shape import Size
from pylinearalgebra.linalg.formatting import NumberFormatter
from pylinearalgebra.linalg.matrix import Matrix
from pylinearalgebra.linalg.vector import Vector
from pylinearalgebra.storage.buffer import Layout, MatrixBuffer


def random_matrix(rng, n, m=None):
    """Diagonally dominant random matrix (invertible when square)."""
    m = n if m is None else m
    a = rng.uniform(-1.0, 1.0, (n, m))
    a[np.arange(min(n, m)), np.arange(min(n, m))] += n
    return Matrix.from_array(a)


# ═══════════════════════════════════════════════════════════════════════
# Construction and access
# ═══════════════════════════════════════════════════════════════════════


class TestConstruction:
    """Factories produce independent matrices of the requested size."""

    def test_of(self):
        m = Matrix.of([[1, 2, 3], [4, 5, 6]])
        assert m.size == Size(2, 3)
        assert (m.rows, m.cols) == (2, 3)
        assert m.at(2, 3) == 6.0

    def test_identity(self):
        np.testing.assert_array_equal(Matrix.identity(3).to_numpy(), np.eye(3))

    def test_zero_and_constant(self):
        assert Matrix.zero(2, 3).is_zero()
        np.testing.assert_array_equal(Matrix.constant(2, 2, 7.0).to_numpy(), np.full((2, 2), 7.0))

    def test_from_row_major_sequence(self):
        m = Matrix.from_row_major_sequence(2, 2, [1, 2, 3, 4])
        assert m == Matrix.of([[1, 2], [3, 4]])

    def test_from_row_major_sequence_wrong_count(self):
        with pytest.raises(DimensionError, match="exactly 2 x 2"):
            Matrix.from_row_major_sequence(2, 2, [1, 2, 3])

    @pytest.mark.parametrize("rows, cols", [(0, 2), (2, 0)])
    def test_invalid_size(self, rows, cols):
        with pytest.raises(ValidationError):
            Matrix.zero(rows, cols)

    def test_from_array_rejects_1d(self):
        with pytest.raises(DimensionError):
            Matrix.from_array([1.0, 2.0])

    def test_from_array_copies(self):
        a = np.eye(2)
        m = Matrix.from_array(a)
        a[0, 0] = 5.0
        assert m.at(1, 1) == 1.0

    def test_random_within_bounds(self, rng):
        values = Matrix.random(4, 5, 1.0, 2.0, rng=rng).to_numpy()
        assert values.shape == (4, 5)
        assert np.all((values >= 1.0) & (values < 2.0))

    def test_column_major_equals_row_major(self):
        rows = [[1, 2, 3], [4, 5, 6]]
        a = Matrix.from_array(rows)
        b = Matrix.from_array(rows, layout=Layout.COLUMN_MAJOR)
        assert b.layout is Layout.COLUMN_MAJOR
        assert a == b

    def test_from_buffer_shares_storage(self):
        m = Matrix.identity(2)
        alias = Matrix.from_buffer(m.buffer)
        alias.set_at(1, 2, 3.0)
        assert m.at(1, 2) == 3.0

    def test_from_buffer_rejects_out_of_bounds_addressing(self):
        with pytest.raises(IndexError):
            Matrix.from_buffer(MatrixBuffer(np.zeros(4), 3, 3, 0, 3, 1, Layout.ROW_MAJOR))


class TestAccess:
    """Indices are 1-based; out-of-range raises ValidationError."""

    @pytest.mark.parametrize("row, col", [(0, 1), (3, 1), (1, 0), (1, 4)])
    def test_out_of_range(self, row, col):
        with pytest.raises(ValidationError):
            Matrix.zero(2, 3).at(row, col)

    def test_copy_is_independent(self):
        m = Matrix.identity(2)
        c = m.copy()
        c.set_at(1, 1, 9.0)
        assert m.at(1, 1) == 1.0
        assert not c.buffer.shares_memory(m.buffer)


# ═══════════════════════════════════════════════════════════════════════
# Views
# ═══════════════════════════════════════════════════════════════════════


class TestViews:
    """Row and column vectors are live views of the matrix."""

    @pytest.fixture(params=[Layout.ROW_MAJOR, Layout.COLUMN_MAJOR])
    def matrix(self, request):
        return Matrix.from_array([[1, 2, 3], [4, 5, 6]], layout=request.param)

    def test_row_and_column_values(self, matrix):
        assert matrix.row_vector(2) == Vector.of(4, 5, 6)
        assert matrix.column_vector(3) == Vector.of(3, 6)

    def test_write_through_row_view(self, matrix):
        matrix.row_vector(1).multiply(10.0)
        assert matrix.row_vector(1) == Vector.of(10, 20, 30)
        assert matrix.column_vector(1) == Vector.of(10, 4)

    def test_matrix_writes_visible_in_view(self, matrix):
        column = matrix.column_vector(2)
        matrix.set_at(2, 2, -5.0)
        assert column.at(2) == -5.0

    def test_view_shares_storage(self, matrix):
        row = matrix.row_vector(1)
        assert row.shares_storage_with(matrix)
        assert not row.copy().shares_storage_with(matrix)

    def test_view_survives_transpose(self):
        m = Matrix.of([[1, 2], [3, 4]])
        row = m.row_vector(1)
        m.transpose()
        row.set_at(2, 20.0)
        # The former first row is now the first column
        assert m.at(2, 1) == 20.0


# ═══════════════════════════════════════════════════════════════════════
# Transpose
# ═══════════════════════════════════════════════════════════════════════


class TestTranspose:
    """transpose() works in place; transposed() copies."""

    def test_transpose_in_place(self):
        m = Matrix.of([[1, 2, 3], [4, 5, 6]])
        assert m.transpose() is None
        assert m == Matrix.of([[1, 4], [2, 5], [3, 6]])
        assert m.layout is Layout.COLUMN_MAJOR

    def test_transpose_twice_is_identity(self, rng):
        m = Matrix.random(3, 4, -1.0, 1.0, rng=rng)
        original = m.copy()
        m.transpose()
        m.transpose()
        assert m == original

    def test_transposed_leaves_original(self):
        m = Matrix.of([[1, 2], [3, 4]])
        t = m.transposed()
        assert t == Matrix.of([[1, 3], [2, 4]])
        assert m == Matrix.of([[1, 2], [3, 4]])

    def test_transpose_of_sum(self, rng):
        x = Matrix.random(3, 2, -1.0, 1.0, rng=rng)
        y = Matrix.random(3, 2, -1.0, 1.0, rng=rng)
        assert (x + y).transposed() == x.transposed() + y.transposed()

    def test_transpose_of_product(self, rng):
        x = Matrix.random(3, 4, -1.0, 1.0, rng=rng)
        z = Matrix.random(4, 2, -1.0, 1.0, rng=rng)
        assert (x @ z).transposed().is_close_to(z.transposed() @ x.transposed())


# ═══════════════════════════════════════════════════════════════════════
# Predicates
# ═══════════════════════════════════════════════════════════════════════


class TestPredicates:
    """Structural predicates, exact by default."""

    def test_square(self):
        assert Matrix.zero(3, 3).is_square()
        assert not Matrix.zero(2, 3).is_square()

    def test_identity(self):
        assert Matrix.identity(4).is_identity()
        assert not Matrix.zero(2, 3).is_identity()
        assert not Matrix.of([[1, 1e-300], [0, 1]]).is_identity()
        assert Matrix.of([[1, 1e-300], [0, 1]]).is_identity(tol=1e-12)

    def test_zero(self):
        assert Matrix.zero(2, 2).is_zero()
        assert not Matrix.identity(2).is_zero()

    def test_diagonal(self):
        assert Matrix.of([[1, 0], [0, 2]]).is_diagonal()
        assert Matrix.identity(3).is_diagonal()
        assert not Matrix.of([[1, 0], [0, 0]]).is_diagonal()
        assert not Matrix.of([[1, 3], [0, 2]]).is_diagonal()
        assert not Matrix.zero(2, 3).is_diagonal()

    def test_symmetrical(self):
        assert Matrix.of([[1, 2], [2, 1]]).is_symmetrical()
        assert not Matrix.of([[1, 2], [3, 1]]).is_symmetrical()

    def test_symmetrical_exact_vs_tolerance(self):
        m = Matrix.of([[1.0, 0.1 + 0.2], [0.3, 1.0]])
        assert not m.is_symmetrical()
        assert m.is_symmetrical(tol=1e-12)

    def test_triangular(self):
        upper = Matrix.of([[1, 2], [0, 3]])
        lower = Matrix.of([[1, 0], [2, 3]])
        assert upper.is_upper_triangular() and not upper.is_lower_triangular()
        assert lower.is_lower_triangular() and not lower.is_upper_triangular()
        assert upper.is_triangular() and lower.is_triangular()
        assert not Matrix.of([[1, 2], [3, 4]]).is_triangular()
        assert not Matrix.zero(2, 3).is_triangular()

    def test_orthogonal_permutation(self):
        assert Matrix.of([[0, 1, 0], [0, 0, 1], [1, 0, 0]]).is_orthogonal()

    def test_orthogonal_rotation_with_tolerance(self):
        theta = 0.7
        c, s = np.cos(theta), np.sin(theta)
        rotation = Matrix.of([[c, -s], [s, c]])
        assert rotation.is_orthogonal(tol=1e-12)
        assert not Matrix.of([[1, 1], [0, 1]]).is_orthogonal(tol=1e-12)

    def test_orthogonal_rows_of_rectangular_matrix(self):
        assert Matrix.of([[1, 0, 0], [0, 1, 0]]).is_orthogonal()

    def test_involutory(self):
        assert Matrix.of([[0, 1], [1, 0]]).is_involutory()
        assert Matrix.of([[1, 0], [0, -1]]).is_involutory()
        assert not Matrix.of([[2, 0], [0, 1]]).is_involutory()
        assert not Matrix.zero(2, 3).is_involutory()

    def test_invertible(self, singular_matrix, well_conditioned_matrix):
        assert well_conditioned_matrix.is_invertible()
        assert not singular_matrix.is_invertible()
        assert not Matrix.zero(2, 3).is_invertible()

    def test_is_close_to(self):
        assert Matrix.of([[0.1 + 0.2]]).is_close_to(Matrix.of([[0.3]]), CPU_FP64)
        with pytest.raises(DimensionError):
            Matrix.zero(2, 2).is_close_to(Matrix.zero(2, 3))


# ═══════════════════════════════════════════════════════════════════════
# Arithmetic
# ═══════════════════════════════════════════════════════════════════════


class TestArithmetic:
    """Products allocate; add/subtract/multiply_constant mutate."""

    def test_multiply_known(self):
        a = Matrix.of([[1, 2], [3, 4]])
        b = Matrix.of([[5, 6], [7, 8]])
        assert a.multiply(b) == Matrix.of([[19, 22], [43, 50]])

    def test_multiply_rectangular_matches_numpy(self, rng):
        a = Matrix.random(3, 5, -1.0, 1.0, rng=rng)
        b = Matrix.random(5, 2, -1.0, 1.0, rng=rng)
        product = a @ b
        assert product.size == Size(3, 2)
        np.testing.assert_allclose(product.to_numpy(), a.to_numpy() @ b.to_numpy(), rtol=1e-12)

    def test_multiply_dimension_mismatch(self):
        with pytest.raises(DimensionError, match="number of columns"):
            Matrix.zero(2, 3).multiply(Matrix.zero(2, 3))

    def test_multiply_mixed_layouts(self):
        a = Matrix.from_array([[1, 2], [3, 4]], layout=Layout.COLUMN_MAJOR)
        b = Matrix.of([[5, 6], [7, 8]])
        assert a @ b == Matrix.of([[19, 22], [43, 50]])

    def test_identity_is_neutral(self, rng):
        m = Matrix.random(3, 3, -1.0, 1.0, rng=rng)
        assert Matrix.identity(3) @ m == m
        assert m @ Matrix.identity(3) == m

    def test_multiply_vector(self):
        m = Matrix.of([[1, 2], [3, 4], [5, 6]])
        assert m @ Vector.of(1, 1) == Vector.of(3, 7, 11)
        with pytest.raises(DimensionError):
            m.multiply_vector(Vector.of(1, 1, 1))

    def test_add_subtract_in_place(self):
        m = Matrix.of([[1, 2], [3, 4]])
        assert m.add(Matrix.identity(2)) is None
        assert m == Matrix.of([[2, 2], [3, 5]])
        m.subtract(Matrix.constant(2, 2, 1.0))
        assert m == Matrix.of([[1, 1], [2, 4]])

    def test_add_size_mismatch(self):
        with pytest.raises(DimensionError, match="different size"):
            Matrix.zero(2, 2).add(Matrix.zero(3, 2))

    def test_multiply_constant(self):
        m = Matrix.of([[1, 2]])
        m.multiply_constant(3)
        assert m == Matrix.of([[3, 6]])

    def test_operators_are_pure(self):
        a = Matrix.of([[1, 2], [3, 4]])
        b = Matrix.identity(2)
        assert a + b == Matrix.of([[2, 2], [3, 5]])
        assert a - b == Matrix.of([[0, 2], [3, 3]])
        assert 2 * a == a * 2 == Matrix.of([[2, 4], [6, 8]])
        assert a == Matrix.of([[1, 2], [3, 4]])

    def test_unhashable(self):
        with pytest.raises(TypeError):
            hash(Matrix.identity(2))


# ═══════════════════════════════════════════════════════════════════════
# Elementary row operations
# ═══════════════════════════════════════════════════════════════════════


class TestRowOperations:
    """Row operations mutate in place and validate their arguments."""

    def test_multiply_row(self):
        m = Matrix.of([[1, 2], [3, 4]])
        m.multiply_row(2, 0.5)
        assert m == Matrix.of([[1, 2], [1.5, 2]])

    def test_multiply_row_by_zero_rejected(self):
        with pytest.raises(ValidationError, match="nonzero"):
            Matrix.identity(2).multiply_row(1, 0.0)

    def test_swap_rows(self):
        m = Matrix.of([[1, 2], [3, 4], [5, 6]])
        m.swap_rows(1, 3)
        assert m == Matrix.of([[5, 6], [3, 4], [1, 2]])

    def test_swap_same_row_is_noop(self):
        m = Matrix.of([[1, 2], [3, 4]])
        m.swap_rows(2, 2)
        assert m == Matrix.of([[1, 2], [3, 4]])

    def test_swap_rows_column_major(self):
        m = Matrix.from_array([[1, 2], [3, 4]], layout=Layout.COLUMN_MAJOR)
        m.swap_rows(1, 2)
        assert m == Matrix.of([[3, 4], [1, 2]])

    def test_add_multiple_of_row(self):
        m = Matrix.of([[1, 2], [3, 4]])
        m.add_multiple_of_row(2, -3.0, 1)
        assert m == Matrix.of([[1, 2], [0, -2]])

    def test_add_multiple_of_same_row_rejected(self):
        with pytest.raises(ValidationError, match="itself"):
            Matrix.identity(2).add_multiple_of_row(1, 2.0, 1)

    def test_row_index_validated(self):
        with pytest.raises(ValidationError):
            Matrix.identity(2).swap_rows(1, 3)


# ═══════════════════════════════════════════════════════════════════════
# Determinant
# ═══════════════════════════════════════════════════════════════════════


class TestDeterminant:
    """Closed forms for 2 x 2 and 3 x 3, triangular product, LU otherwise."""

    def test_two_by_two(self):
        assert Matrix.of([[3, 8], [4, 6]]).determinant() == -14.0

    def test_three_by_three(self):
        assert Matrix.of([[6, 1, 1], [4, -2, 5], [2, 8, 7]]).determinant() == -306.0

    def test_reference_system(self, reference_system):
        A, _, _ = reference_system
        assert A.determinant() == 6.0

    def test_one_by_one(self):
        assert Matrix.of([[-4.5]]).determinant() == -4.5

    def test_triangular_is_diagonal_product(self):
        m = Matrix.of([
            [2, 9, 9, 9],
            [0, 3, 9, 9],
            [0, 0, -1, 9],
            [0, 0, 0, 0.5],
        ])
        assert m.determinant() == -3.0

    def test_singular_is_zero(self, singular_matrix):
        assert singular_matrix.determinant() == 0.0

    def test_non_square(self):
        with pytest.raises(DimensionError):
            Matrix.zero(3, 2).determinant()

    def test_identity(self):
        for n in range(1, 7):
            assert Matrix.identity(n).determinant() == 1.0

    @pytest.mark.parametrize("n", [2, 3, 5, 8])
    def test_transpose_invariant(self, rng, n):
        m = random_matrix(rng, n)
        assert m.transposed().determinant() == pytest.approx(m.determinant(), rel=1e-12)

    @pytest.mark.parametrize("n", [2, 3, 5])
    def test_product_rule(self, rng, n):
        a, b = random_matrix(rng, n), random_matrix(rng, n)
        assert (a @ b).determinant() == pytest.approx(a.determinant() * b.determinant(), rel=1e-10)

    @pytest.mark.parametrize("n", [2, 3, 6])
    def test_inverse_determinant(self, rng, n):
        m = random_matrix(rng, n)
        assert m.invert().determinant() == pytest.approx(1.0 / m.determinant(), rel=1e-10)

    def test_row_swap_flips_sign(self, well_conditioned_matrix):
        det = well_conditioned_matrix.determinant()
        well_conditioned_matrix.swap_rows(1, 4)
        assert well_conditioned_matrix.determinant() == pytest.approx(-det, rel=1e-12)

    def test_add_multiple_of_row_preserves(self, well_conditioned_matrix):
        det = well_conditioned_matrix.determinant()
        well_conditioned_matrix.add_multiple_of_row(2, 0.75, 5)
        assert well_conditioned_matrix.determinant() == pytest.approx(det, rel=1e-12)

    def test_multiply_row_scales(self, well_conditioned_matrix):
        det = well_conditioned_matrix.determinant()
        well_conditioned_matrix.multiply_row(3, -2.0)
        assert well_conditioned_matrix.determinant() == pytest.approx(-2.0 * det, rel=1e-12)


# ═══════════════════════════════════════════════════════════════════════
# Inverse
# ═══════════════════════════════════════════════════════════════════════


class TestInverse:
    """Adjugate for small matrices, LU columns otherwise."""

    def test_two_by_two(self):
        inverse = Matrix.of([[4, 7], [2, 6]]).invert()
        np.testing.assert_allclose(inverse.to_numpy(), [[0.6, -0.7], [-0.2, 0.4]])

    def test_three_by_three(self):
        m = Matrix.of([[2, 0, 0], [0, 4, 0], [0, 0, 8]])
        assert m.invert() == Matrix.of([[0.5, 0, 0], [0, 0.25, 0], [0, 0, 0.125]])

    @pytest.mark.parametrize("n", [2, 3, 4, 7])
    def test_inverse_times_matrix_is_identity(self, rng, n):
        m = random_matrix(rng, n)
        assert (m.invert() @ m).is_identity(tol=1e-12)
        assert (m @ m.invert()).is_identity(tol=1e-12)

    @pytest.mark.parametrize("n", [2, 3, 5])
    def test_double_inverse(self, rng, n):
        m = random_matrix(rng, n)
        assert m.invert().invert().is_close_to(m)

    @pytest.mark.parametrize("n", [2, 3, 5])
    def test_scaled_inverse(self, rng, n):
        m = random_matrix(rng, n)
        assert (m * 4.0).invert().is_close_to(m.invert() * 0.25)

    @pytest.mark.parametrize("n", [2, 3, 5])
    def test_transpose_inverse_commute(self, rng, n):
        m = random_matrix(rng, n)
        assert m.transposed().invert().is_close_to(m.invert().transposed())

    def test_leaves_original_unchanged(self, well_conditioned_matrix):
        original = well_conditioned_matrix.copy()
        well_conditioned_matrix.invert()
        assert well_conditioned_matrix == original

    def test_singular_two_by_two(self):
        with pytest.raises(SingularMatrixError, match="singular"):
            Matrix.of([[1, 2], [2, 4]]).invert()

    def test_singular_three_by_three(self):
        with pytest.raises(SingularMatrixError):
            Matrix.of([[1, 2, 3], [4, 5, 6], [7, 8, 9]]).invert()

    def test_singular_large(self, singular_matrix):
        with pytest.raises(SingularMatrixError):
            singular_matrix.invert()

    def test_nearly_singular_warns(self):
        with pytest.warns(RuntimeWarning, match="nearly singular"):
            Matrix.of([[1.0, 1.0], [1.0, 1.0 + 1e-14]]).invert()

    def test_non_square(self):
        with pytest.raises(DimensionError):
            Matrix.zero(2, 3).invert()


# ═══════════════════════════════════════════════════════════════════════
# Functional helpers and display
# ═══════════════════════════════════════════════════════════════════════


class TestFunctional:
    """Helpers visit 1-based positions in row-major order."""

    def test_transform(self):
        m = Matrix.zero(2, 3)
        m.transform(lambda p, v: p.row * 10 + p.col)
        assert m == Matrix.of([[11, 12, 13], [21, 22, 23]])

    def test_populate_row_major(self):
        counter = iter(range(1, 5))
        m = Matrix.zero(2, 2, layout=Layout.COLUMN_MAJOR)
        m.populate(lambda: next(counter))
        assert m == Matrix.of([[1, 2], [3, 4]])

    def test_for_each(self):
        seen = []
        Matrix.of([[1, 2], [3, 4]]).for_each(lambda p, v: seen.append((p.row, p.col, v)))
        assert seen == [(1, 1, 1.0), (1, 2, 2.0), (2, 1, 3.0), (2, 2, 4.0)]

    def test_any_match(self):
        m = Matrix.of([[1, 0], [0, 1]])
        assert m.any_match(lambda p, v: p.is_above_diagonal and v == 0.0)
        assert not m.any_match(lambda p, v: v < 0)

    def test_to_string(self):
        text = Matrix.of([[1, 2], [3, 4]]).to_string(NumberFormatter.compact_no_decimals())
        assert text == "1 2\n3 4\n"

    def test_str_pretty(self):
        assert str(Matrix.of([[1000, -2]])) == "  1,000.0      -2.0\n"

    def test_repr(self):
        assert repr(Matrix.zero(2, 3)) == "Matrix(2 x 3, layout=ROW_MAJOR)"
