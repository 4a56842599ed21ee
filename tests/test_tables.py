"""Tests for the difference tables and factorial."""

import numpy as np
import pytest

from interpolation_pro.errors import NumericDegeneracy
from interpolation_pro.tables import (
    divided_difference_table,
    factorial,
    forward_difference_table,
    leading_forward_differences,
    newton_coefficients,
)


class TestFactorial:

    def test_base_cases(self):
        assert factorial(0) == 1
        assert factorial(1) == 1

    def test_negative_is_one(self):
        assert factorial(-3) == 1

    def test_five(self):
        assert factorial(5) == 120

    def test_ten(self):
        assert factorial(10) == 3628800


class TestDividedDifferences:

    def test_quadratic_coefficients(self):
        table = divided_difference_table([0, 1, 2, 3], [1, 2, 5, 10])
        assert table.shape == (4, 4)
        np.testing.assert_allclose(table[0], [1.0, 1.0, 1.0, 0.0])

    def test_first_column_is_y(self):
        table = divided_difference_table([0, 1, 2, 3], [1, 2, 5, 10])
        np.testing.assert_array_equal(table[:, 0], [1, 2, 5, 10])

    def test_unused_cells_are_zero(self):
        table = divided_difference_table([0, 1, 2, 3], [1, 2, 5, 10])
        for i in range(4):
            for j in range(4):
                if i + j >= 4:
                    assert table[i, j] == 0.0

    def test_leading_entry_is_y0(self, uneven, random_samples):
        for s in (uneven, random_samples):
            assert divided_difference_table(s)[0][0] == s.y[0]

    def test_single_sample(self):
        table = divided_difference_table([5], [7])
        assert table.shape == (1, 1)
        assert table[0, 0] == 7

    def test_uneven_first_order(self):
        table = divided_difference_table([0, 2, 3], [1, 5, 4])
        assert table[0, 1] == pytest.approx(2.0)
        assert table[1, 1] == pytest.approx(-1.0)
        assert table[0, 2] == pytest.approx(-1.0)

    def test_repeated_x_signalled(self):
        with pytest.raises(NumericDegeneracy):
            divided_difference_table([1, 1, 2], [0, 1, 2])

    def test_fresh_table_each_call(self, quadratic):
        a = divided_difference_table(quadratic)
        a[0, 0] = 1000.0
        b = divided_difference_table(quadratic)
        assert b[0, 0] == 1.0

    def test_newton_coefficients_row(self, quadratic):
        np.testing.assert_allclose(newton_coefficients(quadratic), [1, 1, 1, 0])


class TestForwardDifferences:

    def test_columns(self):
        cols = forward_difference_table([1, 2, 5, 10])
        assert [list(c) for c in cols] == [[1, 2, 5, 10], [1, 3, 5], [2, 2], [0]]

    def test_leading(self):
        np.testing.assert_array_equal(leading_forward_differences([1, 2, 5, 10]), [1, 1, 2, 0])

    def test_input_untouched(self):
        y = np.array([1.0, 2.0, 5.0, 10.0])
        forward_difference_table(y)
        np.testing.assert_array_equal(y, [1.0, 2.0, 5.0, 10.0])

    def test_single_value(self):
        np.testing.assert_array_equal(leading_forward_differences([7]), [7])
