"""Tests for sample-set validation and input parsing."""

import numpy as np
import pytest

from interpolation_pro.errors import InterpolationError, InvalidInput, NumericDegeneracy
from interpolation_pro.samples import UNIFORM_SPACING_TOLERANCE, SampleSet, parse_values


class TestValidation:

    def test_empty_rejected(self):
        with pytest.raises(InvalidInput):
            SampleSet.from_sequences([], [])

    def test_one_side_empty_rejected(self):
        with pytest.raises(InvalidInput):
            SampleSet.from_sequences([1, 2], [])

    def test_length_mismatch_rejected(self):
        with pytest.raises(InvalidInput, match="same length"):
            SampleSet.from_sequences([1, 2, 3], [1, 2])

    def test_non_numeric_rejected(self):
        with pytest.raises(InvalidInput):
            SampleSet.from_sequences([1, "a"], [1, 2])

    def test_nan_rejected(self):
        with pytest.raises(InvalidInput):
            SampleSet.from_sequences([1, float("nan")], [1, 2])

    def test_nested_rejected(self):
        with pytest.raises(InvalidInput):
            SampleSet.from_sequences([[1, 2], [3, 4]], [[1, 2], [3, 4]])

    @pytest.mark.parametrize("x, y", [("123", "456"), (b"12", b"34"), ([1, 2, 3], "456")])
    def test_text_rejected(self, x, y):
        with pytest.raises(InvalidInput, match="not text"):
            SampleSet.from_sequences(x, y)

    def test_single_sample_accepted(self):
        s = SampleSet.from_sequences([5], [7])
        assert s.n == 1
        assert s.x_span == 0

    def test_errors_share_base_class(self):
        assert issubclass(InvalidInput, InterpolationError)
        assert issubclass(NumericDegeneracy, InterpolationError)
        assert issubclass(NumericDegeneracy, ArithmeticError)
        assert issubclass(InterpolationError, ValueError)


class TestImmutability:

    def test_arrays_are_read_only(self, quadratic):
        with pytest.raises(ValueError):
            quadratic.x[0] = 99.0
        with pytest.raises(ValueError):
            quadratic.y[0] = 99.0

    def test_caller_data_is_copied(self):
        xs = np.array([0.0, 1.0, 2.0])
        s = SampleSet.from_sequences(xs, [1, 2, 3])
        xs[0] = 50.0
        assert s.x[0] == 0.0
        assert xs.flags.writeable


class TestProperties:

    def test_range(self):
        s = SampleSet.from_sequences([3, -1, 2], [0, 0, 0])
        assert s.x_min == -1
        assert s.x_max == 3
        assert s.x_span == 4

    def test_distinct(self, quadratic):
        assert quadratic.has_distinct_x()
        quadratic.require_distinct_x()

    def test_repeated_x_detected(self):
        s = SampleSet.from_sequences([1, 2, 1], [0, 1, 2])
        assert not s.has_distinct_x()
        with pytest.raises(NumericDegeneracy, match="repeated"):
            s.require_distinct_x()

    def test_uniform_spacing(self, quadratic):
        assert quadratic.is_uniformly_spaced()

    def test_float_step_counts_as_uniform(self):
        """0.1 steps accumulate rounding error well below the tolerance."""
        s = SampleSet.from_sequences([0.0, 0.1, 0.2, 0.3], [0, 1, 2, 3])
        assert s.is_uniformly_spaced()

    def test_non_uniform_spacing(self, uneven):
        assert not uneven.is_uniformly_spaced()

    def test_spacing_just_outside_tolerance(self):
        s = SampleSet.from_sequences([0.0, 1.0, 2.0 + 10 * UNIFORM_SPACING_TOLERANCE], [0, 1, 2])
        assert not s.is_uniformly_spaced()

    def test_pairs(self):
        s = SampleSet.from_sequences([0, 1], [2, 3])
        assert s.pairs() == [(0.0, 2.0), (1.0, 3.0)]


class TestParseValues:

    def test_commas(self):
        assert parse_values("0, 1, 2.5") == [0.0, 1.0, 2.5]

    def test_whitespace_and_trailing_comma(self):
        assert parse_values("  1 2,3,  ") == [1.0, 2.0, 3.0]

    def test_negative_and_exponent(self):
        assert parse_values("-1.5, 2e3") == [-1.5, 2000.0]

    def test_blank(self):
        assert parse_values("   ") == []

    def test_garbage(self):
        with pytest.raises(InvalidInput, match="abc"):
            parse_values("1, abc, 3")
