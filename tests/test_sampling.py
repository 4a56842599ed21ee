"""Tests for the curve sampler."""

import logging

import numpy as np
import pytest

from interpolation_pro.errors import InvalidInput, NumericDegeneracy
from interpolation_pro.methods import ALL, Method
from interpolation_pro.samples import SampleSet
from interpolation_pro.sampling import CurveSampler, SampledCurve, query_grid, sample_curve


class TestQueryGrid:

    def test_default_hundred_steps(self, quadratic):
        q = query_grid(quadratic)
        assert len(q) == 101
        assert q[0] == 0.0
        assert q[-1] == 3.0
        np.testing.assert_allclose(np.diff(q), 0.03)

    def test_custom_steps(self, quadratic):
        assert len(query_grid(quadratic, 10)) == 11

    def test_unsorted_input_uses_range(self):
        s = SampleSet.from_sequences([3, 0, 1], [0, 0, 0])
        q = query_grid(s, 3)
        np.testing.assert_array_equal(q, [0, 1, 2, 3])

    def test_zero_width_range_single_point(self, single):
        np.testing.assert_array_equal(query_grid(single), [5.0])

    def test_bad_steps(self, quadratic):
        with pytest.raises(InvalidInput):
            query_grid(quadratic, 0)
        with pytest.raises(InvalidInput):
            query_grid(quadratic, 2.5)


class TestSingleMethod:

    def test_shape(self, quadratic):
        curve = sample_curve(Method.NEWTON_DIVIDED, quadratic)
        assert isinstance(curve, SampledCurve)
        assert not curve.is_all
        assert len(curve) == 101
        assert curve.values.shape == (101,)
        assert curve.errors.shape == (101,)

    def test_values_follow_method(self, quadratic):
        curve = sample_curve("bezier", [0, 1, 2, 3], [1, 2, 5, 10], n_steps=2)
        np.testing.assert_allclose(curve.queries, [0.0, 1.5, 3.0])
        np.testing.assert_allclose(curve.values, [1.0, 4.0, 10.0])

    def test_errors_relative_to_lagrange(self, quadratic):
        curve = sample_curve(Method.BEZIER, quadratic, n_steps=2)
        np.testing.assert_allclose(curve.errors, [0.0, 0.75, 0.0], atol=1e-12)

    def test_lagrange_error_is_zero(self, uneven):
        curve = sample_curve(Method.LAGRANGE, uneven)
        assert np.all(curve.errors == 0.0)

    def test_polynomial_errors_vanish(self, uneven):
        for m in (Method.NEWTON_DIVIDED, Method.NEWTON_FORWARD):
            curve = sample_curve(m, uneven)
            np.testing.assert_allclose(curve.errors, 0.0, atol=1e-9)


class TestAllMethods:

    def test_parallel_series(self, quadratic):
        curve = sample_curve(ALL, quadratic)
        assert curve.is_all
        assert curve.methods == tuple(Method)
        assert set(curve.values) == set(Method)
        assert set(curve.errors) == set(Method)
        for m in Method:
            assert curve.values[m].shape == curve.queries.shape

    def test_matches_single_runs(self, uneven):
        both = sample_curve(ALL, uneven, n_steps=20)
        for m in Method:
            alone = sample_curve(m, uneven, n_steps=20)
            assert np.array_equal(both.series[m], alone.values)
            assert np.array_equal(both.error_series[m], alone.errors)

    def test_debug_preview_logged(self, quadratic, caplog):
        with caplog.at_level(logging.DEBUG, logger="interpolation_pro.sampling"):
            CurveSampler().sample(ALL, quadratic)
        preview = [r for r in caplog.records if r.name == "interpolation_pro.sampling"]
        assert len(preview) == 5
        assert "Lagrange=" in preview[0].getMessage()
        assert "Bezier=" in preview[0].getMessage()


class TestDegenerateRange:

    @pytest.mark.parametrize("selection", [ALL, *Method])
    def test_single_point(self, single, selection):
        curve = sample_curve(selection, single)
        assert len(curve) == 1
        np.testing.assert_array_equal(curve.queries, [5.0])

    def test_single_point_values(self, single):
        curve = sample_curve(ALL, single)
        for m in Method:
            np.testing.assert_array_equal(curve.series[m], [7.0])

    def test_repeated_x_only(self):
        """All x equal with several samples: the Lagrange baseline is undefined."""
        s = SampleSet.from_sequences([2.0, 2.0], [1.0, 3.0])
        with pytest.raises(NumericDegeneracy):
            sample_curve(Method.BEZIER, s)


class TestSampledCurveContainer:

    def test_misaligned_series_rejected(self):
        q = np.array([0.0, 1.0])
        with pytest.raises(ValueError):
            SampledCurve(methods=(Method.LAGRANGE,), queries=q,
                         series={Method.LAGRANGE: np.zeros(3)},
                         error_series={Method.LAGRANGE: np.zeros(2)})

    def test_needs_a_method(self):
        with pytest.raises(ValueError):
            SampledCurve(methods=(), queries=np.zeros(1))
