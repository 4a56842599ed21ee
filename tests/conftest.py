"""Shared fixtures for interpolation tests."""

import random

import numpy as np
import pytest

from interpolation_pro.samples import SampleSet


@pytest.fixture
def rng():
    """Deterministic RNG for reproducible tests."""
    return random.Random(42)


@pytest.fixture
def quadratic():
    """y = x^2 + 1 at x = 0, 1, 2, 3."""
    return SampleSet.from_sequences([0, 1, 2, 3], [1, 2, 5, 10])


@pytest.fixture
def uneven():
    """Distinct but unevenly spaced x-values."""
    return SampleSet.from_sequences([-2.0, -0.5, 0.3, 1.7, 2.2, 4.0],
                                    [3.1, -1.2, 0.4, 2.8, -0.7, 1.5])


@pytest.fixture
def single():
    return SampleSet.from_sequences([5], [7])


@pytest.fixture
def random_samples(rng):
    """Eight unevenly spaced samples with random y-values."""
    xs = sorted(rng.uniform(-3, 3) for _ in range(8))
    ys = [rng.uniform(-5, 5) for _ in range(8)]
    return SampleSet.from_sequences(xs, ys)


@pytest.fixture
def dense_queries():
    return np.linspace(-2.0, 4.0, 37)
