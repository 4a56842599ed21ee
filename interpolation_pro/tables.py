from __future__ import annotations

from typing import Any

import numpy as np

from interpolation_pro.errors import NumericDegeneracy
from interpolation_pro.samples import FloatArray, SampleSet


def factorial(n: int) -> int:
    """n! computed recursively; 1 for every n <= 1."""
    if n <= 1:
        return 1
    return n * factorial(n - 1)


def divided_difference_table(x: Any, y: Any = None) -> FloatArray:
    """Newton divided-difference table for the sample set.

    Returns an ``n x n`` array with ``table[i, 0] = y_i`` and
    ``table[i, j] = (table[i+1, j-1] - table[i, j-1]) / (x[i+j] - x[i])``.
    Only row 0 holds the interpolation coefficients; cells with
    ``i + j >= n`` are left at zero.  Accepts a :class:`SampleSet` or a pair
    of sequences, and builds a fresh table on every call.
    """
    samples = SampleSet.coerce(x, y)
    samples.require_distinct_x()

    n = samples.n
    xs = samples.x
    table = np.zeros((n, n), dtype=np.float64)
    table[:, 0] = samples.y
    for j in range(1, n):
        for i in range(n - j):
            table[i, j] = (table[i + 1, j - 1] - table[i, j - 1]) / (xs[i + j] - xs[i])
    if not np.all(np.isfinite(table)):
        raise NumericDegeneracy("divided-difference table overflowed")
    return table


def newton_coefficients(samples: SampleSet) -> FloatArray:
    """Row 0 of the divided-difference table: f[x0], f[x0,x1], ..."""
    return divided_difference_table(samples)[0].copy()


def forward_difference_table(y: Any) -> list[FloatArray]:
    """All forward-difference columns of *y*.

    Element ``k`` is the array of k-th differences (length ``n - k``); element
    0 is a copy of *y* itself.  Each pass differences a new buffer, the input
    is never written to.
    """
    column = np.array(y, dtype=np.float64)
    columns = [column]
    for _ in range(1, len(column)):
        column = column[1:] - column[:-1]
        columns.append(column)
    return columns


def leading_forward_differences(y: Any) -> FloatArray:
    """[y_0, Δy_0, Δ²y_0, ..., Δ^(n-1) y_0]."""
    return np.array([col[0] for col in forward_difference_table(y)], dtype=np.float64)
