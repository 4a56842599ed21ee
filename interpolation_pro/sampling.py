from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Any, Mapping, Optional, Union

import numpy as np

from interpolation_pro.errors import InvalidInput
from interpolation_pro.methods import (
    InterpolationService,
    Method,
    MethodSelection,
    resolve_selection,
)
from interpolation_pro.samples import FloatArray, SampleSet

logger = logging.getLogger(__name__)

DEFAULT_STEPS: int = 100
# Number of leading grid points echoed to the debug log for an all-methods run.
_DEBUG_PREVIEW_POINTS: int = 5


@dataclass(frozen=True, slots=True, eq=False)
class SampledCurve:
    """Dense polyline for one method (or all four) plus errors vs. Lagrange.

    ``series`` and ``error_series`` always hold one array per sampled
    method, aligned with ``queries``.  ``values`` / ``errors`` give the bare
    array for a single-method curve and the whole mapping for an all-methods
    curve.
    """

    methods: tuple[Method, ...]
    queries: FloatArray
    series: Mapping[Method, FloatArray] = field(default_factory=dict)
    error_series: Mapping[Method, FloatArray] = field(default_factory=dict)

    def __post_init__(self) -> None:
        if not self.methods:
            raise ValueError("a sampled curve needs at least one method")
        for m in self.methods:
            if len(self.series[m]) != len(self.queries):
                raise ValueError(f"{m.display_name} series is misaligned with the queries")
            if len(self.error_series[m]) != len(self.queries):
                raise ValueError(f"{m.display_name} error series is misaligned with the queries")

    @property
    def is_all(self) -> bool:
        return len(self.methods) > 1

    @property
    def values(self) -> Union[FloatArray, Mapping[Method, FloatArray]]:
        return dict(self.series) if self.is_all else self.series[self.methods[0]]

    @property
    def errors(self) -> Union[FloatArray, Mapping[Method, FloatArray]]:
        return dict(self.error_series) if self.is_all else self.error_series[self.methods[0]]

    def __len__(self) -> int:
        return len(self.queries)


def query_grid(samples: SampleSet, n_steps: int = DEFAULT_STEPS) -> FloatArray:
    """``n_steps`` equal steps over [min(x), max(x)], both ends included.

    A zero-width range collapses to the single point ``min(x)``.
    """
    if int(n_steps) != n_steps or n_steps < 1:
        raise InvalidInput(f"n_steps must be a positive integer, got {n_steps}")
    x_min, x_max = samples.x_min, samples.x_max
    if x_max == x_min:
        return np.array([x_min], dtype=np.float64)
    return np.linspace(x_min, x_max, int(n_steps) + 1, dtype=np.float64)


class CurveSampler:

    def __init__(self, service: Optional[InterpolationService] = None) -> None:
        self._service = service if service is not None else InterpolationService()

    def sample(
        self,
        selection: MethodSelection,
        samples: SampleSet,
        n_steps: int = DEFAULT_STEPS,
    ) -> SampledCurve:
        methods = resolve_selection(selection)
        queries = query_grid(samples, n_steps)

        reference = np.asarray(
            self._service.evaluate(Method.LAGRANGE, samples, queries), dtype=np.float64
        )
        series: dict[Method, FloatArray] = {}
        errors: dict[Method, FloatArray] = {}
        for method in methods:
            if method is Method.LAGRANGE:
                values = reference
            else:
                values = np.asarray(
                    self._service.evaluate(method, samples, queries), dtype=np.float64
                )
            series[method] = values
            errors[method] = values - reference

        if len(methods) > 1 and logger.isEnabledFor(logging.DEBUG):
            for k in range(min(_DEBUG_PREVIEW_POINTS, len(queries))):
                logger.debug(
                    "x=%.2f: %s",
                    queries[k],
                    ", ".join(f"{m.display_name}={series[m][k]:.6f}" for m in methods),
                )

        return SampledCurve(methods=methods, queries=queries, series=series, error_series=errors)


def sample_curve(
    selection: MethodSelection, x: Any, y: Any = None, n_steps: int = DEFAULT_STEPS
) -> SampledCurve:
    """Sample *selection* (a method or ``"all"``) over the x-range of the data."""
    samples = SampleSet.coerce(x, y)
    return CurveSampler().sample(selection, samples, n_steps)
