"""
Interpolation methods.

1.  Lagrange                     sum of y_i * L_i(x)
2.  Newton divided differences   Horner-style sum over the divided-difference row
3.  Newton forward differences   u = (x - x0)/h; falls back to (2) when spacing is not uniform
4.  Bezier (De Casteljau)        positional blend of the control points (i/(n-1), y_i)

Methods 1-3 interpolate the unique degree n-1 polynomial through the
samples.  Method 4 is a Bezier curve over the y-values: it reproduces the
first and last sample only.
"""

from __future__ import annotations

import logging
from abc import ABC, abstractmethod
from enum import Enum
from typing import Any, Final, Union

import numpy as np

from interpolation_pro.errors import InvalidInput, NumericDegeneracy
from interpolation_pro.samples import UNIFORM_SPACING_TOLERANCE, FloatArray, SampleSet
from interpolation_pro.tables import divided_difference_table

logger = logging.getLogger(__name__)


class Method(str, Enum):
    LAGRANGE = "lagrange"
    NEWTON_DIVIDED = "newton_divided"
    NEWTON_FORWARD = "newton_forward"
    BEZIER = "bezier"

    @property
    def display_name(self) -> str:
        return _DISPLAY_NAMES[self]

    @classmethod
    def parse(cls, value: Union[str, Method]) -> Method:
        if isinstance(value, Method):
            return value
        key = str(value).strip().lower().replace("-", "_").replace(" ", "_")
        key = _ALIASES.get(key, key)
        try:
            return cls(key)
        except ValueError as exc:
            raise InvalidInput(f"Unknown interpolation method: {value!r}") from exc


_DISPLAY_NAMES: dict[Method, str] = {
    Method.LAGRANGE: "Lagrange",
    Method.NEWTON_DIVIDED: "Newton Divided",
    Method.NEWTON_FORWARD: "Newton Forward",
    Method.BEZIER: "Bezier",
}

# Short tags accepted alongside the full names.
_ALIASES: dict[str, str] = {
    "divided": "newton_divided",
    "forward": "newton_forward",
}

# Selector meaning "every method at once".
ALL: Final = "all"

MethodSelection = Union[Method, str]


def resolve_selection(selection: MethodSelection) -> tuple[Method, ...]:
    """Expand a selector into the methods it names, in canonical order."""
    if isinstance(selection, str) and not isinstance(selection, Method) \
            and selection.strip().lower() == ALL:
        return tuple(Method)
    return (Method.parse(selection),)


def is_all(selection: MethodSelection) -> bool:
    return len(resolve_selection(selection)) > 1


# ===========================================================================
# Abstract base interpolator
# ===========================================================================

class Interpolator(ABC):
    method: Method

    def evaluate(self, samples: SampleSet, query: Any) -> Union[float, FloatArray]:
        """Interpolated value at *query* (a float, or an array of floats).

        Scalars come back as ``float``; arrays keep their shape.  A result
        that is not finite raises :class:`NumericDegeneracy`.
        """
        try:
            q = np.asarray(query, dtype=np.float64)
        except (TypeError, ValueError) as exc:
            raise InvalidInput(f"query must be numeric, got {query!r}") from exc
        if not np.all(np.isfinite(q)):
            raise InvalidInput("query values must be finite")

        with np.errstate(divide="ignore", over="ignore", invalid="ignore"):
            result = self._evaluate(samples, q)
        if not np.all(np.isfinite(result)):
            raise NumericDegeneracy(
                f"{self.method.display_name} interpolation produced a non-finite value"
            )
        return float(result) if result.ndim == 0 else result

    @abstractmethod
    def _evaluate(self, samples: SampleSet, q: FloatArray) -> FloatArray:
        raise NotImplementedError


# ===========================================================================
# Lagrange
# ===========================================================================

class LagrangeInterpolator(Interpolator):
    method = Method.LAGRANGE

    def _evaluate(self, samples: SampleSet, q: FloatArray) -> FloatArray:
        samples.require_distinct_x()
        xs, ys = samples.x, samples.y
        n = samples.n

        result = np.zeros_like(q)
        for i in range(n):
            term = np.full_like(q, ys[i])
            for j in range(n):
                if j != i:
                    term = term * ((q - xs[j]) / (xs[i] - xs[j]))
            result = result + term
        return result


# ===========================================================================
# Newton divided differences
# ===========================================================================

class NewtonDividedInterpolator(Interpolator):
    method = Method.NEWTON_DIVIDED

    def _evaluate(self, samples: SampleSet, q: FloatArray) -> FloatArray:
        table = divided_difference_table(samples)
        xs = samples.x

        result = np.full_like(q, table[0, 0])
        product = np.ones_like(q)
        for i in range(1, samples.n):
            product = product * (q - xs[i - 1])
            result = result + table[0, i] * product
        return result


# ===========================================================================
# Newton forward differences
# ===========================================================================

class NewtonForwardInterpolator(Interpolator):
    """Gregory-Newton forward formula for equally spaced x-values.

    When the spacing is not uniform within *tolerance* the evaluation is
    handed to :class:`NewtonDividedInterpolator` unchanged, so the result is
    exactly what that method returns.
    """

    method = Method.NEWTON_FORWARD

    def __init__(self, tolerance: float = UNIFORM_SPACING_TOLERANCE) -> None:
        self.tolerance = tolerance
        self._fallback = NewtonDividedInterpolator()

    def uses_fallback(self, samples: SampleSet) -> bool:
        return not samples.is_uniformly_spaced(self.tolerance)

    def _evaluate(self, samples: SampleSet, q: FloatArray) -> FloatArray:
        samples.require_distinct_x()
        if self.uses_fallback(samples):
            logger.debug("x-values not equally spaced; using Newton divided differences")
            return self._fallback._evaluate(samples, q)

        xs, ys = samples.x, samples.y
        n = samples.n
        result = np.full_like(q, ys[0])
        if n == 1:
            return result

        h = xs[1] - xs[0]
        u = (q - xs[0]) / h
        diffs = np.array(ys, dtype=np.float64)
        u_term = np.ones_like(q)
        fact = 1
        for i in range(1, n):
            diffs = diffs[1:] - diffs[:-1]
            u_term = u_term * (u - (i - 1))
            fact *= i
            result = result + (u_term * diffs[0]) / fact
        return result


# ===========================================================================
# Bezier / De Casteljau
# ===========================================================================

class BezierInterpolator(Interpolator):
    method = Method.BEZIER

    @staticmethod
    def control_points(samples: SampleSet) -> list[tuple[float, float]]:
        """(i/(n-1), y_i) for every sample; a single sample sits at 0."""
        n = samples.n
        if n < 2:
            return [(0.0, float(samples.y[0]))]
        return [(i / (n - 1), float(samples.y[i])) for i in range(n)]

    @staticmethod
    def parameter(samples: SampleSet, q: FloatArray) -> FloatArray:
        """Map query x onto t in [0, 1] using the sample x-range."""
        span = samples.x_span
        if span == 0:
            raise NumericDegeneracy("Bezier parameter undefined: all x-values are equal")
        return (q - samples.x_min) / span

    def _evaluate(self, samples: SampleSet, q: FloatArray) -> FloatArray:
        n = samples.n
        if n < 2:
            return np.full_like(q, samples.y[0])

        t = self.parameter(samples, q)
        pts = np.asarray(self.control_points(samples), dtype=np.float64)
        shape = (n,) + (1,) * t.ndim
        px = pts[:, 0].reshape(shape) + np.zeros_like(t)
        py = pts[:, 1].reshape(shape) + np.zeros_like(t)
        for _level in range(1, n):
            px = (1 - t) * px[:-1] + t * px[1:]
            py = (1 - t) * py[:-1] + t * py[1:]
        return py[0]


# ===========================================================================
# Registry
# ===========================================================================

class InterpolationService:
    """Fixed-order registry of the four methods."""

    def __init__(self, tolerance: float = UNIFORM_SPACING_TOLERANCE) -> None:
        self._interpolators: dict[Method, Interpolator] = {
            Method.LAGRANGE: LagrangeInterpolator(),
            Method.NEWTON_DIVIDED: NewtonDividedInterpolator(),
            Method.NEWTON_FORWARD: NewtonForwardInterpolator(tolerance),
            Method.BEZIER: BezierInterpolator(),
        }

    def get(self, method: Union[Method, str]) -> Interpolator:
        return self._interpolators[Method.parse(method)]

    def evaluate(
        self, method: Union[Method, str], samples: SampleSet, query: Any
    ) -> Union[float, FloatArray]:
        return self.get(method).evaluate(samples, query)

    def evaluate_all(
        self, samples: SampleSet, query: Any
    ) -> dict[Method, Union[float, FloatArray]]:
        return {m: interp.evaluate(samples, query) for m, interp in self._interpolators.items()}


_DEFAULT_SERVICE = InterpolationService()


def evaluate(method: Union[Method, str], x: Any, y: Any, query: Any) -> Union[float, FloatArray]:
    """Interpolate ``(x, y)`` with *method* and evaluate at *query*."""
    samples = SampleSet.from_sequences(x, y)
    return _DEFAULT_SERVICE.evaluate(method, samples, query)
