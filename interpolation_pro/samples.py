from __future__ import annotations

import re
from dataclasses import dataclass
from typing import Any, Iterable, Sequence

import numpy as np
from numpy.typing import NDArray

from interpolation_pro.errors import InvalidInput, NumericDegeneracy

# ---------------------------------------------------------------------------
# Type aliases
# ---------------------------------------------------------------------------

FloatArray = NDArray[np.floating[Any]]

# Consecutive spacings closer than this to x[1] - x[0] count as uniform.
UNIFORM_SPACING_TOLERANCE: float = 1e-10

_SEPARATORS = re.compile(r"[,;\s]+")


def parse_values(text: str) -> list[float]:
    """Parse a comma (or whitespace) separated list of numbers.

    ``"0, 1, 2.5"`` -> ``[0.0, 1.0, 2.5]``.  Blank input gives an empty list;
    any token that is not a number raises :class:`InvalidInput`.
    """
    values: list[float] = []
    for token in _SEPARATORS.split(text.strip()):
        if not token:
            continue
        try:
            values.append(float(token))
        except ValueError as exc:
            raise InvalidInput(f"Not a number: {token!r}") from exc
    return values


def _to_array(values: Iterable[float] | FloatArray, label: str) -> FloatArray:
    if isinstance(values, (str, bytes)):
        raise InvalidInput(f"{label} values must be a sequence of numbers, not text; use parse_values()")
    try:
        arr = np.array(list(values) if not isinstance(values, np.ndarray) else values,
                       dtype=np.float64)
    except (TypeError, ValueError) as exc:
        raise InvalidInput(f"{label} values must be numeric") from exc
    if arr.ndim != 1:
        raise InvalidInput(f"{label} values must be a flat sequence, got shape {arr.shape}")
    arr.setflags(write=False)
    return arr


@dataclass(frozen=True, slots=True, eq=False)
class SampleSet:
    """Ordered (x_i, y_i) pairs shared by every interpolation method.

    Both arrays are read-only copies of the caller's data, so a method can
    never mutate them and a caller can never mutate them mid-evaluation.
    """

    x: FloatArray
    y: FloatArray

    def __post_init__(self) -> None:
        if len(self.x) == 0 or len(self.y) == 0:
            raise InvalidInput("x and y must both contain at least one value")
        if len(self.x) != len(self.y):
            raise InvalidInput(
                f"x and y must have the same length, got {len(self.x)} and {len(self.y)}"
            )
        if not (np.all(np.isfinite(self.x)) and np.all(np.isfinite(self.y))):
            raise InvalidInput("x and y values must be finite numbers")

    @classmethod
    def from_sequences(
        cls, x: Sequence[float] | FloatArray, y: Sequence[float] | FloatArray
    ) -> SampleSet:
        return cls(_to_array(x, "x"), _to_array(y, "y"))

    @classmethod
    def coerce(cls, x: Any, y: Any = None) -> SampleSet:
        """Accept either an existing SampleSet or a pair of sequences."""
        if isinstance(x, SampleSet):
            return x
        return cls.from_sequences(x, y)

    @property
    def n(self) -> int:
        return len(self.x)

    @property
    def x_min(self) -> float:
        return float(np.min(self.x))

    @property
    def x_max(self) -> float:
        return float(np.max(self.x))

    @property
    def x_span(self) -> float:
        return self.x_max - self.x_min

    def has_distinct_x(self) -> bool:
        return len(np.unique(self.x)) == self.n

    def require_distinct_x(self) -> None:
        if not self.has_distinct_x():
            values, counts = np.unique(self.x, return_counts=True)
            repeated = [float(v) for v in values[counts > 1]]
            raise NumericDegeneracy(f"x-values must be distinct, repeated: {repeated}")

    def is_uniformly_spaced(self, tolerance: float = UNIFORM_SPACING_TOLERANCE) -> bool:
        """True when every x[i] - x[i-1] is within *tolerance* of x[1] - x[0]."""
        if self.n < 2:
            return True
        h = self.x[1] - self.x[0]
        return bool(np.all(np.abs(np.diff(self.x) - h) < tolerance))

    def pairs(self) -> list[tuple[float, float]]:
        return [(float(a), float(b)) for a, b in zip(self.x, self.y)]
