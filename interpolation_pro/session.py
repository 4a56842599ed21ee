from __future__ import annotations

import logging
from typing import Any, Optional, Union

import numpy as np

from interpolation_pro.formula import FormulaRenderer
from interpolation_pro.methods import ALL, InterpolationService, Method, MethodSelection, resolve_selection
from interpolation_pro.samples import SampleSet
from interpolation_pro.sampling import CurveSampler, SampledCurve
from interpolation_pro.settings import AppSettings

logger = logging.getLogger(__name__)


class InterpolationSession:
    """Request context for one front end.

    Holds the current sample set and the most recent selection (a single
    method or ``"all"``).  ``draw`` and ``draw_all`` update the selection;
    ``formula`` reads it.  Nothing here is shared between sessions.
    """

    def __init__(self, settings: Optional[AppSettings] = None) -> None:
        self._settings = settings if settings is not None else AppSettings()
        self._service = InterpolationService()
        self._sampler = CurveSampler(self._service)
        self._renderer = FormulaRenderer()
        self._apply_settings()
        self._samples: Optional[SampleSet] = None
        self._last_selection: MethodSelection = Method.LAGRANGE
        self._last_curve: Optional[SampledCurve] = None

    # ------------------------------------------------------------------
    # State
    # ------------------------------------------------------------------

    @property
    def settings(self) -> AppSettings:
        return self._settings

    @settings.setter
    def settings(self, value: AppSettings) -> None:
        self._settings = value
        self._apply_settings()

    def _apply_settings(self) -> None:
        s = self._settings
        self._renderer.reconfigure(s.formula_style, s.latex_approx, s.latex_decimals,
                                   s.text_decimals)

    @property
    def samples(self) -> SampleSet:
        if self._samples is None:
            raise RuntimeError("No data loaded. Call set_data() first.")
        return self._samples

    @property
    def has_data(self) -> bool:
        return self._samples is not None

    @property
    def last_selection(self) -> MethodSelection:
        return self._last_selection

    @property
    def last_curve(self) -> Optional[SampledCurve]:
        return self._last_curve

    @property
    def selection_name(self) -> str:
        methods = resolve_selection(self._last_selection)
        return "All Methods" if len(methods) > 1 else methods[0].display_name

    def set_data(self, x: Any, y: Any) -> SampleSet:
        samples = SampleSet.from_sequences(x, y)
        previous = self._samples
        if previous is None or not (np.array_equal(previous.x, samples.x)
                                    and np.array_equal(previous.y, samples.y)):
            self._last_curve = None
        self._samples = samples
        logger.debug("Loaded %d samples", self._samples.n)
        return self._samples

    # ------------------------------------------------------------------
    # Operations
    # ------------------------------------------------------------------

    def evaluate(self, method: Union[Method, str], query: Any) -> Any:
        return self._service.evaluate(method, self.samples, query)

    def draw(self, method: Union[Method, str]) -> SampledCurve:
        method = Method.parse(method)
        curve = self._sampler.sample(method, self.samples, self._settings.n_steps)
        self._last_selection = method
        self._last_curve = curve
        return curve

    def draw_all(self) -> SampledCurve:
        curve = self._sampler.sample(ALL, self.samples, self._settings.n_steps)
        self._last_selection = ALL
        self._last_curve = curve
        return curve

    def formula(self) -> str:
        return self._renderer.render(self._last_selection, self.samples)
