"""
Interpolation Pro — polynomial and parametric interpolation of (x, y) samples.

Methods
-------
1.  Lagrange                        sum of y_i * L_i(x)
2.  Newton divided differences      divided-difference table, Horner-style sum
3.  Newton forward differences      equal spacing only; otherwise uses (2)
4.  Bezier                          De Casteljau over control points (i/(n-1), y_i)
"""

from interpolation_pro.errors import InterpolationError, InvalidInput, NumericDegeneracy
from interpolation_pro.formula import FormulaRenderer, render_formula
from interpolation_pro.methods import ALL, InterpolationService, Method, evaluate
from interpolation_pro.samples import UNIFORM_SPACING_TOLERANCE, SampleSet, parse_values
from interpolation_pro.sampling import CurveSampler, SampledCurve, sample_curve
from interpolation_pro.session import InterpolationSession
from interpolation_pro.settings import AppSettings
from interpolation_pro.tables import divided_difference_table, factorial

__all__ = [
    "ALL",
    "AppSettings",
    "CurveSampler",
    "FormulaRenderer",
    "InterpolationError",
    "InterpolationService",
    "InterpolationSession",
    "InvalidInput",
    "Method",
    "NumericDegeneracy",
    "SampleSet",
    "SampledCurve",
    "UNIFORM_SPACING_TOLERANCE",
    "divided_difference_table",
    "evaluate",
    "factorial",
    "parse_values",
    "render_formula",
    "sample_curve",
]
