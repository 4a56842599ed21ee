from __future__ import annotations

from typing import Any, Callable, Optional

import numpy as np
import sympy as sp

from interpolation_pro.errors import NumericDegeneracy
from interpolation_pro.methods import (
    BezierInterpolator,
    Method,
    MethodSelection,
    resolve_selection,
)
from interpolation_pro.samples import SampleSet
from interpolation_pro.tables import (
    divided_difference_table,
    factorial,
    leading_forward_differences,
)

FORMULA_STYLES: tuple[str, ...] = ("text", "latex")

_TITLES: dict[Method, str] = {
    Method.LAGRANGE: "LAGRANGE FORMULA",
    Method.NEWTON_DIVIDED: "NEWTON DIVIDED DIFFERENCES",
    Method.NEWTON_FORWARD: "NEWTON FORWARD DIFFERENCES",
    Method.BEZIER: "BEZIER INTERPOLATION",
}


def format_number(v: float, decimals: Optional[int] = None) -> str:
    """Shortest readable form of *v*: ``2`` rather than ``2.0``, ``0.5``, ``-1.25``.

    With *decimals* set, the value is rounded first and trailing zeros are
    dropped.
    """
    v = float(v)
    if decimals is not None:
        v = round(v, decimals)
    if v == 0:
        return "0"
    if v.is_integer() and abs(v) < 1e16:
        return str(int(v))
    return repr(v)


class FormulaRenderer:
    """Symbolic formula for each interpolation method.

    Parameters
    ----------
    style : {"text", "latex"}
        ``text`` writes the formula as plain text with literal numbers.
        ``latex`` builds the expression with sympy and adds the expanded
        power-basis polynomial (or the Bernstein polynomial in t for Bezier).
    approx : bool
        LaTeX only.  True renders coefficients as decimals rounded to
        *decimals* places; False renders exact fractions.
    decimals : int
        Digits after the decimal point in LaTeX approximate mode.
    text_decimals : int or None
        Optional rounding for numbers in text mode; None prints them in full.
    """

    def __init__(
        self,
        style: str = "text",
        approx: bool = True,
        decimals: int = 3,
        text_decimals: Optional[int] = None,
    ) -> None:
        self.reconfigure(style, approx, decimals, text_decimals)
        self._text: dict[Method, Callable[[SampleSet], str]] = {
            Method.LAGRANGE: self._lagrange_text,
            Method.NEWTON_DIVIDED: self._divided_text,
            Method.NEWTON_FORWARD: self._forward_text,
            Method.BEZIER: self._bezier_text,
        }
        self._latex: dict[Method, Callable[[SampleSet], str]] = {
            Method.LAGRANGE: self._lagrange_latex,
            Method.NEWTON_DIVIDED: self._divided_latex,
            Method.NEWTON_FORWARD: self._forward_latex,
            Method.BEZIER: self._bezier_latex,
        }

    def reconfigure(
        self,
        style: str = "text",
        approx: bool = True,
        decimals: int = 3,
        text_decimals: Optional[int] = None,
    ) -> None:
        if style not in FORMULA_STYLES:
            raise ValueError(f"style must be one of {FORMULA_STYLES}, got {style!r}")
        self.style = style
        self.approx = approx
        self.decimals = max(0, min(10, int(decimals)))
        self.text_decimals = text_decimals

    def render(self, selection: MethodSelection, samples: SampleSet) -> str:
        methods = resolve_selection(selection)
        handlers = self._latex if self.style == "latex" else self._text
        if len(methods) == 1:
            method = methods[0]
            return f"=== {_TITLES[method]} ===\n{handlers[method](samples)}"
        blocks = [f"--- {_TITLES[m]} ---\n{handlers[m](samples)}" for m in methods]
        return "=== ALL INTERPOLATION FORMULAS ===\n\n" + "\n\n".join(blocks)

    # ------------------------------------------------------------------
    # Text mode
    # ------------------------------------------------------------------

    def _f(self, v: float) -> str:
        return format_number(v, self.text_decimals)

    def _lagrange_text(self, samples: SampleSet) -> str:
        xs, ys = samples.x, samples.y
        terms: list[str] = []
        for i in range(samples.n):
            term = self._f(ys[i])
            for j in range(samples.n):
                if j != i:
                    term += f"((x - {self._f(xs[j])})/({self._f(xs[i])} - {self._f(xs[j])}))"
            terms.append(term)
        return "P(x) = " + " + ".join(terms)

    def _divided_text(self, samples: SampleSet) -> str:
        coef = divided_difference_table(samples)[0]
        xs = samples.x
        out = "P(x) = " + self._f(coef[0])
        for i in range(1, samples.n):
            out += f" + {self._f(coef[i])}" + "".join(
                f"(x - {self._f(xs[k])})" for k in range(i)
            )
        return out

    def _forward_text(self, samples: SampleSet) -> str:
        # Spacing is not re-checked here: the formula is written with
        # h = x1 - x0 even when the evaluator would fall back.
        xs, ys = samples.x, samples.y
        lines: list[str] = []
        if samples.n >= 2:
            h = xs[1] - xs[0]
            lines.append(f"h = {self._f(h)}")
            lines.append(f"u = (x - x₀)/h = (x - {self._f(xs[0])})/{self._f(h)}")
        deltas = leading_forward_differences(ys)
        out = "P(x) = " + self._f(ys[0])
        for i in range(1, samples.n):
            out += f" + ({self._f(deltas[i])}/{factorial(i)})" + "".join(
                f"(u - {k})" for k in range(i)
            )
        lines.append(out)
        return "\n".join(lines)

    def _bezier_text(self, samples: SampleSet) -> str:
        points = ", ".join(
            f"P{i}({self._f(px)}, {self._f(py)})"
            for i, (px, py) in enumerate(BezierInterpolator.control_points(samples))
        )
        return (
            "Using De Casteljau's algorithm:\n"
            "t = (x - x_min) / (x_max - x_min)\n"
            f"Control Points: {points}\n"
            "\n"
            "Bezier curve is calculated using recursive linear interpolation:\n"
            "B(t) = (1-t)ⁿ⁻¹P₀ + (n-1)(1-t)ⁿ⁻²tP₁ + ... + tⁿ⁻¹Pₙ₋₁\n"
            f"where n = {samples.n} (number of control points)"
        )

    # ------------------------------------------------------------------
    # LaTeX mode helpers
    # ------------------------------------------------------------------

    def _c(self, v: float) -> sp.Expr:
        """Coefficient as a sympy number: full-precision Float or a fraction."""
        v = float(v)
        if self.approx:
            return sp.Float(v)
        r = sp.Rational(v).limit_denominator(1000)
        if r == 0 and v != 0:
            # below 1/2000 the bounded fraction collapses to zero
            return sp.nsimplify(v, rational=True)
        return r

    def _round_floats(self, expr: sp.Basic) -> sp.Basic:
        if isinstance(expr, sp.Float):
            return sp.Float(f"{float(expr):.{self.decimals}f}")
        if expr.args:
            return expr.func(*[self._round_floats(a) for a in expr.args])
        return expr

    def _tex(self, expr: Any) -> str:
        expr = sp.sympify(expr)
        if expr.has(sp.zoo, sp.oo, -sp.oo, sp.nan):
            raise NumericDegeneracy("formula has a non-finite coefficient")
        if self.approx:
            return sp.latex(self._round_floats(expr))
        return sp.latex(expr)

    def _expanded(self, lhs: str, expr: sp.Expr) -> str:
        return f"$${lhs} = {self._tex(sp.expand(expr))}$$"

    @staticmethod
    def _factor_tex(pieces: list[str]) -> str:
        return "".join(f"\\left({p}\\right)" for p in pieces)

    # ------------------------------------------------------------------
    # LaTeX mode per-method generators
    # ------------------------------------------------------------------

    def _lagrange_latex(self, samples: SampleSet) -> str:
        samples.require_distinct_x()
        x = sp.Symbol("x")
        xs, ys = samples.x, samples.y
        n = samples.n

        shown: list[str] = []
        poly: sp.Expr = sp.Integer(0)
        for i in range(n):
            others = [j for j in range(n) if j != i]
            denom = float(np.prod([xs[i] - xs[j] for j in others])) if others else 1.0
            factors = [x - self._c(xs[j]) for j in others]
            numer = sp.Mul(*factors)
            poly += self._c(ys[i]) * numer / self._c(denom)
            if others:
                frac = (f"\\frac{{{self._factor_tex([self._tex(f) for f in factors])}}}"
                        f"{{{self._tex(self._c(denom))}}}")
                shown.append(f"{self._tex(self._c(ys[i]))} \\cdot {frac}")
            else:
                shown.append(self._tex(self._c(ys[i])))
        structural = f"$$P(x) = {' + '.join(shown)}$$"
        return structural + "\n" + self._expanded("P(x)", poly)

    def _divided_latex(self, samples: SampleSet) -> str:
        x = sp.Symbol("x")
        coef = divided_difference_table(samples)[0]
        xs = samples.x

        shown = [self._tex(self._c(coef[0]))]
        poly: sp.Expr = self._c(coef[0])
        for i in range(1, samples.n):
            factors = [x - self._c(xs[k]) for k in range(i)]
            poly += self._c(coef[i]) * sp.Mul(*factors)
            shown.append(
                f"{self._tex(self._c(coef[i]))}"
                f"{self._factor_tex([self._tex(f) for f in factors])}"
            )
        structural = f"$$P(x) = {' + '.join(shown)}$$"
        return structural + "\n" + self._expanded("P(x)", poly)

    def _forward_latex(self, samples: SampleSet) -> str:
        x, u = sp.symbols("x u")
        xs, ys = samples.x, samples.y
        deltas = leading_forward_differences(ys)

        shown = [self._tex(self._c(ys[0]))]
        poly_u: sp.Expr = self._c(ys[0])
        for i in range(1, samples.n):
            factors = [u - k for k in range(i)]
            poly_u += self._c(deltas[i]) * sp.Mul(*factors) / factorial(i)
            shown.append(
                f"\\frac{{{self._tex(self._c(deltas[i]))}}}{{{i}!}}"
                f"{self._factor_tex([sp.latex(f) for f in factors])}"
            )

        lines: list[str] = []
        if samples.n >= 2:
            h = float(xs[1] - xs[0])
            lines.append(f"$$h = {self._tex(self._c(h))}$$")
            lines.append(
                f"$$u = \\frac{{x - x_0}}{{h}} = \\frac{{{self._tex(x - self._c(xs[0]))}}}"
                f"{{{self._tex(self._c(h))}}}$$"
            )
        lines.append(f"$$P(u) = {' + '.join(shown)}$$")
        if samples.n >= 2 and xs[1] != xs[0]:
            in_x = poly_u.subs(u, (x - self._c(xs[0])) / self._c(xs[1] - xs[0]))
            lines.append(self._expanded("P(x)", in_x))
        return "\n".join(lines)

    def _bezier_latex(self, samples: SampleSet) -> str:
        t = sp.Symbol("t")
        ys = samples.y
        n = samples.n
        degree = n - 1

        curve: sp.Expr = sp.Integer(0)
        for i in range(n):
            curve += sp.binomial(degree, i) * (1 - t) ** (degree - i) * t ** i * self._c(ys[i])

        points = ", ".join(
            f"P_{{{i}}}({self._tex(self._c(px))}, {self._tex(self._c(py))})"
            for i, (px, py) in enumerate(BezierInterpolator.control_points(samples))
        )
        lines = [
            r"$$t = \frac{x - x_{\min}}{x_{\max} - x_{\min}}$$",
            f"$$\\text{{Control points: }} {points}$$",
            f"$$B(t) = \\sum_{{i=0}}^{{{degree}}} \\binom{{{degree}}}{{i}}"
            f" (1-t)^{{{degree}-i}} t^{{i}} y_i$$",
            self._expanded("B(t)", curve),
        ]
        return "\n".join(lines)


def render_formula(
    selection: MethodSelection,
    x: Any,
    y: Any = None,
    style: str = "text",
    approx: bool = True,
    decimals: int = 3,
) -> str:
    """Formula for *selection* (a method or ``"all"``) over the data."""
    samples = SampleSet.coerce(x, y)
    return FormulaRenderer(style=style, approx=approx, decimals=decimals).render(selection, samples)
