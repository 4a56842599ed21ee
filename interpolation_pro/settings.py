from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from interpolation_pro.formula import FORMULA_STYLES


@dataclass(frozen=True, slots=True)
class AppSettings:
    n_steps: int = 100               # grid steps across [min(x), max(x)]
    formula_style: str = "text"      # "text" or "latex"
    latex_approx: bool = True        # use decimal approximations in LaTeX output
    latex_decimals: int = 3          # digits after decimal point when approx is on
    text_decimals: Optional[int] = None  # None prints numbers in full

    def __post_init__(self) -> None:
        if not (1 <= self.n_steps <= 100_000):
            raise ValueError(f"n_steps must be in [1, 100000], got {self.n_steps}")
        if self.formula_style not in FORMULA_STYLES:
            raise ValueError(
                f"formula_style must be one of {FORMULA_STYLES}, got {self.formula_style!r}"
            )
        if not (0 <= self.latex_decimals <= 10):
            raise ValueError(f"latex_decimals must be in [0, 10], got {self.latex_decimals}")
        if self.text_decimals is not None and not (0 <= self.text_decimals <= 15):
            raise ValueError(f"text_decimals must be in [0, 15], got {self.text_decimals}")
