class InterpolationError(ValueError):
    """Base class for every error raised by the interpolation engine."""


class InvalidInput(InterpolationError):
    """The x/y sequences are empty, of unequal length, or not finite numbers."""


class NumericDegeneracy(InterpolationError, ArithmeticError):
    """A computation would divide by zero or produce a non-finite value.

    Raised for repeated x-values, a zero-width x-range in the Bezier
    normalisation, and results that overflow to inf/NaN.
    """
