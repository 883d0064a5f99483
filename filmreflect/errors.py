"""Errors raised by filmreflect.

All of them derive from ``ValueError`` so callers that only care about bad
input can catch that.
"""


class ThinFilmError(ValueError):
    """Base class for filmreflect input errors."""


class InvalidRangeError(ThinFilmError):
    """Malformed sample grid bounds or step, or an invalid thickness."""


class InvalidMaterialError(ThinFilmError):
    """Non-positive or non-finite refractive index."""


class DimensionMismatchError(ThinFilmError):
    """Arrays that should be index-aligned have different lengths."""
