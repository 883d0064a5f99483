"""Sample Grids Module

Evenly spaced sample grids used by the reflectivity sweep: a wavelength grid
in nanometers and a film thickness grid in Ångström.
"""

from __future__ import annotations

import math
from dataclasses import dataclass, field
from typing import Any, ClassVar

import filmreflect.backend as be
from filmreflect.errors import InvalidRangeError

ANGSTROM_TO_NM = 0.1

# fraction of a step tolerated when deciding whether ``stop`` is on the grid
_STOP_TOLERANCE = 1e-9


@dataclass(frozen=True)
class LinearGrid:
    """Immutable, strictly increasing grid ``start, start + step, ...``.

    The last sample is the largest one not exceeding ``stop``. Samples are
    computed as ``start + i * step`` so no rounding error accumulates along
    the grid.

    Args:
        start: First sample.
        stop: Inclusive upper bound.
        step: Spacing between samples, strictly positive.

    Raises:
        InvalidRangeError: If ``step <= 0``, ``start > stop`` or a bound is
            not finite.
    """

    start: float
    stop: float
    step: float
    values: Any = field(init=False, repr=False, compare=False)

    unit: ClassVar[str] = ""

    def __post_init__(self):
        for name in ("start", "stop", "step"):
            value = getattr(self, name)
            if not math.isfinite(value):
                raise InvalidRangeError(f"{name} must be finite, got {value}")
        if self.step <= 0:
            raise InvalidRangeError(f"step must be positive, got {self.step}")
        if self.start > self.stop:
            raise InvalidRangeError(
                f"start ({self.start}) must not exceed stop ({self.stop})"
            )
        count = math.floor((self.stop - self.start) / self.step + _STOP_TOLERANCE) + 1
        values = self.start + be.arange(count, dtype=float) * self.step
        object.__setattr__(self, "values", be.readonly(values))

    def __len__(self):
        return len(self.values)

    def __iter__(self):
        return iter(self.values.tolist())

    def __getitem__(self, index):
        return self.values[index]

    def __array__(self, dtype=None, copy=None):
        if dtype is None:
            return self.values
        return self.values.astype(dtype)

    @property
    def first(self) -> float:
        return float(self.values[0])

    @property
    def last(self) -> float:
        return float(self.values[-1])

    def index_of(self, value: float) -> int:
        """Index of the sample closest to ``value``."""
        idx = round((value - self.start) / self.step)
        return int(min(max(idx, 0), len(self) - 1))

    def to_dict(self) -> dict:
        return {
            "type": type(self).__name__,
            "start": self.start,
            "stop": self.stop,
            "step": self.step,
        }

    @classmethod
    def from_dict(cls, data: dict) -> LinearGrid:
        return cls(float(data["start"]), float(data["stop"]), float(data["step"]))


class WavelengthGrid(LinearGrid):
    """Wavelength samples in nanometers.

    Examples
    --------
    >>> grid = WavelengthGrid(200.0, 800.0, 0.5)
    >>> len(grid)
    1201
    """

    unit: ClassVar[str] = "nm"


class ThicknessGrid(LinearGrid):
    """Film thickness samples in Ångström.

    Raises:
        InvalidRangeError: Additionally when ``start`` is negative.
    """

    unit: ClassVar[str] = "Å"

    def __post_init__(self):
        super().__post_init__()
        if self.start < 0:
            raise InvalidRangeError(
                f"thickness must not be negative, got start={self.start}"
            )

    def to_nm(self):
        """Thickness samples converted to nanometers."""
        return self.values * ANGSTROM_TO_NM
