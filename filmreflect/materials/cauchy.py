"""Cauchy Material Module

Two-term Cauchy dispersion law ``n(λ) = a + b / λ²`` with λ in nanometers.
"""

from __future__ import annotations

import filmreflect.backend as be

from .base import BaseMaterial


class CauchyMaterial(BaseMaterial):
    """Transparent material following the two-term Cauchy equation.

    Args:
        a: Constant term.
        b: Coefficient of the ``1/λ²`` term, in nm².
        name: Optional label.

    Examples
    --------
    >>> film = CauchyMaterial(a=1.458, b=0.00354)
    >>> round(float(film.n(500.0)), 6)
    1.458
    """

    def __init__(self, a: float, b: float, name: str | None = None):
        super().__init__(name)
        self.a = float(a)
        self.b = float(b)

    def n(self, wavelength_nm):
        wl = be.asarray(wavelength_nm, dtype=float)
        return self.a + self.b / (wl * wl)

    def to_dict(self):
        data = super().to_dict()
        data.update({"a": self.a, "b": self.b})
        return data
