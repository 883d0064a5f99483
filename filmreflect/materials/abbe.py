"""Abbe Material Module

Glass described by its index ``nd`` at the helium d line and its Abbe number
``vd``. The two values are turned into a two-term Cauchy law through the F and
C hydrogen lines.
"""

from __future__ import annotations

from .base import check_index
from .cauchy import CauchyMaterial

# Fraunhofer lines, nm
WAVELENGTH_D = 587.5618
WAVELENGTH_F = 486.1327
WAVELENGTH_C = 656.2725


class AbbeMaterial(CauchyMaterial):
    """Cauchy material fitted to a refractive index and an Abbe number.

    ``vd = (nd - 1) / (nF - nC)``, so ``b`` follows from ``nF - nC`` and ``a``
    from ``nd``.

    Args:
        index: Refractive index at 587.56 nm.
        abbe_number: Abbe number, strictly positive.
        name: Optional label.
    """

    def __init__(self, index: float, abbe_number: float, name: str | None = None):
        check_index(index)
        if abbe_number <= 0:
            raise ValueError(f"abbe_number must be positive, got {abbe_number}")
        self.index = float(index)
        self.abbe = float(abbe_number)
        dispersion = (self.index - 1.0) / self.abbe
        b = dispersion / (WAVELENGTH_F**-2 - WAVELENGTH_C**-2)
        a = self.index - b / WAVELENGTH_D**2
        super().__init__(a, b, name)

    def to_dict(self):
        return {
            "type": "AbbeMaterial",
            "index": self.index,
            "abbe_number": self.abbe,
            "name": self.name,
        }
