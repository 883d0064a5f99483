"""Sellmeier Material Module

``n²(λ) = 1 + Σ B_i λ² / (λ² - C_i)`` with λ in nanometers and ``C_i`` in nm².
"""

from __future__ import annotations

from collections.abc import Sequence

import filmreflect.backend as be

from .base import BaseMaterial


class SellmeierMaterial(BaseMaterial):
    """Transparent material following the Sellmeier equation.

    Args:
        B: Oscillator strengths.
        C: Resonance wavelengths squared, in nm².
        name: Optional label.

    Raises:
        ValueError: If ``B`` and ``C`` do not have the same length.
    """

    def __init__(
        self, B: Sequence[float], C: Sequence[float], name: str | None = None
    ):
        if len(B) != len(C):
            raise ValueError("B and C must have the same number of terms")
        super().__init__(name)
        self.B = [float(b) for b in B]
        self.C = [float(c) for c in C]

    def n(self, wavelength_nm):
        wl2 = be.asarray(wavelength_nm, dtype=float) ** 2
        # near or below a resonance n² is infinite or negative; index_profile
        # rejects the resulting inf or NaN
        with be.errstate(divide="ignore", invalid="ignore"):
            n2 = 1.0
            for b, c in zip(self.B, self.C, strict=True):
                n2 = n2 + b * wl2 / (wl2 - c)
            return be.sqrt(n2)

    def to_dict(self):
        data = super().to_dict()
        data.update({"B": list(self.B), "C": list(self.C)})
        return data
