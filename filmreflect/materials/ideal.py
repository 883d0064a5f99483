"""Constant-index material."""

from __future__ import annotations

import filmreflect.backend as be

from .base import BaseMaterial, check_index


class IdealMaterial(BaseMaterial):
    """Material with the same refractive index at every wavelength.

    Args:
        n: Refractive index, strictly positive.
        name: Optional label.
    """

    def __init__(self, n: float, name: str | None = None):
        check_index(n)
        super().__init__(name)
        self.index = float(n)

    def n(self, wavelength_nm):
        if be.ndim(wavelength_nm) == 0:
            return self.index
        return be.full(be.shape(wavelength_nm), self.index)

    def to_dict(self):
        data = super().to_dict()
        data["n"] = self.index
        return data
