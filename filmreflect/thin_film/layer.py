from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING

import filmreflect.backend as be
from filmreflect.wavelength import ANGSTROM_TO_NM

from .core import phase_thickness

if TYPE_CHECKING:
    from filmreflect.materials import BaseMaterial


@dataclass
class Layer:
    """Represents the thin-film layer of the stack.

    Parameters
    ----------
    material : BaseMaterial
        Dispersion law providing ``n(wavelength_nm)``.
    thickness_angstrom : float
        Layer thickness in Ångström.
    name : str | None
        Optional label for display.

    Examples
    --------
    >>> from filmreflect.materials import CauchyMaterial
    >>> from filmreflect.thin_film import Layer
    >>> film = CauchyMaterial(1.458, 0.00354)
    >>> layer = Layer(film, thickness_angstrom=1000.0, name="SiO2 100 nm")
    """

    material: BaseMaterial
    thickness_angstrom: float
    name: str | None = None

    @property
    def thickness_nm(self) -> float:
        return self.thickness_angstrom * ANGSTROM_TO_NM

    def index_profile(self, wavelength_nm):
        """Refractive index of the layer over the wavelength grid."""
        return self.material.index_profile(wavelength_nm)

    def phase_thickness(self, wavelength_nm) -> be.ndarray:
        """Phase δ = 2π/λ·n(λ)·d over the wavelength grid."""
        wl = be.asarray(wavelength_nm, dtype=float)
        return phase_thickness(wl, self.index_profile(wl), self.thickness_nm)
