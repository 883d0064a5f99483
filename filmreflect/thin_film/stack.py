from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING, Any, TypeAlias

import matplotlib.pyplot as plt

import filmreflect.backend as be
from filmreflect.materials.base import check_index
from filmreflect.wavelength import ANGSTROM_TO_NM

from .core import fresnel_coefficient, transfer_matrix_reflectivity
from .layer import Layer

if TYPE_CHECKING:
    from filmreflect.materials import BaseMaterial
    from filmreflect.wavelength import WavelengthGrid

Array: TypeAlias = Any  # be.ndarray


@dataclass
class FilmStack:
    """Ambient / thin film / substrate stack at normal incidence.

    The ambient and substrate media are non-dispersive and described by a
    single real index. The film index follows an arbitrary dispersion law.

    Units and conventions:
    - Wavelength in nanometers.
    - Film thickness in Ångström; ``*_nm`` helpers accept nanometers.

    Parameters
    ----------
    incident_index : float
        Index of the ambient medium (e.g., 1.0 for air).
    film : BaseMaterial
        Dispersion law of the film.
    substrate_index : float
        Index of the substrate (e.g., 3.5 for silicon).

    Examples
    --------
    >>> from filmreflect.materials import CauchyMaterial
    >>> from filmreflect.thin_film import FilmStack
    >>> from filmreflect.wavelength import WavelengthGrid
    >>> stack = FilmStack(1.0, CauchyMaterial(1.458, 0.00354), 3.5)
    >>> R = stack.reflectivity(WavelengthGrid(400.0, 700.0, 1.0), 1000.0)
    """

    incident_index: float
    film: BaseMaterial
    substrate_index: float

    def __post_init__(self):
        check_index(self.incident_index, "ambient index")
        check_index(self.substrate_index, "substrate index")
        self.incident_index = float(self.incident_index)
        self.substrate_index = float(self.substrate_index)

    def index_profile(self, wavelengths: WavelengthGrid | Array) -> Array:
        """Film index at every wavelength sample."""
        return self.film.index_profile(wavelengths)

    def layer(self, thickness_angstrom: float, name: str | None = None) -> Layer:
        """Film layer of the given thickness."""
        return Layer(self.film, thickness_angstrom, name)

    # ----- reflectivity -----
    def reflectivity(
        self,
        wavelengths: WavelengthGrid | Array,
        thickness_angstrom: float,
        index_profile: Array | None = None,
    ) -> Array:
        """Reflectivity spectrum for one film thickness.

        Args:
            wavelengths: Wavelength grid in nm.
            thickness_angstrom: Film thickness in Ångström.
            index_profile: Precomputed film index profile. Computed from the
                film's dispersion law when omitted.

        Returns:
            Reflectivity aligned with ``wavelengths``.
        """
        wl = be.asarray(wavelengths, dtype=float)
        if index_profile is None:
            index_profile = self.index_profile(wl)
        return transfer_matrix_reflectivity(
            self.incident_index,
            index_profile,
            self.substrate_index,
            thickness_angstrom,
            wl,
        )

    def reflectivity_nm(
        self, wavelengths: WavelengthGrid | Array, thickness_nm: float
    ) -> Array:
        """Same as reflectivity() but thickness in nm."""
        return self.reflectivity(wavelengths, thickness_nm / ANGSTROM_TO_NM)

    def bare_substrate_reflectivity(self, wavelengths: WavelengthGrid | Array) -> Array:
        """Reflectivity of the ambient/substrate interface, i.e. zero thickness."""
        wl = be.atleast_1d(be.asarray(wavelengths, dtype=float))
        r02 = fresnel_coefficient(self.incident_index, self.substrate_index)
        return be.full(wl.shape, r02**2)

    def film_interface_reflectivity(self, wavelengths: WavelengthGrid | Array) -> Array:
        """Reflectivity of the ambient/film interface alone.

        This is the limit of ``reflectivity`` for very thick films.
        """
        r01 = fresnel_coefficient(self.incident_index, self.index_profile(wavelengths))
        return r01**2

    def __repr__(self):
        return (
            f"FilmStack(n0={self.incident_index} -> {self.film.label} -> "
            f"ns={self.substrate_index})"
        )

    def plot(
        self,
        wavelengths: WavelengthGrid | Array,
        thickness_angstrom: float | list[float],
        ax: plt.Axes = None,
    ) -> tuple[plt.Figure, plt.Axes]:
        """Plot reflectivity vs wavelength for one or several thicknesses.

        Args:
            wavelengths: Wavelength grid in nm.
            thickness_angstrom: Thickness or list of thicknesses in Ångström.
            ax: Optional matplotlib Axes to plot on. If None, a new figure
            and axes are created.

        Returns:
            Tuple of (figure, axes).
        """
        if ax is None:
            fig, ax = plt.subplots()
        else:
            fig = ax.figure

        wl = be.asarray(wavelengths, dtype=float)
        profile = self.index_profile(wl)
        for thickness in be.atleast_1d(thickness_angstrom).tolist():
            ax.plot(
                wl,
                self.reflectivity(wl, thickness, index_profile=profile),
                label=f"d = {thickness:g} Å",
            )

        ax.set_xlabel(r"$\lambda$ (nm)")
        ax.set_ylabel("Reflectivity")
        ax.set_xlim(float(wl.min()), float(wl.max()))
        ax.set_ylim(0, 1)
        ax.grid(True, alpha=0.3)
        ax.legend()
        return fig, ax
