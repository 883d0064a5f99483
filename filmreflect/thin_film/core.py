"""Thin film reflectivity core functions.

Normal-incidence reflectivity of an ambient / film / substrate stack built
from the two interface Fresnel coefficients and a per-wavelength attenuation
factor. All operations are elementwise over index-aligned 1-D arrays; inputs
of different lengths are rejected instead of broadcast.
"""

from __future__ import annotations

import math
from typing import Any, TypeAlias

import filmreflect.backend as be
from filmreflect.errors import DimensionMismatchError, InvalidRangeError
from filmreflect.materials.base import check_index
from filmreflect.wavelength import ANGSTROM_TO_NM

Array: TypeAlias = Any  # be.ndarray


def _as_aligned(values: Array, length: int, name: str) -> Array:
    arr = be.asarray(values, dtype=float)
    if arr.ndim != 1:
        raise DimensionMismatchError(f"{name} must be 1-D, got shape {arr.shape}")
    if arr.shape[0] != length:
        raise DimensionMismatchError(
            f"{name} has {arr.shape[0]} samples but the wavelength grid has {length}"
        )
    return arr


def fresnel_coefficient(n_i: float | Array, n_j: float | Array) -> float | Array:
    """Normal-incidence amplitude reflection coefficient from medium i into j.

    r_ij = (n_i - n_j) / (n_i + n_j)
    """
    return (n_i - n_j) / (n_i + n_j)


def phase_thickness(
    wavelength_nm: Array, n_film: Array, thickness_nm: float
) -> Array:
    """Phase δ = 2π/λ·n·d, with λ and d in nm."""
    return (2 * be.pi / wavelength_nm) * n_film * thickness_nm


def attenuation(delta: Array) -> Array:
    """Factor A(δ) = exp(-2δ) applied to the film/substrate reflection.

    This is a real decay, not the oscillatory exp(-2iδ) of the textbook
    Airy summation, so no interference fringes appear in the output.
    """
    return be.exp(-2.0 * delta)


def transfer_matrix_reflectivity(
    n_ambient: float,
    n_film: Array,
    n_substrate: float,
    thickness_angstrom: float,
    wavelengths_nm: Array,
) -> Array:
    """Reflectivity of an ambient / film / substrate stack for one thickness.

    Args:
        n_ambient: Index of the incident medium.
        n_film: Film index profile, one value per wavelength.
        n_substrate: Index of the substrate.
        thickness_angstrom: Film thickness in Ångström.
        wavelengths_nm: Wavelength samples in nanometers.

    Returns:
        Array of |r|² aligned with ``wavelengths_nm``.

    Raises:
        DimensionMismatchError: If ``n_film`` and ``wavelengths_nm`` are not
            1-D arrays of the same length.
        InvalidMaterialError: If any index is non-positive or non-finite.
        InvalidRangeError: If the thickness is negative or non-finite, or a
            wavelength is not strictly positive.
    """
    wl = be.asarray(wavelengths_nm, dtype=float)
    if wl.ndim != 1:
        raise DimensionMismatchError(f"wavelengths must be 1-D, got shape {wl.shape}")
    n1 = _as_aligned(n_film, wl.shape[0], "film index profile")
    check_index(n_ambient, "ambient index")
    check_index(n_substrate, "substrate index")
    check_index(n1, "film index")
    if not math.isfinite(thickness_angstrom) or thickness_angstrom < 0:
        raise InvalidRangeError(
            f"thickness must be finite and non-negative, got {thickness_angstrom}"
        )
    if be.any(~(wl > 0)):
        raise InvalidRangeError("wavelengths must be strictly positive")

    thickness_nm = thickness_angstrom * ANGSTROM_TO_NM
    delta = phase_thickness(wl, n1, thickness_nm)

    r01 = fresnel_coefficient(n_ambient, n1)
    r12 = fresnel_coefficient(n1, n_substrate)

    a = attenuation(delta)
    r = (r01 + r12 * a) / (1.0 + r01 * r12 * a)
    return be.abs(r) ** 2
