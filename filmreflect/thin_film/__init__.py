"""Three-media thin-film reflectivity.

Public API:
- ``Layer``: the film layer (material + thickness)
- ``FilmStack``: ambient / film / substrate stack and its reflectivity
- ``SpectraSweep``: reflectivity over a thickness grid (``ReflectivityMatrix``)
- ``SpectralAnalyzer``: plots of a reflectivity matrix
- ``ThicknessFitter``: film thickness from a measured spectrum

Units: wavelength in nm, thickness in Å (nm helpers).
"""

from __future__ import annotations

from .analysis import SpectralAnalyzer
from .calibration import ThicknessFitReport, ThicknessFitResult, ThicknessFitter
from .core import transfer_matrix_reflectivity
from .layer import Layer
from .stack import FilmStack
from .sweep import ReflectivityMatrix, SpectraSweep, SpectrumSeries

__all__ = [
    "FilmStack",
    "Layer",
    "ReflectivityMatrix",
    "SpectraSweep",
    "SpectralAnalyzer",
    "SpectrumSeries",
    "ThicknessFitReport",
    "ThicknessFitResult",
    "ThicknessFitter",
    "transfer_matrix_reflectivity",
]
