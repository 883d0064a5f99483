"""filmreflect: reflectivity spectra of a dispersive thin film on a substrate.

The package computes the normal-incidence reflectivity of an ambient / film /
substrate stack over a wavelength grid and a film thickness grid.
"""

from .config import SpectraConfig, load_config, save_config
from .errors import (
    DimensionMismatchError,
    InvalidMaterialError,
    InvalidRangeError,
    ThinFilmError,
)
from .pipeline import compute_spectra, run
from .wavelength import ThicknessGrid, WavelengthGrid

__version__ = "0.1.0"

__all__ = [
    "DimensionMismatchError",
    "InvalidMaterialError",
    "InvalidRangeError",
    "SpectraConfig",
    "ThicknessGrid",
    "ThinFilmError",
    "WavelengthGrid",
    "compute_spectra",
    "load_config",
    "run",
    "save_config",
]
