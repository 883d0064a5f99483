"""End-to-end reflectivity computation.

Builds the grids and the stack from a ``SpectraConfig``, runs the thickness
sweep and optionally renders the selected spectra to an image.
"""

from __future__ import annotations

import logging
from pathlib import Path

from filmreflect.config import SpectraConfig
from filmreflect.thin_film import ReflectivityMatrix, SpectralAnalyzer, SpectraSweep

logger = logging.getLogger(__name__)


def compute_spectra(config: SpectraConfig | None = None) -> ReflectivityMatrix:
    """Compute the reflectivity matrix described by ``config``.

    Args:
        config: Sweep inputs. Defaults to ``SpectraConfig()``.

    Returns:
        ReflectivityMatrix of shape (thicknesses, wavelengths).
    """
    config = config or SpectraConfig()
    wavelengths = config.wavelength_grid()
    thicknesses = config.thickness_grid()
    stack = config.build_stack()
    logger.info(
        "Computing %s over %d wavelengths and %d thicknesses",
        stack,
        len(wavelengths),
        len(thicknesses),
    )
    return SpectraSweep(stack, wavelengths, thicknesses, workers=config.workers).run()


def run(
    config: SpectraConfig | None = None, output_path: str | Path | None = None
) -> ReflectivityMatrix:
    """Compute the spectra and write the plot of every ``plot_every``-th row.

    Args:
        config: Sweep inputs. Defaults to ``SpectraConfig()``.
        output_path: Image file, overrides ``config.output_path``.

    Returns:
        The computed ReflectivityMatrix.
    """
    config = config or SpectraConfig()
    matrix = compute_spectra(config)
    path = output_path if output_path is not None else config.output_path
    SpectralAnalyzer(matrix).save(path, every=config.plot_every)
    return matrix
