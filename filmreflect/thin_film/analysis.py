"""Reflectivity matrix plotting.

Renders a ``ReflectivityMatrix`` either as a family of spectra (one line per
selected thickness) or as a thickness x wavelength map.
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import TYPE_CHECKING

import matplotlib.pyplot as plt

import filmreflect.backend as be

if TYPE_CHECKING:
    from .sweep import ReflectivityMatrix

logger = logging.getLogger(__name__)

# matches the 1200 x 800 px output of the original tool
FIGSIZE = (12, 8)
DPI = 100


class SpectralAnalyzer:
    """Class for plotting the result of a thickness sweep.

    Attributes:
        matrix (ReflectivityMatrix): The reflectivity matrix to be plotted.
    """

    def __init__(self, matrix: ReflectivityMatrix) -> None:
        self.matrix = matrix

    def spectra_view(
        self,
        every: int = 1000,
        title: str = "Reflectivity Spectra of stack",
        ax: plt.Axes = None,
    ) -> tuple[plt.Figure, plt.Axes]:
        """Plot the spectra of every ``every``-th thickness.

        Args:
            every: Row subsampling step.
            title: Axes title.
            ax: Optional matplotlib Axes.

        Returns:
            Tuple of (figure, axes)
        """
        if ax is None:
            fig, ax = plt.subplots(figsize=FIGSIZE)
        else:
            fig = ax.figure

        color_cycle = plt.rcParams["axes.prop_cycle"].by_key()["color"]
        for i, series in enumerate(self.matrix.select(every)):
            ax.plot(
                series.wavelengths,
                series.reflectivity,
                color=color_cycle[i % len(color_cycle)],
                label=series.label,
            )

        wavelengths = self.matrix.wavelengths
        ax.set_title(title)
        ax.set_xlabel(r"$\lambda$ (nm)")
        ax.set_ylabel("Reflectivity")
        ax.set_xlim(wavelengths.first, wavelengths.last)
        ax.set_ylim(0, 1)
        ax.grid(True, alpha=0.3)
        legend = ax.legend(frameon=True, facecolor="white", edgecolor="black")
        legend.get_frame().set_alpha(0.8)

        return fig, ax

    def map_view(
        self,
        ax: plt.Axes = None,
        cmap: str = "viridis",
    ) -> tuple[plt.Figure, plt.Axes]:
        """Plot the full matrix as a 2D map of thickness vs wavelength.

        Args:
            ax: Optional matplotlib Axes.
            cmap: Colormap name.

        Returns:
            Tuple of (figure, axes)
        """
        if ax is None:
            fig, ax = plt.subplots(figsize=FIGSIZE)
        else:
            fig = ax.figure

        WL, TH = be.meshgrid(
            self.matrix.wavelengths.values,
            self.matrix.thicknesses.values,
            indexing="xy",
        )
        im = ax.pcolormesh(
            WL, TH, self.matrix.values, shading="auto", vmin=0, vmax=1, cmap=cmap
        )
        ax.set_xlabel(r"$\lambda$ (nm)")
        ax.set_ylabel("Thickness (Å)")
        ax.set_title("Reflectivity")
        fig.colorbar(im, ax=ax, label="Reflectivity")

        return fig, ax

    def save(self, path: str | Path, every: int = 1000) -> Path:
        """Render ``spectra_view`` and write it to ``path``.

        Returns:
            The path written.
        """
        path = Path(path)
        fig, _ = self.spectra_view(every=every)
        try:
            fig.savefig(path, dpi=DPI)
        finally:
            plt.close(fig)
        logger.info("Wrote reflectivity spectra to %s", path)
        return path
