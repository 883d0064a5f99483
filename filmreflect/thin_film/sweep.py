"""Thickness sweep of the reflectivity solver.

``SpectraSweep`` evaluates a ``FilmStack`` for every thickness of a
``ThicknessGrid`` and assembles the rows into a ``ReflectivityMatrix``
indexed by (thickness, wavelength).
"""

from __future__ import annotations

import logging
from concurrent.futures import ThreadPoolExecutor
from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Any, TypeAlias

import pandas as pd

import filmreflect.backend as be
from filmreflect.errors import DimensionMismatchError
from filmreflect.wavelength import ThicknessGrid, WavelengthGrid

if TYPE_CHECKING:
    from .stack import FilmStack

Array: TypeAlias = Any  # be.ndarray

logger = logging.getLogger(__name__)


@dataclass(frozen=True, eq=False)
class SpectrumSeries:
    """One reflectivity spectrum paired with the thickness it was computed at."""

    thickness_angstrom: float
    wavelengths: Array = field(repr=False)
    reflectivity: Array = field(repr=False)

    @property
    def label(self) -> str:
        return f"Thickness = {self.thickness_angstrom:g} Å"

    def points(self) -> list[tuple[float, float]]:
        """(wavelength, reflectivity) pairs in wavelength order."""
        return list(
            zip(self.wavelengths.tolist(), self.reflectivity.tolist(), strict=True)
        )

    def __iter__(self):
        return iter(self.points())

    def __len__(self):
        return len(self.wavelengths)


@dataclass(frozen=True, eq=False)
class ReflectivityMatrix:
    """Reflectivity indexed by (thickness index, wavelength index).

    Row ``i`` holds the spectrum of ``thicknesses[i]``. The array is read-only.

    Args:
        values: 2-D array of shape ``(len(thicknesses), len(wavelengths))``.
        wavelengths: Wavelength grid of the columns.
        thicknesses: Thickness grid of the rows.

    Raises:
        DimensionMismatchError: If the shape of ``values`` does not match the
            two grids.
    """

    values: Array = field(repr=False)
    wavelengths: WavelengthGrid
    thicknesses: ThicknessGrid

    def __post_init__(self):
        values = be.readonly(self.values)
        expected = (len(self.thicknesses), len(self.wavelengths))
        if values.shape != expected:
            raise DimensionMismatchError(
                f"reflectivity matrix has shape {values.shape}, expected {expected}"
            )
        object.__setattr__(self, "values", values)

    @property
    def shape(self) -> tuple[int, int]:
        return self.values.shape

    def __len__(self):
        return self.shape[0]

    def __array__(self, dtype=None, copy=None):
        if dtype is None:
            return self.values
        return self.values.astype(dtype)

    def row(self, index: int) -> Array:
        """Spectrum of the ``index``-th thickness."""
        return self.values[index]

    def nearest_row(self, thickness_angstrom: float) -> int:
        """Row index of the thickness sample closest to ``thickness_angstrom``."""
        return self.thicknesses.index_of(thickness_angstrom)

    def series(self, index: int) -> SpectrumSeries:
        return SpectrumSeries(
            thickness_angstrom=float(self.thicknesses[index]),
            wavelengths=self.wavelengths.values,
            reflectivity=self.values[index],
        )

    def select(self, every: int = 1, start: int = 0) -> list[SpectrumSeries]:
        """Subsample rows for plotting.

        Args:
            every: Keep one row out of ``every``.
            start: First row to keep.

        Returns:
            Series for rows ``start, start + every, ...``, each labelled with
            its own thickness.
        """
        if every < 1:
            raise ValueError(f"every must be a positive integer, got {every}")
        return [self.series(i) for i in range(start, len(self), every)]

    def to_dataframe(self) -> pd.DataFrame:
        """Long-format table with one row per (thickness, wavelength) sample.

        Returns:
            DataFrame with columns: thickness_angstrom, wavelength_nm,
            reflectivity
        """
        n_t, n_w = self.shape
        return pd.DataFrame(
            {
                "thickness_angstrom": be.repeat(self.thicknesses.values, n_w),
                "wavelength_nm": be.tile(self.wavelengths.values, n_t),
                "reflectivity": self.values.ravel(),
            }
        )


class SpectraSweep:
    """Computes a reflectivity spectrum for every thickness of a grid.

    The film index profile is evaluated once and shared by every row. Rows are
    independent, so they can be computed in a thread pool; the result does not
    depend on ``workers``.

    Args:
        stack: The ambient / film / substrate stack.
        wavelengths: Wavelength grid in nm.
        thicknesses: Thickness grid in Ångström, ascending.
        workers: Number of threads used to compute rows. Defaults to 1.

    Examples
    --------
    >>> from filmreflect.materials import CauchyMaterial
    >>> from filmreflect.thin_film import FilmStack, SpectraSweep
    >>> from filmreflect.wavelength import ThicknessGrid, WavelengthGrid
    >>> stack = FilmStack(1.0, CauchyMaterial(1.458, 0.00354), 3.5)
    >>> sweep = SpectraSweep(
    ...     stack, WavelengthGrid(200.0, 800.0, 0.5), ThicknessGrid(0.0, 100.0, 1.0)
    ... )
    >>> sweep.run().shape
    (101, 1201)
    """

    def __init__(
        self,
        stack: FilmStack,
        wavelengths: WavelengthGrid,
        thicknesses: ThicknessGrid,
        workers: int = 1,
    ):
        if not isinstance(wavelengths, WavelengthGrid):
            raise TypeError("wavelengths must be a WavelengthGrid")
        if not isinstance(thicknesses, ThicknessGrid):
            raise TypeError("thicknesses must be a ThicknessGrid")
        if workers < 1:
            raise ValueError(f"workers must be at least 1, got {workers}")
        self.stack = stack
        self.wavelengths = wavelengths
        self.thicknesses = thicknesses
        self.workers = workers

    def _solve_row(self, values: Array, index: int, profile: Array) -> None:
        thickness = float(self.thicknesses[index])
        values[index] = self.stack.reflectivity(
            self.wavelengths.values, thickness, index_profile=profile
        )

    def run(self) -> ReflectivityMatrix:
        """Run the sweep.

        Returns:
            The completed reflectivity matrix.

        Raises:
            ThinFilmError: The first error raised by the solver. No partial
                matrix is returned.
        """
        profile = self.stack.index_profile(self.wavelengths)
        n_rows = len(self.thicknesses)
        values = be.empty((n_rows, len(self.wavelengths)), dtype=float)
        logger.debug(
            "Sweeping %d thicknesses x %d wavelengths with %d worker(s)",
            n_rows,
            len(self.wavelengths),
            self.workers,
        )

        if self.workers == 1:
            for i in range(n_rows):
                self._solve_row(values, i, profile)
        else:
            with ThreadPoolExecutor(max_workers=self.workers) as executor:
                futures = [
                    executor.submit(self._solve_row, values, i, profile)
                    for i in range(n_rows)
                ]
                try:
                    for future in futures:
                        future.result()
                except Exception:
                    for future in futures:
                        future.cancel()
                    raise

        logger.debug("Sweep complete: %d rows", n_rows)
        return ReflectivityMatrix(values, self.wavelengths, self.thicknesses)
