"""Thickness Calibration Module

Estimates the film thickness that best reproduces a measured reflectivity
spectrum. A coarse search over precomputed rows (a ``ReflectivityMatrix`` or
an internal sweep) brackets the minimum, which is then refined with a
bounded scalar minimization.
"""

from __future__ import annotations

import logging
import math
from dataclasses import dataclass
from typing import TYPE_CHECKING, Any, TypeAlias

import pandas as pd
from scipy.optimize import minimize_scalar

import filmreflect.backend as be
from filmreflect.errors import DimensionMismatchError, InvalidRangeError
from filmreflect.wavelength import ANGSTROM_TO_NM, ThicknessGrid

from .sweep import SpectraSweep

if TYPE_CHECKING:
    from filmreflect.wavelength import WavelengthGrid

    from .stack import FilmStack
    from .sweep import ReflectivityMatrix

Array: TypeAlias = Any  # be.ndarray

logger = logging.getLogger(__name__)


@dataclass
class ThicknessFitResult:
    """Outcome of a thickness fit."""

    thickness_angstrom: float
    initial_guess_angstrom: float
    residual: float
    rms: float
    success: bool
    message: str
    nfev: int

    @property
    def thickness_nm(self) -> float:
        return self.thickness_angstrom * ANGSTROM_TO_NM


class ThicknessFitter:
    """Fits the film thickness of a ``FilmStack`` to a measured spectrum.

    Args:
        stack: The stack whose film thickness is unknown.
        wavelengths: Wavelength grid the measurements are sampled on.
        bounds_angstrom: Search interval (min, max) in Ångström.
        coarse_step_angstrom: Spacing of the coarse search when no
            precomputed matrix is given. Defaults to 10 Å.

    Raises:
        InvalidRangeError: If the bounds are negative, non-finite or empty,
            or the coarse step is not positive.
    """

    def __init__(
        self,
        stack: FilmStack,
        wavelengths: WavelengthGrid,
        bounds_angstrom: tuple[float, float] = (0.0, 6000.0),
        coarse_step_angstrom: float = 10.0,
    ):
        lower, upper = (float(b) for b in bounds_angstrom)
        if not (math.isfinite(lower) and math.isfinite(upper)):
            raise InvalidRangeError("thickness bounds must be finite")
        if lower < 0 or lower >= upper:
            raise InvalidRangeError(
                f"thickness bounds must satisfy 0 <= min < max, got {bounds_angstrom}"
            )
        if coarse_step_angstrom <= 0:
            raise InvalidRangeError(
                f"coarse_step_angstrom must be positive, got {coarse_step_angstrom}"
            )
        self.stack = stack
        self.wavelengths = wavelengths
        self.bounds_angstrom = (lower, upper)
        self.coarse_step_angstrom = float(coarse_step_angstrom)
        self._profile = stack.index_profile(wavelengths)

    def _check_measured(self, measured: Array) -> Array:
        measured = be.asarray(measured, dtype=float)
        if measured.ndim != 1 or measured.shape[0] != len(self.wavelengths):
            raise DimensionMismatchError(
                f"measured spectrum has shape {measured.shape}, expected "
                f"({len(self.wavelengths)},)"
            )
        return measured

    def model(self, thickness_angstrom: float) -> Array:
        """Modelled spectrum at the given thickness."""
        return self.stack.reflectivity(
            self.wavelengths, thickness_angstrom, index_profile=self._profile
        )

    def residual(self, thickness_angstrom: float, measured: Array) -> float:
        """Sum of squared differences between model and measurement."""
        diff = self.model(thickness_angstrom) - measured
        return float(be.sum(diff * diff))

    def coarse_search(
        self, measured: Array, matrix: ReflectivityMatrix | None = None
    ) -> tuple[float, float]:
        """Best tabulated thickness within the bounds.

        Args:
            measured: Measured spectrum on the wavelength grid.
            matrix: Precomputed sweep to search. A sweep with
                ``coarse_step_angstrom`` spacing is run when omitted.

        Returns:
            Tuple of (thickness, spacing of the searched rows), in Ångström.
        """
        measured = self._check_measured(measured)
        lower, upper = self.bounds_angstrom
        if matrix is None:
            grid = ThicknessGrid(lower, upper, self.coarse_step_angstrom)
            matrix = SpectraSweep(self.stack, self.wavelengths, grid).run()
        elif matrix.shape[1] != len(self.wavelengths):
            raise DimensionMismatchError(
                f"matrix has {matrix.shape[1]} wavelengths, expected "
                f"{len(self.wavelengths)}"
            )

        thicknesses = matrix.thicknesses.values
        in_bounds = (thicknesses >= lower) & (thicknesses <= upper)
        if not be.any(in_bounds):
            raise InvalidRangeError("no tabulated thickness lies within the bounds")

        diff = matrix.values - measured
        cost = be.where(in_bounds, be.sum(diff * diff, axis=1), be.inf)
        best = int(be.argmin(cost))
        return float(thicknesses[best]), matrix.thicknesses.step

    def fit(
        self,
        measured: Array,
        matrix: ReflectivityMatrix | None = None,
        tolerance: float = 1e-3,
    ) -> ThicknessFitResult:
        """Estimate the film thickness.

        Args:
            measured: Measured spectrum on the wavelength grid.
            matrix: Optional precomputed sweep used for the coarse search.
            tolerance: Absolute thickness tolerance of the refinement, in Å.

        Returns:
            ThicknessFitResult
        """
        measured = self._check_measured(measured)
        guess, spacing = self.coarse_search(measured, matrix)
        lower, upper = self.bounds_angstrom
        lo = max(lower, guess - spacing)
        hi = min(upper, guess + spacing)

        def objective(d):
            return self.residual(d, measured)

        result = minimize_scalar(
            objective, bounds=(lo, hi), method="bounded", options={"xatol": tolerance}
        )
        thickness = float(result.x)
        residual = float(result.fun)
        guess_residual = objective(guess)
        if guess_residual < residual:
            thickness, residual = guess, guess_residual

        logger.debug(
            "Thickness fit: guess %.3f Å -> %.3f Å (residual %.3e, %d evaluations)",
            guess,
            thickness,
            residual,
            result.nfev,
        )
        return ThicknessFitResult(
            thickness_angstrom=thickness,
            initial_guess_angstrom=guess,
            residual=residual,
            rms=math.sqrt(residual / len(measured)),
            success=bool(result.success),
            message=str(result.message),
            nfev=int(result.nfev),
        )

    def report(self, measured: Array, result: ThicknessFitResult) -> ThicknessFitReport:
        return ThicknessFitReport(self, self._check_measured(measured), result)


class ThicknessFitReport:
    """Tabular summary of a thickness fit.

    Args:
        fitter: The ThicknessFitter that produced the result.
        measured: The measured spectrum.
        result: The fit result.
    """

    def __init__(
        self, fitter: ThicknessFitter, measured: Array, result: ThicknessFitResult
    ):
        self.fitter = fitter
        self.measured = measured
        self.result = result

    def summary_table(self) -> pd.DataFrame:
        """Generate a summary table of the fit.

        Returns:
            DataFrame with columns: Quantity, Value, Unit
        """
        r = self.result
        lower, upper = self.fitter.bounds_angstrom
        rows = [
            ("Initial guess", f"{r.initial_guess_angstrom:.1f}", "Å"),
            ("Fitted thickness", f"{r.thickness_angstrom:.3f}", "Å"),
            ("Search bounds", f"{lower:.1f} - {upper:.1f}", "Å"),
            ("Residual", f"{r.residual:.3e}", ""),
            ("RMS error", f"{r.rms:.3e}", ""),
            ("Evaluations", f"{r.nfev}", ""),
        ]
        return pd.DataFrame(rows, columns=["Quantity", "Value", "Unit"])

    def residual_table(self) -> pd.DataFrame:
        """Measured and fitted spectra side by side.

        Returns:
            DataFrame with columns: wavelength_nm, measured, fitted, residual
        """
        fitted = self.fitter.model(self.result.thickness_angstrom)
        return pd.DataFrame(
            {
                "wavelength_nm": self.fitter.wavelengths.values,
                "measured": self.measured,
                "fitted": fitted,
                "residual": self.measured - fitted,
            }
        )
