import numpy as np
import pandas as pd
import pytest

from filmreflect.errors import (
    DimensionMismatchError,
    InvalidMaterialError,
    InvalidRangeError,
)
from filmreflect.materials import BaseMaterial, CauchyMaterial
from filmreflect.thin_film import (
    FilmStack,
    ReflectivityMatrix,
    SpectraSweep,
    SpectrumSeries,
)
from filmreflect.wavelength import ThicknessGrid, WavelengthGrid
from .conftest import N_AIR, N_SILICON
from .utils import assert_allclose


@pytest.fixture
def matrix(stack, coarse_wavelengths, thicknesses):
    return SpectraSweep(stack, coarse_wavelengths, thicknesses).run()


class TestSpectraSweep:
    def test_shape(self, matrix, coarse_wavelengths, thicknesses):
        assert matrix.shape == (len(thicknesses), len(coarse_wavelengths))
        assert matrix.values.shape == matrix.shape
        assert len(matrix) == len(thicknesses)

    def test_rows_match_thicknesses(self, matrix, stack, coarse_wavelengths):
        for i, thickness in enumerate(matrix.thicknesses):
            assert np.array_equal(
                matrix.row(i), stack.reflectivity(coarse_wavelengths, thickness)
            )

    def test_values_are_read_only(self, matrix):
        with pytest.raises(ValueError):
            matrix.values[0, 0] = 0.5

    def test_reflectivity_relaxes_with_thickness(self, matrix):
        # the real attenuation factor gives no fringes: R only decreases
        assert np.all(np.diff(matrix.values, axis=0) <= 1e-15)

    def test_parallel_rows_identical(self, stack, coarse_wavelengths, thicknesses):
        serial = SpectraSweep(stack, coarse_wavelengths, thicknesses).run()
        parallel = SpectraSweep(
            stack, coarse_wavelengths, thicknesses, workers=4
        ).run()
        assert np.array_equal(serial.values, parallel.values)

    def test_invalid_workers(self, stack, coarse_wavelengths, thicknesses):
        with pytest.raises(ValueError, match="workers"):
            SpectraSweep(stack, coarse_wavelengths, thicknesses, workers=0)

    def test_requires_grids(self, stack, thicknesses):
        with pytest.raises(TypeError, match="WavelengthGrid"):
            SpectraSweep(stack, np.linspace(200, 800, 10), thicknesses)
        with pytest.raises(TypeError, match="ThicknessGrid"):
            SpectraSweep(stack, WavelengthGrid(200.0, 800.0, 1.0), [0.0, 1.0])

    def test_zero_step_fails_before_any_row(self):
        with pytest.raises(InvalidRangeError):
            ThicknessGrid(0.0, 6000.0, 0.0)

    def test_invalid_material_aborts_sweep(self, coarse_wavelengths, thicknesses):
        stack = FilmStack(N_AIR, CauchyMaterial(a=-1.0, b=0.0), N_SILICON)
        with pytest.raises(InvalidMaterialError):
            SpectraSweep(stack, coarse_wavelengths, thicknesses).run()

    @pytest.mark.parametrize("workers", [1, 3])
    def test_solver_failure_propagates(self, coarse_wavelengths, workers):
        class FailingStack(FilmStack):
            def reflectivity(self, wavelengths, thickness_angstrom, index_profile=None):
                if thickness_angstrom >= 300.0:
                    raise InvalidRangeError("solver failed")
                return super().reflectivity(
                    wavelengths, thickness_angstrom, index_profile
                )

        stack = FailingStack(N_AIR, CauchyMaterial(1.458, 0.00354), N_SILICON)
        sweep = SpectraSweep(
            stack, coarse_wavelengths, ThicknessGrid(0.0, 1000.0, 100.0), workers
        )
        with pytest.raises(InvalidRangeError, match="solver failed"):
            sweep.run()

    def test_misaligned_profile_aborts_sweep(self, coarse_wavelengths, thicknesses):
        class ShortMaterial(BaseMaterial):
            def n(self, wavelength_nm):
                return np.full(len(wavelength_nm) + 1, 1.5)

        stack = FilmStack(N_AIR, ShortMaterial(), N_SILICON)
        with pytest.raises(DimensionMismatchError):
            SpectraSweep(stack, coarse_wavelengths, thicknesses).run()


class TestReflectivityMatrix:
    def test_shape_invariant(self, coarse_wavelengths, thicknesses):
        with pytest.raises(DimensionMismatchError, match="expected"):
            ReflectivityMatrix(
                np.zeros((len(thicknesses), len(coarse_wavelengths) + 1)),
                coarse_wavelengths,
                thicknesses,
            )

    def test_input_is_copied(self, coarse_wavelengths):
        grid = ThicknessGrid(0.0, 1.0, 1.0)
        values = np.zeros((2, len(coarse_wavelengths)))
        matrix = ReflectivityMatrix(values, coarse_wavelengths, grid)
        values[0, 0] = 1.0
        assert matrix.values[0, 0] == 0.0

    def test_select_every(self, matrix):
        selected = matrix.select(every=10)
        assert [s.thickness_angstrom for s in selected] == [
            0.0,
            1000.0,
            2000.0,
            3000.0,
            4000.0,
            5000.0,
            6000.0,
        ]
        assert all(isinstance(s, SpectrumSeries) for s in selected)
        assert np.array_equal(selected[3].reflectivity, matrix.row(30))

    def test_select_invalid_step(self, matrix):
        with pytest.raises(ValueError, match="every"):
            matrix.select(every=0)

    def test_series_label_and_points(self, matrix, coarse_wavelengths):
        series = matrix.series(10)
        assert series.label == "Thickness = 1000 Å"
        points = series.points()
        assert len(points) == len(series) == len(coarse_wavelengths)
        assert points[0] == (200.0, float(matrix.values[10, 0]))
        assert list(series) == points

    def test_nearest_row(self, matrix):
        assert matrix.nearest_row(0.0) == 0
        assert matrix.nearest_row(1040.0) == 10
        assert matrix.nearest_row(99999.0) == len(matrix) - 1

    def test_to_dataframe(self, matrix):
        df = matrix.to_dataframe()
        assert isinstance(df, pd.DataFrame)
        assert list(df.columns) == ["thickness_angstrom", "wavelength_nm", "reflectivity"]
        assert len(df) == matrix.shape[0] * matrix.shape[1]
        row = df.iloc[matrix.shape[1] + 2]
        assert row["thickness_angstrom"] == 100.0
        assert row["wavelength_nm"] == 220.0
        assert row["reflectivity"] == matrix.values[1, 2]


class TestReferenceScenario:
    """Full 0-6000 Å x 200-800 nm sweep of a Cauchy film on silicon."""

    @pytest.fixture(scope="class")
    def full_matrix(self):
        stack = FilmStack(N_AIR, CauchyMaterial(1.458, 0.00354), N_SILICON)
        return SpectraSweep(
            stack, WavelengthGrid(200.0, 800.0, 0.5), ThicknessGrid(0.0, 6000.0, 1.0)
        ).run()

    def test_shape(self, full_matrix):
        assert full_matrix.shape == (6001, 1201)

    def test_finite_and_bounded(self, full_matrix):
        values = full_matrix.values
        assert np.all(np.isfinite(values))
        assert values.min() >= 0.0
        assert values.max() <= 1.0

    def test_first_row_is_bare_substrate(self, full_matrix):
        expected = ((N_AIR - N_SILICON) / (N_AIR + N_SILICON)) ** 2
        assert_allclose(full_matrix.row(0), np.full(1201, expected), rtol=1e-12)

    def test_plot_subsample(self, full_matrix):
        labels = [s.label for s in full_matrix.select(every=1000)]
        assert labels == [f"Thickness = {d} Å" for d in range(0, 6001, 1000)]
