import matplotlib
import pytest

matplotlib.use("Agg")  # use non-interactive backend for testing

from filmreflect.materials import CauchyMaterial  # noqa: E402
from filmreflect.thin_film import FilmStack  # noqa: E402
from filmreflect.wavelength import ThicknessGrid, WavelengthGrid  # noqa: E402

N_AIR = 1.0
N_SILICON = 3.5
CAUCHY_A = 1.458
CAUCHY_B = 0.00354


@pytest.fixture
def film():
    return CauchyMaterial(a=CAUCHY_A, b=CAUCHY_B)


@pytest.fixture
def stack(film):
    return FilmStack(incident_index=N_AIR, film=film, substrate_index=N_SILICON)


@pytest.fixture
def wavelengths():
    return WavelengthGrid(200.0, 800.0, 0.5)


@pytest.fixture
def coarse_wavelengths():
    return WavelengthGrid(200.0, 800.0, 10.0)


@pytest.fixture
def thicknesses():
    return ThicknessGrid(0.0, 6000.0, 100.0)


@pytest.fixture(autouse=True)
def close_figures():
    yield
    import matplotlib.pyplot as plt

    plt.close("all")
