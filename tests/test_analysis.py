import matplotlib.pyplot as plt
import pytest

from filmreflect.thin_film import SpectralAnalyzer, SpectraSweep
from filmreflect.thin_film.analysis import DPI, FIGSIZE
from filmreflect.wavelength import ThicknessGrid


@pytest.fixture
def analyzer(stack, coarse_wavelengths):
    thicknesses = ThicknessGrid(0.0, 6000.0, 10.0)
    matrix = SpectraSweep(stack, coarse_wavelengths, thicknesses).run()
    return SpectralAnalyzer(matrix)


class TestSpectralAnalyzer:
    def test_spectra_view(self, analyzer):
        fig, ax = analyzer.spectra_view(every=100)
        assert isinstance(fig, plt.Figure)
        assert len(ax.lines) == 7
        assert ax.get_title() == "Reflectivity Spectra of stack"
        assert ax.get_xlim() == (200.0, 800.0)
        assert ax.get_ylim() == (0.0, 1.0)

    def test_spectra_view_labels_follow_thickness(self, analyzer):
        _, ax = analyzer.spectra_view(every=100)
        labels = [text.get_text() for text in ax.get_legend().get_texts()]
        assert labels[0] == "Thickness = 0 Å"
        assert labels[1] == "Thickness = 1000 Å"
        assert labels[-1] == "Thickness = 6000 Å"

    def test_spectra_view_plots_matching_rows(self, analyzer):
        _, ax = analyzer.spectra_view(every=100)
        line = ax.lines[2]
        assert list(line.get_ydata()) == list(analyzer.matrix.row(200))

    def test_spectra_view_existing_axes(self, analyzer):
        _, ax = plt.subplots()
        fig, ax_out = analyzer.spectra_view(every=300, ax=ax)
        assert ax_out is ax
        assert fig is ax.figure
        assert len(ax.lines) == 3

    def test_map_view(self, analyzer):
        fig, ax = analyzer.map_view()
        assert ax.get_ylabel() == "Thickness (Å)"
        assert len(ax.collections) == 1
        assert len(fig.axes) == 2  # plot + colorbar

    def test_save(self, analyzer, tmp_path):
        path = analyzer.save(tmp_path / "spectra.png", every=200)
        assert path.exists()
        assert path.stat().st_size > 0
        assert plt.get_fignums() == []

    def test_output_size(self):
        assert (FIGSIZE[0] * DPI, FIGSIZE[1] * DPI) == (1200, 800)
