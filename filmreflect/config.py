"""Configuration for a reflectivity sweep.

``SpectraConfig`` holds every scalar input of the pipeline. The defaults
reproduce a SiO2-like Cauchy film on silicon in air, swept from 0 to 6000 Å
over 200-800 nm. Configurations round-trip through JSON files.
"""

from __future__ import annotations

import json
from dataclasses import asdict, dataclass, field, fields
from pathlib import Path

from filmreflect.materials import BaseMaterial
from filmreflect.thin_film import FilmStack
from filmreflect.wavelength import ThicknessGrid, WavelengthGrid


def _default_film() -> dict:
    return {"type": "CauchyMaterial", "a": 1.458, "b": 0.00354, "name": None}


@dataclass
class SpectraConfig:
    """Inputs of a reflectivity sweep.

    Attributes:
        wavelength_start_nm: First wavelength sample.
        wavelength_stop_nm: Last wavelength sample (inclusive).
        wavelength_step_nm: Wavelength spacing.
        thickness_start_angstrom: First film thickness.
        thickness_stop_angstrom: Last film thickness (inclusive).
        thickness_step_angstrom: Thickness spacing.
        incident_index: Index of the ambient medium.
        substrate_index: Index of the substrate.
        film: Film dispersion law, as produced by ``BaseMaterial.to_dict``.
        plot_every: Row subsampling step of the spectra plot.
        output_path: Image file written by ``pipeline.run``.
        workers: Threads used by the sweep.
    """

    wavelength_start_nm: float = 200.0
    wavelength_stop_nm: float = 800.0
    wavelength_step_nm: float = 0.5
    thickness_start_angstrom: float = 0.0
    thickness_stop_angstrom: float = 6000.0
    thickness_step_angstrom: float = 1.0
    incident_index: float = 1.0
    substrate_index: float = 3.5
    film: dict = field(default_factory=_default_film)
    plot_every: int = 1000
    output_path: str = "reflectivity_spectra.png"
    workers: int = 1

    def wavelength_grid(self) -> WavelengthGrid:
        return WavelengthGrid(
            self.wavelength_start_nm, self.wavelength_stop_nm, self.wavelength_step_nm
        )

    def thickness_grid(self) -> ThicknessGrid:
        return ThicknessGrid(
            self.thickness_start_angstrom,
            self.thickness_stop_angstrom,
            self.thickness_step_angstrom,
        )

    def film_material(self) -> BaseMaterial:
        return BaseMaterial.from_dict(self.film)

    def build_stack(self) -> FilmStack:
        return FilmStack(self.incident_index, self.film_material(), self.substrate_index)

    def to_dict(self) -> dict:
        return asdict(self)

    @classmethod
    def from_dict(cls, data: dict) -> SpectraConfig:
        """Create a config from a dictionary, rejecting unknown keys.

        Raises:
            ValueError: If ``data`` contains keys that are not config fields.
        """
        known = {f.name for f in fields(cls)}
        unknown = set(data) - known
        if unknown:
            raise ValueError(f"Unknown configuration keys: {sorted(unknown)}")
        return cls(**data)


def load_config(path: str | Path) -> SpectraConfig:
    """Read a SpectraConfig from a JSON file."""
    with open(path, encoding="utf-8") as f:
        return SpectraConfig.from_dict(json.load(f))


def save_config(config: SpectraConfig, path: str | Path) -> None:
    """Write a SpectraConfig to a JSON file."""
    with open(path, "w", encoding="utf-8") as f:
        json.dump(config.to_dict(), f, indent=2)
