"""Base Material Module

Dispersion laws map a wavelength in nanometers to a real refractive index.
The reflectivity solver only consumes the resulting index profile, so any
subclass of ``BaseMaterial`` can be used for the film.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import TYPE_CHECKING, Any, TypeAlias

import filmreflect.backend as be
from filmreflect.errors import DimensionMismatchError, InvalidMaterialError

if TYPE_CHECKING:
    from filmreflect.wavelength import WavelengthGrid

Array: TypeAlias = Any  # be.ndarray


def check_index(n: float | Array, name: str = "refractive index") -> None:
    """Raise InvalidMaterialError unless every value of ``n`` is finite and > 0."""
    values = be.atleast_1d(be.asarray(n, dtype=float))
    bad = ~be.isfinite(values) | (values <= 0)
    if be.any(bad):
        first = int(be.flatnonzero(bad)[0])
        raise InvalidMaterialError(
            f"{name} must be positive and finite, got {values[first]} at index {first}"
        )


class BaseMaterial(ABC):
    """Base class for dispersion laws.

    Subclasses are registered by class name so that ``BaseMaterial.from_dict``
    can rebuild any of them from the output of ``to_dict``.

    Args:
        name: Optional label used in plots and reports.
    """

    _registry: dict[str, type[BaseMaterial]] = {}

    def __init_subclass__(cls, **kwargs):
        """Automatically register subclasses."""
        super().__init_subclass__(**kwargs)
        BaseMaterial._registry[cls.__name__] = cls

    def __init__(self, name: str | None = None):
        self.name = name

    @abstractmethod
    def n(self, wavelength_nm: float | Array) -> float | Array:
        """Refractive index at the given wavelength(s) in nanometers."""

    def index_profile(self, wavelengths: WavelengthGrid | Array) -> Array:
        """Evaluate the law over a wavelength grid.

        Args:
            wavelengths: Wavelength grid or 1-D array in nanometers.

        Returns:
            Read-only array with one index per wavelength sample.

        Raises:
            DimensionMismatchError: If the law does not return one value per
                wavelength.
            InvalidMaterialError: If any index is non-positive or non-finite.
        """
        wl = be.atleast_1d(be.asarray(wavelengths, dtype=float))
        profile = be.asarray(self.n(wl), dtype=float)
        if profile.ndim == 0:
            profile = be.full(wl.shape, float(profile))
        if profile.shape != wl.shape:
            raise DimensionMismatchError(
                f"{type(self).__name__} returned {profile.shape[0]} indices "
                f"for {wl.shape[0]} wavelengths"
            )
        check_index(profile, f"{self.label} index")
        return be.readonly(profile)

    @property
    def label(self) -> str:
        return self.name or type(self).__name__

    def to_dict(self) -> dict:
        """Serialize the material. Subclasses add their coefficients."""
        return {"type": type(self).__name__, "name": self.name}

    @classmethod
    def from_dict(cls, data: dict) -> BaseMaterial:
        """Create a material from a dictionary produced by ``to_dict``.

        Raises:
            ValueError: If the material type is missing or unknown.
        """
        material_type = data.get("type")
        if material_type not in cls._registry:
            raise ValueError(f"Unknown material type: {material_type}")
        params = {k: v for k, v in data.items() if k != "type"}
        return cls._registry[material_type](**params)

    def __repr__(self):
        params = ", ".join(
            f"{k}={v!r}" for k, v in self.to_dict().items() if k not in ("type",)
        )
        return f"{type(self).__name__}({params})"
