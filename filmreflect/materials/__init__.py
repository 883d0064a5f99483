"""Dispersion laws for the film material."""

from .abbe import AbbeMaterial
from .base import BaseMaterial
from .cauchy import CauchyMaterial
from .ideal import IdealMaterial
from .sellmeier import SellmeierMaterial

__all__ = [
    "AbbeMaterial",
    "BaseMaterial",
    "CauchyMaterial",
    "IdealMaterial",
    "SellmeierMaterial",
]
