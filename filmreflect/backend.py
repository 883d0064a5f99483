"""Backend Module

Numerical backend for filmreflect. Array code imports this module as ``be``
and calls numpy functions through it, e.g. ``be.exp`` or ``be.atleast_1d``.

Only numpy is supported.
"""

from __future__ import annotations

import numpy as np

_lib = np


def get_backend() -> str:
    """Name of the active array library."""
    return _lib.__name__


def readonly(values, dtype=float):
    """Return a float copy of ``values`` that cannot be written to."""
    arr = _lib.array(values, dtype=dtype)
    arr.flags.writeable = False
    return arr


def __getattr__(name):
    return getattr(_lib, name)
