"""camspec: colorimetric and spectral calibration of digital cameras.

The package recovers calibration parameters from measured colour-chart
patches. Two solvers form its core:

* :func:`camspec.calib.solve_color_matrix` fits a white-balanced 3x3 colour
  matrix from measured and reference RGB triples;
* :class:`camspec.spectral.JiangEstimator` recovers continuous spectral
  sensitivity curves and the scene daylight temperature from 24 chart
  observations and per-camera PCA priors.

Image decoding, chart detection and file formats are left to callers; the
solvers exchange plain numpy arrays and the value objects in
:mod:`camspec.types`.
"""

from __future__ import annotations

import importlib
from typing import Any

from .errors import InvalidInputError
from .types import CalibResult, CameraPriors, JiangResult, SpectralSensitivity
from .version import __version__

__all__ = [
    "__version__",
    "CalibResult",
    "CameraPriors",
    "InvalidInputError",
    "JiangResult",
    "SpectralSensitivity",
    "calib",
    "charts",
    "config",
    "physics",
    "spectral",
    "utils",
    "wavelengths",
]

_SUBMODULES = {
    "calib",
    "charts",
    "config",
    "physics",
    "spectral",
    "utils",
    "wavelengths",
}


def __getattr__(name: str) -> Any:
    if name in _SUBMODULES:
        module = importlib.import_module(f"{__name__}.{name}")
        globals()[name] = module
        return module
    raise AttributeError(f"module {__name__!r} has no attribute {name!r}")
