"""Forward model of camera RGB responses to reflective chart patches.

The response of channel ``c`` to patch ``i`` is the discrete spectral integral

    rgb[i, c] = sum_l reflectance[l, i] * illuminant[l] * sensitivity[l, c] * dl

over the 33-sample grid. It is the model that
:mod:`camspec.spectral.jiang` inverts, and it is used to synthesise
observations for a known camera and illuminant.
"""

from __future__ import annotations

import numpy as np
from numpy.typing import ArrayLike, NDArray

from camspec.errors import InvalidInputError
from camspec.types import JiangResult
from camspec.wavelengths import WAVELENGTH_STEP_NM, check_spectral_rows

__all__ = ["illuminate", "simulate_camera_rgb", "reproject"]


def illuminate(reflectance: ArrayLike, illuminant: ArrayLike) -> NDArray[np.float64]:
    """Scale every wavelength row of ``reflectance`` by the illuminant SPD."""

    refl = check_spectral_rows(reflectance, "reflectance")
    spd = check_spectral_rows(illuminant, "illuminant", ndim=1)
    return refl * spd[:, np.newaxis]


def simulate_camera_rgb(
    sensitivity: ArrayLike,
    illuminant: ArrayLike,
    reflectance: ArrayLike,
    *,
    delta_lambda: float = float(WAVELENGTH_STEP_NM),
) -> NDArray[np.float64]:
    """Return the ``(patches, 3)`` RGB a camera records for each reflectance column."""

    if not np.isfinite(delta_lambda) or delta_lambda <= 0.0:
        raise InvalidInputError(f"delta_lambda must be positive, got {delta_lambda!r}")
    css = check_spectral_rows(sensitivity, "sensitivity", columns=3)
    radiance = illuminate(reflectance, illuminant)
    return (radiance.T @ css) * delta_lambda


def reproject(
    result: JiangResult,
    reflectance: ArrayLike,
    *,
    delta_lambda: float = float(WAVELENGTH_STEP_NM),
) -> NDArray[np.float64]:
    """Predict chart RGB from a recovered sensitivity and its illuminant.

    The recovered curve is normalised to a unit maximum, so the prediction
    matches the input observations only up to a per-camera scale.
    """

    return simulate_camera_rgb(
        result.sensitivity, result.illuminant, reflectance, delta_lambda=delta_lambda
    )
