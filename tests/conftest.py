"""Shared fixtures for the camspec test suite."""

from __future__ import annotations

import numpy as np
import pytest

from camspec.physics import daylight_spd, simulate_camera_rgb
from camspec.types import CameraPriors
from camspec.wavelengths import wavelength_grid

TRUE_CCT = 6500.0


def _gaussian(center: float, width: float) -> np.ndarray:
    nm = wavelength_grid()
    return np.exp(-0.5 * ((nm - center) / width) ** 2)


@pytest.fixture(scope="session")
def reflectance() -> np.ndarray:
    """Smooth synthetic reflectances for 24 patches, shape (33, 24)."""

    rng = np.random.default_rng(1234)
    columns = []
    for _ in range(24):
        centers = rng.uniform(380.0, 740.0, size=3)
        widths = rng.uniform(30.0, 90.0, size=3)
        weights = rng.uniform(0.0, 0.6, size=3)
        spectrum = 0.05 + sum(w * _gaussian(c, s) for w, c, s in zip(weights, centers, widths))
        columns.append(np.clip(spectrum, 0.02, 0.98))
    return np.stack(columns, axis=1)


@pytest.fixture(scope="session")
def true_sensitivity() -> np.ndarray:
    """Gaussian R, G, B sensitivities, shape (33, 3)."""

    return np.stack(
        [_gaussian(600.0, 35.0), 0.9 * _gaussian(535.0, 40.0), 0.7 * _gaussian(460.0, 30.0)],
        axis=1,
    )


@pytest.fixture(scope="session")
def rank_one_priors(true_sensitivity: np.ndarray, reflectance: np.ndarray) -> CameraPriors:
    return CameraPriors(
        basis_r=true_sensitivity[:, [0]],
        basis_g=true_sensitivity[:, [1]],
        basis_b=true_sensitivity[:, [2]],
        reflectance=reflectance,
    )


@pytest.fixture(scope="session")
def observations(true_sensitivity: np.ndarray, reflectance: np.ndarray) -> np.ndarray:
    """Chart RGB simulated under daylight at 6500 K, scaled to a unit maximum."""

    rgb = simulate_camera_rgb(true_sensitivity, daylight_spd(TRUE_CCT), reflectance)
    return rgb / rgb.max()
