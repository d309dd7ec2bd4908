"""Tests for the value objects in :mod:`camspec.types`."""

from __future__ import annotations

import dataclasses

import numpy as np
import pytest

from camspec.errors import InvalidInputError
from camspec.types import CalibResult, CameraPriors, JiangResult, SpectralSensitivity
from camspec.utils import as_rgb_array
from camspec.wavelengths import N_WAVELENGTHS, check_spectral_rows, wavelength_grid


def test_wavelength_grid_layout():
    grid = wavelength_grid()
    assert grid.shape == (N_WAVELENGTHS,) == (33,)
    assert grid[0] == 400.0
    assert grid[-1] == 720.0
    assert not grid.flags.writeable


def test_priors_are_immutable(rank_one_priors):
    assert rank_one_priors.component_counts == (1, 1, 1)
    assert rank_one_priors.patch_count == 24
    with pytest.raises(ValueError):
        rank_one_priors.reflectance[0, 0] = 1.0
    with pytest.raises(dataclasses.FrozenInstanceError):
        rank_one_priors.basis_r = np.zeros((33, 1))  # type: ignore[misc]


def test_priors_reject_wrong_wavelength_count(reflectance):
    with pytest.raises(InvalidInputError, match="33 wavelength rows"):
        CameraPriors(
            basis_r=np.ones((32, 2)),
            basis_g=np.ones((33, 2)),
            basis_b=np.ones((33, 2)),
            reflectance=reflectance,
        )


def test_priors_copy_inputs(reflectance):
    basis = np.ones((33, 2))
    priors = CameraPriors(basis_r=basis, basis_g=basis, basis_b=basis, reflectance=reflectance)
    basis[0, 0] = 5.0
    assert priors.basis_r[0, 0] == 1.0


def test_spectral_sensitivity_resamples_to_grid():
    wl = np.arange(380.0, 781.0, 5.0)
    response = np.stack([wl, 2 * wl, 3 * wl], axis=1)
    css = SpectralSensitivity(wl, response, camera_name="cam")

    on_grid = css.on_grid()

    assert on_grid.shape == (33, 3)
    np.testing.assert_allclose(on_grid[:, 1], 2 * wavelength_grid())


def test_spectral_sensitivity_zero_outside_sampled_range():
    wl = np.array([500.0, 600.0])
    css = SpectralSensitivity(wl, np.ones((2, 3)))
    on_grid = css.on_grid()
    assert on_grid[0, 0] == 0.0
    assert on_grid[-1, 0] == 0.0
    assert on_grid[15, 0] == 1.0


def test_spectral_sensitivity_validation():
    with pytest.raises(InvalidInputError):
        SpectralSensitivity(np.array([500.0, 490.0]), np.ones((2, 3)))
    with pytest.raises(InvalidInputError):
        SpectralSensitivity(np.array([500.0, 510.0]), np.ones((3, 3)))


def test_jiang_result_exports_sensitivity():
    curves = np.random.default_rng(0).uniform(size=(33, 3))
    result = JiangResult(6500, 0.1, curves, np.ones(33))
    css = result.as_sensitivity("cam")
    assert css.camera_name == "cam"
    np.testing.assert_allclose(css.on_grid(), curves)
    assert isinstance(result.estimated_cct, float)


def test_calib_result_defaults():
    result = CalibResult()
    np.testing.assert_array_equal(result.color_matrix, np.eye(3))
    np.testing.assert_array_equal(result.white_balance, np.ones(3))
    assert result.sample_count == 0
    with pytest.raises(InvalidInputError):
        CalibResult(color_matrix=np.eye(2))


def test_check_spectral_rows_accepts_vectors_and_rejects_nan():
    out = check_spectral_rows(np.ones(33), "spd", ndim=1)
    assert out.dtype == np.float64
    bad = np.ones((33, 2))
    bad[4, 1] = np.inf
    with pytest.raises(InvalidInputError, match="non-finite"):
        check_spectral_rows(bad, "basis")


def test_as_rgb_array_shapes():
    assert as_rgb_array([], "empty").shape == (0, 3)
    with pytest.raises(InvalidInputError, match="RGB triples"):
        as_rgb_array(np.ones((4, 2)), "pairs")
    with pytest.raises(InvalidInputError, match="exactly 2"):
        as_rgb_array(np.ones((3, 3)), "rgb", rows=2)


def test_check_spectral_rows_rejects_ragged_input():
    ragged = [[1.0, 2.0]] * 32 + [[1.0]]
    with pytest.raises(InvalidInputError, match="numeric array"):
        check_spectral_rows(ragged, "basis")
