"""Unit tests for CIE daylight illuminant synthesis."""

from __future__ import annotations

import numpy as np
import pytest

from camspec.errors import InvalidInputError
from camspec.physics import (
    DAYLIGHT_BASIS,
    daylight_chromaticity,
    daylight_mixing_coefficients,
    daylight_spd,
)
from camspec.wavelengths import N_WAVELENGTHS, wavelength_grid

_IDX_560 = int(np.flatnonzero(wavelength_grid() == 560.0)[0])


def test_basis_is_frozen_table():
    assert DAYLIGHT_BASIS.shape == (N_WAVELENGTHS, 3)
    assert not DAYLIGHT_BASIS.flags.writeable
    with pytest.raises(ValueError):
        DAYLIGHT_BASIS[0, 0] = 0.0
    np.testing.assert_allclose(DAYLIGHT_BASIS[_IDX_560], [100.0, 0.0, 0.0])


def test_d65_chromaticity_matches_cie_white_point():
    x_d, y_d = daylight_chromaticity(6504.0)
    assert x_d == pytest.approx(0.3127, abs=1e-3)
    assert y_d == pytest.approx(0.3290, abs=1e-3)


def test_polynomial_branch_selection_is_inclusive():
    # Inside [4000, 7000] the CIE coefficients apply, including both ends.
    t = 7000.0
    expected_inside = -4.6070e9 / t**3 + 2.9678e6 / t**2 + 0.09911e3 / t + 0.244063
    assert daylight_chromaticity(t)[0] == pytest.approx(expected_inside, rel=1e-12)

    t = 7000.5
    expected_outside = -2.0064e9 / t**3 + 1.9018e6 / t**2 + 0.24748e3 / t + 0.23704
    assert daylight_chromaticity(t)[0] == pytest.approx(expected_outside, rel=1e-12)

    t = 4000.0
    expected_low = -4.6070e9 / t**3 + 2.9678e6 / t**2 + 0.09911e3 / t + 0.244063
    assert daylight_chromaticity(t)[0] == pytest.approx(expected_low, rel=1e-12)


def test_spd_is_linear_mix_of_basis():
    m1, m2 = daylight_mixing_coefficients(5000.0)
    expected = DAYLIGHT_BASIS[:, 0] + m1 * DAYLIGHT_BASIS[:, 1] + m2 * DAYLIGHT_BASIS[:, 2]
    np.testing.assert_allclose(daylight_spd(5000.0), expected, rtol=1e-12)


def test_spd_finite_over_search_range():
    for cct in range(4000, 27001, 100):
        spd = daylight_spd(float(cct))
        assert spd.shape == (N_WAVELENGTHS,)
        assert np.all(np.isfinite(spd))
        assert spd[_IDX_560] == pytest.approx(100.0)


def test_higher_temperature_is_bluer():
    warm = daylight_spd(4500.0)
    cool = daylight_spd(12000.0)
    assert cool[0] / cool[-1] > warm[0] / warm[-1]


@pytest.mark.parametrize("cct", [0.0, -6500.0, float("nan"), float("inf")])
def test_rejects_non_physical_temperature(cct):
    with pytest.raises(InvalidInputError):
        daylight_spd(cct)
