"""CIE daylight illuminant synthesis on the 400-720 nm grid.

A daylight spectral power distribution is a linear mix of three basis spectra
``S0 + M1*S1 + M2*S2`` (Judd et al.). The mixing coefficients follow from the
chromaticity of the daylight locus at the requested correlated colour
temperature:

1. ``xD`` from a cubic in ``1/T`` whose coefficients depend on whether ``T``
   lies in the CIE range ``[4000, 7000]`` K;
2. ``yD = -3 xD**2 + 2.87 xD - 0.275``;
3. ``M1`` and ``M2`` as ratios sharing the denominator
   ``0.0241 + 0.2562 xD - 0.7341 yD``.

Outside 4000-7000 K the polynomial is an extrapolation: numerically defined
for any positive temperature but not a physically endorsed daylight. The SPD
is returned unnormalised (the 560 nm sample is always 100 because S1 and S2
vanish there).
"""

from __future__ import annotations

import math

import numpy as np
from numpy.typing import NDArray

from camspec.errors import InvalidInputError

__all__ = [
    "DAYLIGHT_BASIS",
    "CIE_LOCUS_RANGE_K",
    "daylight_chromaticity",
    "daylight_mixing_coefficients",
    "daylight_spd",
]

# S0, S1, S2 at 400, 410, ..., 720 nm.
_BASIS_TABLE: tuple[tuple[float, float, float], ...] = (
    (94.8, 43.4, -1.1),
    (104.8, 46.3, -0.5),
    (105.9, 43.9, -0.7),
    (96.8, 37.1, -1.2),
    (113.9, 36.7, -2.6),
    (125.6, 35.9, -2.9),
    (125.5, 32.6, -2.8),
    (121.3, 27.9, -2.6),
    (121.3, 24.3, -2.6),
    (113.5, 20.1, -1.8),
    (113.1, 16.2, -1.5),
    (110.8, 13.2, -1.3),
    (106.5, 8.6, -1.2),
    (108.8, 6.1, -1.0),
    (105.3, 4.2, -0.5),
    (104.4, 1.9, -0.3),
    (100.0, 0.0, 0.0),
    (96.0, -1.6, 0.2),
    (95.1, -3.5, 0.5),
    (89.1, -3.5, 2.1),
    (90.5, -5.8, 3.2),
    (90.3, -7.2, 4.1),
    (88.4, -8.6, 4.7),
    (84.0, -9.5, 5.1),
    (85.1, -10.9, 6.7),
    (81.9, -10.7, 7.3),
    (82.6, -12.0, 8.6),
    (84.9, -14.0, 9.8),
    (81.3, -13.6, 10.2),
    (71.9, -12.0, 8.3),
    (74.3, -13.3, 9.6),
    (76.4, -12.9, 8.5),
    (63.3, -10.6, 7.0),
)

DAYLIGHT_BASIS: NDArray[np.float64] = np.array(_BASIS_TABLE, dtype=np.float64)
"""Read-only ``(33, 3)`` table with columns S0, S1, S2."""
DAYLIGHT_BASIS.setflags(write=False)

CIE_LOCUS_RANGE_K: tuple[float, float] = (4000.0, 7000.0)

# (a3, a2, a1, a0) for xD = a3/T^3 + a2/T^2 + a1/T + a0
_LOCUS_COEFFS_CIE = (-4.6070e9, 2.9678e6, 0.09911e3, 0.244063)
_LOCUS_COEFFS_EXTENDED = (-2.0064e9, 1.9018e6, 0.24748e3, 0.23704)


def _check_cct(cct: float) -> float:
    value = float(cct)
    if not math.isfinite(value) or value <= 0.0:
        raise InvalidInputError(f"CCT must be a positive finite temperature, got {cct!r}")
    return value


def daylight_chromaticity(cct: float) -> tuple[float, float]:
    """Return the CIE 1931 ``(xD, yD)`` chromaticity of daylight at ``cct``."""

    t = _check_cct(cct)
    lo, hi = CIE_LOCUS_RANGE_K
    a3, a2, a1, a0 = _LOCUS_COEFFS_CIE if lo <= t <= hi else _LOCUS_COEFFS_EXTENDED
    x_d = a3 / t**3 + a2 / t**2 + a1 / t + a0
    y_d = -3.0 * x_d * x_d + 2.87 * x_d - 0.275
    return x_d, y_d


def daylight_mixing_coefficients(cct: float) -> tuple[float, float]:
    """Return the ``(M1, M2)`` weights applied to the S1 and S2 basis spectra.

    The shared denominator is not guarded; a value at or near zero yields
    infinite or NaN weights, which callers are expected to reject.
    """

    x_d, y_d = daylight_chromaticity(cct)
    denom = 0.0241 + 0.2562 * x_d - 0.7341 * y_d
    with np.errstate(divide="ignore", invalid="ignore"):
        m1 = np.float64(-1.3515 - 1.7703 * x_d + 5.9114 * y_d) / np.float64(denom)
        m2 = np.float64(0.03 - 31.4424 * x_d + 30.0717 * y_d) / np.float64(denom)
    return float(m1), float(m2)


def daylight_spd(cct: float) -> NDArray[np.float64]:
    """Synthesize the relative daylight SPD (33 samples) for ``cct`` Kelvin."""

    m1, m2 = daylight_mixing_coefficients(cct)
    s0, s1, s2 = DAYLIGHT_BASIS[:, 0], DAYLIGHT_BASIS[:, 1], DAYLIGHT_BASIS[:, 2]
    return s0 + m1 * s1 + m2 * s2
