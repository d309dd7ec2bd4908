"""Spectral physics for the estimation core.

* Daylight illuminant synthesis from correlated colour temperature
  (:mod:`.daylight`).
* The forward camera response model used to simulate chart observations
  (:mod:`.render`).
"""

from .daylight import (
    CIE_LOCUS_RANGE_K,
    DAYLIGHT_BASIS,
    daylight_chromaticity,
    daylight_mixing_coefficients,
    daylight_spd,
)
from .render import illuminate, reproject, simulate_camera_rgb

__all__ = [
    "CIE_LOCUS_RANGE_K",
    "DAYLIGHT_BASIS",
    "daylight_chromaticity",
    "daylight_mixing_coefficients",
    "daylight_spd",
    "illuminate",
    "reproject",
    "simulate_camera_rgb",
]
