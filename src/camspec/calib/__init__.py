"""Colorimetric calibration: matrix fitting and profile construction."""

from .matrix import (
    apply_color_correction,
    estimate_white_balance,
    solve_color_matrix,
    solve_with_config,
    srgb_encode,
)
from .profile import MIN_MATCHED_PATCHES, Profile, calibrate_from_patches

__all__ = [
    "MIN_MATCHED_PATCHES",
    "Profile",
    "apply_color_correction",
    "calibrate_from_patches",
    "estimate_white_balance",
    "solve_color_matrix",
    "solve_with_config",
    "srgb_encode",
]
