"""Camera profile construction from sampled chart patches.

A :class:`Profile` bundles the fitted colour matrix and white-balance gains
with the metadata a downstream exporter records: camera name, illuminant,
chart type and target colour space. Patch sampling and profile files live
outside this package; here the measured patches arrive as a mapping from
chart index to camera RGB.
"""

from __future__ import annotations

import logging
from collections.abc import Mapping
from dataclasses import dataclass, field

import numpy as np
from numpy.typing import ArrayLike, NDArray

from camspec.calib.matrix import apply_color_correction, solve_with_config
from camspec.charts import PATCH_COUNT, ReferenceSet
from camspec.config import MatrixSolverConfig
from camspec.errors import InvalidInputError
from camspec.types import CalibResult
from camspec.utils.array import as_rgb_array, frozen

logger = logging.getLogger(__name__)

__all__ = ["MIN_MATCHED_PATCHES", "Profile", "calibrate_from_patches"]

MIN_MATCHED_PATCHES = 6


@dataclass(frozen=True)
class Profile:
    camera_name: str
    illuminant: str = "D65"
    chart_type: str = "ColorChecker24"
    target_color_space: str = "linear_srgb"
    color_matrix: NDArray[np.float64] = field(default_factory=lambda: np.eye(3))
    white_balance: NDArray[np.float64] = field(default_factory=lambda: np.ones(3))

    def __post_init__(self) -> None:
        matrix = np.asarray(self.color_matrix, dtype=np.float64)
        gains = np.asarray(self.white_balance, dtype=np.float64)
        if matrix.shape != (3, 3):
            raise InvalidInputError(f"color_matrix must be 3x3, got {matrix.shape}")
        if gains.shape != (3,):
            raise InvalidInputError(f"white_balance must have 3 entries, got {gains.shape}")
        object.__setattr__(self, "color_matrix", frozen(matrix))
        object.__setattr__(self, "white_balance", frozen(gains))

    def apply(self, rgb: ArrayLike, *, encode_srgb: bool = False) -> NDArray[np.float64]:
        """Map linear camera RGB into the profile's target space."""
        return apply_color_correction(
            rgb, self.color_matrix, self.white_balance, encode_srgb=encode_srgb
        )


def calibrate_from_patches(
    measured: Mapping[int, ArrayLike],
    references: ReferenceSet,
    *,
    camera_name: str = "camera",
    illuminant: str | None = None,
    config: MatrixSolverConfig | None = None,
) -> tuple[Profile, CalibResult]:
    """Fit a profile from measured chart patches keyed by patch index.

    Every reference patch whose index appears in ``measured`` forms one
    sample; references without a measurement are skipped.

    Raises
    ------
    InvalidInputError
        If fewer than 24 patches were measured or fewer than
        :data:`MIN_MATCHED_PATCHES` of them match a reference.
    """

    if len(measured) < PATCH_COUNT:
        raise InvalidInputError(
            f"Expected {PATCH_COUNT} sampled patches, got {len(measured)}"
        )

    pairs = [(measured[ref.index], ref.linear_rgb) for ref in references if ref.index in measured]
    if len(pairs) < MIN_MATCHED_PATCHES:
        raise InvalidInputError(
            f"Too few matching patches for calibration: {len(pairs)} < {MIN_MATCHED_PATCHES}"
        )

    cam = as_rgb_array([m for m, _ in pairs], "measured")
    ref = np.stack([r for _, r in pairs])
    result = solve_with_config(cam, ref, config)
    logger.info(
        "Calibrated %s from %d patches (rms=%.4g)", camera_name, len(pairs), result.rms_error
    )

    profile = Profile(
        camera_name=camera_name,
        illuminant=illuminant or references.illuminant,
        target_color_space=references.color_space,
        color_matrix=result.color_matrix,
        white_balance=result.white_balance,
    )
    return profile, result
