"""Value objects exchanged between the estimation core and its callers.

Every type here is a frozen dataclass whose array fields are read-only
float64 copies. Instances are built once per solver call and handed to the
caller, which owns them exclusively.
"""

from __future__ import annotations

from dataclasses import dataclass, field

import numpy as np
from numpy.typing import NDArray

from camspec.errors import InvalidInputError
from camspec.utils.array import frozen
from camspec.wavelengths import (
    N_WAVELENGTHS,
    check_monotonic,
    check_spectral_rows,
    wavelength_grid,
)

__all__ = [
    "CHART_PATCH_COUNT",
    "CameraPriors",
    "CalibResult",
    "JiangResult",
    "SpectralSensitivity",
]

CHART_PATCH_COUNT: int = 24


@dataclass(frozen=True)
class CameraPriors:
    """Per-channel PCA bases and the chart reflectance prior.

    ``basis_r``, ``basis_g`` and ``basis_b`` are ``(33, K)`` matrices whose
    columns span plausible sensitivity curves for each channel; K may differ
    between channels. ``reflectance`` is ``(33, 24)`` with one column per
    ColorChecker patch, ordered Dark Skin through Black.
    """

    basis_r: NDArray[np.float64]
    basis_g: NDArray[np.float64]
    basis_b: NDArray[np.float64]
    reflectance: NDArray[np.float64]

    def __post_init__(self) -> None:
        for name in ("basis_r", "basis_g", "basis_b"):
            arr = check_spectral_rows(getattr(self, name), name)
            object.__setattr__(self, name, frozen(arr))
        refl = check_spectral_rows(self.reflectance, "reflectance", columns=CHART_PATCH_COUNT)
        object.__setattr__(self, "reflectance", frozen(refl))

    @property
    def bases(self) -> tuple[NDArray[np.float64], NDArray[np.float64], NDArray[np.float64]]:
        """Channel bases in R, G, B order."""
        return (self.basis_r, self.basis_g, self.basis_b)

    @property
    def component_counts(self) -> tuple[int, int, int]:
        return tuple(int(b.shape[1]) for b in self.bases)  # type: ignore[return-value]

    @property
    def patch_count(self) -> int:
        return int(self.reflectance.shape[1])


@dataclass(frozen=True)
class SpectralSensitivity:
    """Camera spectral sensitivity sampled at arbitrary wavelengths."""

    wavelengths_nm: NDArray[np.float64]
    response: NDArray[np.float64]
    camera_name: str = ""

    def __post_init__(self) -> None:
        wl = np.asarray(self.wavelengths_nm, dtype=np.float64)
        resp = np.asarray(self.response, dtype=np.float64)
        if wl.ndim != 1 or wl.size == 0:
            raise InvalidInputError("wavelengths_nm must be a non-empty 1-D array")
        check_monotonic(wl, strict=True)
        if resp.shape != (wl.size, 3):
            raise InvalidInputError(
                f"response must have shape ({wl.size}, 3), got {resp.shape}"
            )
        object.__setattr__(self, "wavelengths_nm", frozen(wl))
        object.__setattr__(self, "response", frozen(resp))

    def on_grid(self) -> NDArray[np.float64]:
        """Resample the response onto the 33-sample grid.

        Linear interpolation inside the sampled range, zero outside it.
        """

        grid = wavelength_grid()
        out = np.empty((N_WAVELENGTHS, 3), dtype=np.float64)
        for ch in range(3):
            out[:, ch] = np.interp(
                grid, self.wavelengths_nm, self.response[:, ch], left=0.0, right=0.0
            )
        return out


@dataclass(frozen=True)
class JiangResult:
    """Outcome of the spectral sensitivity recovery search."""

    estimated_cct: float
    rms_error: float
    sensitivity: NDArray[np.float64]
    illuminant: NDArray[np.float64]

    def __post_init__(self) -> None:
        object.__setattr__(self, "estimated_cct", float(self.estimated_cct))
        object.__setattr__(self, "rms_error", float(self.rms_error))
        object.__setattr__(
            self, "sensitivity", frozen(check_spectral_rows(self.sensitivity, "sensitivity", columns=3))
        )
        object.__setattr__(
            self, "illuminant", frozen(check_spectral_rows(self.illuminant, "illuminant", ndim=1))
        )

    def as_sensitivity(self, camera_name: str = "") -> SpectralSensitivity:
        return SpectralSensitivity(wavelength_grid(), self.sensitivity, camera_name=camera_name)


@dataclass(frozen=True)
class CalibResult:
    """Fitted camera-to-target colour transform and its residuals."""

    color_matrix: NDArray[np.float64] = field(default_factory=lambda: np.eye(3))
    white_balance: NDArray[np.float64] = field(default_factory=lambda: np.ones(3))
    rms_error: float = 0.0
    per_sample_error: tuple[float, ...] = ()

    def __post_init__(self) -> None:
        matrix = np.asarray(self.color_matrix, dtype=np.float64)
        gains = np.asarray(self.white_balance, dtype=np.float64)
        if matrix.shape != (3, 3):
            raise InvalidInputError(f"color_matrix must be 3x3, got {matrix.shape}")
        if gains.shape != (3,):
            raise InvalidInputError(f"white_balance must have 3 entries, got {gains.shape}")
        object.__setattr__(self, "color_matrix", frozen(matrix))
        object.__setattr__(self, "white_balance", frozen(gains))
        object.__setattr__(self, "rms_error", float(self.rms_error))
        object.__setattr__(self, "per_sample_error", tuple(float(e) for e in self.per_sample_error))

    @property
    def sample_count(self) -> int:
        return len(self.per_sample_error)
