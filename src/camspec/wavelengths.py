"""The fixed visible-range wavelength grid shared by every spectral quantity.

All spectra in :mod:`camspec` are sampled from 400 nm to 720 nm in 10 nm steps
(33 samples). The grid is implicit: arrays carry values only, and helpers in
this module check that their leading axis has the expected length.
"""

from __future__ import annotations

import numpy as np
from numpy.typing import ArrayLike, NDArray

from camspec.errors import InvalidInputError

__all__ = [
    "WAVELENGTH_START_NM",
    "WAVELENGTH_STOP_NM",
    "WAVELENGTH_STEP_NM",
    "N_WAVELENGTHS",
    "wavelength_grid",
    "check_monotonic",
    "check_spectral_rows",
]

WAVELENGTH_START_NM: int = 400
WAVELENGTH_STOP_NM: int = 720
WAVELENGTH_STEP_NM: int = 10
N_WAVELENGTHS: int = (WAVELENGTH_STOP_NM - WAVELENGTH_START_NM) // WAVELENGTH_STEP_NM + 1

_GRID = np.arange(
    WAVELENGTH_START_NM, WAVELENGTH_STOP_NM + WAVELENGTH_STEP_NM, WAVELENGTH_STEP_NM, dtype=np.float64
)
_GRID.setflags(write=False)


def wavelength_grid() -> NDArray[np.float64]:
    """Return the read-only 33-sample wavelength grid in nanometres."""

    return _GRID


def check_monotonic(values: ArrayLike, *, strict: bool = True) -> None:
    """Raise :class:`InvalidInputError` if ``values`` is not increasing."""

    arr = np.asarray(values, dtype=np.float64)
    if arr.ndim != 1:
        raise InvalidInputError("Wavelengths must be 1-D")
    diffs = np.diff(arr)
    bad = diffs <= 0.0 if strict else diffs < 0.0
    if np.any(bad):
        kind = "strictly increasing" if strict else "non-decreasing"
        raise InvalidInputError(f"Wavelengths must be {kind}")


def check_spectral_rows(
    values: ArrayLike,
    name: str,
    *,
    ndim: int = 2,
    columns: int | None = None,
) -> NDArray[np.float64]:
    """Coerce ``values`` to float64 and validate it against the grid.

    The first axis must have :data:`N_WAVELENGTHS` entries. ``ndim`` selects
    between a single spectrum (1) and a stack of column spectra (2); when
    ``columns`` is given the second axis must match it exactly.
    """

    try:
        arr = np.asarray(values, dtype=np.float64)
    except (ValueError, TypeError) as exc:
        raise InvalidInputError(f"{name} must be a numeric array") from exc
    if arr.ndim != ndim:
        raise InvalidInputError(f"{name} must be {ndim}-D, got shape {arr.shape}")
    if arr.shape[0] != N_WAVELENGTHS:
        raise InvalidInputError(
            f"{name} must have {N_WAVELENGTHS} wavelength rows, got {arr.shape[0]}"
        )
    if ndim == 2 and arr.shape[1] == 0:
        raise InvalidInputError(f"{name} must have at least one column")
    if columns is not None and ndim == 2 and arr.shape[1] != columns:
        raise InvalidInputError(f"{name} must have exactly {columns} columns, got {arr.shape[1]}")
    if not np.all(np.isfinite(arr)):
        raise InvalidInputError(f"{name} contains non-finite values")
    return arr
