"""Regularised least-squares fit of a camera-to-target colour matrix.

Given ``n`` measured camera RGB triples and their target-space references,
the solver optionally estimates grey-world white-balance gains, applies them,
and fits the 3x3 matrix ``X`` minimising

    sum_i ||X a_i - b_i||**2 + lambda ||X||_F**2

through the ridge normal equations ``(A^T A + lambda I) X^T = A^T B``. The
symmetric system is factorised (LDL^T) rather than inverted. ``lambda``
keeps the fit well posed when patches are few or nearly collinear.
"""

from __future__ import annotations

import logging

import numpy as np
import scipy.linalg
from numpy.typing import ArrayLike, NDArray

from camspec.config import MatrixSolverConfig
from camspec.errors import InvalidInputError
from camspec.types import CalibResult
from camspec.utils.array import as_rgb_array

logger = logging.getLogger(__name__)

__all__ = [
    "estimate_white_balance",
    "solve_color_matrix",
    "solve_with_config",
    "apply_color_correction",
    "srgb_encode",
]

_SRGB_LINEAR_CUTOFF = 0.0031308


def estimate_white_balance(measured: ArrayLike) -> NDArray[np.float64]:
    """Grey-world gains that bring the mean measured patch to neutral.

    ``gain[c] = mean(channel_means) / channel_means[c]``; a channel whose
    mean is not positive keeps a unit gain. An empty input returns ones.
    """

    samples = as_rgb_array(measured, "measured")
    gains = np.ones(3, dtype=np.float64)
    if samples.shape[0] == 0:
        return gains
    means = samples.mean(axis=0)
    grey = float(means.mean())
    positive = means > 0.0
    gains[positive] = grey / means[positive]
    return gains


def _solve_normal_equations(a: NDArray[np.float64], b: NDArray[np.float64], regularization: float) -> NDArray[np.float64]:
    if not np.any(a):
        logger.warning("All measured samples are zero; returning the identity colour matrix")
        return np.eye(3)

    ata = a.T @ a + regularization * np.eye(3)
    atb = a.T @ b
    try:
        xt = scipy.linalg.solve(ata, atb, assume_a="sym")
    except scipy.linalg.LinAlgError:
        logger.warning(
            "Normal equations are singular (regularization=%g); using minimum-norm solution",
            regularization,
        )
        xt, *_ = scipy.linalg.lstsq(ata, atb)
    # rows of the returned matrix are target channels
    return np.asarray(xt, dtype=np.float64).T


def solve_color_matrix(
    measured: ArrayLike,
    reference: ArrayLike,
    estimate_wb: bool = True,
    regularization: float = 1e-4,
) -> CalibResult:
    """Fit the 3x3 matrix mapping measured camera RGB to reference RGB.

    Parameters
    ----------
    measured:
        ``(n, 3)`` linear camera RGB, one row per patch.
    reference:
        ``(n, 3)`` target-space linear RGB in the same patch order.
    estimate_wb:
        Estimate grey-world gains and apply them before the fit. When false
        the gains are ones.
    regularization:
        Non-negative ridge strength ``lambda``.

    Raises
    ------
    InvalidInputError
        If either sequence is empty, their lengths differ, or they contain
        anything other than finite RGB triples.
    """

    a_in = as_rgb_array(measured, "measured")
    b = as_rgb_array(reference, "reference")
    n = a_in.shape[0]
    if n == 0:
        raise InvalidInputError("solve_color_matrix: no samples provided")
    if b.shape[0] != n:
        raise InvalidInputError(
            f"solve_color_matrix: {n} measured samples but {b.shape[0]} references"
        )
    if not np.isfinite(regularization) or regularization < 0.0:
        raise InvalidInputError(f"regularization must be non-negative, got {regularization!r}")

    gains = estimate_white_balance(a_in) if estimate_wb else np.ones(3, dtype=np.float64)
    a = a_in * gains

    matrix = _solve_normal_equations(a, b, float(regularization))

    predicted = a @ matrix.T
    errors = np.linalg.norm(predicted - b, axis=1)
    rms = float(np.sqrt(np.sum(errors**2) / n))
    logger.debug("Fitted colour matrix on %d samples, rms=%.6g", n, rms)

    return CalibResult(
        color_matrix=matrix,
        white_balance=gains,
        rms_error=rms,
        per_sample_error=tuple(errors.tolist()),
    )


def solve_with_config(
    measured: ArrayLike,
    reference: ArrayLike,
    config: MatrixSolverConfig | None = None,
) -> CalibResult:
    cfg = config or MatrixSolverConfig()
    return solve_color_matrix(
        measured,
        reference,
        estimate_wb=cfg.estimate_white_balance,
        regularization=cfg.regularization,
    )


def srgb_encode(values: ArrayLike) -> NDArray[np.float64]:
    """Apply the sRGB transfer function to linear values clamped to [0, 1]."""

    v = np.clip(np.asarray(values, dtype=np.float64), 0.0, 1.0)
    return np.where(
        v <= _SRGB_LINEAR_CUTOFF,
        12.92 * v,
        1.055 * np.power(v, 1.0 / 2.4) - 0.055,
    )


def apply_color_correction(
    rgb: ArrayLike,
    color_matrix: ArrayLike,
    white_balance: ArrayLike | None = None,
    *,
    encode_srgb: bool = False,
) -> NDArray[np.float64]:
    """Apply white-balance gains then the colour matrix to ``(..., 3)`` RGB.

    With ``encode_srgb`` the result is clamped and gamma-encoded for display.
    """

    values = np.asarray(rgb, dtype=np.float64)
    if values.ndim == 0 or values.shape[-1] != 3:
        raise InvalidInputError(f"rgb must have a trailing axis of 3, got shape {values.shape}")
    matrix = np.asarray(color_matrix, dtype=np.float64)
    if matrix.shape != (3, 3):
        raise InvalidInputError(f"color_matrix must be 3x3, got {matrix.shape}")
    gains = np.ones(3) if white_balance is None else np.asarray(white_balance, dtype=np.float64)
    if gains.shape != (3,):
        raise InvalidInputError(f"white_balance must have 3 entries, got {gains.shape}")

    out = (values * gains) @ matrix.T
    if encode_srgb:
        out = srgb_encode(out)
    return out
