"""Camera spectral sensitivity recovery from a single chart capture.

Jiang et al. observe that camera sensitivities live in a low-dimensional
space: each channel is well described by a handful of PCA basis vectors. With
a known chart reflectance prior, the 24 observed RGB triples then determine
the basis weights per channel, provided the illuminant is known. The
illuminant is not known, so it is searched for among CIE daylights:

* for every candidate CCT on a fixed grid (4000-27000 K, 100 K steps by
  default) synthesize the daylight SPD and weight the reflectance prior by it;
* per channel, solve ``A x = b`` with ``A = (R_ill^T E) * dl`` in the
  minimum-norm least-squares sense (SVD based, so rank-deficient bases are
  tolerated) and reconstruct the curve ``E x``;
* score the candidate by the root of the squared residual summed over
  channels.

The lowest score wins; exact ties go to the lower temperature. Because the
absolute sensitivity scale is not identifiable from RGB alone, the winning
curves are clipped at zero and rescaled to a unit maximum.

Candidates are independent, so the search may run on a thread pool. Each
candidate yields an immutable :class:`CandidateFit` and the winner is chosen
by a pure reduction, which keeps parallel and serial output identical.
"""

from __future__ import annotations

import logging
import math
from concurrent.futures import ThreadPoolExecutor
from dataclasses import dataclass
from typing import Iterable

import numpy as np
from numpy.typing import ArrayLike, NDArray

from camspec.config import RecoveryConfig
from camspec.errors import InvalidInputError
from camspec.physics.daylight import daylight_spd
from camspec.physics.render import illuminate
from camspec.types import CHART_PATCH_COUNT, CameraPriors, JiangResult
from camspec.utils.array import as_rgb_array
from camspec.utils.logging import SearchTimer
from camspec.wavelengths import N_WAVELENGTHS

logger = logging.getLogger(__name__)

__all__ = [
    "CandidateFit",
    "JiangEstimator",
    "cct_candidates",
    "fit_candidate",
    "normalize_sensitivity",
    "recover_sensitivity",
    "select_best_candidate",
]


@dataclass(frozen=True)
class CandidateFit:
    """Reconstruction obtained under one candidate illuminant."""

    cct: float
    score: float
    sensitivity: NDArray[np.float64]
    illuminant: NDArray[np.float64]


def cct_candidates(config: RecoveryConfig | None = None) -> NDArray[np.float64]:
    """Return the candidate temperatures in ascending order."""

    cfg = config or RecoveryConfig()
    return np.arange(cfg.cct_min, cfg.cct_max + 1, cfg.cct_step, dtype=np.float64)


def _check_observations(observations: ArrayLike) -> NDArray[np.float64]:
    return as_rgb_array(observations, "observations", rows=CHART_PATCH_COUNT)


def _check_priors(priors: CameraPriors) -> None:
    if priors.patch_count != CHART_PATCH_COUNT:
        raise InvalidInputError(
            f"Reflectance prior must have {CHART_PATCH_COUNT} columns, got {priors.patch_count}"
        )


def fit_candidate(
    priors: CameraPriors,
    observations: ArrayLike,
    cct: float,
    *,
    delta_lambda: float = 10.0,
) -> CandidateFit:
    """Reconstruct all three channel curves assuming daylight at ``cct``.

    ``observations`` holds the 24 chart triples in reflectance column order.
    """

    obs = _check_observations(observations)
    spd = daylight_spd(cct)
    if not np.all(np.isfinite(spd)):
        raise InvalidInputError(f"Daylight SPD at {cct:g} K is not finite")
    radiance = illuminate(priors.reflectance, spd)

    curves = np.empty((N_WAVELENGTHS, 3), dtype=np.float64)
    squared_error = 0.0
    for ch, basis in enumerate(priors.bases):
        design = (radiance.T @ basis) * delta_lambda
        target = obs[:, ch]
        coeffs, *_ = np.linalg.lstsq(design, target, rcond=None)
        residual = target - design @ coeffs
        squared_error += float(residual @ residual)
        curves[:, ch] = basis @ coeffs

    return CandidateFit(
        cct=float(cct),
        score=math.sqrt(squared_error),
        sensitivity=curves,
        illuminant=spd,
    )


def select_best_candidate(fits: Iterable[CandidateFit]) -> CandidateFit:
    """Pick the lowest-scoring fit; equal scores resolve to the lower CCT."""

    fits = list(fits)
    if not fits:
        raise InvalidInputError("No CCT candidates to select from")
    return min(fits, key=lambda fit: (fit.score, fit.cct))


def normalize_sensitivity(curves: ArrayLike, *, floor: float = 1e-6) -> NDArray[np.float64]:
    """Clip negative lobes and scale so the global peak is exactly one.

    Curves whose peak does not exceed ``floor`` are only clipped.
    """

    out = np.maximum(np.asarray(curves, dtype=np.float64), 0.0)
    peak = float(out.max()) if out.size else 0.0
    if peak > floor:
        out = out / peak
    return out


class JiangEstimator:
    """Grid-search estimator of camera sensitivity and scene illuminant."""

    def __init__(self, priors: CameraPriors, config: RecoveryConfig | None = None) -> None:
        self._priors = priors
        self._config = config or RecoveryConfig()

    @property
    def priors(self) -> CameraPriors:
        return self._priors

    @property
    def config(self) -> RecoveryConfig:
        return self._config

    def fit_all(self, observations: ArrayLike) -> list[CandidateFit]:
        """Evaluate every candidate CCT, returned in ascending CCT order."""

        _check_priors(self._priors)
        obs = _check_observations(observations)
        cfg = self._config
        candidates = cct_candidates(cfg).tolist()

        def _fit(cct: float) -> CandidateFit:
            return fit_candidate(self._priors, obs, cct, delta_lambda=cfg.delta_lambda)

        timer = SearchTimer(workers=cfg.max_workers)
        timer.start()
        if cfg.max_workers > 1:
            with ThreadPoolExecutor(max_workers=cfg.max_workers) as pool:
                fits = list(pool.map(_fit, candidates))
        else:
            fits = [_fit(cct) for cct in candidates]
        timer.log(logger, timer.stop(len(fits)))
        return fits

    def solve(self, observations: ArrayLike) -> JiangResult:
        """Recover the sensitivity curves from 24 observed chart triples.

        Raises
        ------
        InvalidInputError
            If ``observations`` is not 24 finite RGB triples or the
            reflectance prior does not have 24 columns.
        """

        best = select_best_candidate(self.fit_all(observations))
        curves = normalize_sensitivity(best.sensitivity, floor=self._config.normalization_floor)
        logger.info("Estimated illuminant %.0f K (rms=%.4g)", best.cct, best.score)
        return JiangResult(
            estimated_cct=best.cct,
            rms_error=best.score,
            sensitivity=curves,
            illuminant=best.illuminant,
        )


def recover_sensitivity(
    priors: CameraPriors,
    observations: ArrayLike,
    config: RecoveryConfig | None = None,
) -> JiangResult:
    """Functional shortcut for ``JiangEstimator(priors, config).solve(observations)``."""

    return JiangEstimator(priors, config).solve(observations)
