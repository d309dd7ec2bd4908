"""Spectral sensitivity recovery."""

from .jiang import (
    CandidateFit,
    JiangEstimator,
    cct_candidates,
    fit_candidate,
    normalize_sensitivity,
    recover_sensitivity,
    select_best_candidate,
)

__all__ = [
    "CandidateFit",
    "JiangEstimator",
    "cct_candidates",
    "fit_candidate",
    "normalize_sensitivity",
    "recover_sensitivity",
    "select_best_candidate",
]
