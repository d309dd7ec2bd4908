"""Configuration schemas and YAML loading for the estimation core.

The Pydantic models hold solver settings that callers may want to tune
without touching code: the ridge strength and white-balance switch of the
matrix solver, and the CCT search grid of the recovery engine. YAML files are
merged Hydra-style, later files taking precedence over earlier ones.
"""

from __future__ import annotations

import copy
import logging
from collections.abc import Mapping
from pathlib import Path
from typing import Any, Literal

import yaml
from pydantic import BaseModel, ConfigDict, Field, model_validator

from camspec.utils.logging import get_logger

LOGGER = logging.getLogger(__name__)

__all__ = [
    "MatrixSolverConfig",
    "RecoveryConfig",
    "CamspecConfig",
    "configure_logging",
    "load_config",
]


class MatrixSolverConfig(BaseModel):
    """Settings for the regularised 3x3 colour matrix fit."""

    model_config = ConfigDict(extra="forbid", frozen=True)

    estimate_white_balance: bool = Field(
        True,
        description="Derive per-channel gains that push the mean patch to neutral",
    )
    regularization: float = Field(
        1e-4,
        ge=0.0,
        description="Ridge term added to the normal-equation diagonal",
    )


class RecoveryConfig(BaseModel):
    """Settings for the CCT grid search of the sensitivity recovery engine."""

    model_config = ConfigDict(extra="forbid", frozen=True)

    cct_min: int = Field(4000, gt=0, description="First candidate temperature (K)")
    cct_max: int = Field(27000, gt=0, description="Last candidate temperature, inclusive (K)")
    cct_step: int = Field(100, gt=0, description="Spacing between candidates (K)")
    delta_lambda: float = Field(
        10.0,
        gt=0.0,
        description="Wavelength step (nm) used to approximate the spectral integral",
    )
    max_workers: int = Field(
        1,
        ge=1,
        description="Threads evaluating candidates; 1 runs the search serially",
    )
    normalization_floor: float = Field(
        1e-6,
        ge=0.0,
        description="Recovered curves are rescaled only when their peak exceeds this",
    )

    @model_validator(mode="after")
    def _check_range(self) -> "RecoveryConfig":
        if self.cct_max < self.cct_min:
            raise ValueError("cct_max must be greater than or equal to cct_min")
        return self

    @property
    def candidate_count(self) -> int:
        return (self.cct_max - self.cct_min) // self.cct_step + 1


class CamspecConfig(BaseModel):
    """Top-level configuration bundle."""

    model_config = ConfigDict(extra="forbid")

    solver: MatrixSolverConfig = Field(default_factory=MatrixSolverConfig)
    recovery: RecoveryConfig = Field(default_factory=RecoveryConfig)
    log_level: Literal["DEBUG", "INFO", "WARNING", "ERROR"] = "INFO"


def _deep_update(base: dict[str, Any], update: Mapping[str, Any]) -> dict[str, Any]:
    for key, value in update.items():
        if isinstance(value, Mapping) and isinstance(base.get(key), Mapping):
            base[key] = _deep_update(dict(base[key]), value)
        else:
            base[key] = copy.deepcopy(value)
    return base


def _load_yaml(path: Path) -> dict[str, Any]:
    if not path.exists():
        raise FileNotFoundError(f"Config file not found: {path}")
    data = yaml.safe_load(path.read_text(encoding="utf-8")) or {}
    if not isinstance(data, dict):
        raise ValueError(f"Config at {path} must be a mapping")
    return data


def load_config(
    *paths: str | Path,
    overrides: Mapping[str, Any] | None = None,
) -> CamspecConfig:
    """Load one or more YAML files and merge them into a :class:`CamspecConfig`.

    Later paths take precedence over earlier ones and nested mappings are
    merged key by key. ``overrides`` is applied last. Pass the result to
    :func:`configure_logging` to apply its ``log_level``.
    """
    cfg: dict[str, Any] = {}
    for path in paths:
        cfg = _deep_update(cfg, _load_yaml(Path(path)))
        LOGGER.debug("Merged config layer %s", path)
    if overrides:
        cfg = _deep_update(cfg, overrides)
    return CamspecConfig.model_validate(cfg)


def configure_logging(config: CamspecConfig) -> logging.Logger:
    """Install the Rich handler and set the package logger to ``config.log_level``."""
    return get_logger("camspec", level=config.log_level)
