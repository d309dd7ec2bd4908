from __future__ import annotations

import logging
from dataclasses import dataclass
from time import perf_counter

from rich.logging import RichHandler


def get_logger(name: str = "camspec", level: int | str = logging.INFO) -> logging.Logger:
    """Return a Rich-configured logger for the project."""
    logging.basicConfig(
        level=level,
        format="%(message)s",
        datefmt="[%X]",
        handlers=[RichHandler(rich_tracebacks=True)],
    )
    logger = logging.getLogger(name)
    logger.setLevel(level)
    return logger


@dataclass(frozen=True, slots=True)
class SearchStats:
    """Summary of one grid search pass."""

    candidates: int
    elapsed_s: float
    workers: int

    @property
    def candidates_per_s(self) -> float:
        return self.candidates / max(self.elapsed_s, 1e-12)

    def as_dict(self) -> dict[str, float]:
        return {
            "candidates": float(self.candidates),
            "elapsed_s": float(self.elapsed_s),
            "workers": float(self.workers),
            "candidates_per_s": float(self.candidates_per_s),
        }


class SearchTimer:
    """Wall-clock timer for the illuminant grid search."""

    def __init__(self, workers: int = 1) -> None:
        self.workers = workers
        self._start_time: float | None = None

    def start(self) -> None:
        """Mark the beginning of a measured section."""
        self._start_time = perf_counter()

    def stop(self, candidates: int) -> SearchStats:
        """Mark the end of a measured section and return its stats."""
        if self._start_time is None:
            raise RuntimeError("SearchTimer.stop() called before start().")
        elapsed = max(perf_counter() - self._start_time, 1e-12)
        self._start_time = None
        return SearchStats(candidates=candidates, elapsed_s=elapsed, workers=self.workers)

    def log(self, logger: logging.Logger, stats: SearchStats, *, prefix: str = "cct-search") -> None:
        """Log a standardised summary line."""
        logger.debug(
            "%s candidates=%d workers=%d elapsed=%.3fs candidates/s=%.1f",
            prefix,
            stats.candidates,
            stats.workers,
            stats.elapsed_s,
            stats.candidates_per_s,
        )
