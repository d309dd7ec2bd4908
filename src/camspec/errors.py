"""Exception types raised by the colorimetric estimation core."""

from __future__ import annotations

__all__ = ["InvalidInputError"]


class InvalidInputError(ValueError):
    """Raised when a caller violates a precondition of a solver.

    Examples are empty or mismatched patch sequences, an observation set that
    does not hold exactly 24 triples, or priors sampled on the wrong grid.
    Solvers raise it before doing any work, so no partial result is ever
    returned alongside it.
    """
