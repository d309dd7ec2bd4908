from __future__ import annotations

import numpy as np
from numpy.typing import ArrayLike, NDArray

from camspec.errors import InvalidInputError


def frozen(x: ArrayLike) -> NDArray[np.float64]:
    """Return a read-only float64 copy of ``x``."""

    arr = np.array(x, dtype=np.float64, copy=True)
    arr.setflags(write=False)
    return arr


def as_rgb_array(values: ArrayLike, name: str, *, rows: int | None = None) -> NDArray[np.float64]:
    """Coerce a sequence of RGB triples to an ``(n, 3)`` float64 array.

    An empty sequence yields shape ``(0, 3)`` so that callers can report the
    count themselves. ``rows`` enforces an exact number of triples.
    """

    try:
        arr = np.asarray(values, dtype=np.float64)
    except (ValueError, TypeError) as exc:
        raise InvalidInputError(f"{name} must be a sequence of RGB triples") from exc
    if arr.size == 0:
        arr = arr.reshape(0, 3)
    if arr.ndim != 2 or arr.shape[1] != 3:
        raise InvalidInputError(f"{name} must be a sequence of RGB triples, got shape {arr.shape}")
    if rows is not None and arr.shape[0] != rows:
        raise InvalidInputError(f"{name} must contain exactly {rows} RGB triples, got {arr.shape[0]}")
    if not np.all(np.isfinite(arr)):
        raise InvalidInputError(f"{name} contains non-finite values")
    return arr
