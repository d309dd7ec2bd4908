"""ColorChecker-24 patch catalogue and reference-value containers."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Iterator, Sequence

import numpy as np
from numpy.typing import ArrayLike, NDArray

from camspec.errors import InvalidInputError
from camspec.types import CHART_PATCH_COUNT
from camspec.utils.array import as_rgb_array, frozen

__all__ = [
    "COLORCHECKER24_PATCH_NAMES",
    "PATCH_COUNT",
    "PatchReference",
    "ReferenceSet",
]

PATCH_COUNT = CHART_PATCH_COUNT

# Row-major chart order, patch 0 at the top-left.
COLORCHECKER24_PATCH_NAMES: tuple[str, ...] = (
    "Dark Skin",
    "Light Skin",
    "Blue Sky",
    "Foliage",
    "Blue Flower",
    "Bluish Green",
    "Orange",
    "Purplish Blue",
    "Moderate Red",
    "Purple",
    "Yellow Green",
    "Orange Yellow",
    "Blue",
    "Green",
    "Red",
    "Yellow",
    "Magenta",
    "Cyan",
    "White",
    "Neutral 8",
    "Neutral 6.5",
    "Neutral 5",
    "Neutral 3.5",
    "Black",
)


@dataclass(frozen=True)
class PatchReference:
    """Target-space linear RGB for one chart patch."""

    index: int
    name: str
    linear_rgb: NDArray[np.float64]

    def __post_init__(self) -> None:
        if not 0 <= int(self.index) < PATCH_COUNT:
            raise InvalidInputError(f"Patch index must be in [0, {PATCH_COUNT}), got {self.index}")
        rgb = as_rgb_array(np.reshape(self.linear_rgb, (1, -1)), f"patch {self.index}")[0]
        object.__setattr__(self, "index", int(self.index))
        object.__setattr__(self, "linear_rgb", frozen(rgb))


@dataclass(frozen=True)
class ReferenceSet:
    """The full set of 24 patch references for one illuminant."""

    illuminant: str
    patches: tuple[PatchReference, ...]
    color_space: str = "linear_srgb"

    def __post_init__(self) -> None:
        patches = tuple(self.patches)
        if len(patches) != PATCH_COUNT:
            raise InvalidInputError(
                f"Expected {PATCH_COUNT} patch references, got {len(patches)}"
            )
        indices = [p.index for p in patches]
        if len(set(indices)) != len(indices):
            raise InvalidInputError("Patch reference indices must be unique")
        object.__setattr__(self, "patches", patches)

    @classmethod
    def from_rgb(
        cls,
        rgb: ArrayLike,
        *,
        illuminant: str = "D65",
        color_space: str = "linear_srgb",
        names: Sequence[str] = COLORCHECKER24_PATCH_NAMES,
    ) -> "ReferenceSet":
        """Build a reference set from a ``(24, 3)`` array in chart order."""

        values = as_rgb_array(rgb, "reference rgb", rows=PATCH_COUNT)
        if len(names) != PATCH_COUNT:
            raise InvalidInputError(f"Expected {PATCH_COUNT} patch names, got {len(names)}")
        patches = tuple(
            PatchReference(index=i, name=str(names[i]), linear_rgb=values[i])
            for i in range(PATCH_COUNT)
        )
        return cls(illuminant=illuminant, patches=patches, color_space=color_space)

    def __iter__(self) -> Iterator[PatchReference]:
        return iter(self.patches)

    def __len__(self) -> int:
        return len(self.patches)

    def as_array(self) -> NDArray[np.float64]:
        """Return the reference triples stacked in stored order."""
        return np.stack([p.linear_rgb for p in self.patches])
