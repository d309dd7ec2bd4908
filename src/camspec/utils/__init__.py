from .array import as_rgb_array, frozen
from .logging import SearchStats, SearchTimer, get_logger

__all__ = [
    "SearchStats",
    "SearchTimer",
    "as_rgb_array",
    "frozen",
    "get_logger",
]
