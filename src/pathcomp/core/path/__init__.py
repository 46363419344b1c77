"""Path data model: recorded paths, collections and high-pass filters."""

from pathcomp.core.path.models import Gold, HighPassFilter, Path, PathCollection, PinnedPath

__all__ = [
    "Path",
    "PathCollection",
    "HighPassFilter",
    "Gold",
    "PinnedPath",
]
