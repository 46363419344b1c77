"""Render-dirty flags consumed by the presentation layer."""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(slots=True)
class RenderUpdates:
    """Which visual categories need to be rebuilt."""

    paths: bool = False
    triggers: bool = False
    teleports: bool = False
    shapes: bool = False

    @classmethod
    def paths_only(cls) -> RenderUpdates:
        return cls(paths=True)

    def any(self) -> bool:
        return self.paths or self.triggers or self.teleports or self.shapes

    def merge(self, other: RenderUpdates) -> None:
        """OR other's flags into this one, in place."""
        self.paths |= other.paths
        self.triggers |= other.triggers
        self.teleports |= other.teleports
        self.shapes |= other.shapes

    def take_paths(self) -> bool:
        """Read and clear the paths flag."""
        dirty = self.paths
        self.paths = False
        return dirty
