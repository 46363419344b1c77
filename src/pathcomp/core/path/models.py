"""Recorded paths, collections and their admission filters.

Usage:
    path = Path()
    path.add_node((0.0, 1.0, 0.0))
    path.end_path(1250)

    collection = PathCollection("Route A")
    collection.add(path, Gold())
"""

from __future__ import annotations

from collections.abc import Iterator
from dataclasses import dataclass, field
from uuid import UUID, uuid4

from pathcomp.core.types import Vec3, as_vec3


@dataclass(eq=False, slots=True)
class Path:
    """One continuous recorded trace, split into segments by pauses.

    ``times`` holds one duration (milliseconds) per closed segment. A finished
    path carries one extra entry appended by :meth:`end_path`, so ``time()`` is
    always the total.

    Equality and hashing use ``id`` only.
    """

    id: UUID = field(default_factory=uuid4)
    times: list[int] = field(default_factory=list)
    segments: list[list[Vec3]] = field(default_factory=list)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Path):
            return NotImplemented
        return self.id == other.id

    def __hash__(self) -> int:
        return hash(self.id)

    def __len__(self) -> int:
        return sum(len(segment) for segment in self.segments)

    def __repr__(self) -> str:
        return f"Path(id={self.id}, time={self.time()}, nodes={len(self)})"

    def segment_len(self, index: int) -> int | None:
        if 0 <= index < len(self.segments):
            return len(self.segments[index])
        return None

    def segment_time(self, index: int) -> int | None:
        if 0 <= index < len(self.times):
            return self.times[index]
        return None

    def get_node(self, segment: int, index: int) -> Vec3 | None:
        if 0 <= segment < len(self.segments) and 0 <= index < len(self.segments[segment]):
            return self.segments[segment][index]
        return None

    def add_node(self, pos: Vec3) -> None:
        """Append a node to the open segment.

        The first segment is created lazily. Once the last segment has a
        recorded time it is closed and further nodes are ignored.
        """
        if not self.segments:
            self.segments.append([])
        last = len(self.segments) - 1
        if self.segment_time(last) is None:
            self.segments[last].append(as_vec3(pos))

    def end_segment(self, time: int) -> None:
        """Close the current segment with its duration and open a new one."""
        self.segments.append([])
        self.times.append(int(time))

    def end_path(self, time: int) -> None:
        """Append the final time entry without opening a new segment."""
        self.times.append(int(time))

    def time(self) -> int:
        return sum(self.times)

    def clear_all(self) -> None:
        self.segments.clear()
        self.times.clear()


@dataclass(frozen=True, slots=True)
class Gold:
    """Only admit a path faster than the collection's current best."""


@dataclass(frozen=True, slots=True)
class PinnedPath:
    """Pin comparison against one reference path.

    New entries are rejected unless they are faster than some path ahead of
    (or equal to) the reference in the ordering.
    """

    id: UUID


type HighPassFilter = Gold | PinnedPath
"""Per-collection admission policy. ``None`` means plain ordered insertion."""


@dataclass(eq=False, slots=True)
class PathCollection:
    """Named group of paths kept in ascending-time order by its insertion policy.

    There is no separate sort step: :meth:`add` always leaves ``paths`` ordered.
    """

    name: str
    id: UUID = field(default_factory=uuid4)
    paths: list[Path] = field(default_factory=list)

    def __len__(self) -> int:
        return len(self.paths)

    def __iter__(self) -> Iterator[Path]:
        return iter(self.paths)

    def __contains__(self, item: object) -> bool:
        if isinstance(item, Path):
            item = item.id
        return any(p.id == item for p in self.paths)

    def __repr__(self) -> str:
        return f"PathCollection(id={self.id}, name={self.name!r}, paths={len(self.paths)})"

    def path_ids(self) -> list[UUID]:
        return [p.id for p in self.paths]

    def get_path(self, path_id: UUID) -> Path | None:
        for path in self.paths:
            if path.id == path_id:
                return path
        return None

    def add(self, path: Path, high_pass: HighPassFilter | None = None) -> bool:
        """Insert a path according to the admission policy.

        Args:
            path: Finished path to insert.
            high_pass: ``Gold()``, ``PinnedPath(id)`` or None for plain
                ordered insertion (ties go after existing equal times).

        Returns:
            True if the path was inserted, False if the filter rejected it.
        """
        new_time = path.time()

        match high_pass:
            case Gold():
                if not self.paths or new_time < self.paths[0].time():
                    self.paths.insert(0, path)
                    return True
                return False

            case PinnedPath(id=pinned_id):
                for i, existing in enumerate(self.paths):
                    if existing.time() > new_time:
                        self.paths.insert(i, path)
                        return True
                    if existing.id == pinned_id:
                        return False
                # Reference path is gone: fall back to ordered insertion
                self.paths.append(path)
                return True

            case None:
                for i, existing in enumerate(self.paths):
                    if existing.time() > new_time:
                        self.paths.insert(i, path)
                        return True
                self.paths.append(path)
                return True

        raise TypeError(f"Unknown filter: {high_pass!r}")

    def remove(self, path_id: UUID) -> bool:
        """Remove a path by id. Returns True if it was present."""
        for i, path in enumerate(self.paths):
            if path.id == path_id:
                del self.paths[i]
                return True
        return False

    def clear_paths(self) -> None:
        self.paths.clear()
