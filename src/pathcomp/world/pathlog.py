"""PathLog: the recording state machine and owner of all comparison data.

Each tick the host's player pose is fed to :meth:`PathLog.update`, which tests
the tracked point against the start and end triggers and drives the
idle -> primed -> recording -> finished transitions. Finished paths are routed
into the active collection through that collection's high-pass filter.

Usage:
    log = PathLog()
    log.create_collection()
    log.create_trigger(0, start_pos, start_rot, (1, 1, 1))
    log.create_trigger(1, end_pos, end_rot, (1, 1, 1))

    # per frame
    updates = log.update(player_pos, player_rot)
"""

from __future__ import annotations

import logging
import time
from collections.abc import Callable, Iterator
from enum import Enum, IntEnum, auto
from uuid import UUID

from pathcomp.core.geometry import BoxCollider, offset_up
from pathcomp.core.path import Gold, HighPassFilter, Path, PathCollection, PinnedPath
from pathcomp.core.types import Vec3
from pathcomp.storage import (
    CompFile,
    DecodeError,
    FileIOError,
    FileOpResult,
    FileStatus,
    RetryPolicy,
)
from pathcomp.world.render import RenderUpdates

logger = logging.getLogger(__name__)

DEFAULT_COLLECTION_NAME = "New Collection"
DIRECT_COLLECTION_NAME = "Direct Paths"
EMPTY_NAME_PLACEHOLDER = "Unnamed Collection"


class Comparison(Enum):
    """Which paths of each visible collection are drawn for comparison."""

    ALL = auto()
    GOLD = auto()
    """Only the fastest path of each collection."""

    AVERAGE = auto()
    """The median path of each collection; the rest are shown as ignored."""


class SelectModifier(IntEnum):
    REPLACE = 0
    RANGE = 1
    TOGGLE = 2


def check_trigger_index(index: int) -> None:
    """Raise ValueError unless index names a main trigger (0 = start, 1 = end)."""
    if index not in (0, 1):
        raise ValueError(f"Trigger index must be 0 or 1, got {index}")


class PathLog:
    """Aggregate root for recording state, triggers and collections.

    Invariant: ``recording`` is True iff ``recording_start`` is not None.

    Args:
        clock: Monotonic time source in seconds. Injected for tests.
        retry: Retry policy for comparison file writes.
    """

    def __init__(
        self,
        clock: Callable[[], float] = time.monotonic,
        retry: RetryPolicy | None = None,
    ) -> None:
        self._clock = clock
        self.retry = retry or RetryPolicy()

        self.primed = False
        self.recording = False
        self.paused = False
        self.direct = False
        self.autosave = False
        self.autoreset = True

        self.current_file: str | None = None
        self.recording_start: float | None = None
        self.latest_path: UUID | None = None
        self.latest_time = 0
        self.recording_path = Path()
        self._autosave_result: FileOpResult | None = None

        self.direct_paths = PathCollection(DIRECT_COLLECTION_NAME)
        self.collections: list[PathCollection] = []
        self.active_collection: UUID | None = None
        self.filters: dict[UUID, HighPassFilter] = {}
        self.main_triggers: list[BoxCollider | None] = [None, None]

        self.mute_paths: dict[UUID, bool] = {}
        self.solo_paths: dict[UUID, bool] = {}
        self.mute_collections: dict[UUID, bool] = {}
        self.solo_collections: dict[UUID, bool] = {}
        self.selected_paths: dict[UUID, list[UUID]] = {}

        self.comparison_mode = Comparison.ALL
        self.compared_paths: list[UUID] = []
        self.ignored_paths: dict[UUID, list[UUID]] = {}

        self._track_collection(self.direct_paths.id)

    # Per-tick transition

    def update(self, position: Vec3, rotation: Vec3) -> RenderUpdates:
        """Advance the state machine by one tick.

        Args:
            position: Player position (feet) this tick.
            rotation: Player XYZ Euler rotation this tick.

        Returns:
            Dirty flags; ``paths`` is set when a recording was finalized.
        """
        updates = RenderUpdates()
        point = offset_up(position, rotation)

        start_trigger, end_trigger = self.main_triggers
        if start_trigger is not None and end_trigger is not None:
            in_start = start_trigger.check_point_collision(point)
            in_end = end_trigger.check_point_collision(point)

            if in_start and not self.primed and self.autoreset:
                self.reset()
                self.primed = True
            elif not in_start and self.primed:
                self.primed = False
                self.start()

            if in_end and self.recording:
                self.stop()
                updates.paths = True

        if self.recording and not self.paused:
            self.recording_path.add_node(point)

        return updates

    # Recording control

    def _elapsed_ms(self) -> int:
        if self.recording_start is None:
            return 0
        return max(0, round((self._clock() - self.recording_start) * 1000))

    def start(self) -> None:
        if self.recording:
            return
        self.recording = True
        self.paused = False
        self.recording_start = self._clock()
        logger.info("Recording started")

    def reset(self) -> None:
        """Discard the in-progress recording. Nothing is saved."""
        if not self.recording:
            return
        self.recording = False
        self.paused = False
        self.recording_path.clear_all()
        self.recording_start = None
        logger.info("Recording reset")

    def pause(self) -> None:
        """Close the current segment; nodes are ignored until unpaused."""
        if not self.recording or self.paused:
            return
        self.recording_path.end_segment(self._elapsed_ms())
        self.paused = True
        logger.info("Recording paused")

    def unpause(self) -> None:
        if not self.recording or not self.paused:
            return
        self.recording_start = self._clock()
        self.paused = False
        logger.info("Recording unpaused")

    def toggle_pause(self) -> None:
        if self.paused:
            self.unpause()
        else:
            self.pause()

    def stop(self) -> None:
        """Finalize the recording and route it to its collection.

        Direct mode adds to ``direct_paths`` unfiltered. Otherwise the active
        collection receives the path through its filter, and the comparison
        is autosaved if enabled, something was inserted and a file is known.
        """
        if not self.recording:
            return

        self.recording = False
        path = self.recording_path
        path.end_path(0 if self.paused else self._elapsed_ms())
        self.paused = False
        self.latest_time = path.time()
        self.latest_path = path.id

        if self.direct:
            self.direct_paths.add(path, None)
            self._track_path(path.id)
        else:
            received = False
            for collection in self.collections:
                if collection.id != self.active_collection:
                    continue
                if collection.add(path, self.filters.get(collection.id)):
                    self._track_path(path.id)
                    received = True

            if self.autosave and received and self.current_file is not None:
                self._autosave_result = self.save_comparison(self.current_file)

        self.recording_path = Path()
        self.recording_start = None
        self.update_visible()
        logger.info("Recording stopped (%d ms)", self.latest_time)

    def time(self) -> int:
        """Elapsed milliseconds of the running attempt, else the latest result."""
        if self.recording_start is None:
            return self.latest_time
        current = 0 if self.paused else self._elapsed_ms()
        return current + self.recording_path.time()

    def take_autosave_result(self) -> FileOpResult | None:
        """Return and clear the outcome of the last autosave, if any."""
        result, self._autosave_result = self._autosave_result, None
        return result

    def set_direct_mode(self, mode: bool) -> None:
        self.direct = mode

    def set_autosave(self, mode: bool) -> None:
        self.autosave = mode

    def set_autoreset(self, mode: bool) -> None:
        self.autoreset = mode

    # Triggers

    def create_trigger(self, index: int, position: Vec3, rotation: Vec3, size: Vec3) -> bool:
        """Place a main trigger at the player's up-offset point.

        Refused (returns False) once any collection holds a path, since the
        recorded comparisons would no longer share a course.

        Raises:
            ValueError: If index is not 0 (start) or 1 (end).
        """
        check_trigger_index(index)
        if not self.is_empty():
            return False

        self.main_triggers[index] = BoxCollider(offset_up(position, rotation), rotation, size)
        self.current_file = None
        return True

    def delete_trigger(self, trigger_id: UUID) -> bool:
        if not self.is_empty():
            return False
        for i, trigger in enumerate(self.main_triggers):
            if trigger is not None and trigger.id == trigger_id:
                self.main_triggers[i] = None
                self.primed = False
                self.current_file = None
                return True
        logger.error("Trigger-ID '%s' does not exist!", trigger_id)
        return False

    def clear_triggers(self) -> bool:
        if not self.is_empty():
            return False
        self.main_triggers = [None, None]
        self.primed = False
        self.current_file = None
        return True

    # Comparison files

    def save_comparison(self, file_path: str) -> FileOpResult:
        start_trigger, end_trigger = self.main_triggers
        if start_trigger is None or end_trigger is None:
            return FileOpResult.skipped(file_path, "Both triggers must be placed before saving")

        comp = CompFile.new((start_trigger, end_trigger), self.collections)
        try:
            comp.to_file(file_path, self.retry)
        except FileIOError as e:
            logger.error("%s", e)
            return FileOpResult(FileStatus.IO_ERROR, file_path, str(e))

        self.current_file = file_path
        return FileOpResult.success(file_path)

    def load_comparison(self, file_path: str) -> FileOpResult:
        """Replace triggers and collections with a file's contents.

        On failure nothing is changed.
        """
        try:
            comp = CompFile.from_file(file_path)
        except FileIOError as e:
            logger.error("%s", e)
            return FileOpResult(FileStatus.IO_ERROR, file_path, str(e))
        except DecodeError as e:
            logger.error("Failed to decode file %r: %s", file_path, e)
            return FileOpResult(FileStatus.DECODE_ERROR, file_path, str(e))

        self.reset()
        self.primed = False
        self.main_triggers = list(comp.get_triggers())
        self.collections = comp.get_collections()
        self.filters.clear()

        self.mute_paths.clear()
        self.solo_paths.clear()
        self.mute_collections.clear()
        self.solo_collections.clear()
        self.selected_paths.clear()
        self._track_collection(self.direct_paths.id)
        for path in self.direct_paths:
            self._track_path(path.id)
        for collection in self.collections:
            self._track_collection(collection.id)
            for path in collection:
                self._track_path(path.id)

        if self.get_collection(self.active_collection) is None:
            self.active_collection = self.collections[0].id if self.collections else None

        self.current_file = file_path
        self.update_visible()
        return FileOpResult.success(file_path)

    # Collections

    def _all_collections(self) -> Iterator[PathCollection]:
        yield self.direct_paths
        yield from self.collections

    def get_collection(self, collection_id: UUID | None) -> PathCollection | None:
        if collection_id is None:
            return None
        for collection in self._all_collections():
            if collection.id == collection_id:
                return collection
        return None

    def get_path(self, path_id: UUID) -> Path | None:
        for collection in self._all_collections():
            path = collection.get_path(path_id)
            if path is not None:
                return path
        return None

    def is_empty(self) -> bool:
        """True when no user collection holds a path."""
        return all(not collection.paths for collection in self.collections)

    def create_collection(self, name: str = DEFAULT_COLLECTION_NAME) -> PathCollection:
        collection = PathCollection(name or EMPTY_NAME_PLACEHOLDER)
        if not self.collections:
            self.active_collection = collection.id
        self._track_collection(collection.id)
        self.collections.append(collection)
        return collection

    def rename_collection(self, collection_id: UUID, new_name: str) -> bool:
        for collection in self.collections:
            if collection.id == collection_id:
                collection.name = new_name or EMPTY_NAME_PLACEHOLDER
                return True
        logger.error("Collection-ID '%s' does not exist!", collection_id)
        return False

    def delete_collection(self, collection_id: UUID) -> bool:
        """Delete a user collection with its paths, filter and bookkeeping."""
        for index, collection in enumerate(self.collections):
            if collection.id == collection_id:
                break
        else:
            logger.error("Collection-ID '%s' does not exist!", collection_id)
            return False

        for path in collection:
            self._forget_path(path.id)
        del self.collections[index]
        self.filters.pop(collection_id, None)
        self.mute_collections.pop(collection_id, None)
        self.solo_collections.pop(collection_id, None)
        self.selected_paths.pop(collection_id, None)
        if self.active_collection == collection_id:
            self.active_collection = None

        self.update_visible()
        return True

    def toggle_active(self, collection_id: UUID) -> None:
        if self.active_collection == collection_id:
            self.active_collection = None
        elif any(c.id == collection_id for c in self.collections):
            self.active_collection = collection_id
        else:
            logger.error("Collection-ID '%s' does not exist!", collection_id)

    # Paths

    def delete_path(self, path_id: UUID) -> bool:
        """Remove a path everywhere.

        Any ``PinnedPath`` filter pinned to it is cleared, so the collection
        falls back to plain ordered insertion.
        """
        removed = False
        for collection in self._all_collections():
            removed |= collection.remove(path_id)
        if not removed:
            logger.error("Path-ID '%s' does not exist!", path_id)
            return False

        self._forget_path(path_id)
        for collection_id, high_pass in list(self.filters.items()):
            if isinstance(high_pass, PinnedPath) and high_pass.id == path_id:
                del self.filters[collection_id]

        self.update_visible()
        return True

    # Filters

    def _user_collection(self, collection_id: UUID) -> PathCollection | None:
        for collection in self.collections:
            if collection.id == collection_id:
                return collection
        logger.error("Collection-ID '%s' does not exist!", collection_id)
        return None

    def toggle_gold_filter(self, collection_id: UUID) -> bool:
        if self._user_collection(collection_id) is None:
            return False
        if isinstance(self.filters.get(collection_id), Gold):
            del self.filters[collection_id]
        else:
            self.filters[collection_id] = Gold()
        return True

    def set_path_filter(self, collection_id: UUID, path_id: UUID) -> bool:
        """Pin a collection to one of its paths; pinning the same path again unpins."""
        collection = self._user_collection(collection_id)
        if collection is None:
            return False
        if path_id not in collection:
            logger.error("Path-ID '%s' not in collection '%s'!", path_id, collection_id)
            return False

        current = self.filters.get(collection_id)
        if isinstance(current, PinnedPath) and current.id == path_id:
            del self.filters[collection_id]
        else:
            self.filters[collection_id] = PinnedPath(path_id)
        return True

    # Visibility and selection

    def toggle_mute(self, item_id: UUID) -> bool:
        found = False
        for flags in (self.mute_paths, self.mute_collections):
            if item_id in flags:
                flags[item_id] = not flags[item_id]
                found = True
        if not found:
            logger.error("ID '%s' is neither a path nor a collection!", item_id)
            return False
        self.update_visible()
        return True

    def toggle_solo(self, item_id: UUID) -> bool:
        found = False
        for flags in (self.solo_paths, self.solo_collections):
            if item_id in flags:
                flags[item_id] = not flags[item_id]
                found = True
        if not found:
            logger.error("ID '%s' is neither a path nor a collection!", item_id)
            return False
        self.update_visible()
        return True

    def set_comparison_mode(self, mode: Comparison) -> None:
        self.comparison_mode = mode
        self.update_visible()

    def select_path(
        self,
        collection_id: UUID,
        path_id: UUID,
        modifier: SelectModifier = SelectModifier.REPLACE,
    ) -> bool:
        collection = self.get_collection(collection_id)
        if collection is None or path_id not in collection:
            logger.error("Path-ID '%s' not in collection '%s'!", path_id, collection_id)
            return False

        selected = self.selected_paths.setdefault(collection_id, [])
        if modifier == SelectModifier.RANGE:
            ids = collection.path_ids()
            anchor = selected[-1] if selected and selected[-1] in ids else path_id
            a, b = ids.index(anchor), ids.index(path_id)
            span = ids[a + 1 : b + 1] if a < b else ids[b:a]
            for span_id in span:
                if span_id in selected:
                    selected.remove(span_id)
                else:
                    selected.append(span_id)
        elif modifier == SelectModifier.TOGGLE:
            if path_id in selected:
                selected.remove(path_id)
            else:
                selected.append(path_id)
        else:
            selected.clear()
            selected.append(path_id)
        return True

    def update_visible(self) -> None:
        """Rebuild the compared/ignored caches from mute, solo and mode."""
        compared: list[UUID] = []
        ignored: dict[UUID, list[UUID]] = {}
        any_solo_collection = any(self.solo_collections.values())
        any_solo_path = any(self.solo_paths.values())

        for collection in self._all_collections():
            ignored[collection.id] = []
            if not collection.paths:
                continue

            visible = not any_solo_collection or self.solo_collections.get(collection.id, False)
            if self.mute_collections.get(collection.id, False):
                visible = False
            if not visible:
                continue

            if self.comparison_mode is Comparison.GOLD:
                compared.append(collection.paths[0].id)
                continue
            if self.comparison_mode is Comparison.AVERAGE:
                compared.append(collection.paths[len(collection.paths) // 2].id)

            for path in collection:
                if path.id in compared:
                    continue
                visible = not any_solo_path or self.solo_paths.get(path.id, False)
                if self.mute_paths.get(path.id, False):
                    visible = False
                if not visible:
                    continue
                if self.comparison_mode is Comparison.AVERAGE:
                    ignored[collection.id].append(path.id)
                    continue
                compared.append(path.id)

        self.compared_paths = compared
        self.ignored_paths = ignored

    # Bookkeeping

    def _track_collection(self, collection_id: UUID) -> None:
        self.mute_collections.setdefault(collection_id, False)
        self.solo_collections.setdefault(collection_id, False)
        self.selected_paths.setdefault(collection_id, [])

    def _track_path(self, path_id: UUID) -> None:
        self.mute_paths.setdefault(path_id, False)
        self.solo_paths.setdefault(path_id, False)

    def _forget_path(self, path_id: UUID) -> None:
        self.mute_paths.pop(path_id, None)
        self.solo_paths.pop(path_id, None)
        for selected in self.selected_paths.values():
            if path_id in selected:
                selected.remove(path_id)
