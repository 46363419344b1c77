"""Intent events queued by the UI, keybinds and the tick itself.

Every event is an immutable value; handlers live in
:class:`pathcomp.scheduling.processor.EventProcessor`.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from uuid import UUID

from pathcomp.core.types import Vec3
from pathcomp.world.pathlog import Comparison, SelectModifier
from pathcomp.world.render import RenderUpdates


@dataclass(frozen=True, slots=True)
class MainTeleport:
    """Bookmark bound to a main trigger (0 = start, 1 = end)."""

    index: int


@dataclass(frozen=True, slots=True)
class ExtraTeleport:
    """Free user bookmark slot."""

    index: int


type TeleportIndex = MainTeleport | ExtraTeleport


@dataclass(frozen=True, slots=True)
class DeletePath:
    path_id: UUID


@dataclass(frozen=True, slots=True)
class ChangeDirectMode:
    new: bool


@dataclass(frozen=True, slots=True)
class ChangeAutosave:
    new: bool


@dataclass(frozen=True, slots=True)
class ChangeAutoReset:
    new: bool


@dataclass(frozen=True, slots=True)
class SpawnTrigger:
    index: int
    position: Vec3
    rotation: Vec3


@dataclass(frozen=True, slots=True)
class DeleteTrigger:
    id: UUID


@dataclass(frozen=True, slots=True)
class StartRecording:
    pass


@dataclass(frozen=True, slots=True)
class StopRecording:
    pass


@dataclass(frozen=True, slots=True)
class ResetRecording:
    pass


@dataclass(frozen=True, slots=True)
class TogglePause:
    pass


@dataclass(frozen=True, slots=True)
class ClearTriggers:
    pass


@dataclass(frozen=True, slots=True)
class CreateCollection:
    name: str | None = None


@dataclass(frozen=True, slots=True)
class RenameCollection:
    id: UUID
    new_name: str


@dataclass(frozen=True, slots=True)
class DeleteCollection:
    id: UUID


@dataclass(frozen=True, slots=True)
class ToggleMute:
    id: UUID


@dataclass(frozen=True, slots=True)
class ToggleSolo:
    id: UUID


@dataclass(frozen=True, slots=True)
class ToggleActive:
    id: UUID


@dataclass(frozen=True, slots=True)
class ToggleGoldFilter:
    collection_id: UUID


@dataclass(frozen=True, slots=True)
class SetPathFilter:
    collection_id: UUID
    path_id: UUID


@dataclass(frozen=True, slots=True)
class SetComparisonMode:
    mode: Comparison


@dataclass(frozen=True, slots=True)
class SaveComparison:
    """Save to ``path``, or ask the user with a save dialog when None."""

    path: str | None = None


@dataclass(frozen=True, slots=True)
class LoadComparison:
    """Load from ``path``, or ask the user with an open dialog when None."""

    path: str | None = None


@dataclass(frozen=True, slots=True)
class SaveConfig:
    pass


@dataclass(frozen=True, slots=True)
class LoadConfig:
    pass


@dataclass(frozen=True, slots=True)
class SelectPath:
    path_id: UUID
    collection_id: UUID
    modifier: SelectModifier = SelectModifier.REPLACE


@dataclass(frozen=True, slots=True)
class Teleport:
    index: TeleportIndex


@dataclass(frozen=True, slots=True)
class SpawnTeleport:
    index: TeleportIndex


@dataclass(frozen=True, slots=True)
class RenderUpdate:
    update: RenderUpdates = field(default_factory=RenderUpdates.paths_only)


type Event = (
    DeletePath
    | ChangeDirectMode
    | ChangeAutosave
    | ChangeAutoReset
    | SpawnTrigger
    | DeleteTrigger
    | StartRecording
    | StopRecording
    | ResetRecording
    | TogglePause
    | ClearTriggers
    | CreateCollection
    | RenameCollection
    | DeleteCollection
    | ToggleMute
    | ToggleSolo
    | ToggleActive
    | ToggleGoldFilter
    | SetPathFilter
    | SetComparisonMode
    | SaveComparison
    | LoadComparison
    | SaveConfig
    | LoadConfig
    | SelectPath
    | Teleport
    | SpawnTeleport
    | RenderUpdate
)
