"""Event scheduling: intent events, the shared queue and deferred operations.

The processor itself lives in :mod:`pathcomp.scheduling.processor`:

    from pathcomp.scheduling.processor import EventProcessor
"""

from pathcomp.scheduling.event_queue import EventQueue
from pathcomp.scheduling.events import (
    ChangeAutoReset,
    ChangeAutosave,
    ChangeDirectMode,
    ClearTriggers,
    CreateCollection,
    DeleteCollection,
    DeletePath,
    DeleteTrigger,
    Event,
    ExtraTeleport,
    LoadComparison,
    LoadConfig,
    MainTeleport,
    RenameCollection,
    RenderUpdate,
    ResetRecording,
    SaveComparison,
    SaveConfig,
    SelectPath,
    SetComparisonMode,
    SetPathFilter,
    SpawnTeleport,
    SpawnTrigger,
    StartRecording,
    StopRecording,
    Teleport,
    TeleportIndex,
    ToggleActive,
    ToggleGoldFilter,
    ToggleMute,
    TogglePause,
    ToggleSolo,
)
from pathcomp.scheduling.pending import Outcome, PendingOperation

__all__ = [
    "Event",
    "EventQueue",
    "Outcome",
    "PendingOperation",
    "TeleportIndex",
    "MainTeleport",
    "ExtraTeleport",
    "DeletePath",
    "ChangeDirectMode",
    "ChangeAutosave",
    "ChangeAutoReset",
    "SpawnTrigger",
    "DeleteTrigger",
    "StartRecording",
    "StopRecording",
    "ResetRecording",
    "TogglePause",
    "ClearTriggers",
    "CreateCollection",
    "RenameCollection",
    "DeleteCollection",
    "ToggleMute",
    "ToggleSolo",
    "ToggleActive",
    "ToggleGoldFilter",
    "SetPathFilter",
    "SetComparisonMode",
    "SaveComparison",
    "LoadComparison",
    "SaveConfig",
    "LoadConfig",
    "SelectPath",
    "Teleport",
    "SpawnTeleport",
    "RenderUpdate",
]
