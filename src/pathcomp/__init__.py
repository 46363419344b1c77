"""pathcomp: record, compare and store movement paths through a trigger-bounded course.

Usage:
    from pathcomp import App, CreateCollection, SpawnTrigger, StartRecording

    app = App(host, dialog)
    app.push(CreateCollection("Any%"))
    app.push(SpawnTrigger(0, host.get_position(), host.get_rotation()))

    # once per game frame
    app.tick()
"""

__version__ = "0.5.0"

# Core primitives
from pathcomp.core import (
    BoxCollider,
    Gold,
    HighPassFilter,
    Path,
    PathCollection,
    PinnedPath,
    Vec2,
    Vec3,
)

# Storage
from pathcomp.storage import (
    CompFile,
    DecodeError,
    FileIOError,
    FileOpResult,
    FileStatus,
    RetryPolicy,
)

# Config
from pathcomp.config import Settings, SettingsError, load_settings, save_settings

# Host collaborators
from pathcomp.host import FileDialog, Host

# World must load before scheduling: events reference world enums
from pathcomp.world import (
    App,
    AppState,
    Comparison,
    PathLog,
    RenderUpdates,
    SelectModifier,
    StatusLevel,
    TeleportPoint,
    UIState,
)

# Scheduling
from pathcomp.scheduling import (
    ChangeAutoReset,
    ChangeAutosave,
    ChangeDirectMode,
    ClearTriggers,
    CreateCollection,
    DeleteCollection,
    DeletePath,
    DeleteTrigger,
    Event,
    EventQueue,
    ExtraTeleport,
    LoadComparison,
    LoadConfig,
    MainTeleport,
    PendingOperation,
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
    ToggleActive,
    ToggleGoldFilter,
    ToggleMute,
    TogglePause,
    ToggleSolo,
)
from pathcomp.scheduling.processor import EventProcessor

__all__ = [
    # Version
    "__version__",
    # Core
    "Vec2",
    "Vec3",
    "BoxCollider",
    "Path",
    "PathCollection",
    "HighPassFilter",
    "Gold",
    "PinnedPath",
    # Storage
    "CompFile",
    "DecodeError",
    "FileIOError",
    "FileOpResult",
    "FileStatus",
    "RetryPolicy",
    # Config
    "Settings",
    "SettingsError",
    "load_settings",
    "save_settings",
    # Host
    "Host",
    "FileDialog",
    # World
    "App",
    "AppState",
    "PathLog",
    "Comparison",
    "SelectModifier",
    "RenderUpdates",
    "UIState",
    "TeleportPoint",
    "StatusLevel",
    # Scheduling
    "Event",
    "EventQueue",
    "EventProcessor",
    "PendingOperation",
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
