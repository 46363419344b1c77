"""UI-side bookkeeping owned by the application: bookmarks, dialogs, toasts."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum, auto

from pathcomp.core.types import Vec2, Vec3
from pathcomp.scheduling.pending import PendingOperation
from pathcomp.storage.models import FileOpResult, FileStatus


@dataclass(frozen=True, slots=True)
class TeleportPoint:
    """Saved player pose the user can jump back to."""

    location: Vec3
    rotation: Vec3
    camera_rotation: Vec2 | None = None


class StatusLevel(Enum):
    INFO = auto()
    WARNING = auto()
    ERROR = auto()


@dataclass(frozen=True, slots=True)
class StatusMessage:
    """Toast shown to the user until replaced or dismissed."""

    level: StatusLevel
    text: str


@dataclass(slots=True)
class UIState:
    main_teleports: list[TeleportPoint | None] = field(default_factory=lambda: [None, None])
    extra_teleports: dict[int, TeleportPoint] = field(default_factory=dict)
    save_dialog: PendingOperation[str | None] = field(
        default_factory=lambda: PendingOperation("save-dialog")
    )
    load_dialog: PendingOperation[str | None] = field(
        default_factory=lambda: PendingOperation("load-dialog")
    )
    status: StatusMessage | None = None

    def notify(self, level: StatusLevel, text: str) -> None:
        self.status = StatusMessage(level, text)

    def report(self, action: str, result: FileOpResult) -> None:
        """Turn a file operation result into a toast."""
        if result.status is FileStatus.OK:
            self.notify(StatusLevel.INFO, f"{action}: {result.path}")
        elif result.status is FileStatus.SKIPPED:
            self.notify(StatusLevel.WARNING, f"{action} skipped: {result.message}")
        else:
            self.notify(StatusLevel.ERROR, f"{action} failed: {result.message}")

    def dismiss(self) -> None:
        self.status = None
