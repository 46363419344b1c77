"""Host collaborator protocols.

The host process supplies the player pose every tick and can move the player
on request. File pickers are blocking, so the event loop always runs them on a
worker thread.
"""

from __future__ import annotations

from typing import Protocol

from pathcomp.core.types import Vec2, Vec3


class Host(Protocol):
    """Movement source and actuator of the running game."""

    def get_position(self) -> Vec3:
        """Player position (feet) this frame."""
        ...

    def get_rotation(self) -> Vec3:
        """Player XYZ Euler rotation this frame."""
        ...

    def get_camera_rotation(self) -> Vec2:
        """Camera (pitch, yaw) this frame."""
        ...

    def teleport(self, position: Vec3, rotation: Vec3) -> None:
        """Move the player."""
        ...

    def set_camera_rotation(self, rotation: Vec2) -> None:
        """Point the camera."""
        ...


class FileDialog(Protocol):
    """Blocking native file picker. Returning None means the user cancelled."""

    def pick_save_file(self, extension: str, default_name: str) -> str | None:
        ...

    def pick_open_file(self, extension: str) -> str | None:
        ...
