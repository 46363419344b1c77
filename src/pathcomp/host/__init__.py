"""Interfaces of the external collaborators driving the core."""

from pathcomp.host.protocol import FileDialog, Host

__all__ = [
    "Host",
    "FileDialog",
]
