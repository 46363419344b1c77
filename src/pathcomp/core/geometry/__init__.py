"""Oriented box geometry and the shared up-offset transform."""

from pathcomp.core.geometry.collider import BoxCollider, euler_xyz_matrix, local_up, offset_up

__all__ = [
    "BoxCollider",
    "euler_xyz_matrix",
    "local_up",
    "offset_up",
]
