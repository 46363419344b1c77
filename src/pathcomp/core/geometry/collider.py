"""Oriented box colliders used as start/end triggers.

Usage:
    trigger = BoxCollider(position=(0, 1, 0), rotation=(0, 0.5, 0), size=(1, 1, 1))
    if trigger.check_point_collision(player_point):
        ...
"""

from __future__ import annotations

import math
from uuid import UUID, uuid4

import numpy as np
from numpy.typing import NDArray

from pathcomp.core.types import Vec3, as_vec3

_UNIT_Y: NDArray[np.float64] = np.array([0.0, 1.0, 0.0], dtype=np.float64)


def euler_xyz_matrix(rotation: Vec3) -> NDArray[np.float64]:
    """Build the rotation matrix Rx(a) @ Ry(b) @ Rz(c) for XYZ Euler angles.

    Args:
        rotation: Euler angles in radians, applied in X, Y, Z order.

    Returns:
        3x3 float64 rotation matrix.
    """
    a, b, c = as_vec3(rotation)
    ca, sa = math.cos(a), math.sin(a)
    cb, sb = math.cos(b), math.sin(b)
    cc, sc = math.cos(c), math.sin(c)

    rx = np.array([[1.0, 0.0, 0.0], [0.0, ca, -sa], [0.0, sa, ca]], dtype=np.float64)
    ry = np.array([[cb, 0.0, sb], [0.0, 1.0, 0.0], [-sb, 0.0, cb]], dtype=np.float64)
    rz = np.array([[cc, -sc, 0.0], [sc, cc, 0.0], [0.0, 0.0, 1.0]], dtype=np.float64)
    return rx @ ry @ rz


def local_up(rotation: Vec3) -> Vec3:
    """Return the unit "up" vector of a body with the given rotation."""
    up = euler_xyz_matrix(rotation) @ _UNIT_Y
    return (float(up[0]), float(up[1]), float(up[2]))


def offset_up(position: Vec3, rotation: Vec3) -> Vec3:
    """Shift a position by one unit along the body's local up axis.

    Player positions are reported at the feet. Both trigger placement and the
    per-tick collision point go through here so they stay in the same frame.
    """
    px, py, pz = as_vec3(position)
    ux, uy, uz = local_up(rotation)
    return (px + ux, py + uy, pz + uz)


class BoxCollider:
    """Rotated box with half-extents ``size`` centred on ``position``.

    ``basis`` is the transpose of the build rotation, so ``basis @ (p - position)``
    yields ``p`` in the box's local frame. It is derived from ``rotation`` and
    only changes through :meth:`set_rotation`.

    Args:
        position: Box centre in world space.
        rotation: XYZ Euler angles in radians.
        size: Half-extents along the local axes.
        id: Optional identifier; a new uuid4 is generated when omitted.
    """

    __slots__ = ("_id", "_position", "_rotation", "_size", "_basis")

    def __init__(
        self,
        position: Vec3,
        rotation: Vec3,
        size: Vec3,
        id: UUID | None = None,  # noqa: A002
    ) -> None:
        self._id = id or uuid4()
        self._position = as_vec3(position)
        self._size = as_vec3(size)
        self._rotation = as_vec3(rotation)
        self._basis = euler_xyz_matrix(self._rotation).T

    @property
    def id(self) -> UUID:
        return self._id

    @property
    def position(self) -> Vec3:
        return self._position

    @property
    def rotation(self) -> Vec3:
        return self._rotation

    @property
    def size(self) -> Vec3:
        return self._size

    @property
    def basis(self) -> NDArray[np.float64]:
        """Copy of the world-to-local rotation matrix."""
        return self._basis.copy()

    def set_rotation(self, rotation: Vec3) -> None:
        """Replace the rotation and recompute the basis."""
        self._rotation = as_vec3(rotation)
        self._basis = euler_xyz_matrix(self._rotation).T

    def check_point_collision(self, point: Vec3) -> bool:
        """Check whether a world-space point lies inside (or on) the box."""
        relative = self._basis @ (
            np.asarray(as_vec3(point), dtype=np.float64)
            - np.asarray(self._position, dtype=np.float64)
        )
        return bool(np.all(np.abs(relative) <= np.asarray(self._size, dtype=np.float64)))

    def snapshot(self) -> tuple[Vec3, Vec3, Vec3]:
        """Return the persisted pose: (position, rotation, size)."""
        return (self._position, self._rotation, self._size)

    def __repr__(self) -> str:
        return (
            f"BoxCollider(position={self._position}, rotation={self._rotation}, "
            f"size={self._size})"
        )
