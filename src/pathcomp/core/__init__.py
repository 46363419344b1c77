"""Core functionalities: stateless geometry and path data primitives.

Architecture Note:
    core/ contains the pure data model: colliders, paths and collections.
    Nothing in here knows about recording state, files or events.
    For stateful services, see world/, storage/, and scheduling/.
"""

from pathcomp.core.geometry import BoxCollider, euler_xyz_matrix, local_up, offset_up
from pathcomp.core.path import Gold, HighPassFilter, Path, PathCollection, PinnedPath
from pathcomp.core.types import CollectionId, PathId, Vec2, Vec3, as_vec3

__all__ = [
    # Types
    "Vec2",
    "Vec3",
    "PathId",
    "CollectionId",
    "as_vec3",
    # Geometry
    "BoxCollider",
    "euler_xyz_matrix",
    "local_up",
    "offset_up",
    # Path
    "Path",
    "PathCollection",
    "HighPassFilter",
    "Gold",
    "PinnedPath",
]
