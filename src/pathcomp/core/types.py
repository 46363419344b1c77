"""Core type definitions for pathcomp."""

from uuid import UUID

type Vec3 = tuple[float, float, float]
"""Position, Euler rotation (XYZ, radians) or half-extents in world space."""

type Vec2 = tuple[float, float]
"""Camera rotation (pitch, yaw)."""

type PathId = UUID
type CollectionId = UUID


def as_vec3(value: object) -> Vec3:
    """Coerce any 3-element sequence into a float triple.

    Raises:
        ValueError: If value does not hold exactly three numbers.
    """
    try:
        x, y, z = value  # type: ignore[misc]
    except (TypeError, ValueError) as e:
        raise ValueError(f"Expected a 3-component vector, got {value!r}") from e
    return (float(x), float(y), float(z))
