"""
Track frame - Orientation frame attached to every point on the centerline.

Defines:
- TrackPoint: position plus an orthonormal {front, left, up} triad
- make_point: the one place a frame is built and re-orthogonalized
- Degenerate axis handling and rotation helpers
"""

from dataclasses import dataclass
from typing import Tuple
import numpy as np


# Track space: Y is up, travel starts along +Z
WORLD_UP = np.array([0.0, 1.0, 0.0])
WORLD_FORWARD = np.array([0.0, 0.0, 1.0])
WORLD_LEFT = np.array([1.0, 0.0, 0.0])

DEGENERATE_EPS = 1e-6


@dataclass(frozen=True, eq=False)
class TrackPoint:
    """A point on the track centerline with its local frame.

    The frame is right-handed and orthonormal: ``up = front x left``.
    Build instances with ``make_point`` rather than directly so the
    invariant holds.
    """
    position: np.ndarray
    front: np.ndarray
    left: np.ndarray
    up: np.ndarray

    def as_row(self) -> Tuple[float, ...]:
        """Get the 12 frame components in export column order.

        Returns:
            (PosX, PosY, PosZ, FrontX, ..., UpZ)
        """
        return tuple(
            float(v)
            for vec in (self.position, self.front, self.left, self.up)
            for v in vec
        )

    def get_state(self) -> dict:
        """Get the point as plain lists for serialization.

        Returns:
            Dictionary of position and frame axes
        """
        return {
            "position": [float(v) for v in self.position],
            "front": [float(v) for v in self.front],
            "left": [float(v) for v in self.left],
            "up": [float(v) for v in self.up],
        }


def safe_direction(vector: np.ndarray, fallback: np.ndarray) -> np.ndarray:
    """Normalize a vector, substituting a fallback when it is degenerate.

    Args:
        vector: Vector to normalize
        fallback: Unit vector returned when ``vector`` has (near) zero length

    Returns:
        Unit vector
    """
    norm = np.linalg.norm(vector)
    if norm < DEGENERATE_EPS:
        return np.array(fallback, dtype=float)
    return vector / norm


def fallback_left(front: np.ndarray) -> np.ndarray:
    """Lateral axis used when ``up`` is parallel to ``front``.

    World +X, +Z and +Y are tried in that order; the first one with a
    usable component perpendicular to ``front`` wins. ``front`` must be a
    unit vector, so at least one of the three always qualifies.

    Args:
        front: Unit tangent

    Returns:
        Unit vector perpendicular to ``front``
    """
    for axis in (WORLD_LEFT, WORLD_FORWARD, WORLD_UP):
        candidate = axis - np.dot(axis, front) * front
        norm = np.linalg.norm(candidate)
        if norm > 0.1:
            return candidate / norm
    return np.array(WORLD_LEFT)


def make_point(position, front, up) -> TrackPoint:
    """Build a track point with a repaired orthonormal frame.

    ``left`` is derived as ``up x front`` and ``up`` is recomputed as
    ``front x left``, so the caller's ``up`` only needs to be roughly
    perpendicular to ``front``.

    Args:
        position: Point in track space
        front: Direction of travel (any length)
        up: Approximate roof direction (any length)

    Returns:
        TrackPoint with orthonormal frame
    """
    position = np.array(position, dtype=float)
    front = safe_direction(np.asarray(front, dtype=float), WORLD_FORWARD)
    up = safe_direction(np.asarray(up, dtype=float), WORLD_UP)

    left = np.cross(up, front)
    if np.linalg.norm(left) < DEGENERATE_EPS:
        left = fallback_left(front)
    else:
        left = left / np.linalg.norm(left)

    up = np.cross(front, left)
    up = up / np.linalg.norm(up)

    return TrackPoint(position=position, front=front, left=left, up=up)


def start_point() -> TrackPoint:
    """Frame at the origin used as the tail of an empty path."""
    return make_point(np.zeros(3), WORLD_FORWARD, WORLD_UP)


def rotate(vector: np.ndarray, axis: np.ndarray, angle: float) -> np.ndarray:
    """Rotate a vector about an axis (right-hand rule).

    Args:
        vector: Vector to rotate
        axis: Rotation axis (normalized internally)
        angle: Rotation angle in radians

    Returns:
        Rotated vector
    """
    k = safe_direction(np.asarray(axis, dtype=float), WORLD_UP)
    v = np.asarray(vector, dtype=float)
    cos_a = np.cos(angle)
    sin_a = np.sin(angle)
    # Rodrigues' rotation formula
    return v * cos_a + np.cross(k, v) * sin_a + k * np.dot(k, v) * (1.0 - cos_a)


def flatten(direction: np.ndarray) -> np.ndarray:
    """Project a direction onto the horizontal plane.

    A (near) vertical direction has no horizontal heading; world forward
    is used instead.

    Args:
        direction: Direction in track space

    Returns:
        Unit horizontal vector
    """
    flat = np.array([direction[0], 0.0, direction[2]], dtype=float)
    return safe_direction(flat, WORLD_FORWARD)


def is_orthonormal(point: TrackPoint, tol: float = 1e-6) -> bool:
    """Check the frame invariant of a point."""
    vectors = (point.front, point.left, point.up)
    if any(abs(np.linalg.norm(v) - 1.0) > tol for v in vectors):
        return False
    if abs(np.dot(point.front, point.left)) > tol:
        return False
    if abs(np.dot(point.front, point.up)) > tol:
        return False
    if abs(np.dot(point.left, point.up)) > tol:
        return False
    return np.allclose(np.cross(point.front, point.left), point.up, atol=tol)
