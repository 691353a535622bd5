"""2D/3D geometry utilities: plan projection, segment math, survey transform.

Points are numpy float arrays of shape (3,). Plan ("2D") operations use the
X and Y components and ignore Z.
"""

from __future__ import annotations

import logging
import math

import numpy as np

logger = logging.getLogger(__name__)

# Parallel / degenerate threshold for determinants and parameter slack
TOL = 1e-9
# Minimum length for a direction vector to be considered non-degenerate
EPS = 1e-6


def as_point(values) -> np.ndarray:
    """Convert a 3-sequence to a float array."""
    return np.asarray(values, dtype=float).reshape(3)


def flatten(p: np.ndarray) -> np.ndarray:
    """Project a 3D point onto the plan (z = 0)."""
    return np.array([p[0], p[1], 0.0])


def dist_2d(a: np.ndarray, b: np.ndarray) -> float:
    """Plan distance between two points."""
    return math.hypot(float(a[0] - b[0]), float(a[1] - b[1]))


def dir_2d(a: np.ndarray, b: np.ndarray) -> tuple[float, float, float]:
    """Plan unit direction from a to b and the plan length.

    Returns (0, 0, length) when the plan length is below EPS.
    """
    vx = float(b[0] - a[0])
    vy = float(b[1] - a[1])
    length = math.hypot(vx, vy)
    if length < EPS:
        return 0.0, 0.0, length
    return vx / length, vy / length, length


def safe_normalize(v) -> np.ndarray | None:
    """Unit vector of v, or None for missing or near-zero vectors."""
    if v is None:
        return None
    v = np.asarray(v, dtype=float)
    length = float(np.linalg.norm(v))
    if length < EPS:
        return None
    return v / length


def lerp(a: np.ndarray, b: np.ndarray, t: float) -> np.ndarray:
    """Linear interpolation a + t*(b - a); t may lie outside [0, 1]."""
    return a + t * (b - a)


def farthest_pair(points: list[np.ndarray]) -> tuple[np.ndarray, np.ndarray] | None:
    """Return the two points with the largest 3D separation.

    None if fewer than two points are given or all points coincide.
    """
    best = -1.0
    pair = None
    for i in range(len(points)):
        for j in range(i + 1, len(points)):
            d = float(np.linalg.norm(points[i] - points[j]))
            if d > best:
                best = d
                pair = (points[i], points[j])
    if pair is None or best <= 0:
        return None
    return pair


def segment_intersection_2d(
    a0: np.ndarray, a1: np.ndarray,
    b0: np.ndarray, b1: np.ndarray,
) -> tuple[float, float, float, float] | None:
    """Intersect plan segments a0-a1 and b0-b1 (determinant method).

    Returns (ix, iy, ta, tb) where ta, tb are the parameters along each
    segment, or None if the segments are parallel/degenerate or do not meet
    within [0, 1] (with TOL slack).
    """
    ax, ay = a1[0] - a0[0], a1[1] - a0[1]
    bx, by = b1[0] - b0[0], b1[1] - b0[1]
    det = ax * by - ay * bx
    if abs(det) < TOL:
        return None

    dx, dy = b0[0] - a0[0], b0[1] - a0[1]
    ta = (dx * by - dy * bx) / det
    tb = (dx * ay - dy * ax) / det
    if ta < -TOL or ta > 1 + TOL or tb < -TOL or tb > 1 + TOL:
        return None

    ix = a0[0] + ta * ax
    iy = a0[1] + ta * ay
    return float(ix), float(iy), float(ta), float(tb)


def point_segment_distance_2d(
    px: float, py: float, a0: np.ndarray, a1: np.ndarray,
) -> tuple[float, float]:
    """Plan distance from (px, py) to segment a0-a1.

    Returns (distance, t) with t clamped to [0, 1]. Degenerate segments
    measure to a0 with t = 0.
    """
    vx, vy = float(a1[0] - a0[0]), float(a1[1] - a0[1])
    l2 = vx * vx + vy * vy
    if l2 < EPS:
        return math.hypot(px - a0[0], py - a0[1]), 0.0

    t = ((px - a0[0]) * vx + (py - a0[1]) * vy) / l2
    t = max(0.0, min(1.0, float(t)))
    qx = a0[0] + t * vx
    qy = a0[1] + t * vy
    return math.hypot(px - qx, py - qy), t


def rotation_z(angle_deg: float) -> np.ndarray:
    """3x3 rotation matrix about +Z."""
    a = math.radians(angle_deg)
    c, s = math.cos(a), math.sin(a)
    return np.array([
        [c, -s, 0.0],
        [s, c, 0.0],
        [0.0, 0.0, 1.0],
    ])


def make_survey_transform(
    origin: tuple[float, float, float], rotation_deg: float,
) -> np.ndarray:
    """Build a 4x4 project-to-survey transform (rotate about Z, then translate)."""
    m = np.eye(4)
    m[:3, :3] = rotation_z(rotation_deg)
    m[:3, 3] = origin
    return m


def transform_point(m: np.ndarray, p: np.ndarray) -> np.ndarray:
    """Apply a 4x4 transform to a point."""
    return m[:3, :3] @ p + m[:3, 3]


def transform_vector(m: np.ndarray, v: np.ndarray) -> np.ndarray:
    """Apply the rotation part of a 4x4 transform to a direction."""
    return m[:3, :3] @ v
