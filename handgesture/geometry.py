"""
Plane geometry on normalized landmark coordinates.
"""
import math
from typing import Sequence


def distance(a: Sequence[float], b: Sequence[float]) -> float:
    """Euclidean distance between two 2-D points."""
    return math.sqrt((a[0] - b[0]) ** 2 + (a[1] - b[1]) ** 2)


def offset(point: Sequence[float], dx: float, dy: float = 0.0) -> tuple:
    """Return ``point`` shifted by ``(dx, dy)``."""
    return (point[0] + dx, point[1] + dy)


def signed_angle_degrees(vertex: Sequence[float], a: Sequence[float], c: Sequence[float]) -> float:
    """
    Signed angle at ``vertex`` from ray vertex->a to ray vertex->c.

    Computed as ``atan2(cross, dot)`` of ``a - vertex`` and ``c - vertex``,
    converted to degrees and rounded half up, so the result is a whole number
    in (-180, 180]. NaN coordinates give NaN rather than raising.

    Args:
        vertex: Shared origin of both rays
        a: Point on the first ray
        c: Point on the second ray

    Returns:
        Angle in whole degrees (as float), or NaN
    """
    u_x, u_y = a[0] - vertex[0], a[1] - vertex[1]
    v_x, v_y = c[0] - vertex[0], c[1] - vertex[1]

    dot = u_x * v_x + u_y * v_y
    cross = u_x * v_y - u_y * v_x

    degrees = math.degrees(math.atan2(cross, dot))
    if math.isnan(degrees):
        return degrees
    rounded = float(math.floor(degrees + 0.5))
    # -179.5 and below round onto the excluded end of the range
    if rounded == -180.0:
        return 180.0
    return rounded
