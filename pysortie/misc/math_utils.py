"""
Mathematical utility functions for pysortie.

Plain-tuple geometry shared by the coordinate types and the spawn point
selector. Positions are 2D (x, y) map coordinates in meters.
"""
import math
import random
from typing import List, Optional, Sequence, Tuple

import numpy as np

# Type definitions for positions
Position2D = Tuple[float, float]
Polygon = Sequence[Position2D]


def calculate_2d_distance(pos1: Position2D, pos2: Position2D) -> float:
    """
    Calculate 2D Euclidean distance between two points.

    Examples:
        >>> calculate_2d_distance((0, 0), (3, 4))
        5.0
    """
    x1, y1 = pos1
    x2, y2 = pos2
    return math.hypot(x2 - x1, y2 - y1)


def distances_from(origin: Position2D, positions: Sequence[Position2D]) -> np.ndarray:
    """
    Vectorised distance from ``origin`` to every position.

    Args:
        origin: Reference position (x, y)
        positions: Sequence of (x, y) positions

    Returns:
        1D float array, one distance per position (empty array for no positions)
    """
    if len(positions) == 0:
        return np.empty(0, dtype=float)
    points = np.asarray(positions, dtype=float)
    return np.hypot(points[:, 0] - origin[0], points[:, 1] - origin[1])


def generate_random_angle(rng: Optional[random.Random] = None) -> float:
    """Random angle in radians, 0 to 2π."""
    return (rng or random).uniform(0, 2 * math.pi)


def generate_random_offset(
    min_distance: float,
    max_distance: float,
    rng: Optional[random.Random] = None
) -> Position2D:
    """
    Random (dx, dy) vector whose length lies in [min_distance, max_distance].

    The angle is uniform; the length is uniform in the interval, which
    concentrates points toward the inner edge of wide rings.
    """
    rng = rng or random
    angle = generate_random_angle(rng)
    distance = rng.uniform(min_distance, max_distance)
    return (distance * math.cos(angle), distance * math.sin(angle))


def point_in_polygon(x: float, y: float, polygon: Polygon) -> bool:
    """
    Ray casting algorithm to determine if a point is inside a polygon.

    Args:
        x: X coordinate of point
        y: Y coordinate of point
        polygon: Sequence of (x, y) vertex pairs defining the polygon

    Returns:
        True if point is inside polygon
    """
    n = len(polygon)
    if n < 3:
        return False
    inside = False

    p1x, p1y = polygon[0]
    for i in range(1, n + 1):
        p2x, p2y = polygon[i % n]
        if y > min(p1y, p2y):
            if y <= max(p1y, p2y):
                if x <= max(p1x, p2x):
                    x_inters = p1x
                    if p1y != p2y:
                        x_inters = (y - p1y) * (p2x - p1x) / (p2y - p1y) + p1x
                    if p1x == p2x or x <= x_inters:
                        inside = not inside
        p1x, p1y = p2x, p2y

    return inside


def point_in_any_polygon(position: Position2D, polygons: Sequence[Polygon]) -> bool:
    """True if ``position`` falls inside at least one of ``polygons``."""
    x, y = position
    return any(point_in_polygon(x, y, polygon) for polygon in polygons)


def find_closest_position(
    target: Position2D,
    candidates: List[Position2D]
) -> Tuple[int, float]:
    """
    Find the closest position from a list of candidates.

    Args:
        target: Target position
        candidates: List of candidate positions

    Returns:
        Tuple of (index of closest candidate, distance). Ties resolve to the
        earliest candidate.

    Raises:
        ValueError: If no candidates provided

    Examples:
        >>> find_closest_position((3, 0), [(0, 0), (5, 0), (10, 0)])
        (1, 2.0)
    """
    if not candidates:
        raise ValueError("No candidate positions provided")

    distances = distances_from(target, candidates)
    index = int(np.argmin(distances))
    return index, float(distances[index])
