"""Mathematical utility functions for vector and geometric operations."""

import math
from typing import Tuple

import numpy as np

from roadgrowth.citygen.dataclass import Point


class MathUtils:
    """Collection of mathematical utility functions for geometric operations."""

    @staticmethod
    def subtract_points(p1: Point, p2: Point) -> Point:
        """Subtract p2 from p1 (vector subtraction).

        Args:
            p1: First point.
            p2: Second point to subtract.

        Returns:
            A new Point representing p1 - p2.
        """
        return Point(p1.x - p2.x, p1.y - p2.y)

    @staticmethod
    def add_points(p1: Point, p2: Point) -> Point:
        """Add two points together (vector addition).

        Args:
            p1: First point.
            p2: Second point.

        Returns:
            A new Point representing p1 + p2.
        """
        return Point(p1.x + p2.x, p1.y + p2.y)

    @staticmethod
    def scale_point(p: Point, factor: float) -> Point:
        """Scale a vector by a scalar."""
        return Point(p.x * factor, p.y * factor)

    @staticmethod
    def cross_product(a: Point, b: Point) -> float:
        """Calculate the 2D cross product of two points.

        Args:
            a: First point.
            b: Second point.

        Returns:
            The cross product a × b.
        """
        return a.x * b.y - a.y * b.x

    @staticmethod
    def dot_product(a: Point, b: Point) -> float:
        """Calculate the dot product of two points.

        Args:
            a: First point.
            b: Second point.

        Returns:
            The dot product a · b.
        """
        return a.x * b.x + a.y * b.y

    @staticmethod
    def length(a: Point, b: Point) -> float:
        """Calculate the Euclidean distance between two points.

        Args:
            a: First point.
            b: Second point.

        Returns:
            The distance between points a and b.
        """
        return math.sqrt((b.x - a.x) ** 2 + (b.y - a.y) ** 2)

    @staticmethod
    def heading_to_direction(heading: float) -> Point:
        """Convert a heading in degrees to a unit direction vector.

        Forward is +y, so the direction is (sin θ, cos θ). Components are rounded
        to 10 places so right-angle turns land on exact grid coordinates.

        Args:
            heading: Heading in degrees.

        Returns:
            The unit direction, or a NaN point if the heading is not finite.
        """
        if not math.isfinite(heading):
            return Point(math.nan, math.nan)
        rad = math.radians(heading)
        return Point(round(math.sin(rad), 10), round(math.cos(rad), 10))

    @staticmethod
    def normalize_angle(angle: float) -> float:
        """Wrap an angle in degrees into [0, 360)."""
        return angle % 360.0

    @staticmethod
    def angle_difference(angle1: float, angle2: float) -> float:
        """Calculate the smallest angle difference between two angles.

        Args:
            angle1: First angle in degrees.
            angle2: Second angle in degrees.

        Returns:
            The smallest angle difference between angle1 and angle2 (0-180).
        """
        diff = abs(angle1 - angle2) % 360
        return min(diff, 360 - diff)

    @staticmethod
    def orientation(a: Point, b: Point, p: Point) -> float:
        """Signed area telling which side of the directed line a->b the point p lies on."""
        return MathUtils.cross_product(MathUtils.subtract_points(b, a), MathUtils.subtract_points(p, a))

    @staticmethod
    def do_line_segments_intersect(a0: Point, a1: Point, b0: Point, b1: Point) -> bool:
        """Determine whether two line segments properly cross.

        Both endpoints of each segment must lie strictly on opposite sides of the
        other segment. Segments that only touch, share an endpoint, or are
        collinear do not count as crossing.

        Args:
            a0: First point of first segment.
            a1: Second point of first segment.
            b0: First point of second segment.
            b1: Second point of second segment.

        Returns:
            True if the segments properly cross, False otherwise.
        """
        d1 = MathUtils.orientation(a0, a1, b0)
        d2 = MathUtils.orientation(a0, a1, b1)
        d3 = MathUtils.orientation(b0, b1, a0)
        d4 = MathUtils.orientation(b0, b1, a1)
        return d1 * d2 < 0 and d3 * d4 < 0

    @staticmethod
    def collinear_overlap(a0: Point, a1: Point, b0: Point, b1: Point, tolerance: float) -> bool:
        """Determine whether two segments lie on one line and share more than a point.

        Args:
            a0: First point of first segment.
            a1: Second point of first segment.
            b0: First point of second segment.
            b1: Second point of second segment.
            tolerance: Largest distance from a's line that still counts as on it, and
                smallest shared length that counts as overlap.

        Returns:
            True if the shared stretch is longer than the tolerance.
        """
        direction = MathUtils.subtract_points(a1, a0)
        length_sq = MathUtils.dot_product(direction, direction)
        if length_sq == 0:
            return False
        length = math.sqrt(length_sq)

        rel0 = MathUtils.subtract_points(b0, a0)
        rel1 = MathUtils.subtract_points(b1, a0)
        if abs(MathUtils.cross_product(direction, rel0)) > tolerance * length or \
                abs(MathUtils.cross_product(direction, rel1)) > tolerance * length:
            return False

        t0 = MathUtils.dot_product(rel0, direction) / length_sq
        t1 = MathUtils.dot_product(rel1, direction) / length_sq
        low = max(0.0, min(t0, t1))
        high = min(1.0, max(t0, t1))
        return (high - low) * length > tolerance

    @staticmethod
    def crossing_matrix(lines: np.ndarray, others: np.ndarray = None) -> np.ndarray:
        """Vectorized pairwise version of do_line_segments_intersect.

        Args:
            lines: Array of shape (N, 2, 2) holding the 2D endpoints of N segments.
            others: Array of shape (M, 2, 2) to test against; ``lines`` if omitted.

        Returns:
            Boolean array of shape (N, M) where [i, j] is True if lines[i] and others[j] cross.
        """
        if others is None:
            others = lines
        a0 = lines[:, None, 0, :]
        a1 = lines[:, None, 1, :]
        b0 = others[None, :, 0, :]
        b1 = others[None, :, 1, :]

        def orient(p, q, r):
            return (q[..., 0] - p[..., 0]) * (r[..., 1] - p[..., 1]) - (q[..., 1] - p[..., 1]) * (r[..., 0] - p[..., 0])

        d1 = orient(a0, a1, b0)
        d2 = orient(a0, a1, b1)
        d3 = orient(b0, b1, a0)
        d4 = orient(b0, b1, a1)
        return (d1 * d2 < 0) & (d3 * d4 < 0)

    @staticmethod
    def bounding_box(a: Point, b: Point, padding: float = 0.0) -> Tuple[float, float, float, float]:
        """Axis-aligned box around two points as (x, y, width, height)."""
        min_x = min(a.x, b.x)
        min_y = min(a.y, b.y)
        return (
            min_x - padding,
            min_y - padding,
            abs(b.x - a.x) + 2 * padding,
            abs(b.y - a.y) + 2 * padding,
        )
