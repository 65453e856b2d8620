"""
Copyright 2026 optical-bench-shapely authors and contributors

Licensed under the Apache License, Version 2.0 (the "License");
you may not use this file except in compliance with the License.
You may obtain a copy of the License at

    http://www.apache.org/licenses/LICENSE-2.0

Unless required by applicable law or agreed to in writing, software
distributed under the License is distributed on an "AS IS" BASIS,
WITHOUT WARRANTIES OR CONDITIONS OF ANY KIND, either express or implied.
See the License for the specific language governing permissions and
limitations under the License.
"""

import math
from typing import Optional, Dict
from shapely.geometry import Point as ShapelyPoint, LineString

if __name__ == "__main__":
    from optical_bench_shapely.core.constants import INTERSECTION_EPSILON, MIN_RAY_PARAM, MIN_NORMAL_LENGTH
else:
    from .constants import INTERSECTION_EPSILON, MIN_RAY_PARAM, MIN_NORMAL_LENGTH


class Point:
    """
    A point (or a vector) in 2D space.
    Can be converted to/from Shapely Point objects.
    """
    def __init__(self, x: float, y: float):
        self.x = x
        self.y = y

    def to_shapely(self) -> ShapelyPoint:
        """Convert to Shapely Point."""
        return ShapelyPoint(self.x, self.y)

    @classmethod
    def from_shapely(cls, sp: ShapelyPoint) -> 'Point':
        """Create Point from Shapely Point."""
        return cls(sp.x, sp.y)

    def __repr__(self) -> str:
        return f"Point(x={self.x}, y={self.y})"

    def to_dict(self) -> Dict[str, float]:
        """Convert to dictionary representation."""
        return {'x': self.x, 'y': self.y}


class Line:
    """
    A line in 2D space, defined by two points.
    As a segment, p1 and p2 are the two endpoints.
    """
    def __init__(self, p1: Point, p2: Point):
        self.p1 = p1
        self.p2 = p2

    def to_shapely(self) -> LineString:
        """Convert to Shapely LineString."""
        return LineString([(self.p1.x, self.p1.y), (self.p2.x, self.p2.y)])

    @classmethod
    def from_shapely(cls, sl: LineString) -> 'Line':
        """Create Line from Shapely LineString."""
        coords = list(sl.coords)
        return cls(Point(coords[0][0], coords[0][1]), Point(coords[1][0], coords[1][1]))

    def __repr__(self) -> str:
        return f"Line(p1={self.p1}, p2={self.p2})"


class Hit:
    """
    Result of a ray/segment intersection test.

    Attributes:
        point (Point): The intersection point in world coordinates
        t (float): Ray parameter, point = origin + t * direction
        seg_vector (Point): p2 - p1 of the segment that was hit
        normal (Point or None): Unit normal of the hit segment, filled in by the tracer
    """
    def __init__(self, point: Point, t: float, seg_vector: Point):
        self.point = point
        self.t = t
        self.seg_vector = seg_vector
        self.normal: Optional[Point] = None

    def __repr__(self) -> str:
        return f"Hit(point={self.point}, t={self.t:.6g})"


class Geometry:
    """
    The geometry module, which provides basic geometric figures and operations
    used by the geometry provider, the intersection solver and the tracer.
    """

    @staticmethod
    def point(x: float, y: float) -> Point:
        """
        Create a point.

        Args:
            x: The x-coordinate of the point.
            y: The y-coordinate of the point.

        Returns:
            Point object
        """
        return Point(x, y)

    @staticmethod
    def line(p1: Point, p2: Point) -> Line:
        """
        Create a line, which also represents a segment.

        Args:
            p1: First point
            p2: Second point

        Returns:
            Line object
        """
        return Line(p1, p2)

    @staticmethod
    def dot(p1: Point, p2: Point) -> float:
        """
        Calculate the dot product, where the two points are treated as vectors.

        Args:
            p1: First point (as vector)
            p2: Second point (as vector)

        Returns:
            Dot product
        """
        return p1.x * p2.x + p1.y * p2.y

    @staticmethod
    def cross(p1: Point, p2: Point) -> float:
        """
        Calculate the cross product, where the two points are treated as vectors.

        Args:
            p1: First point (as vector)
            p2: Second point (as vector)

        Returns:
            Cross product (z-component in 2D)
        """
        return p1.x * p2.y - p1.y * p2.x

    @staticmethod
    def length(p1: Point) -> float:
        """Length of the given point treated as a vector."""
        return math.sqrt(p1.x * p1.x + p1.y * p1.y)

    @staticmethod
    def distance(p1: Point, p2: Point) -> float:
        """
        Calculate the distance between two points.

        Args:
            p1: First point
            p2: Second point

        Returns:
            Distance between points
        """
        return math.sqrt(Geometry.distance_squared(p1, p2))

    @staticmethod
    def distance_squared(p1: Point, p2: Point) -> float:
        """
        Calculate the squared distance between two points.

        Args:
            p1: First point
            p2: Second point

        Returns:
            Squared distance between points
        """
        dx = p1.x - p2.x
        dy = p1.y - p2.y
        return dx * dx + dy * dy

    @staticmethod
    def midpoint(p1: Point, p2: Point) -> Point:
        """
        Calculate the midpoint between two points.

        Args:
            p1: First point
            p2: Second point

        Returns:
            Midpoint
        """
        return Geometry.point((p1.x + p2.x) * 0.5, (p1.y + p2.y) * 0.5)

    @staticmethod
    def normalize_vec(p1: Point) -> Point:
        """
        Normalize the given point as if it were a vector.

        A zero-length vector normalizes to (0, 0) instead of raising.

        Args:
            p1: Point (as vector)

        Returns:
            Normalized vector
        """
        len_val = Geometry.length(p1)
        if len_val == 0:
            return Geometry.point(0, 0)
        return Geometry.point(p1.x / len_val, p1.y / len_val)

    @staticmethod
    def rotate_vec(p1: Point, angle: float) -> Point:
        """
        Rotate the given point as if it were a vector by the given angle in radians.

        Args:
            p1: Point (as vector)
            angle: Rotation angle in radians

        Returns:
            Rotated vector
        """
        return Geometry.point(
            p1.x * math.cos(angle) - p1.y * math.sin(angle),
            p1.x * math.sin(angle) + p1.y * math.cos(angle)
        )

    @staticmethod
    def reflect_vec(d: Point, n: Point) -> Point:
        """
        Specular reflection D' = D - 2 (D.N) N.

        Args:
            d: Incoming direction
            n: Unit surface normal

        Returns:
            Reflected direction
        """
        dp = Geometry.dot(d, n)
        return Geometry.point(d.x - 2 * dp * n.x, d.y - 2 * dp * n.y)

    @staticmethod
    def offset(p1: Point, d: Point, distance: float) -> Point:
        """Return p1 + d * distance."""
        return Geometry.point(p1.x + d.x * distance, p1.y + d.y * distance)

    @staticmethod
    def segment_normal(seg_vector: Point) -> Optional[Point]:
        """
        Unit normal (-sy, sx) of a segment vector.

        Returns:
            The normal, or None if the segment vector has (nearly) zero length
        """
        nl = Geometry.length(seg_vector)
        if nl < MIN_NORMAL_LENGTH:
            return None
        return Geometry.point(-seg_vector.y / nl, seg_vector.x / nl)

    @staticmethod
    def ray_segment_intersection(
        origin: Point,
        direction: Point,
        s1: Point,
        s2: Point,
        epsilon: float = INTERSECTION_EPSILON,
        min_t: float = MIN_RAY_PARAM
    ) -> Optional[Hit]:
        """
        Intersect a ray with a segment by solving the 2x2 linear system.

        The ray is origin + t * direction, the segment is s1 + u * (s2 - s1).
        A hit is valid only if u is in [0, 1] and t > min_t, which excludes
        the segment the ray was just emitted from.

        Args:
            origin: Ray origin
            direction: Ray direction (not necessarily unit)
            s1: Segment start
            s2: Segment end
            epsilon: |determinant| below this is treated as parallel
            min_t: Smallest accepted ray parameter

        Returns:
            Hit or None if there is no valid intersection
        """
        sdx = s2.x - s1.x
        sdy = s2.y - s1.y
        den = sdx * direction.y - sdy * direction.x

        if abs(den) < epsilon:
            return None

        dx = s1.x - origin.x
        dy = s1.y - origin.y
        t = (dy * sdx - dx * sdy) / den
        u = (direction.x * dy - direction.y * dx) / den

        if 0 <= u <= 1 and t > min_t:
            return Hit(
                Geometry.point(origin.x + direction.x * t, origin.y + direction.y * t),
                t,
                Geometry.point(sdx, sdy)
            )
        return None


# Create a singleton instance for convenience
geometry = Geometry()


# Example usage and testing
if __name__ == "__main__":
    origin = geometry.point(0, 0)
    direction = geometry.point(1, 0)

    # Vertical segment at x = 100
    hit = geometry.ray_segment_intersection(
        origin, direction, geometry.point(100, -15), geometry.point(100, 15)
    )
    print(f"Hit on vertical segment: {hit}")
    print(f"  Normal of segment: {geometry.segment_normal(hit.seg_vector)}")

    # Parallel segment: no hit
    parallel = geometry.ray_segment_intersection(
        origin, direction, geometry.point(10, 5), geometry.point(50, 5)
    )
    print(f"Hit on parallel segment: {parallel}")

    # Reflection off a 45 degree surface
    n = geometry.normalize_vec(geometry.point(-1, 1))
    print(f"Reflected (1, 0) on 45 deg normal: {geometry.reflect_vec(direction, n)}")
