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
from typing import Any, Dict, List, Optional

from shapely import affinity
from shapely.geometry import Polygon, Point as ShapelyPoint

if __name__ == "__main__":
    from optical_bench_shapely.core.geometry import geometry, Point
    from optical_bench_shapely.core.segment import Segment, SegmentType
else:
    from ..geometry import geometry, Point
    from ..segment import Segment, SegmentType


class PoseObjMixin:
    """
    Mixin class for elements placed on the bench by a pose: a center (x, y),
    a rotation (radians, counter-clockwise) and a width x height footprint.

    Local coordinates have +x along the element's facing direction. A local
    point maps to world coordinates by rotating by `rotation` and then
    translating by (x, y).

    This mixin provides:
    - Local to world conversion and the facing vector
    - The rectangular body as a shapely polygon, and footprint queries
    - Transformation methods (move, rotate)
    - Helpers to build segments from local endpoints

    Usage:
        class MyElement(PoseObjMixin, BaseSceneObj):
            serializable_defaults = {
                'x': 0.0, 'y': 0.0, 'rotation': 0.0,
                'width': 40.0, 'height': 40.0,
            }

    Note: In Python's MRO, the mixin comes before the base class.
    """

    pose_fields = ('x', 'y', 'rotation', 'width', 'height')

    def __init__(self, scene, json_obj: Optional[Dict[str, Any]] = None) -> None:
        super().__init__(scene, json_obj)
        # A pose field that is not a finite number falls back to the class default
        defaults = self.__class__.serializable_defaults
        for field in self.pose_fields:
            value = getattr(self, field, None)
            if (not isinstance(value, (int, float)) or isinstance(value, bool)
                    or not math.isfinite(value)):
                setattr(self, field, float(defaults.get(field, 0.0)))

    def position(self) -> Point:
        """Center of the element."""
        return geometry.point(self.x, self.y)

    def local_to_world(self, lx: float, ly: float) -> Point:
        """
        Convert a point from element-local to world coordinates.

        Args:
            lx: Local x (along the facing direction)
            ly: Local y

        Returns:
            World Point
        """
        r = geometry.rotate_vec(geometry.point(lx, ly), self.rotation)
        return geometry.point(self.x + r.x, self.y + r.y)

    def local_vector(self, lx: float, ly: float) -> Point:
        """Rotate a local direction into world orientation (no translation)."""
        return geometry.rotate_vec(geometry.point(lx, ly), self.rotation)

    def facing_vector(self) -> Point:
        """Unit vector along local +x."""
        return self.local_vector(1, 0)

    def body_polygon(self) -> Polygon:
        """
        The rectangular footprint as a shapely Polygon in world coordinates.

        Vertices are ordered (-w/2, -h/2), (w/2, -h/2), (w/2, h/2), (-w/2, h/2)
        in local coordinates.
        """
        hw = self.width / 2
        hh = self.height / 2
        local = Polygon([(-hw, -hh), (hw, -hh), (hw, hh), (-hw, hh)])
        rotated = affinity.rotate(local, self.rotation, origin=(0, 0), use_radians=True)
        return affinity.translate(rotated, self.x, self.y)

    def corners(self) -> List[Point]:
        """The four body corners in world coordinates, in body_polygon() order."""
        coords = list(self.body_polygon().exterior.coords)[:4]
        return [geometry.point(cx, cy) for cx, cy in coords]

    def contains_point(self, point: Point) -> bool:
        """Whether the point lies inside or on the boundary of the footprint."""
        return self.body_polygon().covers(ShapelyPoint(point.x, point.y))

    # ==================== Segment helpers ====================

    def local_segment(
        self,
        p1: tuple,
        p2: tuple,
        seg_type: SegmentType,
        normal: Optional[tuple] = None
    ) -> Segment:
        """
        Build a world-coordinate segment from local endpoints.

        Args:
            p1: Local (x, y) of the first endpoint
            p2: Local (x, y) of the second endpoint
            seg_type: The segment type
            normal: Optional local normal direction, rotated into world orientation

        Returns:
            Segment
        """
        world_normal = None
        if normal is not None:
            world_normal = geometry.normalize_vec(self.local_vector(*normal))
        return Segment(
            self.local_to_world(*p1),
            self.local_to_world(*p2),
            seg_type,
            world_normal
        )

    def rect_segments(self, seg_type: SegmentType) -> List[Segment]:
        """The four edges of the body rectangle, corner i to corner i + 1."""
        c = self.corners()
        return [Segment(c[i], c[(i + 1) % 4], seg_type) for i in range(4)]

    # ==================== Transformation Methods ====================

    def move(self, diff_x: float, diff_y: float) -> bool:
        """
        Move the element by the given displacement.

        Args:
            diff_x: The x-coordinate displacement.
            diff_y: The y-coordinate displacement.

        Returns:
            True, indicating the movement was successful.
        """
        self.x = self.x + diff_x
        self.y = self.y + diff_y
        return True

    def rotate(self, angle: float, center: Optional[Point] = None) -> bool:
        """
        Rotate the element by the given angle.

        Args:
            angle: The angle in radians. Positive for counter-clockwise.
            center: The center of rotation (Point). If None, the element rotates
                about its own center.

        Returns:
            True, indicating the rotation was successful.
        """
        rotation_center = center if center is not None else self.get_default_center()

        diff_x = self.x - rotation_center.x
        diff_y = self.y - rotation_center.y
        self.x = rotation_center.x + diff_x * math.cos(angle) - diff_y * math.sin(angle)
        self.y = rotation_center.y + diff_x * math.sin(angle) + diff_y * math.cos(angle)
        self.rotation = self.rotation + angle

        return True

    def get_default_center(self) -> Point:
        """
        Get the default center of rotation.

        Returns:
            Point object at the element center.
        """
        return self.position()
