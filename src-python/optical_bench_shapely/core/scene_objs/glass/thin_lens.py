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
from typing import Dict, Any, List, Optional, Tuple, TYPE_CHECKING

if __name__ == "__main__":
    from optical_bench_shapely.core.scene_objs.base_scene_obj import BaseSceneObj
    from optical_bench_shapely.core.scene_objs.pose_obj_mixin import PoseObjMixin
    from optical_bench_shapely.core.segment import Segment, SegmentType
    from optical_bench_shapely.core.geometry import geometry, Point
    from optical_bench_shapely.core import constants
    from optical_bench_shapely.core import mueller
else:
    from ..base_scene_obj import BaseSceneObj
    from ..pose_obj_mixin import PoseObjMixin
    from ...segment import Segment, SegmentType
    from ...geometry import geometry, Point
    from ... import constants
    from ... import mueller

if TYPE_CHECKING:
    from ...scene import Scene
    from ...ray import Ray
    from ...geometry import Hit
    from ...simulator import TraceContext


def snap_focal_length(value: float, step: float = constants.GRID_PITCH_MM) -> float:
    """
    Round a focal length to a multiple of `step`, never below one step.

    Args:
        value: Focal length (mm)
        step: Snap increment (mm), non-positive falls back to the grid pitch

    Returns:
        Snapped focal length
    """
    if step <= 0:
        step = constants.GRID_PITCH_MM
    return max(step, round(value / step) * step)


class ThinLens(PoseObjMixin, BaseSceneObj):
    """
    Ideal thin lens.

    The lens plane is a segment along local y; the optical axis is local +x.
    Refraction uses the paraxial thin-lens deflection: a beam crossing the
    lens at height y from the center is turned by -y / f, in whichever
    direction along the axis it travels.

    Attributes:
        focal_length (float): Focal length f (mm)
    """

    type = 'lens'
    is_alignment_target = True

    serializable_defaults = {
        'x': 0.0,
        'y': 0.0,
        'rotation': 0.0,
        'width': 15.0,
        'height': 40.0,
        'focal_length': constants.DEFAULT_FOCAL_LENGTH,
    }

    def __init__(self, scene: 'Scene', json_obj: Optional[Dict[str, Any]] = None) -> None:
        super().__init__(scene, json_obj)
        if (not isinstance(self.focal_length, (int, float))
                or isinstance(self.focal_length, bool)
                or not math.isfinite(self.focal_length)):
            self.focal_length = constants.DEFAULT_FOCAL_LENGTH

    def axis_vector(self) -> Point:
        """Unit optical axis, local +x."""
        return geometry.normalize_vec(self.local_vector(1, 0))

    def focal_points(self) -> Tuple[Point, Point]:
        """The two focal points, on the +axis side first."""
        axis = self.axis_vector()
        return (
            geometry.offset(self.position(), axis, self.focal_length),
            geometry.offset(self.position(), axis, -self.focal_length),
        )

    def refract_direction(self, direction: Point, hit_point: Point) -> Point:
        """
        Outgoing unit direction for a beam crossing the lens at `hit_point`.

        Args:
            direction: Incoming direction
            hit_point: Where the beam crosses the lens plane

        Returns:
            Normalized outgoing direction. Beams nearly parallel to the lens
            plane, beams through the center and numerically degenerate cases
            continue straight.
        """
        axis = self.axis_vector()
        tangent = geometry.point(-axis.y, axis.x)
        inc_dir = geometry.normalize_vec(direction)
        if not self.focal_length or not math.isfinite(self.focal_length):
            return inc_dir

        axial = geometry.dot(inc_dir, axis)
        if abs(axial) < constants.LENS_MIN_AXIAL_COMPONENT:
            return inc_dir

        rel = geometry.point(hit_point.x - self.x, hit_point.y - self.y)
        y_offset = geometry.dot(rel, tangent)
        if abs(y_offset) < constants.LENS_MIN_OFFSET:
            return inc_dir

        tangential = geometry.dot(inc_dir, tangent)
        theta_in = math.atan2(tangential, abs(axial))
        theta_out = theta_in - y_offset / self.focal_length

        sign_ax = 1 if axial > 0 else -1
        new_axial = math.cos(theta_out) * sign_ax
        new_tangent = math.sin(theta_out)
        out = geometry.normalize_vec(geometry.point(
            axis.x * new_axial + tangent.x * new_tangent,
            axis.y * new_axial + tangent.y * new_tangent
        ))

        if not (math.isfinite(out.x) and math.isfinite(out.y)):
            return inc_dir
        return out

    def get_segments(self) -> List[Segment]:
        hh = self.height / 2
        return [self.local_segment((0, -hh), (0, hh), SegmentType.LENS, normal=(1, 0))]

    def on_ray_incident(
        self,
        ray: 'Ray',
        hit: 'Hit',
        segment: Segment,
        context: 'TraceContext'
    ) -> List['Ray']:
        out_dir = self.refract_direction(ray.direction, hit.point)
        if context.verbose >= 2:
            print(f"    {self.get_display_name()}: f={self.focal_length} "
                  f"out=({out_dir.x:.4f}, {out_dir.y:.4f})")
        return [ray.spawn(
            geometry.offset(hit.point, out_dir, constants.NUDGE_DISTANCE),
            out_dir,
            mueller.scale(ray.stokes, constants.LENS_TRANSMISSION)
        )]
