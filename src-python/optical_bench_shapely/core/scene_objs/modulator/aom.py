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
from typing import Dict, Any, List, Optional, TYPE_CHECKING

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


class AcoustoOpticModulator(PoseObjMixin, BaseSceneObj):
    """
    Acousto-optic modulator with a fixed first-order deflection.

    The crystal is a segment along local x; beams are meant to travel along
    the device axis, local +y or -y. Behavior on a hit:

    - beam nearly perpendicular to the axis (|cos| < 0.15): blocked
    - RF off: passes straight, 95% transmission
    - RF on, beam entering along the axis (within 0.02 rad): zeroth order
      straight (30%) plus first order deflected by 0.035 rad (70%)
    - RF on, beam entering at an angle: leaves along the axis (70%)

    Attributes:
        aom_enabled (bool): Whether the RF drive is on
    """

    type = 'aom'
    is_alignment_target = True

    serializable_defaults = {
        'x': 0.0,
        'y': 0.0,
        'rotation': 0.0,
        'width': 40.0,
        'height': 20.0,
        'aom_enabled': True,
    }

    def __init__(self, scene: 'Scene', json_obj: Optional[Dict[str, Any]] = None) -> None:
        super().__init__(scene, json_obj)

    def axis_vector(self) -> Point:
        """Unit device axis, local +y."""
        return geometry.normalize_vec(self.local_vector(0, 1))

    def is_enabled(self) -> bool:
        return self.aom_enabled is not False

    def get_segments(self) -> List[Segment]:
        hw = self.width / 2
        return [self.local_segment((-hw, 0), (hw, 0), SegmentType.AOM, normal=(0, 1))]

    def on_ray_incident(
        self,
        ray: 'Ray',
        hit: 'Hit',
        segment: Segment,
        context: 'TraceContext'
    ) -> List['Ray']:
        inc_dir = geometry.normalize_vec(ray.direction)
        main_dir = self.axis_vector()
        alignment = geometry.dot(inc_dir, main_dir)

        if abs(alignment) < constants.AOM_BLOCK_ALIGNMENT:
            return []

        if not self.is_enabled():
            stokes = mueller.scale(ray.stokes, constants.AOM_PASS_TRANSMISSION)
            return [ray.spawn(
                geometry.offset(hit.point, inc_dir, constants.NUDGE_DISTANCE), inc_dir, stokes
            )]

        if alignment > 0:
            signed_theta = -constants.AOM_DEFLECTION_ANGLE
            straight_dir = main_dir
        else:
            signed_theta = constants.AOM_DEFLECTION_ANGLE
            straight_dir = geometry.point(-main_dir.x, -main_dir.y)
        inc_angle = math.acos(min(1.0, abs(geometry.dot(inc_dir, straight_dir))))

        if inc_angle < constants.AOM_ANGLE_TOLERANCE:
            deflected_dir = geometry.rotate_vec(straight_dir, signed_theta)
            if context.verbose >= 2:
                print(f"    {self.get_display_name()}: diffracting, first order at "
                      f"({deflected_dir.x:.4f}, {deflected_dir.y:.4f})")
            return [
                ray.spawn(
                    geometry.offset(hit.point, straight_dir, constants.NUDGE_DISTANCE),
                    straight_dir,
                    mueller.scale(ray.stokes, constants.AOM_STRAIGHT_FRACTION)
                ),
                ray.spawn(
                    geometry.offset(hit.point, deflected_dir, constants.NUDGE_DISTANCE),
                    deflected_dir,
                    mueller.scale(ray.stokes, constants.AOM_DIFFRACTED_FRACTION)
                ),
            ]

        return [ray.spawn(
            geometry.offset(hit.point, straight_dir, constants.NUDGE_DISTANCE),
            straight_dir,
            mueller.scale(ray.stokes, constants.AOM_DIFFRACTED_FRACTION)
        )]
