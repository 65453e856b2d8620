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
    from optical_bench_shapely.core.geometry import geometry
    from optical_bench_shapely.core import mueller
else:
    from ..base_scene_obj import BaseSceneObj
    from ..pose_obj_mixin import PoseObjMixin
    from ...segment import Segment, SegmentType
    from ...geometry import geometry
    from ... import mueller

if TYPE_CHECKING:
    from ...scene import Scene
    from ...ray import Ray
    from ...geometry import Hit
    from ...simulator import TraceContext


class Mirror(PoseObjMixin, BaseSceneObj):
    """
    Flat mirror on a mount.

    The reflective face runs along the local x axis through the center, from
    (+w/2, 0) to (-w/2, 0), so its segment normal points to local -y. The
    mount edge at local y = +h/2 is opaque. Only rays arriving from the front
    side are reflected; anything hitting the face from behind is absorbed.

    Reflection applies the ideal-mirror Mueller matrix, which flips the
    handedness of the polarization (U and V change sign).

    Attributes:
        x, y (float): Center position (mm)
        rotation (float): Orientation (radians)
        width (float): Length of the mirror face (mm)
        height (float): Mount thickness (mm)
    """

    type = 'mirror'
    is_alignment_target = True

    serializable_defaults = {
        'x': 0.0,
        'y': 0.0,
        'rotation': math.radians(-45),
        'width': 40.0,
        'height': 5.0,
    }

    def __init__(self, scene: 'Scene', json_obj: Optional[Dict[str, Any]] = None) -> None:
        super().__init__(scene, json_obj)

    def front_extent(self) -> Tuple[float, float]:
        """Local x of the start and end of the reflective face."""
        return (self.width / 2, -self.width / 2)

    def get_segments(self) -> List[Segment]:
        start, end = self.front_extent()
        corners = self.corners()
        return [
            self.local_segment((start, 0), (end, 0), SegmentType.MIRROR_FRONT),
            Segment(corners[2], corners[3], SegmentType.BLOCKER),
        ]

    def on_ray_incident(
        self,
        ray: 'Ray',
        hit: 'Hit',
        segment: Segment,
        context: 'TraceContext'
    ) -> List['Ray']:
        if segment.type != SegmentType.MIRROR_FRONT:
            return []

        normal = hit.normal
        if geometry.dot(ray.direction, normal) >= 0:
            # Back side of the reflective face
            return []

        stokes = mueller.interact(ray.stokes, mueller.MIRROR)
        reflected = geometry.reflect_vec(ray.direction, normal)
        if context.verbose >= 2:
            print(f"    {self.get_display_name()}: reflect to ({reflected.x:.4f}, {reflected.y:.4f})")
        return [ray.spawn(hit.point, reflected, stokes)]
