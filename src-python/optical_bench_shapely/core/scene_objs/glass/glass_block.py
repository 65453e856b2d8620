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

from typing import Dict, Any, List, Optional, TYPE_CHECKING

if __name__ == "__main__":
    from optical_bench_shapely.core.scene_objs.base_scene_obj import BaseSceneObj
    from optical_bench_shapely.core.scene_objs.pose_obj_mixin import PoseObjMixin
    from optical_bench_shapely.core.segment import Segment, SegmentType
    from optical_bench_shapely.core.geometry import geometry
    from optical_bench_shapely.core.constants import NUDGE_DISTANCE, GLASS_TRANSMISSION
    from optical_bench_shapely.core import mueller
else:
    from ..base_scene_obj import BaseSceneObj
    from ..pose_obj_mixin import PoseObjMixin
    from ...segment import Segment, SegmentType
    from ...geometry import geometry
    from ...constants import NUDGE_DISTANCE, GLASS_TRANSMISSION
    from ... import mueller

if TYPE_CHECKING:
    from ...scene import Scene
    from ...ray import Ray
    from ...geometry import Hit
    from ...simulator import TraceContext


class GlassBlock(PoseObjMixin, BaseSceneObj):
    """
    Rectangular glass window.

    Beams are not bent; each surface crossing costs 5% of the intensity.
    """

    type = 'glass'
    is_alignment_target = True

    serializable_defaults = {
        'x': 0.0,
        'y': 0.0,
        'rotation': 0.0,
        'width': 20.0,
        'height': 50.0,
    }

    def __init__(self, scene: 'Scene', json_obj: Optional[Dict[str, Any]] = None) -> None:
        super().__init__(scene, json_obj)

    def get_segments(self) -> List[Segment]:
        return self.rect_segments(SegmentType.REFRACTOR)

    def on_ray_incident(
        self,
        ray: 'Ray',
        hit: 'Hit',
        segment: Segment,
        context: 'TraceContext'
    ) -> List['Ray']:
        return [ray.spawn(
            geometry.offset(hit.point, ray.direction, NUDGE_DISTANCE),
            ray.direction,
            mueller.scale(ray.stokes, GLASS_TRANSMISSION)
        )]
