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
    from optical_bench_shapely.core.geometry import geometry
    from optical_bench_shapely.core.constants import NUDGE_DISTANCE, SPLITTER_RATIO
    from optical_bench_shapely.core import mueller
else:
    from ..base_scene_obj import BaseSceneObj
    from ..pose_obj_mixin import PoseObjMixin
    from ...segment import Segment, SegmentType
    from ...geometry import geometry
    from ...constants import NUDGE_DISTANCE, SPLITTER_RATIO
    from ... import mueller

if TYPE_CHECKING:
    from ...scene import Scene
    from ...ray import Ray
    from ...geometry import Hit
    from ...simulator import TraceContext


class BeamSplitter(PoseObjMixin, BaseSceneObj):
    """
    Non-polarizing 50:50 cube beam splitter.

    The splitting surface is the cube diagonal from local (-w/2, -h/2) to
    (w/2, h/2). A hit always produces the reflected beam first and then the
    transmitted beam, each carrying half of every Stokes component.
    """

    type = 'splitter'
    is_alignment_target = True
    segment_type = SegmentType.SPLITTER

    serializable_defaults = {
        'x': 0.0,
        'y': 0.0,
        'rotation': 0.0,
        'width': 30.0,
        'height': 30.0,
    }

    def __init__(self, scene: 'Scene', json_obj: Optional[Dict[str, Any]] = None) -> None:
        super().__init__(scene, json_obj)

    def get_segments(self) -> List[Segment]:
        hw = self.width / 2
        hh = self.height / 2
        return [self.local_segment((-hw, -hh), (hw, hh), self.__class__.segment_type)]

    def on_ray_incident(
        self,
        ray: 'Ray',
        hit: 'Hit',
        segment: Segment,
        context: 'TraceContext'
    ) -> List['Ray']:
        split = mueller.scale(ray.stokes, SPLITTER_RATIO)
        reflected = ray.spawn(hit.point, geometry.reflect_vec(ray.direction, hit.normal), split)
        transmitted = ray.spawn(
            geometry.offset(hit.point, ray.direction, NUDGE_DISTANCE), ray.direction, split.copy()
        )
        return [reflected, transmitted]


class PolarizingBeamSplitter(BeamSplitter):
    """
    Polarizing beam splitter cube.

    The transmitted beam passes an ideal linear polarizer aligned with the
    cube rotation; the reflected beam passes one rotated by a further 90
    degrees. The transmitted beam is emitted first. Both children are always
    produced, and a fully extinguished branch is dropped by the intensity floor.
    """

    type = 'pbs'
    segment_type = SegmentType.PBS

    def on_ray_incident(
        self,
        ray: 'Ray',
        hit: 'Hit',
        segment: Segment,
        context: 'TraceContext'
    ) -> List['Ray']:
        stokes_trans = mueller.interact(
            ray.stokes, mueller.rotate_component(mueller.POLARIZER_H, self.rotation)
        )
        stokes_refl = mueller.interact(
            ray.stokes, mueller.rotate_component(mueller.POLARIZER_H, self.rotation + math.pi / 2)
        )
        if context.verbose >= 2:
            print(f"    {self.get_display_name()}: T={stokes_trans[0]:.4f} R={stokes_refl[0]:.4f}")

        transmitted = ray.spawn(
            geometry.offset(hit.point, ray.direction, NUDGE_DISTANCE), ray.direction, stokes_trans
        )
        reflected = ray.spawn(
            hit.point, geometry.reflect_vec(ray.direction, hit.normal), stokes_refl
        )
        return [transmitted, reflected]
