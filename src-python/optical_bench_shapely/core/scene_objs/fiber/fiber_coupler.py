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
    from optical_bench_shapely.core.constants import NUDGE_DISTANCE, FIBER_TRANSMISSION
    from optical_bench_shapely.core import mueller
else:
    from ..base_scene_obj import BaseSceneObj
    from ..pose_obj_mixin import PoseObjMixin
    from ...segment import Segment, SegmentType
    from ...constants import NUDGE_DISTANCE, FIBER_TRANSMISSION
    from ... import mueller

if TYPE_CHECKING:
    from ...scene import Scene
    from ...ray import Ray
    from ...geometry import Hit
    from ...simulator import TraceContext


class FiberOutputMixin:
    """
    Mixin for elements that can be the far end of a fiber link.

    The beam re-emerges just outside the element's output face, at local
    (w/2 + nudge, 0), travelling along the facing direction.
    """

    def fiber_gain(self) -> float:
        """Intensity factor applied to a beam delivered through the fiber."""
        return FIBER_TRANSMISSION

    def fiber_output(self, ray: 'Ray') -> 'Ray':
        """
        The beam leaving this element for a beam that entered the paired coupler.

        Args:
            ray: The beam that hit the input coupler

        Returns:
            New Ray from the output face
        """
        return ray.spawn(
            self.local_to_world(self.width / 2 + NUDGE_DISTANCE, 0),
            self.facing_vector(),
            mueller.scale(ray.stokes, self.fiber_gain())
        )


class FiberCoupler(FiberOutputMixin, PoseObjMixin, BaseSceneObj):
    """
    Fiber collimator / coupler.

    The input face is a segment along local y. A beam hitting it is carried
    through the fiber to the paired element (another coupler, or an
    amplifier) and re-emitted from the partner's output face with 90%
    transmission (times the gain for an amplifier). An unpaired coupler
    absorbs the beam.

    The pairing itself is owned by the Scene; see `Scene.pair_fiber`.
    """

    type = 'fiber-coupler'

    serializable_defaults = {
        'x': 0.0,
        'y': 0.0,
        'rotation': 0.0,
        'width': 25.0,
        'height': 25.0,
    }

    def __init__(self, scene: 'Scene', json_obj: Optional[Dict[str, Any]] = None) -> None:
        super().__init__(scene, json_obj)

    def get_segments(self) -> List[Segment]:
        hh = self.height / 2
        return [self.local_segment((0, -hh), (0, hh), SegmentType.FIBER_INPUT, normal=(1, 0))]

    def on_ray_incident(
        self,
        ray: 'Ray',
        hit: 'Hit',
        segment: Segment,
        context: 'TraceContext'
    ) -> List['Ray']:
        partner = context.get_partner(self)
        if partner is None:
            return []
        if context.verbose >= 2:
            print(f"    {self.get_display_name()}: fiber to {partner.get_display_name()}")
        return [partner.fiber_output(ray)]
