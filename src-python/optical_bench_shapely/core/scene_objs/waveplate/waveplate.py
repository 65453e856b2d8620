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

"""
Half- and quarter-wave plates.

The fast axis angle `axis_angle` is kept in [0, pi) and is independent of
the plate's mechanical rotation. For the Mueller product the axis is taken
as a signed angle in (-pi/2, pi/2]; a beam crossing the plate against its
normal sees the mirror image of the axis, so the sign is flipped.
"""

import math
from typing import Dict, Any, List, Optional, TYPE_CHECKING

import numpy as np

if __name__ == "__main__":
    from optical_bench_shapely.core.scene_objs.base_scene_obj import BaseSceneObj
    from optical_bench_shapely.core.scene_objs.pose_obj_mixin import PoseObjMixin
    from optical_bench_shapely.core.segment import Segment, SegmentType
    from optical_bench_shapely.core.geometry import geometry
    from optical_bench_shapely.core.constants import NUDGE_DISTANCE
    from optical_bench_shapely.core import mueller
else:
    from ..base_scene_obj import BaseSceneObj
    from ..pose_obj_mixin import PoseObjMixin
    from ...segment import Segment, SegmentType
    from ...geometry import geometry
    from ...constants import NUDGE_DISTANCE
    from ... import mueller

if TYPE_CHECKING:
    from ...scene import Scene
    from ...ray import Ray
    from ...geometry import Hit
    from ...simulator import TraceContext


def clamp_waveplate_angle(angle: float) -> float:
    """
    Fold an axis angle into [0, pi).

    A fast axis is a line, not a direction, so angles differing by pi are the
    same axis. Values within 1e-6 of pi fold to 0.

    Args:
        angle: Angle in radians, any value

    Returns:
        Equivalent angle in [0, pi)
    """
    normalized = angle % (2 * math.pi)
    if normalized > math.pi:
        normalized -= math.pi
    if normalized >= math.pi - 1e-6:
        normalized = 0.0
    return normalized


def snap_waveplate_angle(angle: float, step: float = math.pi / 4) -> float:
    """Round an axis angle to a multiple of `step`, then clamp it."""
    if step <= 0:
        return clamp_waveplate_angle(angle)
    return clamp_waveplate_angle(round(angle / step) * step)


def format_axis_angle_deg(angle: float) -> int:
    """Axis angle as whole degrees in [0, 180]."""
    deg = round(math.degrees(clamp_waveplate_angle(angle)))
    if deg < 0:
        deg += 180
    if deg > 180:
        deg -= 180
    return int(deg)


class BaseWaveplate(PoseObjMixin, BaseSceneObj):
    """
    Base class for retarders.

    The plate is a single segment along the local y axis with its normal along
    local +x. Beams continue straight through, nudged past the plate.

    Attributes:
        axis_angle (float): Fast axis angle in radians, folded into [0, pi)

    Subclasses set `base_matrix`, the Mueller matrix with the fast axis horizontal.
    """

    base_matrix: np.ndarray = mueller.IDENTITY

    serializable_defaults = {
        'x': 0.0,
        'y': 0.0,
        'rotation': 0.0,
        'width': 5.0,
        'height': 30.0,
        'axis_angle': math.pi / 4,
    }

    def __init__(self, scene: 'Scene', json_obj: Optional[Dict[str, Any]] = None) -> None:
        super().__init__(scene, json_obj)
        if not isinstance(self.axis_angle, (int, float)) or not math.isfinite(self.axis_angle):
            self.axis_angle = clamp_waveplate_angle(self.rotation or math.pi / 4)
        else:
            self.axis_angle = clamp_waveplate_angle(self.axis_angle)

    def set_axis_angle(self, angle: float, step: Optional[float] = None) -> None:
        """
        Set the fast axis, optionally snapped to `step` radians.
        """
        if step is None:
            self.axis_angle = clamp_waveplate_angle(angle)
        else:
            self.axis_angle = snap_waveplate_angle(angle, step)

    def signed_axis_angle(self) -> float:
        """Axis angle mapped into (-pi/2, pi/2]."""
        axis = clamp_waveplate_angle(self.axis_angle)
        return axis - math.pi if axis > math.pi / 2 else axis

    def get_segments(self) -> List[Segment]:
        hh = self.height / 2
        return [self.local_segment((0, -hh), (0, hh), SegmentType.WAVEPLATE, normal=(1, 0))]

    def on_ray_incident(
        self,
        ray: 'Ray',
        hit: 'Hit',
        segment: Segment,
        context: 'TraceContext'
    ) -> List['Ray']:
        theta = self.signed_axis_angle()
        normal = segment.normal if segment.normal is not None else hit.normal
        if geometry.dot(ray.direction, normal) < 0:
            theta = -theta

        stokes = mueller.interact(
            ray.stokes, mueller.rotate_component(self.__class__.base_matrix, theta)
        )
        if context.verbose >= 2:
            print(f"    {self.get_display_name()}: axis {math.degrees(theta):.1f} deg -> "
                  f"{mueller.describe_polarization(stokes)}")
        return [ray.spawn(
            geometry.offset(hit.point, ray.direction, NUDGE_DISTANCE), ray.direction, stokes
        )]


class HalfWavePlate(BaseWaveplate):
    """Half-wave plate: rotates linear polarization by twice the axis angle."""

    type = 'hwp'
    base_matrix = mueller.HWP_H


class QuarterWavePlate(BaseWaveplate):
    """Quarter-wave plate: converts linear at 45 degrees to the axis into circular."""

    type = 'qwp'
    base_matrix = mueller.QWP_H
