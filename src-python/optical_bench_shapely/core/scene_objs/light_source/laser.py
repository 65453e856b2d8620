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
from typing import Dict, Any, Optional, Tuple, TYPE_CHECKING

if __name__ == "__main__":
    from optical_bench_shapely.core.scene_objs.base_scene_obj import BaseSceneObj
    from optical_bench_shapely.core.scene_objs.pose_obj_mixin import PoseObjMixin
    from optical_bench_shapely.core.ray import Ray
    from optical_bench_shapely.core.constants import DEFAULT_RAY_COLOR
    from optical_bench_shapely.core import mueller
else:
    from ..base_scene_obj import BaseSceneObj
    from ..pose_obj_mixin import PoseObjMixin
    from ...ray import Ray
    from ...constants import DEFAULT_RAY_COLOR
    from ... import mueller

if TYPE_CHECKING:
    from ...scene import Scene


def _is_rgb(value: Any) -> bool:
    """Whether value is a list or tuple of three finite numbers."""
    if not isinstance(value, (list, tuple)) or len(value) != 3:
        return False
    return all(
        isinstance(c, (int, float)) and not isinstance(c, bool) and math.isfinite(c)
        for c in value
    )


class Laser(PoseObjMixin, BaseSceneObj):
    """
    Laser head emitting a single, fully polarized beam.

    The beam leaves the output face at local (+w/2, 0) along the facing
    direction, with unit intensity and linear polarization at `pol_angle`.
    The laser body has no interaction segments, so beams pass through it.

    Attributes:
        x, y (float): Center position (mm)
        rotation (float): Orientation (radians)
        width, height (float): Body size (mm)
        pol_angle (float): Linear polarization angle of the beam (degrees)
        color (list): RGB color tag of the beam
    """

    type = 'laser'

    serializable_defaults = {
        'x': 0.0,
        'y': 0.0,
        'rotation': 0.0,
        'width': 50.0,
        'height': 25.0,
        'pol_angle': 0.0,
        'color': list(DEFAULT_RAY_COLOR),
    }

    def __init__(self, scene: 'Scene', json_obj: Optional[Dict[str, Any]] = None) -> None:
        super().__init__(scene, json_obj)
        if not isinstance(self.pol_angle, (int, float)) or not math.isfinite(self.pol_angle):
            self.pol_angle = 0.0
        if not _is_rgb(self.color):
            self.color = list(DEFAULT_RAY_COLOR)

    def color_tag(self) -> Tuple[int, int, int]:
        r, g, b = self.color
        return (int(r), int(g), int(b))

    def source_stokes(self):
        """Unit-intensity linear Stokes vector at `pol_angle`."""
        return mueller.linear_stokes(math.radians(self.pol_angle))

    def emit(self) -> Ray:
        """
        The beam for a trace pass.

        Returns:
            Ray starting on the output face, pointing along the facing direction
        """
        return Ray(
            self.local_to_world(self.width / 2, 0),
            self.facing_vector(),
            self.source_stokes(),
            self.color_tag()
        )
