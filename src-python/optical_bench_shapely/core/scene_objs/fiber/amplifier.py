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
from typing import Dict, Any, Optional, TYPE_CHECKING

if __name__ == "__main__":
    from optical_bench_shapely.core.scene_objs.base_scene_obj import BaseSceneObj
    from optical_bench_shapely.core.scene_objs.pose_obj_mixin import PoseObjMixin
    from optical_bench_shapely.core.scene_objs.fiber.fiber_coupler import FiberOutputMixin
    from optical_bench_shapely.core.constants import DEFAULT_AMPLIFIER_GAIN, FIBER_TRANSMISSION
else:
    from ..base_scene_obj import BaseSceneObj
    from ..pose_obj_mixin import PoseObjMixin
    from .fiber_coupler import FiberOutputMixin
    from ...constants import DEFAULT_AMPLIFIER_GAIN, FIBER_TRANSMISSION

if TYPE_CHECKING:
    from ...scene import Scene


class Amplifier(FiberOutputMixin, PoseObjMixin, BaseSceneObj):
    """
    Fiber-seeded optical amplifier.

    Light only enters through a paired fiber coupler; the amplified beam
    leaves the output face. The body has no interaction segments.

    Attributes:
        gain (float): Intensity gain, applied together with the fiber loss
    """

    type = 'amplifier'

    serializable_defaults = {
        'x': 0.0,
        'y': 0.0,
        'rotation': 0.0,
        'width': 50.0,
        'height': 30.0,
        'gain': DEFAULT_AMPLIFIER_GAIN,
    }

    def __init__(self, scene: 'Scene', json_obj: Optional[Dict[str, Any]] = None) -> None:
        super().__init__(scene, json_obj)
        if (not isinstance(self.gain, (int, float))
                or isinstance(self.gain, bool)
                or not math.isfinite(self.gain)):
            self.gain = DEFAULT_AMPLIFIER_GAIN

    def fiber_gain(self) -> float:
        return self.gain * FIBER_TRANSMISSION
