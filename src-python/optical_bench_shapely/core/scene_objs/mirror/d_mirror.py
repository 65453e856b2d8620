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
from typing import Tuple

if __name__ == "__main__":
    from optical_bench_shapely.core.scene_objs.mirror.mirror import Mirror
    from optical_bench_shapely.core.constants import DMIRROR_REFLECTIVE_FRACTION
else:
    from .mirror import Mirror
    from ...constants import DMIRROR_REFLECTIVE_FRACTION


class DMirror(Mirror):
    """
    D-shaped pick-off mirror.

    Only a strip of the face next to one edge is reflective, so a beam passing
    beside the mirror is not clipped. The strip starts at the +x edge, or at
    the -x edge when `is_flipped` is set.

    Attributes:
        is_flipped (bool): Put the reflective strip on the -x edge
    """

    type = 'mirror-d'

    serializable_defaults = {
        'x': 0.0,
        'y': 0.0,
        'rotation': math.radians(-90),
        'width': 40.0,
        'height': 5.0,
        'is_flipped': False,
    }

    def front_extent(self) -> Tuple[float, float]:
        edge = self.width / 2
        inner = edge - self.width * DMIRROR_REFLECTIVE_FRACTION
        if self.is_flipped:
            return (-inner, -edge)
        return (edge, inner)
