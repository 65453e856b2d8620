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
else:
    from ..base_scene_obj import BaseSceneObj
    from ..pose_obj_mixin import PoseObjMixin
    from ...segment import Segment, SegmentType

if TYPE_CHECKING:
    from ...scene import Scene


class Blocker(PoseObjMixin, BaseSceneObj):
    """
    Beam block: an opaque rectangle that absorbs every ray hitting it.
    """

    type = 'blocker'

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
        return self.rect_segments(SegmentType.BLOCKER)
