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

from enum import Enum
from typing import Optional

from shapely.geometry import LineString

if __name__ == "__main__":
    from optical_bench_shapely.core.geometry import Point
else:
    from .geometry import Point


class SegmentType(str, Enum):
    """Kind of interaction a segment triggers when a ray hits it."""
    MIRROR_FRONT = 'mirror-front'
    BLOCKER = 'blocker'
    SPLITTER = 'splitter'
    PBS = 'pbs'
    WAVEPLATE = 'waveplate'
    AOM = 'aom'
    LENS = 'lens'
    FIBER_INPUT = 'fiber-input'
    REFRACTOR = 'refractor'


class Segment:
    """
    A straight interaction segment of an element, in world coordinates.

    Segments are derived from the element pose at the start of every trace
    pass and discarded afterwards.

    Attributes:
        p1 (Point): First endpoint
        p2 (Point): Second endpoint
        type (SegmentType): Interaction kind
        normal (Point or None): Unit normal for elements whose behavior
            depends on the approach side (waveplates, lens, AOM, fiber input)
    """

    def __init__(
        self,
        p1: Point,
        p2: Point,
        type: SegmentType,
        normal: Optional[Point] = None
    ) -> None:
        self.p1 = p1
        self.p2 = p2
        self.type = type
        self.normal = normal

    def to_shapely(self) -> LineString:
        """Convert to Shapely LineString."""
        return LineString([(self.p1.x, self.p1.y), (self.p2.x, self.p2.y)])

    def __repr__(self) -> str:
        return (
            f"Segment({self.type.value}, ({self.p1.x:.3f}, {self.p1.y:.3f}) -> "
            f"({self.p2.x:.3f}, {self.p2.y:.3f}))"
        )
