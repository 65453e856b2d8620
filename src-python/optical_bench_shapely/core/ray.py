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
from typing import Tuple, Any

import numpy as np
from shapely.geometry import LineString

if __name__ == "__main__":
    from optical_bench_shapely.core.geometry import Point
    from optical_bench_shapely.core.constants import DEFAULT_RAY_COLOR
else:
    from .geometry import Point
    from .constants import DEFAULT_RAY_COLOR


class Ray:
    """
    A beam being traced: a half-line from `origin` along `direction`.

    Rays are ephemeral. They exist only while the simulator works through
    a pass and are never stored in the scene.

    Attributes:
        origin (Point): Starting point
        direction (Point): Propagation direction (not necessarily unit length)
        stokes (np.ndarray): Polarization state [I, Q, U, V]
        color (tuple): RGB color tag inherited by child rays
    """

    def __init__(
        self,
        origin: Point,
        direction: Point,
        stokes: Any,
        color: Tuple[int, int, int] = DEFAULT_RAY_COLOR
    ) -> None:
        self.origin: Point = origin
        self.direction: Point = direction
        self.stokes: np.ndarray = np.asarray(stokes, dtype=float)
        self.color: Tuple[int, int, int] = color

    @property
    def intensity(self) -> float:
        """Total intensity, the first Stokes component."""
        return float(self.stokes[0])

    def spawn(self, origin: Point, direction: Point, stokes: Any) -> 'Ray':
        """Create a child ray that keeps this ray's color tag."""
        return Ray(origin, direction, stokes, self.color)

    def __repr__(self) -> str:
        return (
            f"Ray(origin=({self.origin.x:.3f}, {self.origin.y:.3f}), "
            f"direction=({self.direction.x:.3f}, {self.direction.y:.3f}), "
            f"I={self.intensity:.4f})"
        )


class RaySegment:
    """
    One drawn piece of a beam path, produced by the simulator.

    The polarization state is the one carried along the segment, i.e.
    before the interaction at p2.

    Attributes:
        p1 (Point): Start point
        p2 (Point): End point (hit point, or escape point)
        stokes (np.ndarray): Stokes vector along the segment
        color (tuple): RGB color tag
    """

    def __init__(
        self,
        p1: Point,
        p2: Point,
        stokes: Any,
        color: Tuple[int, int, int] = DEFAULT_RAY_COLOR
    ) -> None:
        self.p1: Point = p1
        self.p2: Point = p2
        self.stokes: np.ndarray = np.array(stokes, dtype=float)
        self.color: Tuple[int, int, int] = color

    @property
    def intensity(self) -> float:
        return float(self.stokes[0])

    @property
    def length(self) -> float:
        return math.hypot(self.p2.x - self.p1.x, self.p2.y - self.p1.y)

    @property
    def css_color(self) -> str:
        """
        The color tag as an rgba() string with the intensity as alpha.

        Returns:
            e.g. 'rgba(255, 50, 50, 0.5)'
        """
        alpha = min(1.0, max(0.0, self.intensity))
        r, g, b = self.color
        return f"rgba({r}, {g}, {b}, {alpha:g})"

    def to_shapely(self) -> LineString:
        """Convert to Shapely LineString."""
        return LineString([(self.p1.x, self.p1.y), (self.p2.x, self.p2.y)])

    def __repr__(self) -> str:
        return (
            f"RaySegment(({self.p1.x:.3f}, {self.p1.y:.3f}) -> "
            f"({self.p2.x:.3f}, {self.p2.y:.3f}), I={self.intensity:.4f})"
        )


class AlignmentHit:
    """
    First hit of a trace pass on the element being aligned.

    Attributes:
        obj: The element that was hit
        incoming (Point): Direction of the ray that hit it
    """

    def __init__(self, obj: Any, incoming: Point) -> None:
        self.obj = obj
        self.incoming: Point = incoming

    def __repr__(self) -> str:
        name = self.obj.get_display_name() if hasattr(self.obj, 'get_display_name') else self.obj
        return f"AlignmentHit({name}, incoming=({self.incoming.x:.3f}, {self.incoming.y:.3f}))"


# Example usage and testing
if __name__ == "__main__":
    ray = Ray(Point(0, 0), Point(1, 0), [1.0, 1.0, 0.0, 0.0])
    print(ray)
    seg = RaySegment(ray.origin, Point(100, 0), ray.stokes * 0.5)
    print(seg, seg.css_color, seg.length)
