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

from typing import List, Optional, Dict, Any, Tuple, TYPE_CHECKING

import numpy as np

# Handle both relative imports (when used as a module) and absolute imports (when run as script)
if __name__ == "__main__":
    from optical_bench_shapely.core.ray import Ray, RaySegment, AlignmentHit
    from optical_bench_shapely.core.geometry import geometry, Hit
    from optical_bench_shapely.core.segment import Segment
else:
    from .ray import Ray, RaySegment, AlignmentHit
    from .geometry import geometry, Hit
    from .segment import Segment

if TYPE_CHECKING:
    from .scene import Scene
    from .scene_objs.base_scene_obj import BaseSceneObj


class TraceContext:
    """
    What an element's ray handler may see of the pass in progress.

    Attributes:
        scene (Scene): The scene, for its tracing settings
        verbose (int): Verbosity level of the simulator
    """

    def __init__(self, simulator: 'Simulator', pairing: Dict[str, 'BaseSceneObj']) -> None:
        self._simulator = simulator
        self._pairing = pairing
        self.scene: 'Scene' = simulator.scene
        self.verbose: int = simulator.verbose

    def get_partner(self, obj: 'BaseSceneObj') -> Optional['BaseSceneObj']:
        """Fiber partner of `obj` as it was when the pass started, or None."""
        return self._pairing.get(obj.uuid)

    def record_detection(self, obj: 'BaseSceneObj', ray: Ray) -> None:
        """Report a ray absorbed by a detector."""
        self._simulator._record_detection(obj, ray)


class Simulator:
    """
    Polarization-aware ray tracer for the optical bench.

    For every laser the simulator follows the beam from element to element.
    At each step it finds the nearest segment hit, records the traversed
    piece as a RaySegment, and lets the element that was hit produce the
    child beams. Branches end when they leave the bench, are absorbed, fall
    below the intensity floor, or exceed the bounce depth.

    The tracing is depth-first: all descendants of a child beam are traced
    before its next sibling. It runs on an explicit work stack, so deep
    bounce chains do not touch Python's recursion limit.

    Element segments and fiber pairings are snapshotted when a pass starts,
    so all rays in one pass see the same geometry.

    Attributes:
        scene (Scene): The scene to trace
        verbose (int): Verbosity level
            0 = silent (no debug output)
            1 = verbose (show ray processing info)
            2 = very verbose/debug (show per-interaction details)
        ray_segments (list): RaySegments of the last pass, in trace order
        alignment_hit (AlignmentHit or None): First hit of the last pass on
            the tracked element
        detector_readings (dict): Per detector uuid, the summed 'intensity',
            'stokes' and number of 'hits' absorbed in the last pass
        processed_ray_count (int): Work-stack entries processed in the last pass
        depth_truncations (int): Branches stopped by the bounce depth
        intensity_truncations (int): Branches stopped by the intensity floor
    """

    def __init__(self, scene: 'Scene', verbose: int = 0) -> None:
        """
        Initialize the simulator.

        Args:
            scene (Scene): The scene to simulate
            verbose (int): Verbosity level (default: 0)
        """
        self.scene: 'Scene' = scene
        self.verbose: int = verbose
        self.ray_segments: List[RaySegment] = []
        self.alignment_hit: Optional[AlignmentHit] = None
        self.detector_readings: Dict[str, Dict[str, Any]] = {}
        self.processed_ray_count: int = 0
        self.depth_truncations: int = 0
        self.intensity_truncations: int = 0
        self._tracked_obj: Optional['BaseSceneObj'] = None
        self._segment_snapshot: Optional[List[Tuple['BaseSceneObj', List[Segment]]]] = None
        self._context: Optional[TraceContext] = None

    def run(self, tracked_obj: Optional['BaseSceneObj'] = None) -> List[RaySegment]:
        """
        Trace all lasers in the scene.

        Args:
            tracked_obj: Element whose first hit in this pass is reported in
                `alignment_hit` (only mirrors, splitters, AOMs, glass and
                lenses are reported)

        Returns:
            list: RaySegments of all beams, laser by laser in scene order
        """
        self._begin_pass(tracked_obj)

        lasers = self.scene.lasers()
        if self.verbose >= 1:
            print(f"\n### SIMULATOR pass over {len(lasers)} laser(s), "
                  f"{len(self._segment_snapshot)} element(s) with segments")

        for laser in lasers:
            if self.verbose >= 1:
                print(f"\n### SIMULATOR tracing {laser.get_display_name()}")
            self.trace(laser.emit(), 0)

        if self.depth_truncations:
            self.scene.warning = (
                f"Tracing stopped: maximum bounce depth ({self.scene.max_bounces}) "
                f"reached on {self.depth_truncations} branch(es)"
            )
            if self.verbose >= 1:
                print(f"  WARNING: {self.scene.warning}")

        self._end_pass()
        return self.ray_segments

    def trace(self, ray: Ray, depth: int = 0) -> None:
        """
        Trace one beam and all its descendants, appending to `ray_segments`.

        Inside `run()` this extends the current pass. Called on its own, it
        starts a fresh pass: results of the previous pass are cleared and
        the scene geometry is snapshotted again.

        Args:
            ray: The beam to trace
            depth: Interaction depth of the beam (0 for a laser output)
        """
        standalone = self._segment_snapshot is None
        if standalone:
            self._begin_pass(None)

        max_bounces = self.scene.max_bounces
        min_intensity = self.scene.min_intensity

        stack: List[Tuple[Ray, int]] = [(ray, depth)]
        while stack:
            ray, depth = stack.pop()
            self.processed_ray_count += 1

            if depth > max_bounces:
                self.depth_truncations += 1
                continue
            if ray.intensity < min_intensity:
                self.intensity_truncations += 1
                continue

            if self.verbose >= 1:
                print(f"  ray {self.processed_ray_count} depth={depth}: "
                      f"origin=({ray.origin.x:.4f}, {ray.origin.y:.4f}) "
                      f"dir=({ray.direction.x:.4f}, {ray.direction.y:.4f}) I={ray.intensity:.4f}")

            nearest = self._find_nearest_hit(ray)
            if nearest is None:
                self._record_escape(ray)
                continue

            obj, segment, hit = nearest
            self.ray_segments.append(RaySegment(ray.origin, hit.point, ray.stokes, ray.color))

            normal = geometry.segment_normal(hit.seg_vector)
            if normal is None:
                continue
            hit.normal = normal

            if self.verbose >= 2:
                print(f"    hit {obj.get_display_name()} ({segment.type.value}) "
                      f"at ({hit.point.x:.4f}, {hit.point.y:.4f})")

            if (self.alignment_hit is None and self._tracked_obj is not None
                    and obj is self._tracked_obj and obj.is_alignment_target):
                self.alignment_hit = AlignmentHit(
                    obj, geometry.point(ray.direction.x, ray.direction.y)
                )

            children = obj.on_ray_incident(ray, hit, segment, self._context)
            for child in reversed(children):
                stack.append((child, depth + 1))

        if standalone:
            self._end_pass()

    def _begin_pass(self, tracked_obj: Optional['BaseSceneObj']) -> None:
        self.ray_segments = []
        self.alignment_hit = None
        self.detector_readings = {}
        self.processed_ray_count = 0
        self.depth_truncations = 0
        self.intensity_truncations = 0
        self.scene.warning = None
        self._tracked_obj = tracked_obj

        self._segment_snapshot = []
        for obj in self.scene.optical_objs:
            segments = obj.get_segments()
            if segments:
                self._segment_snapshot.append((obj, segments))
        # Only links between elements traced in this pass; a missing partner absorbs
        traced = {obj.uuid for obj in self.scene.optical_objs}
        pairing = {
            uuid: partner for uuid, partner in self.scene.pairing_snapshot().items()
            if uuid in traced and partner.uuid in traced
        }
        self._context = TraceContext(self, pairing)

    def _end_pass(self) -> None:
        self._segment_snapshot = None
        self._context = None

    def _find_nearest_hit(self, ray: Ray) -> Optional[Tuple['BaseSceneObj', Segment, Hit]]:
        """
        Nearest segment hit along the ray over all elements.

        Ties keep the first hit found, i.e. the earlier element in scene
        order and then the earlier segment.

        Returns:
            (element, segment, hit) or None
        """
        nearest = None
        nearest_t = float('inf')
        for obj, segments in self._segment_snapshot:
            for segment in segments:
                hit = geometry.ray_segment_intersection(
                    ray.origin, ray.direction, segment.p1, segment.p2
                )
                if hit is not None and hit.t < nearest_t:
                    nearest_t = hit.t
                    nearest = (obj, segment, hit)
        return nearest

    def _record_escape(self, ray: Ray) -> None:
        unit = geometry.normalize_vec(ray.direction)
        end = geometry.offset(ray.origin, unit, self.scene.escape_distance)
        self.ray_segments.append(RaySegment(ray.origin, end, ray.stokes, ray.color))
        if self.verbose >= 2:
            print(f"    escaped to ({end.x:.4f}, {end.y:.4f})")

    def _record_detection(self, obj: 'BaseSceneObj', ray: Ray) -> None:
        reading = self.detector_readings.get(obj.uuid)
        if reading is None:
            reading = {'intensity': 0.0, 'stokes': np.zeros(4), 'hits': 0}
            self.detector_readings[obj.uuid] = reading
        reading['intensity'] += ray.intensity
        reading['stokes'] = reading['stokes'] + ray.stokes
        reading['hits'] += 1
        if self.verbose >= 2:
            print(f"    detector {obj.get_display_name()} absorbed I={ray.intensity:.4f}")


def cast_rays(
    scene: 'Scene',
    tracked_obj: Optional['BaseSceneObj'] = None,
    verbose: int = 0
) -> Tuple[List[RaySegment], Optional[AlignmentHit]]:
    """
    Run one trace pass over the scene.

    Args:
        scene: The scene to trace
        tracked_obj: Element whose first hit is reported, or None
        verbose: Verbosity level

    Returns:
        (segments, alignment_hit)
    """
    simulator = Simulator(scene, verbose=verbose)
    segments = simulator.run(tracked_obj)
    return segments, simulator.alignment_hit


# Example usage and testing
if __name__ == "__main__":
    import math
    from optical_bench_shapely.core.scene import Scene

    scene = Scene()
    scene.add_element({'type': 'laser', 'x': 0, 'y': 0})
    scene.add_element({'type': 'hwp', 'x': 100, 'y': 0, 'axis_angle': math.pi / 8})
    scene.add_element({'type': 'pbs', 'x': 200, 'y': 0})
    scene.add_element({'type': 'detector', 'x': 300, 'y': 0})

    sim = Simulator(scene, verbose=1)
    for seg in sim.run():
        print(seg)
    print(sim.detector_readings)
