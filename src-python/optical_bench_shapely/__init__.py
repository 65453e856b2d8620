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

Optical Bench Shapely
=====================

A polarization-aware 2D optical bench ray tracer using Shapely for element
geometry and Mueller calculus for polarization.

Main modules:
- core: Simulation engine (Scene, Simulator, Ray, bench elements)
- core.mueller: Stokes vectors and Mueller matrices
- core.svg_renderer: SVG output of a trace pass

Quick start:
    from optical_bench_shapely.core.scene import Scene
    from optical_bench_shapely.core.simulator import Simulator

    scene = Scene()
    scene.add_element({'type': 'laser', 'x': 0, 'y': 0})
    scene.add_element({'type': 'mirror', 'x': 200, 'y': 0})
    segments = Simulator(scene).run()
"""

__version__ = "0.1.0"

# Convenience imports for common usage
from .core.scene import Scene
from .core.simulator import Simulator, cast_rays
from .core.ray import Ray, RaySegment

__all__ = [
    'Scene',
    'Simulator',
    'cast_rays',
    'Ray',
    'RaySegment',
    '__version__',
]
