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

from .geometry import geometry, Point, Line, Hit, Geometry
from . import constants
from . import mueller
from .ray import Ray, RaySegment, AlignmentHit
from .segment import Segment, SegmentType
from .scene import Scene
from .simulator import Simulator, TraceContext, cast_rays
from .svg_renderer import SVGRenderer

__all__ = [
    'geometry', 'Point', 'Line', 'Hit', 'Geometry',
    'constants',
    'mueller',
    'Ray', 'RaySegment', 'AlignmentHit',
    'Segment', 'SegmentType',
    'Scene',
    'Simulator', 'TraceContext', 'cast_rays',
    'SVGRenderer'
]
