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

from .base_scene_obj import BaseSceneObj
from .pose_obj_mixin import PoseObjMixin
from .light_source import Laser
from .mirror import Mirror, DMirror
from .splitter import BeamSplitter, PolarizingBeamSplitter
from .waveplate import (
    BaseWaveplate, HalfWavePlate, QuarterWavePlate,
    clamp_waveplate_angle, snap_waveplate_angle, format_axis_angle_deg,
)
from .modulator import AcoustoOpticModulator
from .glass import ThinLens, GlassBlock, snap_focal_length
from .blocker import Blocker
from .other import Detector, Board
from .fiber import FiberCoupler, FiberOutputMixin, Amplifier
from .registry import ELEMENT_TYPES, create_element

__all__ = [
    'BaseSceneObj', 'PoseObjMixin',
    'Laser', 'Mirror', 'DMirror', 'BeamSplitter', 'PolarizingBeamSplitter',
    'BaseWaveplate', 'HalfWavePlate', 'QuarterWavePlate',
    'clamp_waveplate_angle', 'snap_waveplate_angle', 'format_axis_angle_deg',
    'AcoustoOpticModulator', 'ThinLens', 'GlassBlock', 'snap_focal_length',
    'Blocker', 'Detector', 'Board', 'FiberCoupler', 'FiberOutputMixin', 'Amplifier',
    'ELEMENT_TYPES', 'create_element',
]
