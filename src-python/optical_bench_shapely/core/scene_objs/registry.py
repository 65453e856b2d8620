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

from typing import Dict, Any, Type

from .base_scene_obj import BaseSceneObj
from .light_source import Laser
from .mirror import Mirror, DMirror
from .splitter import BeamSplitter, PolarizingBeamSplitter
from .waveplate import HalfWavePlate, QuarterWavePlate
from .modulator import AcoustoOpticModulator
from .glass import ThinLens, GlassBlock
from .blocker import Blocker
from .other import Detector, Board
from .fiber import FiberCoupler, Amplifier


ELEMENT_TYPES: Dict[str, Type[BaseSceneObj]] = {
    cls.type: cls for cls in (
        Laser,
        Mirror,
        DMirror,
        BeamSplitter,
        PolarizingBeamSplitter,
        AcoustoOpticModulator,
        ThinLens,
        Blocker,
        Detector,
        GlassBlock,
        HalfWavePlate,
        QuarterWavePlate,
        FiberCoupler,
        Amplifier,
        Board,
    )
}
"""Type tag -> element class, for every element kind the bench supports."""


def create_element(scene, json_obj: Dict[str, Any]) -> BaseSceneObj:
    """
    Build an element from a property dict carrying a 'type' tag.

    The element is not added to the scene.

    Args:
        scene: The scene the element belongs to
        json_obj: Properties, e.g. {'type': 'mirror', 'x': 100, 'y': 0}

    Returns:
        The new element

    Raises:
        ValueError: If the type tag is missing or unknown
    """
    type_tag = json_obj.get('type') if isinstance(json_obj, dict) else None
    if not type_tag:
        raise ValueError(f"Element description has no 'type': {json_obj!r}")
    cls = ELEMENT_TYPES.get(type_tag)
    if cls is None:
        raise ValueError(
            f"Unknown element type '{type_tag}'. "
            f"Valid options: {tuple(ELEMENT_TYPES)}"
        )
    return cls(scene, json_obj)
