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

import json
import copy
import uuid as uuid_module
from typing import Optional, Dict, Any, List, TYPE_CHECKING

if TYPE_CHECKING:
    from ..ray import Ray
    from ..geometry import Hit
    from ..segment import Segment
    from ..simulator import TraceContext


class BaseSceneObj:
    """
    Base class for the elements placed on the optical bench.

    This class provides the interface shared by every element kind:
    - Construction from a plain dict with per-class defaults
    - Serialization of non-default properties
    - Interaction geometry (`get_segments`) for the tracer
    - The ray interaction handler (`on_ray_incident`)
    - Object identification (uuid, name)
    """

    type: str = ''
    """The type tag of the element (e.g. 'mirror', 'pbs')."""

    serializable_defaults: Dict[str, Any] = {}
    """
    The default values of the properties of the element which are to be serialized.
    The keys are the property names and the values are the default values.
    A property equal to its default is omitted by `serialize()`.
    """

    is_optical: bool = True
    """Whether the element takes part in tracing (emits, redirects or absorbs rays)."""

    is_alignment_target: bool = False
    """Whether a hit on this element is reported to the alignment side channel."""

    def __init__(self, scene, json_obj: Optional[Dict[str, Any]] = None):
        """
        Initialize the element.

        Args:
            scene: The scene the element belongs to.
            json_obj: The dict of properties to load, if any. Missing properties
                take the class defaults.
        """
        self.scene = scene
        self.error: Optional[str] = None
        self.warning: Optional[str] = None

        self._uuid: str = str(uuid_module.uuid4())
        self._name: Optional[str] = None

        serializable_defaults = self.__class__.serializable_defaults

        if json_obj:
            known_keys = ['type', 'name'] + list(serializable_defaults.keys())
            for key in json_obj:
                if key not in known_keys:
                    # Reported on the scene, an unknown key usually means an incompatible layout file
                    if hasattr(self.scene, 'error'):
                        self.scene.error = (
                            f"Unknown object key '{key}' for type '{self.__class__.type}'"
                        )
            self._name = json_obj.get('name')
        else:
            json_obj = {}

        for prop_name, default_value in serializable_defaults.items():
            if prop_name in json_obj:
                setattr(self, prop_name, copy.deepcopy(json_obj[prop_name]))
            else:
                setattr(self, prop_name, copy.deepcopy(default_value))

    def serialize(self) -> Dict[str, Any]:
        """
        Serializes the element to a JSON-compatible dictionary.

        Returns:
            The serialized dictionary object.
        """
        json_obj: Dict[str, Any] = {'type': self.__class__.type}
        if self._name:
            json_obj['name'] = self._name

        for prop_name, default_value in self.__class__.serializable_defaults.items():
            current_value = getattr(self, prop_name)
            if json.dumps(current_value, sort_keys=True) != json.dumps(default_value, sort_keys=True):
                json_obj[prop_name] = copy.deepcopy(current_value)

        return json_obj

    def are_properties_default(self, property_names: List[str]) -> bool:
        """
        Check whether the given properties of the element are all the default values.

        Args:
            property_names: The property names to be checked.

        Returns:
            Whether the properties are all the default values.
        """
        serializable_defaults = self.__class__.serializable_defaults
        for prop_name in property_names:
            current_value = getattr(self, prop_name)
            default_value = serializable_defaults.get(prop_name)
            if json.dumps(current_value, sort_keys=True) != json.dumps(default_value, sort_keys=True):
                return False
        return True

    # ==================== Simulation Methods ====================

    def get_segments(self) -> List['Segment']:
        """
        The interaction segments of the element in world coordinates.

        Called once per element at the start of every trace pass. Elements
        without segments (light sources, decorations) are invisible to rays.

        Returns:
            Ordered list of Segment objects.
        """
        return []

    def on_ray_incident(
        self,
        ray: 'Ray',
        hit: 'Hit',
        segment: 'Segment',
        context: 'TraceContext'
    ) -> List['Ray']:
        """
        The event when a ray hits one of the element's segments.

        The traversed part of the ray has already been recorded by the
        simulator. The handler returns the child rays to be traced next,
        in the order they should be traced. An empty list means the ray is
        absorbed.

        Args:
            ray: The incoming ray (origin, direction, Stokes vector).
            hit: The intersection, with `hit.normal` set to the unit normal
                of the segment vector.
            segment: The segment that was hit.
            context: Read-only access to fiber pairing and tracing settings.

        Returns:
            List of child rays.
        """
        return []

    # ==================== Error/Warning Methods ====================

    def get_error(self) -> Optional[str]:
        return self.error

    def get_warning(self) -> Optional[str]:
        return self.warning

    # ==================== Object Identification ====================

    @property
    def uuid(self) -> str:
        """
        Get the unique identifier for this element.

        The UUID is auto-generated when the element is created and remains
        constant for the lifetime of the element instance.
        """
        return self._uuid

    @property
    def name(self) -> Optional[str]:
        """Get the human-readable name of the element, or None."""
        return self._name

    @name.setter
    def name(self, value: Optional[str]) -> None:
        self._name = value

    def get_display_name(self) -> str:
        """
        Get a display name for the element.

        Returns the user-defined name if set, otherwise a combination of the
        element type and a short UUID suffix.

        Returns:
            A string suitable for display (e.g., "M1" or "mirror_a1b2c3d4").
        """
        if self._name:
            return self._name
        type_name = self.__class__.type or self.__class__.__name__
        return f"{type_name}_{self._uuid[:8]}"

    def __repr__(self) -> str:
        type_name = self.__class__.type or self.__class__.__name__
        return f"<{type_name} '{self.get_display_name()}'>"
