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
import uuid as uuid_module
from typing import Any, Dict, List, Optional, Tuple

if __name__ == "__main__":
    from optical_bench_shapely.core.constants import MAX_BOUNCES, MIN_INTENSITY, ESCAPE_DISTANCE
    from optical_bench_shapely.core.scene_objs import BaseSceneObj, Laser, FiberCoupler, FiberOutputMixin, create_element
else:
    from .constants import MAX_BOUNCES, MIN_INTENSITY, ESCAPE_DISTANCE
    from .scene_objs import BaseSceneObj, Laser, FiberCoupler, FiberOutputMixin, create_element


class Scene:
    """
    Container for the elements on the bench and the tracing settings.

    The scene also owns the fiber pairing relation: which fiber coupler is
    connected to which coupler or amplifier. The relation is symmetric and
    each element has at most one partner.

    Attributes:
        objs (list): All elements in the scene, in insertion order
        optical_objs (list): Elements that take part in tracing (is_optical=True)
        error (str or None): Error message, e.g. from loading an unknown property
        warning (str or None): Warning from the last trace pass
        name (str or None): Optional name for the scene

    Properties:
        max_bounces (int): Maximum interaction depth of a single beam branch
        min_intensity (float): Branches below this intensity are abandoned
        escape_distance (float): Length of the segment drawn for a beam that
            leaves the bench
    """

    def __init__(self):
        """Initialize an empty scene with default settings."""
        self.objs: List[BaseSceneObj] = []
        self.optical_objs: List[BaseSceneObj] = []
        self.error: Optional[str] = None
        self.warning: Optional[str] = None
        self.name: Optional[str] = None
        self._uuid: str = str(uuid_module.uuid4())
        self._max_bounces: int = MAX_BOUNCES
        self._min_intensity: float = MIN_INTENSITY
        self._escape_distance: float = ESCAPE_DISTANCE
        # uuid -> partner element, stored in both directions
        self._fiber_partners: Dict[str, BaseSceneObj] = {}

    # =========================================================================
    # Settings
    # =========================================================================

    @property
    def max_bounces(self) -> int:
        return self._max_bounces

    @max_bounces.setter
    def max_bounces(self, value: int) -> None:
        """
        Set the maximum interaction depth.

        Raises:
            ValueError: If value is not a positive integer.
        """
        if isinstance(value, bool) or not isinstance(value, int) or value <= 0:
            raise ValueError(f"max_bounces must be a positive integer, got {value!r}")
        self._max_bounces = value

    @property
    def min_intensity(self) -> float:
        return self._min_intensity

    @min_intensity.setter
    def min_intensity(self, value: float) -> None:
        """
        Set the intensity floor below which a branch is abandoned.

        Raises:
            ValueError: If value is not a positive finite number.
        """
        if (isinstance(value, bool) or not isinstance(value, (int, float))
                or not math.isfinite(value) or value <= 0):
            raise ValueError(f"min_intensity must be a positive number, got {value!r}")
        self._min_intensity = float(value)

    @property
    def escape_distance(self) -> float:
        return self._escape_distance

    @escape_distance.setter
    def escape_distance(self, value: float) -> None:
        """
        Set the length of escape segments.

        Raises:
            ValueError: If value is not a positive finite number.
        """
        if (isinstance(value, bool) or not isinstance(value, (int, float))
                or not math.isfinite(value) or value <= 0):
            raise ValueError(f"escape_distance must be a positive number, got {value!r}")
        self._escape_distance = float(value)

    # =========================================================================
    # Identification
    # =========================================================================

    @property
    def uuid(self) -> str:
        """
        Get the unique identifier for this scene.

        Returns:
            The UUID string (e.g., "550e8400-e29b-41d4-a716-446655440000").
        """
        return self._uuid

    def get_display_name(self) -> str:
        """
        Get a display name for the scene.

        Returns:
            The scene name if set, otherwise "Scene_" plus a short UUID suffix.
        """
        if self.name:
            return self.name
        return f"Scene_{self._uuid[:8]}"

    # =========================================================================
    # Elements
    # =========================================================================

    def add_object(self, obj: BaseSceneObj) -> None:
        """
        Add an element to the scene.

        Optical elements (is_optical=True) are also added to optical_objs.

        Args:
            obj: The element to add
        """
        self.objs.append(obj)
        if getattr(obj, 'is_optical', False):
            self.optical_objs.append(obj)

    def add_element(self, json_obj: Dict[str, Any]) -> BaseSceneObj:
        """
        Create an element from a property dict and add it to the scene.

        Args:
            json_obj: Properties including the 'type' tag

        Returns:
            The new element

        Raises:
            ValueError: If the type tag is missing or unknown
        """
        obj = create_element(self, json_obj)
        self.add_object(obj)
        return obj

    def remove_object(self, obj: BaseSceneObj) -> None:
        """
        Remove an element from the scene, breaking its fiber pairing if any.

        Args:
            obj: The element to remove
        """
        if obj in self.objs:
            self.objs.remove(obj)
        if obj in self.optical_objs:
            self.optical_objs.remove(obj)
        self.unpair_fiber(obj)

    def clear(self) -> None:
        """Remove all elements and pairings from the scene."""
        self.objs.clear()
        self.optical_objs.clear()
        self._fiber_partners.clear()
        self.error = None
        self.warning = None

    def get_by_uuid(self, uuid: str) -> Optional[BaseSceneObj]:
        """Find an element by uuid, or None."""
        for obj in self.objs:
            if obj.uuid == uuid:
                return obj
        return None

    def get_by_name(self, name: str) -> Optional[BaseSceneObj]:
        """Find the first element with the given name, or None."""
        for obj in self.objs:
            if obj.name == name:
                return obj
        return None

    def lasers(self) -> List[Laser]:
        """The light sources, in scene order."""
        return [obj for obj in self.optical_objs if isinstance(obj, Laser)]

    # =========================================================================
    # Fiber pairing
    # =========================================================================

    def pair_fiber(self, coupler: BaseSceneObj, partner: BaseSceneObj) -> None:
        """
        Connect a fiber coupler to another coupler or to an amplifier.

        Any existing pairing of either element is broken first.

        Args:
            coupler: The fiber coupler
            partner: Another fiber coupler, or an amplifier

        Raises:
            ValueError: If the pairing is not allowed
        """
        if not isinstance(coupler, FiberCoupler):
            raise ValueError(f"Fiber pairing must start at a fiber coupler, got {coupler!r}")
        if not isinstance(partner, FiberOutputMixin):
            raise ValueError(
                f"A fiber coupler can only pair with a fiber coupler or an amplifier, got {partner!r}"
            )
        if coupler is partner:
            raise ValueError(f"Cannot pair {coupler!r} with itself")
        for obj in (coupler, partner):
            if obj not in self.objs:
                raise ValueError(f"{obj!r} is not in the scene")

        self.unpair_fiber(coupler)
        self.unpair_fiber(partner)
        self._fiber_partners[coupler.uuid] = partner
        self._fiber_partners[partner.uuid] = coupler

    def unpair_fiber(self, obj: BaseSceneObj) -> Optional[BaseSceneObj]:
        """
        Break the pairing of an element.

        Returns:
            The former partner, or None if the element was not paired
        """
        partner = self._fiber_partners.pop(obj.uuid, None)
        if partner is not None:
            self._fiber_partners.pop(partner.uuid, None)
        return partner

    def get_partner(self, obj: BaseSceneObj) -> Optional[BaseSceneObj]:
        """The element paired with `obj`, or None."""
        return self._fiber_partners.get(obj.uuid)

    def pairs(self) -> List[Tuple[BaseSceneObj, BaseSceneObj]]:
        """Each pairing once, as (coupler, partner)."""
        result = []
        seen = set()
        for uuid, partner in self._fiber_partners.items():
            if uuid in seen:
                continue
            seen.add(uuid)
            seen.add(partner.uuid)
            result.append((self._fiber_partners[partner.uuid], partner))
        return result

    def pairing_snapshot(self) -> Dict[str, BaseSceneObj]:
        """Copy of the pairing relation, fixed for the duration of a trace pass."""
        return dict(self._fiber_partners)

    def __repr__(self) -> str:
        return f"<Scene '{self.get_display_name()}' with {len(self.objs)} objects>"
