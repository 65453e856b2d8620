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

"""
Constants used throughout the optical bench simulation.

Kept in a separate module so that scene objects, the simulator and the
renderer can share them without circular imports. All lengths are in
millimetres, all angles in radians unless the name says otherwise.
"""

# =============================================================================
# Tracing limits
# =============================================================================

# Maximum recursion depth of a single branch (number of interactions)
MAX_BOUNCES = 30

# A branch is abandoned once its intensity (Stokes I) falls below this floor
MIN_INTENSITY = 0.01

# Length of the segment drawn for a ray that hits nothing
ESCAPE_DISTANCE = 2000.0

# Distance a continuing ray is pushed forward so it does not re-hit the same segment
NUDGE_DISTANCE = 0.1

# =============================================================================
# Intersection solver
# =============================================================================

# |determinant| below this means ray and segment are (nearly) parallel
INTERSECTION_EPSILON = 1e-5

# Minimum ray parameter for a valid hit, excludes the segment the ray starts on
MIN_RAY_PARAM = 1e-3

# Segment vectors shorter than this have no usable normal
MIN_NORMAL_LENGTH = 1e-9

# =============================================================================
# Bench layout
# =============================================================================

GRID_PITCH_MM = 25.0
HALF_GRID_MM = 12.5

DEFAULT_FOCAL_LENGTH = GRID_PITCH_MM * 5
DEFAULT_AMPLIFIER_GAIN = 2.0

# Fraction of a D-mirror's width that is reflective, measured from one edge
DMIRROR_REFLECTIVE_FRACTION = 0.45

# Default beam color tag (RGB)
DEFAULT_RAY_COLOR = (255, 50, 50)

# =============================================================================
# Element transmission factors
# =============================================================================

SPLITTER_RATIO = 0.5
GLASS_TRANSMISSION = 0.95
LENS_TRANSMISSION = 0.98
FIBER_TRANSMISSION = 0.9
AOM_PASS_TRANSMISSION = 0.95

# =============================================================================
# Acousto-optic modulator
# =============================================================================
# Fixed approximations of the diffraction behavior, used literally.

AOM_BLOCK_ALIGNMENT = 0.15      # |cos| between beam and device axis below which the beam is blocked
AOM_ANGLE_TOLERANCE = 0.02      # rad, beam counts as entering straight within this angle
AOM_DEFLECTION_ANGLE = 0.035    # rad, first-order deflection
AOM_STRAIGHT_FRACTION = 0.3     # zeroth order share when the beam enters straight
AOM_DIFFRACTED_FRACTION = 0.7   # first order share (also used for the corrected beam)

# =============================================================================
# Thin lens
# =============================================================================

LENS_MIN_AXIAL_COMPONENT = 0.01   # beams nearly parallel to the lens plane pass straight
LENS_MIN_OFFSET = 0.1             # beams through the center pass straight
