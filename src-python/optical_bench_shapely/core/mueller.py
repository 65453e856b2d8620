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
Mueller calculus for the polarization state of beams on the bench.

A beam's polarization is a Stokes vector S = [I, Q, U, V] and every optical
component acts on it through a 4x4 Mueller matrix M (S' = M @ S). Component
matrices are stored for the component axis at 0 degrees (horizontal) and
rotated to the element's orientation with rotate_component().

Conventions:
    Q > 0   horizontal linear
    U > 0   +45 degree linear
    V > 0   right circular

The module is stateless; every function returns new arrays.
"""

import math
from typing import Dict, Sequence, Tuple, Union

import numpy as np

StokesLike = Union[np.ndarray, Sequence[float]]

# =============================================================================
# Canonical Stokes vectors [I, Q, U, V]
# =============================================================================

STOKES_H = np.array([1.0, 1.0, 0.0, 0.0])
STOKES_V = np.array([1.0, -1.0, 0.0, 0.0])
STOKES_D = np.array([1.0, 0.0, 1.0, 0.0])     # +45 degrees
STOKES_A = np.array([1.0, 0.0, -1.0, 0.0])    # -45 degrees
STOKES_R = np.array([1.0, 0.0, 0.0, 1.0])     # right circular
STOKES_L = np.array([1.0, 0.0, 0.0, -1.0])    # left circular
STOKES_UNPOLARIZED = np.array([1.0, 0.0, 0.0, 0.0])

STOKES: Dict[str, np.ndarray] = {
    'HORIZONTAL': STOKES_H,
    'VERTICAL': STOKES_V,
    'DIAGONAL': STOKES_D,
    'ANTI_DIAGONAL': STOKES_A,
    'RIGHT_CIRC': STOKES_R,
    'LEFT_CIRC': STOKES_L,
}

# =============================================================================
# Mueller matrices of ideal components (axis horizontal)
# =============================================================================

# Linear polarizer, horizontal transmission axis
POLARIZER_H = np.array([
    [0.5, 0.5, 0.0, 0.0],
    [0.5, 0.5, 0.0, 0.0],
    [0.0, 0.0, 0.0, 0.0],
    [0.0, 0.0, 0.0, 0.0],
])

# Half-wave plate, fast axis horizontal (retardance pi)
HWP_H = np.array([
    [1.0, 0.0, 0.0, 0.0],
    [0.0, 1.0, 0.0, 0.0],
    [0.0, 0.0, -1.0, 0.0],
    [0.0, 0.0, 0.0, -1.0],
])

# Quarter-wave plate, fast axis horizontal (retardance pi/2)
QWP_H = np.array([
    [1.0, 0.0, 0.0, 0.0],
    [0.0, 1.0, 0.0, 0.0],
    [0.0, 0.0, 0.0, 1.0],
    [0.0, 0.0, -1.0, 0.0],
])

# Ideal mirror at normal incidence: handedness flips, so U and V change sign
MIRROR = np.array([
    [1.0, 0.0, 0.0, 0.0],
    [0.0, 1.0, 0.0, 0.0],
    [0.0, 0.0, -1.0, 0.0],
    [0.0, 0.0, 0.0, -1.0],
])

IDENTITY = np.eye(4)

MATRICES: Dict[str, np.ndarray] = {
    'POLARIZER_H': POLARIZER_H,
    'HWP_H': HWP_H,
    'QWP_H': QWP_H,
    'MIRROR': MIRROR,
    'IDENTITY': IDENTITY,
}

# Below this rotation angle (rad) rotate_component() returns the matrix unchanged
ROTATION_SHORT_CIRCUIT = 1e-3


def rotation_matrix(theta: float) -> np.ndarray:
    """
    Rotation of the Stokes reference frame by theta.

    R(theta) = [[1, 0, 0, 0],
                [0, cos 2t, sin 2t, 0],
                [0, -sin 2t, cos 2t, 0],
                [0, 0, 0, 1]]

    Args:
        theta: Rotation angle in radians

    Returns:
        4x4 rotation matrix
    """
    c2 = math.cos(2 * theta)
    s2 = math.sin(2 * theta)
    return np.array([
        [1.0, 0.0, 0.0, 0.0],
        [0.0, c2, s2, 0.0],
        [0.0, -s2, c2, 0.0],
        [0.0, 0.0, 0.0, 1.0],
    ])


def rotate_component(matrix: np.ndarray, theta: float) -> np.ndarray:
    """
    Rotate a component's Mueller matrix so that its axis sits at theta.

    M_rot = R(-theta) @ M @ R(theta)

    Args:
        matrix: Mueller matrix of the component with its axis horizontal
        theta: Axis angle in radians

    Returns:
        The rotated matrix (the input itself when |theta| is negligible)
    """
    if abs(theta) < ROTATION_SHORT_CIRCUIT:
        return matrix
    return rotation_matrix(-theta) @ matrix @ rotation_matrix(theta)


def interact(stokes: StokesLike, matrix: np.ndarray) -> np.ndarray:
    """
    Apply a Mueller matrix to a Stokes vector.

    The resulting intensity is clamped to be non-negative, since rounding in
    chained products can push a fully extinguished beam slightly below zero.

    Args:
        stokes: Incoming Stokes vector [I, Q, U, V]
        matrix: Mueller matrix

    Returns:
        Outgoing Stokes vector
    """
    result = matrix @ np.asarray(stokes, dtype=float)
    if result[0] < 0:
        result[0] = 0.0
    return result


def scale(stokes: StokesLike, factor: float) -> np.ndarray:
    """Scale every Stokes component (an ideal neutral attenuator or splitter)."""
    return np.asarray(stokes, dtype=float) * factor


def linear_stokes(angle: float, intensity: float = 1.0) -> np.ndarray:
    """
    Fully polarized linear state at the given angle.

    Obtained by rotating the horizontal state into the frame at `angle`,
    so linear_stokes(0) is STOKES_H and linear_stokes(pi/4) is STOKES_D.

    Args:
        angle: Polarization angle in radians
        intensity: Total intensity I

    Returns:
        Stokes vector
    """
    return intensity * (rotation_matrix(-angle) @ STOKES_H)


def degree_of_polarization(stokes: StokesLike) -> float:
    """
    sqrt(Q^2 + U^2 + V^2) / I, 0 for a dark beam.
    """
    s = np.asarray(stokes, dtype=float)
    if s[0] <= 0:
        return 0.0
    return float(np.linalg.norm(s[1:]) / s[0])


def polarization_color(stokes: StokesLike) -> Tuple[int, int, int]:
    """
    False color for a polarization state, used when drawing beams.

    Linear states fade from red (horizontal) to blue (vertical); states with
    a noticeable circular component are drawn green with brightness |V|/I.

    Args:
        stokes: Stokes vector

    Returns:
        (r, g, b) with components in 0-255
    """
    s = np.asarray(stokes, dtype=float)
    i = s[0] if s[0] else 1.0
    q = s[1] / i
    v = s[3] / i

    if abs(v) < 0.1:
        r = int(math.floor(255 * (1 + q) / 2))
        b = int(math.floor(255 * (1 - q) / 2))
        return (min(255, max(0, r)), 0, min(255, max(0, b)))

    g = int(math.floor(255 * min(1.0, abs(v))))
    return (0, g, 0)


def describe_polarization(stokes: StokesLike, tol: float = 0.05) -> str:
    """
    Short human-readable label for a Stokes vector.

    Returns one of 'H', 'V', '+45', '-45', 'R', 'L', 'elliptical',
    'unpolarized' or 'dark'.
    """
    s = np.asarray(stokes, dtype=float)
    if s[0] <= 0:
        return 'dark'
    q, u, v = s[1:] / s[0]
    if degree_of_polarization(s) < tol:
        return 'unpolarized'

    labels = (
        ('H', q, 1.0), ('V', q, -1.0),
        ('+45', u, 1.0), ('-45', u, -1.0),
        ('R', v, 1.0), ('L', v, -1.0),
    )
    for label, value, target in labels:
        if abs(value - target) < tol:
            return label
    return 'elliptical'


# Example usage and testing
if __name__ == "__main__":
    print("Horizontal through HWP at 45 deg:",
          interact(STOKES_H, rotate_component(HWP_H, math.pi / 4)))
    print("Horizontal through QWP at 45 deg:",
          interact(STOKES_H, rotate_component(QWP_H, math.pi / 4)))
    print("Horizontal through polarizer at 45 deg:",
          interact(STOKES_H, rotate_component(POLARIZER_H, math.pi / 4)))
    print("Linear at 30 deg:", linear_stokes(math.radians(30)),
          describe_polarization(linear_stokes(math.radians(30))))
