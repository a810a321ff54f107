import math
from enum import Enum
from typing import Dict, List, Optional, Tuple

import numpy as np
from pyquaternion import Quaternion

Position = Tuple[int, int, int]

# Layer coordinates along any axis
LAYERS = (-1, 0, 1)

# Turn directions, right-hand rule around the positive axis
SIGNS = (1, -1)

IDENTITY = Quaternion()


class Axis(Enum):
    X = 0
    Y = 1
    Z = 2

    @property
    def vector(self) -> List[float]:
        v = [0.0, 0.0, 0.0]
        v[self.value] = 1.0
        return v

    @property
    def letter(self) -> str:
        return self.name.lower()

    @staticmethod
    def parse(value) -> Optional["Axis"]:
        """Accept an Axis, a letter or an index. Returns None for anything else"""
        if isinstance(value, Axis):
            return value
        if isinstance(value, str):
            return _AXIS_LETTERS.get(value.lower())
        if isinstance(value, (int, np.integer)) and not isinstance(value, bool):
            if 0 <= value < 3:
                return Axis(int(value))
        return None

    def __repr__(self):
        return self.letter


_AXIS_LETTERS = {"x": Axis.X, "y": Axis.Y, "z": Axis.Z}


def quarter_turn(axis: Axis, sign: int) -> Quaternion:
    return Quaternion(axis=axis.vector, angle=sign * math.pi / 2)


def snap_position(v) -> Position:
    """Round a rotated position back onto the integer lattice"""
    x, y, z = (int(c) for c in np.rint(np.asarray(v, dtype=float)))
    return x, y, z


def _matrix_key(q: Quaternion) -> Tuple[int, ...]:
    return tuple(int(c) for c in np.rint(q.rotation_matrix).flatten())


def _canonical_sign(q: Quaternion) -> Quaternion:
    # q and -q are the same rotation; keep the one whose first non-zero
    # component is positive
    for c in q.elements:
        if abs(c) > 1e-9:
            return -q if c < 0 else q
    return q


def _enumerate_orientations() -> Dict[Tuple[int, ...], Quaternion]:
    """Rotation group of the cube, reached by composing quarter turns from the identity"""
    table = {_matrix_key(IDENTITY): IDENTITY}
    frontier = [IDENTITY]
    while frontier:
        q = frontier.pop()
        for axis in Axis:
            turned = quarter_turn(axis, 1) * q
            key = _matrix_key(turned)
            if key not in table:
                turned = _canonical_sign(turned)
                table[key] = turned
                frontier.append(turned)
    return table


# Canonical quaternion for each of the 24 orientations, keyed by rotation matrix
_ORIENTATION_TABLE = _enumerate_orientations()

ORIENTATIONS = list(_ORIENTATION_TABLE.values())


def is_cube_symmetry(q: Quaternion) -> bool:
    m = q.rotation_matrix
    if not np.allclose(m, np.rint(m), atol=1e-6):
        return False
    return _matrix_key(q) in _ORIENTATION_TABLE


def snap_orientation(q: Quaternion) -> Quaternion:
    """Replace a near-symmetry quaternion with the canonical one for its rotation"""
    if not is_cube_symmetry(q):
        raise ValueError(f"Not a rotation of the cube: {q}")
    return _ORIENTATION_TABLE[_matrix_key(q)]


def rotate(
    axis: Axis, sign: int, position: Position, orientation: Quaternion
) -> Tuple[Position, Quaternion]:
    """
    Quarter-turn a cubie about a world axis.
    The turn is applied in the lattice frame, so it pre-multiplies the orientation.
    """
    q = quarter_turn(axis, sign)
    new_position = snap_position(q.rotate(np.array(position, dtype=float)))
    new_orientation = snap_orientation(q * orientation)
    return new_position, new_orientation


def apply_orientation(orientation: Quaternion, v: Position) -> Position:
    """Image of a lattice vector under a cube symmetry"""
    return snap_position(orientation.rotate(np.array(v, dtype=float)))
