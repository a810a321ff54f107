import dataclasses
import itertools
import logging
from dataclasses import dataclass
from typing import Callable, Dict, List, Mapping, Optional, Tuple

from pyquaternion import Quaternion

from cubesim.rotation import (
    IDENTITY,
    LAYERS,
    Position,
    apply_orientation,
    is_cube_symmetry,
)

CORE_POSITION = (0, 0, 0)


class InvariantViolation(Exception):
    """The lattice would leave a legal cube state. Indicates a bug, never recovered"""


@dataclass(frozen=True)
class Cubie:
    """One of the 27 unit cubes"""

    id: int
    position: Position
    orientation: Quaternion
    home_face: Position

    def is_core(self) -> bool:
        return self.home_face == CORE_POSITION

    def __repr__(self):
        return f"Cubie({self.id}, at={self.position}, home={self.home_face})"


def _solved_cubies() -> Dict[int, Cubie]:
    cubies = {}
    for i, p in enumerate(itertools.product(LAYERS, repeat=3)):
        cubies[i] = Cubie(id=i, position=p, orientation=IDENTITY, home_face=p)
    return cubies


_ALL_POSITIONS = frozenset(itertools.product(LAYERS, repeat=3))


class CubieLattice:
    """Positions and orientations of all cubies, keyed by id"""

    def __init__(self):
        self._cubies: Dict[int, Cubie] = _solved_cubies()
        self._listeners: List[Callable] = []

    def all_cubies(self) -> List[Cubie]:
        return [self._cubies[i] for i in sorted(self._cubies)]

    def cubie(self, cubie_id: int) -> Cubie:
        return self._cubies[cubie_id]

    def at(self, position: Position) -> Optional[Cubie]:
        for c in self._cubies.values():
            if c.position == tuple(position):
                return c
        return None

    def reset(self):
        self._cubies = _solved_cubies()
        logging.debug("Lattice reset to solved state")
        self.notify_listeners()

    def apply_update(self, cubie_id: int, position: Position, orientation: Quaternion):
        self.apply_updates({cubie_id: (position, orientation)})

    def apply_updates(self, updates: Mapping[int, Tuple[Position, Quaternion]]):
        """
        Replace the position and orientation of several cubies at once.
        The whole resulting state is checked before anything is committed.
        """
        result = dict(self._cubies)
        for cubie_id, (position, orientation) in updates.items():
            if cubie_id not in result:
                raise InvariantViolation(f"No cubie with id {cubie_id}")
            position = tuple(position)
            if len(position) != 3 or any(c not in LAYERS for c in position):
                raise InvariantViolation(f"Position {position} is off the lattice")
            if not is_cube_symmetry(orientation):
                raise InvariantViolation(
                    f"Orientation {orientation} of cubie {cubie_id} is not a cube rotation"
                )
            result[cubie_id] = dataclasses.replace(
                result[cubie_id], position=position, orientation=orientation
            )
        occupied = [c.position for c in result.values()]
        if len(set(occupied)) != len(occupied) or set(occupied) != _ALL_POSITIONS:
            raise InvariantViolation("Cubie positions are no longer a permutation of the lattice")
        self._cubies = result
        self.notify_listeners()

    def is_solved(self) -> bool:
        # Solved up to a rotation of the whole cube. The core is never visible
        cubies = [c for c in self._cubies.values() if not c.is_core()]
        g = cubies[0].orientation
        for c in cubies:
            if c.orientation != g:
                return False
            if c.position != apply_orientation(g, c.home_face):
                return False
        return True

    def add_listener(self, callback: Callable):
        self._listeners.append(callback)

    def notify_listeners(self):
        for listener in self._listeners:
            listener()
