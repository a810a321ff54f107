import logging
from dataclasses import dataclass
from typing import Iterable, Set

from cubesim.lattice import Cubie, CubieLattice
from cubesim.rotation import Axis, SIGNS, rotate


@dataclass(frozen=True)
class Move:
    """Quarter turn of one layer"""

    axis: Axis
    layer_index: int
    sign: int

    def inverse(self) -> "Move":
        return Move(self.axis, self.layer_index, -self.sign)

    def __repr__(self):
        return f"Move({self.axis!r}, {self.layer_index}, {self.sign:+d})"


def select_layer(lattice: CubieLattice, axis, layer_index) -> Set[Cubie]:
    """Cubies whose coordinate on the axis rounds to layer_index"""
    a = Axis.parse(axis)
    if a is None:
        return set()
    return {
        c for c in lattice.all_cubies() if round(c.position[a.value]) == layer_index
    }


class MoveEngine:
    """Applies quarter turns to a lattice"""

    def __init__(self, lattice: CubieLattice):
        self.lattice = lattice

    def apply_move(self, axis, layer_index: int, sign: int) -> bool:
        """Turn one layer. False if the move was malformed and nothing changed"""
        layer = select_layer(self.lattice, axis, layer_index)
        if not layer:
            logging.debug(f"No cubies in layer {axis}={layer_index}, ignoring move")
            return False
        if sign not in SIGNS:
            logging.warning(f"Invalid turn direction {sign}, ignoring move")
            return False
        a = Axis.parse(axis)
        updates = {}
        for c in layer:
            updates[c.id] = rotate(a, sign, c.position, c.orientation)
        self.lattice.apply_updates(updates)
        logging.debug(f"Turned layer {a.letter}={layer_index} by {sign:+d}")
        return True

    def apply(self, move: Move) -> bool:
        return self.apply_move(move.axis, move.layer_index, move.sign)

    def apply_all(self, moves: Iterable[Move]):
        for m in moves:
            self.apply(m)
