import re
from typing import Iterable, List

from cubesim.moves import Move
from cubesim.rotation import Axis

# Clockwise quarter turn of each named layer, seen from the face it is named after.
# Slice moves follow L (M), D (E) and F (S)
LAYER_MOVES = {
    "R": Move(Axis.X, 1, -1),
    "M": Move(Axis.X, 0, 1),
    "L": Move(Axis.X, -1, 1),
    "U": Move(Axis.Y, 1, -1),
    "E": Move(Axis.Y, 0, 1),
    "D": Move(Axis.Y, -1, 1),
    "F": Move(Axis.Z, 1, -1),
    "S": Move(Axis.Z, 0, -1),
    "B": Move(Axis.Z, -1, 1),
}

_NAMES = {(m.axis, m.layer_index): (name, m.sign) for name, m in LAYER_MOVES.items()}


def parse_moves(moves_str: str) -> List[Move]:
    """Parse moves like "R U' M2" into quarter turns"""
    alg_pattern = r"^\s*([RMLUEDFSB][2']?\s*)*$"
    if not re.fullmatch(alg_pattern, moves_str):
        raise ValueError("Invalid algorithm")
    moves = []
    for layer, modifier in re.findall(r"([RMLUEDFSB])([2']?)", moves_str):
        m = LAYER_MOVES[layer]
        if modifier == "'":
            moves.append(m.inverse())
        elif modifier == "2":
            moves.extend([m, m])
        else:
            moves.append(m)
    return moves


def move_name(move: Move) -> str:
    a = Axis.parse(move.axis)
    name, sign = _NAMES[(a, move.layer_index)]
    return name if move.sign == sign else f"{name}'"


def invert_moves(moves: Iterable[Move]) -> List[Move]:
    return [m.inverse() for m in reversed(list(moves))]


def format_moves(moves: Iterable[Move]) -> str:
    return " ".join(move_name(m) for m in moves)
