import math
from typing import Optional

from cubesim.moves import Move
from cubesim.rotation import Axis

# Side of the cube facing the camera, by quadrant
FRONT = 0  # +z
RIGHT = 1  # +x
BACK = 2  # -z
LEFT = 3  # -x

# Columns from left to right as seen from each quadrant, and the turn that
# moves the facing side of a column upwards
COLUMNS = {
    FRONT: (Axis.X, (-1, 0, 1), -1),
    RIGHT: (Axis.Z, (1, 0, -1), 1),
    BACK: (Axis.X, (1, 0, -1), 1),
    LEFT: (Axis.Z, (-1, 0, 1), -1),
}

# Rows from top to bottom. A positive turn about y moves the facing side to
# the right from every quadrant
ROWS = (1, 0, -1)

COLUMN_KEYS = "qwe"
ROW_KEYS = "asd"


def quadrant_for(azimuth: float) -> int:
    """
    Quadrant of a camera orbiting the vertical axis.
    azimuth is measured from +z towards +x.
    """
    angle = azimuth % (2 * math.pi)
    return int((angle + math.pi / 4) // (math.pi / 2)) % 4


def move_for_key(key: str, shift: bool, quadrant: int) -> Optional[Move]:
    key = key.lower()
    direction = -1 if shift else 1
    if len(key) != 1:
        return None
    if key in COLUMN_KEYS:
        axis, layers, sign = COLUMNS[quadrant]
        return Move(axis, layers[COLUMN_KEYS.index(key)], sign * direction)
    if key in ROW_KEYS:
        return Move(Axis.Y, ROWS[ROW_KEYS.index(key)], direction)
    return None


# Fixed bindings that ignore the camera: up/down turn the right layer, left/right
# turn the top layer
ARROW_MOVES = {
    "up": Move(Axis.X, 1, -1),
    "down": Move(Axis.X, 1, 1),
    "left": Move(Axis.Y, 1, -1),
    "right": Move(Axis.Y, 1, 1),
}


def move_for_arrow(arrow: str) -> Optional[Move]:
    return ARROW_MOVES.get(arrow)
