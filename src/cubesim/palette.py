from enum import Enum
from typing import Dict, List, Tuple

from cubesim.rotation import Position


class Face(Enum):
    """Faces of a cubie, in the order their colors are stored in preferences"""

    RIGHT = 0
    LEFT = 1
    UP = 2
    DOWN = 3
    FRONT = 4
    BACK = 5

    @property
    def normal(self) -> Position:
        n = [0, 0, 0]
        n[self.value // 2] = 1 if self.value % 2 == 0 else -1
        return n[0], n[1], n[2]

    @property
    def axis_index(self) -> int:
        return self.value // 2


def colored_faces(home_face: Position) -> List[Face]:
    """Faces of a cubie that carry a sticker, given where it sits on a solved cube"""
    return [f for f in Face if home_face[f.axis_index] == f.normal[f.axis_index]]


class Palette:
    def __init__(self, colors: Dict[Face, Tuple], core_color: Tuple):
        """Colors for drawing the cube"""
        self.colors = colors
        self.core_color = core_color

    def color_of(self, home_face: Position, face: Face) -> Tuple:
        if home_face[face.axis_index] == face.normal[face.axis_index]:
            return tuple(self.colors[face])
        return tuple(self.core_color)

    @staticmethod
    def from_preferences(prefs) -> "Palette":
        colors = dict((Face(k), tuple(v)) for k, v in enumerate(prefs.colors))
        return Palette(colors, tuple(prefs.core_color))
