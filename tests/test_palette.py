import pytest

from cubesim.lattice import CubieLattice
from cubesim.palette import Face, Palette, colored_faces
from cubesim.prefs import Preferences


@pytest.mark.parametrize(
    "home, faces",
    [
        ((1, 1, 1), [Face.RIGHT, Face.UP, Face.FRONT]),
        ((-1, 0, -1), [Face.LEFT, Face.BACK]),
        ((0, -1, 0), [Face.DOWN]),
        ((0, 0, 0), []),
    ],
)
def test_colored_faces(home, faces):
    assert colored_faces(home) == faces


def test_face_normals():
    assert Face.RIGHT.normal == (1, 0, 0)
    assert Face.DOWN.normal == (0, -1, 0)
    assert Face.BACK.normal == (0, 0, -1)


def test_sticker_counts():
    counts = [len(colored_faces(c.home_face)) for c in CubieLattice().all_cubies()]
    assert counts.count(3) == 8
    assert counts.count(2) == 12
    assert counts.count(1) == 6
    assert counts.count(0) == 1
    assert sum(counts) == 54


def test_palette_from_preferences():
    prefs = Preferences()
    palette = Palette.from_preferences(prefs)
    assert palette.color_of((0, 1, 0), Face.UP) == tuple(prefs.colors[Face.UP.value])
    assert palette.color_of((0, 1, 0), Face.DOWN) == tuple(prefs.core_color)
    assert palette.color_of((1, 0, 0), Face.LEFT) == tuple(prefs.core_color)
