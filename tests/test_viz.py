import math

import numpy as np
import pytest

from cubesim.viz import HIGHLIGHT_HALF_SIZE, CubeViz


@pytest.fixture
def viz(engine):
    v = CubeViz(engine)
    v.elevation = 0.0
    return v


@pytest.mark.parametrize("azimuth", [0.0, math.pi / 2, math.pi, 3 * math.pi / 2])
def test_highlight_is_centered_on_facing_side(viz, azimuth):
    viz.azimuth = azimuth
    center = np.mean(viz.highlight(), axis=0)
    assert center == pytest.approx([0.0, 0.0, HIGHLIGHT_HALF_SIZE], abs=1e-9)


@pytest.mark.parametrize("azimuth", [0.7, 2.0, 3.9, 5.6, -0.7])
def test_highlight_follows_quadrant(viz, azimuth):
    viz.azimuth = azimuth
    center = np.mean(viz.highlight(), axis=0)
    # Never more than 45 degrees away from the camera axis
    assert center[2] >= HIGHLIGHT_HALF_SIZE * math.cos(math.pi / 4) - 1e-9


def test_faces_are_sorted_back_to_front(viz):
    viz.elevation = math.pi / 7
    depths = [depth for depth, _, _ in viz.faces()]
    assert depths
    assert depths == sorted(depths, reverse=True)
