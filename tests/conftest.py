import itertools
import os
import tempfile

import pytest

from cubesim.engine import CubeEngine
from cubesim.lattice import CubieLattice
from cubesim.moves import MoveEngine

ALL_POSITIONS = set(itertools.product((-1, 0, 1), repeat=3))


def pytest_configure(config):
    # Keep preferences written during the tests away from the user's config
    os.environ["XDG_CONFIG_HOME"] = tempfile.mkdtemp(prefix="cubesim-tests-")


@pytest.fixture
def lattice():
    return CubieLattice()


@pytest.fixture
def move_engine(lattice):
    return MoveEngine(lattice)


@pytest.fixture
def engine():
    return CubeEngine()


def positions_by_id(cubies):
    return {c.id: c.position for c in cubies}


def assert_bijection(cubies):
    positions = [c.position for c in cubies]
    assert len(positions) == 27
    assert set(positions) == ALL_POSITIONS
