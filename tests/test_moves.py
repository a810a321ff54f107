import random

import pytest

import cubesim.moves
from cubesim.lattice import Cubie, InvariantViolation
from cubesim.moves import Move, MoveEngine, select_layer
from cubesim.rotation import IDENTITY, LAYERS, SIGNS, Axis

from conftest import assert_bijection, positions_by_id

ALL_MOVES = [(a, l, s) for a in Axis for l in LAYERS for s in SIGNS]


def test_select_middle_layer(lattice):
    layer = select_layer(lattice, Axis.Y, 0)
    assert len(layer) == 9
    assert {c.id for c in layer} == {
        c.id for c in lattice.all_cubies() if c.home_face[1] == 0
    }


@pytest.mark.parametrize("axis", [Axis.X, "x", "X", 0])
def test_select_accepts_axis_forms(lattice, axis):
    assert {c.position[0] for c in select_layer(lattice, axis, 1)} == {1}


@pytest.mark.parametrize("axis, layer", [(Axis.Z, 2), (Axis.Z, -2), ("w", 0), (7, 1)])
def test_select_malformed_input_is_empty(lattice, axis, layer):
    assert select_layer(lattice, axis, layer) == set()


def test_select_tolerates_near_integer_positions():
    class Interpolated:
        def all_cubies(self):
            return [
                Cubie(0, (0.9999, 0.0001, -1.0002), IDENTITY, (1, 0, -1)),
                Cubie(1, (0.49, 1.0, 0.0), IDENTITY, (0, 1, 0)),
            ]

    assert {c.id for c in select_layer(Interpolated(), Axis.X, 1)} == {0}
    assert {c.id for c in select_layer(Interpolated(), Axis.Y, 0)} == {0}
    assert {c.id for c in select_layer(Interpolated(), Axis.X, 0)} == {1}


def test_move_turns_only_its_layer(lattice, move_engine):
    before = positions_by_id(lattice.all_cubies())
    move_engine.apply_move(Axis.X, 1, 1)
    after = positions_by_id(lattice.all_cubies())
    for cubie_id, p in before.items():
        if p[0] != 1:
            assert after[cubie_id] == p
    # (x, y, z) -> (x, -z, y)
    assert lattice.at((1, -1, 0)).home_face == (1, 0, 1)
    assert lattice.at((1, 0, 0)).home_face == (1, 0, 0)


@pytest.mark.parametrize("axis, layer, sign", ALL_MOVES)
def test_four_turns_are_identity(lattice, move_engine, axis, layer, sign):
    move_engine.apply_move(Axis.Z, 1, 1)
    move_engine.apply_move(Axis.X, 0, -1)
    before = lattice.all_cubies()
    move_engine.apply_move(axis, layer, sign)
    assert lattice.all_cubies() != before
    for _ in range(3):
        move_engine.apply_move(axis, layer, sign)
    assert lattice.all_cubies() == before


def test_four_right_turns_from_solved(lattice, move_engine):
    for _ in range(4):
        move_engine.apply_move(Axis.X, 1, 1)
    for c in lattice.all_cubies():
        assert c.position == c.home_face
        assert c.orientation == IDENTITY


def test_turns_do_not_commute(lattice, move_engine):
    move_engine.apply_move(Axis.X, 1, 1)
    move_engine.apply_move(Axis.Y, 1, 1)
    first = positions_by_id(lattice.all_cubies())
    lattice.reset()
    move_engine.apply_move(Axis.Y, 1, 1)
    move_engine.apply_move(Axis.X, 1, 1)
    second = positions_by_id(lattice.all_cubies())
    assert first != second


def test_random_sequences_keep_bijection(lattice, move_engine):
    rng = random.Random(7)
    for _ in range(200):
        move_engine.apply_move(*rng.choice(ALL_MOVES))
        assert_bijection(lattice.all_cubies())


@pytest.mark.parametrize(
    "axis, layer, sign", [(Axis.X, 5, 1), ("q", 1, 1), (Axis.X, 1, 0), (Axis.Y, 0, 2)]
)
def test_malformed_moves_are_no_ops(lattice, move_engine, axis, layer, sign):
    before = lattice.all_cubies()
    move_engine.apply_move(axis, layer, sign)
    assert lattice.all_cubies() == before


def test_broken_transform_commits_nothing(lattice, move_engine, monkeypatch):
    monkeypatch.setattr(cubesim.moves, "rotate", lambda a, s, p, o: ((0, 0, 0), o))
    before = lattice.all_cubies()
    with pytest.raises(InvariantViolation):
        move_engine.apply_move(Axis.Z, -1, 1)
    assert lattice.all_cubies() == before


def test_move_inverse(lattice, move_engine):
    m = Move(Axis.Z, 0, 1)
    assert m.inverse() == Move(Axis.Z, 0, -1)
    before = lattice.all_cubies()
    move_engine.apply_all([m, m.inverse()])
    assert lattice.all_cubies() == before


def test_apply_move_reports_commit(move_engine):
    assert move_engine.apply_move(Axis.X, 1, 1) is True
    assert move_engine.apply_move(Axis.X, 2, 1) is False
    assert move_engine.apply_move(Axis.X, 1, 0) is False
