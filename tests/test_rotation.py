import math

import pytest
from pyquaternion import Quaternion

from cubesim.rotation import (
    IDENTITY,
    ORIENTATIONS,
    Axis,
    apply_orientation,
    is_cube_symmetry,
    quarter_turn,
    rotate,
    snap_orientation,
    snap_position,
)


@pytest.mark.parametrize(
    "axis, position, expected",
    [
        (Axis.X, (0, 1, 0), (0, 0, 1)),
        (Axis.Y, (0, 0, 1), (1, 0, 0)),
        (Axis.Z, (1, 0, 0), (0, 1, 0)),
        (Axis.Z, (1, 1, 1), (-1, 1, 1)),
    ],
)
def test_positive_turn_follows_right_hand_rule(axis, position, expected):
    new_position, _ = rotate(axis, 1, position, IDENTITY)
    assert new_position == expected


def test_negative_turn_undoes_positive_turn():
    p, o = rotate(Axis.Y, 1, (1, -1, 0), IDENTITY)
    p, o = rotate(Axis.Y, -1, p, o)
    assert p == (1, -1, 0)
    assert o == IDENTITY


def test_positions_are_integers():
    p, _ = rotate(Axis.X, 1, (1, 1, 1), IDENTITY)
    assert all(type(c) is int for c in p)


def test_snap_position_removes_drift():
    assert snap_position([0.9999999, -1e-12, -1.0000001]) == (1, 0, -1)


def test_there_are_24_orientations():
    assert len(ORIENTATIONS) == 24
    assert all(is_cube_symmetry(q) for q in ORIENTATIONS)


def test_identity_is_canonical():
    assert snap_orientation(-IDENTITY) == IDENTITY
    assert snap_orientation(Quaternion(axis=[0, 0, 1], angle=2 * math.pi)) == IDENTITY


def test_four_quarter_turns_restore_identity_exactly():
    p, o = (1, 0, -1), IDENTITY
    for _ in range(4):
        p, o = rotate(Axis.Z, 1, p, o)
    assert p == (1, 0, -1)
    assert o is IDENTITY


def test_orientation_is_composed_in_world_frame():
    _, o = rotate(Axis.X, 1, (0, 0, 0), IDENTITY)
    _, o = rotate(Axis.Y, 1, (0, 0, 0), o)
    # x turn takes +y to +z, then the y turn takes +z to +x
    assert apply_orientation(o, (0, 1, 0)) == (1, 0, 0)


def test_rotated_basis_stays_axis_aligned():
    o = IDENTITY
    for axis in [Axis.X, Axis.Y, Axis.X, Axis.Z, Axis.Z, Axis.Y]:
        _, o = rotate(axis, 1, (0, 0, 0), o)
    for v in [(1, 0, 0), (0, 1, 0), (0, 0, 1)]:
        image = apply_orientation(o, v)
        assert sorted(abs(c) for c in image) == [0, 0, 1]


def test_non_symmetry_is_rejected():
    q = Quaternion(axis=[1, 1, 0], angle=0.3)
    assert not is_cube_symmetry(q)
    with pytest.raises(ValueError):
        snap_orientation(q)


def test_quarter_turn_direction():
    q = quarter_turn(Axis.X, -1)
    assert snap_position(q.rotate([0.0, 1.0, 0.0])) == (0, 0, -1)


@pytest.mark.parametrize(
    "value, expected",
    [
        (Axis.Y, Axis.Y),
        ("x", Axis.X),
        ("Z", Axis.Z),
        (1, Axis.Y),
        ("w", None),
        (3, None),
        (-1, None),
        (True, None),
        (None, None),
    ],
)
def test_axis_parse(value, expected):
    assert Axis.parse(value) == expected
