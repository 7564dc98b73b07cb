import pytest

from tttbench.bench import OPENING_MOVES
from tttbench.game_basics import deserialize_board, serialize_board
from tttbench.symmetry import (
    ALL_SYMS,
    apply_action_transform,
    canonical_cell,
    opening_classes,
    transform_board,
)


def test_rot90_matches_hand_written_image():
    b = deserialize_board("120000000")
    # X in the top-left corner moves to the top-right after a quarter turn
    assert serialize_board(transform_board(b, 'rot90')) == "001002000"


def test_action_transform_round_trip():
    inverse = {
        'id': 'id',
        'rot90': 'rot270',
        'rot180': 'rot180',
        'rot270': 'rot90',
        'hflip': 'hflip',
        'vflip': 'vflip',
        'd1': 'd1',
        'd2': 'd2',
    }
    for k, inv in inverse.items():
        for i in range(9):
            assert apply_action_transform(apply_action_transform(i, k), inv) == i


def test_action_transform_follows_board():
    for k in ALL_SYMS:
        for i in range(9):
            b = [0] * 9
            b[i] = 1
            assert transform_board(b, k).index(1) == apply_action_transform(i, k)


def test_unknown_transform_raises():
    with pytest.raises(ValueError):
        transform_board([0] * 9, 'rot45')
    with pytest.raises(ValueError):
        apply_action_transform(0, 'rot45')


def test_three_openings_cover_every_first_move():
    classes = opening_classes()
    assert tuple(classes) == OPENING_MOVES
    covered = sorted(c for orbit in classes.values() for c in orbit)
    assert covered == list(range(9))
    assert [canonical_cell(i) for i in range(9)] == [0, 1, 0, 1, 4, 1, 0, 1, 0]


def test_opening_classes_returns_a_fresh_mapping():
    classes = opening_classes()
    classes[0] = (99,)
    assert opening_classes()[0] == (0, 2, 6, 8)
