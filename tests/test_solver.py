from typing import List

import pytest

from tttbench.game_basics import Piece, deserialize_board, new_board
from tttbench.solver import (
    REFERENCE_NODES,
    SCORE_LOSE,
    SCORE_MAX,
    SCORE_MIN,
    SCORE_TIE,
    SCORE_WIN,
    SearchConfig,
    SearchStats,
    min_max,
    solve_opening,
)

ALL_CONFIGS = [
    SearchConfig(ab_prune=True, win_lose_prune=True),
    SearchConfig(ab_prune=False, win_lose_prune=True),
    SearchConfig(ab_prune=True, win_lose_prune=False),
    SearchConfig(ab_prune=False, win_lose_prune=False),
]


def _solve(move: int, config: SearchConfig) -> tuple:
    stats = SearchStats()
    score = solve_opening(new_board(move), move, stats, config)
    return score, stats.nodes


def test_score_scale_ordering():
    assert SCORE_MIN < SCORE_LOSE < SCORE_TIE < SCORE_WIN < SCORE_MAX


def test_reference_node_count_from_corner():
    score, nodes = _solve(0, SearchConfig())
    assert score == SCORE_TIE
    assert nodes == REFERENCE_NODES == 1903


@pytest.mark.parametrize("move", [0, 1, 4])
@pytest.mark.parametrize("config", ALL_CONFIGS)
def test_every_opening_is_a_tie(move: int, config: SearchConfig):
    score, _ = _solve(move, config)
    assert score == SCORE_TIE


@pytest.mark.parametrize("move", [0, 1, 4])
def test_pruning_only_changes_node_count(move: int):
    results = [_solve(move, cfg) for cfg in ALL_CONFIGS]
    assert {score for score, _ in results} == {SCORE_TIE}
    full, _, _, none = [nodes for _, nodes in results]
    assert full < none
    assert all(nodes <= none for _, nodes in results)


def test_center_opening_count_is_reproducible():
    first = _solve(4, SearchConfig())
    second = _solve(4, SearchConfig())
    assert first == second
    assert first[0] == SCORE_TIE


def test_root_call_is_counted():
    # X has just completed the top row at depth 4: terminal at the root
    b = deserialize_board("111220000")
    stats = SearchStats()
    assert min_max(b, SCORE_MIN, SCORE_MAX, 4, 2, stats) == SCORE_WIN
    assert stats.nodes == 1


def test_o_line_scores_lose():
    # O has just completed the middle row
    b = deserialize_board("110222100")
    stats = SearchStats()
    assert min_max(b, SCORE_MIN, SCORE_MAX, 5, 4, stats) == SCORE_LOSE
    assert stats.nodes == 1


def test_full_board_without_line_is_tie():
    b = deserialize_board("112221121")
    stats = SearchStats()
    assert min_max(b, SCORE_MIN, SCORE_MAX, 8, 8, stats) == SCORE_TIE


def test_x_to_move_takes_immediate_win():
    # depth 3 is odd: X moves next and can complete the top row at 2
    b = deserialize_board("110220000")
    for cfg in ALL_CONFIGS:
        assert min_max(b, SCORE_MIN, SCORE_MAX, 3, 4, SearchStats(), cfg) == SCORE_WIN


@pytest.mark.parametrize("move", [0, 1, 4])
@pytest.mark.parametrize("config", ALL_CONFIGS)
def test_board_restored_after_search(move: int, config: SearchConfig):
    b = new_board(move)
    before = list(b)
    solve_opening(b, move, SearchStats(), config)
    assert b == before


class _RecordingBoard(list):
    """Board that checks pieces alternate along the current search path."""

    def __init__(self, cells: List[Piece]):
        super().__init__(cells)
        self.path: List[Piece] = [p for p in cells if p != Piece.EMPTY]
        self.placements = 0

    def __setitem__(self, idx, value):
        if value == Piece.EMPTY:
            assert self[idx] == self.path[-1]
            self.path.pop()
        else:
            assert self[idx] == Piece.EMPTY
            assert value != self.path[-1]
            self.path.append(value)
            self.placements += 1
        super().__setitem__(idx, value)


@pytest.mark.parametrize("move", [0, 1, 4])
def test_turns_alternate_starting_with_o(move: int):
    b = _RecordingBoard(new_board(move))
    stats = SearchStats()
    solve_opening(b, move, stats)
    assert b.path == [Piece.X]
    # one placement per non-root call
    assert b.placements == stats.nodes - 1
