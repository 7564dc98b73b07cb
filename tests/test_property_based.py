from typing import List, Tuple

import pytest
try:
    from hypothesis import given, settings, strategies as st  # type: ignore
except ModuleNotFoundError:  # pragma: no cover - test infra
    pytest.skip("Hypothesis not installed", allow_module_level=True)

from tttbench.game_basics import Board, Piece, get_winner, new_board
from tttbench.solver import SCORE_MAX, SCORE_MIN, SearchConfig, SearchStats, min_max
from tttbench.terminal import winner_through

games = st.permutations(list(range(9)))


def _play(order: List[int], plies: int) -> Tuple[Board, int]:
    """Alternate X/O through `order`, stopping early at a completed line."""
    board = new_board()
    last = order[0]
    for n, mv in enumerate(order[:plies]):
        board[mv] = Piece.X if n % 2 == 0 else Piece.O
        last = mv
        if winner_through(board, mv) != Piece.EMPTY:
            break
    return board, last


@given(games, st.integers(min_value=1, max_value=9))
def test_detector_matches_full_scan(order: List[int], plies: int):
    board, last = _play(order, plies)
    assert winner_through(board, last) == get_winner(board)


@settings(max_examples=40, deadline=None)
@given(games, st.integers(min_value=1, max_value=9))
def test_pruning_never_changes_score(order: List[int], plies: int):
    board, last = _play(order, plies)
    depth = sum(1 for c in board if c != Piece.EMPTY) - 1
    before = list(board)
    scores = set()
    for ab in (True, False):
        for wl in (True, False):
            cfg = SearchConfig(ab_prune=ab, win_lose_prune=wl)
            scores.add(min_max(board, SCORE_MIN, SCORE_MAX, depth, last, SearchStats(), cfg))
            assert board == before
    assert len(scores) == 1
