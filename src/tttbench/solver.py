"""
Exact minimax solver with alpha-beta and win/lose cutoff pruning.

Scores are opaque ranks, compared by order only:
- SCORE_WIN > SCORE_TIE > SCORE_LOSE, from X's point of view.
- SCORE_MAX / SCORE_MIN seed the alpha-beta bounds and lie strictly outside
  [SCORE_LOSE, SCORE_WIN].

Turn is derived from depth alone: odd depth means X moves next (maximizing),
even depth means O moves next (minimizing). The opening X is already on the
board when the root call is made at depth 0.
"""
from __future__ import annotations

from dataclasses import dataclass

from .game_basics import Board, Piece
from .terminal import winner_through

SCORE_WIN = 6
SCORE_TIE = 5
SCORE_LOSE = 4
SCORE_MAX = 9
SCORE_MIN = 2

SCORE_NAMES = {SCORE_WIN: "win", SCORE_TIE: "tie", SCORE_LOSE: "lose"}

# earliest ply at which a line can be complete
MIN_TERMINAL_DEPTH = 4
FULL_BOARD_DEPTH = 8

# min_max calls for one search from X at cell 0 with both prunings on
REFERENCE_NODES = 1903


@dataclass(frozen=True)
class SearchConfig:
    ab_prune: bool = True
    win_lose_prune: bool = True


DEFAULT_CONFIG = SearchConfig()


@dataclass
class SearchStats:
    nodes: int = 0


def score_name(score: int) -> str:
    return SCORE_NAMES.get(score, str(score))


def min_max(
    board: Board,
    alpha: int,
    beta: int,
    depth: int,
    move: int,
    stats: SearchStats,
    config: SearchConfig = DEFAULT_CONFIG,
) -> int:
    """Score `board` after `move` was played at `depth`.

    The board is mutated in place while searching and restored before
    returning. Every call, including the root, adds one to `stats.nodes`.
    """
    stats.nodes += 1

    if depth >= MIN_TERMINAL_DEPTH:
        p = winner_through(board, move)
        if p != Piece.EMPTY:
            if p == Piece.X:
                return SCORE_WIN
            return SCORE_LOSE
        if depth == FULL_BOARD_DEPTH:
            return SCORE_TIE

    maximize = bool(depth & 1)
    if maximize:
        value = SCORE_MIN
        piece_move = Piece.X
    else:
        value = SCORE_MAX
        piece_move = Piece.O

    for x in range(9):
        if board[x] != Piece.EMPTY:
            continue
        board[x] = piece_move
        score = min_max(board, alpha, beta, depth + 1, x, stats, config)
        board[x] = Piece.EMPTY

        if maximize:
            if config.win_lose_prune and score == SCORE_WIN:
                return SCORE_WIN
            if score > value:
                value = score
                if config.ab_prune:
                    if value >= beta:
                        return value
                    if value > alpha:
                        alpha = value
        else:
            if config.win_lose_prune and score == SCORE_LOSE:
                return SCORE_LOSE
            if score < value:
                value = score
                if config.ab_prune:
                    if value <= alpha:
                        return value
                    if value < beta:
                        beta = value

    return value


def solve_opening(board: Board, move: int, stats: SearchStats, config: SearchConfig = DEFAULT_CONFIG) -> int:
    """Root call for a board holding only the opening X at `move`."""
    return min_max(board, SCORE_MIN, SCORE_MAX, 0, move, stats, config)
