"""
Terminal-line detection for the cell that was just played.

Only lines through the most recent move can newly become complete, so each
cell maps to the 2-4 lines that pass through it (corners 3, edges 2,
center 4). Each line is stored as the pair of *other* cells on it.
"""
from typing import Tuple

from .game_basics import WIN_PATTERNS, Board, Piece


def _lines_through(cell: int) -> Tuple[Tuple[int, int], ...]:
    pairs = []
    for line in WIN_PATTERNS:
        if cell in line:
            a, b = (i for i in line if i != cell)
            pairs.append((a, b))
    return tuple(pairs)


LINES_THROUGH: Tuple[Tuple[Tuple[int, int], ...], ...] = tuple(_lines_through(i) for i in range(9))


def winner_through(board: Board, move: int) -> Piece:
    """Return the piece at `move` if it completes a line through that cell, else EMPTY."""
    p = board[move]
    if p == Piece.EMPTY:
        return Piece.EMPTY
    for a, b in LINES_THROUGH[move]:
        if p == board[a] and p == board[b]:
            return p
    return Piece.EMPTY
