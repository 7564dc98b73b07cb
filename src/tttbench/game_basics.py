"""
Game basics: pieces, the 9-cell board, serialization and the full-board winner scan.
Notes:
- A board is a list of 9 cells in row-major order:
      0 1 2
      3 4 5
      6 7 8
- Cells hold Piece values; the integer values match the "012" string encoding.
- Whose turn it is is never stored on the board; the search derives it from depth.
"""
from enum import IntEnum
from typing import List, Optional


class Piece(IntEnum):
    EMPTY = 0
    X = 1
    O = 2

    def __str__(self) -> str:
        return " XO"[self]


Board = List[Piece]

WIN_PATTERNS = [
    (0, 1, 2), (3, 4, 5), (6, 7, 8),
    (0, 3, 6), (1, 4, 7), (2, 5, 8),
    (0, 4, 8), (2, 4, 6),
]


def new_board(opening: Optional[int] = None) -> Board:
    board = [Piece.EMPTY] * 9
    if opening is not None:
        if not 0 <= opening <= 8:
            raise ValueError(f"Cell index out of range [0,8]: {opening}")
        board[opening] = Piece.X
    return board


def serialize_board(board: Board) -> str:
    return ''.join(str(int(cell)) for cell in board)


def deserialize_board(board_str: str) -> Board:
    raw = board_str.strip()
    if len(raw) != 9 or any(c not in "012" for c in raw):
        raise ValueError("Invalid board string. Must be 9 chars of 0/1/2.")
    return [Piece(int(c)) for c in raw]


def legal_moves(board: Board) -> List[int]:
    return [i for i, v in enumerate(board) if v == Piece.EMPTY]


def get_winner(board: Board) -> Piece:
    """Scan all 8 lines and return the piece owning a complete one, else EMPTY."""
    for a, b, c in WIN_PATTERNS:
        v = board[a]
        if v != Piece.EMPTY and v == board[b] and v == board[c]:
            return v
    return Piece.EMPTY


def format_board(board: Board) -> str:
    rows = []
    for r in range(3):
        rows.append("|".join(str(board[r * 3 + c]) for c in range(3)))
    return "\n-+-+-\n".join(rows)
