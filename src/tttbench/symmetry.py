"""
Board symmetries used to classify opening moves.
Notes:
- The square has 8 symmetries (rotations and reflections).
- Every first move is an image of the corner (0), edge (1) or center (4) cell,
  which is why the benchmark only searches those three openings.
- The benchmark itself never applies this reduction; it is reporting only.
"""
from typing import Callable, Dict, List, Tuple

from .game_basics import Board

ALL_SYMS = ['id', 'rot90', 'rot180', 'rot270', 'hflip', 'vflip', 'd1', 'd2']

# (row, col) of the source cell that lands on (r, c)
_SOURCES: Dict[str, Callable[[int, int], Tuple[int, int]]] = {
    'id': lambda r, c: (r, c),
    'rot90': lambda r, c: (2 - c, r),
    'rot180': lambda r, c: (2 - r, 2 - c),
    'rot270': lambda r, c: (c, 2 - r),
    'hflip': lambda r, c: (r, 2 - c),
    'vflip': lambda r, c: (2 - r, c),
    'd1': lambda r, c: (c, r),
    'd2': lambda r, c: (2 - c, 2 - r),
}


def _source_map(kind: str) -> List[int]:
    src = _SOURCES[kind]
    out = []
    for i in range(9):
        r, c = src(i // 3, i % 3)
        out.append(r * 3 + c)
    return out


SOURCE_MAPS = {k: _source_map(k) for k in ALL_SYMS}
# where each cell index ends up after the transform
SYMM_INDEX_MAPS = {k: [m.index(i) for i in range(9)] for k, m in SOURCE_MAPS.items()}


def transform_board(board: Board, kind: str) -> Board:
    if kind not in SOURCE_MAPS:
        raise ValueError(f"Unknown transformation: {kind}")
    return [board[i] for i in SOURCE_MAPS[kind]]


def apply_action_transform(action: int, kind: str) -> int:
    if kind not in SYMM_INDEX_MAPS:
        raise ValueError(f"Unknown transformation: {kind}")
    return SYMM_INDEX_MAPS[kind][action]


def cell_orbit(cell: int) -> Tuple[int, ...]:
    return tuple(sorted({apply_action_transform(cell, k) for k in ALL_SYMS}))


def canonical_cell(cell: int) -> int:
    """Smallest index among the symmetric images of `cell`."""
    return cell_orbit(cell)[0]


def opening_classes() -> Dict[int, Tuple[int, ...]]:
    classes: Dict[int, Tuple[int, ...]] = {}
    for cell in range(9):
        canon = canonical_cell(cell)
        classes.setdefault(canon, cell_orbit(canon))
    return classes
