"""tttbench package.

Exact minimax solver for tic-tac-toe and a serial/parallel benchmark harness
built around it.

Convenience imports are exposed for common workflows.
"""

from .bench import BenchConfig, run_benchmark, run_parallel, run_serial
from .game_basics import Piece, new_board
from .runner import NodeCounter, run_board
from .solver import SCORE_TIE, SearchConfig, SearchStats, min_max

__all__ = [
    "Piece",
    "new_board",
    "min_max",
    "SearchConfig",
    "SearchStats",
    "SCORE_TIE",
    "NodeCounter",
    "run_board",
    "BenchConfig",
    "run_benchmark",
    "run_parallel",
    "run_serial",
]
