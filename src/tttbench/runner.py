"""
Opening-move runner and the shared node counter.

Each run owns a private board; only the NodeCounter is shared between
concurrent runs, and a run adds to it once, after its searches finish.
"""
from __future__ import annotations

import logging
import threading
from dataclasses import dataclass
from typing import Optional

from .game_basics import new_board
from .solver import DEFAULT_CONFIG, SCORE_TIE, SearchConfig, SearchStats, score_name, solve_opening


class NodeCounter:
    """Process-wide total of min_max calls, safe to add to from many threads."""

    def __init__(self) -> None:
        self._lock = threading.Lock()
        self._value = 0

    def add(self, n: int) -> None:
        with self._lock:
            self._value += n

    def reset(self) -> None:
        with self._lock:
            self._value = 0

    @property
    def value(self) -> int:
        with self._lock:
            return self._value


@dataclass(frozen=True)
class RunResult:
    move: int
    iterations: int
    score: Optional[int]
    nodes: int


def run_board(
    move: int,
    iterations: int,
    counter: Optional[NodeCounter] = None,
    config: SearchConfig = DEFAULT_CONFIG,
) -> RunResult:
    if not 0 <= move <= 8:
        raise ValueError(f"Opening move out of range [0,8]: {move}")
    if iterations < 0:
        raise ValueError(f"Iterations must be >= 0: {iterations}")
    board = new_board(move)
    stats = SearchStats()
    score: Optional[int] = None
    for _ in range(iterations):
        score = solve_opening(board, move, stats, config)
        if score != SCORE_TIE:
            logging.debug("opening=%d score is %s", move, score_name(score))
    if counter is not None:
        counter.add(stats.nodes)
    return RunResult(move=move, iterations=iterations, score=score, nodes=stats.nodes)
