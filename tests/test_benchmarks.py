import pytest

pytest.importorskip("pytest_benchmark")

from tttbench.bench import run_parallel, run_serial
from tttbench.runner import NodeCounter, run_board
from tttbench.solver import REFERENCE_NODES, SCORE_TIE


def test_benchmark_corner_search(benchmark):
    res = benchmark(run_board, 0, 1)
    assert res.score == SCORE_TIE
    assert res.nodes == REFERENCE_NODES


def test_benchmark_serial_phase(benchmark):
    counter = NodeCounter()
    phase = benchmark(run_serial, 1, counter)
    assert set(phase.scores.values()) == {SCORE_TIE}


def test_benchmark_parallel_phase(benchmark):
    counter = NodeCounter()
    phase = benchmark(run_parallel, 1, counter)
    assert phase.nodes == sum(run_board(mv, 1).nodes for mv in (0, 1, 4))
