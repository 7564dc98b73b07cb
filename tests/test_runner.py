import threading

import pytest

from tttbench.runner import NodeCounter, run_board
from tttbench.solver import REFERENCE_NODES, SCORE_TIE, SearchConfig


def test_run_board_accumulates_per_iteration():
    one = run_board(0, 1)
    three = run_board(0, 3)
    assert one.score == three.score == SCORE_TIE
    assert one.nodes == REFERENCE_NODES
    assert three.nodes == 3 * REFERENCE_NODES


def test_run_board_adds_once_to_shared_counter():
    counter = NodeCounter()
    res = run_board(1, 2, counter)
    assert counter.value == res.nodes
    run_board(1, 2, counter)
    assert counter.value == 2 * res.nodes


def test_zero_iterations_runs_nothing():
    counter = NodeCounter()
    res = run_board(4, 0, counter)
    assert res.score is None
    assert res.nodes == 0
    assert counter.value == 0


@pytest.mark.parametrize("move", [-1, 9])
def test_rejects_bad_opening(move: int):
    with pytest.raises(ValueError):
        run_board(move, 1)


def test_pruning_flags_reach_the_search():
    pruned = run_board(0, 1)
    unpruned = run_board(0, 1, config=SearchConfig(ab_prune=False, win_lose_prune=False))
    assert pruned.score == unpruned.score == SCORE_TIE
    assert unpruned.nodes > pruned.nodes


def test_counter_has_no_lost_updates():
    counter = NodeCounter()

    def work():
        for _ in range(10_000):
            counter.add(1)

    threads = [threading.Thread(target=work) for _ in range(8)]
    for t in threads:
        t.start()
    for t in threads:
        t.join()
    assert counter.value == 80_000
    counter.reset()
    assert counter.value == 0
