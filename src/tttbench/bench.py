"""
Benchmark harness: solve the three distinct openings, serially and concurrently.

Each phase resets the shared NodeCounter, runs corner (0), edge (1) and
center (4), waits for every run to finish, then reads the counter once.
"""
from __future__ import annotations

import logging
import os
import time
from concurrent.futures import Future, ProcessPoolExecutor, ThreadPoolExecutor
from dataclasses import dataclass, field
from typing import Dict, List, Mapping, Optional, Sequence, Tuple

import numpy as np

from .runner import NodeCounter, RunResult, run_board
from .solver import DEFAULT_CONFIG, REFERENCE_NODES, SearchConfig

OPENING_MOVES: Tuple[int, ...] = (0, 1, 4)
DEFAULT_ITERATIONS = 1
EXECUTORS = ("thread", "process")
# emulators that only run a single thread
SINGLE_THREADED_OS = ("RVOS", "ARMOS")


@dataclass(frozen=True)
class BenchConfig:
    iterations: int = DEFAULT_ITERATIONS
    parallel: bool = True
    executor: str = "thread"
    repeat: int = 1
    search: SearchConfig = DEFAULT_CONFIG
    moves: Tuple[int, ...] = OPENING_MOVES


@dataclass
class PhaseResult:
    name: str
    elapsed_s: float
    nodes: int
    iterations: int
    scores: Dict[int, Optional[int]] = field(default_factory=dict)


def normalize_iterations(iterations: Optional[int]) -> int:
    if iterations is None or iterations <= 0:
        return DEFAULT_ITERATIONS
    return iterations


def parallel_supported(environ: Optional[Mapping[str, str]] = None) -> bool:
    env = os.environ if environ is None else environ
    return env.get("OS", "") not in SINGLE_THREADED_OS


def run_serial(
    iterations: int,
    counter: NodeCounter,
    config: SearchConfig = DEFAULT_CONFIG,
    moves: Sequence[int] = OPENING_MOVES,
) -> PhaseResult:
    counter.reset()
    start = time.perf_counter()
    results = [run_board(mv, iterations, counter, config) for mv in moves]
    elapsed = time.perf_counter() - start
    return PhaseResult(
        name="serial",
        elapsed_s=elapsed,
        nodes=counter.value,
        iterations=iterations,
        scores={r.move: r.score for r in results},
    )


def run_parallel(
    iterations: int,
    counter: NodeCounter,
    config: SearchConfig = DEFAULT_CONFIG,
    moves: Sequence[int] = OPENING_MOVES,
    executor: str = "thread",
) -> PhaseResult:
    """Run all but the last opening on a worker pool and the last one on this thread.

    Thread workers add to `counter` themselves. Process workers cannot share
    it, so their node totals are added here as each worker is joined.
    """
    if executor not in EXECUTORS:
        raise ValueError(f"Unknown executor: {executor}")
    if not moves:
        raise ValueError("At least one opening move is required")
    *pooled, local = moves
    pool_cls = ThreadPoolExecutor if executor == "thread" else ProcessPoolExecutor
    counter.reset()
    start = time.perf_counter()
    results: List[RunResult] = []
    with pool_cls(max_workers=max(1, len(pooled))) as pool:
        if executor == "thread":
            futures: List[Future] = [pool.submit(run_board, mv, iterations, counter, config) for mv in pooled]
        else:
            futures = [pool.submit(run_board, mv, iterations, None, config) for mv in pooled]
        results.append(run_board(local, iterations, counter, config))
        for fut in futures:
            res = fut.result()
            if executor == "process":
                counter.add(res.nodes)
            results.append(res)
    elapsed = time.perf_counter() - start
    return PhaseResult(
        name="parallel",
        elapsed_s=elapsed,
        nodes=counter.value,
        iterations=iterations,
        scores={r.move: r.score for r in sorted(results, key=lambda r: r.move)},
    )


def run_benchmark(cfg: BenchConfig, counter: Optional[NodeCounter] = None) -> List[PhaseResult]:
    """Parallel phase (when enabled) followed by the serial phase, `cfg.repeat` times."""
    counter = counter if counter is not None else NodeCounter()
    iterations = normalize_iterations(cfg.iterations)
    phases: List[PhaseResult] = []
    for rep in range(max(1, cfg.repeat)):
        if cfg.parallel:
            phase = run_parallel(iterations, counter, cfg.search, cfg.moves, cfg.executor)
            logging.debug("rep=%d parallel elapsed=%.6fs nodes=%d", rep, phase.elapsed_s, phase.nodes)
            phases.append(phase)
        phase = run_serial(iterations, counter, cfg.search, cfg.moves)
        logging.debug("rep=%d serial elapsed=%.6fs nodes=%d", rep, phase.elapsed_s, phase.nodes)
        phases.append(phase)
    return phases


def self_check(config: SearchConfig = DEFAULT_CONFIG) -> bool:
    """Developer check: one search from the corner must take REFERENCE_NODES calls."""
    counter = NodeCounter()
    run_board(0, 1, counter, config)
    calls = counter.value
    logging.info("calls to min_max: %d", calls)
    if config.ab_prune and config.win_lose_prune and calls != REFERENCE_NODES:
        logging.warning("unexpected # of calls to min_max: %d (expected %d)", calls, REFERENCE_NODES)
        return False
    return True


def summarize_timings(samples: Sequence[float]) -> Dict[str, float]:
    if not samples:
        return {"n": 0.0, "min": float("nan"), "mean": float("nan"),
                "p50": float("nan"), "p95": float("nan"), "max": float("nan")}
    arr = np.asarray(samples, dtype=float)
    return {
        "n": float(arr.size),
        "min": float(arr.min()),
        "mean": float(arr.mean()),
        "p50": float(np.percentile(arr, 50)),
        "p95": float(np.percentile(arr, 95)),
        "max": float(arr.max()),
    }


def phase_summaries(phases: Sequence[PhaseResult]) -> Dict[str, Dict[str, float]]:
    by_name: Dict[str, List[float]] = {}
    for ph in phases:
        by_name.setdefault(ph.name, []).append(ph.elapsed_s)
    return {name: summarize_timings(vals) for name, vals in by_name.items()}
