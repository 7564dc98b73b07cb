from __future__ import annotations

import argparse
import json
import logging
from dataclasses import asdict
from pathlib import Path
from typing import List

from .bench import (
    EXECUTORS,
    BenchConfig,
    PhaseResult,
    normalize_iterations,
    parallel_supported,
    phase_summaries,
    run_benchmark,
    self_check,
)
from .game_basics import format_board, new_board
from .paths import get_git_commit
from .runner import run_board
from .solver import SearchConfig, score_name
from .symmetry import opening_classes
from .tracking import log_artifact, log_metrics, log_params, maybe_mlflow_run


def _add_pruning_flags(p: argparse.ArgumentParser) -> None:
    p.add_argument("--no-ab-prune", action="store_true", help="Disable alpha-beta pruning")
    p.add_argument(
        "--no-win-lose-prune", action="store_true", help="Disable the immediate win/lose cutoff"
    )


def build_parser() -> argparse.ArgumentParser:
    p = argparse.ArgumentParser(prog="tttbench", description="Tic-tac-toe minimax benchmark")
    sub = p.add_subparsers(dest="cmd")
    p.add_argument("--verbose", "-v", action="store_true", help="Enable verbose logging")
    p.add_argument("--version", action="store_true", help="Print version and exit")
    p.add_argument(
        "--info",
        action="store_true",
        help="Print environment and dependency info and exit",
    )

    p_bench = sub.add_parser("bench", help="Solve the three distinct openings, parallel then serial")
    p_bench.add_argument(
        "iterations", type=int, nargs="?", default=None,
        help="Searches per opening (default: 1; non-positive means 1)",
    )
    p_bench.add_argument(
        "--serial-only", action="store_true", help="Skip the parallel phase"
    )
    p_bench.add_argument(
        "--executor",
        choices=list(EXECUTORS),
        default="thread",
        help="Worker pool for the parallel phase (default: thread)",
    )
    p_bench.add_argument("--repeat", type=int, default=1, help="Repeat both phases N times")
    _add_pruning_flags(p_bench)
    p_bench.add_argument(
        "--tracking",
        choices=["none", "mlflow"],
        default="none",
        help="Experiment tracking backend",
    )
    p_bench.add_argument(
        "--log-dir",
        type=Path,
        default=Path("runs"),
        help="Directory for tracking logs (for mlflow local backend)",
    )
    p_bench.add_argument("--out", type=Path, default=None, help="Write a JSON report to this file")

    p_sol = sub.add_parser("solve", help="Search from a single opening cell")
    p_sol.add_argument("--opening", type=int, required=True, help="Cell 0-8 holding the opening X")
    p_sol.add_argument("--iterations", type=int, default=1, help="Searches to run (default: 1)")
    _add_pruning_flags(p_sol)

    sub.add_parser("selfcheck", help="Verify the reference min_max call count from the corner")
    sub.add_parser("openings", help="Show the symmetry class of each opening cell")

    return p


def _print_info() -> None:
    import importlib.util
    import platform
    import sys

    print(f"python={sys.version.split()[0]} platform={platform.platform()}")
    print(f"parallel_supported={parallel_supported()}")
    for pkg in ["numpy", "mlflow"]:
        spec = importlib.util.find_spec(pkg)
        if spec is None:
            print(f"{pkg}=<not installed>")
        else:
            mod = __import__(pkg)
            ver = getattr(mod, "__version__", "?")
            print(f"{pkg}={ver}")


def _search_config(ns: argparse.Namespace) -> SearchConfig:
    return SearchConfig(ab_prune=not ns.no_ab_prune, win_lose_prune=not ns.no_win_lose_prune)


def _report(phases: List[PhaseResult]) -> None:
    for ph in phases:
        logging.info("%-8s runtime: %.6f s", ph.name, ph.elapsed_s)
        logging.info("moves:            %d", ph.nodes)
        if ph.name == "serial":
            logging.info("iterations:       %d", ph.iterations)


def _write_report(path: Path, cfg: BenchConfig, phases: List[PhaseResult]) -> None:
    import platform
    import sys

    report = {
        "commit": get_git_commit(),
        "python": sys.version.split()[0],
        "platform": platform.platform(),
        "config": asdict(cfg),
        "phases": [asdict(ph) for ph in phases],
        "summary": phase_summaries(phases),
    }
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(json.dumps(report, indent=2))


def _cmd_bench(ns: argparse.Namespace) -> int:
    if ns.repeat <= 0:
        logging.error("--repeat must be > 0")
        return 2
    parallel = not ns.serial_only
    if parallel and not parallel_supported():
        logging.info("single-threaded environment detected; skipping parallel phase")
        parallel = False
    cfg = BenchConfig(
        iterations=normalize_iterations(ns.iterations),
        parallel=parallel,
        executor=ns.executor,
        repeat=ns.repeat,
        search=_search_config(ns),
    )
    with maybe_mlflow_run(ns.tracking == "mlflow", run_name="bench", log_dir=ns.log_dir) as tracked:
        if tracked:
            log_params({
                "iterations": cfg.iterations,
                "parallel": cfg.parallel,
                "executor": cfg.executor,
                "repeat": cfg.repeat,
                "ab_prune": cfg.search.ab_prune,
                "win_lose_prune": cfg.search.win_lose_prune,
            })
        phases = run_benchmark(cfg)
        _report(phases)
        summary = phase_summaries(phases)
        if cfg.repeat > 1:
            for name, s in summary.items():
                logging.info(
                    "dist %s min=%.6f p50=%.6f p95=%.6f max=%.6f mean=%.6f",
                    name, s["min"], s["p50"], s["p95"], s["max"], s["mean"],
                )
        if tracked:
            metrics = {f"{name}_{k}_s": v for name, s in summary.items() for k, v in s.items() if k != "n"}
            metrics.update({f"{ph.name}_nodes": float(ph.nodes) for ph in phases})
            log_metrics(metrics)
        if ns.out is not None:
            _write_report(ns.out, cfg, phases)
            logging.info("Wrote report to: %s", ns.out)
            if tracked:
                log_artifact(ns.out)
    return 0


def _cmd_solve(ns: argparse.Namespace) -> int:
    if ns.iterations <= 0:
        logging.error("--iterations must be > 0")
        return 2
    res = run_board(ns.opening, ns.iterations, config=_search_config(ns))
    logging.debug("start board:\n%s", format_board(new_board(ns.opening)))
    logging.info(
        "opening=%d score=%s nodes=%d iterations=%d",
        res.move,
        score_name(res.score),
        res.nodes,
        res.iterations,
    )
    return 0


def main(argv: list[str] | None = None) -> int:
    parser = build_parser()
    ns = parser.parse_args(argv)
    logging.basicConfig(level=logging.DEBUG if getattr(ns, "verbose", False) else logging.INFO,
                        format="[%(levelname)s] %(message)s")

    if getattr(ns, "version", False):
        try:
            from importlib.metadata import PackageNotFoundError, version as _ver

            print(_ver("tttbench"))
        except PackageNotFoundError:
            print("unknown")
        return 0
    if getattr(ns, "info", False):
        _print_info()
        return 0

    try:
        if ns.cmd == "bench":
            return _cmd_bench(ns)
        if ns.cmd == "solve":
            return _cmd_solve(ns)
    except ValueError as exc:
        logging.error("%s", exc)
        return 2

    if ns.cmd == "selfcheck":
        return 0 if self_check() else 1

    if ns.cmd == "openings":
        for canon, orbit in opening_classes().items():
            logging.info("opening=%d orbit=%s", canon, list(orbit))
        return 0

    parser.print_help()
    return 0


if __name__ == "__main__":  # pragma: no cover
    raise SystemExit(main())
