#!/usr/bin/env python3
from __future__ import annotations

import argparse
import json
import math
import statistics as stats
from dataclasses import asdict, dataclass
from pathlib import Path
from typing import Dict, List, Tuple

from tttbench.bench import BenchConfig, parallel_supported, run_benchmark
from tttbench.paths import get_git_commit, results_dir
from tttbench.tracking import log_artifact, log_metrics, log_params, maybe_mlflow_run


def ci95(values: List[float]) -> Tuple[float, float]:
    if not values:
        return (float("nan"), float("nan"))
    m = stats.fmean(values)
    s = stats.pstdev(values) if len(values) > 1 else 0.0
    z = 1.96
    half = z * (s / math.sqrt(len(values)))
    return m, half


@dataclass
class Config:
    runs: int = 10
    iterations: int = 100
    executor: str = "thread"
    tracking: str = "none"  # or "mlflow"
    log_dir: Path = Path("runs")


def main(argv: List[str] | None = None) -> int:
    ap = argparse.ArgumentParser(description="Repeated serial/parallel benchmark with 95% CIs")
    ap.add_argument("--runs", type=int, default=Config.runs, help="independent benchmark runs")
    ap.add_argument("--iterations", type=int, default=Config.iterations)
    ap.add_argument("--executor", choices=["thread", "process"], default=Config.executor)
    ap.add_argument("--tracking", choices=["none", "mlflow"], default=Config.tracking)
    ns = ap.parse_args(argv)
    cfg = Config(runs=ns.runs, iterations=ns.iterations, executor=ns.executor, tracking=ns.tracking)
    if cfg.runs <= 0:
        print("--runs must be > 0")
        return 2
    parallel = parallel_supported()
    if not parallel:
        print("single-threaded environment detected; skipping parallel phase")

    with maybe_mlflow_run(cfg.tracking == "mlflow", run_name="benchmarks", log_dir=cfg.log_dir) as tracked:
        if tracked:
            log_params({"runs": cfg.runs, "iterations": cfg.iterations,
                        "executor": cfg.executor, "parallel": parallel})
        times: Dict[str, List[float]] = {}
        nodes: Dict[str, int] = {}
        for _ in range(cfg.runs):
            bench_cfg = BenchConfig(iterations=cfg.iterations, executor=cfg.executor, parallel=parallel)
            for phase in run_benchmark(bench_cfg):
                times.setdefault(phase.name, []).append(phase.elapsed_s)
                nodes[phase.name] = phase.nodes
        if "parallel" in nodes and nodes["parallel"] != nodes["serial"]:
            print(f"node totals differ: parallel={nodes['parallel']} serial={nodes['serial']}")
            return 1
        metrics: Dict[str, float] = {}
        for name, values in times.items():
            m, h = ci95(values)
            metrics[f"{name}_mean_s"] = m
            metrics[f"{name}_ci95_half_s"] = h
            print(f"{name + ':':<9} mean={m:.4f}s ± {h:.4f}s (95% CI)")
        if "parallel_mean_s" in metrics:
            m_par = metrics["parallel_mean_s"]
            metrics["speedup"] = metrics["serial_mean_s"] / m_par if m_par > 0 else float("nan")
        print(f"moves:    {nodes['serial']} per phase, iterations={cfg.iterations}")
        out = results_dir() / (get_git_commit() or "unversioned") / "benchmarks.json"
        out.parent.mkdir(parents=True, exist_ok=True)
        out.write_text(json.dumps({
            "config": {k: str(v) for k, v in asdict(cfg).items()},
            "parallel": parallel,
            "metrics": metrics,
            "times": times,
            "nodes": nodes,
        }, indent=2))
        print("Wrote", out)
        if tracked:
            log_metrics(metrics)
            log_artifact(out)
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
