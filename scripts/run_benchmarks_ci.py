#!/usr/bin/env python3
from __future__ import annotations

import hashlib
import json
import os
import subprocess
import sys
from pathlib import Path

from tttbench.paths import get_git_commit, results_dir


def file_sha256(p: Path) -> str:
    h = hashlib.sha256()
    with p.open("rb") as f:
        for chunk in iter(lambda: f.read(8192), b""):
            h.update(chunk)
    return h.hexdigest()


def main() -> int:
    os.environ.setdefault("PYTHONHASHSEED", "0")

    repo = Path(__file__).resolve().parents[1]
    commit = get_git_commit() or "unversioned"
    benches_dir = results_dir() / "ci" / commit
    benches_dir.mkdir(parents=True, exist_ok=True)

    raw_path = benches_dir / "pytest-benchmark.json"
    cmd = [
        sys.executable,
        "-m",
        "pytest",
        "-q",
        "tests/test_benchmarks.py",
        "--benchmark-min-time=0.1",
        "--benchmark-warmup=on",
        "--benchmark-warmup-iterations=10",
        "--benchmark-json",
        str(raw_path),
    ]
    print("Running:", " ".join(cmd))
    subprocess.check_call(cmd, cwd=repo)

    manifest = {
        "commit": commit,
        "artifacts": {
            "pytest_benchmark_json": str(raw_path),
        },
        "pyproject_sha256": file_sha256(repo / "pyproject.toml"),
    }
    (benches_dir / "manifest.json").write_text(json.dumps(manifest, indent=2))
    print("Wrote benchmark artifacts to", benches_dir)
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
