"""Path helpers for benchmark result locations and run metadata.

Environment-first, with fallbacks that still work when installed as a
package or executed from arbitrary CWDs.
"""

from __future__ import annotations

import os
import subprocess
from pathlib import Path


def _find_git_root(start: Path) -> Path | None:
    cur = start
    for _ in range(5):
        if (cur / ".git").exists():
            return cur
        if cur.parent == cur:
            break
        cur = cur.parent
    return None


def repo_root() -> Path:
    """Best-effort repository root.

    Order: env var TTTBENCH_REPO_ROOT -> nearest parent containing .git -> CWD.
    """
    env = os.getenv("TTTBENCH_REPO_ROOT")
    if env:
        return Path(env)
    git_root = _find_git_root(Path(__file__).resolve())
    if git_root is not None:
        return git_root
    return Path.cwd()


def results_dir() -> Path:
    p = os.getenv("TTTBENCH_RESULTS")
    return Path(p) if p else repo_root() / "results"


def get_git_commit() -> str | None:
    """Return the current git commit hash, or None outside a git checkout."""
    root = repo_root()
    try:
        out = subprocess.check_output(
            ["git", "-C", str(root), "rev-parse", "HEAD"],
            stderr=subprocess.DEVNULL,
            text=True,
            timeout=2.0,
        )
        return out.strip() or None
    except (OSError, subprocess.SubprocessError):
        head = root / ".git" / "HEAD"
        try:
            txt = head.read_text().strip()
        except OSError:
            return None
        if txt.startswith("ref:"):
            ref_file = root / ".git" / txt.split()[1]
            if ref_file.exists():
                return ref_file.read_text().strip()
            return None
        return txt or None
