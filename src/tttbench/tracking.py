"""
Experiment tracking helpers (optional MLflow backend).

MLflow is only imported when tracking is requested, so it stays an optional
extra (`pip install tttbench[tracking]`).
"""
from __future__ import annotations

import logging
from contextlib import contextmanager
from pathlib import Path
from typing import Dict, Iterator, Optional


@contextmanager
def maybe_mlflow_run(enabled: bool, run_name: str, log_dir: Optional[Path] = None) -> Iterator[bool]:
    """Yield True inside an active MLflow run, False when tracking is off or unavailable."""
    if not enabled:
        yield False
        return
    try:
        import mlflow  # type: ignore
    except ImportError:
        logging.warning("mlflow is not installed; continuing without tracking")
        yield False
        return
    if log_dir is not None:
        mlflow.set_tracking_uri((log_dir / "mlruns").resolve().as_uri())
    with mlflow.start_run(run_name=run_name):
        yield True


def log_params(params: Dict[str, object]) -> None:
    import mlflow  # type: ignore

    mlflow.log_params(params)


def log_metrics(metrics: Dict[str, float]) -> None:
    import mlflow  # type: ignore

    mlflow.log_metrics(metrics)


def log_artifact(path: Path, artifact_path: Optional[str] = None) -> None:
    import mlflow  # type: ignore

    mlflow.log_artifact(str(path), artifact_path=artifact_path)
