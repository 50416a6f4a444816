"""JSONL metric rows for subtitle loads and UI errors."""

from __future__ import annotations

import json
import os
import socket
import time
from contextlib import contextmanager
from datetime import datetime, timezone
from pathlib import Path
from typing import Any, Generator, Optional

from .config import Settings, get_settings


def should_log_metrics(settings: Optional[Settings] = None) -> bool:
    """
    Metrics are written when PIPELINE_LOGGING says so, otherwise only in dev.

    Test runs stay quiet unless PIPELINE_LOGGING forces them on.
    """
    settings = settings or get_settings()
    if settings.metrics_enabled is not None:
        return settings.metrics_enabled
    if "PYTEST_CURRENT_TEST" in os.environ:
        return False
    return settings.is_dev


def _resolve_log_path() -> Path:
    return get_settings().resolved_metrics_path


def log_track_metrics(event: dict[str, Any]) -> None:
    """Append one metric row; never raises."""
    settings = get_settings()
    if not should_log_metrics(settings):
        return

    row = {
        "ts": datetime.now(timezone.utc).isoformat(),
        "host": socket.gethostname(),
        "app_env": settings.app_env.value,
        **event,
    }

    path = _resolve_log_path()
    try:
        path.parent.mkdir(parents=True, exist_ok=True)
        with path.open("a", encoding="utf-8") as fh:
            fh.write(json.dumps(row, ensure_ascii=False) + "\n")
    except OSError:
        # Playback must not fail because the metrics file is unwritable.
        return


@contextmanager
def measure_time(timings: dict[str, float], key: str) -> Generator[None, None, None]:
    """Store the wall time of the block under ``timings[key]``."""
    start = time.perf_counter()
    try:
        yield
    finally:
        timings[key] = time.perf_counter() - start
