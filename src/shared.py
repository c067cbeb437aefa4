"""
src/shared.py
Shared constants and env helpers for the GitBucket push dispatcher.
Exports: LOG_FILE_NAME, build_max_workers, build_root_dir, pass_through_default
"""

import os
from pathlib import Path

LOG_FILE_NAME = "gitbucket-polling.log"
DEFAULT_MAX_WORKERS = 4
DEFAULT_ROOT_DIR = "data"
_FALSY = {"0", "false", "no", "off"}


def build_max_workers() -> int:
    """Return configured dispatch worker count (positive integer)."""
    raw_value = os.getenv(
        "GITBUCKET_DISPATCH_MAX_WORKERS", str(DEFAULT_MAX_WORKERS)
    ).strip()
    try:
        workers = int(raw_value)
    except ValueError as exc:
        raise RuntimeError(
            "Invalid GITBUCKET_DISPATCH_MAX_WORKERS: expected a positive integer."
        ) from exc
    if workers <= 0:
        raise RuntimeError(
            "Invalid GITBUCKET_DISPATCH_MAX_WORKERS: expected a positive integer."
        )
    return workers


def build_root_dir() -> Path:
    """Return the host-wide root used when a project has no root directory."""
    value = os.getenv("GITBUCKET_DISPATCH_ROOT_DIR", "").strip()
    return Path(value or DEFAULT_ROOT_DIR)


def pass_through_default() -> bool:
    """Return whether new trigger bindings pin builds to the pushed commit."""
    value = os.getenv("GITBUCKET_PASS_THROUGH_GIT_COMMIT", "false").strip().lower()
    return value not in _FALSY
