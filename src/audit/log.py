"""
src/audit/log.py
Per-project plain-text hook log holding the most recent push only.
Exports: AuditLog, format_entry, resolve_log_path
"""

import logging
from datetime import datetime, timezone
from pathlib import Path
from typing import Any, Callable

from src.common.errors import AuditLogIOError, AuditLogNotFoundError
from src.project.base import read_accessor
from src.push.types import PushNotification
from src.shared import LOG_FILE_NAME

logger = logging.getLogger(__name__)

ENCODING = "utf-8"


def _utc_now_iso() -> str:
    return datetime.now(timezone.utc).isoformat()


def format_entry(notification: PushNotification, started_at: str) -> str:
    """Render the single log entry for `notification`."""
    lines = [
        f"Started on {started_at}",
        "GitBucket push webhook received from repository: "
        f"{notification.repository_url or 'unknown'}",
    ]
    if notification.pusher is not None:
        lines.append(f"Pushed by: {notification.pusher.name}")
    lines.append(f"Branch: {notification.ref}")
    last_commit = notification.last_commit
    if last_commit is not None:
        lines.append(f"Last commit: {last_commit.id}")
        lines.append(f"Commit message: {last_commit.message}")
    return "\n".join(lines) + "\n"


def resolve_log_path(project: Any, default_root: Path) -> Path:
    """
    Return the hook log location for `project`.

    Args:
        project: Project handle, possibly exposing `root_dir`.
        default_root: Host-wide root used when the project has none.
    Returns:
        `<root>/gitbucket-polling.log`.
    """
    if project is not None:
        try:
            root = read_accessor(project, "root_dir")
        except Exception:
            logger.debug("root_dir accessor failed for %r; using default root.", project, exc_info=True)
            root = None
        if isinstance(root, (str, Path)) and str(root):
            return Path(root) / LOG_FILE_NAME
    return Path(default_root) / LOG_FILE_NAME


class AuditLog:
    """Writes and reads the hook log. Each write replaces the previous entry."""

    def __init__(self, clock: Callable[[], str] = _utc_now_iso) -> None:
        self._clock = clock

    def append(self, log_path: Path, notification: PushNotification) -> None:
        """
        Replace the log at `log_path` with one entry describing `notification`.

        Args:
            log_path: Target file; its directory must already exist.
            notification: Push being processed.
        Raises:
            AuditLogIOError: When the file cannot be opened or written.
        """
        entry = format_entry(notification, self._clock())
        try:
            with open(log_path, "w", encoding=ENCODING) as handle:
                handle.write(entry)
        except OSError as exc:
            raise AuditLogIOError(f"Failed to write hook log {log_path}: {exc}") from exc

    def read(self, log_path: Path) -> str:
        """Return the full log contents; raise AuditLogNotFoundError if never written."""
        try:
            return Path(log_path).read_text(encoding=ENCODING)
        except FileNotFoundError:
            raise AuditLogNotFoundError(f"Hook log not found: {log_path}") from None
        except OSError as exc:
            raise AuditLogIOError(f"Failed to read hook log {log_path}: {exc}") from exc
