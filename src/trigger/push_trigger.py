"""
src/trigger/push_trigger.py
Push trigger bound to one project: turns GitBucket pushes into scheduled builds.
Exports: GitBucketPushTrigger
"""

import logging
from pathlib import Path
from typing import Any

from src.audit.log import AuditLog, resolve_log_path
from src.build.actions import build_actions
from src.build.cause import build_cause
from src.common.errors import AuditLogIOError, DispatchQueueClosedError, TriggerNotApplicableError
from src.dispatch.queue import SerialDispatchQueue
from src.project.base import read_accessor
from src.push.types import PushNotification
from src.scheduling.capabilities import quiet_period_of
from src.scheduling.negotiator import ScheduleOutcome, SchedulingNegotiator
from src.shared import build_root_dir
from src.trigger.applicability import ApplicabilityFilter
from src.trigger.hook_log import HookLogAction

logger = logging.getLogger(__name__)


def _project_name(project: Any) -> str:
    try:
        name = read_accessor(project, "name")
    except Exception:
        name = None
    return name if isinstance(name, str) and name else repr(project)


class GitBucketPushTrigger:
    """Schedules a build of the bound project for every GitBucket push it receives."""

    DISPLAY_NAME = "Build when a change is pushed to GitBucket"

    def __init__(
        self,
        pass_through_git_commit: bool = False,
        *,
        dispatch_queue: SerialDispatchQueue,
        negotiator: SchedulingNegotiator | None = None,
        audit_log: AuditLog | None = None,
        default_root_dir: Path | None = None,
    ) -> None:
        self.pass_through_git_commit = pass_through_git_commit
        self.project: Any | None = None
        self._queue = dispatch_queue
        self._negotiator = negotiator or SchedulingNegotiator()
        self._audit_log = audit_log or AuditLog()
        self._default_root_dir = default_root_dir if default_root_dir is not None else build_root_dir()

    @property
    def audit_log(self) -> AuditLog:
        return self._audit_log

    def start(self, project: Any, applicability: ApplicabilityFilter | None = None) -> None:
        """
        Bind the trigger to `project`.

        Args:
            project: Project to build on push.
            applicability: Optional filter checked once, here.
        Raises:
            TriggerNotApplicableError: When the filter rejects the project.
        """
        if applicability is not None and not applicability.is_applicable(project):
            raise TriggerNotApplicableError(
                f"GitBucket push trigger cannot be bound to {_project_name(project)}."
            )
        self.project = project

    def stop(self) -> None:
        self.project = None

    def log_file(self) -> Path:
        return resolve_log_path(self.project, self._default_root_dir)

    def project_actions(self) -> list[HookLogAction]:
        return [HookLogAction(self)]

    def _queue_key(self) -> str:
        """Serialization key: the canonical log path, so aliased roots share one writer."""
        log_file = self.log_file()
        try:
            return str(log_file.resolve())
        except (OSError, RuntimeError):
            return str(log_file.absolute())

    def on_push_notification(self, notification: PushNotification) -> None:
        """Queue processing of `notification` and return immediately."""
        try:
            self._queue.submit(lambda: self.process(notification), key=self._queue_key())
        except DispatchQueueClosedError:
            logger.warning("Dropping GitBucket push for %s: dispatch queue is shut down.", notification.ref)

    def process(self, notification: PushNotification) -> ScheduleOutcome | None:
        """
        Unit of work for one notification: log, build cause and actions, schedule.

        Returns:
            The scheduling outcome, or None when no project is bound anymore.
        """
        project = self.project
        if project is None:
            logger.warning("Cannot trigger build - project is not bound.")
            return None

        try:
            self._audit_log.append(self.log_file(), notification)
        except AuditLogIOError as exc:
            logger.warning("Failed to write webhook log: %s", exc)

        name = _project_name(project)
        logger.info("%s triggered.", name)
        cause = build_cause(notification)
        actions = build_actions(notification, cause, self.pass_through_git_commit)
        label = self._build_label(project)
        outcome = self._negotiator.schedule(project, quiet_period_of(project), cause, actions)

        if outcome.succeeded:
            logger.info("Triggered %s for %s", label, name)
        elif outcome.declined:
            logger.warning("Project %s could not be scheduled (may already be in queue).", name)
        else:
            logger.warning("Project %s was not scheduled: %s", name, outcome.error or "no scheduling capability")
        return outcome

    @staticmethod
    def _build_label(project: Any) -> str:
        try:
            number = read_accessor(project, "next_build_number")
        except Exception:
            number = None
        return f"#{number}" if number is not None else "a build"
