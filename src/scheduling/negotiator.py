"""
src/scheduling/negotiator.py
Schedules a build against a project of unknown shape.
Exports: ScheduleMechanism, ScheduleOutcome, SchedulingNegotiator
"""

import enum
import logging
from dataclasses import dataclass
from typing import Any, Sequence

from src.build.cause import BuildCause
from src.scheduling.capabilities import (
    CAPABILITY_TIERS,
    QUEUE_FALLBACK_RANK,
    BuildQueue,
    adapt,
)

logger = logging.getLogger(__name__)


class ScheduleMechanism(enum.Enum):
    DIRECT_BY_PROJECT = "direct_by_project"
    QUEUE_FALLBACK = "queue_fallback"
    NONE = "none"


@dataclass(frozen=True)
class ScheduleOutcome:
    """Result of one scheduling attempt. Not persisted."""

    attempted: bool
    succeeded: bool
    mechanism: ScheduleMechanism
    tier: int | None = None
    error: str | None = None

    @property
    def declined(self) -> bool:
        """True when the host refused the build without raising (e.g. already queued)."""
        return self.attempted and not self.succeeded and self.error is None


NOT_ATTEMPTED = ScheduleOutcome(attempted=False, succeeded=False, mechanism=ScheduleMechanism.NONE)


class SchedulingNegotiator:
    """
    Picks the richest scheduling operation a project supports and invokes it.

    Tiers are probed structurally in fixed order; the first one present wins
    and later tiers are never touched. When no tier is present the injected
    host queue is used as a fallback.
    """

    def __init__(self, build_queue: BuildQueue | None = None) -> None:
        self._build_queue = build_queue

    def schedule(
        self,
        project: Any,
        quiet_period: int,
        cause: BuildCause,
        actions: Sequence[Any],
    ) -> ScheduleOutcome:
        """
        Schedule one build for `project`.

        Args:
            project: Project handle; may be of any variant.
            quiet_period: Delay in seconds before the build starts.
            cause: Attribution passed to tiers that accept it.
            actions: Ordered build actions, cause action first.
        Returns:
            ScheduleOutcome describing whether and how the build was queued.
        """
        target = adapt(project)
        for tier in CAPABILITY_TIERS:
            operation = tier.probe(target)
            if operation is None:
                continue
            try:
                result = operation(*tier.arguments(quiet_period, cause, actions))
            except Exception as exc:
                logger.warning(
                    "Failed to schedule build for %r via %s: %s", project, tier.method_name, exc
                )
                return ScheduleOutcome(
                    attempted=True,
                    succeeded=False,
                    mechanism=ScheduleMechanism.DIRECT_BY_PROJECT,
                    tier=tier.rank,
                    error=str(exc) or type(exc).__name__,
                )
            succeeded = tier.succeeded(result)
            if succeeded:
                logger.debug("Scheduled %r using %s.", project, tier.method_name)
            return ScheduleOutcome(
                attempted=True,
                succeeded=succeeded,
                mechanism=ScheduleMechanism.DIRECT_BY_PROJECT,
                tier=tier.rank,
            )
        return self._schedule_via_queue(project, quiet_period, actions)

    def _schedule_via_queue(
        self, project: Any, quiet_period: int, actions: Sequence[Any]
    ) -> ScheduleOutcome:
        if self._build_queue is None:
            logger.warning("No scheduling capability found for %r and no build queue configured.", project)
            return NOT_ATTEMPTED
        try:
            item = self._build_queue.schedule_via_queue(project, quiet_period, list(actions))
        except Exception as exc:
            logger.warning("Failed to schedule build for %r via build queue: %s", project, exc)
            return ScheduleOutcome(
                attempted=True,
                succeeded=False,
                mechanism=ScheduleMechanism.QUEUE_FALLBACK,
                tier=QUEUE_FALLBACK_RANK,
                error=str(exc) or type(exc).__name__,
            )
        if item is not None:
            logger.debug("Scheduled %r using the build queue.", project)
        return ScheduleOutcome(
            attempted=True,
            succeeded=item is not None,
            mechanism=ScheduleMechanism.QUEUE_FALLBACK,
            tier=QUEUE_FALLBACK_RANK,
        )
