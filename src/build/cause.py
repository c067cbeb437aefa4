"""
src/build/cause.py
Build attribution for GitBucket-triggered builds.
Exports: BuildCause, build_cause
"""

from dataclasses import dataclass

from src.push.types import PushNotification

_DESCRIPTION = "Started by GitBucket push"


@dataclass(frozen=True)
class BuildCause:
    """Who or what initiated a build. Equal causes are merged by the host."""

    pushed_by: str | None = None

    @property
    def short_description(self) -> str:
        if self.pushed_by is None:
            return _DESCRIPTION
        return f"{_DESCRIPTION} by {self.pushed_by}"

    def __str__(self) -> str:
        return self.short_description


def build_cause(notification: PushNotification) -> BuildCause:
    """Return the cause for a notification, attributed to the pusher when known."""
    return BuildCause(pushed_by=notification.pusher_name)
