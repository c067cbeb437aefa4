"""
src/build/actions.py
Build-time markers attached to a scheduling attempt.
Exports: CauseAction, RevisionPin, BuildAction, build_actions
"""

from dataclasses import dataclass
from typing import Union

from src.build.cause import BuildCause
from src.push.types import PushNotification


@dataclass(frozen=True)
class CauseAction:
    """Carries the build cause to scheduling APIs that only accept actions."""

    cause: BuildCause


@dataclass(frozen=True)
class RevisionPin:
    """Pins the build to one commit instead of the branch head."""

    commit_id: str
    combine_commits: bool = False


BuildAction = Union[CauseAction, RevisionPin]


def build_actions(
    notification: PushNotification,
    cause: BuildCause,
    pass_through_commit: bool,
) -> tuple[BuildAction, ...]:
    """
    Build the ordered action sequence for one scheduling attempt.

    Args:
        notification: Push that triggered the build.
        cause: Attribution built for the same push.
        pass_through_commit: Pin the build to the last pushed commit.
    Returns:
        `(CauseAction,)` or `(CauseAction, RevisionPin)`.
    """
    actions: list[BuildAction] = [CauseAction(cause)]
    last_commit = notification.last_commit
    if pass_through_commit and last_commit is not None:
        actions.append(RevisionPin(commit_id=last_commit.id))
    return tuple(actions)
