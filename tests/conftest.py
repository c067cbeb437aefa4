"""Shared pytest fixtures for the GitBucket push dispatch test suite."""

import pytest


@pytest.fixture(autouse=True)
def _clear_dispatch_env(monkeypatch):
    """Keep tests deterministic regardless of developer shell env vars."""
    for name in (
        "GITBUCKET_DISPATCH_MAX_WORKERS",
        "GITBUCKET_DISPATCH_ROOT_DIR",
        "GITBUCKET_PIPELINE_VARIANT",
        "GITBUCKET_PASS_THROUGH_GIT_COMMIT",
    ):
        monkeypatch.delenv(name, raising=False)


@pytest.fixture
def push():
    """Push by bob to main with one commit."""
    from src.push.types import Commit, PushNotification, Pusher, Repository

    return PushNotification(
        ref="refs/heads/main",
        repository=Repository(url="https://git.example/x"),
        pusher=Pusher(name="bob"),
        commits=(Commit(id="deadbeef", message="fix bug"),),
    )
