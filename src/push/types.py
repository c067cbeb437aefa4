"""Dataclasses describing an inbound GitBucket push notification."""

from dataclasses import dataclass


@dataclass(frozen=True)
class Repository:
    """Repository the push was made to."""

    url: str
    name: str | None = None


@dataclass(frozen=True)
class Pusher:
    """Identity that performed the push."""

    name: str
    email: str | None = None


@dataclass(frozen=True)
class Commit:
    """One pushed commit."""

    id: str
    message: str | None = None


@dataclass(frozen=True)
class PushNotification:
    """Already-validated push notification handed over by the webhook endpoint."""

    ref: str
    repository: Repository | None = None
    pusher: Pusher | None = None
    commits: tuple[Commit, ...] = ()

    @property
    def last_commit(self) -> Commit | None:
        """Return the most recent pushed commit, or None for an empty push."""
        return self.commits[-1] if self.commits else None

    @property
    def repository_url(self) -> str | None:
        return self.repository.url if self.repository is not None else None

    @property
    def pusher_name(self) -> str | None:
        return self.pusher.name if self.pusher is not None else None
