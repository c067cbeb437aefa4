"""Read-only view of a trigger's hook log."""

from typing import TYPE_CHECKING, Any

if TYPE_CHECKING:
    from src.trigger.push_trigger import GitBucketPushTrigger


class HookLogAction:
    """Project action exposing the last processed push as plain text."""

    display_name = "GitBucket Hook Log"
    url_name = "GitBucketPollLog"
    icon_file_name = "/plugin/gitbucket/images/24x24/gitbucket-log.png"

    def __init__(self, trigger: "GitBucketPushTrigger") -> None:
        self._trigger = trigger

    @property
    def owner(self) -> Any | None:
        return self._trigger.project

    def get_log(self) -> str:
        """Return the log text; raises AuditLogNotFoundError before the first push."""
        return self._trigger.audit_log.read(self._trigger.log_file())
