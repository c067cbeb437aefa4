"""Exception types raised by the GitBucket push dispatcher."""


class DispatchError(RuntimeError):
    """Base class for dispatcher failures."""


class AuditLogIOError(DispatchError):
    """Audit log file could not be opened or written."""


class AuditLogNotFoundError(DispatchError):
    """Audit log file has never been written."""


class TriggerNotApplicableError(DispatchError):
    """Trigger was bound to a project kind it does not support."""


class DispatchQueueClosedError(DispatchError):
    """Work was submitted after the dispatch queue shut down."""
