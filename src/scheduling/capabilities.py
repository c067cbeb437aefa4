"""
src/scheduling/capabilities.py
Scheduling capability tiers and structural probing of project handles.
Exports: CapabilityTier, CAPABILITY_TIERS, BuildQueue, register_adapter, adapt, quiet_period_of
"""

import inspect
import logging
from dataclasses import dataclass
from typing import Any, Callable, Protocol, Sequence, runtime_checkable

from src.project.base import read_accessor

logger = logging.getLogger(__name__)

_PLACEHOLDER_CAUSE = object()


@dataclass(frozen=True)
class CapabilityTier:
    """One scheduling operation a project may expose, identified by name and arity."""

    rank: int
    method_name: str
    takes_cause: bool
    returns_flag: bool = False

    def arguments(self, quiet_period: int, cause: Any, actions: Sequence[Any]) -> tuple[Any, ...]:
        if self.takes_cause:
            return (quiet_period, cause, actions)
        return (quiet_period, actions)

    def probe(self, project: Any) -> Callable[..., Any] | None:
        """
        Return the bound operation when `project` exposes this tier.

        An operation matches when it is callable and its signature accepts the
        tier's positional arguments. Anything else counts as absent.
        """
        operation = getattr(project, self.method_name, None)
        if not callable(operation):
            return None
        try:
            signature = inspect.signature(operation)
        except (TypeError, ValueError):
            # Builtins without introspectable signatures are taken at their word.
            return operation
        try:
            signature.bind(*self.arguments(0, _PLACEHOLDER_CAUSE, ()))
        except TypeError:
            return None
        return operation

    def succeeded(self, result: Any) -> bool:
        if self.returns_flag:
            return result is True
        return result is not None


CAPABILITY_TIERS: tuple[CapabilityTier, ...] = (
    CapabilityTier(rank=1, method_name="schedule_build_with_actions", takes_cause=False),
    CapabilityTier(rank=2, method_name="schedule_build_with_cause", takes_cause=True),
    CapabilityTier(rank=3, method_name="schedule_build", takes_cause=True, returns_flag=True),
)

QUEUE_FALLBACK_RANK = 4


@runtime_checkable
class BuildQueue(Protocol):
    """Host-wide build queue used when a project exposes no scheduling tier."""

    def schedule_via_queue(self, task: Any, quiet_period: int, actions: Sequence[Any]) -> Any | None:
        """Queue `task` and return the queue item, or None when declined."""
        ...


_ADAPTERS: dict[type, Callable[[Any], Any]] = {}


def register_adapter(project_type: type, factory: Callable[[Any], Any]) -> None:
    """
    Register a wrapper for a project variant whose native API differs from the tiers.

    Args:
        project_type: Variant class; subclasses are matched through the MRO.
        factory: Callable taking the project and returning an object exposing tier methods.
    """
    _ADAPTERS[project_type] = factory


def unregister_adapter(project_type: type) -> None:
    _ADAPTERS.pop(project_type, None)


def adapt(project: Any) -> Any:
    """Return the registered adapter for `project`, or the project itself."""
    for klass in type(project).__mro__:
        factory = _ADAPTERS.get(klass)
        if factory is not None:
            return factory(project)
    return project


def quiet_period_of(project: Any) -> int:
    """Return the project's quiet period in seconds, or 0 when unavailable."""
    try:
        value = read_accessor(project, "quiet_period")
    except Exception:
        logger.debug("Quiet period accessor failed for %r; using 0.", project, exc_info=True)
        return 0
    if isinstance(value, int) and not isinstance(value, bool):
        return value
    return 0
