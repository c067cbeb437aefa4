"""
src/project/base.py
Base class for the host's simple (single-configuration) projects.
Exports: AbstractProject, read_accessor
"""

from abc import ABC, abstractmethod
from pathlib import Path
from typing import Any, Sequence


class AbstractProject(ABC):
    """
    Simple buildable unit provided by the host.

    Subclasses schedule through `schedule_build_with_actions`, where the cause
    travels inside the action sequence.
    """

    def __init__(self, name: str, root_dir: Path | None = None, quiet_period: int = 0) -> None:
        self.name = name
        self.root_dir = root_dir
        self.quiet_period = quiet_period
        self.next_build_number = 1

    @abstractmethod
    def schedule_build_with_actions(self, quiet_period: int, actions: Sequence[Any]) -> Any | None:
        """Queue a build and return its handle, or None when the host declined."""

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self.name!r})"


def read_accessor(project: Any, name: str) -> Any | None:
    """
    Read an optional project accessor exposed as an attribute or a zero-arg callable.

    Args:
        project: Project handle of unknown shape.
        name: Accessor name, e.g. `quiet_period` or `root_dir`.
    Returns:
        The accessor value, or None when absent.
    Raises:
        Whatever the accessor itself raises.
    """
    value = getattr(project, name, None)
    if callable(value):
        return value()
    return value
