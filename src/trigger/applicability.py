"""
src/trigger/applicability.py
Decides which project kinds the push trigger can be bound to.
Exports: ApplicabilityFilter, load_optional_variant
"""

import importlib
import logging
from typing import Any

from src.config import Config
from src.project.base import AbstractProject

logger = logging.getLogger(__name__)


def load_optional_variant(dotted_path: str) -> type | None:
    """
    Resolve an optional project variant class from a `module:Class` path.

    Args:
        dotted_path: Dotted module path and class name separated by a colon.
    Returns:
        The class, or None when the path is empty or the module/class is absent.
    """
    if not dotted_path:
        return None
    module_name, _, class_name = dotted_path.partition(":")
    if not module_name or not class_name:
        logger.warning("Ignoring malformed project variant path '%s'.", dotted_path)
        return None
    try:
        module = importlib.import_module(module_name)
    except ImportError:
        logger.debug("Project variant module '%s' is not installed.", module_name)
        return None
    variant = getattr(module, class_name, None)
    if not isinstance(variant, type):
        logger.debug("Project variant '%s' not found in '%s'.", class_name, module_name)
        return None
    return variant


class ApplicabilityFilter:
    """Accepts simple projects and any registered pipeline-style variant."""

    def __init__(
        self,
        simple_types: tuple[type, ...] = (AbstractProject,),
        pipeline_types: tuple[type, ...] = (),
    ) -> None:
        self._simple_types = simple_types
        self._pipeline_types = pipeline_types

    @classmethod
    def from_config(cls) -> "ApplicabilityFilter":
        """Build a filter with the pipeline variant named by GITBUCKET_PIPELINE_VARIANT, if installed."""
        variant = load_optional_variant(Config.get_pipeline_variant())
        return cls(pipeline_types=(variant,) if variant is not None else ())

    def is_applicable(self, target: Any) -> bool:
        if isinstance(target, self._simple_types):
            return True
        return bool(self._pipeline_types) and isinstance(target, self._pipeline_types)
