"""
Processor Registry

Maps connector actions (``mgr/field/update``) to processor classes.
"""

from __future__ import annotations

import logging
import re
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from extrafields.processors.base import Processor

logger = logging.getLogger(__name__)

# Letters, digits, underscore, dash and slash only; rejects "..", "\" and the like
ACTION_PATTERN = re.compile(r"^[a-zA-Z0-9_\-/]+$")


def is_valid_action(action: str | None) -> bool:
    return bool(action) and ACTION_PATTERN.match(action) is not None


class ProcessorRegistry:
    """In-process registry of processors keyed by action."""

    def __init__(self) -> None:
        self._processors: dict[str, type[Processor]] = {}

    def register(self, action: str, processor_class: type[Processor]) -> None:
        if not is_valid_action(action):
            raise ValueError(f"Invalid processor action: {action!r}")
        self._processors[action.strip("/")] = processor_class
        logger.debug("Processor registered: %s -> %s", action, processor_class.__name__)

    def get(self, action: str) -> type[Processor] | None:
        """Return the processor class for ``action``, or None if not registered."""
        return self._processors.get(action.strip("/"))

    def has(self, action: str) -> bool:
        return action.strip("/") in self._processors

    def actions(self) -> list[str]:
        return sorted(self._processors)

    def __len__(self) -> int:
        return len(self._processors)
