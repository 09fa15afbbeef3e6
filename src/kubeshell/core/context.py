#!/usr/bin/env python3
"""
KUBESHELL CONTEXT MEMORY
------------------------
Remembers which objects the last list command displayed, in display order,
so that follow-up commands can address "object 3" without re-fetching.

The memory is replaced wholesale or cleared, never merged. The shell runs
one command at a time, which is the only guard this state needs.

Author: KubeShell Team
Date: 2026-10-19
"""

import logging
from dataclasses import dataclass, field
from typing import Iterable, Iterator, Optional, Tuple

from kubeshell.core.models import ObjectHandle

logger = logging.getLogger("kubeshell.context")


class ContextMemory:
    """Ordered handles of the most recently listed objects."""

    def __init__(self):
        self._handles: Tuple[ObjectHandle, ...] = ()

    def replace(self, handles: Iterable[ObjectHandle]):
        self._handles = tuple(handles)
        logger.debug(f"Context memory now holds {len(self._handles)} objects")

    def clear(self):
        if self._handles:
            logger.debug("Context memory cleared")
        self._handles = ()

    def get(self, position: int) -> Optional[ObjectHandle]:
        """Looks up a handle by its 1-based index as printed in the #### column."""
        if 1 <= position <= len(self._handles):
            return self._handles[position - 1]
        return None

    @property
    def handles(self) -> Tuple[ObjectHandle, ...]:
        return self._handles

    def __len__(self) -> int:
        return len(self._handles)

    def __iter__(self) -> Iterator[ObjectHandle]:
        return iter(self._handles)


# Process-wide memory shared by every command of the running shell
CONTEXT = ContextMemory()


@dataclass
class Env:
    """
    Per-session state handed to commands. `namespace` of None means the
    user is looking across all namespaces.
    """
    namespace: Optional[str] = None
    memory: ContextMemory = field(default_factory=lambda: CONTEXT)
