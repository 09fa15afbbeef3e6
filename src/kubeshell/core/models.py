#!/usr/bin/env python3
"""
KUBESHELL CORE MODELS
---------------------
Defines the fundamental data structures shared by the list and describe
projections. These models are resource-kind agnostic: a resource is just
the nested dict/list tree the API returned.

Author: KubeShell Team
Date: 2026-10-19
"""

import functools
from dataclasses import dataclass, field
from re import Pattern
from typing import Any, Callable, Dict, List, Optional

# A resource is the deserialized JSON/YAML tree of one cluster object
Resource = Dict[str, Any]
Extractor = Callable[[Resource], Optional[str]]


@functools.total_ordering
@dataclass
class Cell:
    """
    One table cell. The value stays absent until render time so that an
    extractor with nothing to say still produces a (blank) cell.
    """
    value: Optional[str] = None

    def render(self) -> str:
        return self.value if self.value is not None else ""

    def matches(self, pattern: Pattern) -> bool:
        return pattern.search(self.render()) is not None

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Cell):
            return NotImplemented
        return self.render() == other.render()

    def __lt__(self, other: "Cell") -> bool:
        return self.render() < other.render()


@dataclass
class Row:
    """
    A rendered table row. `index` is the synthetic 1-based position and is
    only assigned once the final order (post sort/reverse) is known.
    """
    cells: List[Cell] = field(default_factory=list)
    index: int = 0

    def as_text(self) -> List[str]:
        return [str(self.index)] + [c.render() for c in self.cells]


@dataclass(frozen=True)
class ObjectHandle:
    """
    Lightweight reference to a listed object. Later commands address an
    object by its position in Context Memory instead of holding the payload.
    """
    kind: str
    name: str
    namespace: Optional[str] = None

    def __str__(self) -> str:
        if self.namespace:
            return f"{self.kind} {self.namespace}/{self.name}"
        return f"{self.kind} {self.name}"


@dataclass
class ColumnDescriptor:
    name: str
    extractor: Optional[Extractor] = None
