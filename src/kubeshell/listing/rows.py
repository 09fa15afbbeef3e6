#!/usr/bin/env python3
"""
KUBESHELL ROW BUILDER
---------------------
Applies column extractors to every resource of a list, producing one
(ObjectHandle, Row) pair per resource, optionally dropping rows that have
no cell matching the user's filter regex.

Author: KubeShell Team
Date: 2026-10-19
"""

import re
import logging
from re import Pattern
from typing import Callable, Dict, List, Mapping, Optional, Sequence, Tuple

from kubeshell.core.errors import ColumnConfigError, FilterPatternError
from kubeshell.core.models import Cell, ColumnDescriptor, Extractor, ObjectHandle, Resource, Row
from kubeshell.core.values import extract_age, extract_labels, extract_name, extract_namespace

logger = logging.getLogger("kubeshell.rows")

HandleBuilder = Callable[[Resource], ObjectHandle]

# Columns every kind can show straight from its metadata
BUILTIN_EXTRACTORS: Dict[str, Extractor] = {
    "Name": extract_name,
    "Namespace": extract_namespace,
    "Age": extract_age,
    "Labels": extract_labels,
}


def compile_filter(text: Optional[str]) -> Optional[Pattern]:
    """Compiles the user's filter regex. An empty or missing one means no filtering."""
    if not text:
        return None
    try:
        return re.compile(text)
    except re.error as e:
        raise FilterPatternError(f"Invalid filter regex '{text}': {e}") from e


def resolve_columns(cols: Sequence[str],
                    extractors: Optional[Mapping[str, Extractor]]) -> List[ColumnDescriptor]:
    """
    Maps every requested column to its extractor. A column the command
    asked for but cannot extract is a wiring mistake, so this fails loudly.
    """
    resolved = []
    for col in cols:
        if col in BUILTIN_EXTRACTORS:
            resolved.append(ColumnDescriptor(col, BUILTIN_EXTRACTORS[col]))
        elif extractors and col in extractors:
            resolved.append(ColumnDescriptor(col, extractors[col]))
        else:
            raise ColumnConfigError(f"No extractor registered for column '{col}'")
    return resolved


def row_matches(row: Row, pattern: Pattern) -> bool:
    return any(cell.matches(pattern) for cell in row.cells)


def build_rows(cols: Sequence[str],
               items: Sequence[Resource],
               extractors: Optional[Mapping[str, Extractor]],
               pattern: Optional[Pattern],
               get_handle: HandleBuilder) -> List[Tuple[ObjectHandle, Row]]:
    """
    Builds rows in input order. Indexes are left unassigned here; they are
    numbered once the final display order is known.
    """
    columns = resolve_columns(cols, extractors)

    built = []
    for item in items:
        row = Row(cells=[Cell(col.extractor(item)) for col in columns])
        if pattern is not None and not row_matches(row, pattern):
            continue
        built.append((get_handle(item), row))

    if pattern is not None:
        logger.debug(f"Filter '{pattern.pattern}' kept {len(built)} of {len(items)} rows")
    return built
