#!/usr/bin/env python3
"""
KUBESHELL LIST PROJECTION - The Table Builder
---------------------------------------------
Turns the list a command fetched into the numbered table the user sees:
1. Filter regex compilation (bad patterns are reported, not fatal)
2. Sort resolution and optional columns
3. Row building, sorting, reversal and numbering
4. Rendering, then recording the shown objects in Context Memory

Author: KubeShell Team
Date: 2026-10-19
"""

import logging
from dataclasses import dataclass, field
from re import Pattern
from typing import Any, List, Mapping, Optional, Sequence

from kubeshell.core.context import Env
from kubeshell.core.errors import FilterPatternError
from kubeshell.core.models import Extractor, ObjectHandle, Resource, Row
from kubeshell.core.settings import INDEX_TITLE
from kubeshell.listing.rows import HandleBuilder, build_rows, compile_filter
from kubeshell.listing.sorting import (
    ColumnMap, PostExtractSort, PreExtractSort, SortDirective,
    add_extra_cols, resolve_sort, sort_rows,
)

logger = logging.getLogger("kubeshell.projection")


@dataclass
class ListRequest:
    """Everything a list command hands over besides the fetched items."""
    cols: List[str]
    get_handle: HandleBuilder
    col_map: ColumnMap = field(default_factory=dict)
    extra_col_map: Optional[ColumnMap] = None
    extractors: Optional[Mapping[str, Extractor]] = None
    sort_key: Optional[str] = None
    reverse: bool = False
    pattern: Optional[str] = None
    show: List[str] = field(default_factory=list)
    labels: bool = False


@dataclass
class ListResult:
    titles: List[str] = field(default_factory=list)
    handles: List[ObjectHandle] = field(default_factory=list)
    rows: List[Row] = field(default_factory=list)
    warnings: List[str] = field(default_factory=list)


def run_list(env: Env, writer: Any, request: ListRequest,
             items: Optional[Sequence[Resource]]) -> ListResult:
    """
    Entry point for list commands. `items` of None signals that fetching
    already failed (and was reported), which clears Context Memory.
    """
    warnings = []
    try:
        pattern = compile_filter(request.pattern)
    except FilterPatternError as e:
        # Degrade to an unfiltered listing instead of aborting the command
        logger.warning(str(e))
        writer.warn(f"{e}. Showing unfiltered results.")
        warnings.append(str(e))
        pattern = None

    flags = list(request.show)
    sort = resolve_sort(request.sort_key, request.col_map, request.extra_col_map, flags)

    cols = list(request.cols)
    if request.extra_col_map is not None:
        # Listing across namespaces: tell the rows apart by namespace
        if env.namespace is None and "namespace" in request.extra_col_map and "namespace" not in flags:
            flags.append("namespace")
        add_extra_cols(cols, request.labels, flags, request.extra_col_map)
    elif request.labels and "Labels" not in cols:
        cols.append("Labels")

    result = handle_list_result(
        env, writer, cols, items, request.extractors, pattern,
        sort, request.reverse, request.get_handle,
    )
    result.warnings[:0] = warnings
    return result


def handle_list_result(env: Env, writer: Any, cols: Sequence[str],
                       items: Optional[Sequence[Resource]],
                       extractors: Optional[Mapping[str, Extractor]],
                       pattern: Optional[Pattern],
                       sort: Optional[SortDirective],
                       reverse: bool,
                       get_handle: HandleBuilder) -> ListResult:
    """
    Builds, orders, numbers and prints the table, then replaces Context
    Memory with the handles in the exact order they were printed.
    """
    if items is None:
        env.memory.clear()
        return ListResult()

    if isinstance(sort, PreExtractSort):
        items = sort.apply(items)

    pairs = build_rows(cols, items, extractors, pattern, get_handle)

    warnings = []
    if isinstance(sort, PostExtractSort):
        pairs, warning = sort_rows(cols, pairs, sort.column)
        if warning:
            logger.warning(warning)
            writer.warn(warning)
            warnings.append(warning)

    if reverse:
        pairs = pairs[::-1]

    handles, rows = [], []
    for position, (handle, row) in enumerate(pairs, 1):
        row.index = position
        handles.append(handle)
        rows.append(row)

    titles = [INDEX_TITLE] + list(cols)
    writer.print_table(titles, rows)
    env.memory.replace(handles)

    return ListResult(titles=titles, handles=handles, rows=rows, warnings=warnings)
