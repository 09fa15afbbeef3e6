#!/usr/bin/env python3
"""
KUBESHELL SORT ENGINE
---------------------
Two mutually exclusive ways to order a list:

* PreExtractSort compares raw resources before any row is built. Age uses
  it because "1d 2h" does not sort correctly as text.
* PostExtractSort compares the rendered text of one column.

Reversal is not a sort mode; the projection applies it last, whatever
sort ran.

Author: KubeShell Team
Date: 2026-10-19
"""

import datetime
import functools
from dataclasses import dataclass
from typing import Callable, List, Mapping, Optional, Sequence, Tuple, Union

from kubeshell.core.errors import ColumnConfigError
from kubeshell.core.models import ObjectHandle, Resource, Row
from kubeshell.core.values import creation_timestamp

Comparator = Callable[[Resource, Resource], int]
ColumnMap = Mapping[str, str]


@dataclass(frozen=True)
class PreExtractSort:
    cmp: Comparator

    def apply(self, items: Sequence[Resource]) -> List[Resource]:
        return sorted(items, key=functools.cmp_to_key(self.cmp))


@dataclass(frozen=True)
class PostExtractSort:
    column: str


SortDirective = Union[PreExtractSort, PostExtractSort]

_OLDEST = datetime.datetime.min.replace(tzinfo=datetime.timezone.utc)


def age_cmp(a: Resource, b: Resource) -> int:
    """
    Orders by ascending age, so the most recently created object comes first.
    An object without a creation timestamp counts as the oldest of all.
    """
    created_a = creation_timestamp(a) or _OLDEST
    created_b = creation_timestamp(b) or _OLDEST
    # Newer creation time means smaller age
    return (created_a < created_b) - (created_a > created_b)


def resolve_sort(key: Optional[str], col_map: ColumnMap,
                 extra_col_map: Optional[ColumnMap], flags: List[str]) -> Optional[SortDirective]:
    """
    Turns the user's sort flag into a directive. Sorting by an optional
    column also switches that column on by appending its flag to `flags`.
    """
    if not key:
        return None

    wanted = key.lower()
    if wanted == "age":
        return PreExtractSort(cmp=age_cmp)
    if wanted in col_map:
        return PostExtractSort(col_map[wanted])
    if extra_col_map and wanted in extra_col_map:
        if wanted not in flags:
            flags.append(wanted)
        return PostExtractSort(extra_col_map[wanted])

    raise ColumnConfigError(f"Sorting by '{key}' is not supported for this resource")


def add_extra_cols(cols: List[str], labels: bool, flags: Sequence[str],
                   extra_col_map: ColumnMap) -> List[str]:
    """Appends optional columns the user switched on, in the map's declared order."""
    for flag, col in extra_col_map.items():
        if flag in flags and col not in cols:
            cols.append(col)
    if labels and "Labels" not in cols:
        cols.append("Labels")
    return cols


def sort_rows(cols: Sequence[str], rows: List[Tuple[ObjectHandle, Row]],
              column: str) -> Tuple[List[Tuple[ObjectHandle, Row]], Optional[str]]:
    """
    Sorts built rows by the rendered text of `column`. Returns the rows and
    a warning for the user when the column is not being displayed.
    """
    if column not in cols:
        return rows, f"Asked to sort by {column}, but it's not a column in the output"

    position = list(cols).index(column)
    return sorted(rows, key=lambda pair: pair[1].cells[position]), None
