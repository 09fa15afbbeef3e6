#!/usr/bin/env python3
"""
KUBESHELL SORT ENGINE SUITE
---------------------------
Age comparison, sort-flag resolution, optional columns and text sorting.
"""

import pytest

from kubeshell.core.errors import ColumnConfigError
from kubeshell.core.models import Cell, ObjectHandle, Row
from kubeshell.listing.sorting import (
    PostExtractSort, PreExtractSort, add_extra_cols, age_cmp, resolve_sort, sort_rows,
)
from conftest import ago, make_resource

COL_MAP = {"name": "Name", "phase": "Phase"}
EXTRA_COL_MAP = {"ip": "IP", "namespace": "Namespace", "node": "Node"}


def test_age_sort_youngest_first_and_missing_is_oldest():
    old = make_resource("old", created=ago(days=30))
    young = make_resource("young", created=ago(minutes=5))
    unknown = make_resource("unknown")
    middle = make_resource("middle", created=ago(days=2))

    ordered = PreExtractSort(age_cmp).apply([unknown, old, young, middle])
    assert [r["metadata"]["name"] for r in ordered] == ["young", "middle", "old", "unknown"]


def test_age_sort_is_semantic_not_textual():
    # As text "10d 0h" < "9d 0h", but 9 days is younger
    ten = make_resource("ten", created=ago(days=10))
    nine = make_resource("nine", created=ago(days=9))
    ordered = PreExtractSort(age_cmp).apply([ten, nine])
    assert [r["metadata"]["name"] for r in ordered] == ["nine", "ten"]


def test_age_sort_is_stable_for_equal_keys():
    items = [make_resource(f"p{i}") for i in range(5)]
    ordered = PreExtractSort(age_cmp).apply(items)
    assert ordered == items


def test_resolve_sort():
    flags = []
    assert isinstance(resolve_sort("AGE", COL_MAP, EXTRA_COL_MAP, flags), PreExtractSort)
    assert resolve_sort("name", COL_MAP, EXTRA_COL_MAP, flags) == PostExtractSort("Name")
    assert flags == []
    assert resolve_sort(None, COL_MAP, EXTRA_COL_MAP, flags) is None


def test_sorting_by_extra_column_switches_it_on():
    flags = []
    assert resolve_sort("node", COL_MAP, EXTRA_COL_MAP, flags) == PostExtractSort("Node")
    assert flags == ["node"]


def test_unsortable_key_is_configuration_error():
    with pytest.raises(ColumnConfigError):
        resolve_sort("restarts", COL_MAP, None, [])


def test_add_extra_cols_follows_map_order():
    cols = add_extra_cols(["Name", "Phase"], True, ["node", "ip"], EXTRA_COL_MAP)
    assert cols == ["Name", "Phase", "IP", "Node", "Labels"]
    # No duplicates on a second pass
    assert add_extra_cols(cols, True, ["node"], EXTRA_COL_MAP) == ["Name", "Phase", "IP", "Node", "Labels"]


def _pairs(*names):
    return [(ObjectHandle("Pod", n), Row(cells=[Cell(n), Cell(str(len(n)))])) for n in names]


def test_sort_rows_by_rendered_text():
    rows, warning = sort_rows(["Name", "Len"], _pairs("b", "c", "a"), "Name")
    assert warning is None
    assert [h.name for h, _ in rows] == ["a", "b", "c"]


def test_sort_rows_unknown_column_warns_and_keeps_order():
    pairs = _pairs("b", "c", "a")
    rows, warning = sort_rows(["Name", "Len"], pairs, "Node")
    assert rows == pairs
    assert warning == "Asked to sort by Node, but it's not a column in the output"


def test_absent_cells_sort_first():
    pairs = [
        (ObjectHandle("Pod", "x"), Row(cells=[Cell("10.0.0.9")])),
        (ObjectHandle("Pod", "y"), Row(cells=[Cell(None)])),
    ]
    rows, _ = sort_rows(["IP"], pairs, "IP")
    assert [h.name for h, _ in rows] == ["y", "x"]


def test_sort_rows_is_stable_for_equal_text():
    # Same name in three namespaces, sorted on the name column only
    pairs = [
        (ObjectHandle("Pod", name, ns), Row(cells=[Cell(name), Cell(ns)]))
        for name, ns in [("web", "prod"), ("api", "prod"), ("web", "dev"), ("web", "staging"), ("api", "dev")]
    ]
    rows, warning = sort_rows(["Name", "Namespace"], pairs, "Name")
    assert warning is None
    assert [(h.name, h.namespace) for h, _ in rows] == [
        ("api", "prod"), ("api", "dev"), ("web", "prod"), ("web", "dev"), ("web", "staging"),
    ]
