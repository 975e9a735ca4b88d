"""Tests for the jstat report catalog."""

import pytest

from jstat_exporter.collectors.reports import CATALOG, REPORT_NAMES, get_report, select_reports


def test_catalog_order():
    assert REPORT_NAMES == ("gccapacity", "gcmetacapacity", "gcold", "gcnew")


def test_metric_names_are_unique():
    names = [name for report in CATALOG for name in report.metric_names]

    assert len(names) == len(set(names))


def test_column_positions():
    """Column semantics of the exported fields."""
    gccapacity = {e.metric: e.column for e in get_report("gccapacity").extractions}
    gcold = {e.metric: e.column for e in get_report("gcold").extractions}

    assert gccapacity["newMax"] == 1
    assert gccapacity["newCommit"] == 2
    assert gcold == {"metaUsed": 1, "oldUsed": 5}
    assert {e.metric: e.column for e in get_report("gcmetacapacity").extractions} == {
        "metaMax": 1, "metaCommit": 2,
    }


def test_min_columns():
    assert get_report("gccapacity").min_columns == 9
    assert get_report("gcmetacapacity").min_columns == 3
    assert get_report("gcold").min_columns == 6
    assert get_report("gcnew").min_columns == 9


def test_get_unknown_report():
    assert get_report("gcutil") is None


def test_select_all_by_default():
    assert select_reports() == list(CATALOG)


def test_select_keeps_catalog_order():
    selected = select_reports(["gcnew", "gccapacity"])

    assert [r.name for r in selected] == ["gccapacity", "gcnew"]


def test_select_unknown_report():
    with pytest.raises(ValueError, match="gcutil"):
        select_reports(["gcold", "gcutil"])
