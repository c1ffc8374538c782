"""Tests for ordering display records."""

from datetime import datetime, timezone

import pytest

from daumblog.models import DisplayRecord, SortAction
from daumblog.sorting import sort_records

NOW = datetime(2024, 1, 1, tzinfo=timezone.utc)


def record(title=None, timestamp=None, name=None) -> DisplayRecord:
    return DisplayRecord(title=title, timestamp=timestamp, name=name)


def test_title_sort_is_ascending_and_stable():
    """Test that equal titles keep their relative order."""
    records = [record("b", name="1"), record("a", name="2"), record("a", name="3")]
    ordered = sort_records(records, SortAction.TITLE)

    assert [(r.title, r.name) for r in ordered] == [("a", "2"), ("a", "3"), ("b", "1")]


def test_missing_title_sorts_first():
    ordered = sort_records([record("a"), record(None), record("")], SortAction.TITLE)
    assert [r.title for r in ordered] == [None, "", "a"]


def test_datetime_sort_is_descending():
    t1 = datetime(2023, 1, 1, tzinfo=timezone.utc)
    t2 = datetime(2023, 6, 1, tzinfo=timezone.utc)
    ordered = sort_records([record("old", t1), record("new", t2)], SortAction.DATETIME)

    assert [r.title for r in ordered] == ["new", "old"]


def test_datetime_sort_is_stable():
    t = datetime(2023, 1, 1, tzinfo=timezone.utc)
    ordered = sort_records([record("x", t), record("y", t)], SortAction.DATETIME)
    assert [r.title for r in ordered] == ["x", "y"]


def test_missing_datetime_counts_as_now():
    """Test that undated records lead the list under the default policy."""
    t1 = datetime(2023, 1, 1, tzinfo=timezone.utc)
    ordered = sort_records(
        [record("dated", t1), record("undated")], SortAction.DATETIME, now=NOW
    )
    assert [r.title for r in ordered] == ["undated", "dated"]


def test_future_record_beats_now():
    future = datetime(2030, 1, 1, tzinfo=timezone.utc)
    ordered = sort_records(
        [record("undated"), record("future", future)], SortAction.DATETIME, now=NOW
    )
    assert [r.title for r in ordered] == ["future", "undated"]


def test_missing_datetime_last_policy():
    t1 = datetime(2023, 1, 1, tzinfo=timezone.utc)
    t2 = datetime(2023, 6, 1, tzinfo=timezone.utc)
    ordered = sort_records(
        [record("undated"), record("old", t1), record("new", t2)],
        SortAction.DATETIME,
        missing_datetime="last",
    )
    assert [r.title for r in ordered] == ["new", "old", "undated"]


def test_naive_and_aware_timestamps_compare():
    naive = datetime(2023, 6, 1)
    aware = datetime(2023, 1, 1, tzinfo=timezone.utc)
    ordered = sort_records([record("aware", aware), record("naive", naive)], SortAction.DATETIME)
    assert [r.title for r in ordered] == ["naive", "aware"]


@pytest.mark.parametrize("action", [SortAction.CANCEL, SortAction.CONFIRM])
def test_intents_leave_order_unchanged(action):
    records = [record("b"), record("a"), record("c")]
    assert sort_records(records, action) == records


def test_sort_does_not_mutate_input():
    records = [record("b"), record("a")]
    sort_records(records, SortAction.TITLE)
    assert [r.title for r in records] == ["b", "a"]
