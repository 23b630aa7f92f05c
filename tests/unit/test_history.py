"""Unit tests for ``EditHistory`` and ``EditRecord``."""

from __future__ import annotations

import pytest

from product_clean.history import EditHistory, EditRecord, next_record_id


def make_record(red_png, blue_png, instruction: str) -> EditRecord:
    return EditRecord(original=red_png, edited=blue_png, instruction=instruction)


def test_push_prepends(red_png, blue_png) -> None:
    history = EditHistory()
    a, b, c = (make_record(red_png, blue_png, name) for name in "ABC")

    for record in (a, b, c):
        history.push(record)

    assert history.records() == (c, b, a)


def test_eleventh_record_evicts_oldest(red_png, blue_png) -> None:
    history = EditHistory()
    records = [make_record(red_png, blue_png, str(index)) for index in range(11)]

    evicted = [history.push(record) for record in records]

    assert len(history) == 10
    assert evicted[:10] == [None] * 10
    assert evicted[10] is records[0]
    assert records[0] not in history.records()
    assert history[0] is records[10]


def test_find_by_id(red_png, blue_png) -> None:
    history = EditHistory()
    record = make_record(red_png, blue_png, "find me")
    history.push(record)

    assert history.find(record.id) is record
    assert history.find("nope") is None


def test_record_ids_are_unique_and_increasing() -> None:
    ids = [int(next_record_id()) for _ in range(1000)]

    assert ids == sorted(ids)
    assert len(set(ids)) == len(ids)


def test_records_are_immutable(red_png, blue_png) -> None:
    record = make_record(red_png, blue_png, "frozen")

    with pytest.raises(AttributeError):
        record.instruction = "changed"  # type: ignore[misc]


def test_limit_must_be_positive() -> None:
    with pytest.raises(ValueError):
        EditHistory(limit=0)
