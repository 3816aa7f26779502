#!/usr/bin/env python3
"""
Tests for ReadStore - recording and looking up reading progress.
"""

import pytest

from storyvine.core import OperationError
from storyvine.services import ReadStore


@pytest.fixture
def store(client):
    return ReadStore(client)


def test_fetch_without_user_is_empty(store):
    assert store.fetch(None) is True
    assert store.reads == []
    assert store.loading is False


def test_record_progress_inserts_then_updates(store, client):
    store.fetch("reader")

    store.record_progress("reader", "s1", 30)
    store.record_progress("reader", "s1", 75.5)

    assert len(store.reads) == 1
    assert store.reads[0].progress == 75.5
    assert len(client.select("reads")) == 1


def test_chapters_are_tracked_separately(store):
    store.fetch("reader")

    store.record_progress("reader", "s1", 100, chapter_id="c1")
    store.record_progress("reader", "s1", 20, chapter_id="c2")

    assert store.find_progress("s1", "c1").progress == 100
    assert store.find_progress("s1", "c2").progress == 20
    assert store.find_progress("s1", "c3") is None
    assert store.find_progress("s1") is not None


def test_only_current_readers_rows_loaded(store, seed):
    seed(
        "reads",
        {"user_id": "reader", "story_id": "s1", "progress": 10},
        {"user_id": "other", "story_id": "s1", "progress": 90},
    )

    store.fetch("reader")

    assert [r.progress for r in store.reads] == [10]


@pytest.mark.parametrize("progress", [-1, 100.5, True, "50", None])
def test_record_progress_rejects_invalid_values(store, progress):
    with pytest.raises(ValueError):
        store.record_progress("reader", "s1", progress)


def test_record_progress_failure(flaky):
    store = ReadStore(flaky)
    flaky.failures.add(("insert", "reads"))

    with pytest.raises(OperationError, match="Failed to save reading progress"):
        store.record_progress("reader", "s1", 10)
