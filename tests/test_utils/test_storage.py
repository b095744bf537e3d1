"""
Unit tests for the SQLite feedback store.
"""

import json
import os
import sqlite3
import tempfile
from unittest.mock import MagicMock

import pytest
from src.errors import NotFoundError, PersistenceError
from src.models.feedback import Analysis
from src.utils.storage import FeedbackStore


@pytest.fixture
def store():
    store = FeedbackStore(":memory:")
    yield store
    store.close()


@pytest.fixture
def analysis():
    return Analysis("negative", "high", "high", ["auth", "outage"], "Login broken for most users.")


def test_insert_assigns_increasing_ids(store):
    first = store.insert("GitHub", "one")
    second = store.insert("GitHub", "two")

    assert first >= 1
    assert second > first


def test_inserted_row_is_unanalyzed(store):
    feedback_id = store.insert("Discord", "Dashboard is slow")
    row = store.get(feedback_id)

    assert row.source == "Discord"
    assert row.text == "Dashboard is slow"
    assert row.created_at
    assert not row.is_analyzed
    assert (row.sentiment, row.urgency, row.value_impact, row.themes, row.summary) == (None,) * 5
    assert row.to_item().analysis is None


def test_get_missing_returns_none(store):
    assert store.get(999) is None


def test_update_writes_all_fields(store, analysis):
    feedback_id = store.insert("GitHub", "Login returns 500")
    store.update(feedback_id, analysis)

    row = store.get(feedback_id)

    assert row.is_analyzed
    assert json.loads(row.themes) == ["auth", "outage"]
    assert row.to_item().analysis == analysis


def test_update_replaces_previous_analysis(store, analysis):
    feedback_id = store.insert("GitHub", "Login returns 500")
    store.update(feedback_id, analysis)
    store.update(feedback_id, Analysis("neutral", "low", "low", [], "Resolved."))

    item = store.get(feedback_id).to_item()

    assert item.analysis.urgency == "low"
    assert item.analysis.themes == []
    assert item.analysis.summary == "Resolved."


def test_update_missing_row_raises(store, analysis):
    with pytest.raises(NotFoundError):
        store.update(42, analysis)


def test_list_recent_orders_newest_first(store):
    ids = [store.insert("GitHub", f"item {i}") for i in range(4)]

    rows = store.list_recent(3)

    assert [r.id for r in rows] == list(reversed(ids))[:3]
    assert store.count() == 4


def test_persists_across_connections(analysis):
    with tempfile.TemporaryDirectory() as tmpdir:
        db_path = os.path.join(tmpdir, "nested", "feedback.db")

        store1 = FeedbackStore(db_path)
        feedback_id = store1.insert("Support", "Duplicate billing charge")
        store1.update(feedback_id, analysis)
        store1.close()

        store2 = FeedbackStore(db_path)
        row = store2.get(feedback_id)
        store2.close()

        assert row.is_analyzed
        assert row.summary == analysis.summary


def test_sqlite_errors_become_persistence_errors(store):
    store.conn = MagicMock()
    store.conn.execute.side_effect = sqlite3.OperationalError("disk I/O error")
    store.conn.__enter__ = MagicMock(return_value=store.conn)
    store.conn.__exit__ = MagicMock(return_value=False)

    with pytest.raises(PersistenceError):
        store.insert("GitHub", "text")
    with pytest.raises(PersistenceError):
        store.get(1)
    with pytest.raises(PersistenceError):
        store.list_recent(10)


def test_unencodable_source_raises_persistence_error(store):
    """Lone surrogates (e.g. from undecodable argv bytes) cannot be bound."""
    with pytest.raises(PersistenceError) as exc_info:
        store.insert("GitHub", "bad \udcff text")

    assert isinstance(exc_info.value.__cause__, UnicodeEncodeError)
    assert store.count() == 0


def test_unencodable_summary_raises_persistence_error(store):
    feedback_id = store.insert("GitHub", "text")
    analysis = Analysis("negative", "high", "high", ["auth"], "bad \ud800 x")

    with pytest.raises(PersistenceError) as exc_info:
        store.update(feedback_id, analysis)

    assert isinstance(exc_info.value.__cause__, UnicodeEncodeError)
    assert not store.get(feedback_id).is_analyzed


def test_row_with_corrupt_themes_is_reported_unanalyzed(store):
    feedback_id = store.insert("GitHub", "text")
    store.conn.execute(
        "UPDATE feedback SET sentiment='negative', urgency='high', value_impact='low', "
        "themes='oops', summary='s' WHERE id = ?;",
        (feedback_id,)
    )

    row = store.get(feedback_id)

    assert row.is_analyzed
    assert row.parse_themes() is None
    assert row.to_item().analysis is None


# Run tests if executed directly
if __name__ == "__main__":
    pytest.main([__file__, "-v"])
