"""
Unit tests for CSV ingestion.
"""

import json
from unittest.mock import MagicMock

import pandas as pd
import pytest
from src.agents.ingestion import CsvFeedbackImporter
from src.agents.triage import TriageInvoker
from src.errors import ModelUnavailableError
from src.orchestrator import TriageOrchestrator
from src.utils.storage import FeedbackStore


VALID_REPLY = json.dumps({
    "sentiment": "neutral",
    "urgency": "low",
    "value_impact": "medium",
    "themes": ["docs"],
    "summary": "Docs could be clearer."
})


@pytest.fixture
def store():
    store = FeedbackStore(":memory:")
    yield store
    store.close()


def write_csv(path, rows):
    pd.DataFrame(rows).to_csv(path, index=False)
    return str(path)


def test_import_ingests_each_row(tmp_path, store):
    model = MagicMock()
    model.generate.return_value = VALID_REPLY
    importer = CsvFeedbackImporter(TriageOrchestrator(store, TriageInvoker(model)))
    path = write_csv(tmp_path / "feedback.csv", [
        {"source": "GitHub", "text": "API timeouts at peak"},
        {"source": "Discord", "text": "Docs could be more step-by-step"},
    ])

    report = importer.import_file(path)

    assert len(report.ingested) == 2
    assert report.unanalyzed == 0
    assert all(row.is_analyzed for row in store.list_recent(10))


def test_import_skips_blank_rows(tmp_path, store):
    model = MagicMock()
    model.generate.return_value = VALID_REPLY
    importer = CsvFeedbackImporter(TriageOrchestrator(store, TriageInvoker(model)))
    path = write_csv(tmp_path / "feedback.csv", [
        {"source": "GitHub", "text": "Real feedback"},
        {"source": "", "text": "No source"},
        {"source": "Support", "text": None},
    ])

    report = importer.import_file(path)

    assert report.to_dict()["ingested"] == 1
    assert report.skipped == 2
    assert store.count() == 1


def test_import_continues_after_format_error(tmp_path, store):
    model = MagicMock()
    model.generate.side_effect = ["not json", VALID_REPLY]
    importer = CsvFeedbackImporter(TriageOrchestrator(store, TriageInvoker(model)))
    path = write_csv(tmp_path / "feedback.csv", [
        {"source": "GitHub", "text": "first"},
        {"source": "GitHub", "text": "second"},
    ])

    report = importer.import_file(path)

    assert report.unanalyzed == 1
    assert len(report.ingested) == 1
    assert store.count() == 2


def test_import_aborts_when_model_unavailable(tmp_path, store):
    importer = CsvFeedbackImporter(TriageOrchestrator(store, TriageInvoker(None)))
    path = write_csv(tmp_path / "feedback.csv", [
        {"source": "GitHub", "text": "first"},
        {"source": "GitHub", "text": "second"},
    ])

    with pytest.raises(ModelUnavailableError):
        importer.import_file(path)

    assert store.count() == 1


def test_import_requires_columns(tmp_path, store):
    importer = CsvFeedbackImporter(TriageOrchestrator(store, TriageInvoker(MagicMock())))
    path = write_csv(tmp_path / "feedback.csv", [{"channel": "GitHub", "body": "x"}])

    with pytest.raises(ValueError, match="source, text"):
        importer.import_file(path)


# Run tests if executed directly
if __name__ == "__main__":
    pytest.main([__file__, "-v"])
