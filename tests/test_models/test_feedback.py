"""
Unit tests for the feedback data models.
"""

import json

import pytest
from src.models.feedback import Analysis, FeedbackRow


def test_analysis_validation():
    """Test Analysis enum and length validation."""
    analysis = Analysis("positive", "low", "low", ["docs"], "Fine.")
    assert analysis.summary == "Fine."

    with pytest.raises(ValueError):
        Analysis("happy", "low", "low", [], "Fine.")
    with pytest.raises(ValueError):
        Analysis("positive", "urgent", "low", [], "Fine.")
    with pytest.raises(ValueError):
        Analysis("positive", "low", "huge", [], "Fine.")


@pytest.mark.parametrize("summary", ["", "   ", None, "s" * 201])
def test_analysis_rejects_invalid_summary(summary):
    with pytest.raises(ValueError, match="summary"):
        Analysis("neutral", "low", "low", [], summary)


def test_analysis_requires_summary():
    with pytest.raises(ValueError):
        Analysis("neutral", "low", "low")


@pytest.mark.parametrize("themes", [
    ["t"] * 7,
    ["x" * 41],
    ["ok", ""],
    ["ok", 3],
    "auth",
])
def test_analysis_rejects_invalid_themes(themes):
    with pytest.raises(ValueError, match="theme"):
        Analysis("neutral", "low", "low", themes, "Fine.")


def test_analysis_accepts_limits():
    analysis = Analysis("neutral", "low", "low", ["x" * 40] * 6, "s" * 200)
    assert len(analysis.themes) == 6


def test_row_with_out_of_limit_values_is_reported_unanalyzed():
    row = FeedbackRow(
        id=1,
        source="GitHub",
        text="text",
        created_at="2024-06-01 00:00:00",
        sentiment="negative",
        urgency="high",
        value_impact="high",
        themes=json.dumps(["a"] * 9),
        summary="Too many themes."
    )

    assert row.is_analyzed
    assert row.to_item().analysis is None


def test_row_with_deeply_nested_themes():
    row = FeedbackRow(
        id=1,
        source="GitHub",
        text="text",
        created_at="2024-06-01 00:00:00",
        themes="[" * 100000 + "]" * 100000
    )

    assert row.parse_themes() is None


# Run tests if executed directly
if __name__ == "__main__":
    pytest.main([__file__, "-v"])
