"""
Feedback data models.

Represents stored feedback rows and the triage analysis attached to them.
"""

import json
from dataclasses import dataclass, field
from typing import List, Optional

import config.settings as settings

SENTIMENTS = ("positive", "neutral", "negative")
LEVELS = ("low", "medium", "high")


@dataclass
class Analysis:
    """
    Triage signals extracted from one feedback item.
    Values are validated against the storage limits on construction.
    """
    sentiment: str  # "positive", "neutral", or "negative"
    urgency: str  # "low", "medium", or "high"
    value_impact: str  # "low", "medium", or "high"
    themes: List[str] = field(default_factory=list)
    summary: str = ""

    def __post_init__(self):
        if self.sentiment not in SENTIMENTS:
            raise ValueError(f"Invalid sentiment: {self.sentiment}")
        if self.urgency not in LEVELS:
            raise ValueError(f"Invalid urgency: {self.urgency}")
        if self.value_impact not in LEVELS:
            raise ValueError(f"Invalid value_impact: {self.value_impact}")

        if not isinstance(self.themes, list) or len(self.themes) > settings.MAX_THEMES:
            raise ValueError(f"Invalid themes: at most {settings.MAX_THEMES} entries allowed")
        for theme in self.themes:
            if not isinstance(theme, str) or not theme.strip() or len(theme) > settings.MAX_THEME_CHARS:
                raise ValueError(f"Invalid theme: {theme!r}")

        if not isinstance(self.summary, str) or not self.summary.strip():
            raise ValueError("Invalid summary: must be a non-blank string")
        if len(self.summary) > settings.MAX_SUMMARY_CHARS:
            raise ValueError(f"Invalid summary: longer than {settings.MAX_SUMMARY_CHARS} chars")

    def to_dict(self) -> dict:
        """Convert to JSON-serializable dict."""
        return {
            "sentiment": self.sentiment,
            "urgency": self.urgency,
            "value_impact": self.value_impact,
            "themes": list(self.themes),
            "summary": self.summary
        }


@dataclass
class FeedbackItem:
    """
    A feedback item as seen by callers.

    analysis is None until the item has been triaged; it is never partially set.
    """
    id: int
    source: str
    text: str
    created_at: str
    analysis: Optional[Analysis] = None

    @property
    def is_analyzed(self) -> bool:
        return self.analysis is not None

    def to_dict(self) -> dict:
        return {
            "id": self.id,
            "source": self.source,
            "text": self.text,
            "created_at": self.created_at,
            "analysis": self.analysis.to_dict() if self.analysis else None
        }


@dataclass
class FeedbackRow:
    """
    Persisted shape of a feedback row.

    Mirrors the table columns: analysis fields are individually nullable and
    themes holds a JSON-encoded list.
    """
    id: int
    source: str
    text: str
    created_at: str
    sentiment: Optional[str] = None
    urgency: Optional[str] = None
    value_impact: Optional[str] = None
    themes: Optional[str] = None
    summary: Optional[str] = None

    @property
    def is_analyzed(self) -> bool:
        """True when all five analysis columns are populated."""
        return all(
            value is not None
            for value in (self.sentiment, self.urgency, self.value_impact, self.themes, self.summary)
        )

    def parse_themes(self) -> Optional[List]:
        """Decode the themes column, or None if it is not a JSON list."""
        if self.themes is None:
            return None
        try:
            decoded = json.loads(self.themes)
        except (TypeError, ValueError, RecursionError):
            return None
        return decoded if isinstance(decoded, list) else None

    def to_item(self) -> FeedbackItem:
        """
        Build the caller-facing view of this row.

        A row only carries an Analysis when every column is present and valid;
        anything else is reported as unanalyzed.
        """
        analysis = None
        if self.is_analyzed:
            themes = self.parse_themes()
            if themes is not None and all(isinstance(t, str) for t in themes):
                try:
                    analysis = Analysis(
                        sentiment=self.sentiment,
                        urgency=self.urgency,
                        value_impact=self.value_impact,
                        themes=themes,
                        summary=self.summary
                    )
                except ValueError:
                    analysis = None

        return FeedbackItem(
            id=self.id,
            source=self.source,
            text=self.text,
            created_at=self.created_at,
            analysis=analysis
        )


@dataclass
class TriageResult:
    """Outcome of ingesting or re-triaging one feedback item."""
    id: int
    analysis: Analysis

    def to_dict(self) -> dict:
        return {"id": self.id, "analysis": self.analysis.to_dict()}
