"""
Dataset digest model.

Count-based statistics over the most recent feedback rows. Computed on demand
and never persisted.
"""

import json
from dataclasses import dataclass, field
from typing import Dict, List


@dataclass
class ThemeCount:
    theme: str
    count: int


@dataclass
class DatasetDigest:
    """
    Aggregate view of a window of feedback rows.

    Only analyzed rows contribute to the per-value counters; total counts
    every scanned row.
    """
    total: int = 0
    analyzed: int = 0
    by_urgency: Dict[str, int] = field(default_factory=dict)
    by_sentiment: Dict[str, int] = field(default_factory=dict)
    by_source: Dict[str, int] = field(default_factory=dict)
    top_themes: List[ThemeCount] = field(default_factory=list)

    def to_dict(self) -> dict:
        """Convert to JSON-serializable dict."""
        return {
            "total": self.total,
            "analyzed": self.analyzed,
            "by_urgency": dict(self.by_urgency),
            "by_sentiment": dict(self.by_sentiment),
            "by_source": dict(self.by_source),
            "top_themes": [{"theme": t.theme, "count": t.count} for t in self.top_themes]
        }

    def to_context(self) -> str:
        """Render the digest as compact prompt context."""
        top_themes = [{"theme": t.theme, "count": t.count} for t in self.top_themes]
        return "\n".join([
            "Triaged dataset summary:",
            f"- total items: {self.total}",
            f"- analyzed items: {self.analyzed}",
            f"- urgency counts: {json.dumps(self.by_urgency)}",
            f"- sentiment counts: {json.dumps(self.by_sentiment)}",
            f"- source counts: {json.dumps(self.by_source)}",
            f"- top themes: {json.dumps(top_themes)}"
        ])
