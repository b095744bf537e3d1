"""
Aggregation Engine.

Counts triage signals across the most recent feedback rows into a
DatasetDigest.
"""

import logging
from collections import Counter
from typing import List

from src.models.digest import DatasetDigest, ThemeCount
from src.models.feedback import FeedbackRow, SENTIMENTS, LEVELS
from src.utils.storage import FeedbackStore
import config.settings as settings

logger = logging.getLogger(__name__)


class AggregationEngine:
    """
    Builds digests from a bounded window of recent rows.

    Read-only: the engine never writes to the store.
    """

    def __init__(self, store: FeedbackStore, top_n: int = settings.TOP_THEMES):
        """
        Args:
            store: Feedback store to scan
            top_n: Number of themes to keep in the ranking
        """
        self.store = store
        self.top_n = top_n

    def summarize(self, limit: int) -> DatasetDigest:
        """
        Summarize the `limit` most recently created rows.

        Args:
            limit: Maximum number of rows to scan (must be positive)

        Returns:
            DatasetDigest for the scanned window
        """
        if isinstance(limit, bool) or not isinstance(limit, int) or limit < 1:
            raise ValueError(f"Invalid limit: {limit}. Must be a positive integer")

        rows = self.store.list_recent(limit)
        digest = summarize_rows(rows, top_n=self.top_n)

        logger.info(
            f"Summarized {digest.total} rows ({digest.analyzed} analyzed, "
            f"{len(digest.top_themes)} top themes)"
        )
        return digest


def summarize_rows(rows: List[FeedbackRow], top_n: int = settings.TOP_THEMES) -> DatasetDigest:
    """
    Tally a list of rows (most recent first) into a digest.

    Only fully analyzed rows feed the urgency, sentiment, source and theme
    counters. Theme strings are trimmed and lower-cased before counting.
    """
    analyzed = [r for r in rows if r.is_analyzed]

    by_urgency = {level: 0 for level in LEVELS}
    by_sentiment = {sentiment: 0 for sentiment in SENTIMENTS}
    by_source = Counter()
    theme_counts = Counter()

    for row in analyzed:
        if row.urgency in by_urgency:
            by_urgency[row.urgency] += 1
        if row.sentiment in by_sentiment:
            by_sentiment[row.sentiment] += 1
        by_source[row.source] += 1

        themes = row.parse_themes()
        if themes is None:
            logger.debug(f"Skipping unparseable themes for feedback {row.id}")
            continue

        for theme in themes:
            if isinstance(theme, str) and theme.strip():
                theme_counts[theme.strip().lower()] += 1

    # sorted() is stable, so equal counts keep first-seen order
    ranked = sorted(theme_counts.items(), key=lambda item: item[1], reverse=True)

    return DatasetDigest(
        total=len(rows),
        analyzed=len(analyzed),
        by_urgency=by_urgency,
        by_sentiment=by_sentiment,
        by_source=dict(by_source),
        top_themes=[ThemeCount(theme=theme, count=count) for theme, count in ranked[:top_n]]
    )


# Design Rationale and Trade-offs:
#
# 1. Counts are computed in Python over the most recent rows.
#    - The window is bounded by limit, so memory stays small
#    - Trade-off: older feedback is outside the digest
#
# 2. Theme ties keep first-seen order (newest rows first).
