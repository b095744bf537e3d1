"""
CSV Export.

Writes the most recent feedback rows and their analysis to a CSV table.
"""

import logging
import os

import pandas as pd

from src.utils.storage import FeedbackStore

logger = logging.getLogger(__name__)


COLUMNS = [
    "id", "source", "created_at", "sentiment", "urgency",
    "value_impact", "themes", "summary", "text"
]


def export_recent(store: FeedbackStore, limit: int, output_path: str) -> str:
    """
    Export the `limit` most recent rows to CSV.

    Themes are written as a '; '-joined string. Unanalyzed rows have empty
    analysis cells.

    Returns:
        Path to the written CSV
    """
    rows = []
    for item in (row.to_item() for row in store.list_recent(limit)):
        analysis = item.analysis
        rows.append({
            "id": item.id,
            "source": item.source,
            "created_at": item.created_at,
            "sentiment": analysis.sentiment if analysis else None,
            "urgency": analysis.urgency if analysis else None,
            "value_impact": analysis.value_impact if analysis else None,
            "themes": "; ".join(analysis.themes) if analysis else None,
            "summary": analysis.summary if analysis else None,
            "text": item.text
        })

    df = pd.DataFrame(rows, columns=COLUMNS)

    directory = os.path.dirname(output_path)
    if directory:
        os.makedirs(directory, exist_ok=True)
    df.to_csv(output_path, index=False)

    logger.info(f"Exported {len(df)} feedback rows to {output_path}")
    return output_path
