"""
CSV Ingestion.

Bulk-loads feedback from a CSV file through the regular ingest path.
"""

import logging
from dataclasses import dataclass, field
from typing import List

import pandas as pd

from src.errors import TriageFormatError
from src.orchestrator import TriageOrchestrator

logger = logging.getLogger(__name__)


REQUIRED_COLUMNS = ("source", "text")


@dataclass
class ImportReport:
    """Outcome of a CSV import."""
    ingested: List[int] = field(default_factory=list)  # Triaged row ids
    unanalyzed: int = 0  # Stored, triage failed
    skipped: int = 0  # Rows with a blank source or text

    def to_dict(self) -> dict:
        return {
            "ingested": len(self.ingested),
            "unanalyzed": self.unanalyzed,
            "skipped": self.skipped,
            "ids": list(self.ingested)
        }


class CsvFeedbackImporter:
    """
    Ingests every row of a CSV file with `source` and `text` columns.

    A reply that fails to normalize leaves that row stored unanalyzed and the
    import continues. Store and model-availability failures abort the import.
    """

    def __init__(self, orchestrator: TriageOrchestrator):
        self.orchestrator = orchestrator

    def import_file(self, path: str) -> ImportReport:
        """
        Import feedback rows from a CSV file.

        Args:
            path: CSV file path

        Returns:
            ImportReport with triaged ids and per-outcome counts

        Raises:
            ValueError: If a required column is missing
        """
        df = pd.read_csv(path, dtype=str).fillna("")

        missing = [col for col in REQUIRED_COLUMNS if col not in df.columns]
        if missing:
            raise ValueError(f"CSV {path} is missing required columns: {', '.join(missing)}")

        logger.info(f"Importing {len(df)} feedback rows from {path}")
        report = ImportReport()

        for record in df.to_dict(orient="records"):
            source = record["source"].strip()
            text = record["text"].strip()
            if not source or not text:
                report.skipped += 1
                continue

            try:
                result = self.orchestrator.ingest(source, text)
            except TriageFormatError as e:
                logger.warning(f"Stored feedback from {source} unanalyzed: {e}")
                report.unanalyzed += 1
                continue

            report.ingested.append(result.id)

        logger.info(
            f"Import complete: {len(report.ingested)} triaged, "
            f"{report.unanalyzed} unanalyzed, {report.skipped} skipped"
        )
        return report


# Design Rationale and Trade-offs:
#
# 1. A TriageFormatError on one row does not stop the import.
#    - The row stays stored and is counted as unanalyzed
#    - Model and storage failures still abort the import
#    - Trade-off: a partially imported file when the model goes down mid-run
