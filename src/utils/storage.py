"""
Storage utility.

SQLite-backed persistence for feedback rows and their triage analysis.
"""

import json
import os
import sqlite3
import logging
from typing import List, Optional

from src.errors import NotFoundError, PersistenceError
from src.models.feedback import Analysis, FeedbackRow

logger = logging.getLogger(__name__)


_CREATE_TABLE_SQL = """
CREATE TABLE IF NOT EXISTS feedback (
  id INTEGER PRIMARY KEY AUTOINCREMENT,
  source TEXT NOT NULL,
  text TEXT NOT NULL,
  created_at TEXT NOT NULL DEFAULT (datetime('now')),
  sentiment TEXT,
  urgency TEXT,
  value_impact TEXT,
  themes TEXT,
  summary TEXT
);
"""

_SELECT_COLUMNS = (
    "id, source, text, created_at, sentiment, urgency, value_impact, themes, summary"
)


class FeedbackStore:
    """
    Create/read/update access to the feedback table.

    Handles:
    - Row creation (unanalyzed)
    - Lookup by id and most-recent-first listing
    - Writing all five analysis columns in one statement

    Every sqlite3 failure, and any string sqlite3 cannot encode, is
    re-raised as PersistenceError.
    """

    def __init__(self, db_path: str):
        """
        Open (and if needed create) the feedback database.

        Args:
            db_path: Path to the SQLite file, or ":memory:"
        """
        self.db_path = db_path

        if db_path != ":memory:":
            directory = os.path.dirname(db_path)
            if directory:
                os.makedirs(directory, exist_ok=True)

        try:
            self.conn = sqlite3.connect(db_path, check_same_thread=False)
            self.conn.row_factory = sqlite3.Row
            with self.conn:
                self.conn.execute(_CREATE_TABLE_SQL)
        except sqlite3.Error as e:
            logger.error(f"Failed to open feedback database at {db_path}: {e}")
            raise PersistenceError(f"Failed to open database: {e}") from e

        logger.info(f"Initialized FeedbackStore with db_path={db_path}")

    def close(self) -> None:
        self.conn.close()

    def insert(self, source: str, text: str) -> int:
        """
        Create an unanalyzed feedback row.

        Returns:
            The newly assigned row id
        """
        try:
            with self.conn:
                cursor = self.conn.execute(
                    "INSERT INTO feedback (source, text) VALUES (?, ?);",
                    (source, text)
                )
        except (sqlite3.Error, UnicodeEncodeError) as e:
            logger.error(f"Failed to insert feedback from {source!r}: {e}")
            raise PersistenceError(f"Failed to insert feedback: {e}") from e

        feedback_id = cursor.lastrowid
        if not feedback_id:
            raise PersistenceError("Failed to get inserted row id")

        logger.debug(f"Inserted feedback {feedback_id} from {source!r}")
        return feedback_id

    def get(self, feedback_id: int) -> Optional[FeedbackRow]:
        """Fetch a row by id, or None if it does not exist."""
        try:
            row = self.conn.execute(
                f"SELECT {_SELECT_COLUMNS} FROM feedback WHERE id = ? LIMIT 1;",
                (feedback_id,)
            ).fetchone()
        except sqlite3.Error as e:
            logger.error(f"Failed to fetch feedback {feedback_id}: {e}")
            raise PersistenceError(f"Failed to fetch feedback: {e}") from e

        return self._to_row(row) if row else None

    def update(self, feedback_id: int, analysis: Analysis) -> None:
        """
        Overwrite all five analysis columns of an existing row.

        Raises:
            NotFoundError: If no row has this id
            PersistenceError: If the write fails
        """
        try:
            with self.conn:
                cursor = self.conn.execute(
                    """UPDATE feedback
                       SET sentiment = ?,
                           urgency = ?,
                           value_impact = ?,
                           themes = ?,
                           summary = ?
                       WHERE id = ?;""",
                    (
                        analysis.sentiment,
                        analysis.urgency,
                        analysis.value_impact,
                        json.dumps(analysis.themes),
                        analysis.summary,
                        feedback_id
                    )
                )
        except (sqlite3.Error, UnicodeEncodeError) as e:
            logger.error(f"Failed to update analysis for {feedback_id}: {e}")
            raise PersistenceError(f"Failed to update analysis: {e}") from e

        if cursor.rowcount == 0:
            raise NotFoundError(feedback_id)

        logger.debug(f"Stored analysis for feedback {feedback_id}")

    def list_recent(self, limit: int) -> List[FeedbackRow]:
        """Return up to `limit` rows, most recently created first."""
        try:
            rows = self.conn.execute(
                f"SELECT {_SELECT_COLUMNS} FROM feedback ORDER BY id DESC LIMIT ?;",
                (limit,)
            ).fetchall()
        except sqlite3.Error as e:
            logger.error(f"Failed to list recent feedback: {e}")
            raise PersistenceError(f"Failed to list feedback: {e}") from e

        return [self._to_row(row) for row in rows]

    def count(self) -> int:
        try:
            return self.conn.execute("SELECT COUNT(*) FROM feedback;").fetchone()[0]
        except sqlite3.Error as e:
            raise PersistenceError(f"Failed to count feedback: {e}") from e

    @staticmethod
    def _to_row(row: sqlite3.Row) -> FeedbackRow:
        return FeedbackRow(**{key: row[key] for key in row.keys()})


# Design Rationale and Trade-offs:
#
# 1. Synchronous sqlite3 with a single shared connection.
#    - check_same_thread=False allows use from a worker thread
#    - No locking: concurrent re-triage of one row is last-write-wins
#
# 2. themes is stored as a JSON string column.
#    - Reads that fail to decode it report the row as unanalyzed
#    - Trade-off: themes cannot be queried in SQL, so tallying happens in Python
